"""Key label normalization and key arithmetic.

Key labels come from two places: the user's selection and the vision
model's reading of the ``1=<note>`` marking on the sheet. Both are
normalized here before any lookup or arithmetic.
"""

from __future__ import annotations

import re

from jianpu_transpose.notes import (
    ACCIDENTAL_GLYPHS,
    CHROMATIC_SCALE,
    NOTE_RE,
    SHARP_TO_FLAT,
    note_index,
)

# Conventionally flat-spelled keys
FLAT_KEYS: frozenset[str] = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"})

# Selectable target keys (value, display label)
ALL_KEYS: tuple[tuple[str, str], ...] = (
    ("C", "C调"),
    ("Db", "Db调"),
    ("D", "D调"),
    ("Eb", "Eb调"),
    ("E", "E调"),
    ("F", "F调"),
    ("Gb", "Gb调"),
    ("G", "G调"),
    ("Ab", "Ab调"),
    ("A", "A调"),
    ("Bb", "Bb调"),
    ("B", "B调"),
)

# Exact-match repairs for slips seen in recognizer key output
KEY_COMMON_ERRORS: dict[str, str] = {
    # Letter duplicated in front of a sharp
    "CC#": "C#",
    "DD#": "D#",
    "FF#": "F#",
    "GG#": "G#",
    "AA#": "A#",
    # Letter duplicated in front of a flat
    "BBb": "Bb",
    "EEb": "Eb",
    "AAb": "Ab",
    "DDb": "Db",
    "GGb": "Gb",
    # Flat marker placed before the letter
    "bB": "Bb",
    "bE": "Eb",
    "bA": "Ab",
    "bD": "Db",
    "bG": "Gb",
    "bC": "Cb",
    # Sharp marker placed before the letter
    "#C": "C#",
    "#D": "D#",
    "#F": "F#",
    "#G": "G#",
    "#A": "A#",
}

KEY_PREFIX_RE = re.compile(r"^(?:1=|key:)", re.IGNORECASE)
KEY_SUFFIXES = ("调", "調")
FULL_WIDTH_PUNCTUATION = str.maketrans({"＝": "=", "：": ":"})


class InvalidKeyError(ValueError):
    """Raised when a key label cannot be resolved to a pitch class."""


def normalize_key_common_errors(key: str) -> str:
    """Repair known recognizer slips in a key label.

    Parameters
    ----------
    key : str
        Key label with prefixes and whitespace already removed.

    Returns
    -------
    str
        The repaired label, or ``key`` unchanged when no repair is registered.

    Examples
    --------
    >>> normalize_key_common_errors("CC#")
    'C#'
    >>> normalize_key_common_errors("bB")
    'Bb'
    >>> normalize_key_common_errors("G")
    'G'
    """
    key = key.translate(ACCIDENTAL_GLYPHS)
    return KEY_COMMON_ERRORS.get(key, key)


def normalize_key(key: str) -> str:
    """Normalize a key label to its canonical display form.

    Strips whitespace, the ``1=`` and ``Key:`` prefixes and a trailing
    ``调`` suffix, repairs common recognizer errors and fixes letter case.
    The spelling (sharp or flat) of the input is preserved.

    Parameters
    ----------
    key : str
        Raw key label (e.g., "1=bB", "Key: F#", "eb", "D调").

    Returns
    -------
    str
        Normalized key label (e.g., "Bb", "F#", "Eb", "D"). Labels that
        do not look like a note are returned cleaned but otherwise as-is.

    Examples
    --------
    >>> normalize_key("1=bB")
    'Bb'
    >>> normalize_key("Key: f#")
    'F#'
    >>> normalize_key("1=CC#")
    'C#'
    """
    text = re.sub(r"\s+", "", key).translate(FULL_WIDTH_PUNCTUATION)
    text = KEY_PREFIX_RE.sub("", text)
    for suffix in KEY_SUFFIXES:
        if text.endswith(suffix):
            text = text[: -len(suffix)]
    text = normalize_key_common_errors(text)

    match = NOTE_RE.fullmatch(text)
    if not match:
        return text
    leading, letter, trailing = match.groups()
    return letter.upper() + (leading or trailing)


def key_index(key: str) -> int:
    """Resolve a key label to its chromatic index.

    Raises
    ------
    InvalidKeyError
        If the label does not name one of the twelve keys.

    Examples
    --------
    >>> key_index("1=G")
    7
    >>> key_index("Bb")
    10
    """
    index = note_index(normalize_key(key)) if key else None
    if index is None:
        msg = f"Invalid key: {key!r}"
        raise InvalidKeyError(msg)
    return index


def is_flat_key(key: str) -> bool:
    """Check whether a key is conventionally spelled with flats.

    Examples
    --------
    >>> is_flat_key("Bb")
    True
    >>> is_flat_key("A#")
    False
    >>> is_flat_key("1=F")
    True
    """
    return normalize_key(key) in FLAT_KEYS


def key_for_semitones(original_key: str, semitones: int) -> str:
    """Derive the key reached by shifting ``original_key``.

    Black-key results are flat-spelled, matching ``ALL_KEYS``.

    Examples
    --------
    >>> key_for_semitones("C", 3)
    'Eb'
    >>> key_for_semitones("G", -2)
    'F'
    """
    note = CHROMATIC_SCALE[(key_index(original_key) + semitones) % 12]
    return SHARP_TO_FLAT.get(note, note)


def signed_semitones(direction: str, amount: int | float | str) -> int:
    """Combine a direction and magnitude into a signed semitone count.

    Parameters
    ----------
    direction : str
        "up" or "down".
    amount : int | float | str
        Number of semitones, as sent by a form field.

    Returns
    -------
    int
        Positive for "up", negative for "down".

    Raises
    ------
    ValueError
        If the direction is unknown or the amount is not a number.

    Examples
    --------
    >>> signed_semitones("down", "2")
    -2
    """
    if direction not in ("up", "down"):
        msg = f"Unknown direction: {direction!r}"
        raise ValueError(msg)
    steps = int(float(amount))
    return steps if direction == "up" else -steps
