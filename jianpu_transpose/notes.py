"""Note vocabulary and enharmonic spelling.

All pitch arithmetic runs on the twelve canonical (sharp-spelled) note
names in ``CHROMATIC_SCALE``. Flat spellings only appear at display time,
through ``spell_note``.
"""

from __future__ import annotations

import re

# Canonical pitch classes (index = pitch class, C=0)
CHROMATIC_SCALE: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

SHARP_TO_FLAT: dict[str, str] = {
    "C#": "Db",
    "D#": "Eb",
    "F#": "Gb",
    "G#": "Ab",
    "A#": "Bb",
}

FLAT_TO_SHARP: dict[str, str] = {flat: sharp for sharp, flat in SHARP_TO_FLAT.items()}

# Both directions, keyed by spelling
ENHARMONIC_MAP: dict[str, str] = {**SHARP_TO_FLAT, **FLAT_TO_SHARP}

# Spellings whose accidental lands on a natural note
EXTREME_SPELLINGS: dict[str, str] = {
    "E#": "F",
    "B#": "C",
    "Fb": "E",
    "Cb": "B",
}

# Typographic accidentals emitted by recognizers
ACCIDENTAL_GLYPHS = str.maketrans({"♯": "#", "＃": "#", "♭": "b"})

# Accidental before or after the letter ("F#", "#F", "bE", "Eb")
NOTE_RE = re.compile(r"([#b]?)([A-Ga-g])([#b]?)")


def normalize_to_sharp(note: str) -> str:
    """Convert a note spelling to its canonical sharp form.

    Unrecognized input is returned unchanged.

    Parameters
    ----------
    note : str
        Note name in any supported spelling (e.g., "Bb", "bB", "#F", "E#").

    Returns
    -------
    str
        Canonical note name from ``CHROMATIC_SCALE``, or ``note`` itself.

    Examples
    --------
    >>> normalize_to_sharp("Bb")
    'A#'
    >>> normalize_to_sharp("#F")
    'F#'
    >>> normalize_to_sharp("Cb")
    'B'
    >>> normalize_to_sharp("H")
    'H'
    """
    match = NOTE_RE.fullmatch(note.strip().translate(ACCIDENTAL_GLYPHS))
    if not match:
        return note

    leading, letter, trailing = match.groups()
    # Leading accidental wins when both are present
    spelled = letter.upper() + (leading or trailing)

    if spelled in EXTREME_SPELLINGS:
        return EXTREME_SPELLINGS[spelled]
    if spelled in CHROMATIC_SCALE:
        return spelled
    return FLAT_TO_SHARP.get(spelled, note)


def note_index(note: str) -> int | None:
    """Return the pitch class (0-11) of a note, or None if unknown.

    Examples
    --------
    >>> note_index("C")
    0
    >>> note_index("Db")
    1
    >>> note_index("X") is None
    True
    """
    canonical = normalize_to_sharp(note)
    if canonical in CHROMATIC_SCALE:
        return CHROMATIC_SCALE.index(canonical)
    return None


def spell_note(note: str, use_flats: bool) -> str:
    """Render a canonical note with sharp or flat spelling.

    Examples
    --------
    >>> spell_note("A#", use_flats=True)
    'Bb'
    >>> spell_note("A#", use_flats=False)
    'A#'
    """
    if use_flats:
        return SHARP_TO_FLAT.get(note, note)
    return note


def shift_note(note: str, semitones: int, use_flats: bool = False) -> str:
    """Move a note along the chromatic scale.

    Parameters
    ----------
    note : str
        Note name (any supported spelling).
    semitones : int
        Signed number of semitones (positive = up).
    use_flats : bool
        Spell the result with flats instead of the canonical sharps.

    Returns
    -------
    str
        The shifted note, or ``note`` unchanged if it is not recognized.

    Examples
    --------
    >>> shift_note("C", 1)
    'C#'
    >>> shift_note("C", 1, use_flats=True)
    'Db'
    >>> shift_note("C", -1)
    'B'
    """
    index = note_index(note)
    if index is None:
        return note
    return spell_note(CHROMATIC_SCALE[(index + semitones) % 12], use_flats)


def interval(root: str, bass: str) -> int | None:
    """Upward interval in semitones (0-11) from ``root`` to ``bass``.

    Examples
    --------
    >>> interval("C", "E")
    4
    >>> interval("E", "C")
    8
    """
    root_index = note_index(root)
    bass_index = note_index(bass)
    if root_index is None or bass_index is None:
        return None
    return (bass_index - root_index) % 12


def circular_distance(a: int, b: int) -> int:
    """Shortest distance between two pitch classes (0-6)."""
    distance = abs(a - b) % 12
    return min(distance, 12 - distance)
