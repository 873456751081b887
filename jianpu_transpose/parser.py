"""Chord label parsing.

Labels come from a vision model reading printed sheet music, so the
parser tolerates the usual recognizer noise: superscript digits, Unicode
accidentals, accidentals on either side of the letter, enclosing
parentheses and repeat markings glued to the chord.
"""

from __future__ import annotations

import logging
import re

from jianpu_transpose.models import Chord
from jianpu_transpose.notes import ACCIDENTAL_GLYPHS, normalize_to_sharp

_LOG = logging.getLogger(__name__)

SUPERSCRIPT_DIGITS = str.maketrans("⁰¹²³⁴⁵⁶⁷⁸⁹", "0123456789")
FULL_WIDTH_PARENTHESES = str.maketrans({"（": "(", "）": ")"})

# Matches: optional accidental, letter, optional accidental, quality,
# optional slash bass with the same accidental placement rules
CHORD_RE = re.compile(
    r"^([#b]?)([A-G])([#b]?)"  # Root with accidental before or after
    r"([A-Za-z0-9]*)"  # Free-form quality
    r"(?:/([#b]?)([A-G])([#b]?))?$"  # Optional slash bass
)

# Repeat and ending marks that recognizers glue to the preceding chord,
# e.g. "CD.S.al.Fine.", "GDC al Coda" or "GFine.". Dots are optional only
# when an "al Fine"/"al Coda" tail follows
REPEAT_MARKER_RE = re.compile(
    r"(?:D\.?\s*[CS]\.?\s*al\.?\s*(?:Fine|Coda)\.?|D\.\s*[CS]\.|Fine\.?)\s*$",
    re.IGNORECASE,
)

QUALITY_SYNONYMS: dict[str, str] = {
    "min": "m",
    "min6": "m6",
    "min7": "m7",
    "min9": "m9",
}


def clean_label(text: str) -> str:
    """Normalize typographic variants in a recognized label.

    Examples
    --------
    >>> clean_label(" G⁷ ")
    'G7'
    >>> clean_label("F♯m")
    'F#m'
    """
    return (
        text.strip()
        .translate(SUPERSCRIPT_DIGITS)
        .translate(ACCIDENTAL_GLYPHS)
        .translate(FULL_WIDTH_PARENTHESES)
    )


def split_parentheses(text: str) -> tuple[str, bool]:
    """Remove one layer of enclosing parentheses.

    Returns
    -------
    tuple[str, bool]
        The inner text and whether parentheses were removed.

    Examples
    --------
    >>> split_parentheses("(D/F#)")
    ('D/F#', True)
    >>> split_parentheses("D")
    ('D', False)
    """
    if len(text) >= 2 and text.startswith("(") and text.endswith(")"):
        return text[1:-1], True
    return text, False


def strip_repeat_markers(text: str) -> str:
    """Remove a trailing repeat/ending marker.

    Examples
    --------
    >>> strip_repeat_markers("CD.S.al.Fine.")
    'C'
    >>> strip_repeat_markers("Fine.")
    ''
    """
    return REPEAT_MARKER_RE.sub("", text).strip()


def normalize_quality(quality: str) -> str:
    """Lower-case a quality suffix and apply the synonym table."""
    quality = quality.lower()
    return QUALITY_SYNONYMS.get(quality, quality)


def parse_chord(text: str) -> Chord | None:
    """Parse a chord label into a Chord.

    Parameters
    ----------
    text : str
        Recognized label (e.g., "F#m7", "#F", "(D/F#)", "CD.S.al.Fine.").

    Returns
    -------
    Chord | None
        The parsed chord with canonical sharp-spelled notes, or None when
        the text is not a chord (lyrics, numbers, pure notation marks).

    Examples
    --------
    >>> parse_chord("F#m7")
    Chord(root='F#', quality='m7', bass=None, has_parentheses=False, x=None, y=None)
    >>> parse_chord("(Bb/D)").to_string(use_flats=True)
    '(Bb/D)'
    >>> parse_chord("4/4") is None
    True
    """
    inner, has_parentheses = split_parentheses(clean_label(text))
    inner = strip_repeat_markers(inner)
    if not inner:
        return None

    match = CHORD_RE.match(inner)
    if not match:
        _LOG.debug("Not a chord label: %r", text)
        return None

    lead, letter, trail, quality, bass_lead, bass_letter, bass_trail = match.groups()

    bass = None
    if bass_letter:
        bass = normalize_to_sharp(bass_letter + (bass_lead or bass_trail))

    return Chord(
        root=normalize_to_sharp(letter + (lead or trail)),
        quality=normalize_quality(quality),
        bass=bass,
        has_parentheses=has_parentheses,
    )


def is_chord(text: str) -> bool:
    """Check whether a label parses as a chord.

    Examples
    --------
    >>> is_chord("Asus4")
    True
    >>> is_chord("Fine.")
    False
    """
    return parse_chord(text) is not None


def chord_to_string(chord: Chord, use_flats: bool = False) -> str:
    """Render a chord back to a label; the inverse of ``parse_chord``."""
    return chord.to_string(use_flats)
