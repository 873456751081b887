"""Key-specific repair of accidentals dropped by the recognizer.

In keys with many accidentals the vision model regularly drops a sharp or
flat from slash chords ("A/C" printed as "A/C#" in D major). The table
below lists the observed mistakes per original key; it is consulted by
exact match before parsing and is a no-op for anything not listed.
"""

from __future__ import annotations

import logging

from jianpu_transpose.keys import normalize_key
from jianpu_transpose.parser import clean_label, split_parentheses

_LOG = logging.getLogger(__name__)

OCR_CORRECTIONS: dict[str, dict[str, str]] = {
    # Sharp keys
    "C": {},
    "G": {
        "Em/F": "Em/F#",
        "D/F": "D/F#",
    },
    "D": {
        "A/C": "A/C#",
        "D/F": "D/F#",
        "Bm/F": "Bm/F#",
        "E7/G": "E7/G#",
        "C/E": "C#/E",
    },
    "A": {
        "A/C": "A/C#",
        "D/F": "D/F#",
        "E/G": "E/G#",
        "C#m/G": "C#m/G#",
        "C/E": "C#/E",
        "G/B": "G#/B",
    },
    "E": {
        "E/G": "E/G#",
        "B/D": "B/D#",
        "A/C": "A/C#",
        "F#7/A": "F#7/A#",
        "C/E": "C#/E",
        "G/B": "G#/B",
    },
    "B": {
        "B/D": "B/D#",
        "E/G": "E/G#",
        "F#/A": "F#/A#",
        "C#m/G": "C#m/G#",
        "C/E": "C#/E",
    },
    "F#": {
        "F#/A": "F#/A#",
        "C#/E": "C#/E#",
        "B/D": "B/D#",
        "G/B": "G#/B",
    },
    "C#": {
        "F#/A": "F#/A#",
        "C#/E": "C#/E#",
        "G#/B": "G#/B#",
    },
    # Flat keys
    "F": {},
    "Bb": {
        "E/G": "Eb/G",
        "E/Bb": "Eb/Bb",
        "E/F": "Eb/F",
    },
    "Eb": {
        "E/G": "Eb/G",
        "A/C": "Ab/C",
        "E/Bb": "Eb/Bb",
        "A/Eb": "Ab/Eb",
    },
    "Ab": {
        "A/C": "Ab/C",
        "D/F": "Db/F",
        "A/Eb": "Ab/Eb",
        "D/Ab": "Db/Ab",
    },
    "Db": {
        "G/B": "Gb/Bb",
        "D/F": "Db/F",
        "G/Db": "Gb/Db",
        "C/F": "Cb/F",
    },
    "Gb": {
        "G/B": "Gb/Bb",
        "C/E": "Cb/Eb",
        "G/Db": "Gb/Db",
        "C/Gb": "Cb/Gb",
    },
    "Cb": {
        "G/B": "Gb/Bb",
        "C/E": "Cb/Eb",
    },
}


def correct_chord_by_key(text: str, original_key: str) -> str:
    """Apply the registered recognizer correction for a chord label.

    Parameters
    ----------
    text : str
        Chord label as recognized (may be parenthesized).
    original_key : str
        Key of the sheet, in any form accepted by ``normalize_key``.

    Returns
    -------
    str
        The corrected label with parentheses restored, or the cleaned
        label when no correction is registered for this key and text.

    Examples
    --------
    >>> correct_chord_by_key("A/C", "D")
    'A/C#'
    >>> correct_chord_by_key("(D/F)", "1=G")
    '(D/F#)'
    >>> correct_chord_by_key("A/C", "C")
    'A/C'
    """
    inner, has_parentheses = split_parentheses(clean_label(text))

    corrections = OCR_CORRECTIONS.get(normalize_key(original_key), {})
    corrected = corrections.get(inner, inner)
    if corrected != inner:
        _LOG.debug("Corrected %r to %r for key %s", inner, corrected, original_key)

    if has_parentheses:
        corrected = f"({corrected})"
    return corrected
