"""Chord transposition for numbered-notation (jianpu) sheet photos.

This library takes chord labels recognized on a sheet photo, transposes
them to a new key with correct enharmonic spelling, and lays out the
replacement labels on the image.

Examples
--------
>>> from jianpu_transpose import parse_chord, transpose_chords

>>> chord = parse_chord("F#m7")
>>> chord.root, chord.quality
('F#', 'm7')

>>> result = transpose_chords([parse_chord("C/E")], "C", "Eb")
>>> result.chords[0].transposed_text
'Eb/G'

>>> from jianpu_transpose import correct_chord_by_key
>>> correct_chord_by_key("A/C", "D")
'A/C#'
"""

from jianpu_transpose.corrections import OCR_CORRECTIONS, correct_chord_by_key
from jianpu_transpose.keys import (
    ALL_KEYS,
    FLAT_KEYS,
    InvalidKeyError,
    is_flat_key,
    key_for_semitones,
    key_index,
    normalize_key,
    normalize_key_common_errors,
    signed_semitones,
)
from jianpu_transpose.models import Chord, TransposedChord, TransposeResult
from jianpu_transpose.notes import (
    CHROMATIC_SCALE,
    ENHARMONIC_MAP,
    normalize_to_sharp,
    note_index,
    shift_note,
    spell_note,
)
from jianpu_transpose.parser import chord_to_string, is_chord, parse_chord
from jianpu_transpose.pipeline import SheetTransposition, transpose_sheet, transpose_sheet_from_response
from jianpu_transpose.transposer import (
    calculate_semitones,
    correct_unreasonable_chord,
    is_unreasonable_chord,
    transpose_chord,
    transpose_chords,
    transpose_chords_by_semitones,
)

__all__ = [
    "ALL_KEYS",
    "CHROMATIC_SCALE",
    "ENHARMONIC_MAP",
    "FLAT_KEYS",
    "OCR_CORRECTIONS",
    "Chord",
    "InvalidKeyError",
    "SheetTransposition",
    "TransposeResult",
    "TransposedChord",
    "calculate_semitones",
    "chord_to_string",
    "correct_chord_by_key",
    "correct_unreasonable_chord",
    "is_chord",
    "is_flat_key",
    "is_unreasonable_chord",
    "key_for_semitones",
    "key_index",
    "normalize_key",
    "normalize_key_common_errors",
    "normalize_to_sharp",
    "note_index",
    "parse_chord",
    "shift_note",
    "signed_semitones",
    "spell_note",
    "transpose_chord",
    "transpose_chords",
    "transpose_chords_by_semitones",
    "transpose_sheet",
    "transpose_sheet_from_response",
]
