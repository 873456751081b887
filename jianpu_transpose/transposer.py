"""Chord transposition with key-aware spelling and bass repair.

Roots and basses are shifted on the canonical chromatic index. After the
shift every chord is checked for a root-to-bass minor second, which does
not occur as a sensible slash chord here and signals a transposition or
recognition slip; such basses are moved to the nearest usable note.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from jianpu_transpose.keys import is_flat_key, key_for_semitones, key_index, normalize_key
from jianpu_transpose.models import Chord, TransposedChord, TransposeResult
from jianpu_transpose.notes import CHROMATIC_SCALE, circular_distance, interval, note_index, shift_note

# Root-to-bass intervals treated as impossible
UNREASONABLE_INTERVALS: frozenset[int] = frozenset({1})

# Common slash-chord intervals: major 2nd, major 3rd, perfect 4th, perfect 5th
PREFERRED_BASS_INTERVALS: frozenset[int] = frozenset({2, 4, 5, 7})


def calculate_semitones(from_key: str, to_key: str) -> int:
    """Compute the upward shift (0-11) between two keys.

    Raises
    ------
    InvalidKeyError
        If either key cannot be resolved.

    Examples
    --------
    >>> calculate_semitones("C", "G")
    7
    >>> calculate_semitones("G", "C")
    5
    >>> calculate_semitones("1=bB", "C")
    2
    """
    return (key_index(to_key) - key_index(from_key)) % 12


def transpose_chord(chord: Chord, semitones: int) -> Chord:
    """Shift a chord's root and bass by the same number of semitones.

    Quality, parentheses and position are carried over unchanged.

    Examples
    --------
    >>> transpose_chord(Chord(root="C", bass="E"), 1)
    Chord(root='C#', quality='', bass='F', has_parentheses=False, x=None, y=None)
    """
    bass = shift_note(chord.bass, semitones) if chord.bass else None
    return replace(chord, root=shift_note(chord.root, semitones), bass=bass)


def is_unreasonable_chord(chord: Chord) -> bool:
    """Check whether a slash chord has an impossible bass.

    Examples
    --------
    >>> is_unreasonable_chord(Chord(root="G", bass="G#"))
    True
    >>> is_unreasonable_chord(Chord(root="C", bass="D#"))
    False
    """
    if not chord.bass:
        return False
    return interval(chord.root, chord.bass) in UNREASONABLE_INTERVALS


def correct_unreasonable_chord(chord: Chord) -> Chord:
    """Replace an impossible bass with the closest acceptable one.

    Candidates forming a common slash interval (2, 4, 5 or 7 semitones
    above the root) are preferred; within the same tier the candidate
    nearest to the original bass wins. If no candidate is acceptable the
    bass is dropped.

    Parameters
    ----------
    chord : Chord
        A chord, typically fresh out of ``transpose_chord``.

    Returns
    -------
    Chord
        ``chord`` unchanged if it is reasonable, otherwise a repaired copy.

    Examples
    --------
    >>> correct_unreasonable_chord(Chord(root="G", bass="G#")).bass
    'A'
    >>> correct_unreasonable_chord(Chord(root="C", bass="E")).bass
    'E'
    """
    if not is_unreasonable_chord(chord):
        return chord

    root_index = note_index(chord.root)
    bass_index = note_index(chord.bass)
    if root_index is None or bass_index is None:
        return replace(chord, bass=None)

    best: tuple[bool, int] | None = None
    best_bass: str | None = None
    for index, candidate in enumerate(CHROMATIC_SCALE):
        if (index - root_index) % 12 in UNREASONABLE_INTERVALS:
            continue
        preferred = (index - root_index) % 12 in PREFERRED_BASS_INTERVALS
        # Lower rank wins: preferred first, then nearest
        rank = (not preferred, circular_distance(index, bass_index))
        if best is None or rank < best:
            best = rank
            best_bass = candidate

    return replace(chord, bass=best_bass)


def _transpose_all(
    chords: Iterable[Chord], semitones: int, use_flats: bool
) -> tuple[TransposedChord, ...]:
    return tuple(
        TransposedChord(
            original=chord,
            transposed=correct_unreasonable_chord(transpose_chord(chord, semitones)),
            use_flats=use_flats,
        )
        for chord in chords
    )


def transpose_chords(
    chords: Iterable[Chord],
    original_key: str,
    target_key: str,
    *,
    use_flats: bool | None = None,
) -> TransposeResult:
    """Transpose chords from one key to another.

    Parameters
    ----------
    chords : Iterable[Chord]
        Parsed chords, in sheet order.
    original_key : str
        Key the chords are written in.
    target_key : str
        Key to move to.
    use_flats : bool | None
        Force flat (True) or sharp (False) spelling. By default flats are
        used when the target key is a flat key.

    Returns
    -------
    TransposeResult
        Transposed chords in input order, with a non-negative shift.

    Raises
    ------
    InvalidKeyError
        If either key cannot be resolved.

    Examples
    --------
    >>> result = transpose_chords([Chord(root="C")], "C", "G")
    >>> result.semitones, result.chords[0].transposed_text
    (7, 'G')
    """
    semitones = calculate_semitones(original_key, target_key)
    target_label = normalize_key(target_key)
    if use_flats is None:
        use_flats = is_flat_key(target_label)

    return TransposeResult(
        original_key=normalize_key(original_key),
        target_key=target_label,
        semitones=semitones,
        chords=_transpose_all(chords, semitones, use_flats),
        use_flats=use_flats,
    )


def transpose_chords_by_semitones(
    chords: Iterable[Chord],
    original_key: str,
    semitones: int,
    *,
    explicit_target_key: str | None = None,
    use_flats: bool | None = None,
) -> TransposeResult:
    """Transpose chords by a signed number of semitones.

    Parameters
    ----------
    chords : Iterable[Chord]
        Parsed chords, in sheet order.
    original_key : str
        Key the chords are written in.
    semitones : int
        Signed shift (negative = down).
    explicit_target_key : str | None
        Key label already chosen by the caller. It replaces the derived
        key in the result and decides the spelling, so an enharmonic
        choice made in the UI (e.g. "F#" rather than "Gb") is kept.
    use_flats : bool | None
        Force flat (True) or sharp (False) spelling.

    Returns
    -------
    TransposeResult
        Transposed chords in input order; ``semitones`` is reported as given.

    Raises
    ------
    InvalidKeyError
        If the original or explicit target key cannot be resolved.

    Examples
    --------
    >>> result = transpose_chords_by_semitones([Chord(root="A", quality="m")], "C", -2)
    >>> result.target_key, result.chords[0].transposed_text
    ('Bb', 'Gm')
    """
    target_label = key_for_semitones(original_key, semitones)
    if explicit_target_key:
        key_index(explicit_target_key)
        target_label = normalize_key(explicit_target_key)
    if use_flats is None:
        use_flats = is_flat_key(target_label)

    return TransposeResult(
        original_key=normalize_key(original_key),
        target_key=target_label,
        semitones=semitones,
        chords=_transpose_all(chords, semitones, use_flats),
        use_flats=use_flats,
    )
