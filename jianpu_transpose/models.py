"""Chord and transposition data models.

Roots and basses are stored in canonical sharp spelling; sharp or flat
display spelling is chosen when a chord is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from jianpu_transpose.notes import spell_note


@dataclass(frozen=True)
class Chord:
    """Parsed chord label.

    Parameters
    ----------
    root : str
        Canonical root note (one of ``CHROMATIC_SCALE``).
    quality : str
        Free-form quality suffix (e.g., "", "m", "maj7", "7sus4").
    bass : str | None
        Canonical bass note for slash chords.
    has_parentheses : bool
        Whether the printed label was enclosed in parentheses.
    x : float | None
        Horizontal position as a percentage of the image width.
    y : float | None
        Vertical position as a percentage of the image height.

    Examples
    --------
    >>> chord = Chord(root="A#", quality="m7", bass="F")
    >>> chord.to_string()
    'A#m7/F'
    >>> chord.to_string(use_flats=True)
    'Bbm7/F'
    """

    root: str
    quality: str = ""
    bass: str | None = None
    has_parentheses: bool = False
    x: float | None = None
    y: float | None = None

    def to_string(self, use_flats: bool = False) -> str:
        """Render the chord label.

        Parameters
        ----------
        use_flats : bool
            Spell black-key notes with flats.

        Returns
        -------
        str
            Chord label such as "Db/F" or "(F#m)".
        """
        result = spell_note(self.root, use_flats) + self.quality
        if self.bass:
            result = f"{result}/{spell_note(self.bass, use_flats)}"
        if self.has_parentheses:
            result = f"({result})"
        return result

    def with_position(self, x: float | None, y: float | None) -> Chord:
        """Return a copy placed at the given image percentage."""
        return replace(self, x=x, y=y)

    def __str__(self) -> str:
        """Return the sharp-spelled label."""
        return self.to_string()


@dataclass(frozen=True)
class TransposedChord:
    """A chord before and after transposition.

    Parameters
    ----------
    original : Chord
        The chord as parsed from the sheet.
    transposed : Chord
        The transposed and interval-corrected chord.
    use_flats : bool
        Display spelling for the transposed chord.
    """

    original: Chord
    transposed: Chord
    use_flats: bool = False

    @property
    def original_text(self) -> str:
        return self.original.to_string()

    @property
    def transposed_text(self) -> str:
        return self.transposed.to_string(self.use_flats)


@dataclass(frozen=True)
class TransposeResult:
    """Result of transposing a chord sequence.

    Parameters
    ----------
    original_key : str
        Key the chords were written in.
    target_key : str
        Key the chords were moved to.
    semitones : int
        Applied shift (0-11 for key-to-key, signed for the semitone variant).
    chords : tuple[TransposedChord, ...]
        One entry per input chord, in input order.
    use_flats : bool
        Whether the target key is spelled with flats.
    """

    original_key: str
    target_key: str
    semitones: int
    chords: tuple[TransposedChord, ...]
    use_flats: bool = False
