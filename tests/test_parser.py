"""Tests for chord label parsing."""

import pytest

from jianpu_transpose.models import Chord
from jianpu_transpose.parser import (
    chord_to_string,
    clean_label,
    is_chord,
    parse_chord,
    split_parentheses,
    strip_repeat_markers,
)


class TestParseChord:
    def test_minor_seventh_with_sharp(self) -> None:
        chord = parse_chord("F#m7")
        assert chord is not None
        assert chord.root == "F#"
        assert chord.quality == "m7"
        assert chord.bass is None
        assert chord.has_parentheses is False

    def test_plain_major(self) -> None:
        assert parse_chord("C") == Chord(root="C", quality="")

    def test_flat_root_stored_as_sharp(self) -> None:
        chord = parse_chord("Bbm")
        assert chord.root == "A#"
        assert chord.quality == "m"

    def test_leading_sharp(self) -> None:
        assert parse_chord("#F").root == "F#"

    def test_leading_flat(self) -> None:
        assert parse_chord("bE").root == "D#"

    def test_slash_chord(self) -> None:
        chord = parse_chord("D/F#")
        assert chord.root == "D"
        assert chord.bass == "F#"

    def test_slash_bass_with_leading_accidental(self) -> None:
        chord = parse_chord("C/bE")
        assert chord.bass == "D#"

    def test_slash_bass_flat(self) -> None:
        assert parse_chord("Ab/Eb").bass == "D#"

    def test_extreme_spelling_in_bass(self) -> None:
        assert parse_chord("C#/E#").bass == "F"

    @pytest.mark.parametrize(
        ("text", "quality"),
        [
            ("G7sus4", "7sus4"),
            ("Asus4", "sus4"),
            ("Cmaj7", "maj7"),
            ("Dadd9", "add9"),
            ("E9sus4", "9sus4"),
            ("Amin", "m"),
            ("Amin7", "m7"),
            ("Bdim", "dim"),
        ],
    )
    def test_qualities_pass_through(self, text: str, quality: str) -> None:
        assert parse_chord(text).quality == quality

    def test_quality_lowercased(self) -> None:
        assert parse_chord("CSUS4").quality == "sus4"

    def test_superscript_digits(self) -> None:
        chord = parse_chord("G⁷")
        assert chord.quality == "7"

    def test_unicode_accidentals(self) -> None:
        assert parse_chord("F♯m").root == "F#"
        assert parse_chord("B♭").root == "A#"

    def test_parentheses_flag(self) -> None:
        chord = parse_chord("(D/F#)")
        assert chord.has_parentheses is True
        assert chord.root == "D"
        assert chord.bass == "F#"

    def test_full_width_parentheses(self) -> None:
        assert parse_chord("（Am）").has_parentheses is True

    def test_only_one_parenthesis_layer_removed(self) -> None:
        assert parse_chord("((C))") is None

    @pytest.mark.parametrize(
        ("text", "root"),
        [
            ("CD.S.al.Fine.", "C"),
            ("GD.C.al.Fine.", "G"),
            ("AmFine.", "A"),
            ("FFine", "F"),
            ("D7D.S.", "D"),
            ("CD.C. al Coda", "C"),
            ("GD.C al Coda", "G"),
            ("CDS al Fine", "C"),
            ("AmDC al Fine.", "A"),
            ("FD.S. al.Coda", "F"),
        ],
    )
    def test_repeat_markers_stripped(self, text: str, root: str) -> None:
        chord = parse_chord(text)
        assert chord is not None
        assert chord.root == root

    @pytest.mark.parametrize("text", ["Fine.", "D.S.al.Fine.", "D.C.", "DS al Coda"])
    def test_pure_marker_is_not_a_chord(self, text: str) -> None:
        assert parse_chord(text) is None

    @pytest.mark.parametrize("text", ["", "   ", "4/4", "1 2 3", "hello", "H7", "C/H", "am", "C-7"])
    def test_non_chords(self, text: str) -> None:
        assert parse_chord(text) is None

    def test_position_unset(self) -> None:
        chord = parse_chord("C")
        assert chord.x is None
        assert chord.y is None


class TestHelpers:
    def test_clean_label(self) -> None:
        assert clean_label(" C⁹ ") == "C9"

    def test_split_parentheses(self) -> None:
        assert split_parentheses("(C)") == ("C", True)
        assert split_parentheses("(C") == ("(C", False)
        assert split_parentheses("()") == ("", True)

    def test_strip_repeat_markers(self) -> None:
        assert strip_repeat_markers("Em7D.S.al.Fine.") == "Em7"
        assert strip_repeat_markers("Em7") == "Em7"
        assert strip_repeat_markers("DC") == "DC"
        assert strip_repeat_markers("GDS") == "GDS"

    def test_is_chord(self) -> None:
        assert is_chord("Gm7")
        assert not is_chord("lyrics")

    def test_chord_to_string(self) -> None:
        chord = Chord(root="C#", quality="m", bass="G#", has_parentheses=True)
        assert chord_to_string(chord) == "(C#m/G#)"
        assert chord_to_string(chord, use_flats=True) == "(Dbm/Ab)"


class TestChordModel:
    def test_str_is_sharp_spelling(self) -> None:
        assert str(Chord(root="A#", quality="7")) == "A#7"

    def test_with_position(self) -> None:
        chord = Chord(root="C").with_position(12.5, 40.0)
        assert (chord.x, chord.y) == (12.5, 40.0)
        assert chord.root == "C"

    def test_chord_is_immutable(self) -> None:
        chord = Chord(root="C")
        with pytest.raises(AttributeError):
            chord.root = "D"  # type: ignore[misc]
