"""Tests for key-specific recognizer corrections."""

import pytest

from jianpu_transpose.corrections import OCR_CORRECTIONS, correct_chord_by_key
from jianpu_transpose.keys import FLAT_KEYS
from jianpu_transpose.parser import parse_chord


class TestCorrectChordByKey:
    def test_d_major_slash_bass(self) -> None:
        assert correct_chord_by_key("A/C", "D") == "A/C#"

    @pytest.mark.parametrize(
        ("text", "key", "expected"),
        [
            ("D/F", "G", "D/F#"),
            ("E/G", "A", "E/G#"),
            ("C/E", "E", "C#/E"),
            ("E/G", "Bb", "Eb/G"),
            ("A/C", "Eb", "Ab/C"),
            ("G/B", "Db", "Gb/Bb"),
        ],
    )
    def test_registered_corrections(self, text: str, key: str, expected: str) -> None:
        assert correct_chord_by_key(text, key) == expected

    def test_key_is_normalized(self) -> None:
        assert correct_chord_by_key("A/C", "1=D") == "A/C#"
        assert correct_chord_by_key("E/G", "1=bB") == "Eb/G"

    def test_parentheses_restored(self) -> None:
        assert correct_chord_by_key("(A/C)", "D") == "(A/C#)"

    def test_no_correction_in_c(self) -> None:
        assert correct_chord_by_key("A/C", "C") == "A/C"

    def test_unknown_key_is_noop(self) -> None:
        assert correct_chord_by_key("A/C", "H") == "A/C"

    def test_unlisted_text_is_noop(self) -> None:
        assert correct_chord_by_key("G", "D") == "G"

    def test_exact_match_only(self) -> None:
        assert correct_chord_by_key("A7/C", "D") == "A7/C"

    def test_superscripts_cleaned_before_lookup(self) -> None:
        assert correct_chord_by_key("E⁷/G", "D") == "E7/G#"


class TestCorrectionTable:
    def test_every_correction_parses(self) -> None:
        for key, corrections in OCR_CORRECTIONS.items():
            for original, corrected in corrections.items():
                assert parse_chord(original) is not None, (key, original)
                assert parse_chord(corrected) is not None, (key, corrected)

    def test_flat_keys_present(self) -> None:
        assert FLAT_KEYS <= set(OCR_CORRECTIONS)
