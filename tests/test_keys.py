"""Tests for key normalization and key arithmetic."""

import pytest

from jianpu_transpose.keys import (
    ALL_KEYS,
    InvalidKeyError,
    is_flat_key,
    key_for_semitones,
    key_index,
    normalize_key,
    normalize_key_common_errors,
    signed_semitones,
)


class TestNormalizeKey:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("C", "C"),
            ("1=G", "G"),
            ("1 = D", "D"),
            ("1＝A", "A"),
            ("Key: F", "F"),
            ("KEY:Bb", "Bb"),
            ("key：E", "E"),
            ("1=bB", "Bb"),
            ("bE", "Eb"),
            ("eb", "Eb"),
            ("bb", "Bb"),
            ("f#", "F#"),
            ("#F", "F#"),
            ("1=CC#", "C#"),
            ("D调", "D"),
            ("  G  ", "G"),
        ],
    )
    def test_normalization(self, raw: str, expected: str) -> None:
        assert normalize_key(raw) == expected

    def test_non_note_returned_cleaned(self) -> None:
        assert normalize_key("1=H") == "H"


class TestCommonErrors:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("CC#", "C#"), ("FF#", "F#"), ("bB", "Bb"), ("bE", "Eb"), ("EEb", "Eb"), ("#C", "C#")],
    )
    def test_registered_repairs(self, raw: str, expected: str) -> None:
        assert normalize_key_common_errors(raw) == expected

    def test_miss_is_noop(self) -> None:
        assert normalize_key_common_errors("G") == "G"


class TestKeyIndex:
    def test_valid_keys(self) -> None:
        assert key_index("C") == 0
        assert key_index("1=A") == 9
        assert key_index("Gb") == 6
        assert key_index("F#") == 6

    @pytest.mark.parametrize("key", ["", "H", "1=", "Key:", "do"])
    def test_invalid_key_raises(self, key: str) -> None:
        with pytest.raises(InvalidKeyError, match="Invalid key"):
            key_index(key)

    def test_invalid_key_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            key_index("X")


class TestFlatKeys:
    @pytest.mark.parametrize("key", ["F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb", "1=bB"])
    def test_flat(self, key: str) -> None:
        assert is_flat_key(key)

    @pytest.mark.parametrize("key", ["C", "G", "D", "A", "E", "B", "F#", "C#", "A#"])
    def test_sharp(self, key: str) -> None:
        assert not is_flat_key(key)

    def test_all_keys_cover_every_pitch_class(self) -> None:
        assert sorted(key_index(value) for value, _ in ALL_KEYS) == list(range(12))


class TestKeyForSemitones:
    def test_up(self) -> None:
        assert key_for_semitones("C", 7) == "G"

    def test_black_key_result_is_flat(self) -> None:
        assert key_for_semitones("C", 1) == "Db"
        assert key_for_semitones("E", 2) == "Gb"

    def test_down(self) -> None:
        assert key_for_semitones("D", -2) == "C"

    def test_invalid_original(self) -> None:
        with pytest.raises(InvalidKeyError):
            key_for_semitones("X", 2)


class TestSignedSemitones:
    def test_up(self) -> None:
        assert signed_semitones("up", 3) == 3

    def test_down_from_form_string(self) -> None:
        assert signed_semitones("down", "2") == -2

    def test_unknown_direction(self) -> None:
        with pytest.raises(ValueError, match="Unknown direction"):
            signed_semitones("sideways", 1)
