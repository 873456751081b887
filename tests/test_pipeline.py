"""End-to-end tests for sheet transposition."""

import json

import pytest

from jianpu_transpose import SheetTransposition, transpose_sheet, transpose_sheet_from_response
from jianpu_transpose.coordinates import AnchorPair, AnchorPoint, Observation, RecognitionResult, ResolvedPosition
from jianpu_transpose.pipeline import chords_from_positions, resolve_original_key


def recognition(key, *centers) -> RecognitionResult:
    return RecognitionResult(key=key, centers=tuple(Observation(*c) for c in centers))


class TestResolveOriginalKey:
    @pytest.mark.parametrize(
        ("declared", "recognized", "expected"),
        [
            ("Eb", "1=D", "Eb"),
            (None, "1=D", "D"),
            ("  ", "G调", "G"),
            (None, None, "C"),
            ("", "", "C"),
        ],
    )
    def test_priority(self, declared, recognized, expected) -> None:
        assert resolve_original_key(declared, recognized) == expected


class TestChordsFromPositions:
    def test_corrects_and_skips_lyrics(self) -> None:
        positions = [
            ResolvedPosition("A/C", 10.0, 20.0),
            ResolvedPosition("la", 15.0, 20.0),
            ResolvedPosition("D", 30.0, 20.0),
        ]
        chords = chords_from_positions(positions, "D")
        assert [str(c) for c in chords] == ["A/C#", "D"]
        assert (chords[0].x, chords[0].y) == (10.0, 20.0)


class TestTransposeSheet:
    def test_key_to_key(self) -> None:
        sheet = recognition("1=D", ("D", 300, 200), ("A/C", 100, 200))
        outcome = transpose_sheet(sheet, 1000, 1000, target_key="E")

        assert outcome.ok
        assert outcome.result.original_key == "D"
        assert outcome.result.target_key == "E"
        assert outcome.result.semitones == 2
        assert [c.original_text for c in outcome.result.chords] == ["A/C#", "D"]
        assert [c.transposed_text for c in outcome.result.chords] == ["B/D#", "E"]
        assert [(i.x, i.y) for i in outcome.instructions] == [(10.0, 20.0), (30.0, 20.0)]
        assert outcome.key_mark.text == "D --> E"

    def test_declared_key_overrides_recognized(self) -> None:
        sheet = recognition("1=D", ("C", 100, 100))
        outcome = transpose_sheet(sheet, 1000, 1000, original_key="C", target_key="G")
        assert outcome.result.semitones == 7
        assert outcome.result.chords[0].transposed_text == "G"

    def test_flat_target_spelling(self) -> None:
        sheet = recognition(None, ("C", 100, 100), ("G/B", 400, 100))
        outcome = transpose_sheet(sheet, 1000, 1000, target_key="Bb")
        assert [c.transposed_text for c in outcome.result.chords] == ["Bb", "F/A"]

    def test_semitone_shift_down(self) -> None:
        sheet = recognition(None, ("Am", 100, 100))
        outcome = transpose_sheet(sheet, 1000, 1000, semitones=-2)
        assert outcome.result.target_key == "Bb"
        assert outcome.result.semitones == -2
        assert outcome.result.chords[0].transposed_text == "Gm"

    def test_semitone_shift_keeps_chosen_label(self) -> None:
        sheet = recognition(None, ("C", 100, 100))
        outcome = transpose_sheet(sheet, 1000, 1000, target_key="F#", semitones=6)
        assert outcome.result.target_key == "F#"
        assert outcome.result.chords[0].transposed_text == "F#"

    def test_anchor_mapping(self) -> None:
        sheet = recognition(None, ("C", 100, 200), ("G", 800, 700))
        anchors = AnchorPair(AnchorPoint(10, 15), AnchorPoint(80, 85))
        outcome = transpose_sheet(sheet, 1000, 1000, target_key="D", anchors=anchors)
        assert [(c.transposed.x, c.transposed.y) for c in outcome.result.chords] == [
            (10.0, 15.0),
            (80.0, 85.0),
        ]

    def test_no_chords_is_success(self) -> None:
        outcome = transpose_sheet(recognition(None), 800, 600, target_key="G")
        assert outcome.ok
        assert outcome.result.chords == ()
        assert outcome.instructions == ()
        assert outcome.key_mark.text == "C --> G"

    def test_invalid_target_key_fails(self) -> None:
        outcome = transpose_sheet(recognition(None, ("C", 100, 100)), 800, 600, target_key="H")
        assert not outcome.ok
        assert "Invalid key" in outcome.error
        assert outcome.result is None

    def test_missing_target_fails(self) -> None:
        outcome = transpose_sheet(recognition(None, ("C", 100, 100)), 800, 600)
        assert not outcome.ok
        assert outcome.error

    def test_font_size_and_color_defaults(self) -> None:
        outcome = transpose_sheet(recognition(None, ("C", 500, 500)), 900, 900, target_key="D")
        assert outcome.font_size == 20
        assert outcome.chord_color == "#2563EB"
        assert outcome.instructions[0].color == "#2563EB"

    def test_key_mark_uses_chord_color(self) -> None:
        sheet = recognition(None, ("C", 500, 500))
        outcome = transpose_sheet(sheet, 1000, 1000, target_key="D", chord_color="#dc2626")
        assert outcome.key_mark.color == "#dc2626"
        assert outcome.instructions[0].color == "#dc2626"

    def test_custom_measure(self) -> None:
        calls = []

        def measure(text, font_size):
            calls.append((text, font_size))
            return 10.0, 10.0

        sheet = recognition(None, ("C", 500, 500))
        outcome = transpose_sheet(sheet, 1000, 1000, target_key="D", font_size=20, measure=measure)
        assert calls == [("D", 20)]
        assert outcome.instructions[0].rect.width == 42


class TestTransposeSheetFromResponse:
    def test_code_fenced_reply(self) -> None:
        reply = "```json\n" + json.dumps({"key": "1=G", "centers": [{"text": "G", "cx": 100, "cy": 100}]}) + "\n```"
        outcome = transpose_sheet_from_response(reply, 1000, 1000, target_key="A")
        assert outcome.ok
        assert outcome.result.chords[0].transposed_text == "A"

    def test_bad_json_fails(self) -> None:
        outcome = transpose_sheet_from_response("sorry, I cannot read this", 1000, 1000, target_key="A")
        assert not outcome.ok
        assert outcome.error.startswith("Recognition reply is not valid JSON")


class TestSheetTranspositionDict:
    def test_failure_shape(self) -> None:
        assert SheetTransposition.failure("boom").to_dict() == {"ok": False, "error": "boom"}

    def test_success_shape(self) -> None:
        outcome = transpose_sheet(recognition(None, ("C", 100, 100)), 1000, 1000, target_key="D")
        data = outcome.to_dict()
        assert data["ok"] is True
        assert data["originalKey"] == "C"
        assert data["targetKey"] == "D"
        assert data["chords"] == [{"original": "C", "transposed": "D", "x": 10.0, "y": 10.0}]
        assert len(data["instructions"]) == 1
        assert data["keyMark"]["text"] == "C --> D"
        json.dumps(data)
