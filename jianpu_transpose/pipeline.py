"""End-to-end sheet transposition.

Takes the vision model's recognition result and the user's request and
produces the transposed chords plus draw instructions. This is the only
layer that turns domain errors into a failure result; everything below
it either recovers locally or raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from jianpu_transpose.config import settings
from jianpu_transpose.coordinates import (
    AnchorPair,
    RecognitionError,
    RecognitionResult,
    ResolvedPosition,
    parse_recognition_response,
    resolve_positions,
)
from jianpu_transpose.corrections import correct_chord_by_key
from jianpu_transpose.keys import InvalidKeyError, normalize_key
from jianpu_transpose.layout import (
    DrawInstruction,
    KeyMark,
    Label,
    default_font_size,
    estimate_text_size,
    key_change_mark,
    layout_labels,
)
from jianpu_transpose.models import Chord, TransposeResult
from jianpu_transpose.parser import parse_chord
from jianpu_transpose.transposer import transpose_chords, transpose_chords_by_semitones

_LOG = logging.getLogger(__name__)

# (text, font_size) -> (width, height) in pixels
MeasureFn = Callable[[str, float], tuple[float, float]]


@dataclass(frozen=True)
class SheetTransposition:
    """Outcome of transposing one sheet.

    A failed run has ``ok=False`` and an ``error`` message; a successful
    run with no recognized chords has ``ok=True`` and empty instructions.

    Parameters
    ----------
    ok : bool
        Whether the transposition succeeded.
    error : str | None
        Failure reason.
    result : TransposeResult | None
        Transposed chords.
    instructions : tuple[DrawInstruction, ...]
        Per-label drawing instructions.
    key_mark : KeyMark | None
        Key-change banner.
    chord_color : str | None
        Base label color used.
    font_size : float | None
        Label font size used.
    """

    ok: bool
    error: str | None = None
    result: TransposeResult | None = None
    instructions: tuple[DrawInstruction, ...] = ()
    key_mark: KeyMark | None = None
    chord_color: str | None = None
    font_size: float | None = None

    @classmethod
    def failure(cls, error: str) -> SheetTransposition:
        return cls(ok=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the response JSON shape."""
        if not self.ok or self.result is None:
            return {"ok": False, "error": self.error}

        return {
            "ok": True,
            "originalKey": self.result.original_key,
            "targetKey": self.result.target_key,
            "semitones": self.result.semitones,
            "chordColor": self.chord_color,
            "fontSize": self.font_size,
            "chords": [
                {
                    "original": item.original_text,
                    "transposed": item.transposed_text,
                    "x": item.transposed.x,
                    "y": item.transposed.y,
                }
                for item in self.result.chords
            ],
            "instructions": [instruction.to_dict() for instruction in self.instructions],
            "keyMark": self.key_mark.to_dict() if self.key_mark else None,
        }


def resolve_original_key(declared_key: str | None, recognized_key: str | None) -> str:
    """Pick the sheet key: declared, else recognized, else the default.

    Examples
    --------
    >>> resolve_original_key(None, "1=D")
    'D'
    >>> resolve_original_key("Eb", "1=D")
    'Eb'
    >>> resolve_original_key(None, None)
    'C'
    """
    for key in (declared_key, recognized_key):
        if key and key.strip():
            return normalize_key(key)
    return settings.DEFAULT_ORIGINAL_KEY


def chords_from_positions(positions: Iterable[ResolvedPosition], original_key: str) -> list[Chord]:
    """Correct, parse and position each recognized label.

    Labels that do not parse as chords are skipped.
    """
    chords = []
    for position in positions:
        text = correct_chord_by_key(position.text, original_key)
        chord = parse_chord(text)
        if chord is None:
            _LOG.debug("Skipping non-chord label %r", position.text)
            continue
        chords.append(chord.with_position(position.x, position.y))
    return chords


def transpose_sheet(
    recognition: RecognitionResult,
    image_width: int,
    image_height: int,
    *,
    target_key: str | None = None,
    original_key: str | None = None,
    semitones: int = 0,
    anchors: AnchorPair | None = None,
    chord_color: str | None = None,
    font_size: float | None = None,
    measure: MeasureFn | None = None,
) -> SheetTransposition:
    """Transpose the chords of one recognized sheet.

    Parameters
    ----------
    recognition : RecognitionResult
        Decoded vision model output.
    image_width : int
        Image width in pixels.
    image_height : int
        Image height in pixels.
    target_key : str | None
        Key to move to. With a non-zero ``semitones`` it is used as the
        display label of the result.
    original_key : str | None
        Declared sheet key; falls back to the recognized key, then "C".
    semitones : int
        Signed shift. Zero means "derive from the two keys".
    anchors : AnchorPair | None
        User anchors for vertical calibration.
    chord_color : str | None
        Base label color.
    font_size : float | None
        Label font size; derived from the image width when omitted.
    measure : MeasureFn | None
        Text measuring function; estimated from the font size when omitted.

    Returns
    -------
    SheetTransposition
        The successful result, or a failure carrying the error message.
    """
    if not target_key and not semitones:
        return SheetTransposition.failure("No target key or semitone shift given")

    chord_color = chord_color or settings.DEFAULT_CHORD_COLOR
    font_size = font_size if font_size and font_size > 0 else default_font_size(image_width)
    measure = measure or estimate_text_size

    try:
        key = resolve_original_key(original_key, recognition.key)
        positions = resolve_positions(recognition.centers, image_width, image_height, anchors)
        chords = chords_from_positions(positions, key)
        if semitones:
            result = transpose_chords_by_semitones(
                chords, key, semitones, explicit_target_key=target_key
            )
        else:
            result = transpose_chords(chords, key, target_key)
    except InvalidKeyError as e:
        _LOG.warning("Transposition failed: %s", e)
        return SheetTransposition.failure(str(e))

    _LOG.info(
        "Transposed %d chords from %s to %s (%+d semitones)",
        len(result.chords),
        result.original_key,
        result.target_key,
        result.semitones,
    )

    labels = []
    for item in result.chords:
        text = item.transposed_text
        width, height = measure(text, font_size)
        labels.append(Label(text, item.transposed.x, item.transposed.y, width, height))

    return SheetTransposition(
        ok=True,
        result=result,
        instructions=tuple(
            layout_labels(labels, image_width, image_height, font_size, base_color=chord_color)
        ),
        key_mark=key_change_mark(
            result.original_key, result.target_key, image_width, color=chord_color
        ),
        chord_color=chord_color,
        font_size=font_size,
    )


def transpose_sheet_from_response(
    response_text: str,
    image_width: int,
    image_height: int,
    **options: Any,
) -> SheetTransposition:
    """Decode a raw recognizer reply and transpose it.

    Accepts the same keyword options as ``transpose_sheet``. An
    undecodable reply is reported as a failure.
    """
    try:
        recognition = parse_recognition_response(response_text)
    except RecognitionError as e:
        _LOG.warning("Recognition reply rejected: %s", e)
        return SheetTransposition.failure(str(e))
    return transpose_sheet(recognition, image_width, image_height, **options)
