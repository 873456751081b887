"""Draw-instruction layout for transposed chord labels.

Each label gets a large cover rectangle that hides the printed chord and
a tighter rectangle for overlap detection; colors are then alternated
within clusters of overlapping labels.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from jianpu_transpose.config import settings
from jianpu_transpose.layout.graph import alternate_colors
from jianpu_transpose.layout.models import DrawInstruction, KeyMark, Label, Rect

_LOG = logging.getLogger(__name__)

# Padding, as a fraction of the font size
COVER_PADDING = 0.8
COVER_VERTICAL_SHARE = 0.63
OVERLAP_PADDING = 0.2
OVERLAP_VERTICAL_SHARE = 0.7

TEXT_HEIGHT_RATIO = 1.1
CHAR_WIDTH_RATIO = 0.6
MAX_CORNER_RADIUS = 8.0

MARK_PADDING = 15.0
MARK_HEIGHT_RATIO = 1.2


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def default_font_size(image_width: float) -> int:
    """Font size used when the caller does not choose one.

    Examples
    --------
    >>> default_font_size(900)
    20
    >>> default_font_size(200)
    16
    """
    return _clamp(round(image_width / 45), 16, 28)


def estimate_text_size(text: str, font_size: float) -> tuple[float, float]:
    """Approximate rendered text size for callers without a font renderer.

    Returns
    -------
    tuple[float, float]
        Width and height in pixels.
    """
    return len(text) * font_size * CHAR_WIDTH_RATIO, font_size * TEXT_HEIGHT_RATIO


def _centered_rect(cx: float, cy: float, width: float, height: float) -> Rect:
    return Rect(cx - width / 2, cy - height / 2, width, height)


def label_rects(label: Label, pixel_x: float, pixel_y: float, font_size: float) -> tuple[Rect, Rect]:
    """Compute the cover and overlap-test rectangles for a label.

    Returns
    -------
    tuple[Rect, Rect]
        Cover rectangle and overlap-test rectangle, both centered on the label.
    """
    cover_padding = font_size * COVER_PADDING
    cover = _centered_rect(
        pixel_x,
        pixel_y,
        round(label.text_width + cover_padding * 2),
        round(label.text_height + cover_padding * COVER_VERTICAL_SHARE),
    )

    overlap_padding = font_size * OVERLAP_PADDING
    overlap = _centered_rect(
        pixel_x,
        pixel_y,
        round(label.text_width + overlap_padding * 2),
        round(label.text_height + overlap_padding * OVERLAP_VERTICAL_SHARE),
    )
    return cover, overlap


def _has_valid_position(label: Label) -> bool:
    return all(
        value is not None and math.isfinite(value) and 0 <= value <= 100
        for value in (label.x, label.y)
    )


def layout_labels(
    labels: Sequence[Label],
    image_width: int,
    image_height: int,
    font_size: float,
    *,
    base_color: str | None = None,
    lighten_factor: float | None = None,
) -> list[DrawInstruction]:
    """Compute draw instructions for replacement chord labels.

    Parameters
    ----------
    labels : Sequence[Label]
        Labels with percentage positions and measured text size.
    image_width : int
        Image width in pixels.
    image_height : int
        Image height in pixels.
    font_size : float
        Font size the labels were measured with.
    base_color : str | None
        Hex text color; defaults to the configured chord color.
    lighten_factor : float | None
        Blend toward white for alternating overlapped labels.

    Returns
    -------
    list[DrawInstruction]
        One instruction per label with a valid position, in input order.
    """
    base_color = base_color or settings.DEFAULT_CHORD_COLOR
    lighten_factor = settings.LIGHTEN_FACTOR if lighten_factor is None else lighten_factor

    placed: list[tuple[Label, int, int, Rect, Rect]] = []
    for label in labels:
        if not _has_valid_position(label):
            _LOG.warning("Skipping label %r with invalid position (%s, %s)", label.text, label.x, label.y)
            continue
        pixel_x = round(label.x / 100 * image_width)
        pixel_y = round(label.y / 100 * image_height)
        cover, overlap = label_rects(label, pixel_x, pixel_y, font_size)
        placed.append((label, pixel_x, pixel_y, cover, overlap))

    colors = alternate_colors(
        [overlap for *_, overlap in placed],
        [pixel_x for _, pixel_x, *_ in placed],
        base_color,
        lighten_factor,
    )
    corner_radius = min(font_size * 0.2, MAX_CORNER_RADIUS)

    return [
        DrawInstruction(
            text=label.text,
            x=label.x,
            y=label.y,
            pixel_x=pixel_x,
            pixel_y=pixel_y,
            rect=cover,
            overlap_rect=overlap,
            color=color,
            corner_radius=corner_radius,
        )
        for (label, pixel_x, pixel_y, cover, overlap), color in zip(placed, colors, strict=True)
    ]


def key_change_mark(
    original_key: str,
    target_key: str,
    image_width: int,
    text_width: float | None = None,
    color: str | None = None,
) -> KeyMark:
    """Lay out the "<original> --> <target>" banner.

    Parameters
    ----------
    original_key : str
        Key label of the sheet.
    target_key : str
        Key label after transposition.
    image_width : int
        Image width in pixels, used to size the font.
    text_width : float | None
        Measured banner text width; estimated when omitted.
    color : str | None
        Banner text color; defaults to the configured chord color.

    Returns
    -------
    KeyMark
        Banner text anchored at the top-left, with its background box.
    """
    text = f"{original_key} --> {target_key}"
    font_size = _clamp(round(image_width / 35), 20, 32)
    if text_width is None:
        text_width, _ = estimate_text_size(text, font_size)
    height = font_size * MARK_HEIGHT_RATIO

    background = Rect(
        MARK_PADDING / 2,
        MARK_PADDING / 2,
        text_width + MARK_PADDING * 1.5,
        height + MARK_PADDING,
    )
    return KeyMark(
        text=text,
        x=MARK_PADDING,
        y=MARK_PADDING,
        font_size=font_size,
        background=background,
        color=color or settings.DEFAULT_CHORD_COLOR,
    )
