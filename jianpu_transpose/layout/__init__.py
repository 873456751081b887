"""Overlap-aware layout of replacement chord labels."""

from jianpu_transpose.layout.annotate import (
    default_font_size,
    estimate_text_size,
    key_change_mark,
    label_rects,
    layout_labels,
)
from jianpu_transpose.layout.colors import hex_to_rgb, lighten_color, rgb_to_hex
from jianpu_transpose.layout.graph import alternate_colors, build_overlap_graph, connected_components
from jianpu_transpose.layout.models import DrawInstruction, KeyMark, Label, Rect

__all__ = [
    "DrawInstruction",
    "KeyMark",
    "Label",
    "Rect",
    "alternate_colors",
    "build_overlap_graph",
    "connected_components",
    "default_font_size",
    "estimate_text_size",
    "hex_to_rgb",
    "key_change_mark",
    "label_rects",
    "layout_labels",
    "lighten_color",
    "rgb_to_hex",
]
