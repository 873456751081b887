"""Data models for recognizer observations and resolved label positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Observation:
    """A chord label center reported by the vision model.

    Parameters
    ----------
    text : str
        Recognized label text.
    cx : Any
        Horizontal center in recognizer units (per-mille of the image).
        Kept as received; non-numeric values are dropped during resolution.
    cy : Any
        Vertical center in recognizer units.
    """

    text: str
    cx: Any
    cy: Any


@dataclass(frozen=True)
class AnchorPoint:
    """A user-picked position, in percent of the image size."""

    x: float
    y: float


@dataclass(frozen=True)
class AnchorPair:
    """User-confirmed positions of the first and last chord on the sheet.

    Parameters
    ----------
    first : AnchorPoint
        Where the first chord label actually is.
    last : AnchorPoint
        Where the last chord label actually is.
    """

    first: AnchorPoint
    last: AnchorPoint


@dataclass(frozen=True)
class ResolvedPosition:
    """A label placed in percentage space (0-100 on both axes)."""

    text: str
    x: float
    y: float


@dataclass(frozen=True)
class RecognitionResult:
    """Decoded output of the vision model.

    Parameters
    ----------
    key : str | None
        Key marking read from the sheet (e.g., "1=D"), if any.
    centers : tuple[Observation, ...]
        Chord label centers in the order the model returned them.
    """

    key: str | None
    centers: tuple[Observation, ...]
