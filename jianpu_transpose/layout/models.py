"""Data models for annotation layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in image pixels.

    Parameters
    ----------
    x : float
        Left edge.
    y : float
        Top edge.
    width : float
        Width.
    height : float
        Height.
    """

    x: float
    y: float
    width: float
    height: float

    def overlaps(self, other: Rect) -> bool:
        """Check for a strictly positive-area intersection.

        Examples
        --------
        >>> Rect(0, 0, 10, 10).overlaps(Rect(5, 5, 10, 10))
        True
        >>> Rect(0, 0, 10, 10).overlaps(Rect(10, 0, 10, 10))
        False
        """
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


@dataclass(frozen=True)
class Label:
    """A replacement chord label to place on the image.

    Parameters
    ----------
    text : str
        Label text as it should be drawn.
    x : float | None
        Center x in percent of the image width.
    y : float | None
        Center y in percent of the image height.
    text_width : float
        Measured text width in pixels.
    text_height : float
        Measured text height in pixels.
    """

    text: str
    x: float | None
    y: float | None
    text_width: float
    text_height: float


@dataclass(frozen=True)
class DrawInstruction:
    """Everything the compositor needs to paint one label.

    Parameters
    ----------
    text : str
        Label text.
    x : float
        Center x in percent.
    y : float
        Center y in percent.
    pixel_x : int
        Center x in pixels.
    pixel_y : int
        Center y in pixels.
    rect : Rect
        Cover rectangle, large enough to hide the printed chord.
    overlap_rect : Rect
        Tighter rectangle used for collision detection only.
    color : str
        Hex text color.
    corner_radius : float
        Corner radius of the cover rectangle.
    """

    text: str
    x: float
    y: float
    pixel_x: int
    pixel_y: int
    rect: Rect
    overlap_rect: Rect
    color: str
    corner_radius: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the compositor's JSON shape."""
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "pixelX": self.pixel_x,
            "pixelY": self.pixel_y,
            "rectX": self.rect.x,
            "rectY": self.rect.y,
            "rectWidth": self.rect.width,
            "rectHeight": self.rect.height,
            "cornerRadius": self.corner_radius,
            "color": self.color,
        }


@dataclass(frozen=True)
class KeyMark:
    """The "<original> --> <target>" banner in the top-left corner."""

    text: str
    x: float
    y: float
    font_size: int
    background: Rect
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "fontSize": self.font_size,
            "rectX": self.background.x,
            "rectY": self.background.y,
            "rectWidth": self.background.width,
            "rectHeight": self.background.height,
            "color": self.color,
        }
