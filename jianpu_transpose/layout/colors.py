"""Hex color helpers."""

from __future__ import annotations

import re

HEX_COLOR_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(color: str) -> tuple[int, int, int] | None:
    """Parse "#RRGGBB" (leading # optional); None if malformed.

    Examples
    --------
    >>> hex_to_rgb("#2563EB")
    (37, 99, 235)
    >>> hex_to_rgb("blue") is None
    True
    """
    match = HEX_COLOR_RE.match(color)
    if not match:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format channels as lower-case "#rrggbb", rounding each channel.

    Examples
    --------
    >>> rgb_to_hex(37, 99, 235)
    '#2563eb'
    """
    return "#" + "".join(f"{round(channel):02x}" for channel in (r, g, b))


def lighten_color(color: str, factor: float = 0.4) -> str:
    """Blend a color toward white.

    Parameters
    ----------
    color : str
        Hex color.
    factor : float
        Blend amount, 0 (unchanged) to 1 (white).

    Returns
    -------
    str
        The lightened color, or ``color`` unchanged if it is not valid hex.

    Examples
    --------
    >>> lighten_color("#000000", 0.5)
    '#808080'
    >>> lighten_color("not-a-color")
    'not-a-color'
    """
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    return rgb_to_hex(*(channel + (255 - channel) * factor for channel in rgb))
