"""
Color conversion utilities

Pure functions for conversions between hex strings, RGB tuples (0-255)
and OpenGL float triples (0.0-1.0).
"""

import math
import re
from typing import Optional, Tuple

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def clamp_channel(value) -> int:
    """
    Clamp a single channel to 0-255

    Accepts ints, floats and numeric strings. Non-numeric input becomes 0.
    """
    if isinstance(value, int):
        return max(0, min(255, value))
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number):
        return 0
    return max(0, min(255, int(round(number))))


def hex_to_rgb(value: str) -> Optional[Tuple[int, int, int]]:
    """
    Convert '#rrggbb' or '#rgb' to an RGB tuple

    Args:
        value: Hex color string, leading '#' optional

    Returns:
        (r, g, b) tuple with values 0-255, or None if the string is not a color

    Example:
        hex_to_rgb("#ff0000")  # (255, 0, 0)
        hex_to_rgb("0f0")      # (0, 255, 0)
    """
    if not isinstance(value, str):
        return None

    match = _HEX_PATTERN.match(value.strip())
    if not match:
        return None

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB (0-255) to lowercase '#rrggbb'"""
    return "#{:02x}{:02x}{:02x}".format(clamp_channel(r), clamp_channel(g), clamp_channel(b))


def rgb_to_gl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert RGB (0-255) to OpenGL floats (0.0-1.0)

    Example:
        rgb_to_gl(255, 0, 0)  # (1.0, 0.0, 0.0)
    """
    return (
        clamp_channel(r) / 255,
        clamp_channel(g) / 255,
        clamp_channel(b) / 255,
    )
