"""
utils/color.py — Color helpers for Hexa.

Themes are written as CSS-style hex strings ("#29ABE2"); pygame wants RGB
tuples. from_hex() bridges the two. darker() derives the outline shade
of a hex cell from its single fill color.
"""

from typing import Tuple

RGBColor = Tuple[int, int, int]


def clamp(value: int, lo: int = 0, hi: int = 255) -> int:
    """Clamp an integer channel value to [lo, hi]."""
    return max(lo, min(hi, value))


def from_hex(code: str) -> RGBColor:
    """Parse "#RRGGBB" (leading # optional) into an RGB tuple.

    Args:
        code: Six-digit hex color string.

    Returns:
        RGB tuple.

    Raises:
        ValueError: If code is not a six-digit hex color.
    """
    digits = code.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"expected #RRGGBB, got {code!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def darker(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return color with amount subtracted from every channel.

    Used for hex cell outlines so each cell reads against the background
    whatever theme is active.
    """
    r, g, b = color
    return (clamp(r - amount), clamp(g - amount), clamp(b - amount))
