"""Text formatting helpers for mascot inspection and settings values."""

from __future__ import annotations

import math

__all__ = [
    "double_to_string",
    "vec_to_string",
    "dvec_to_string",
    "area_to_string",
    "darea_to_string",
    "color_to_string",
]


def double_to_string(value: float) -> str:
    """Format a number with six decimals, then cut it to two decimals.

    The digits after the second decimal place are dropped, not rounded.
    Values without a decimal point (such as ``inf`` or ``nan``) are
    returned unchanged.
    """
    value = float(value)
    if math.isnan(value):
        text = "-nan" if math.copysign(1.0, value) < 0 else "nan"
    else:
        text = f"{value:f}"
    dot = text.rfind(".")
    if dot != -1:
        text = text[: dot + 3]
    return text


def vec_to_string(x: float, y: float) -> str:
    """Describe a point as ``x: .., y: ..``."""
    return f"x: {double_to_string(x)}, y: {double_to_string(y)}"


def dvec_to_string(x: float, y: float, dx: float, dy: float) -> str:
    """Describe a point together with its latest movement."""
    return (
        f"{vec_to_string(x, y)}"
        f", dx: {double_to_string(dx)}"
        f", dy: {double_to_string(dy)}"
    )


def area_to_string(left: float, top: float, width: float, height: float) -> str:
    """Describe a rectangular area by its top-left corner and size."""
    return (
        f"x: {double_to_string(left)}"
        f", y: {double_to_string(top)}"
        f", width: {double_to_string(width)}"
        f", height: {double_to_string(height)}"
    )


def darea_to_string(
    left: float, top: float, width: float, height: float, dx: float, dy: float
) -> str:
    """Describe a moving rectangular area."""
    return (
        f"{area_to_string(left, top, width, height)}"
        f", dx: {double_to_string(dx)}"
        f", dy: {double_to_string(dy)}"
    )


def color_to_string(red: int, green: int, blue: int) -> str:
    """Render an RGB colour as ``#RRGGBB`` with upper-case hex digits.

    Each component is reduced to its low eight bits.
    """
    return "#" + "".join(f"{int(c) & 0xFF:02X}" for c in (red, green, blue))