"""
ZGrid — grid/color.py
Color value type and named palette.
===================================
Version:     0.1
Stack:       Python 3.12 | stdlib
Status:      Stable.

Colors are plain (r, g, b) value tuples. Components live in [0, 255].
Any 3-tuple of ints is accepted wherever a Color is expected, which keeps
the type interchangeable with the tuples tcod uses for fg/bg.
"""

from __future__ import annotations
from typing import NamedTuple, Tuple

COMPONENT_MIN: int = 0
COMPONENT_MAX: int = 255


def _clamp(value: float) -> int:
    return int(min(max(value, COMPONENT_MIN), COMPONENT_MAX))


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def clamped(cls, r: float, g: float, b: float) -> "Color":
        """Build a Color, clamping each component into [0, 255]."""
        return cls(_clamp(r), _clamp(g), _clamp(b))

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Parse "#rrggbb", "rrggbb" or the short "#rgb" form."""
        digits = text[1:] if text.startswith("#") else text
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        if len(digits) != 6:
            raise ValueError(f"Not a hex color: {text!r}")
        try:
            value = int(digits, 16)
        except ValueError:
            raise ValueError(f"Not a hex color: {text!r}") from None
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


def as_color(value: Tuple[int, int, int]) -> Color:
    """Coerce a 3-tuple (or Color) into a Color, validating its range."""
    if isinstance(value, Color):
        return value
    if len(value) != 3:
        raise ValueError(f"A color needs exactly 3 components, got {value!r}")
    r, g, b = (int(c) for c in value)
    for c in (r, g, b):
        if not COMPONENT_MIN <= c <= COMPONENT_MAX:
            raise ValueError(f"Color component out of range: {value!r}")
    return Color(r, g, b)


# ============================================================
# NAMED PALETTE
# ============================================================

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
YELLOW = Color(255, 255, 0)
CYAN = Color(0, 255, 255)
MAGENTA = Color(255, 0, 255)
ORANGE = Color(255, 128, 0)
GREY = Color(128, 128, 128)
DARK_GREY = Color(64, 64, 64)
LIGHT_GREY = Color(192, 192, 192)
