"""
ZGrid — grid/blend.py
Color Blender: the per-channel contract for combining two colors.
=================================================================
Version:     0.1
Stack:       Python 3.12 | NumPy
Status:      Stable.

Architecture notes
------------------
- A blender maps (current, new) -> stored color. The closed set of
  blenders is BlendMode; each member is callable and dispatches through
  _BLEND_TABLE. No function-pointer identity checks anywhere.
- Drawing operations never take a bare BlendMode. They take an "ink" per
  color channel:
      None           -> leave the channel untouched (preserve)
      Color / tuple  -> Paint(color, REPLACE)
      Paint          -> new color + mode + alpha
- All arithmetic is done on int32 and clipped to [0, 255] before being
  stored back as uint8. No wraparound.
- Every mode is vectorized so Console.fill/set can blend a whole region
  in one call. The scalar API (blend_colors, BlendMode.__call__) is the
  same code on a (3,) array.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from grid.color import Color, as_color, COMPONENT_MAX


_ArrayFn = Callable[[np.ndarray, np.ndarray], np.ndarray]


# ============================================================
# PER-MODE ARITHMETIC
# c = current components, n = new components (int32, broadcastable)
# ============================================================

def _replace(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return np.broadcast_to(n, np.broadcast_shapes(c.shape, n.shape))

def _preserve(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return np.broadcast_to(c, np.broadcast_shapes(c.shape, n.shape))

def _average(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return (c + n) // 2

def _add(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return c + n

def _subtract(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return c - n

def _multiply(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return c * n // COMPONENT_MAX

def _screen(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return COMPONENT_MAX - (COMPONENT_MAX - c) * (COMPONENT_MAX - n) // COMPONENT_MAX

def _lighten(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return np.maximum(c, n)

def _darken(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return np.minimum(c, n)

def _burn(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    return c + n - COMPONENT_MAX

def _dodge(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    # n == 255 would divide by zero; the limit is full intensity.
    divisor = np.maximum(COMPONENT_MAX - n, 1)
    return np.where(n == COMPONENT_MAX, COMPONENT_MAX, c * COMPONENT_MAX // divisor)

def _overlay(c: np.ndarray, n: np.ndarray) -> np.ndarray:
    low = 2 * c * n // COMPONENT_MAX
    high = COMPONENT_MAX - 2 * (COMPONENT_MAX - c) * (COMPONENT_MAX - n) // COMPONENT_MAX
    return np.where(c < 128, low, high)


class BlendMode(Enum):
    """Closed set of blend policies. Members are callable blenders."""
    REPLACE = "replace"
    PRESERVE = "preserve"
    AVERAGE = "average"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    LIGHTEN = "lighten"
    DARKEN = "darken"
    BURN = "burn"
    DODGE = "dodge"
    OVERLAY = "overlay"

    def apply(self, current: np.ndarray, new: np.ndarray) -> np.ndarray:
        """Vectorized blend of int arrays shaped (..., 3). Returns clipped int32."""
        c = np.asarray(current, dtype=np.int32)
        n = np.asarray(new, dtype=np.int32)
        return np.clip(_BLEND_TABLE[self](c, n), 0, COMPONENT_MAX).astype(np.int32)

    def __call__(self, current: Tuple[int, int, int], new: Tuple[int, int, int]) -> Color:
        return blend_colors(self, current, new)


_BLEND_TABLE: Dict[BlendMode, _ArrayFn] = {
    BlendMode.REPLACE:  _replace,
    BlendMode.PRESERVE: _preserve,
    BlendMode.AVERAGE:  _average,
    BlendMode.ADD:      _add,
    BlendMode.SUBTRACT: _subtract,
    BlendMode.MULTIPLY: _multiply,
    BlendMode.SCREEN:   _screen,
    BlendMode.LIGHTEN:  _lighten,
    BlendMode.DARKEN:   _darken,
    BlendMode.BURN:     _burn,
    BlendMode.DODGE:    _dodge,
    BlendMode.OVERLAY:  _overlay,
}


def blend_colors(mode: BlendMode, current: Tuple[int, int, int], new: Tuple[int, int, int]) -> Color:
    """Blend two single colors with the given mode."""
    out = mode.apply(np.asarray(as_color(current)), np.asarray(as_color(new)))
    return Color(int(out[0]), int(out[1]), int(out[2]))


# ============================================================
# PAINT  (new color + mode + alpha, applied per channel)
# ============================================================

@dataclass(frozen=True)
class Paint:
    """
    A color supplied by the caller together with the policy used to
    combine it with whatever the cell currently holds.

    alpha blends between the current color (0.0) and the fully blended
    result (1.0), like tcod's BKGND_ALPH flag.
    """
    color: Color
    mode: BlendMode = BlendMode.REPLACE
    alpha: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_color(self.color))
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be within [0, 1], got {self.alpha}")

    def apply(self, current: np.ndarray) -> np.ndarray:
        """Blend this paint over a uint8 (..., 3) array. Returns uint8."""
        cur = np.asarray(current, dtype=np.int32)
        out = self.mode.apply(cur, np.asarray(self.color, dtype=np.int32))
        if self.alpha < 1.0:
            out = np.rint(cur + (out - cur) * self.alpha)
        return np.clip(out, 0, COMPONENT_MAX).astype(np.uint8)

    def __call__(self, current: Tuple[int, int, int]) -> Color:
        out = self.apply(np.asarray(as_color(current), dtype=np.uint8))
        return Color(int(out[0]), int(out[1]), int(out[2]))


Ink = Optional[Union[Paint, Color, Tuple[int, int, int]]]


def as_paint(ink: Ink) -> Optional[Paint]:
    """Normalize a drawing ink argument. None stays None (preserve)."""
    if ink is None or isinstance(ink, Paint):
        return ink
    if isinstance(ink, BlendMode):
        raise TypeError("A BlendMode needs a color; wrap it in Paint(color, mode)")
    if isinstance(ink, (tuple, list, np.ndarray)):
        return Paint(as_color(tuple(ink)))
    raise TypeError(f"Expected None, a color or a Paint, got {type(ink).__name__}")


# ============================================================
# SHORTCUT CONSTRUCTORS
# ============================================================

def replace(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.REPLACE, alpha)

def average(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.AVERAGE, alpha)

def add(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.ADD, alpha)

def subtract(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.SUBTRACT, alpha)

def multiply(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.MULTIPLY, alpha)

def screen(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.SCREEN, alpha)

def lighten(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.LIGHTEN, alpha)

def darken(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.DARKEN, alpha)

def burn(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.BURN, alpha)

def dodge(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.DODGE, alpha)

def overlay(color: Tuple[int, int, int], alpha: float = 1.0) -> Paint:
    return Paint(color, BlendMode.OVERLAY, alpha)
