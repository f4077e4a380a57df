"""
ZGrid — grid/console.py
Console: fixed-size rectangular buffer of colored glyph cells.
==============================================================
Version:     0.1
Stack:       Python 3.12 | NumPy
Status:      Stable.

Architecture notes
------------------
- Storage mirrors tcod.console.Console: three arrays indexed [y, x].
      ch  int32  (h, w)     Unicode code point, one per cell
      fg  uint8  (h, w, 3)
      bg  uint8  (h, w, 3)
- Size is fixed at creation. No resize.
- Point operations (get, set, set_r) check the starting coordinate and
  raise ConsoleBoundsError. Range operations (fill, blit, text running
  off the end) clip silently.
- Color channels are written through grid.blend inks: None preserves the
  channel, a color replaces it, a Paint blends it. Glyphs are always
  overwritten.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from grid.blend import Ink, as_paint
from grid.color import Color, BLACK, WHITE, as_color
from grid.errors import ConsoleBoundsError

BLANK: str = " "


def _codepoints(text: str) -> np.ndarray:
    return np.fromiter(map(ord, text), dtype=np.int32, count=len(text))


def _glyph(ch: str) -> int:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"Expected a single character, got {ch!r}")
    return ord(ch)


class Console:
    """
    A width x height grid of cells, each with a foreground color, a
    background color and a glyph.
    """

    def __init__(self, width: int, height: int, fg: Tuple[int, int, int] = WHITE, bg: Tuple[int, int, int] = BLACK):
        if width < 0 or height < 0:
            raise ValueError(f"Console size must be non-negative, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self.ch = np.full((self._height, self._width), ord(BLANK), dtype=np.int32)
        self.fg = np.empty((self._height, self._width, 3), dtype=np.uint8)
        self.bg = np.empty((self._height, self._width, 3), dtype=np.uint8)
        self.fg[...] = as_color(fg)
        self.bg[...] = as_color(bg)

    # ------------------------------------------------------------
    # Size
    # ------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise ConsoleBoundsError(
                f"Cell ({x}, {y}) is outside the {self._width}x{self._height} console"
            )

    # ------------------------------------------------------------
    # Point operations
    # ------------------------------------------------------------

    def get(self, x: int, y: int) -> Tuple[Color, Color, str]:
        """Return (fg, bg, glyph) of the cell at (x, y)."""
        self._check_bounds(x, y)
        fg = self.fg[y, x]
        bg = self.bg[y, x]
        return (
            Color(int(fg[0]), int(fg[1]), int(fg[2])),
            Color(int(bg[0]), int(bg[1]), int(bg[2])),
            chr(self.ch[y, x]),
        )

    def set(self, x: int, y: int, fg: Ink, bg: Ink, text: str) -> None:
        """
        Write text starting at (x, y), one code point per cell.

        Text past the right edge continues at column 0 of the next row.
        Text past the last cell is dropped.
        """
        self._check_bounds(x, y)
        codes = _codepoints(text)
        start = y * self._width + x
        codes = codes[: self._width * self._height - start]
        ys, xs = np.divmod(start + np.arange(codes.size), self._width)
        self._write(ys, xs, fg, bg, codes)

    def set_r(self, x: int, y: int, w: int, h: int, fg: Ink, bg: Ink, text: str) -> None:
        """
        Write text inside the w x h rectangle whose top-left is (x, y).

        Text wraps at the rectangle's width and stops after w * h code
        points. Cells that fall outside the console are skipped.
        """
        self._check_bounds(x, y)
        if w <= 0 or h <= 0:
            return
        codes = _codepoints(text)[: w * h]
        offsets = np.arange(codes.size)
        xs = x + offsets % w
        ys = y + offsets // w
        inside = (xs < self._width) & (ys < self._height)
        self._write(ys[inside], xs[inside], fg, bg, codes[inside])

    def _write(self, ys: np.ndarray, xs: np.ndarray, fg: Ink, bg: Ink, codes: np.ndarray) -> None:
        if codes.size == 0:
            return
        fg_paint = as_paint(fg)
        bg_paint = as_paint(bg)
        if fg_paint is not None:
            self.fg[ys, xs] = fg_paint.apply(self.fg[ys, xs])
        if bg_paint is not None:
            self.bg[ys, xs] = bg_paint.apply(self.bg[ys, xs])
        self.ch[ys, xs] = codes

    # ------------------------------------------------------------
    # Range operations (clip silently)
    # ------------------------------------------------------------

    def fill(self, x: int, y: int, w: int, h: int, fg: Ink, bg: Ink, ch: str) -> None:
        """Write ch to every cell of [x, x+w) x [y, y+h) that lies on the console."""
        code = _glyph(ch)
        fg_paint = as_paint(fg)
        bg_paint = as_paint(bg)
        x0, x1 = max(x, 0), min(x + w, self._width)
        y0, y1 = max(y, 0), min(y + h, self._height)
        if x0 >= x1 or y0 >= y1:
            return
        region = (slice(y0, y1), slice(x0, x1))
        if fg_paint is not None:
            self.fg[region] = fg_paint.apply(self.fg[region])
        if bg_paint is not None:
            self.bg[region] = bg_paint.apply(self.bg[region])
        self.ch[region] = code

    def clear(self, fg: Ink = WHITE, bg: Ink = BLACK, ch: str = BLANK) -> None:
        """Fill the whole console."""
        self.fill(0, 0, self._width, self._height, fg, bg, ch)

    def blit(self, source: "Console", x: int, y: int) -> None:
        """Copy every cell of source onto this console with its top-left at (x, y)."""
        x0, x1 = max(x, 0), min(x + source.width, self._width)
        y0, y1 = max(y, 0), min(y + source.height, self._height)
        if x0 >= x1 or y0 >= y1:
            return
        dst = (slice(y0, y1), slice(x0, x1))
        src = (slice(y0 - y, y1 - y), slice(x0 - x, x1 - x))
        # Copies first so blitting a console onto itself reads the old cells.
        self.ch[dst] = source.ch[src].copy()
        self.fg[dst] = source.fg[src].copy()
        self.bg[dst] = source.bg[src].copy()

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def copy(self) -> "Console":
        """Return an independent console holding the same cells."""
        clone = Console(self._width, self._height)
        clone.ch[...] = self.ch
        clone.fg[...] = self.fg
        clone.bg[...] = self.bg
        return clone

    def rows(self) -> List[str]:
        """Glyphs of each row as strings, top to bottom."""
        return ["".join(map(chr, row)) for row in self.ch.tolist()]

    def __repr__(self) -> str:
        return f"Console(width={self._width}, height={self._height})"
