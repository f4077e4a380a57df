"""
ZGrid — grid/backend.py
Backend capability contract: window, input and pixel rendering.
===============================================================
Version:     0.1
Stack:       Python 3.12 | typing.Protocol
Status:      Stable.

The core never imports a windowing library. A Backend is injected into
Session at construction; ui/renderer.py (tcod) and ui/headless.py are the
shipped implementations.

Key codes are SDL keycodes, which is also what tcod.event.KeySym carries,
so a tcod backend can report int(event.sym) unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from grid.console import Console


# ============================================================
# KEY CODES (SDL keycodes)
# ============================================================

NO_KEY: int = 0
BACKSPACE: int = 8
TAB: int = 9
ENTER: int = 13
ESCAPE: int = 27
SPACE: int = 32
RIGHT: int = 0x4000004F
LEFT: int = 0x40000050
DOWN: int = 0x40000051
UP: int = 0x40000052


# ============================================================
# MOUSE SNAPSHOT
# ============================================================

@dataclass(frozen=True)
class ButtonState:
    down: bool = False       # held at the end of the frame
    pressed: bool = False    # went down during the frame
    released: bool = False   # went up during the frame


@dataclass(frozen=True)
class MouseData:
    """Pointer state as of the last flush."""
    x: int = 0               # cell column
    y: int = 0               # cell row
    px: int = 0              # pixel position inside the window
    py: int = 0
    dx: int = 0              # cell movement since the previous frame
    dy: int = 0
    left: ButtonState = field(default_factory=ButtonState)
    middle: ButtonState = field(default_factory=ButtonState)
    right: ButtonState = field(default_factory=ButtonState)


# ============================================================
# BACKEND PROTOCOL
# ============================================================

@runtime_checkable
class Backend(Protocol):
    def open(self, width: int, height: int, zoom: int) -> None:
        """Create a window fitting width x height cells at the given pixel zoom."""
        ...

    def close(self) -> None:
        ...

    def name(self, title: str) -> None:
        """Set the window title."""
        ...

    def is_open(self) -> bool:
        ...

    def render(self, console: "Console") -> None:
        """Draw the console's cells to the window. Must not mutate the console."""
        ...

    def mouse(self) -> MouseData:
        ...

    def key(self) -> int:
        """Most recent key code seen this frame, NO_KEY if none."""
        ...
