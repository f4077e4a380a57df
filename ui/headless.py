"""
ZGrid — ui/headless.py
Headless backend: no window, scripted input, recorded frames.
Used by the test suite and for running a session in CI.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Set, Tuple

from grid.backend import ButtonState, MouseData, NO_KEY
from grid.console import Console
from grid.errors import BackendError


class HeadlessBackend:
    def __init__(self, fail_on_open: bool = False, history: int = 1):
        if history < 1:
            raise ValueError(f"history must keep at least one frame, got {history}")
        self.fail_on_open = fail_on_open
        self.title = ""
        self.size: Optional[Tuple[int, int]] = None
        self.zoom = 1
        self.frames: Deque[Console] = deque(maxlen=history)  # most recent renders only
        self._open = False
        self._key = NO_KEY
        self._keys: Deque[int] = deque()
        self._mouse = MouseData()
        self._pending_pos: Optional[Tuple[int, int]] = None
        self._held: Set[str] = set()
        self._pressed: Set[str] = set()
        self._released: Set[str] = set()

    # Backend protocol

    def open(self, width: int, height: int, zoom: int) -> None:
        if self.fail_on_open:
            raise BackendError("headless backend configured to fail on open")
        self.size = (width, height)
        self.zoom = zoom
        self._open = True

    def close(self) -> None:
        self._open = False

    def name(self, title: str) -> None:
        self.title = title

    def is_open(self) -> bool:
        return self._open

    def render(self, console: Console) -> None:
        """Record a copy of the console and advance scripted input by one frame."""
        self.frames.append(console.copy())
        self._key = self._keys.popleft() if self._keys else NO_KEY

        prev = self._mouse
        x, y = self._pending_pos if self._pending_pos is not None else (prev.x, prev.y)
        zoom = max(self.zoom, 1)

        def state(button: str) -> ButtonState:
            return ButtonState(button in self._held, button in self._pressed, button in self._released)

        self._mouse = MouseData(
            x=x, y=y, px=x * zoom, py=y * zoom, dx=x - prev.x, dy=y - prev.y,
            left=state("left"), middle=state("middle"), right=state("right"),
        )
        self._pending_pos = None
        self._pressed.clear()
        self._released.clear()

    def mouse(self) -> MouseData:
        return self._mouse

    def key(self) -> int:
        return self._key

    # Scripting helpers

    def push_key(self, *codes: int) -> None:
        """Queue key codes; each render() delivers the next one."""
        self._keys.extend(codes)

    def move_mouse(self, x: int, y: int) -> None:
        self._pending_pos = (x, y)

    def press_button(self, button: str = "left") -> None:
        self._held.add(button)
        self._pressed.add(button)

    def release_button(self, button: str = "left") -> None:
        self._held.discard(button)
        self._released.add(button)

    def request_close(self) -> None:
        """Simulate the user closing the window."""
        self._open = False

    @property
    def last_frame(self) -> Optional[Console]:
        return self.frames[-1] if self.frames else None
