"""
ZGrid — grid/session.py
Session: the root console, its backend and its frame timer.
===========================================================
Version:     0.1
Stack:       Python 3.12 | stdlib logging
Status:      Stable.

Architecture notes
------------------
- No global state. The caller builds a Session around a Backend and
  passes it wherever drawing happens; two sessions never share cells.
- Lifecycle: Session(backend) -> open() -> draw / flush ... -> close().
  Everything except is_open() and close() raises SessionStateError
  outside that window.
- flush() is the only call that reaches the backend's renderer. It reads
  the root console and never writes it.
- Single-threaded. Callers sharing a session across threads must
  serialize access themselves.

Typical loop:

    session = Session(TcodBackend())
    session.open(20, 11, 2, "zgrid")
    while session.is_open():
        session.set(5, 5, None, None, "Hello, 世界!")
        if session.key() == ESCAPE:
            session.close()
            break
        session.flush()
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Tuple

from grid.backend import Backend, MouseData
from grid.blend import Ink
from grid.color import Color, BLACK, WHITE
from grid.config import SessionConfig
from grid.console import BLANK, Console
from grid.errors import BackendError, SessionStateError
from grid.log_setup import get_logger
from grid.timer import FrameTimer, FPS_SAMPLE_INTERVAL

logger = get_logger(__name__)


class Session:
    """
    Owns one Console as the screen and drives the Backend and FrameTimer
    on every flush.
    """

    def __init__(
        self,
        backend: Backend,
        clock: Callable[[], float] = time.perf_counter,
        fps_interval: float = FPS_SAMPLE_INTERVAL,
    ):
        self.backend = backend
        self._clock = clock
        self._fps_interval = fps_interval
        self._console: Optional[Console] = None
        self._timer: Optional[FrameTimer] = None

    @classmethod
    def from_config(cls, config: SessionConfig, backend: Backend, clock: Callable[[], float] = time.perf_counter) -> "Session":
        """Build a session from a SessionConfig and open it."""
        session = cls(backend, clock=clock, fps_interval=config.fps_interval)
        session.open(config.width, config.height, config.zoom, config.title)
        return session

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def open(self, width: int, height: int, zoom: int = 1, title: str = "") -> None:
        """Open the window and create a width x height root console."""
        if self._console is not None:
            raise SessionStateError("Session is already open")
        console = Console(width, height)
        try:
            self.backend.open(width, height, zoom)
            self.backend.name(title)
        except BackendError:
            logger.error("backend failed to open a %dx%d window", width, height)
            # The window may already exist if only name() failed.
            self.backend.close()
            raise
        self._console = console
        self._timer = FrameTimer(self._clock, self._fps_interval)
        logger.info("session opened: %dx%d cells, zoom %d, title %r", width, height, zoom, title)

    def is_open(self) -> bool:
        if self._console is None:
            return False
        return self.backend.is_open()

    def close(self) -> None:
        """Close the window. Further drawing raises SessionStateError."""
        if self._console is None:
            return
        self.backend.close()
        self._console = None
        self._timer = None
        logger.info("session closed")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _require_console(self) -> Console:
        if self._console is None:
            raise SessionStateError("Session is not open; call open() first")
        return self._console

    def _require_timer(self) -> FrameTimer:
        if self._timer is None:
            raise SessionStateError("Session is not open; call open() first")
        return self._timer

    @property
    def console(self) -> Console:
        """The root console."""
        return self._require_console()

    # ------------------------------------------------------------
    # Backend pass-throughs
    # ------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self._require_console()
        self.backend.name(title)
        logger.debug("title set to %r", title)

    def flush(self) -> None:
        """Render the root console, then advance the frame timer."""
        console = self._require_console()
        self.backend.render(console)
        self._require_timer().update()

    def mouse(self) -> MouseData:
        self._require_console()
        return self.backend.mouse()

    def key(self) -> int:
        """Last key typed this frame."""
        self._require_console()
        return self.backend.key()

    # ------------------------------------------------------------
    # Timer pass-throughs
    # ------------------------------------------------------------

    def dt(self) -> float:
        return self._require_timer().dt

    def fps(self) -> int:
        return self._require_timer().fps

    # ------------------------------------------------------------
    # Root console pass-throughs
    # ------------------------------------------------------------

    def width(self) -> int:
        return self._require_console().width

    def height(self) -> int:
        return self._require_console().height

    def get(self, x: int, y: int) -> Tuple[Color, Color, str]:
        return self._require_console().get(x, y)

    def set(self, x: int, y: int, fg: Ink, bg: Ink, text: str) -> None:
        self._require_console().set(x, y, fg, bg, text)

    def set_r(self, x: int, y: int, w: int, h: int, fg: Ink, bg: Ink, text: str) -> None:
        self._require_console().set_r(x, y, w, h, fg, bg, text)

    def fill(self, x: int, y: int, w: int, h: int, fg: Ink, bg: Ink, ch: str) -> None:
        self._require_console().fill(x, y, w, h, fg, bg, ch)

    def clear(self, fg: Ink = WHITE, bg: Ink = BLACK, ch: str = BLANK) -> None:
        self._require_console().clear(fg, bg, ch)

    def blit(self, source: Console, x: int, y: int) -> None:
        self._require_console().blit(source, x, y)
