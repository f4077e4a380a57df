"""
ZGrid — ui/renderer.py
TCOD Backend: window, input polling and presentation of a grid Console.
=======================================================================
Version:     0.1
Stack:       Python 3.12 | tcod
Status:      Stable.

Each render() copies the Console arrays into a tcod console, presents
it, then drains the SDL event queue so key()/mouse() describe the frame
that was just shown.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Set, Tuple

import tcod

from grid.backend import ButtonState, MouseData, NO_KEY
from grid.config import SessionConfig
from grid.console import Console
from grid.errors import BackendError
from grid.log_setup import get_logger

logger = get_logger(__name__)

_BUTTONS: Dict[int, str] = {1: "left", 2: "middle", 3: "right"}  # SDL button indices


def window_size(tileset: Optional[tcod.tileset.Tileset], columns: int, rows: int, zoom: int) -> Optional[Tuple[int, int]]:
    """Pixel size of a window showing columns x rows tiles, or None when tcod picks the tileset."""
    if tileset is None:
        return None
    return (columns * tileset.tile_width * zoom, rows * tileset.tile_height * zoom)


class TcodBackend:
    """
    Backend that renders through a tcod context.
    """
    def __init__(
        self,
        tileset: Optional[Path] = None,
        vsync: bool = True,
    ):
        self.tileset_path = tileset
        self.vsync = vsync
        self.title = ""
        self.root_console: Optional[tcod.console.Console] = None
        self.context: Optional[tcod.context.Context] = None
        self._open = False
        self._key = NO_KEY
        self._mouse = MouseData()
        self._held: Set[str] = set()

    @classmethod
    def from_config(cls, config: SessionConfig) -> "TcodBackend":
        return cls(
            tileset=config.tileset,
            vsync=config.vsync,
        )

    # ------------------------------------------------------------
    # Window lifecycle
    # ------------------------------------------------------------

    def _load_tileset(self) -> Optional[tcod.tileset.Tileset]:
        if self.tileset_path is None:
            return None
        logger.info("loading tileset %s", self.tileset_path)
        return tcod.tileset.load_tilesheet(self.tileset_path, 16, 16, tcod.tileset.CHARMAP_CP437)

    def open(self, width: int, height: int, zoom: int) -> None:
        try:
            tileset = self._load_tileset()
            size = window_size(tileset, width, height, zoom)
            self.context = tcod.context.new(
                columns=width,
                rows=height,
                width=size[0] if size else None,
                height=size[1] if size else None,
                tileset=tileset,
                title=self.title or None,
                vsync=self.vsync,
            )
        except (RuntimeError, OSError) as exc:
            raise BackendError(f"Could not open a {width}x{height} tcod window: {exc}") from exc
        if size is None:
            self._zoom_window(zoom)
        self.root_console = tcod.console.Console(width, height, order="C")
        self._open = True
        logger.info("tcod window opened (%dx%d cells, zoom %d)", width, height, zoom)

    def _zoom_window(self, zoom: int) -> None:
        # tcod sized the window from its default tileset; scale that.
        window = self.context.sdl_window if self.context is not None else None
        if window is None or zoom == 1:
            return
        w, h = window.size
        window.size = (w * zoom, h * zoom)

    def close(self) -> None:
        if self.context is not None:
            self.context.close()
            self.context = None
        self._open = False
        logger.info("tcod window closed")

    def name(self, title: str) -> None:
        self.title = title
        if self.context is not None and self.context.sdl_window is not None:
            self.context.sdl_window.title = title

    def is_open(self) -> bool:
        return self._open

    # ------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------

    def draw(self, console: Console) -> tcod.console.Console:
        """Copy the cells of console into the tcod root console."""
        if self.root_console is None or self.root_console.width != console.width or self.root_console.height != console.height:
            self.root_console = tcod.console.Console(console.width, console.height, order="C")
        self.root_console.ch[...] = console.ch
        self.root_console.fg[...] = console.fg
        self.root_console.bg[...] = console.bg
        return self.root_console

    def render(self, console: Console) -> None:
        """Present the console to the window and poll input for the next frame."""
        if self.context is None:
            raise BackendError("render() called without an open tcod window")
        self.context.present(self.draw(console), keep_aspect=True, integer_scaling=True)
        self._poll()

    # ------------------------------------------------------------
    # Input
    # ------------------------------------------------------------

    def _poll(self) -> None:
        key = NO_KEY
        pressed: Set[str] = set()
        released: Set[str] = set()
        prev = self._mouse
        x, y, px, py = prev.x, prev.y, prev.px, prev.py

        for event in tcod.event.get():
            if isinstance(event, tcod.event.Quit):
                self._open = False
            elif isinstance(event, tcod.event.KeyDown):
                key = int(event.sym)
            elif isinstance(event, (tcod.event.MouseMotion, tcod.event.MouseButtonDown, tcod.event.MouseButtonUp)):
                px, py = int(event.position[0]), int(event.position[1])
                tile_event = self.context.convert_event(event)
                x, y = int(tile_event.position[0]), int(tile_event.position[1])
                button = _BUTTONS.get(int(getattr(event, "button", 0)))
                if button is None:
                    continue
                if isinstance(event, tcod.event.MouseButtonDown):
                    pressed.add(button)
                    self._held.add(button)
                elif isinstance(event, tcod.event.MouseButtonUp):
                    released.add(button)
                    self._held.discard(button)

        def state(button: str) -> ButtonState:
            return ButtonState(down=button in self._held, pressed=button in pressed, released=button in released)

        self._key = key
        self._mouse = MouseData(
            x=x, y=y, px=px, py=py, dx=x - prev.x, dy=y - prev.y,
            left=state("left"), middle=state("middle"), right=state("right"),
        )

    def mouse(self) -> MouseData:
        return self._mouse

    def key(self) -> int:
        return self._key
