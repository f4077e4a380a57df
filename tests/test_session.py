"""
ZGrid — tests/test_session.py
Session lifecycle and pass-throughs, driven by the headless backend.
"""

import pytest

from grid.backend import Backend, ESCAPE, NO_KEY
from grid.color import BLACK, BLUE, RED, WHITE
from grid.config import SessionConfig
from grid.console import Console
from grid.errors import BackendError, SessionStateError
from grid.session import Session
from ui.headless import HeadlessBackend

class FakeClock:
    def __init__(self, t: float = 0.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

def _open_session(width=20, height=11, clock=None):
    backend = HeadlessBackend()
    session = Session(backend, clock=clock or FakeClock())
    session.open(width, height, 2, "zgrid")
    return session, backend

def test_headless_backend_satisfies_protocol():
    assert isinstance(HeadlessBackend(), Backend)

def test_calls_before_open_fail_fast():
    session = Session(HeadlessBackend())
    assert not session.is_open()
    with pytest.raises(SessionStateError):
        session.set(0, 0, None, None, "x")
    with pytest.raises(SessionStateError):
        session.flush()
    with pytest.raises(SessionStateError):
        session.dt()
    with pytest.raises(SessionStateError):
        session.key()

def test_open_configures_backend_and_console():
    session, backend = _open_session()
    assert session.is_open()
    assert backend.size == (20, 11)
    assert backend.zoom == 2
    assert backend.title == "zgrid"
    assert session.width() == 20
    assert session.height() == 11
    assert session.console.get(0, 0) == (WHITE, BLACK, " ")

def test_open_twice_is_an_error():
    session, _ = _open_session()
    with pytest.raises(SessionStateError):
        session.open(5, 5)

def test_backend_failure_leaves_session_closed():
    session = Session(HeadlessBackend(fail_on_open=True))
    with pytest.raises(BackendError):
        session.open(10, 10)
    assert not session.is_open()
    with pytest.raises(SessionStateError):
        session.get(0, 0)

class TitleFailingBackend(HeadlessBackend):
    def __init__(self):
        super().__init__()
        self.opens = 0
        self.closes = 0

    def open(self, width, height, zoom):
        super().open(width, height, zoom)
        self.opens += 1

    def close(self):
        super().close()
        self.closes += 1

    def name(self, title):
        raise BackendError("cannot set title")

def test_title_failure_releases_the_window():
    backend = TitleFailingBackend()
    session = Session(backend)
    with pytest.raises(BackendError):
        session.open(4, 4, 1, "x")
    assert not backend.is_open()
    assert backend.opens == 1
    assert backend.closes == 1
    assert not session.is_open()

def test_flush_renders_root_console_without_mutating_it():
    session, backend = _open_session(width=12, height=2)
    session.set(5, 0, None, None, "Hello, 世界!")
    session.flush()
    assert len(backend.frames) == 1
    assert backend.last_frame.rows() == ["     Hello, ", "世界!         "]
    assert session.console.rows() == backend.last_frame.rows()

    session.set(0, 0, None, None, "*")
    assert backend.last_frame.get(0, 0)[2] == " "

def test_flush_advances_timer():
    clock = FakeClock(0.0)
    session, _ = _open_session(clock=clock)
    clock.t = 0.016
    session.flush()
    clock.t = 0.033
    session.flush()
    assert session.dt() == pytest.approx(0.017)
    assert session.fps() == 0

def test_key_is_single_slot_per_frame():
    session, backend = _open_session()
    backend.push_key(ESCAPE)
    assert session.key() == NO_KEY
    session.flush()
    assert session.key() == ESCAPE
    session.flush()
    assert session.key() == NO_KEY

def test_mouse_snapshot():
    session, backend = _open_session()
    backend.move_mouse(3, 4)
    backend.press_button("left")
    session.flush()
    mouse = session.mouse()
    assert (mouse.x, mouse.y) == (3, 4)
    assert (mouse.dx, mouse.dy) == (3, 4)
    assert mouse.left.pressed and mouse.left.down
    assert not mouse.right.down

    session.flush()
    mouse = session.mouse()
    assert (mouse.dx, mouse.dy) == (0, 0)
    assert mouse.left.down and not mouse.left.pressed

    backend.release_button("left")
    session.flush()
    assert session.mouse().left.released
    assert not session.mouse().left.down

def test_close_invalidates_session():
    session, backend = _open_session()
    session.close()
    assert not session.is_open()
    assert not backend.is_open()
    with pytest.raises(SessionStateError):
        session.flush()
    with pytest.raises(SessionStateError):
        session.fill(0, 0, 1, 1, None, None, "x")
    # Closing again is harmless
    session.close()

def test_window_closed_by_user():
    session, backend = _open_session()
    backend.request_close()
    assert not session.is_open()

def test_set_title_forwards_to_backend():
    session, backend = _open_session()
    session.set_title("Level 2")
    assert backend.title == "Level 2"

def test_drawing_pass_throughs():
    session, _ = _open_session(width=6, height=4)
    session.fill(0, 0, 6, 4, RED, BLUE, ".")
    session.set_r(1, 1, 2, 2, None, None, "abcd")
    assert session.get(2, 2) == (RED, BLUE, "d")

    panel = Console(2, 1)
    panel.set(0, 0, None, None, "[]")
    session.blit(panel, 4, 3)
    assert session.get(4, 3) == (WHITE, BLACK, "[")

    session.clear()
    assert session.console.rows() == ["      "] * 4

def test_context_manager_closes():
    backend = HeadlessBackend()
    with Session(backend) as session:
        session.open(4, 4)
        assert session.is_open()
    assert not session.is_open()
    assert not backend.is_open()

def test_from_config_opens_session():
    config = SessionConfig(width=30, height=10, zoom=3, title="From TOML", fps_interval=0.5)
    backend = HeadlessBackend()
    session = Session.from_config(config, backend)
    assert session.is_open()
    assert backend.size == (30, 10)
    assert backend.zoom == 3
    assert backend.title == "From TOML"

def test_headless_history_stays_bounded():
    backend = HeadlessBackend(history=3)
    session = Session(backend, clock=FakeClock())
    session.open(80, 25)
    for i in range(600):
        session.set(0, 0, None, None, str(i % 10))
        session.flush()
    assert len(backend.frames) == 3
    assert backend.last_frame.get(0, 0)[2] == "9"
    assert [f.get(0, 0)[2] for f in backend.frames] == ["7", "8", "9"]

def test_headless_keeps_only_last_frame_by_default():
    session, backend = _open_session()
    for _ in range(5):
        session.flush()
    assert len(backend.frames) == 1
    with pytest.raises(ValueError):
        HeadlessBackend(history=0)
