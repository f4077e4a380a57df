"""
ZGrid — run.py
Demo entry point: opens a tcod window and greets the world until ESC.
"""

import sys
from pathlib import Path

# Ensure we can import zgrid packages
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

from grid.backend import ESCAPE
from grid.blend import add
from grid.color import DARK_GREY, YELLOW
from grid.config import load_config
from grid.log_setup import configure_logging
from grid.session import Session
from ui.renderer import TcodBackend

def main():
    config = load_config()
    configure_logging(config.log_level)
    session = Session.from_config(config, TcodBackend.from_config(config))

    while session.is_open():
        session.clear()
        session.set(5, 5, YELLOW, None, "Hello, 世界!")
        session.fill(0, 0, session.width(), 1, None, add(DARK_GREY), " ")
        session.set(0, 0, None, None, f"fps {session.fps()}")
        if session.key() == ESCAPE:
            session.close()
            break
        session.flush()
    session.close()

if __name__ == "__main__":
    main()
