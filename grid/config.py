"""
ZGrid — grid/config.py
Session configuration powered by Pydantic, loaded from TOML.
============================================================
Version:     0.1
Stack:       Python 3.12 | Pydantic v2 | tomllib
Status:      Stable.
"""

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ================================================================================
# SCHEMA
# ================================================================================

class SessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    width: int = Field(default=80, ge=0)          # cells
    height: int = Field(default=25, ge=0)         # cells
    zoom: int = Field(default=1, ge=1)            # integer pixel scale
    title: str = "ZGrid"
    tileset: Optional[Path] = None                # CP437 tilesheet, 16x16 glyphs; None uses tcod's default
    vsync: bool = True
    fps_interval: float = Field(default=1.0, gt=0)
    log_level: str = "INFO"

# ================================================================================
# LOADER
# ================================================================================

DATA_DIR = Path(__file__).parent.parent / "data"

def load_config(path: Optional[Path] = None) -> SessionConfig:
    """
    Loads a SessionConfig from TOML. Keys may sit at the top level or
    under a [session] table. Relative tileset paths resolve against the
    file's directory.
    """
    if path is None:
        path = DATA_DIR / "session.toml"
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Session config not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    data = data.get("session", data)
    tileset = data.get("tileset")
    if tileset is not None and not Path(tileset).is_absolute():
        data = {**data, "tileset": path.parent / tileset}

    return SessionConfig(**data)
