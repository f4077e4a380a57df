import pytest
from pathlib import Path
from pydantic import ValidationError

from grid.config import SessionConfig, load_config

def test_default_session_file():
    config = load_config()
    assert config.width == 20
    assert config.height == 11
    assert config.zoom == 2
    assert config.title == "zgrid"

def test_top_level_keys(tmp_path):
    path = tmp_path / "zgrid.toml"
    path.write_text('width = 40\nheight = 20\ntitle = "Cave"\n', encoding="utf-8")
    config = load_config(path)
    assert (config.width, config.height, config.title) == (40, 20, "Cave")
    assert config.zoom == 1
    assert config.tileset is None

def test_session_table_and_relative_tileset(tmp_path):
    path = tmp_path / "zgrid.toml"
    path.write_text('[session]\nwidth = 10\ntileset = "fonts/terminal.png"\n', encoding="utf-8")
    config = load_config(path)
    assert config.width == 10
    assert config.tileset == tmp_path / "fonts" / "terminal.png"

def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config(Path("/nonexistent/zgrid.toml"))

def test_invalid_values_rejected(tmp_path):
    path = tmp_path / "zgrid.toml"
    path.write_text("zoom = 0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)
    with pytest.raises(ValidationError):
        SessionConfig(width=-1)
    with pytest.raises(ValidationError):
        SessionConfig(fps_interval=0)
    with pytest.raises(ValidationError):
        SessionConfig(colour="red")

def test_config_is_frozen():
    config = SessionConfig()
    with pytest.raises(ValidationError):
        config.width = 5
