import pytest

from grid.color import Color, as_color, RED

def test_color_is_a_value_tuple():
    assert Color(1, 2, 3) == (1, 2, 3)
    assert Color(1, 2, 3).g == 2
    assert hash(Color(1, 2, 3)) == hash((1, 2, 3))

def test_clamped():
    assert Color.clamped(300, -5, 12.7) == Color(255, 0, 12)

def test_hex_round_trip():
    assert Color.from_hex("#ff8000") == Color(255, 128, 0)
    assert Color.from_hex("00ff00") == Color(0, 255, 0)
    assert Color.from_hex("#f00") == RED
    assert Color(255, 128, 0).to_hex() == "#ff8000"

def test_bad_hex():
    with pytest.raises(ValueError):
        Color.from_hex("#12345")
    with pytest.raises(ValueError):
        Color.from_hex("#zzzzzz")

def test_as_color_validates_range():
    assert as_color((1, 2, 3)) == Color(1, 2, 3)
    with pytest.raises(ValueError):
        as_color((256, 0, 0))
    with pytest.raises(ValueError):
        as_color((1, 2))
