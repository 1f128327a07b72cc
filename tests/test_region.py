import pytest

from camtrack.geometry import Rect
from camtrack.region import Region, random_color

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
L_SHAPE = [(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)]


def test_default_region_name():
    assert Region().name == "Unnamed Region"


def test_random_color_in_range():
    for _ in range(50):
        color = random_color()
        assert len(color) == 3
        assert all(50 <= channel <= 255 for channel in color)


def test_contains_point_inside_and_outside():
    region = Region("square", SQUARE)
    assert region.contains_point(5, 5) is True
    assert region.contains_point(15, 5) is False
    assert region.contains_point(-1, -1) is False


def test_contains_point_on_edge_and_vertex():
    region = Region("square", SQUARE)
    assert region.contains_point(10, 5) is True
    assert region.contains_point(0, 0) is True


def test_contains_point_needs_three_points():
    region = Region("line", [(0, 0), (10, 10)])
    assert region.contains_point(5, 5) is False


def test_concave_polygon():
    region = Region("L", L_SHAPE)
    assert region.contains_point(2, 7) is True
    assert region.contains_point(7, 7) is False
    assert region.contains_point(7, 2) is True


def test_contains_rect_uses_center():
    region = Region("square", SQUARE)
    assert region.contains_rect(Rect(2, 2, 4, 4)) is True
    assert region.contains_rect(Rect(8, 8, 20, 20)) is False


def test_bounding_box():
    assert Region("square", SQUARE).bounding_box() == Rect(0, 0, 10, 10)
    assert Region("empty", []).bounding_box() == Rect(0, 0, 0, 0)


def test_json_round_trip():
    region = Region("door", L_SHAPE, (60, 70, 80))
    data = region.to_json()
    assert data["name"] == "door"
    assert data["points"][0] == {"x": 0, "y": 0}
    assert data["color"] == {"b": 60, "g": 70, "r": 80}
    restored = Region.from_json(data)
    assert restored == region


def test_from_json_missing_fields_uses_defaults():
    region = Region.from_json({})
    assert region.name == "Unnamed Region"
    assert region.points == []
    assert all(50 <= channel <= 255 for channel in region.color)


def test_from_json_bad_point_raises():
    with pytest.raises(KeyError):
        Region.from_json({"points": [{"x": 1}]})