"""Named polygonal regions of a camera image."""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from camtrack.geometry import Color, Rect

Point = tuple[int, int]

_COLOR_MIN = 50
_COLOR_MAX = 255


def random_color() -> Color:
    """A random (blue, green, red) colour bright enough to draw with."""
    return (
        random.randint(_COLOR_MIN, _COLOR_MAX),
        random.randint(_COLOR_MIN, _COLOR_MAX),
        random.randint(_COLOR_MIN, _COLOR_MAX),
    )


def _on_segment(px: float, py: float, a: Point, b: Point) -> bool:
    (x1, y1), (x2, y2) = a, b
    cross = (x2 - x1) * (py - y1) - (y2 - y1) * (px - x1)
    if cross != 0:
        return False
    return min(x1, x2) <= px <= max(x1, x2) and min(y1, y2) <= py <= max(y1, y2)


@dataclass
class Region:
    """A named polygon with a display colour."""

    name: str = "Unnamed Region"
    points: list[Point] = field(default_factory=list)
    color: Color = field(default_factory=random_color)

    def __post_init__(self) -> None:
        self.points = [(int(x), int(y)) for x, y in self.points]
        self.color = tuple(int(c) for c in self.color)  # type: ignore[assignment]

    def contains_point(self, x: float, y: float) -> bool:
        """True if the point lies inside the polygon or on its border."""
        if len(self.points) < 3:
            return False

        edges = list(zip(self.points, self.points[1:] + self.points[:1]))
        if any(_on_segment(x, y, a, b) for a, b in edges):
            return True

        inside = False
        for (x1, y1), (x2, y2) in edges:
            if (y1 > y) != (y2 > y):
                crossing = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
                if x < crossing:
                    inside = not inside
        return inside

    def contains_rect(self, rect: Rect) -> bool:
        """True if the centre of ``rect`` is inside the region."""
        return self.contains_point(*rect.center())

    def bounding_box(self) -> Rect:
        if not self.points:
            return Rect(0, 0, 0, 0)
        xs = [x for x, _ in self.points]
        ys = [y for _, y in self.points]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def to_json(self) -> dict[str, Any]:
        blue, green, red = self.color
        return {
            "name": self.name,
            "points": [{"x": x, "y": y} for x, y in self.points],
            "color": {"b": int(blue), "g": int(green), "r": int(red)},
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Region:
        """Build a region from its JSON form; missing keys keep their defaults."""
        region = cls()
        if "name" in data:
            name = data["name"]
            if not isinstance(name, str):
                raise TypeError("region name must be a string")
            region.name = name
        if "points" in data:
            region.points = [_json_point(point) for point in data["points"]]
        if "color" in data:
            color = data["color"]
            region.color = (int(color["b"]), int(color["g"]), int(color["r"]))
        return region


def _json_point(point: Mapping[str, Any]) -> Point:
    return (int(point["x"]), int(point["y"]))


def regions_from_json(items: Iterable[Mapping[str, Any]]) -> list[Region]:
    return [Region.from_json(item) for item in items]