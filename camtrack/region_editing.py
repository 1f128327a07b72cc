"""Drawing new regions point by point and editing a list of regions."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence, Sequence

from camtrack.region import Point, Region

Size = tuple[int, int]

MIN_REGION_POINTS = 3


class InvalidRegionError(ValueError):
    """Raised when a drawn region cannot be completed."""


def _is_empty(size: Size | None) -> bool:
    return size is None or size[0] <= 0 or size[1] <= 0


class RegionDrawing:
    """Collects polygon points clicked on a scaled view of a camera image.

    Points arrive in view coordinates and are stored in image coordinates.
    A region needs at least three points before it can be finished.
    """

    def __init__(
        self,
        image_size: Size | None = None,
        view_size: Size | None = None,
        on_completed: Callable[[list[Point]], None] | None = None,
    ) -> None:
        self.image_size = image_size
        self.view_size = view_size
        self.on_completed = on_completed
        self.drawing = False
        self.points: list[Point] = []

    @property
    def instructions(self) -> str:
        return (
            "Left-click: Add point | Right-click: Finish region | "
            f"Points: {len(self.points)}"
        )

    def start(self) -> None:
        """Begin collecting points for a new region."""
        self.drawing = True

    def cancel(self) -> None:
        """Stop drawing and drop the points collected so far."""
        self.drawing = False
        self.points.clear()

    def add_point(self, x: int, y: int) -> Point | None:
        """Add a view-space point; returns it in image space, or None if idle."""
        if not self.drawing:
            return None
        point = self.to_image_coords(x, y)
        self.points.append(point)
        return point

    def finish(self) -> list[Point]:
        """Complete the region and return its points in image coordinates."""
        if not self.drawing:
            raise InvalidRegionError("no region is being drawn")
        if len(self.points) < MIN_REGION_POINTS:
            raise InvalidRegionError(
                "Please add at least 3 points to create a region."
            )
        points = list(self.points)
        self.points.clear()
        self.drawing = False
        if self.on_completed is not None:
            self.on_completed(points)
        return points

    def clear_points(self) -> None:
        self.points.clear()

    def to_image_coords(self, x: int, y: int) -> Point:
        """Map a view-space point to image space, truncating towards zero."""
        if _is_empty(self.image_size) or _is_empty(self.view_size):
            return (int(x), int(y))
        image_w, image_h = self.image_size  # type: ignore[misc]
        view_w, view_h = self.view_size  # type: ignore[misc]
        return (int(x * (image_w / view_w)), int(y * (image_h / view_h)))


def describe_regions(regions: Sequence[Region]) -> list[str]:
    """One numbered line per region: its name and how many points it has."""
    return [
        f"{number}. {region.name} ({len(region.points)} points)"
        for number, region in enumerate(regions, start=1)
    ]


def _check_index(regions: Sequence[Region], index: int) -> None:
    if not 0 <= index < len(regions):
        raise IndexError(f"no region at index {index}")


def rename_region(regions: Sequence[Region], index: int, name: str) -> Region:
    """Give the region at ``index`` a new, non-empty name and return it."""
    _check_index(regions, index)
    if not name:
        raise ValueError("region name must not be empty")
    region = regions[index]
    region.name = name
    return region


def delete_region(regions: MutableSequence[Region], index: int) -> Region:
    """Remove the region at ``index`` and return it."""
    _check_index(regions, index)
    return regions.pop(index)