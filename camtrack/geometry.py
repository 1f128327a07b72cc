"""Boxes, detections and the helpers that tie detections to tracks."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping, Sequence
from dataclasses import dataclass, field

Color = tuple[int, int, int]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned integer rectangle given by its top-left corner and size."""

    x: int
    y: int
    width: int
    height: int

    def center(self) -> tuple[int, int]:
        """Return the integer centre point, rounding towards zero."""
        return (self.x + int(self.width / 2), self.y + int(self.height / 2))

    def area(self) -> int:
        return self.width * self.height


@dataclass
class Detection:
    """One object found in a frame."""

    class_id: int = 0
    class_name: str = ""
    confidence: float = 0.0
    color: Color = (0, 0, 0)
    box: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))


def calc_iou(a: Rect, b: Rect) -> float:
    """Intersection over union of two rectangles; 0.0 when the union is empty."""
    x1 = max(a.x, b.x)
    y1 = max(a.y, b.y)
    x2 = min(a.x + a.width, b.x + b.width)
    y2 = min(a.y + a.height, b.y + b.height)

    intersection = max(0, x2 - x1) * max(0, y2 - y1)
    union = a.area() + b.area() - intersection
    if union <= 0:
        return 0.0
    return intersection / union


def color_for_track_id(track_id: int) -> Color:
    """A stable colour for a track, as a (blue, green, red) triple."""
    red = (track_id * 123) % 256
    green = (track_id * 456) % 256
    blue = (track_id * 789) % 256
    return (blue, green, red)


def best_matching_class(
    box: Rect, detections: Iterable[Detection], threshold: float = 0.3
) -> int | None:
    """Class id of the detection overlapping ``box`` best, above ``threshold``."""
    best_iou = 0.0
    best_class: int | None = None
    for detection in detections:
        iou = calc_iou(box, detection.box)
        if iou > best_iou and iou > threshold:
            best_iou = iou
            best_class = detection.class_id
    return best_class


def update_track_classes(
    tracks: Iterable[tuple[int, Rect]],
    detections: Sequence[Detection],
    track_classes: MutableMapping[int, int],
) -> MutableMapping[int, int]:
    """Record, for each (track id, box) pair, the class of its best detection.

    Tracks without a good enough match keep whatever class they had before.
    The mapping is updated in place and returned.
    """
    for track_id, box in tracks:
        class_id = best_matching_class(box, detections)
        if class_id is not None:
            track_classes[track_id] = class_id
    return track_classes