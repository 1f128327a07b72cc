"""Turning raw YOLO network output into detections."""

from __future__ import annotations

import random
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from camtrack.geometry import Detection, Rect


def load_class_names(path: str | Path) -> list[str]:
    """Read class names, one per line; an unreadable file gives no names."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return []
    names = (line.rstrip(" \n\r\t") for line in text.splitlines())
    return [name for name in names if name]


def default_class_names(count: int) -> list[str]:
    return [f"class_{i}" for i in range(count)]


def letterbox_params(
    width: int, height: int, input_width: int, input_height: int
) -> tuple[float, int, int]:
    """Scale and padding that fit a frame into the network input, keeping aspect."""
    if width <= 0 or height <= 0:
        raise ValueError("frame size must be positive")
    scale = np.float32(
        min(np.float32(input_width) / np.float32(width),
            np.float32(input_height) / np.float32(height))
    )
    resized_w = int(np.float32(width) * scale)
    resized_h = int(np.float32(height) * scale)
    pad_x = (input_width - resized_w) // 2
    pad_y = (input_height - resized_h) // 2
    return float(scale), pad_x, pad_y


def _overlap(a: Rect, b: Rect) -> float:
    area_sum = a.area() + b.area()
    if area_sum <= 0:
        return 1.0
    iw = min(a.x + a.width, b.x + b.width) - max(a.x, b.x)
    ih = min(a.y + a.height, b.y + b.height) - max(a.y, b.y)
    intersection = iw * ih if iw > 0 and ih > 0 else 0
    return intersection / (area_sum - intersection)


def nms_boxes(
    boxes: Sequence[Rect],
    scores: Sequence[float],
    score_threshold: float,
    nms_threshold: float,
) -> list[int]:
    """Greedy non-maximum suppression; indices of kept boxes, best score first."""
    if len(boxes) != len(scores):
        raise ValueError("boxes and scores differ in length")
    candidates = sorted(
        (i for i, score in enumerate(scores) if score > score_threshold),
        key=lambda i: scores[i],
        reverse=True,
    )
    kept: list[int] = []
    for index in candidates:
        if all(_overlap(boxes[index], boxes[other]) <= nms_threshold for other in kept):
            kept.append(index)
    return kept


class Postprocessor:
    """Decodes YOLOv5 and YOLOv8 output tensors into detections."""

    def __init__(
        self,
        classes: Sequence[str] = (),
        input_size: tuple[int, int] = (640, 640),
        confidence_threshold: float = 0.25,
        score_threshold: float = 0.45,
        nms_threshold: float = 0.50,
        letterbox: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self.classes = list(classes)
        self.input_width, self.input_height = input_size
        self.confidence_threshold = confidence_threshold
        self.score_threshold = score_threshold
        self.nms_threshold = nms_threshold
        self.letterbox = letterbox
        self._rng = rng or random.Random()
        self._classes_checked = False

    @property
    def class_count(self) -> int:
        return len(self.classes)

    def class_name(self, class_id: int) -> str:
        if 0 <= class_id < len(self.classes):
            return self.classes[class_id]
        return f"class_{class_id}"

    def _geometry(self, frame_width: int, frame_height: int) -> tuple[float, int, int]:
        if self.letterbox and self.input_width == self.input_height:
            return letterbox_params(
                frame_width, frame_height, self.input_width, self.input_height
            )
        return 1.0, 0, 0

    def _check_classes(self, num_classes: int) -> None:
        if self._classes_checked:
            return
        if len(self.classes) != num_classes:
            self.classes = default_class_names(num_classes)
        self._classes_checked = True

    def process(self, output, frame_width: int, frame_height: int) -> list[Detection]:
        """Decode one network output for a frame of the given size."""
        data = np.asarray(output, dtype=np.float32)
        if data.ndim == 3:
            data = data[0]
        if data.ndim != 2:
            raise ValueError("output must have shape (rows, dims) or (1, rows, dims)")

        rows, dims = data.shape
        yolov8 = dims > rows
        if yolov8:
            data = data.T
            rows, dims = data.shape
        num_classes = dims - 4 if yolov8 else dims - 5
        if num_classes <= 0:
            raise ValueError("output has no class scores")
        self._check_classes(num_classes)

        scale, pad_x, pad_y = self._geometry(frame_width, frame_height)

        if yolov8:
            scores = data[:, 4:4 + num_classes]
            confidences = scores.max(axis=1)
            mask = confidences > self.score_threshold
        else:
            scores = data[:, 5:5 + num_classes]
            objectness = data[:, 4]
            best = scores.max(axis=1)
            mask = (objectness >= self.confidence_threshold) & (best > self.score_threshold)
            confidences = objectness
        class_ids = scores.argmax(axis=1)

        boxes: list[Rect] = []
        kept_scores: list[float] = []
        kept_classes: list[int] = []
        for row, confidence, class_id in zip(
            data[mask], confidences[mask], class_ids[mask]
        ):
            x, y, w, h = (float(v) for v in row[:4])
            boxes.append(
                Rect(
                    int((x - 0.5 * w - pad_x) / scale),
                    int((y - 0.5 * h - pad_y) / scale),
                    int(w / scale),
                    int(h / scale),
                )
            )
            kept_scores.append(float(confidence))
            kept_classes.append(int(class_id))

        detections = []
        for index in nms_boxes(boxes, kept_scores, self.score_threshold, self.nms_threshold):
            class_id = kept_classes[index]
            detections.append(
                Detection(
                    class_id=class_id,
                    class_name=self.classes[class_id],
                    confidence=kept_scores[index],
                    color=tuple(self._rng.randint(100, 255) for _ in range(3)),
                    box=boxes[index],
                )
            )
        return detections