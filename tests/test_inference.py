import numpy as np
import pytest

from camtrack.geometry import Rect
from camtrack.inference import (
    Postprocessor,
    default_class_names,
    letterbox_params,
    load_class_names,
    nms_boxes,
)


def yolov8_output(rows, num_classes, count=20):
    """Build a (1, 4 + classes, count) tensor from (cx, cy, w, h, class, score) rows."""
    out = np.zeros((1, 4 + num_classes, count), dtype=np.float32)
    for i, (cx, cy, w, h, class_id, score) in enumerate(rows):
        out[0, :4, i] = (cx, cy, w, h)
        out[0, 4 + class_id, i] = score
    return out


def yolov5_output(rows, num_classes, count=20):
    out = np.zeros((1, count, 5 + num_classes), dtype=np.float32)
    for i, (cx, cy, w, h, objectness, class_id, score) in enumerate(rows):
        out[0, i, :5] = (cx, cy, w, h, objectness)
        out[0, i, 5 + class_id] = score
    return out


def test_default_class_names():
    assert default_class_names(3) == ["class_0", "class_1", "class_2"]
    assert default_class_names(0) == []


def test_load_class_names_trims_and_skips_blank(tmp_path):
    path = tmp_path / "classes.txt"
    path.write_text("person  \n\n   \ncar\t\r\n")
    assert load_class_names(path) == ["person", "car"]


def test_load_class_names_missing_file(tmp_path):
    assert load_class_names(tmp_path / "nope.txt") == []


def test_letterbox_square_frame_has_no_padding():
    assert letterbox_params(640, 640, 640, 640) == (1.0, 0, 0)


def test_letterbox_wide_frame_pads_vertically():
    scale, pad_x, pad_y = letterbox_params(1280, 720, 640, 640)
    assert scale == 0.5
    assert pad_x == 0
    assert 2 * pad_y + 720 * scale == 640


def test_letterbox_rejects_empty_frame():
    with pytest.raises(ValueError):
        letterbox_params(0, 10, 640, 640)


def test_nms_suppresses_duplicates():
    boxes = [Rect(0, 0, 10, 10), Rect(0, 0, 10, 10), Rect(50, 50, 10, 10)]
    assert nms_boxes(boxes, [0.9, 0.8, 0.7], 0.45, 0.5) == [0, 2]


def test_nms_orders_by_score_and_filters_low_scores():
    boxes = [Rect(0, 0, 10, 10), Rect(100, 100, 10, 10), Rect(200, 0, 10, 10)]
    assert nms_boxes(boxes, [0.5, 0.9, 0.3], 0.45, 0.5) == [1, 0]


def test_nms_length_mismatch():
    with pytest.raises(ValueError):
        nms_boxes([Rect(0, 0, 1, 1)], [], 0.45, 0.5)


def test_yolov8_decoding_and_generated_class_names():
    post = Postprocessor()
    output = yolov8_output([(100, 100, 20, 40, 1, 0.9)], num_classes=3)
    detections = post.process(output, 640, 640)
    assert post.classes == default_class_names(3)
    assert len(detections) == 1
    det = detections[0]
    assert det.class_id == 1
    assert det.class_name == "class_1"
    assert det.confidence == pytest.approx(0.9)
    assert (det.box.width, det.box.height) == (20, 40)
    assert det.box.center() == (100, 100)
    assert all(100 <= channel <= 255 for channel in det.color)


def test_known_classes_are_kept():
    post = Postprocessor(classes=["person", "car"])
    output = yolov8_output([(50, 50, 10, 10, 0, 0.8)], num_classes=2)
    detections = post.process(output, 640, 640)
    assert [d.class_name for d in detections] == ["person"]


def test_mismatched_classes_are_regenerated():
    post = Postprocessor(classes=["only"])
    post.process(yolov8_output([], num_classes=2), 640, 640)
    assert post.classes == default_class_names(2)


def test_score_threshold_is_strict():
    post = Postprocessor()
    output = yolov8_output(
        [(50, 50, 10, 10, 0, 0.45), (300, 300, 10, 10, 0, 0.46)], num_classes=2
    )
    detections = post.process(output, 640, 640)
    assert [d.box.center() for d in detections] == [(300, 300)]


def test_letterboxed_frame_maps_back_to_original_coordinates():
    post = Postprocessor()
    scale, pad_x, pad_y = letterbox_params(1280, 720, 640, 640)
    original = Rect(400, 200, 200, 100)
    cx, cy = original.center()
    output = yolov8_output(
        [(cx * scale + pad_x, cy * scale + pad_y, original.width * scale,
          original.height * scale, 0, 0.9)],
        num_classes=2,
    )
    detections = post.process(output, 1280, 720)
    assert len(detections) == 1
    assert detections[0].box == original


def test_yolov5_uses_objectness_as_confidence():
    post = Postprocessor(classes=["a", "b"])
    output = yolov5_output(
        [(100, 100, 20, 20, 0.7, 1, 0.9), (300, 300, 20, 20, 0.2, 0, 0.9)],
        num_classes=2,
    )
    detections = post.process(output, 640, 640)
    assert len(detections) == 1
    assert detections[0].class_name == "b"
    assert detections[0].confidence == pytest.approx(0.7)


def test_class_name_out_of_range():
    post = Postprocessor(classes=["person"])
    assert post.class_name(0) == "person"
    assert post.class_name(7) == "class_7"
    assert post.class_name(-1) == "class_-1"


def test_process_rejects_bad_shape():
    with pytest.raises(ValueError):
        Postprocessor().process(np.zeros(5), 640, 640)