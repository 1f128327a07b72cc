# camtrack

`camtrack` holds the logic of a multi-camera detection and tracking system. It
does not depend on any windowing toolkit. It covers:

- **Detection post-processing** (`camtrack.inference`).
  `Postprocessor.process(output, frame_width, frame_height)` decodes a raw
  YOLOv5 output array (rows × dims) or YOLOv8 output array (dims × rows),
  optionally with a leading batch axis, into `Detection` objects. It works out
  letterbox scaling (`letterbox_params`) and runs greedy non-maximum
  suppression (`nms_boxes`). Class names come from a text file, one per line
  (`load_class_names`). When their number does not match the model output,
  names `class_0`, `class_1`, … are generated instead (`default_class_names`).
- **Geometry and track labelling** (`camtrack.geometry`). This module has
  `Rect`, `Detection` and `calc_iou`, and `color_for_track_id` gives a stable
  colour for each track ID. `best_matching_class` and `update_track_classes`
  label tracks with the class of the detection that overlaps them best, with
  IoU above 0.3.
- **Regions** (`camtrack.region`, `camtrack.region_editing`). `Region` is a
  named polygon with a colour. It tests points (`contains_point`) and box
  centres (`contains_rect`) against the polygon, gives its `bounding_box`, and
  converts to and from JSON (`to_json`, `Region.from_json`). `RegionDrawing`
  collects clicked points in view coordinates and stores them in image
  coordinates. Its `finish` method raises `InvalidRegionError` for fewer than
  three points. `describe_regions`, `rename_region` and `delete_region` work on
  lists of regions.
- **Grid layout** (`camtrack.grid`, `camtrack.layout`). `GridManager` places
  widgets by ID in the first free cell of a rows × cols grid and keeps
  placeholders in empty cells. It notifies subscribers of additions, removals
  and resizes. `set_grid_size` re-places widgets in ID order and returns the
  IDs that no longer fit. `apply_display_settings` resizes the cells and
  changes the grid only if its dimensions differ; `window_size` and
  `grid_status_message` give sizes and status text.
- **Configuration** (`camtrack.config`, `camtrack.models`). `DisplaySettings`
  loads and saves cell size, grid dimensions and model path as JSON, and gives
  defaults when the file is missing. `regions_companion_path`, `save_regions`
  and `load_regions` handle the regions file kept beside a camera
  configuration. `resolve_model_path` and `load_model` pick a model file,
  falling back to `yolov8n.onnx`, and `load_model` raises `ModelError` when
  neither loads.
- **Camera board** (`camtrack.app`). `CameraBoard` keeps cameras in a fixed
  grid (2 × 2 by default) that share one model. It adds, removes, starts and
  stops cameras, swaps the model (`replace_model`) and collects each camera's
  regions (`regions_by_camera`). A camera is any object with `running` and
  `regions` attributes and `start`, `stop` and `set_model` methods.

## Installation

```
pip install camtrack
```

To run the tests:

```
pip install "camtrack[test]"
pytest
```

## Example

```python
import numpy as np

from camtrack.geometry import Rect, calc_iou
from camtrack.grid import GridManager
from camtrack.inference import Postprocessor
from camtrack.region import Region

door = Region("door", [(0, 0), (100, 0), (100, 100), (0, 100)])
print(door.contains_rect(Rect(40, 40, 20, 20)))       # True

print(calc_iou(Rect(0, 0, 10, 10), Rect(5, 0, 10, 10)))  # 0.333...

grid = GridManager(2, 2)
print(grid.add_widget("front camera", 1))              # (0, 0)

post = Postprocessor(classes=["person", "car"])
output = np.zeros((1, 6, 8400), dtype=np.float32)      # YOLOv8 layout, 2 classes
print(post.process(output, 1280, 720))                 # [] - no scores above threshold
```

## What this package does not do

- It does not run a neural network or capture video. You supply the model's
  output arrays, and `load_model` takes a loader function that you provide.
- It has no windows, dialogs or command-line program. Grid cells, placeholders
  and cameras are plain Python objects.
- It does not keep per-region counts of unique track IDs, and it does not send
  notifications. Region membership tests are provided, but counting and
  alerting are left to the caller.