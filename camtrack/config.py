"""Display settings and the per-camera regions saved next to a configuration."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from camtrack.region import Region

SETTINGS_FILE = "display_settings.json"
DEFAULT_MODEL_PATH = "yolov8n.onnx"


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return default


@dataclass
class DisplaySettings:
    """Cell size, grid dimensions and the model in use."""

    camera_width: int = 640
    camera_height: int = 480
    grid_rows: int = 2
    grid_columns: int = 2
    model_path: str = DEFAULT_MODEL_PATH

    @classmethod
    def load(cls, path: str | Path = SETTINGS_FILE) -> DisplaySettings:
        """Read settings; a missing file or missing values give the defaults."""
        file = Path(path)
        if not file.exists():
            return cls()
        try:
            document = json.loads(file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON in {file}") from exc
        if not isinstance(document, dict):
            raise ValueError(f"invalid settings format in {file}")

        defaults = cls()
        display = document.get("Display")
        display = display if isinstance(display, dict) else {}
        model = document.get("Model")
        model = model if isinstance(model, dict) else {}
        model_path = model.get("Path")
        return cls(
            camera_width=_as_int(display.get("CameraWidth"), defaults.camera_width),
            camera_height=_as_int(display.get("CameraHeight"), defaults.camera_height),
            grid_rows=_as_int(display.get("GridRows"), defaults.grid_rows),
            grid_columns=_as_int(display.get("GridColumns"), defaults.grid_columns),
            model_path=model_path if isinstance(model_path, str) else defaults.model_path,
        )

    def save(self, path: str | Path = SETTINGS_FILE) -> None:
        document = {
            "Display": {
                "CameraWidth": self.camera_width,
                "CameraHeight": self.camera_height,
                "GridRows": self.grid_rows,
                "GridColumns": self.grid_columns,
            },
            "Model": {"Path": self.model_path},
        }
        Path(path).write_text(json.dumps(document, indent=4) + "\n", encoding="utf-8")


def regions_companion_path(path: str | Path) -> Path:
    """The regions file stored beside a camera configuration file.

    ``_regions`` goes before the last dot; without a dot ``_regions.json``
    is appended.
    """
    text = str(path)
    dot = text.rfind(".")
    if dot == -1:
        return Path(text + "_regions.json")
    return Path(text[:dot] + "_regions" + text[dot:])


def save_regions(
    path: str | Path, regions_by_camera: Mapping[int, Iterable[Region]]
) -> None:
    """Write each camera's regions to ``path`` as indented JSON."""
    document = {
        "regions": [
            {
                "camera_id": camera_id,
                "regions": [region.to_json() for region in regions],
            }
            for camera_id, regions in regions_by_camera.items()
        ]
    }
    Path(path).write_text(json.dumps(document, indent=4), encoding="utf-8")


def load_regions(path: str | Path) -> dict[int, list[Region]]:
    """Read camera id to regions from ``path``; a missing file gives none."""
    file = Path(path)
    if not file.exists():
        return {}
    try:
        document = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON in {file}") from exc
    if not isinstance(document, dict) or "regions" not in document:
        return {}

    loaded: dict[int, list[Region]] = {}
    try:
        for entry in document["regions"]:
            camera_id = entry["camera_id"]
            if isinstance(camera_id, bool) or not isinstance(camera_id, int):
                raise TypeError("camera_id must be an integer")
            loaded[camera_id] = [
                Region.from_json(item) for item in entry.get("regions", [])
            ]
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"invalid regions file {file}: {exc}") from exc
    return loaded