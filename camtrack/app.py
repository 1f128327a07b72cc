"""The set of cameras shown on the board, their grid places and shared model."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from camtrack.grid import GridError, GridManager
from camtrack.region import Region

log = logging.getLogger(__name__)

DEFAULT_ROWS = 2
DEFAULT_COLS = 2


class CameraBoardError(Exception):
    """Raised when a camera cannot be placed on or found in the board."""


@runtime_checkable
class Camera(Protocol):
    """What the board needs from a camera view."""

    running: bool
    regions: list[Region]

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def set_model(self, model: Any) -> None: ...


class CameraBoard:
    """Cameras placed in a fixed grid, sharing one detection model.

    Cameras are kept in the order they were added; each takes the first
    free cell of the grid.
    """

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        model: Any = None,
    ) -> None:
        self._grid = GridManager(rows, cols)
        self._cameras: dict[int, Camera] = {}
        self._model = model

    @property
    def grid(self) -> GridManager:
        return self._grid

    @property
    def model(self) -> Any:
        return self._model

    @property
    def camera_ids(self) -> list[int]:
        """Ids of the cameras on the board, in the order they were added."""
        return list(self._cameras)

    @property
    def capacity(self) -> int:
        return self._grid.total_cells

    def __len__(self) -> int:
        return len(self._cameras)

    def __contains__(self, camera_id: object) -> bool:
        return camera_id in self._cameras

    def add_camera(self, camera_id: int, camera: Camera) -> tuple[int, int]:
        """Place a camera in the first free cell and return its (row, col)."""
        if self._grid.is_full():
            raise CameraBoardError(
                f"Cannot add camera {camera_id}: Grid is full "
                f"({self._grid.rows}x{self._grid.cols} = {self.capacity} cameras max)."
            )
        try:
            cell = self._grid.add_widget(camera, camera_id)
        except (GridError, ValueError) as exc:
            raise CameraBoardError(f"Cannot add camera {camera_id}: {exc}") from exc
        self._cameras[camera_id] = camera
        log.info("added camera %s at %s", camera_id, cell)
        return cell

    def remove_camera(self, camera_id: int) -> Camera:
        """Stop the camera if it runs, take it off the board and return it."""
        camera = self._cameras.get(camera_id)
        if camera is None:
            raise CameraBoardError(f"Camera ID {camera_id} not found")
        if camera.running:
            camera.stop()
        self._grid.remove_widget(camera_id)
        del self._cameras[camera_id]
        log.info("removed camera %s", camera_id)
        return camera

    def get_camera(self, camera_id: int) -> Camera | None:
        return self._cameras.get(camera_id)

    def load_cameras(self, cameras: Iterable[tuple[int, Camera]]) -> list[int]:
        """Place (id, camera) pairs until the grid is full; return the ids placed.

        Cameras beyond the grid's capacity are left out, and loading stops
        at the first camera that cannot be placed.
        """
        pending = list(cameras)
        room = self._grid.empty_count()
        loaded: list[int] = []
        for camera_id, camera in pending[:room]:
            try:
                self.add_camera(camera_id, camera)
            except CameraBoardError as exc:
                log.error("failed to load camera %s: %s", camera_id, exc)
                break
            loaded.append(camera_id)
        if len(pending) > room:
            log.warning(
                "only %d cameras fit the grid; loaded %d of %d",
                self.capacity, len(loaded), len(pending),
            )
        return loaded

    def start_all(self) -> list[int]:
        """Start every stopped camera; return the ids started."""
        started = []
        for camera_id, camera in self._cameras.items():
            if not camera.running:
                camera.start()
                started.append(camera_id)
        return started

    def stop_all(self) -> list[int]:
        """Stop every running camera; return the ids stopped."""
        stopped = []
        for camera_id, camera in self._cameras.items():
            if camera.running:
                camera.stop()
                stopped.append(camera_id)
        return stopped

    def is_full(self) -> bool:
        return self._grid.is_full()

    def replace_model(self, model: Any) -> list[int]:
        """Stop all cameras, hand every one the new model.

        Returns the ids of the cameras that were running, so they can be
        restarted.
        """
        was_running = self.stop_all()
        self._model = model
        for camera in self._cameras.values():
            camera.set_model(model)
        return was_running

    def regions_by_camera(self) -> dict[int, list[Region]]:
        """Each camera's regions, keyed by camera id, in board order."""
        return {
            camera_id: list(camera.regions)
            for camera_id, camera in self._cameras.items()
        }