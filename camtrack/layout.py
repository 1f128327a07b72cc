"""Sizing the camera grid and the window around it."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from camtrack.grid import GridManager

WINDOW_MARGIN = 16


@dataclass(frozen=True)
class LayoutResult:
    """What applying display settings changed."""

    grid_changed: bool
    removed_ids: list[int] = field(default_factory=list)
    window_width: int = 0
    window_height: int = 0
    elapsed_ms: int = 0
    message: str = ""


def window_size(
    camera_width: int, camera_height: int, rows: int, cols: int, extra_height: int = 0
) -> tuple[int, int]:
    """Window size that fits the grid, its margins and ``extra_height`` of bars."""
    width = camera_width * cols + WINDOW_MARGIN
    height = camera_height * rows + WINDOW_MARGIN + extra_height
    return (width, height)


def apply_display_settings(
    grid: GridManager, camera_width: int, camera_height: int, rows: int, cols: int
) -> LayoutResult:
    """Resize the grid's cells, rearranging it only if its dimensions changed."""
    start = time.perf_counter()
    grid_changed = rows != grid.rows or cols != grid.cols
    removed: list[int] = []
    if grid_changed:
        removed = grid.set_grid_size(rows, cols)
    grid.resize_all_cells(camera_width, camera_height)

    width, height = window_size(camera_width, camera_height, rows, cols)
    elapsed = int((time.perf_counter() - start) * 1000)
    message = (
        f"Display settings applied: Grid {rows}×{cols}, "
        f"Cell {camera_width}×{camera_height} (took {elapsed}ms)"
    )
    return LayoutResult(
        grid_changed=grid_changed,
        removed_ids=removed,
        window_width=width,
        window_height=height,
        elapsed_ms=elapsed,
        message=message,
    )


def grid_status_message(
    rows: int, cols: int, camera_count: int, total_width: int, total_height: int
) -> str:
    return (
        f"Grid: {rows}×{cols} | Cameras: {camera_count}/{rows * cols} | "
        f"Total: {total_width}×{total_height}"
    )