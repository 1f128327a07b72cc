"""A fixed grid of cells holding widgets by id, with placeholders in empty cells."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

log = logging.getLogger(__name__)

WIDGET_ADDED = "widget_added"
WIDGET_REMOVED = "widget_removed"
GRID_RESIZED = "grid_resized"
CELLS_RESIZED = "cells_resized"

DEFAULT_CELL_WIDTH = 640
DEFAULT_CELL_HEIGHT = 480
PLACEHOLDER_TEXT = "Add Camera +"

PlaceholderFactory = Callable[[int, int], Any]
Listener = Callable[..., None]


class GridError(Exception):
    """Raised when a widget cannot be placed in the grid."""


@dataclass
class _DefaultPlaceholder:
    width: int
    height: int
    text: str = PLACEHOLDER_TEXT

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height


@dataclass
class GridCell:
    """One cell of the grid: a real widget, a placeholder, or nothing yet."""

    row: int
    col: int
    widget_id: int | None = None
    widget: Any = None
    is_placeholder: bool = False

    @property
    def is_empty(self) -> bool:
        return self.widget_id is None


def _resize(obj: Any, width: int, height: int) -> None:
    resize = getattr(obj, "resize", None)
    if callable(resize):
        resize(width, height)


def _check_dimensions(first: int, second: int, what: str) -> None:
    if first <= 0 or second <= 0:
        raise ValueError(f"{what} must be positive")


class GridManager:
    """Places widgets into the first free cell of a rows x cols grid.

    Widgets are tracked by integer id. Every cell without a widget holds a
    placeholder made by the placeholder factory. Listeners receive an event
    name followed by its arguments:
    ``widget_added(id, row, col)``, ``widget_removed(id)``,
    ``grid_resized(rows, cols)`` and ``cells_resized(width, height)``.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        cell_width: int = DEFAULT_CELL_WIDTH,
        cell_height: int = DEFAULT_CELL_HEIGHT,
        placeholder_factory: PlaceholderFactory | None = None,
    ) -> None:
        _check_dimensions(rows, cols, "rows and cols")
        _check_dimensions(cell_width, cell_height, "cell width and height")
        self._rows = rows
        self._cols = cols
        self._cell_width = cell_width
        self._cell_height = cell_height
        self._factory = placeholder_factory
        self._listeners: list[Listener] = []
        self._index: dict[int, int] = {}
        self._cells = self._make_cells()
        for cell in self._cells:
            self._add_placeholder(cell)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def total_cells(self) -> int:
        return self._rows * self._cols

    @property
    def cell_width(self) -> int:
        return self._cell_width

    @property
    def cell_height(self) -> int:
        return self._cell_height

    @property
    def cells(self) -> tuple[GridCell, ...]:
        """The cells in row-major order."""
        return tuple(self._cells)

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def add_widget(self, widget: Any, widget_id: int) -> tuple[int, int]:
        """Put ``widget`` in the first empty cell and return its (row, col)."""
        if widget is None:
            raise ValueError("widget must not be None")
        if widget_id in self._index:
            raise GridError(f"widget with ID {widget_id} already exists")
        index = next((i for i, c in enumerate(self._cells) if c.is_empty), None)
        if index is None:
            raise GridError("grid is full")

        cell = self._cells[index]
        cell.widget = widget
        cell.widget_id = widget_id
        cell.is_placeholder = False
        self._index[widget_id] = index
        log.debug("added widget %s at (%s,%s)", widget_id, cell.row, cell.col)
        self._emit(WIDGET_ADDED, widget_id, cell.row, cell.col)
        return (cell.row, cell.col)

    def remove_widget(self, widget_id: int) -> Any:
        """Take the widget out of the grid, leave a placeholder, return the widget."""
        try:
            index = self._index.pop(widget_id)
        except KeyError:
            raise KeyError(f"widget ID {widget_id} not found") from None
        cell = self._cells[index]
        widget = cell.widget
        cell.widget = None
        cell.widget_id = None
        cell.is_placeholder = False
        self._add_placeholder(cell)
        log.debug("removed widget %s from (%s,%s)", widget_id, cell.row, cell.col)
        self._emit(WIDGET_REMOVED, widget_id)
        return widget

    def get_widget(self, widget_id: int) -> Any:
        """The widget with this id, or None."""
        index = self._index.get(widget_id)
        if index is None:
            return None
        cell = self._cells[index]
        return None if cell.is_placeholder else cell.widget

    def has_widget(self, widget_id: int) -> bool:
        return widget_id in self._index

    def cell_of(self, widget_id: int) -> tuple[int, int]:
        """The (row, col) of the widget with this id."""
        try:
            cell = self._cells[self._index[widget_id]]
        except KeyError:
            raise KeyError(f"widget ID {widget_id} not found") from None
        return (cell.row, cell.col)

    def set_grid_size(self, rows: int, cols: int) -> list[int]:
        """Change the grid's dimensions, re-placing widgets in id order.

        Widgets that no longer fit are dropped; their ids are returned.
        """
        _check_dimensions(rows, cols, "rows and cols")
        if rows == self._rows and cols == self._cols:
            return []

        existing = sorted(
            (widget_id, self._cells[index].widget)
            for widget_id, index in self._index.items()
        )
        self._rows = rows
        self._cols = cols
        self._cells = self._make_cells()
        self._index = {}

        dropped: list[int] = []
        for index, (widget_id, widget) in enumerate(existing):
            if index >= len(self._cells):
                log.warning("grid too small, removing widget ID=%s", widget_id)
                dropped.append(widget_id)
                continue
            cell = self._cells[index]
            cell.widget = widget
            cell.widget_id = widget_id
            self._index[widget_id] = index

        for cell in self._cells:
            self._add_placeholder(cell)

        self._emit(GRID_RESIZED, rows, cols)
        return dropped

    def resize_all_cells(self, width: int, height: int) -> None:
        """Give every cell, widget and placeholder alike, a new size."""
        _check_dimensions(width, height, "cell width and height")
        self._cell_width = width
        self._cell_height = height
        for cell in self._cells:
            if cell.widget is not None:
                _resize(cell.widget, width, height)
        self._emit(CELLS_RESIZED, width, height)

    def occupied_count(self) -> int:
        return len(self._index)

    def empty_count(self) -> int:
        return self.total_cells - self.occupied_count()

    def is_full(self) -> bool:
        return self.empty_count() == 0

    def clear(self) -> None:
        """Remove every widget, leaving placeholders everywhere."""
        for widget_id in sorted(self._index):
            self.remove_widget(widget_id)

    def set_placeholder_factory(self, factory: PlaceholderFactory | None) -> None:
        """Use ``factory`` (or the default when None) and rebuild placeholders."""
        self._factory = factory
        for cell in self._cells:
            if cell.is_placeholder:
                cell.widget = self._new_placeholder()

    def _make_cells(self) -> list[GridCell]:
        return [GridCell(row, col) for row in range(self._rows) for col in range(self._cols)]

    def _new_placeholder(self) -> Any:
        if self._factory is not None:
            return self._factory(self._cell_width, self._cell_height)
        return _DefaultPlaceholder(self._cell_width, self._cell_height)

    def _add_placeholder(self, cell: GridCell) -> None:
        if cell.is_empty and not cell.is_placeholder:
            cell.widget = self._new_placeholder()
            cell.is_placeholder = True

    def _emit(self, event: str, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(event, *args)