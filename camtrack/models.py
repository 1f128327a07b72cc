"""Choosing and loading the detection model, with a fallback to the default."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

log = logging.getLogger(__name__)

DEFAULT_MODEL = "yolov8n.onnx"

T = TypeVar("T")


class ModelError(Exception):
    """Raised when neither the chosen nor the default model can be loaded."""


def resolve_model_path(path: str | Path, default: str | Path = DEFAULT_MODEL) -> str:
    """``path`` if that file exists, otherwise ``default``."""
    if Path(path).exists():
        return str(path)
    log.warning("model file not found: %s, falling back to %s", path, default)
    return str(default)


def model_display_name(path: str | Path) -> str:
    """The file name shown for a model."""
    return Path(path).name


def load_model(
    path: str | Path,
    loader: Callable[[str], T],
    default: str | Path = DEFAULT_MODEL,
) -> tuple[T, str]:
    """Load a model, falling back to ``default`` if the file is missing or fails.

    Returns the model and the path it was loaded from.
    """
    chosen = resolve_model_path(path, default)
    try:
        return loader(chosen), chosen
    except Exception as exc:  # a loader may fail in any way
        log.error("failed to load model %s: %s; trying %s", chosen, exc, default)
        first_error: Any = exc

    fallback = str(default)
    try:
        return loader(fallback), fallback
    except Exception as exc:
        raise ModelError(
            f"Cannot load YOLO model! Error: {exc} "
            f"(after failing on {chosen}: {first_error})"
        ) from exc


def model_loaded_message(path: str | Path, class_count: int) -> str:
    return (
        "Model loaded successfully!\n\n"
        f"Model: {path}\n"
        f"Classes: {class_count}\n\n"
        "💡 Tip: Use 'Load Data' to select which classes to detect/count."
    )