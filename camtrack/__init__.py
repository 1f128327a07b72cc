"""YOLO output decoding, track labelling, regions, grid layout, configuration and a camera board."""

__version__ = "1.0.0"