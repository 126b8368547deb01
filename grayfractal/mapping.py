"""Mapping between pixel indices and coordinates in the complex plane."""

from __future__ import annotations

import numpy as np


def scaled_coordinate(center: float, size: float, pixel_index: int, resolution: int) -> float:
    """Scale ``pixel_index`` into the ``size`` wide window around ``center``."""

    return (center - (size / 2)) + ((size * pixel_index) / resolution)


def axis_coordinates(center: float, size: float, resolution: int) -> np.ndarray:
    """Plane coordinates for every pixel index along one axis.

    Each element is bit-identical to :func:`scaled_coordinate` for the same index,
    so grids built from these values sample exactly the points the per-pixel loop does.
    """

    indices = np.arange(resolution, dtype=np.float64)
    return (np.float64(center) - (np.float64(size) / 2)) + ((np.float64(size) * indices) / resolution)


def pixel_offset(width: int, x: int, y: int, channel: int = 0, channel_count: int = 1) -> int:
    """Offset of a sample in an interleaved, row-major 1-D buffer."""

    return (y * width + x) * channel_count + channel
