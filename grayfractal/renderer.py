"""Grayscale rendering of escape-time frames."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Optional

import numpy as np

from .escape import escape_grid, escape_iterations
from .mapping import axis_coordinates, pixel_offset, scaled_coordinate

BACKENDS = ("tensorflow", "python")
NARROWINGS = ("saturate", "wrap")


class ParameterError(ValueError):
    """Raised when render parameters cannot describe a valid image."""


def _require_finite(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ParameterError(f"{name} must be a finite number, got {value!r}")


def _require_positive_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ParameterError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ParameterError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class ViewWindow:
    """Square region of the complex plane sampled into an image."""

    center_x: float
    center_y: float
    size: float

    def __post_init__(self) -> None:
        _require_finite("center_x", self.center_x)
        _require_finite("center_y", self.center_y)
        _require_finite("size", self.size)
        if self.size <= 0:
            raise ParameterError(f"size must be positive, got {self.size}")


@dataclass(frozen=True)
class GridSpec:
    """Pixel resolution and iteration budget of a render."""

    pixels_wide: int
    max_iterations: int

    def __post_init__(self) -> None:
        _require_positive_int("pixels_wide", self.pixels_wide)
        _require_positive_int("max_iterations", self.max_iterations)


@dataclass(frozen=True)
class GrayscaleImage:
    """Single-channel 8-bit image stored as a row-major buffer."""

    width: int
    height: int
    max_iterations: int
    pixels: np.ndarray

    def pixel(self, x: int, y: int) -> int:
        return int(self.pixels[pixel_offset(self.width, x, y)])

    def as_array(self) -> np.ndarray:
        return self.pixels.reshape(self.height, self.width)

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()


def narrow_gray(gray, narrowing: str = "saturate"):
    """Narrow gray values in ``[0, max_iterations]`` to bytes.

    ``saturate`` clamps everything above 255 to 255. ``wrap`` keeps the value
    modulo 256, which is what an implicit integer-to-byte conversion does. Both
    rules agree whenever ``max_iterations <= 255``.
    """

    if narrowing == "saturate":
        return np.minimum(gray, 255).astype(np.uint8)
    if narrowing == "wrap":
        return np.mod(gray, 256).astype(np.uint8)
    raise ParameterError(f"Unknown narrowing '{narrowing}'. Valid choices: {', '.join(NARROWINGS)}.")


def _render_python(window: ViewWindow, grid: GridSpec, narrowing: str) -> np.ndarray:
    pixels_wide = grid.pixels_wide
    image = np.zeros(pixels_wide * pixels_wide, dtype=np.uint8)

    for y in range(pixels_wide):
        y0 = scaled_coordinate(window.center_y, window.size, y, pixels_wide)
        for x in range(pixels_wide):
            x0 = scaled_coordinate(window.center_x, window.size, x, pixels_wide)
            iterations = escape_iterations(complex(x0, y0), window.size, grid.max_iterations)
            gray = grid.max_iterations - iterations
            image[pixel_offset(pixels_wide, x, y)] = narrow_gray(gray, narrowing)

    return image


def _render_tensorflow(window: ViewWindow, grid: GridSpec, narrowing: str, device: Optional[str]) -> np.ndarray:
    x = axis_coordinates(window.center_x, window.size, grid.pixels_wide)
    y = axis_coordinates(window.center_y, window.size, grid.pixels_wide)

    X, Y = np.meshgrid(x, y)
    points = np.empty(X.shape, dtype=np.complex128)
    points.real = X
    points.imag = Y

    iterations = escape_grid(points, window.size, grid.max_iterations, device=device)
    gray = np.int64(grid.max_iterations) - iterations.astype(np.int64)
    return np.ascontiguousarray(narrow_gray(gray, narrowing).reshape(-1))


def create_grayscale_image(
    window: ViewWindow,
    grid: GridSpec,
    *,
    backend: str = "tensorflow",
    narrowing: str = "saturate",
    device: Optional[str] = None,
) -> GrayscaleImage:
    """Render the escape-time fractal inside ``window`` as a grayscale image.

    Points that escape quickly are dark and points that stay bounded for the whole
    iteration budget are brightest: each sample is ``max_iterations - iterations``,
    narrowed to a byte according to ``narrowing``.
    """

    if not isinstance(window, ViewWindow):
        raise ParameterError(f"window must be a ViewWindow, got {type(window).__name__}")
    if not isinstance(grid, GridSpec):
        raise ParameterError(f"grid must be a GridSpec, got {type(grid).__name__}")
    if narrowing not in NARROWINGS:
        raise ParameterError(f"Unknown narrowing '{narrowing}'. Valid choices: {', '.join(NARROWINGS)}.")

    if backend == "tensorflow":
        pixels = _render_tensorflow(window, grid, narrowing, device)
    elif backend == "python":
        pixels = _render_python(window, grid, narrowing)
    else:
        raise ParameterError(f"Unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")

    return GrayscaleImage(
        width=grid.pixels_wide,
        height=grid.pixels_wide,
        max_iterations=grid.max_iterations,
        pixels=pixels,
    )
