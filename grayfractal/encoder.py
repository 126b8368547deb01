"""Persisting grayscale images with Pillow or imageio."""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Optional

import imageio.v3 as iio
import PIL.Image

from .renderer import GrayscaleImage

ENCODERS = ("pillow", "imageio")
DEFAULT_FILENAME = "mandelbrot.jpg"


def default_output_path(filename: str = DEFAULT_FILENAME) -> Path:
    """Absolute, normalized path of ``filename`` in the current working directory."""

    return (Path.cwd() / filename).resolve()


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def _image_format(path: Path, image_format: Optional[str]) -> str:
    fmt = (image_format or path.suffix or "").lower().lstrip(".")
    if not fmt:
        raise ValueError(f"Cannot determine an image format for {path}")
    return fmt


def write_image(
    image: GrayscaleImage,
    path: str | Path,
    *,
    image_format: Optional[str] = None,
    encoder: str = "pillow",
) -> bool:
    """Write ``image`` to ``path`` as a single-channel 8-bit file.

    Returns ``True`` when the file was written. Encoding and filesystem errors are
    reported with a :class:`RuntimeWarning` and a ``False`` return value rather than
    an exception.
    """

    if encoder not in ENCODERS:
        raise ValueError(f"Unknown encoder '{encoder}'. Valid choices: {', '.join(ENCODERS)}.")

    output_path = Path(path)
    array = image.as_array()

    try:
        fmt = _image_format(output_path, image_format)
        if encoder == "pillow":
            PIL.Image.fromarray(array).save(str(output_path), format=_pil_format_name(fmt))
        else:
            iio.imwrite(output_path, array, extension=f".{fmt}")
    except (OSError, ValueError, KeyError) as exc:
        warnings.warn(f"Could not write {output_path}: {exc}", RuntimeWarning, stacklevel=2)
        return False

    return True
