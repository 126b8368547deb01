"""Public API for grayscale escape-time rendering."""

__version__ = "0.1.0"

# Heavy modules (tensorflow, Pillow) load on first access, so the command line
# can configure TensorFlow logging before it is imported.
_EXPORTS = {
    "GrayscaleImage": ".renderer",
    "GridSpec": ".renderer",
    "ParameterError": ".renderer",
    "ViewWindow": ".renderer",
    "create_grayscale_image": ".renderer",
    "narrow_gray": ".renderer",
    "escape_grid": ".escape",
    "escape_iterations": ".escape",
    "axis_coordinates": ".mapping",
    "pixel_offset": ".mapping",
    "scaled_coordinate": ".mapping",
    "default_output_path": ".encoder",
    "write_image": ".encoder",
}


def __getattr__(name):
    """Lazy loading of the modules behind the public names."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    from importlib import import_module

    return getattr(import_module(module_name, __name__), name)


__all__ = sorted(_EXPORTS)
