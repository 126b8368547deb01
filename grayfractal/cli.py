"""Command line entry point: render a grayscale escape-time image and write it to disk."""

import os
import sys
import time
import warnings
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

from argparse import ArgumentParser

from .encoder import ENCODERS, default_output_path, write_image
from .renderer import BACKENDS, NARROWINGS, GridSpec, ParameterError, ViewWindow, create_grayscale_image

DEFAULT_FORMAT = "jpg"


def build_parser():
    parser = ArgumentParser(description="Render a grayscale escape-time fractal to an image file.")

    parser.add_argument('--center-x', type=float,
                        dest='center_x', help='x coordinate in the complex plane of the image center',
                        metavar='CENTER_X', default=-0.5)

    parser.add_argument('--center-y', type=float,
                        dest='center_y', help='y coordinate in the complex plane of the image center',
                        metavar='CENTER_Y', default=0.0)

    parser.add_argument('--size', type=float,
                        dest='size', help='side length of the sampled square, also used as the escape bound',
                        metavar='SIZE', default=2.0)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of recurrence steps per pixel',
                        metavar='MAX_ITERATIONS', default=255)

    parser.add_argument('--pixels-wide', type=int,
                        dest='pixels_wide', help='width and height of the square image in pixels',
                        metavar='PIXELS_WIDE', default=1024)

    parser.add_argument('--output', dest='output', type=str,
                        help='Destination file. Default: mandelbrot.jpg in the current directory.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format of the output. Can be any extension supported by the encoder. '
                                            'Default: the output suffix, else "jpg".',
                        metavar='FORMAT', default=None)

    parser.add_argument('--encoder', choices=ENCODERS, default='pillow',
                        help='Library used to encode the image file.')
    parser.add_argument('--backend', choices=BACKENDS, default='tensorflow',
                        help='"tensorflow" evaluates the whole grid at once; "python" walks it pixel by pixel.')
    parser.add_argument('--narrowing', choices=NARROWINGS, default='saturate',
                        help='How gray values above 255 are stored: "saturate" clamps, "wrap" keeps them modulo 256.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def resolve_output_path(opt, parser: ArgumentParser) -> tuple[Path, str]:
    image_format = (opt.format or "").lower().lstrip(".")

    if opt.output is None:
        output_path = default_output_path()
        if image_format:
            output_path = output_path.with_suffix(f".{image_format}")
        return output_path, image_format or DEFAULT_FORMAT

    if opt.output.endswith(tuple(filter(None, {os.sep, os.altsep}))):
        parser.error("--output must be a file path.")

    output_path = Path(opt.output).expanduser()
    if output_path.exists() and output_path.is_dir():
        parser.error("--output must point to a file, not a directory.")

    suffix = output_path.suffix.lower().lstrip(".")
    if suffix:
        if image_format and suffix != image_format:
            parser.error(f"--output extension .{suffix} does not match --format {image_format}.")
        image_format = suffix
    else:
        image_format = image_format or DEFAULT_FORMAT
        output_path = output_path.with_suffix(f".{image_format}")

    return output_path.resolve(), image_format


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    try:
        window = ViewWindow(center_x=opt.center_x, center_y=opt.center_y, size=opt.size)
        grid = GridSpec(pixels_wide=opt.pixels_wide, max_iterations=opt.max_iterations)
    except ParameterError as exc:
        parser.error(str(exc))

    output_path, image_format = resolve_output_path(opt, parser)

    log("TensorFlow version: %s" % tf.__version__)
    log("Rendering %dx%d pixels around (%g, %g), size %g, %d iterations, %s backend"
        % (grid.pixels_wide, grid.pixels_wide, window.center_x, window.center_y,
           window.size, grid.max_iterations, opt.backend))

    start = time.perf_counter()
    image = create_grayscale_image(window, grid, backend=opt.backend, narrowing=opt.narrowing)
    log("Rendered in %.3fs" % (time.perf_counter() - start))

    log("Writing %s with %s" % (output_path, opt.encoder))
    successful = write_image(image, output_path, image_format=image_format, encoder=opt.encoder)
    if not successful:
        print("Failed to write out file")
    else:
        print("Success!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
