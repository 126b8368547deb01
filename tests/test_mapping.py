"""Tests for pixel to plane coordinate mapping."""

import numpy as np
import pytest

from grayfractal.mapping import axis_coordinates, pixel_offset, scaled_coordinate


@pytest.mark.parametrize("pixels_wide", [2, 64, 1024])
def test_center_pixel_maps_to_window_center(pixels_wide):
    assert scaled_coordinate(-0.5, 2.0, pixels_wide // 2, pixels_wide) == pytest.approx(-0.5)


def test_first_pixel_maps_to_window_edge():
    assert scaled_coordinate(-0.5, 2.0, 0, 1024) == -1.5
    assert scaled_coordinate(0.0, 2.0, 0, 1024) == -1.0


def test_last_pixel_stops_one_step_short_of_far_edge():
    """The window is half-open: the far edge itself is never sampled."""
    assert scaled_coordinate(0.0, 4.0, 3, 4) == 1.0


def test_axis_coordinates_match_scalar_mapping_exactly():
    center, size, resolution = 0.2719, 0.013, 97
    axis = axis_coordinates(center, size, resolution)

    assert axis.dtype == np.float64
    assert axis.shape == (resolution,)
    for index in range(resolution):
        assert axis[index] == scaled_coordinate(center, size, index, resolution)


def test_pixel_offset_is_row_major():
    assert pixel_offset(10, 0, 0) == 0
    assert pixel_offset(10, 3, 0) == 3
    assert pixel_offset(10, 3, 2) == 23


def test_pixel_offset_interleaved_channels():
    assert pixel_offset(4, 1, 1, channel=2, channel_count=3) == (1 * 4 + 1) * 3 + 2
