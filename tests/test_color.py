"""Tests for color module."""

import numpy as np
import pytest
from smartcrop.color import RGB, WHITE, BLACK, lightness, skin_likeness, saturation, bounds

RED = RGB(255, 0, 0)
GREEN = RGB(0, 255, 0)
BLUE = RGB(0, 0, 255)


def gray(c):
    return RGB(c, c, c)


def test_bounds():
    """Test clamping and rounding to 8 bits."""
    assert bounds(-1.0) == 0
    assert bounds(0.0) == 0
    assert bounds(10.0) == 10
    assert bounds(255.0) == 255
    assert bounds(255.1) == 255


def test_bounds_rounds_half_up():
    """Test halves round away from zero."""
    assert bounds(10.5) == 11
    assert bounds(0.5) == 1
    assert bounds(10.49) == 10


def test_bounds_array():
    """Test bounds on arrays returns uint8 array."""
    result = bounds(np.array([-5.0, 12.4, 300.0]))
    assert result.dtype == np.uint8
    assert result.tolist() == [0, 12, 255]


def test_lightness():
    """Test lightness of black and white."""
    assert lightness(gray(0)) == 0.0
    assert lightness(gray(255)) == pytest.approx(331.5)


def test_lightness_channel_weights():
    """Test each channel's weight."""
    assert lightness(RED) == pytest.approx(0.0722 * 255)
    assert lightness(GREEN) == pytest.approx(0.7152 * 255)
    assert lightness(BLUE) == pytest.approx(0.5126 * 255)


def test_lightness_array():
    """Test lightness over an image array keeps the leading shape."""
    pixels = np.array([[[255, 0, 0], [0, 255, 0]]], dtype=np.uint8)
    result = lightness(pixels)
    assert result.shape == (1, 2)
    assert result[0, 1] == pytest.approx(0.7152 * 255)


def test_skin_likeness_black_is_zero():
    """Test pure black gives a defined value instead of NaN."""
    assert skin_likeness(BLACK) == 0.0


def test_skin_likeness_white():
    """Test white matches the historical reference value."""
    assert skin_likeness(WHITE) == pytest.approx(0.7550795306611965)


def test_skin_likeness_skin_tone():
    """Test a skin tone scores above the detection threshold."""
    assert skin_likeness(RGB(255, 200, 159)) > 0.9
    assert skin_likeness(RED) < 0.5


def test_skin_likeness_is_brightness_independent():
    """Test only the color direction matters."""
    assert skin_likeness(RGB(200, 150, 110)) == pytest.approx(skin_likeness(RGB(100, 75, 55)))


def test_skin_likeness_range():
    """Test values stay in [0, 1] for extreme colors."""
    pixels = np.array([[[0, 0, 255], [0, 255, 255], [1, 0, 0], [0, 0, 0]]], dtype=np.uint8)
    result = skin_likeness(pixels)
    assert np.all(result >= 0.0)
    assert np.all(result <= 1.0)


def test_saturation():
    """Test HSL saturation on primaries and grays."""
    assert saturation(gray(0)) == 0.0
    assert saturation(gray(255)) == 0.0
    assert saturation(gray(128)) == 0.0
    assert saturation(RED) == 1.0
    assert saturation(GREEN) == 1.0
    assert saturation(BLUE) == 1.0
    assert saturation(RGB(0, 255, 255)) == 1.0


def test_saturation_light_and_dark_branches():
    """Test both denominators of the HSL formula."""
    # Dark: l = 0.25, d / (max + min)
    assert saturation(RGB(102, 26, 26)) == pytest.approx((76 / 255) / (128 / 255))
    # Light: l > 0.5, d / (2 - max - min)
    assert saturation(RGB(255, 153, 153)) == pytest.approx((102 / 255) / (2 - 408 / 255))
