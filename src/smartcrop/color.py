"""Per-pixel color metrics used to build the saliency map.

Every function accepts either a single :class:`RGB` or a numpy array whose
last axis holds ``(r, g, b)``. Scalars come back as ``float`` / ``int``,
arrays come back as arrays of the same leading shape.
"""

from typing import NamedTuple, Tuple, Union
import numpy as np

from . import defaults


class RGB(NamedTuple):
    """Single 8-bit pixel."""
    r: int
    g: int
    b: int


PixelLike = Union[RGB, Tuple[int, int, int], np.ndarray]

WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)


def _channels(pixel: PixelLike):
    arr = np.asarray(pixel, dtype=np.float64)
    return arr[..., 0], arr[..., 1], arr[..., 2]


def _unwrap(value):
    """Return a python scalar for 0-d results."""
    if np.ndim(value) == 0:
        return value.item() if hasattr(value, 'item') else value
    return value


def round_half_up(value):
    """Round half away from zero for non-negative values."""
    return np.floor(np.asarray(value, dtype=np.float64) + 0.5)


def bounds(value):
    """Clamp to [0, 255] and round to an 8-bit value."""
    clamped = np.minimum(np.maximum(value, 0.0), 255.0)
    result = round_half_up(clamped).astype(np.uint8)
    if np.ndim(result) == 0:
        return int(result)
    return result


def lightness(pixel: PixelLike):
    """Weighted channel sum in the 0..331.5 range."""
    r, g, b = _channels(pixel)
    return _unwrap(0.5126 * b + 0.7152 * g + 0.0722 * r)


def skin_likeness(pixel: PixelLike, skin_color: Tuple[float, float, float] = defaults.SKIN_COLOR):
    """
    Similarity of the pixel's color direction to the reference skin tone.

    Args:
        pixel: RGB value or array of them
        skin_color: Reference direction in normalised RGB space

    Returns:
        Value in [0, 1]; pure black yields 0.0
    """
    r, g, b = _channels(pixel)
    mag = np.sqrt(r * r + g * g + b * b)
    black = mag == 0
    safe_mag = np.where(black, 1.0, mag)

    rd = r / safe_mag - skin_color[0]
    gd = g / safe_mag - skin_color[1]
    bd = b / safe_mag - skin_color[2]
    d = np.sqrt(rd * rd + gd * gd + bd * bd)

    skin = np.clip(1.0 - np.minimum(d, 1.0), 0.0, 1.0)
    return _unwrap(np.where(black, 0.0, skin))


def saturation(pixel: PixelLike):
    """HSL saturation of the pixel in [0, 1]."""
    r, g, b = _channels(pixel)
    r = r / 255.0
    g = g / 255.0
    b = b / 255.0
    maximum = np.maximum(np.maximum(r, g), b)
    minimum = np.minimum(np.minimum(r, g), b)

    d = maximum - minimum
    total = maximum + minimum
    gray = maximum == minimum
    # Guard the denominators of gray pixels, they are masked out below
    high = d / np.where(gray, 1.0, 2.0 - maximum - minimum)
    low = d / np.where(gray, 1.0, total)

    l = total / 2.0
    sat = np.where(l > 0.5, high, low)
    return _unwrap(np.where(gray, 0.0, sat))
