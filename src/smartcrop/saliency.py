"""Saliency map construction and score downsampling."""

import numpy as np

from .color import RGB, lightness, skin_likeness, saturation, bounds, round_half_up
from .settings import CropSettings, DEFAULT_SETTINGS

SKIN_CHANNEL = 0
DETAIL_CHANNEL = 1
SATURATION_CHANNEL = 2


class SaliencyMap:
    """
    Three-channel importance map.

    Channel r holds skin likeness, g holds edge detail and b holds
    saturation, each in 0..255. Pixels are stored row-major as a
    (height, width, 3) uint8 array.
    """

    def __init__(self, pixels: np.ndarray):
        self.pixels = pixels

    @classmethod
    def new(cls, width: int, height: int) -> 'SaliencyMap':
        """Create an all-white map."""
        return cls(np.full((height, width, 3), 255, dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def get(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[y, x]
        return RGB(int(r), int(g), int(b))

    def set(self, x: int, y: int, color: RGB) -> None:
        self.pixels[y, x] = color

    def set_channel(self, channel: int, values: np.ndarray) -> None:
        """Overwrite one channel, leaving the other two untouched."""
        self.pixels[:, :, channel] = values

    def down_sample(self, factor: int) -> 'SaliencyMap':
        """
        Block-reduce the map by an integer factor.

        Skin and detail blend the block mean with the block maximum so small,
        strongly salient regions survive; saturation uses the plain mean.
        Trailing rows and columns that do not fill a whole block are dropped.

        Args:
            factor: Block size, at least 1

        Returns:
            New map of size floor(width / factor) x floor(height / factor)
        """
        if factor < 1:
            raise ValueError(f"Down sample factor must be >= 1, got {factor}")

        width = self.width // factor
        height = self.height // factor
        if width == 0 or height == 0:
            return SaliencyMap(np.zeros((height, width, 3), dtype=np.uint8))

        blocks = self.pixels[:height * factor, :width * factor].astype(np.float64)
        blocks = blocks.reshape(height, factor, width, factor, 3)

        # Integer sums below 2**53 are exact in float64
        mean = blocks.sum(axis=(1, 3)) * (1.0 / (factor * factor))
        peak = blocks.max(axis=(1, 3))

        output = np.empty((height, width, 3), dtype=np.float64)
        output[..., SKIN_CHANNEL] = mean[..., SKIN_CHANNEL] * 0.5 + peak[..., SKIN_CHANNEL] * 0.5
        output[..., DETAIL_CHANNEL] = mean[..., DETAIL_CHANNEL] * 0.7 + peak[..., DETAIL_CHANNEL] * 0.3
        output[..., SATURATION_CHANNEL] = mean[..., SATURATION_CHANNEL]

        return SaliencyMap(round_half_up(output).astype(np.uint8))


def edge_channel(pixels: np.ndarray) -> np.ndarray:
    """
    Discrete Laplacian of lightness.

    Border pixels keep their own lightness, interior pixels get
    4*L - L(up) - L(left) - L(right) - L(down).
    """
    cies = lightness(pixels)
    detail = np.array(cies, dtype=np.float64, copy=True)

    if detail.shape[0] > 2 and detail.shape[1] > 2:
        detail[1:-1, 1:-1] = (
            cies[1:-1, 1:-1] * 4.0
            - cies[:-2, 1:-1]
            - cies[1:-1, :-2]
            - cies[1:-1, 2:]
            - cies[2:, 1:-1]
        )

    return bounds(detail)


def skin_channel(pixels: np.ndarray, settings: CropSettings = DEFAULT_SETTINGS) -> np.ndarray:
    """Skin response for pixels in the allowed brightness window, zero elsewhere."""
    light = lightness(pixels) / 255.0
    skin = skin_likeness(pixels, settings.skin_color)

    detected = (
        (skin > settings.skin_threshold)
        & (light >= settings.skin_brightness_min)
        & (light <= settings.skin_brightness_max)
    )
    value = (skin - settings.skin_threshold) * (255.0 / (1.0 - settings.skin_threshold))
    return np.where(detected, bounds(value), 0).astype(np.uint8)


def saturation_channel(pixels: np.ndarray, settings: CropSettings = DEFAULT_SETTINGS) -> np.ndarray:
    """Saturation response for pixels in the allowed brightness window, zero elsewhere."""
    light = lightness(pixels) / 255.0
    sat = saturation(pixels)

    detected = (
        (sat > settings.saturation_threshold)
        & (light >= settings.saturation_brightness_min)
        & (light <= settings.saturation_brightness_max)
    )
    value = (sat - settings.saturation_threshold) * (255.0 / (1.0 - settings.saturation_threshold))
    return np.where(detected, bounds(value), 0).astype(np.uint8)


def build_saliency_map(pixels: np.ndarray, settings: CropSettings = DEFAULT_SETTINGS) -> SaliencyMap:
    """
    Run the three detectors over an image and combine them into one map.

    Every detector reads the original pixels only, so the order in which
    channels are written does not matter.

    Args:
        pixels: (height, width, 3) uint8 image array
        settings: Detector thresholds

    Returns:
        SaliencyMap at image resolution
    """
    pixels = np.asarray(pixels, dtype=np.uint8)
    height, width = pixels.shape[:2]

    saliency = SaliencyMap.new(width, height)
    saliency.set_channel(DETAIL_CHANNEL, edge_channel(pixels))
    saliency.set_channel(SKIN_CHANNEL, skin_channel(pixels, settings))
    saliency.set_channel(SATURATION_CHANNEL, saturation_channel(pixels, settings))
    return saliency
