"""Image capability consumed by the analyzer, plus numpy and Pillow adapters."""

from typing import Protocol, runtime_checkable
import numpy as np
import cv2
from PIL import Image as PILImageModule

from .color import RGB


@runtime_checkable
class Image(Protocol):
    """Read-only pixel source."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get(self, x: int, y: int) -> RGB: ...


@runtime_checkable
class ResizableImage(Image, Protocol):
    """Pixel source that can produce a resampled copy of itself."""

    def resize(self, width: int, height: int) -> Image: ...


def image_to_array(image: Image) -> np.ndarray:
    """
    Read every pixel of an image into a (height, width, 3) uint8 array.

    Adapters exposing ``to_array()`` are read in one call, anything else is
    read pixel by pixel through ``get``.
    """
    if hasattr(image, 'to_array'):
        return np.asarray(image.to_array(), dtype=np.uint8)

    pixels = np.zeros((image.height, image.width, 3), dtype=np.uint8)
    for y in range(image.height):
        for x in range(image.width):
            pixels[y, x] = image.get(x, y)
    return pixels


class ArrayImage:
    """Image backed by a (height, width, 3) uint8 numpy array."""

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) array, got shape {pixels.shape}")
        self.pixels = pixels

    @classmethod
    def filled(cls, width: int, height: int, color: RGB) -> 'ArrayImage':
        """Create a single-color image."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[...] = color
        return cls(pixels)

    @classmethod
    def from_function(cls, width: int, height: int, generate) -> 'ArrayImage':
        """Create an image from a ``generate(x, y) -> RGB`` callback."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        for y in range(height):
            for x in range(width):
                pixels[y, x] = generate(x, y)
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def get(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[y, x]
        return RGB(int(r), int(g), int(b))

    def resize(self, width: int, height: int) -> 'ArrayImage':
        """Resample with area interpolation (the analyzer only ever shrinks)."""
        if (width, height) == (self.width, self.height):
            return self
        if width == 0 or height == 0:
            return ArrayImage(np.zeros((height, width, 3), dtype=np.uint8))
        resized = cv2.resize(self.pixels, (width, height), interpolation=cv2.INTER_AREA)
        return ArrayImage(resized)

    def to_array(self) -> np.ndarray:
        return self.pixels


class PILImage:
    """Adapter exposing a Pillow image through the analyzer's image capability."""

    def __init__(self, image: PILImageModule.Image):
        # Palette, alpha and grayscale modes are flattened to plain RGB
        if image.mode != 'RGB':
            image = image.convert('RGB')
        self.image = image

    @property
    def width(self) -> int:
        return self.image.size[0]

    @property
    def height(self) -> int:
        return self.image.size[1]

    def get(self, x: int, y: int) -> RGB:
        r, g, b = self.image.getpixel((x, y))
        return RGB(r, g, b)

    def resize(self, width: int, height: int) -> 'PILImage':
        if (width, height) == self.image.size:
            return self
        return PILImage(self.image.resize((width, height), PILImageModule.LANCZOS))

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image, dtype=np.uint8).reshape(self.height, self.width, 3)
