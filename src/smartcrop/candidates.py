"""Crop candidate enumeration."""

import itertools
from typing import Iterator

from .crop import Crop, _round
from .settings import CropSettings, DEFAULT_SETTINGS


def _stepping(step: float, extent: float, size: float) -> Iterator[float]:
    """Grid positions 0, step, 2*step, ... while a window of size fits in extent."""
    return itertools.takewhile(
        lambda pos: pos + size <= extent,
        (i * step for i in itertools.count())
    )


class CropCandidates:
    """
    Lazy, restartable sequence of crop rectangles over a scale and position grid.

    Iterating runs the sweep from scratch, so the same instance can be
    consumed more than once. A target dimension of 0 stands for the map's
    smaller dimension. When no scaled window fits, the whole map is the
    single candidate.
    """

    def __init__(
        self,
        width: int,
        height: int,
        crop_width: int,
        crop_height: int,
        real_min_scale: float,
        settings: CropSettings = DEFAULT_SETTINGS
    ):
        self.width = width
        self.height = height
        self.crop_width = crop_width
        self.crop_height = crop_height
        self.real_min_scale = real_min_scale
        self.settings = settings

    def __iter__(self) -> Iterator[Crop]:
        found = False
        for crop in self._sweep():
            found = True
            yield crop

        if not found and self.width > 0 and self.height > 0:
            yield Crop(x=0, y=0, width=self.width, height=self.height)

    def _sweep(self) -> Iterator[Crop]:
        width = float(self.width)
        height = float(self.height)
        min_dimension = min(width, height)

        crop_w = float(self.crop_width) if self.crop_width != 0 else min_dimension
        crop_h = float(self.crop_height) if self.crop_height != 0 else min_dimension

        x_step = min(self.settings.step, width)
        y_step = min(self.settings.step, height)
        # Zero steps would never advance past position 0
        if x_step <= 0 or y_step <= 0:
            return

        scale = self.settings.max_scale
        while scale >= self.real_min_scale:
            scaled_w = crop_w * scale
            scaled_h = crop_h * scale
            if _round(scaled_w) == 0 or _round(scaled_h) == 0:
                break
            for y in _stepping(y_step, height, scaled_h):
                for x in _stepping(x_step, width, scaled_w):
                    yield Crop(
                        x=_round(x),
                        y=_round(y),
                        width=_round(scaled_w),
                        height=_round(scaled_h),
                    )
            scale -= self.settings.scale_step
