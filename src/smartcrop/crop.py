"""Crop rectangles and their scores."""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


def _round(value: float) -> int:
    """Round half away from zero (crop fields are never negative)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Crop:
    """Integer crop rectangle."""
    x: int
    y: int
    width: int
    height: int

    def scale(self, ratio: float) -> 'Crop':
        """Scale every field by ratio, rounding each independently."""
        return Crop(
            x=_round(self.x * ratio),
            y=_round(self.y * ratio),
            width=_round(self.width * ratio),
            height=_round(self.height * ratio),
        )

    def clamp(self, width: int, height: int) -> 'Crop':
        """Shrink and shift the crop so it lies inside a width x height image."""
        crop_width = min(self.width, width)
        crop_height = min(self.height, height)
        x = min(self.x, width - crop_width)
        y = min(self.y, height - crop_height)
        return Crop(x=x, y=y, width=crop_width, height=crop_height)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) box, as accepted by ``PIL.Image.crop``."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class Score:
    """Raw weighted channel sums and the area-normalised total used for ranking."""
    detail: float
    saturation: float
    skin: float
    total: float


@dataclass(frozen=True)
class ScoredCrop:
    """A crop paired with its score."""
    crop: Crop
    score: Score

    def scale(self, ratio: float) -> 'ScoredCrop':
        return ScoredCrop(crop=self.crop.scale(ratio), score=self.score)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
