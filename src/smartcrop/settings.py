"""Tuning parameters for the crop analyzer."""

from dataclasses import dataclass
from typing import Tuple

from . import defaults


@dataclass(frozen=True)
class CropSettings:
    """
    Immutable set of weights, thresholds and biases used by the analyzer.

    ``CropSettings()`` reproduces the calibrated defaults. Override individual
    fields to experiment with scoring policy without touching the analyzer.
    """
    prescale: bool = defaults.PRESCALE
    prescale_min: float = defaults.PRESCALE_MIN

    min_scale: float = defaults.MIN_SCALE
    max_scale: float = defaults.MAX_SCALE
    step: float = defaults.STEP
    scale_step: float = defaults.SCALE_STEP

    score_down_sample: int = defaults.SCORE_DOWN_SAMPLE
    outside_importance: float = defaults.OUTSIDE_IMPORTANCE
    edge_radius: float = defaults.EDGE_RADIUS
    edge_weight: float = defaults.EDGE_WEIGHT
    rule_of_thirds: bool = defaults.RULE_OF_THIRDS

    detail_weight: float = defaults.DETAIL_WEIGHT

    skin_color: Tuple[float, float, float] = defaults.SKIN_COLOR
    skin_weight: float = defaults.SKIN_WEIGHT
    skin_brightness_min: float = defaults.SKIN_BRIGHTNESS_MIN
    skin_brightness_max: float = defaults.SKIN_BRIGHTNESS_MAX
    skin_threshold: float = defaults.SKIN_THRESHOLD
    skin_bias: float = defaults.SKIN_BIAS

    saturation_weight: float = defaults.SATURATION_WEIGHT
    saturation_brightness_min: float = defaults.SATURATION_BRIGHTNESS_MIN
    saturation_brightness_max: float = defaults.SATURATION_BRIGHTNESS_MAX
    saturation_threshold: float = defaults.SATURATION_THRESHOLD
    saturation_bias: float = defaults.SATURATION_BIAS

    def __post_init__(self):
        if self.scale_step <= 0:
            raise ValueError(f"scale_step must be positive, got {self.scale_step}")
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.score_down_sample < 1:
            raise ValueError(f"score_down_sample must be >= 1, got {self.score_down_sample}")

    def real_min_scale(self, scale: float) -> float:
        """Clamp the inverse input scale ratio into [min_scale, max_scale]."""
        return min(self.max_scale, max(1.0 / scale, self.min_scale))


DEFAULT_SETTINGS = CropSettings()
