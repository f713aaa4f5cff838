"""Positional importance weighting and crop scoring."""

import numpy as np

from .crop import Crop, Score
from .saliency import SaliencyMap, SKIN_CHANNEL, DETAIL_CHANNEL, SATURATION_CHANNEL
from .settings import CropSettings, DEFAULT_SETTINGS


def thirds(x):
    """Triangular bump peaking at 1/3, zero outside a narrow window."""
    x = (np.fmod(x - (1.0 / 3.0) + 1.0, 2.0) * 0.5 - 0.5) * 16.0
    return np.maximum(1.0 - x * x, 0.0)


def importance(crop: Crop, x, y, settings: CropSettings = DEFAULT_SETTINGS):
    """
    Signed weight of a pixel's contribution to a candidate crop.

    Pixels outside the crop are penalised with a fixed negative weight.
    Inside, weight falls off from the center, fades sharply near the crop
    edges and, with rule of thirds enabled, is boosted around the third
    lines.

    Args:
        crop: Candidate crop
        x: Pixel x coordinate, scalar or numpy array
        y: Pixel y coordinate, scalar or numpy array of the same shape
        settings: Importance tunables

    Returns:
        float for scalar coordinates, otherwise an array
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    outside = (
        (x < crop.x) | (x >= crop.x + crop.width)
        | (y < crop.y) | (y >= crop.y + crop.height)
    )

    xf = (x - crop.x) / crop.width
    yf = (y - crop.y) / crop.height

    px = np.abs(0.5 - xf) * 2.0
    py = np.abs(0.5 - yf) * 2.0

    dx = np.maximum(px - 1.0 + settings.edge_radius, 0.0)
    dy = np.maximum(py - 1.0 + settings.edge_radius, 0.0)
    d = (dx * dx + dy * dy) * settings.edge_weight

    s = 1.41 - np.sqrt(px * px + py * py)
    if settings.rule_of_thirds:
        s = s + (np.maximum(0.0, s + d + 0.5) * 1.2) * (thirds(px) + thirds(py))

    result = np.where(outside, settings.outside_importance, s + d)
    if result.ndim == 0:
        return float(result)
    return result


class MapScorer:
    """
    Scores crops against one downsampled saliency map.

    Per-pixel channel weights do not depend on the crop, so they are computed
    once and reused for every candidate.
    """

    def __init__(self, score_map: SaliencyMap, settings: CropSettings = DEFAULT_SETTINGS):
        self.settings = settings
        factor = float(settings.score_down_sample)

        pixels = score_map.pixels.astype(np.float64)
        detail = pixels[..., DETAIL_CHANNEL] / 255.0
        self._detail = detail
        self._skin = pixels[..., SKIN_CHANNEL] / 255.0 * (detail + settings.skin_bias)
        self._saturation = pixels[..., SATURATION_CHANNEL] / 255.0 * (detail + settings.saturation_bias)

        # Importance is evaluated in pre-downsample coordinates
        ys, xs = np.mgrid[0:score_map.height, 0:score_map.width]
        self._xs = xs * factor
        self._ys = ys * factor

    def score(self, crop: Crop) -> Score:
        settings = self.settings
        imp = importance(crop, self._xs, self._ys, settings)

        skin = float(np.sum(self._skin * imp))
        detail = float(np.sum(self._detail * imp))
        saturation = float(np.sum(self._saturation * imp))

        total = (
            detail * settings.detail_weight
            + skin * settings.skin_weight
            + saturation * settings.saturation_weight
        ) / crop.width / crop.height

        return Score(detail=detail, saturation=saturation, skin=skin, total=total)


def score(score_map: SaliencyMap, crop: Crop, settings: CropSettings = DEFAULT_SETTINGS) -> Score:
    """Score a single crop against a downsampled saliency map."""
    return MapScorer(score_map, settings).score(crop)
