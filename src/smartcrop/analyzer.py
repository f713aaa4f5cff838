"""Saliency-driven search for the best crop of an image."""

import math
from typing import Iterable, Optional

from .candidates import CropCandidates
from .crop import ScoredCrop, _round
from .errors import WidthOrHeightAreNotGiven, ZeroSizedImage
from .image import Image, image_to_array
from .saliency import build_saliency_map
from .scoring import MapScorer
from .settings import CropSettings, DEFAULT_SETTINGS


class Analyzer:
    """Finds the crop of an image that best preserves its salient content."""

    def __init__(self, settings: Optional[CropSettings] = None):
        """
        Initialize analyzer.

        Args:
            settings: Scoring weights and thresholds (calibrated defaults if None)
        """
        self.settings = settings or DEFAULT_SETTINGS

    def find_best_crop(
        self,
        image: Image,
        width: int,
        height: int,
        verbose: bool = False
    ) -> ScoredCrop:
        """
        Find the best crop with the aspect ratio of width x height.

        The crop is as large as the image allows for the requested aspect
        ratio. A zero width or height means a square crop over the image's
        shorter side.

        Args:
            image: Image to analyze, resizable when prescaling is enabled
            width: Target width
            height: Target height
            verbose: Print analysis details

        Returns:
            Best ScoredCrop in original image coordinates

        Raises:
            WidthOrHeightAreNotGiven: Both width and height are zero
            ZeroSizedImage: Image width or height is zero
        """
        if width < 0 or height < 0:
            raise ValueError(f"Target dimensions must not be negative, got {width}x{height}")
        if width == 0 and height == 0:
            raise WidthOrHeightAreNotGiven()
        if image.width == 0 or image.height == 0:
            raise ZeroSizedImage(image.width, image.height)

        settings = self.settings
        original_width, original_height = image.width, image.height
        scale = min(
            image.width / width if width else math.inf,
            image.height / height if height else math.inf,
        )

        prescale_factor = 1.0
        if settings.prescale:
            prescale_factor = min(1.0, settings.prescale_min / min(image.width, image.height))

        crop_width = _round(width * scale * prescale_factor)
        crop_height = _round(height * scale * prescale_factor)
        real_min_scale = settings.real_min_scale(scale)

        if prescale_factor < 1.0:
            new_width = _round(image.width * prescale_factor)
            new_height = _round(new_width / image.width * image.height)
            image = image.resize(new_width, new_height)
            if verbose:
                print(f"Prescaled to {image.width}x{image.height} (factor {prescale_factor:.3f})")

        top_crop = self.analyse(image, crop_width, crop_height, real_min_scale, verbose=verbose)

        # Rounding back to original coordinates can overshoot by a pixel
        result = top_crop.scale(1.0 / prescale_factor)
        return ScoredCrop(
            crop=result.crop.clamp(original_width, original_height),
            score=result.score
        )

    def analyse(
        self,
        image: Image,
        crop_width: int,
        crop_height: int,
        real_min_scale: float,
        verbose: bool = False
    ) -> ScoredCrop:
        """
        Score every candidate crop of an (already prescaled) image.

        Args:
            image: Image to analyze
            crop_width: Crop width in image pixels (0 for the shorter side)
            crop_height: Crop height in image pixels (0 for the shorter side)
            real_min_scale: Smallest crop scale to try
            verbose: Print analysis details

        Returns:
            Highest-scoring crop in the image's own coordinates
        """
        settings = self.settings
        saliency = build_saliency_map(image_to_array(image), settings)

        candidates = CropCandidates(
            saliency.width, saliency.height,
            crop_width, crop_height,
            real_min_scale, settings
        )
        score_map = saliency.down_sample(settings.score_down_sample)
        scorer = MapScorer(score_map, settings)

        best = self._select_best(
            ScoredCrop(crop=crop, score=scorer.score(crop)) for crop in candidates
        )

        if verbose:
            print(f"Saliency map: {saliency.width}x{saliency.height}, "
                  f"score map: {score_map.width}x{score_map.height}")
            print(f"Best crop: {best.crop} (total {best.score.total:.6f})")

        return best

    @staticmethod
    def _select_best(scored: Iterable[ScoredCrop]) -> ScoredCrop:
        """Keep the maximum total; later candidates win ties."""
        best = None
        for candidate in scored:
            if best is None or candidate.score.total >= best.score.total:
                best = candidate
        return best


def find_best_crop(
    image: Image,
    width: int,
    height: int,
    settings: Optional[CropSettings] = None
) -> ScoredCrop:
    """Find the best crop using a one-off Analyzer."""
    return Analyzer(settings).find_best_crop(image, width, height)
