"""Cropping strategies applied to Pillow images."""

from typing import Optional, Tuple
from PIL import Image

from .analyzer import Analyzer
from .crop import Crop, Score
from .image import PILImage
from .settings import CropSettings

STRATEGIES = ('smart', 'center')


class SmartCropper:
    """Crops images to a target aspect ratio."""

    def __init__(
        self,
        target_width: int,
        target_height: int,
        analyzer: Optional[Analyzer] = None,
        settings: Optional[CropSettings] = None
    ):
        """
        Initialize cropper with target dimensions.

        Args:
            target_width: Target width in pixels
            target_height: Target height in pixels
            analyzer: Saliency analyzer (created from settings if None)
            settings: Analyzer tuning, ignored when analyzer is given
        """
        if target_width <= 0 or target_height <= 0:
            raise ValueError(f"Target dimensions must be positive, got {target_width}x{target_height}")

        self.target_width = target_width
        self.target_height = target_height
        self.target_aspect = target_height / target_width
        self.analyzer = analyzer or Analyzer(settings)

        # Store last crop info for reporting
        self.last_crop_box: Optional[Tuple[int, int, int, int]] = None
        self.last_score: Optional[Score] = None

    def crop_image(
        self,
        image: Image.Image,
        strategy: str = 'smart',
        verbose: bool = False
    ) -> Image.Image:
        """
        Crop image using specified strategy.

        Args:
            image: PIL Image to crop
            strategy: Cropping strategy ('smart' or 'center')
            verbose: Print analysis details

        Returns:
            Cropped PIL Image
        """
        if strategy == 'smart':
            return self.crop_smart(image, verbose=verbose)
        elif strategy == 'center':
            return self.crop_center(image)
        raise ValueError(f"Unknown cropping strategy: {strategy}")

    def crop_smart(self, image: Image.Image, verbose: bool = False) -> Image.Image:
        """Crop to the saliency analyzer's best window."""
        best = self.analyzer.find_best_crop(
            PILImage(image), self.target_width, self.target_height, verbose=verbose
        )
        self.last_crop_box = best.crop.box
        self.last_score = best.score
        return image.crop(self.last_crop_box)

    def crop_center(self, image: Image.Image) -> Image.Image:
        """Largest centered window with the target aspect ratio."""
        width, height = image.size
        crop = self._calculate_center_crop(width, height)

        self.last_crop_box = crop.box
        self.last_score = None
        return image.crop(self.last_crop_box)

    def _calculate_center_crop(self, width: int, height: int) -> Crop:
        current_aspect = height / width

        if current_aspect < self.target_aspect:
            # Image is too wide - crop width, keep height
            crop_width = min(width, int(round(height / self.target_aspect)))
            crop_height = height
        else:
            # Image is too tall - crop height, keep width
            crop_width = width
            crop_height = min(height, int(round(width * self.target_aspect)))

        left = (width - crop_width) // 2
        top = (height - crop_height) // 2
        return Crop(x=left, y=top, width=max(crop_width, 1), height=max(crop_height, 1))

    def needs_cropping(self, image: Image.Image) -> bool:
        """
        Check if image needs cropping to reach target aspect ratio.

        Args:
            image: PIL Image

        Returns:
            True if image aspect ratio doesn't match target (within tolerance)
        """
        width, height = image.size
        current_aspect = height / width
        # Crop if aspect ratio differs from target (tolerance: 1%)
        return abs(current_aspect - self.target_aspect) > 0.01
