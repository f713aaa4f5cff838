"""Single-file crop pipeline: load, crop, resize, save."""

import os
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Tuple
from PIL import Image, ImageOps

from .cropper import SmartCropper
from .utils import validate_image, ensure_directory
from . import defaults


@dataclass
class ProcessingResult:
    """Result of image processing."""
    success: bool
    input_path: str
    output_path: Optional[str] = None
    error_message: Optional[str] = None
    strategy_used: Optional[str] = None
    original_dimensions: Optional[Tuple[int, int]] = None  # (width, height)
    crop_box: Optional[Tuple[int, int, int, int]] = None  # (left, top, right, bottom)
    score: Optional[Dict[str, float]] = None  # Saliency score of the chosen crop

    def to_dict(self) -> Dict:
        return asdict(self)


class ImagePreprocessor:
    """Crops image files to a target size."""

    def __init__(
        self,
        target_width: int,
        target_height: int,
        cropper: Optional[SmartCropper] = None,
        strategy: str = defaults.STRATEGY,
        quality: int = defaults.JPEG_QUALITY,
        resize: bool = defaults.RESIZE_TO_TARGET
    ):
        """
        Initialize preprocessor.

        Args:
            target_width: Target output width in pixels
            target_height: Target output height in pixels
            cropper: Image cropper (created if None)
            strategy: Cropping strategy ('smart' or 'center')
            quality: JPEG quality (1-100)
            resize: Resize the crop to exactly target_width x target_height
        """
        self.target_width = target_width
        self.target_height = target_height
        self.strategy = strategy
        self.quality = quality
        self.resize = resize

        self.cropper = cropper or SmartCropper(target_width, target_height)

    def process_image(
        self,
        input_path: str,
        output_path: str,
        verbose: bool = False
    ) -> ProcessingResult:
        """
        Process single image through the pipeline.

        Args:
            input_path: Path to input image
            output_path: Path to save processed image
            verbose: Print processing details

        Returns:
            ProcessingResult with outcome details
        """
        if not validate_image(input_path):
            return ProcessingResult(
                success=False,
                input_path=input_path,
                error_message="Invalid or corrupted image file"
            )

        try:
            with Image.open(input_path) as img:
                # Apply EXIF orientation (fixes rotated images)
                img = ImageOps.exif_transpose(img)

                exif_data = img.info.get('exif', None)

                if img.mode != 'RGB':
                    img = img.convert('RGB')

                original_dimensions = img.size

                if verbose:
                    print(f"Input image: {img.size[0]}x{img.size[1]}")

                crop_box = None
                score = None

                if self.cropper.needs_cropping(img):
                    if verbose:
                        print(f"Aspect ratio mismatch, applying {self.strategy} cropping...")

                    img = self.cropper.crop_image(img, self.strategy, verbose=verbose)
                    crop_box = self.cropper.last_crop_box
                    if self.cropper.last_score is not None:
                        score = asdict(self.cropper.last_score)
                    strategy_used = self.strategy

                    if verbose:
                        print(f"Cropped to: {img.size[0]}x{img.size[1]} at {crop_box}")
                else:
                    if verbose:
                        print("Aspect ratio already matches, skipping crop")
                    strategy_used = 'none'

                if self.resize and img.size != (self.target_width, self.target_height):
                    img = img.resize(
                        (self.target_width, self.target_height),
                        Image.LANCZOS
                    )
                    if verbose:
                        print(f"Resized to target: {self.target_width}x{self.target_height}")

                self.save_output(img, output_path, exif_data, verbose=verbose)

            return ProcessingResult(
                success=True,
                input_path=input_path,
                output_path=output_path,
                strategy_used=strategy_used,
                original_dimensions=original_dimensions,
                crop_box=crop_box,
                score=score
            )

        except Exception as e:
            return ProcessingResult(
                success=False,
                input_path=input_path,
                error_message=str(e)
            )

    def save_output(
        self,
        image: Image.Image,
        output_path: str,
        exif_data: Optional[bytes] = None,
        verbose: bool = False
    ) -> None:
        """
        Save processed image as JPEG, preserving EXIF when available.

        Args:
            image: PIL Image to save
            output_path: Path to save to
            exif_data: EXIF data to preserve
            verbose: Print save details
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            ensure_directory(output_dir)

        save_kwargs = {
            'format': 'JPEG',
            'quality': self.quality,
            'optimize': True
        }

        if exif_data:
            save_kwargs['exif'] = exif_data

        image.save(output_path, **save_kwargs)

        if verbose:
            file_size = os.path.getsize(output_path) / 1024
            print(f"Saved to: {output_path} ({file_size:.1f} KB)")
