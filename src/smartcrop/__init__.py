"""Content-aware cropping driven by a skin, detail and saturation saliency map."""

__version__ = "0.1.0"

from .analyzer import Analyzer, find_best_crop
from .color import RGB
from .crop import Crop, Score, ScoredCrop
from .errors import SmartCropError, ZeroSizedImage, WidthOrHeightAreNotGiven
from .image import ArrayImage, PILImage
from .settings import CropSettings

__all__ = [
    'Analyzer',
    'ArrayImage',
    'Crop',
    'CropSettings',
    'PILImage',
    'RGB',
    'Score',
    'ScoredCrop',
    'SmartCropError',
    'WidthOrHeightAreNotGiven',
    'ZeroSizedImage',
    'find_best_crop',
]
