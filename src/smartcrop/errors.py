"""Errors raised by the crop analyzer."""


class SmartCropError(ValueError):
    """Base class for invalid analyzer input."""


class ZeroSizedImage(SmartCropError):
    """Image width or height is zero."""

    def __init__(self, width: int = 0, height: int = 0):
        super().__init__(f"Image has zero area ({width}x{height})")
        self.width = width
        self.height = height


class WidthOrHeightAreNotGiven(SmartCropError):
    """Both target crop dimensions are zero."""

    def __init__(self):
        super().__init__("Target width or height must be given")
