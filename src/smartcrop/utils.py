"""Shared file helpers."""

import os
from pathlib import Path
from typing import List
from PIL import Image


SUPPORTED_FORMATS = {'.jpg', '.jpeg', '.png', '.webp', '.bmp', '.tif', '.tiff'}


def is_image_file(path: str) -> bool:
    """Check if file has a supported image extension."""
    return Path(path).suffix.lower() in SUPPORTED_FORMATS


def ensure_directory(path: str) -> None:
    """Create directory (and parents) if missing."""
    Path(path).mkdir(parents=True, exist_ok=True)


def validate_image(image_path: str) -> bool:
    """Check that the file exists, has an image extension and decodes."""
    if not os.path.exists(image_path) or not is_image_file(image_path):
        return False

    try:
        with Image.open(image_path) as img:
            img.verify()
        return True
    except Exception:
        return False


def get_output_path(input_path: str, output_dir: str, suffix: str = "_crop") -> str:
    """Build the JPEG output path for an input image inside output_dir."""
    return os.path.join(output_dir, f"{Path(input_path).stem}{suffix}.jpg")


def list_images(input_dir: str, recursive: bool = False) -> List[str]:
    """
    Collect image files from a directory.

    Args:
        input_dir: Directory to scan
        recursive: Descend into subdirectories

    Returns:
        Sorted list of image file paths
    """
    if not recursive:
        return sorted(
            os.path.join(input_dir, name)
            for name in os.listdir(input_dir)
            if is_image_file(os.path.join(input_dir, name))
        )

    images = []
    for root, _dirs, files in os.walk(input_dir):
        for name in files:
            file_path = os.path.join(root, name)
            if is_image_file(file_path):
                images.append(file_path)
    return sorted(images)
