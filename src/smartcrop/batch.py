"""Batch processing logic for directories of images."""

import os
import json
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional

from tqdm import tqdm

from .preprocessor import ImagePreprocessor, ProcessingResult
from .cropper import SmartCropper
from .utils import get_output_path, ensure_directory, list_images
from . import defaults


@dataclass
class BatchStats:
    """Statistics for batch processing."""
    total: int = 0
    success: int = 0
    failed: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)


# Preprocessor instance (one per worker process)
_preprocessor: Optional[ImagePreprocessor] = None


def create_preprocessor(config) -> ImagePreprocessor:
    """Build a preprocessor from a batch configuration dictionary."""
    cropper = SmartCropper(
        target_width=config['width'],
        target_height=config['height']
    )
    return ImagePreprocessor(
        target_width=config['width'],
        target_height=config['height'],
        cropper=cropper,
        strategy=config.get('strategy', defaults.STRATEGY),
        quality=config.get('quality', defaults.JPEG_QUALITY),
        resize=config.get('resize', defaults.RESIZE_TO_TARGET)
    )


def init_worker(config):
    """
    Initialize worker process.

    Runs once per worker process so every image handled by that worker
    reuses the same preprocessor.

    Args:
        config: Configuration dictionary with crop settings
    """
    global _preprocessor
    _preprocessor = create_preprocessor(config)


def write_analysis(result: ProcessingResult) -> Optional[str]:
    """Write the crop analysis next to the output image, returning its path."""
    if not result.success or not result.output_path:
        return None

    json_path = os.path.splitext(result.output_path)[0] + '_analysis.json'
    analysis_data = {
        'filename': os.path.basename(result.input_path),
        'original_dimensions': result.original_dimensions,
        'crop_box': result.crop_box,
        'score': result.score,
        'strategy_used': result.strategy_used,
    }
    with open(json_path, 'w') as f:
        json.dump(analysis_data, f, indent=2)
    return json_path


def process_single_image(args) -> ProcessingResult:
    """
    Process a single image using the worker's preprocessor.

    Args:
        args: Tuple of (input_path, output_path, config_dict)

    Returns:
        ProcessingResult
    """
    global _preprocessor

    input_path, output_path, config = args

    if config.get('skip_existing') and os.path.exists(output_path):
        return ProcessingResult(
            success=True,
            input_path=input_path,
            output_path=output_path,
            strategy_used='skipped'
        )

    if _preprocessor is None:
        _preprocessor = create_preprocessor(config)

    result = _preprocessor.process_image(input_path, output_path, verbose=False)

    if config.get('write_analysis', True):
        try:
            write_analysis(result)
        except OSError as e:
            result.error_message = f"Could not write analysis: {e}"

    return result


def run_batch(input_dir, output_dir, config, workers=defaults.WORKERS):
    """
    Run batch processing on a directory of images.

    Args:
        input_dir: Input directory containing images
        output_dir: Output directory for processed images
        config: Configuration dictionary for worker processes
        workers: Number of parallel workers

    Returns:
        0 on success, 1 if any failures
    """
    if not os.path.isdir(input_dir):
        print(f"Error: Input directory does not exist: {input_dir}")
        return 1

    ensure_directory(output_dir)

    print("Scanning for images...")
    images = list_images(input_dir, recursive=config.get('recursive', False))

    if not images:
        print("No images found in input directory")
        return 0

    print(f"Found {len(images)} images")

    tasks = [
        (img, get_output_path(img, output_dir), config)
        for img in images
    ]

    stats = BatchStats(total=len(images))

    print(f"\nProcessing images (strategy: {config['strategy']}, workers: {workers})...")
    print(f"Target: {config['width']}x{config['height']}\n")

    with ProcessPoolExecutor(max_workers=workers, initializer=init_worker, initargs=(config,)) as executor:
        futures = {executor.submit(process_single_image, task): task for task in tasks}

        with tqdm(total=len(tasks), unit='img') as pbar:
            for future in as_completed(futures):
                task = futures[future]
                input_path = task[0]

                try:
                    result = future.result()
                    if result.success:
                        if result.strategy_used == 'skipped':
                            stats.skipped += 1
                        else:
                            stats.success += 1
                    else:
                        stats.failed += 1
                        stats.errors.append(f"{input_path}: {result.error_message}")
                except Exception as e:
                    stats.failed += 1
                    stats.errors.append(f"{input_path}: {str(e)}")

                pbar.update(1)

    print_summary(stats, output_dir)

    return 0 if stats.failed == 0 else 1


def print_summary(stats: BatchStats, output_dir: str) -> None:
    """Print the end-of-run summary block."""
    print("\n" + "=" * 60)
    print("BATCH PROCESSING SUMMARY")
    print("=" * 60)
    print(f"Total images:     {stats.total}")
    print(f"Successful:       {stats.success}")
    if stats.skipped > 0:
        print(f"Skipped:          {stats.skipped}")
    print(f"Failed:           {stats.failed}")

    if stats.errors:
        print("\nErrors:")
        for error in stats.errors[:10]:
            print(f"  - {error}")
        if len(stats.errors) > 10:
            print(f"  ... and {len(stats.errors) - 10} more")

    print(f"\nOutput directory: {output_dir}")
    print("=" * 60)
