"""Click-based CLI entry point."""

import os
import sys
import json
import functools
import click
from PIL import Image

from . import __version__
from .analyzer import Analyzer
from .cropper import STRATEGIES
from .errors import SmartCropError
from .image import PILImage
from .preprocessor import ImagePreprocessor
from .utils import get_output_path, ensure_directory
from . import defaults


def common_options(f):
    """Decorator that adds shared cropping options to a Click command."""
    @click.option('--width', '-w', default=defaults.TARGET_WIDTH, type=int,
                  help=f'Target width in pixels (default: {defaults.TARGET_WIDTH})')
    @click.option('--height', '-h', default=defaults.TARGET_HEIGHT, type=int,
                  help=f'Target height in pixels (default: {defaults.TARGET_HEIGHT})')
    @click.option('--strategy', '-s', type=click.Choice(STRATEGIES, case_sensitive=False),
                  default=defaults.STRATEGY, help=f'Cropping strategy (default: {defaults.STRATEGY})')
    @click.option('--quality', '-q', default=defaults.JPEG_QUALITY, type=click.IntRange(1, 100),
                  help=f'JPEG quality 1-100 (default: {defaults.JPEG_QUALITY})')
    @click.option('--no-resize', is_flag=True,
                  help='Keep the crop at its original resolution instead of resizing to width x height')
    @click.option('--verbose', '-v', is_flag=True, help='Verbose output')
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        return f(*args, **kwargs)
    return wrapper


@click.group()
@click.version_option(version=__version__)
def cli():
    """smartcrop - content-aware image cropping."""
    pass


@cli.command()
@click.argument('input', type=click.Path(exists=True, dir_okay=False))
@click.option('--width', '-w', default=defaults.TARGET_WIDTH, type=int,
              help=f'Target width (default: {defaults.TARGET_WIDTH})')
@click.option('--height', '-h', default=defaults.TARGET_HEIGHT, type=int,
              help=f'Target height (default: {defaults.TARGET_HEIGHT})')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def analyze(input, width, height, verbose):
    """Print the best crop of INPUT as JSON."""
    try:
        with Image.open(input) as img:
            best = Analyzer().find_best_crop(PILImage(img), width, height, verbose=verbose)
    except SmartCropError as e:
        click.secho(f"Error: {e}", fg='red')
        raise click.Abort()

    click.echo(json.dumps(best.to_dict(), indent=2))


@cli.command()
@click.option('--input', '-i', required=True, type=click.Path(exists=True),
              help='Input image file path')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output directory or file path')
@common_options
def process(input, output, width, height, strategy, quality, no_resize, verbose):
    """Crop a single image."""
    try:
        preprocessor = ImagePreprocessor(
            target_width=width,
            target_height=height,
            strategy=strategy,
            quality=quality,
            resize=not no_resize
        )

        if os.path.isdir(output):
            output_path = get_output_path(input, output)
        else:
            output_path = output
            output_dir = os.path.dirname(output_path)
            if output_dir:
                ensure_directory(output_dir)

        if verbose:
            click.echo(f"Processing: {input}")
            click.echo(f"Target: {width}x{height}")
            click.echo(f"Strategy: {strategy}")
            click.echo()

        result = preprocessor.process_image(input, output_path, verbose=verbose)

        if result.success:
            click.secho("Success!", fg='green', bold=True)
            if verbose:
                click.echo(f"  Strategy: {result.strategy_used}")
                if result.crop_box:
                    click.echo(f"  Crop box: {result.crop_box}")
                click.echo(f"  Output: {result.output_path}")
        else:
            click.secho("Failed!", fg='red', bold=True)
            click.echo(f"  Error: {result.error_message}")
            raise click.Abort()

    except click.Abort:
        raise

    except Exception as e:
        click.secho(f"Error: {e}", fg='red')
        if verbose:
            raise
        raise click.Abort()


@cli.command()
@click.option('--input', '-i', required=True, type=click.Path(exists=True, file_okay=False),
              help='Input directory containing images')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output directory for processed images')
@click.option('--workers', default=defaults.WORKERS, type=click.IntRange(min=1),
              help=f'Number of parallel workers (default: {defaults.WORKERS})')
@click.option('--skip-existing', is_flag=True,
              help='Skip images that already exist in output directory')
@click.option('--recursive', '-r', is_flag=True,
              help='Process subdirectories recursively')
@click.option('--no-analysis', is_flag=True,
              help='Do not write <name>_analysis.json next to each output')
@common_options
def batch(input, output, workers, skip_existing, recursive, no_analysis,
          width, height, strategy, quality, no_resize, verbose):
    """Crop every image in a directory."""
    from .batch import run_batch

    config = {
        'width': width,
        'height': height,
        'strategy': strategy,
        'quality': quality,
        'resize': not no_resize,
        'skip_existing': skip_existing,
        'recursive': recursive,
        'write_analysis': not no_analysis,
    }

    sys.exit(run_batch(input, output, config, workers=workers))


if __name__ == '__main__':
    cli()
