"""Tests for preprocessor module."""

import os
import tempfile
from PIL import Image
from smartcrop.preprocessor import ImagePreprocessor, ProcessingResult
from smartcrop.cropper import SmartCropper


def test_preprocessor_initialization():
    """Test preprocessor initialization."""
    preprocessor = ImagePreprocessor(480, 800)

    assert preprocessor.target_width == 480
    assert preprocessor.target_height == 800
    assert preprocessor.strategy == 'smart'
    assert preprocessor.quality == 95
    assert preprocessor.resize is True
    assert isinstance(preprocessor.cropper, SmartCropper)


def test_preprocessor_custom_components():
    """Test preprocessor with custom components."""
    cropper = SmartCropper(640, 480)

    preprocessor = ImagePreprocessor(
        640, 480,
        cropper=cropper,
        strategy='center',
        quality=90
    )

    assert preprocessor.cropper is cropper
    assert preprocessor.strategy == 'center'
    assert preprocessor.quality == 90


def test_process_image_portrait():
    """Test processing portrait image (no crop needed)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, 'input.jpg')
        output_path = os.path.join(tmpdir, 'output.jpg')

        img = Image.new('RGB', (480, 800), color='blue')
        img.save(input_path)

        preprocessor = ImagePreprocessor(480, 800)
        result = preprocessor.process_image(input_path, output_path)

        assert result.success is True
        assert result.output_path == output_path
        assert result.strategy_used == 'none'
        assert result.crop_box is None
        assert result.original_dimensions == (480, 800)

        with Image.open(output_path) as output_img:
            assert output_img.size == (480, 800)


def test_process_image_landscape_smart():
    """Test smart cropping of a landscape image."""
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, 'input.jpg')
        output_path = os.path.join(tmpdir, 'output.jpg')

        img = Image.new('RGB', (1920, 1080), color='green')
        img.save(input_path)

        preprocessor = ImagePreprocessor(480, 800)
        result = preprocessor.process_image(input_path, output_path)

        assert result.success is True
        assert result.strategy_used == 'smart'
        assert result.crop_box is not None
        left, top, right, bottom = result.crop_box
        assert 0 <= left < right <= 1920
        assert 0 <= top < bottom <= 1080
        assert set(result.score) == {'detail', 'saturation', 'skin', 'total'}

        with Image.open(output_path) as output_img:
            assert output_img.size == (480, 800)


def test_process_image_landscape_center():
    """Test center cropping of a landscape image."""
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, 'input.png')
        output_path = os.path.join(tmpdir, 'output.jpg')

        Image.new('RGB', (1000, 500), color='red').save(input_path)

        preprocessor = ImagePreprocessor(100, 100, strategy='center')
        result = preprocessor.process_image(input_path, output_path)

        assert result.success is True
        assert result.strategy_used == 'center'
        assert result.crop_box == (250, 0, 750, 500)
        assert result.score is None

        with Image.open(output_path) as output_img:
            assert output_img.size == (100, 100)


def test_process_image_without_resize():
    """Test the crop keeps its resolution when resizing is disabled."""
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, 'input.png')
        output_path = os.path.join(tmpdir, 'out', 'output.jpg')

        Image.new('RGB', (1000, 500), color='white').save(input_path)

        preprocessor = ImagePreprocessor(100, 100, strategy='center', resize=False)
        result = preprocessor.process_image(input_path, output_path)

        assert result.success is True
        with Image.open(output_path) as output_img:
            assert output_img.size == (500, 500)


def test_process_image_invalid():
    """Test processing invalid image."""
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, 'invalid.jpg')
        output_path = os.path.join(tmpdir, 'output.jpg')

        with open(input_path, 'w') as f:
            f.write('not an image')

        preprocessor = ImagePreprocessor(480, 800)
        result = preprocessor.process_image(input_path, output_path)

        assert result.success is False
        assert result.error_message is not None
        assert not os.path.exists(output_path)


def test_process_image_nonexistent():
    """Test processing nonexistent image."""
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, 'nonexistent.jpg')
        output_path = os.path.join(tmpdir, 'output.jpg')

        preprocessor = ImagePreprocessor(480, 800)
        result = preprocessor.process_image(input_path, output_path)

        assert result.success is False
        assert result.error_message is not None


def test_processing_result_to_dict():
    """Test results serialize to plain dictionaries."""
    result = ProcessingResult(success=True, input_path='a.jpg', crop_box=(0, 0, 10, 10))

    data = result.to_dict()

    assert data['success'] is True
    assert data['crop_box'] == (0, 0, 10, 10)
    assert data['score'] is None


def test_save_output():
    """Test save_output method."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, 'test.jpg')

        img = Image.new('RGB', (480, 800), color='red')
        preprocessor = ImagePreprocessor(480, 800, quality=85)

        preprocessor.save_output(img, output_path)

        with Image.open(output_path) as saved_img:
            assert saved_img.size == (480, 800)
            assert saved_img.format == 'JPEG'


def test_save_output_with_exif():
    """Test save_output preserves EXIF data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        img = Image.new('RGB', (480, 800), color='red')
        exif = Image.Exif()
        exif[0x010F] = 'FrameMaker'  # Make

        output_path = os.path.join(tmpdir, 'output.jpg')
        preprocessor = ImagePreprocessor(480, 800)
        preprocessor.save_output(img, output_path, exif_data=exif.tobytes())

        with Image.open(output_path) as saved_img:
            assert saved_img.getexif().get(0x010F) == 'FrameMaker'
