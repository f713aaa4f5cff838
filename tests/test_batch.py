"""Tests for batch module."""

import json
import os
import pytest
from PIL import Image
from smartcrop import batch
from smartcrop.batch import BatchStats, process_single_image, run_batch, write_analysis
from smartcrop.preprocessor import ProcessingResult


@pytest.fixture
def config():
    return {
        'width': 100,
        'height': 100,
        'strategy': 'center',
        'quality': 90,
        'resize': True,
        'skip_existing': False,
        'recursive': False,
        'write_analysis': True,
    }


@pytest.fixture(autouse=True)
def fresh_worker(monkeypatch):
    monkeypatch.setattr(batch, '_preprocessor', None)


def make_image(path, size=(300, 200), color='white'):
    Image.new('RGB', size, color=color).save(path)
    return str(path)


def test_write_analysis(tmp_path):
    """Test the sidecar JSON sits next to the output."""
    result = ProcessingResult(
        success=True,
        input_path='/in/photo.png',
        output_path=str(tmp_path / 'photo_crop.jpg'),
        strategy_used='smart',
        original_dimensions=(300, 200),
        crop_box=(50, 0, 250, 200),
        score={'detail': 1.0, 'saturation': 0.0, 'skin': 0.0, 'total': 0.1}
    )

    json_path = write_analysis(result)

    assert json_path == str(tmp_path / 'photo_crop_analysis.json')
    with open(json_path) as f:
        data = json.load(f)
    assert data['filename'] == 'photo.png'
    assert data['crop_box'] == [50, 0, 250, 200]
    assert data['score']['total'] == 0.1


def test_write_analysis_skips_failures():
    """Test failed results produce no sidecar."""
    assert write_analysis(ProcessingResult(success=False, input_path='x.jpg')) is None


def test_process_single_image(tmp_path, config):
    """Test one image is cropped and analysed."""
    input_path = make_image(tmp_path / 'in.png')
    output_path = str(tmp_path / 'in_crop.jpg')

    result = process_single_image((input_path, output_path, config))

    assert result.success is True
    assert result.crop_box == (50, 0, 250, 200)
    assert os.path.exists(output_path)
    assert os.path.exists(str(tmp_path / 'in_crop_analysis.json'))


def test_process_single_image_without_analysis(tmp_path, config):
    """Test analysis output can be disabled."""
    config['write_analysis'] = False
    input_path = make_image(tmp_path / 'in.png')
    output_path = str(tmp_path / 'in_crop.jpg')

    process_single_image((input_path, output_path, config))

    assert not os.path.exists(str(tmp_path / 'in_crop_analysis.json'))


def test_process_single_image_skip_existing(tmp_path, config):
    """Test existing outputs are left alone."""
    config['skip_existing'] = True
    input_path = make_image(tmp_path / 'in.png')
    output_path = make_image(tmp_path / 'in_crop.jpg', size=(10, 10))

    result = process_single_image((input_path, output_path, config))

    assert result.success is True
    assert result.strategy_used == 'skipped'
    with Image.open(output_path) as img:
        assert img.size == (10, 10)


def test_run_batch(tmp_path, config):
    """Test a directory is processed end to end."""
    input_dir = tmp_path / 'input'
    output_dir = tmp_path / 'output'
    input_dir.mkdir()
    make_image(input_dir / 'one.png')
    make_image(input_dir / 'two.jpg', size=(200, 400))
    (input_dir / 'readme.txt').write_text('not an image')

    exit_code = run_batch(str(input_dir), str(output_dir), config, workers=1)

    assert exit_code == 0
    for stem in ('one', 'two'):
        with Image.open(output_dir / f'{stem}_crop.jpg') as img:
            assert img.size == (100, 100)
        assert (output_dir / f'{stem}_crop_analysis.json').exists()


def test_run_batch_reports_failures(tmp_path, config):
    """Test corrupt inputs make the run fail."""
    input_dir = tmp_path / 'input'
    input_dir.mkdir()
    (input_dir / 'broken.jpg').write_text('not an image')

    assert run_batch(str(input_dir), str(tmp_path / 'output'), config, workers=1) == 1


def test_run_batch_missing_input(tmp_path, config):
    """Test a missing input directory is an error."""
    assert run_batch(str(tmp_path / 'missing'), str(tmp_path / 'output'), config) == 1


def test_run_batch_empty_directory(tmp_path, config):
    """Test an empty directory is not an error."""
    input_dir = tmp_path / 'input'
    input_dir.mkdir()

    assert run_batch(str(input_dir), str(tmp_path / 'output'), config) == 0


def test_batch_stats_defaults():
    """Test stats start empty."""
    stats = BatchStats()
    assert stats.total == stats.success == stats.failed == stats.skipped == 0
    assert stats.errors == []
