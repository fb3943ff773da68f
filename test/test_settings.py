from pathlib import Path
from unittest.mock import patch

import pydantic
import pytest

from lidarscene.cli import build_settings
from lidarscene.settings import (
    DEFAULT_MODEL_PATH,
    MACOS_BINARY_PATH,
    SettingModel,
    SettingRenderer,
    Settings,
    SettingSampling,
    default_binary,
)
from lidarscene.utils.exceptions import ConfigError


def test_renderer_defaults():
    renderer = SettingRenderer()

    assert renderer.binary is None
    assert renderer.width == 256
    assert renderer.height == 256
    assert renderer.fov == 20.0
    assert renderer.dry_run is False


@pytest.mark.parametrize('fov', [0.0, -5.0, 180.0, 200.0])
def test_renderer_invalid_fov(fov: float):
    with pytest.raises(pydantic.ValidationError):
        SettingRenderer(fov=fov)


def test_renderer_invalid_size():
    with pytest.raises(pydantic.ValidationError):
        SettingRenderer(width=0)


def test_model_defaults():
    model = SettingModel()

    assert model.path == DEFAULT_MODEL_PATH
    assert model.scale == 1.0
    assert model.offset == (0.0, 0.0, 0.0)


def test_sampling_range():
    sampling = SettingSampling(min_distance=5.0, max_distance=10.0)
    assert sampling.seed is None

    with pytest.raises(pydantic.ValidationError):
        SettingSampling(min_distance=10.0, max_distance=5.0)

    with pytest.raises(pydantic.ValidationError):
        SettingSampling(min_distance=-1.0, max_distance=5.0)


def test_settings_frozen():
    settings = Settings(
        output=Path('out'), sampling=SettingSampling(min_distance=1, max_distance=2)
    )

    assert settings.log_path == Path('out/generate.log')
    with pytest.raises(pydantic.ValidationError):
        settings.output = Path('other')  # type: ignore[misc]


def test_default_binary_falls_back_to_app_bundle():
    with patch('lidarscene.settings.DEFAULT_BINARY_PATH', Path('/does/not/exist/glidar')):
        assert default_binary() == MACOS_BINARY_PATH


def test_default_binary_prefers_build(tmp_path: Path):
    binary = tmp_path / 'glidar'
    binary.touch()
    with patch('lidarscene.settings.DEFAULT_BINARY_PATH', binary):
        assert default_binary() == binary


def test_build_settings():
    settings = build_settings(
        Path('out'),
        model=Path('m.ply'),
        scale=3.0,
        min_distance=1.0,
        max_distance=2.0,
        seed=7,
        dry_run=True,
        progress=False,
    )

    assert settings.model.scale == 3.0
    assert settings.sampling.seed == 7
    assert settings.renderer.dry_run is True
    assert settings.progress is False


def test_build_settings_invalid():
    with pytest.raises(ConfigError) as exc_info:
        build_settings(
            Path('out'),
            model=Path('m.ply'),
            scale=1.0,
            min_distance=3.0,
            max_distance=2.0,
        )

    assert 'Invalid settings' in str(exc_info.value)
    assert exc_info.value.details['errors']
