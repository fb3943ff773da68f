from pathlib import Path

from pydantic import BaseModel, Field, PositiveInt, field_validator, model_validator

DEFAULT_BINARY_PATH = Path('build/glidar')
MACOS_BINARY_PATH = Path('build/glidar.app/Contents/MacOS/glidar')
LEGACY_BINARY_PATH = Path('./lidargl')
DEFAULT_MODEL_PATH = Path('ISS models 2011/Objects/Modules/MLM/MLM.lwo')


def default_binary() -> Path:
    """Renderer built in ./build, falling back to the macOS app bundle."""
    if DEFAULT_BINARY_PATH.exists():
        return DEFAULT_BINARY_PATH
    return MACOS_BINARY_PATH


class SettingRenderer(BaseModel, frozen=True):
    """
    Renderer settings.

    :ivar binary: Path to the renderer executable. If None, a default for the
        command style is used.
    :ivar width: Image width in pixels.
    :ivar height: Image height in pixels.
    :ivar fov: Field of view in degrees.
    :ivar dry_run: Only record the commands, never start the renderer.
    """

    binary: Path | None = None
    width: PositiveInt = 256
    height: PositiveInt = 256
    fov: float = 20.0
    dry_run: bool = False

    @field_validator('fov')
    @classmethod
    def _check_fov(cls, fov: float) -> float:
        if not 0.0 < fov < 180.0:
            raise ValueError('fov must be between 0 and 180 degrees')
        return fov


class SettingModel(BaseModel, frozen=True):
    """
    Model settings.

    :ivar path: Path to the model file, passed to the renderer as is.
    :ivar scale: Model scale factor.
    :ivar offset: Model offset triple passed to the renderer (`--model-dr`).
    """

    path: Path = DEFAULT_MODEL_PATH
    scale: float = 1.0
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)


class SettingSampling(BaseModel, frozen=True):
    """
    Sampling settings.

    :ivar min_distance: Minimum camera distance.
    :ivar max_distance: Maximum camera distance.
    :ivar seed: Seed of the random source. If None, every run differs.
    """

    min_distance: float = Field(ge=0.0)
    max_distance: float = Field(ge=0.0)
    seed: int | None = None

    @model_validator(mode='after')
    def _check_range(self) -> 'SettingSampling':
        if self.max_distance < self.min_distance:
            raise ValueError('max_distance must be greater or equal to min_distance')
        return self


class Settings(BaseModel, frozen=True):
    """
    Settings for one generation batch.

    :ivar output: Directory receiving the view, info and pose files.
    :ivar model: Model settings.
    :ivar sampling: Sampling settings.
    :ivar renderer: Renderer settings.
    :ivar log_name: Name of the failure log inside `output`.
    :ivar progress: Show progress bar.
    """

    output: Path
    model: SettingModel = SettingModel()
    sampling: SettingSampling
    renderer: SettingRenderer = SettingRenderer()
    log_name: str = 'generate.log'
    progress: bool = True

    @property
    def log_path(self) -> Path:
        return self.output / self.log_name
