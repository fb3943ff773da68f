import logging
import sys
from pathlib import Path
from typing import Any

import pydantic
from jsonargparse import CLI

from lidarscene import __version__
from lidarscene.generate import GenerateResult, generate_euler, generate_quaternion
from lidarscene.settings import (
    DEFAULT_MODEL_PATH,
    SettingModel,
    SettingRenderer,
    Settings,
    SettingSampling,
)
from lidarscene.utils.error_handling import handle_errors
from lidarscene.utils.exceptions import ConfigError
from lidarscene.utils.logging import LogLevel, setup_logging

logger = logging.getLogger(__name__)


def build_settings(  # noqa: PLR0913
    output: Path,
    *,
    model: Path,
    scale: float,
    min_distance: float,
    max_distance: float,
    seed: int | None = None,
    binary: Path | None = None,
    width: int = 256,
    height: int = 256,
    fov: float = 20.0,
    dry_run: bool = False,
    progress: bool = True,
) -> Settings:
    try:
        return Settings(
            output=output,
            model=SettingModel(path=model, scale=scale),
            sampling=SettingSampling(
                min_distance=min_distance,
                max_distance=max_distance,
                seed=seed,
            ),
            renderer=SettingRenderer(
                binary=binary,
                width=width,
                height=height,
                fov=fov,
                dry_run=dry_run,
            ),
            progress=progress,
        )
    except pydantic.ValidationError as e:
        errors = [f'{".".join(str(x) for x in err["loc"])}: {err["msg"]}' for err in e.errors()]
        raise ConfigError('Invalid settings', errors=errors) from e


@handle_errors(exit_on_error=True)
def run_euler(num_angles: int, num_distances: int, **options: Any) -> GenerateResult:
    return generate_euler(build_settings(**options), num_angles, num_distances)


@handle_errors(exit_on_error=True)
def run_quaternion(num_tests: int, **options: Any) -> GenerateResult:
    return generate_quaternion(build_settings(**options), num_tests)


class LidarSceneCLI:
    def __init__(
        self,
        *,
        progress: bool = True,
        log_level: LogLevel = LogLevel.INFO,
        log_file: Path | None = None,
    ) -> None:
        """general options
        :ivar progress: Display progress bar
        :ivar log_level: Minimum level of displayed log messages
        :ivar log_file: Also write log messages to this file
        """
        self.progress = progress
        setup_logging(log_level, log_file)

    def euler(  # noqa: PLR0913
        self,
        num_angles: int,
        num_distances: int,
        min_distance: float,
        max_distance: float,
        model: Path,
        scale: float,
        output: Path,
        *,
        seed: int | None = None,
        binary: Path | None = None,
        width: int = 256,
        height: int = 256,
        fov: float = 20.0,
        dry_run: bool = False,
    ) -> None:
        """Render every combination of random Euler angles and random distances.

        Args:
            num_angles: Number of random angle triples.
            num_distances: Number of random distances.
            min_distance: Minimum camera distance.
            max_distance: Maximum camera distance.
            model: Model file passed to the renderer.
            scale: Model scale factor.
            output: Existing output folder.
            seed: Seed of the random source.
            binary: Renderer executable, defaults to ./lidargl.
            width: Image width in pixels.
            height: Image height in pixels.
            fov: Field of view in degrees.
            dry_run: Only write info and pose files, do not start the renderer.
        """
        run_euler(
            num_angles,
            num_distances,
            output=output,
            model=model,
            scale=scale,
            min_distance=min_distance,
            max_distance=max_distance,
            seed=seed,
            binary=binary,
            width=width,
            height=height,
            fov=fov,
            dry_run=dry_run,
            progress=self.progress,
        )

    def quaternion(  # noqa: PLR0913
        self,
        num_tests: int,
        min_distance: float,
        max_distance: float,
        scale: float,
        output: Path,
        *,
        model: Path = DEFAULT_MODEL_PATH,
        seed: int | None = None,
        binary: Path | None = None,
        width: int = 256,
        height: int = 256,
        fov: float = 20.0,
        dry_run: bool = False,
    ) -> None:
        """Render scenarios with uniformly random orientations and distances.

        Args:
            num_tests: Number of scenarios.
            min_distance: Minimum camera distance.
            max_distance: Maximum camera distance.
            scale: Model scale factor.
            output: Existing output folder.
            model: Model file passed to the renderer.
            seed: Seed of the random source.
            binary: Renderer executable, defaults to build/glidar.
            width: Image width in pixels.
            height: Image height in pixels.
            fov: Field of view in degrees.
            dry_run: Only write info and pose files, do not start the renderer.
        """
        run_quaternion(
            num_tests,
            output=output,
            model=model,
            scale=scale,
            min_distance=min_distance,
            max_distance=max_distance,
            seed=seed,
            binary=binary,
            width=width,
            height=height,
            fov=fov,
            dry_run=dry_run,
            progress=self.progress,
        )

    def version(self) -> None:
        print('lidarscene:', __version__)  # noqa: T201
        print('Python:    ', sys.version)  # noqa: T201


def main() -> None:
    CLI(LidarSceneCLI, version=__version__)


if __name__ == '__main__':
    main()
