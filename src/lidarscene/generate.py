"""
Generate renderer scenarios and record their ground truth.

For every scenario `i` the output directory receives

* ``view_{i:05d}``: output prefix handed to the renderer,
* ``info_{i:05d}.txt``: tab separated sampled parameters and the command line,
* ``pose_{i:05d}.txt``: the resulting transform,

and ``generate.log`` lists the renderer failures of the whole batch.
"""

import logging
import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from tqdm import tqdm

from lidarscene.renderer import (
    CommandRunner,
    DryRunner,
    SubprocessRunner,
    euler_command,
    quaternion_command,
    render_with_retry,
)
from lidarscene.sampling import make_rng, random_distance, random_euler_angles, random_quaternion
from lidarscene.settings import LEGACY_BINARY_PATH, Settings, default_binary
from lidarscene.utils.exceptions import ConfigError, FileError
from lidarscene.utils.logging import failure_log
from lidarscene.utils.quaternion import Quaternion
from lidarscene.utils.rotation import euler_pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioPaths:
    view: Path
    info: Path
    pose: Path

    @classmethod
    def for_index(cls, output: Path, index: int) -> 'ScenarioPaths':
        return cls(
            view=output / f'view_{index:05d}',
            info=output / f'info_{index:05d}.txt',
            pose=output / f'pose_{index:05d}.txt',
        )


@dataclass(frozen=True)
class EulerScenario:
    index: int
    angles: tuple[float, float, float]
    distance: float


@dataclass(frozen=True)
class QuaternionScenario:
    index: int
    rotation: Quaternion
    distance: float


@dataclass
class GenerateResult:
    total: int = 0
    failed: list[int] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.total - len(self.failed)


def _fmt(value: float) -> str:
    return repr(float(value))


def sample_euler_scenarios(
    rng: np.random.Generator,
    num_angles: int,
    num_distances: int,
    min_distance: float,
    max_distance: float,
) -> list[EulerScenario]:
    """Every sampled distance combined with every sampled angle triple, distances outer."""
    distances = [random_distance(rng, min_distance, max_distance) for _ in range(num_distances)]
    angles = [random_euler_angles(rng) for _ in range(num_angles)]

    scenarios: list[EulerScenario] = []
    for d in distances:
        for a in angles:
            scenarios.append(EulerScenario(len(scenarios), a, d))
    return scenarios


def sample_quaternion_scenarios(
    rng: np.random.Generator,
    num_tests: int,
    min_distance: float,
    max_distance: float,
) -> list[QuaternionScenario]:
    scenarios = []
    for idx in range(num_tests):
        rotation = random_quaternion(rng)
        distance = random_distance(rng, min_distance, max_distance)
        scenarios.append(QuaternionScenario(idx, rotation, distance))
    return scenarios


def write_info(path: Path, params: Sequence[float], args: Sequence[str]) -> None:
    """Sampled parameters on the first line, the command on the second."""
    with path.open('w', encoding='utf-8') as f:
        f.write('\t'.join(_fmt(v) for v in params) + '\n')
        f.write(shlex.join(args) + '\n')


def write_pose_matrix(path: Path, transform: np.ndarray) -> None:
    """Row major 4x4 transform on a single line."""
    with path.open('w', encoding='utf-8') as f:
        f.write(' '.join(_fmt(v) for v in np.asarray(transform).flatten()) + '\n')


def write_pose_quaternion(path: Path, distance: float, rotation: Quaternion) -> None:
    """Translation on the first line, rotation (w x y z) on the second."""
    with path.open('w', encoding='utf-8') as f:
        f.write(' '.join(_fmt(v) for v in (0.0, 0.0, distance)) + '\n')
        f.write(' '.join(_fmt(v) for v in rotation) + '\n')


def make_runner(settings: Settings) -> CommandRunner:
    if settings.renderer.dry_run:
        return DryRunner()
    return SubprocessRunner()


def _check_output(output: Path) -> None:
    if not output.is_dir():
        raise FileError('Output directory does not exist', file_path=str(output))


def _check_count(name: str, value: int) -> None:
    if value < 1:
        raise ConfigError(f'{name} must be positive', errors=[f'{name}: {value}'])


def generate_euler(
    settings: Settings,
    num_angles: int,
    num_distances: int,
    runner: CommandRunner | None = None,
) -> GenerateResult:
    """
    Render `num_angles` x `num_distances` scenarios with Euler angle orientations.

    The pose file holds ``translate(0, 0, d) @ rx @ ry @ rz`` flattened row by row.
    """
    _check_count('num_angles', num_angles)
    _check_count('num_distances', num_distances)
    _check_output(settings.output)
    runner = runner or make_runner(settings)
    binary = settings.renderer.binary or LEGACY_BINARY_PATH
    rng = make_rng(settings.sampling.seed)

    scenarios = sample_euler_scenarios(
        rng,
        num_angles,
        num_distances,
        settings.sampling.min_distance,
        settings.sampling.max_distance,
    )
    logger.info('Generating %d euler scenarios in %s', len(scenarios), settings.output)

    result = GenerateResult()
    with failure_log(settings.log_path) as flog:
        for scenario in tqdm(scenarios, desc='euler', disable=not settings.progress):
            paths = ScenarioPaths.for_index(settings.output, scenario.index)
            args = euler_command(
                binary,
                settings.model,
                settings.renderer,
                scenario.angles,
                scenario.distance,
                paths.view,
            )

            result.total += 1
            if not render_with_retry(runner, args, scenario.index, flog):
                result.failed.append(scenario.index)

            write_info(paths.info, [scenario.distance, *scenario.angles], args)
            write_pose_matrix(paths.pose, euler_pose(scenario.angles, scenario.distance))

    logger.info('Done: %d rendered, %d failed', result.succeeded, len(result.failed))
    return result


def generate_quaternion(
    settings: Settings,
    num_tests: int,
    runner: CommandRunner | None = None,
) -> GenerateResult:
    """Render `num_tests` scenarios with uniformly random quaternion orientations."""
    _check_count('num_tests', num_tests)
    _check_output(settings.output)
    runner = runner or make_runner(settings)
    binary = settings.renderer.binary or default_binary()
    rng = make_rng(settings.sampling.seed)

    scenarios = sample_quaternion_scenarios(
        rng,
        num_tests,
        settings.sampling.min_distance,
        settings.sampling.max_distance,
    )
    logger.info('Generating %d quaternion scenarios in %s', len(scenarios), settings.output)

    result = GenerateResult()
    with failure_log(settings.log_path) as flog:
        for scenario in tqdm(scenarios, desc='quaternion', disable=not settings.progress):
            paths = ScenarioPaths.for_index(settings.output, scenario.index)
            args = quaternion_command(
                binary,
                settings.model,
                settings.renderer,
                scenario.rotation,
                scenario.distance,
                paths.view,
            )

            result.total += 1
            if not render_with_retry(runner, args, scenario.index, flog):
                result.failed.append(scenario.index)

            write_info(paths.info, [*scenario.rotation, scenario.distance], args)
            write_pose_quaternion(paths.pose, scenario.distance, scenario.rotation)

    logger.info('Done: %d rendered, %d failed', result.succeeded, len(result.failed))
    return result
