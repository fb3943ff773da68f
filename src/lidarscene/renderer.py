"""
Command lines for the external LIDAR renderer and how they are run.

Two command styles are supported:

* glidar (quaternion orientation, named options)::

    glidar MODEL --scale S --model-dr 0,0,0 --model-q w,x,y,z --camera-z D \
        -w W -h H --fov F --pcd OUT

* lidargl (Euler orientation in degrees, positional)::

    lidargl MODEL S 0 0 0 RX RY RZ D W H FOV OUT
"""

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from lidarscene.settings import SettingModel, SettingRenderer
from lidarscene.utils.quaternion import Quaternion

logger = logging.getLogger(__name__)

# exit status reported when the renderer could not be started, same as a shell
EXIT_NOT_FOUND = 127


class CommandRunner(Protocol):
    def invoke(self, args: Sequence[str]) -> int:
        """Run the command and return its exit status, 0 on success."""
        ...  # pragma: no cover


class SubprocessRunner:
    """Run the renderer as a child process and wait for it."""

    def invoke(self, args: Sequence[str]) -> int:
        try:
            completed = subprocess.run(list(args), check=False)  # noqa: S603
        except OSError as e:
            logger.error('Could not start %s: %s', args[0], e)
            return EXIT_NOT_FOUND

        return completed.returncode


class DryRunner:
    """Pretend every command succeeds."""

    def invoke(self, args: Sequence[str]) -> int:
        logger.debug('Dry run, skipping %s', args[0])
        return 0


def _num(value: float) -> str:
    return repr(float(value))


def quaternion_command(
    binary: Path,
    model: SettingModel,
    renderer: SettingRenderer,
    rotation: Quaternion,
    distance: float,
    output: Path,
) -> list[str]:
    return [
        str(binary),
        str(model.path),
        '--scale',
        _num(model.scale),
        '--model-dr',
        ','.join(_num(v) for v in model.offset),
        '--model-q',
        ','.join(_num(v) for v in rotation),
        '--camera-z',
        _num(distance),
        '-w',
        str(renderer.width),
        '-h',
        str(renderer.height),
        '--fov',
        _num(renderer.fov),
        '--pcd',
        str(output),
    ]


def euler_command(
    binary: Path,
    model: SettingModel,
    renderer: SettingRenderer,
    angles: Sequence[float],
    distance: float,
    output: Path,
) -> list[str]:
    return [
        str(binary),
        str(model.path),
        _num(model.scale),
        *(_num(v) for v in model.offset),
        *(_num(v) for v in angles),
        _num(distance),
        str(renderer.width),
        str(renderer.height),
        _num(renderer.fov),
        str(output),
    ]


def render_with_retry(
    runner: CommandRunner,
    args: Sequence[str],
    index: int,
    failure_log: logging.Logger,
) -> bool:
    """
    Run the renderer, retrying once.

    Each failed attempt is written to `failure_log`. A second failure is reported
    and the scenario skipped, it never aborts the batch.

    :return: True if one of the attempts succeeded.
    """
    cmd = shlex.join(args)
    logger.debug('cmd is: %s', cmd)

    if runner.invoke(args) == 0:
        return True

    failure_log.info('Failure (%d): %s', index, cmd)
    if runner.invoke(args) == 0:
        return True

    failure_log.info('Failure #2 (%d): %s', index, cmd)
    logger.error('Renderer failed twice on scenario %d, continuing: %s', index, cmd)
    return False
