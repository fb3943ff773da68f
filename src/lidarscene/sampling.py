"""Random samplers for scenario parameters."""

import numpy as np

from lidarscene.utils.quaternion import Quaternion


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Random source for a batch, unseeded if seed is None."""
    return np.random.default_rng(seed)


def random_distance(rng: np.random.Generator, min_distance: float, max_distance: float) -> float:
    """Distance drawn uniformly from [min_distance, max_distance)."""
    return min_distance + float(rng.random()) * (max_distance - min_distance)


def random_euler_angles(rng: np.random.Generator) -> tuple[float, float, float]:
    """Three independent angles in degrees, each uniform in [-180, 180)."""
    return (
        float(rng.random()) * 360.0 - 180.0,
        float(rng.random()) * 360.0 - 180.0,
        float(rng.random()) * 360.0 - 180.0,
    )


def random_quaternion(rng: np.random.Generator) -> Quaternion:
    return Quaternion.random(rng)
