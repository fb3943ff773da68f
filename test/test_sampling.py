import numpy as np
import pytest

from lidarscene.sampling import make_rng, random_distance, random_euler_angles, random_quaternion
from lidarscene.utils.quaternion import Quaternion


def test_make_rng_seeded_is_reproducible():
    assert make_rng(3).random() == make_rng(3).random()


def test_make_rng_unseeded():
    assert isinstance(make_rng(), np.random.Generator)


def test_random_distance_range():
    rng = make_rng(0)
    distances = [random_distance(rng, 5.0, 10.0) for _ in range(1000)]

    assert min(distances) >= 5.0
    assert max(distances) < 10.0
    assert np.mean(distances) == pytest.approx(7.5, abs=0.2)


def test_random_distance_degenerate_range():
    assert random_distance(make_rng(0), 4.0, 4.0) == 4.0


def test_random_euler_angles_range():
    rng = make_rng(1)
    angles = np.array([random_euler_angles(rng) for _ in range(1000)])

    assert angles.shape == (1000, 3)
    assert angles.min() >= -180.0
    assert angles.max() < 180.0
    np.testing.assert_allclose(angles.mean(axis=0), 0.0, atol=20.0)


def test_random_quaternion():
    q = random_quaternion(make_rng(5))

    assert isinstance(q, Quaternion)
    assert q == Quaternion.random(make_rng(5))
