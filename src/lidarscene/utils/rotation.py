"""Homogeneous 4x4 transforms using numpy for composing camera poses."""

from collections.abc import Sequence

import numpy as np


def _cos_sin(angle: float, *, degrees: bool) -> tuple[float, float]:
    if degrees:
        angle = np.radians(angle)
    return float(np.cos(angle)), float(np.sin(angle))


def rotate_x(angle: float, *, degrees: bool = True) -> np.ndarray:
    """
    Rotation about the x axis as a homogeneous 4x4 matrix.

    :param angle: Rotation angle.
    :param degrees: If True, the angle is in degrees; otherwise radians.
    :return: 4x4 numpy array.
    """
    c, s = _cos_sin(angle, degrees=degrees)
    # fmt: off
    return np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0,   c,  -s, 0.0],
        [0.0,   s,   c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=np.float64)
    # fmt: on


def rotate_y(angle: float, *, degrees: bool = True) -> np.ndarray:
    """Rotation about the y axis as a homogeneous 4x4 matrix."""
    c, s = _cos_sin(angle, degrees=degrees)
    # fmt: off
    return np.array([
        [  c, 0.0,   s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [ -s, 0.0,   c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=np.float64)
    # fmt: on


def rotate_z(angle: float, *, degrees: bool = True) -> np.ndarray:
    """Rotation about the z axis as a homogeneous 4x4 matrix."""
    c, s = _cos_sin(angle, degrees=degrees)
    # fmt: off
    return np.array([
        [  c,  -s, 0.0, 0.0],
        [  s,   c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=np.float64)
    # fmt: on


def translate(x: float, y: float, z: float) -> np.ndarray:
    """Translation as a homogeneous 4x4 matrix."""
    # fmt: off
    return np.array([
        [1.0, 0.0, 0.0,   x],
        [0.0, 1.0, 0.0,   y],
        [0.0, 0.0, 1.0,   z],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=np.float64)
    # fmt: on


def euler_pose(angles: Sequence[float], distance: float, *, degrees: bool = True) -> np.ndarray:
    """
    Pose of an object rotated by Euler angles and pushed `distance` along z.

    The transform is ``translate(0, 0, d) @ rotate_x(a0) @ rotate_y(a1) @ rotate_z(a2)``.

    :param angles: Rotation angles about x, y and z.
    :param distance: Distance from the camera along z.
    :param degrees: If True, angles are in degrees; otherwise radians.
    :return: 4x4 numpy array.
    """
    ax, ay, az = angles
    return (
        translate(0.0, 0.0, distance)
        @ rotate_x(ax, degrees=degrees)
        @ rotate_y(ay, degrees=degrees)
        @ rotate_z(az, degrees=degrees)
    )
