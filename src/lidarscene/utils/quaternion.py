"""Quaternion math for sampling and converting object orientations."""

import math
import numbers
from collections.abc import Iterator, Sequence

import numpy as np


def vector_cross(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> np.ndarray:
    """Cross product of two 3-vectors."""
    return np.array(
        [
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ],
        dtype=np.float64,
    )


class Quaternion:
    """
    Quaternion (w, x, y, z) with w as the scalar part.

    Values are not normalized on construction. Conversions to matrices, axes
    and Euler angles assume a unit quaternion.

    Methods ending in an underscore modify the quaternion in place and return it,
    all other methods return a new quaternion.
    """

    __slots__ = ('w', 'x', 'y', 'z')
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.w = float(w)
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def identity(cls) -> 'Quaternion':
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def random(cls, rng: np.random.Generator | None = None) -> 'Quaternion':
        """
        Draw a rotation uniformly distributed over SO(3).

        Subgroup algorithm from Shoemake, "Uniform random rotations",
        Graphics Gems III, pp. 124-132.

        :param rng: Random source, a fresh unseeded generator if None.
        :return: Unit quaternion.
        """
        if rng is None:
            rng = np.random.default_rng()

        u1 = rng.uniform(0.0, 1.0)
        u2 = rng.uniform(0.0, 2.0 * math.pi)
        u3 = rng.uniform(0.0, 2.0 * math.pi)

        return cls(
            math.sqrt(u1) * math.cos(u3),
            math.sqrt(1.0 - u1) * math.sin(u2),
            math.sqrt(1.0 - u1) * math.cos(u2),
            math.sqrt(u1) * math.sin(u3),
        )

    @classmethod
    def from_axis_angle(
        cls, axis: Sequence[float] | np.ndarray | float, angle: Sequence[float] | np.ndarray | float
    ) -> 'Quaternion':
        """
        Create a quaternion from a rotation axis and an angle in radians.

        The axis is used as given, normalize it first if a unit quaternion is needed.
        Arguments passed as (angle, axis) are swapped.

        :param axis: Rotation axis (x, y, z).
        :param angle: Rotation angle in radians.
        """
        if isinstance(axis, numbers.Real):
            axis, angle = angle, axis

        half = float(angle) / 2.0  # type: ignore[arg-type]
        q_axis = np.asarray(axis, dtype=np.float64).reshape(3) * math.sin(half)
        return cls(math.cos(half), q_axis[0], q_axis[1], q_axis[2])

    @property
    def vec(self) -> np.ndarray:
        """Vector part (x, y, z)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @property
    def vec_cross(self) -> np.ndarray:
        """Skew-symmetric cross product matrix of the vector part."""
        # fmt: off
        return np.array([
            [0.0,     -self.z,  self.y],
            [self.z,   0.0,    -self.x],
            [-self.y,  self.x,  0.0],
        ], dtype=np.float64)
        # fmt: on

    def cross(self, q: 'Quaternion') -> 'Quaternion':
        """
        Compose two rotations, first self then q.

        The vector part subtracts p x q, so this equals the Hamilton product q * p.
        """
        p = self
        w = p.w * q.w - float(np.dot(p.vec, q.vec))
        v = q.vec * p.w + p.vec * q.w - vector_cross(p.vec, q.vec)
        return Quaternion(w, v[0], v[1], v[2])

    def __mul__(self, q: 'Quaternion') -> 'Quaternion':
        if not isinstance(q, Quaternion):
            return NotImplemented
        return self.cross(q)

    def _vector_magnitude(self) -> float:
        # w is left out of the magnitude
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> 'Quaternion':
        """Divide all components by the magnitude of the vector part."""
        magnitude = self._vector_magnitude()
        return Quaternion(
            self.w / magnitude, self.x / magnitude, self.y / magnitude, self.z / magnitude
        )

    def normalize_(self) -> 'Quaternion':
        """In-place :meth:`normalize`."""
        magnitude = self._vector_magnitude()
        self.w /= magnitude
        self.x /= magnitude
        self.y /= magnitude
        self.z /= magnitude
        return self

    def conjugate(self) -> 'Quaternion':
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def conjugate_(self) -> 'Quaternion':
        self.x = -self.x
        self.y = -self.y
        self.z = -self.z
        return self

    def to_axis(self) -> tuple[float, float, float]:
        """
        Rotation axis scaled by tan(angle / 2).

        Raises ZeroDivisionError for half turns (w == 0).
        """
        return (self.x / self.w, self.y / self.w, self.z / self.w)

    def to_rotation_matrix(self) -> np.ndarray:
        """
        3x3 rotation matrix of a unit quaternion.

        Matrix for rotating vectors (not coordinate frames), same as
        scipy's ``Rotation.from_quat((x, y, z, w)).as_matrix()``.
        """
        v = self.vec
        return (
            np.eye(3) * (self.w * self.w - float(v @ v))
            + self.vec_cross * 2.0 * self.w
            + np.outer(v, v) * 2.0
        )

    def to_euler_angles(self) -> tuple[float, float, float]:
        """
        Roll, pitch and yaw in degrees.

        Roll is applied first, then pitch, then yaw, each about the fixed axes.
        Raises ValueError if the quaternion is not unit length and pitch leaves [-1, 1].
        """
        w, x, y, z = self.w, self.x, self.y, self.z
        roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
        pitch = math.asin(2.0 * (w * y - z * x))
        yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
        return (math.degrees(roll), math.degrees(pitch), math.degrees(yaw))

    def to_list(self) -> list[float]:
        return [self.w, self.x, self.y, self.z]

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_list())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self) -> str:
        return f'Quaternion({self.w}, {self.x}, {self.y}, {self.z})'
