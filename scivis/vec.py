"""Small immutable 2, 3 and 4 component vectors."""

from __future__ import annotations

import math
import numbers
import operator
from dataclasses import dataclass
from typing import Callable, Iterator

from .rand import Random, static_rand


def _rng(rng: Random | None) -> Random:
    return static_rand if rng is None else rng


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class _Vector:
    """Component-wise arithmetic shared by the vector types."""

    __slots__ = ()

    def __iter__(self) -> Iterator[float]:
        return (getattr(self, name) for name in self.__match_args__)

    def __len__(self) -> int:
        return len(self.__match_args__)

    def __getitem__(self, index: int) -> float:
        return tuple(self)[index]

    def _apply(self, other: object, op: Callable[[float, float], float]):
        if isinstance(other, type(self)):
            return type(self)(*map(op, self, other))
        if isinstance(other, numbers.Real):
            return type(self)(*(op(c, other) for c in self))
        return NotImplemented

    def __add__(self, other):
        return self._apply(other, operator.add)

    def __sub__(self, other):
        return self._apply(other, operator.sub)

    def __mul__(self, other):
        return self._apply(other, operator.mul)

    def __truediv__(self, other):
        return self._apply(other, operator.truediv)

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self * other
        return NotImplemented

    def __str__(self) -> str:
        return "[" + ", ".join(f"{c:g}" for c in self) + "]"


@dataclass(frozen=True)
class Vec2(_Vector):
    x: float = 0.0
    y: float = 0.0

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    def sqlength(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.sqlength())

    def normalize(self) -> Vec2:
        """Unit vector in the same direction, or the zero vector."""
        length = self.length()
        return self / length if length != 0 else Vec2(0, 0)

    def clamp(self, min_val: float, max_val: float) -> Vec2:
        """Clamp every component into ``[min_val, max_val]``."""
        return Vec2(_clamp(self.x, min_val, max_val), _clamp(self.y, min_val, max_val))

    @staticmethod
    def random(rng: Random | None = None) -> Vec2:
        """Vector with components uniform in [0, 1)."""
        rng = _rng(rng)
        return Vec2(rng.rand01(), rng.rand01())


@dataclass(frozen=True)
class Vec3(_Vector):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    @property
    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)

    def sqlength(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.sqlength())

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalize(self) -> Vec3:
        """Unit vector in the same direction, or the zero vector."""
        length = self.length()
        return self / length if length != 0 else Vec3(0, 0, 0)

    def reflect(self, n: Vec3) -> Vec3:
        """Reflect this direction about the normal ``n``."""
        return self - n * self.dot(n) * 2

    def refract(self, normal: Vec3, ior: float) -> Vec3 | None:
        """Refract this direction at a surface; ``None`` on total internal reflection.

        A direction on the same side as the normal is taken to leave the material.
        """
        cos_i = self.dot(normal)
        sign = -1 if cos_i < 0 else 1
        n = ior if sign == 1 else 1.0 / ior
        sin_theta_sq = n * n * (1.0 - cos_i * cos_i)
        if sin_theta_sq > 1.0:
            return None
        c = n * cos_i - sign * math.sqrt(1.0 - sin_theta_sq)
        return self * n - normal * c

    def minimum(self, other: Vec3) -> Vec3:
        return Vec3(*map(min, self, other))

    def maximum(self, other: Vec3) -> Vec3:
        return Vec3(*map(max, self, other))

    def clamp(self, min_val: float, max_val: float) -> Vec3:
        """Clamp every component into ``[min_val, max_val]``."""
        return Vec3(
            _clamp(self.x, min_val, max_val),
            _clamp(self.y, min_val, max_val),
            _clamp(self.z, min_val, max_val),
        )

    @staticmethod
    def random(rng: Random | None = None) -> Vec3:
        """Vector with components uniform in [0, 1)."""
        rng = _rng(rng)
        return Vec3(rng.rand01(), rng.rand01(), rng.rand01())

    @staticmethod
    def random_point_in_sphere(rng: Random | None = None) -> Vec3:
        """Uniform point inside the unit sphere."""
        rng = _rng(rng)
        while True:
            p = Vec3(rng.rand11(), rng.rand11(), rng.rand11())
            if p.sqlength() <= 1:
                return p

    @staticmethod
    def random_point_in_hemisphere(rng: Random | None = None) -> Vec3:
        """Uniform point inside the unit sphere with non-negative components."""
        rng = _rng(rng)
        while True:
            p = Vec3(rng.rand01(), rng.rand01(), rng.rand01())
            if p.sqlength() <= 1:
                return p

    @staticmethod
    def random_point_in_disc(rng: Random | None = None) -> Vec3:
        """Uniform point inside the unit disc in the xy plane."""
        rng = _rng(rng)
        while True:
            p = Vec3(rng.rand11(), rng.rand11(), 0)
            if p.sqlength() <= 1:
                return p

    @staticmethod
    def random_unit_vector(rng: Random | None = None) -> Vec3:
        """Uniformly distributed direction on the unit sphere."""
        rng = _rng(rng)
        a = rng.rand0pi()
        z = rng.rand11()
        r = math.sqrt(1.0 - z * z)
        return Vec3(r * math.cos(a), r * math.sin(a), z)


@dataclass(frozen=True)
class Vec4(_Vector):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    @property
    def a(self) -> float:
        return self.w

    @property
    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def xyz(self) -> Vec3:
        return self.vec3()

    def vec3(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def sqlength(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.sqlength())

    def dot(self, other: Vec4) -> float:
        return sum(map(operator.mul, self, other))

    def normalize(self) -> Vec4:
        """Unit vector in the same direction; a zero vector raises ZeroDivisionError."""
        return self / self.length()

    def clamp(self, min_val: float, max_val: float) -> Vec4:
        """Clamp every component into ``[min_val, max_val]``."""
        return Vec4(
            _clamp(self.x, min_val, max_val),
            _clamp(self.y, min_val, max_val),
            _clamp(self.z, min_val, max_val),
            _clamp(self.w, min_val, max_val),
        )

    @staticmethod
    def random(rng: Random | None = None) -> Vec4:
        """Vector with components uniform in [0, 1)."""
        rng = _rng(rng)
        return Vec4(rng.rand01(), rng.rand01(), rng.rand01(), rng.rand01())