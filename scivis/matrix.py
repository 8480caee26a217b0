"""Row-major 3x3 and 4x4 matrices, projection helpers and quaternions."""

from __future__ import annotations

import math
import numbers
import operator
from dataclasses import dataclass
from typing import Callable, ClassVar, Iterator

from .vec import Vec3, Vec4


def _deg2rad(degree: float) -> float:
    return math.pi * degree / 180.0


class _Matrix:
    """Storage, element access and scalar arithmetic shared by the matrix types."""

    __slots__ = ()
    _SIZE: ClassVar[int]

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.e)
        if len(values) != self._SIZE * self._SIZE:
            raise ValueError(
                f"{type(self).__name__} needs {self._SIZE * self._SIZE} elements, "
                f"got {len(values)}"
            )
        object.__setattr__(self, "e", values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.e)

    def __len__(self) -> int:
        return len(self.e)

    def __getitem__(self, index):
        if isinstance(index, tuple):
            row, col = index
            return self.e[row * self._SIZE + col]
        return self.e[index]

    def rows(self) -> list[tuple[float, ...]]:
        """The matrix as a list of row tuples."""
        n = self._SIZE
        return [self.e[r * n:(r + 1) * n] for r in range(n)]

    def _scalar(self, other: object, op: Callable[[float, float], float]):
        if isinstance(other, numbers.Real):
            return type(self)(tuple(op(v, other) for v in self.e))
        return NotImplemented

    def __add__(self, other):
        return self._scalar(other, operator.add)

    def __sub__(self, other):
        return self._scalar(other, operator.sub)

    def __truediv__(self, other):
        return self._scalar(other, operator.truediv)

    def _matmul(self, other):
        n = self._SIZE
        a, b = self.e, other.e
        return type(self)(
            tuple(
                sum(a[r * n + k] * b[k * n + c] for k in range(n))
                for r in range(n)
                for c in range(n)
            )
        )

    def __str__(self) -> str:
        lines = (", ".join(f"{v:g}" for v in row) for row in self.rows())
        return "[" + "\n ".join(lines) + "]"


@dataclass(frozen=True)
class Mat3(_Matrix):
    """A 3x3 matrix stored row by row."""

    e: tuple = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
    _SIZE: ClassVar[int] = 3

    @staticmethod
    def identity() -> Mat3:
        return Mat3()

    @staticmethod
    def from_rows(e1: Vec3, e2: Vec3, e3: Vec3) -> Mat3:
        """Build a matrix whose rows are the three given vectors."""
        return Mat3((*e1, *e2, *e3))

    def __mul__(self, other):
        if isinstance(other, Mat3):
            return self._matmul(other)
        if isinstance(other, Vec3):
            e = self.e
            return Vec3(
                other.x * e[0] + other.y * e[1] + other.z * e[2],
                other.x * e[3] + other.y * e[4] + other.z * e[5],
                other.x * e[6] + other.y * e[7] + other.z * e[8],
            )
        return self._scalar(other, operator.mul)

    @staticmethod
    def scaling(x, y: float | None = None, z: float | None = None) -> Mat3:
        """Scaling matrix; ``x`` may also be a Vec3 of scale factors."""
        if isinstance(x, Vec3):
            x, y, z = x
        return Mat3((x, 0, 0, 0, y, 0, 0, 0, z))

    @staticmethod
    def rotation_x(degree: float) -> Mat3:
        angle = _deg2rad(degree)
        c, s = math.cos(angle), math.sin(angle)
        return Mat3((1, 0, 0, 0, c, s, 0, -s, c))

    @staticmethod
    def rotation_y(degree: float) -> Mat3:
        angle = _deg2rad(degree)
        c, s = math.cos(angle), math.sin(angle)
        return Mat3((c, 0, -s, 0, 1, 0, s, 0, c))

    @staticmethod
    def rotation_z(degree: float) -> Mat3:
        angle = _deg2rad(degree)
        c, s = math.cos(angle), math.sin(angle)
        return Mat3((c, s, 0, -s, c, 0, 0, 0, 1))

    def transpose(self) -> Mat3:
        e = self.e
        return Mat3((e[0], e[3], e[6], e[1], e[4], e[7], e[2], e[5], e[8]))

    def det(self) -> float:
        e = self.e
        return (
            e[0] * (e[4] * e[8] - e[5] * e[7])
            - e[1] * (e[3] * e[8] - e[5] * e[6])
            + e[2] * (e[3] * e[7] - e[4] * e[6])
        )

    def inverse(self, det: float | None = None) -> Mat3:
        """Inverse matrix; ``det`` may be passed if already known.

        A singular matrix raises ZeroDivisionError.
        """
        if det is None:
            det = self.det()
        q = 1.0 / det
        e = self.e
        return Mat3((
            (e[4] * e[8] - e[5] * e[7]) * q,
            (e[2] * e[7] - e[1] * e[8]) * q,
            (e[1] * e[5] - e[2] * e[4]) * q,
            (e[5] * e[6] - e[3] * e[8]) * q,
            (e[0] * e[8] - e[2] * e[6]) * q,
            (e[2] * e[3] - e[0] * e[5]) * q,
            (e[3] * e[7] - e[4] * e[6]) * q,
            (e[1] * e[6] - e[0] * e[7]) * q,
            (e[0] * e[4] - e[1] * e[3]) * q,
        ))


@dataclass(frozen=True)
class StereoMatrices:
    """View and projection matrices for the left and right eye."""

    left_view: Mat4
    right_view: Mat4
    left_proj: Mat4
    right_proj: Mat4


@dataclass(frozen=True)
class Mat4(_Matrix):
    """A 4x4 matrix stored row by row."""

    e: tuple = (
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    )
    _SIZE: ClassVar[int] = 4

    @staticmethod
    def identity() -> Mat4:
        return Mat4()

    def __mul__(self, other):
        if isinstance(other, Mat4):
            return self._matmul(other)
        e = self.e
        if isinstance(other, Vec3):
            x, y, z = other
            w = x * e[12] + y * e[13] + z * e[14] + e[15]
            return Vec3(
                (x * e[0] + y * e[1] + z * e[2] + e[3]) / w,
                (x * e[4] + y * e[5] + z * e[6] + e[7]) / w,
                (x * e[8] + y * e[9] + z * e[10] + e[11]) / w,
            )
        if isinstance(other, Vec4):
            x, y, z, w = other
            return Vec4(
                x * e[0] + y * e[1] + z * e[2] + w * e[3],
                x * e[4] + y * e[5] + z * e[6] + w * e[7],
                x * e[8] + y * e[9] + z * e[10] + w * e[11],
                x * e[12] + y * e[13] + z * e[14] + w * e[15],
            )
        return self._scalar(other, operator.mul)

    @staticmethod
    def scaling(x, y: float | None = None, z: float | None = None) -> Mat4:
        """Scaling matrix.

        ``x`` may be a Vec3 of factors, or a single uniform factor when
        ``y`` and ``z`` are omitted.
        """
        if isinstance(x, Vec3):
            x, y, z = x
        elif y is None and z is None:
            y = z = x
        return Mat4((
            x, 0, 0, 0,
            0, y, 0, 0,
            0, 0, z, 0,
            0, 0, 0, 1,
        ))

    @staticmethod
    def translation(x, y: float | None = None, z: float | None = None) -> Mat4:
        """Translation matrix; ``x`` may also be a Vec3 offset."""
        if isinstance(x, Vec3):
            x, y, z = x
        return Mat4((
            1, 0, 0, x,
            0, 1, 0, y,
            0, 0, 1, z,
            0, 0, 0, 1,
        ))

    @staticmethod
    def rotation_x(degree: float) -> Mat4:
        angle = _deg2rad(degree)
        c, s = math.cos(angle), math.sin(angle)
        return Mat4((
            1, 0, 0, 0,
            0, c, s, 0,
            0, -s, c, 0,
            0, 0, 0, 1,
        ))

    @staticmethod
    def rotation_y(degree: float) -> Mat4:
        angle = _deg2rad(degree)
        c, s = math.cos(angle), math.sin(angle)
        return Mat4((
            c, 0, -s, 0,
            0, 1, 0, 0,
            s, 0, c, 0,
            0, 0, 0, 1,
        ))

    @staticmethod
    def rotation_z(degree: float) -> Mat4:
        angle = _deg2rad(degree)
        c, s = math.cos(angle), math.sin(angle)
        return Mat4((
            c, s, 0, 0,
            -s, c, 0, 0,
            0, 0, 1, 0,
            0, 0, 0, 1,
        ))

    @staticmethod
    def rotation_axis(axis: Vec3, degree: float) -> Mat4:
        """Rotation about an arbitrary unit axis."""
        a = _deg2rad(degree)
        c, s = math.cos(a), math.sin(a)
        t = 1 - c
        x, y, z = axis
        return Mat4((
            c + t * x * x, t * x * y + s * z, t * x * z - s * y, 0,
            t * x * y - s * z, c + t * y * y, t * y * z + s * x, 0,
            t * x * z + s * y, t * y * z - s * x, c + t * z * z, 0,
            0, 0, 0, 1,
        ))

    def transpose(self) -> Mat4:
        e = self.e
        return Mat4(tuple(e[c * 4 + r] for r in range(4) for c in range(4)))

    def det(self) -> float:
        (m0, m1, m2, m3, m4, m5, m6, m7,
         m8, m9, m10, m11, m12, m13, m14, m15) = self.e
        return (
            m4 * (m11 * (m1 * m14 - m2 * m13)
                  + m3 * (-m9 * m14 + m13 * m10)
                  + m15 * (m2 * m9 - m1 * m10))
            + m7 * (m0 * (m9 * m14 - m13 * m10)
                    + m2 * (-m12 * m9 + m8 * m13)
                    + m1 * (-m8 * m14 + m12 * m10))
            + m15 * (m5 * (-m8 * m2 + m0 * m10)
                     + m6 * (-m0 * m9 + m1 * m8))
            + m11 * (m0 * (-m5 * m14 + m6 * m13)
                     + m12 * (m2 * m5 - m6 * m1))
            + m3 * (m6 * (m9 * m12 - m13 * m8)
                    + m5 * (m8 * m14 - m12 * m10))
        )

    def inverse(self, det: float | None = None) -> Mat4:
        """Inverse matrix; ``det`` may be passed if already known.

        A singular matrix raises ZeroDivisionError.
        """
        if det is None:
            det = self.det()
        q = 1.0 / det
        (m0, m1, m2, m3, m4, m5, m6, m7,
         m8, m9, m10, m11, m12, m13, m14, m15) = self.e
        r = [0.0] * 16
        r[0] = (m7 * m9 * m14 + m15 * m5 * m10 - m15 * m6 * m9
                - m11 * m5 * m14 - m7 * m13 * m10 + m11 * m6 * m13) * q
        r[4] = -(m4 * m15 * m10 - m4 * m11 * m14 - m15 * m6 * m8
                 + m11 * m6 * m12 + m7 * m8 * m14 - m7 * m12 * m10) * q
        r[8] = (-m4 * m11 * m13 + m4 * m15 * m9 - m15 * m8 * m5
                - m7 * m12 * m9 + m11 * m12 * m5 + m7 * m8 * m13) * q
        r[12] = -(m4 * m9 * m14 - m4 * m13 * m10 + m12 * m5 * m10
                  - m9 * m6 * m12 - m8 * m5 * m14 + m13 * m6 * m8) * q
        r[1] = (-m1 * m15 * m10 + m1 * m11 * m14 - m11 * m2 * m13
                - m3 * m9 * m14 + m15 * m2 * m9 + m3 * m13 * m10) * q
        r[5] = (-m15 * m2 * m8 + m15 * m0 * m10 - m11 * m0 * m14
                - m3 * m12 * m10 + m11 * m2 * m12 + m3 * m8 * m14) * q
        r[9] = -(-m1 * m15 * m8 + m1 * m11 * m12 + m15 * m0 * m9
                 - m3 * m9 * m12 + m3 * m13 * m8 - m11 * m0 * m13) * q
        r[13] = (-m1 * m8 * m14 + m1 * m12 * m10 + m0 * m9 * m14
                 - m0 * m13 * m10 - m12 * m2 * m9 + m8 * m2 * m13) * q
        r[2] = -(m15 * m2 * m5 - m7 * m2 * m13 - m3 * m5 * m14
                 + m1 * m7 * m14 - m1 * m15 * m6 + m3 * m13 * m6) * q
        r[6] = (-m4 * m3 * m14 + m4 * m15 * m2 + m7 * m0 * m14
                - m15 * m6 * m0 - m7 * m12 * m2 + m3 * m6 * m12) * q
        r[10] = -(-m15 * m0 * m5 + m15 * m1 * m4 + m3 * m12 * m5
                  + m7 * m0 * m13 - m7 * m1 * m12 - m3 * m4 * m13) * q
        r[14] = -(m14 * m0 * m5 - m14 * m1 * m4 - m2 * m12 * m5
                  - m6 * m0 * m13 + m6 * m1 * m12 + m2 * m4 * m13) * q
        r[3] = (-m1 * m11 * m6 + m1 * m7 * m10 - m7 * m2 * m9
                - m3 * m5 * m10 + m11 * m2 * m5 + m3 * m9 * m6) * q
        r[7] = -(-m4 * m3 * m10 + m4 * m11 * m2 + m7 * m0 * m10
                 - m11 * m6 * m0 + m3 * m6 * m8 - m7 * m8 * m2) * q
        r[11] = (-m11 * m0 * m5 + m11 * m1 * m4 + m3 * m8 * m5
                 + m7 * m0 * m9 - m7 * m1 * m8 - m3 * m4 * m9) * q
        r[15] = (m10 * m0 * m5 - m10 * m1 * m4 - m2 * m8 * m5
                 - m6 * m0 * m9 + m6 * m1 * m8 + m2 * m4 * m9) * q
        return Mat4(tuple(r))

    @staticmethod
    def perspective(fovy: float, aspect: float, znear: float, zfar: float) -> Mat4:
        """Symmetric perspective projection from a vertical field of view in degrees."""
        cotan = 1.0 / math.tan(_deg2rad(fovy) / 2.0)
        return Mat4((
            cotan / aspect, 0, 0, 0,
            0, cotan, 0, 0,
            0, 0, -(zfar + znear) / (zfar - znear), -2 * (zfar * znear) / (zfar - znear),
            0, 0, -1, 0,
        ))

    @staticmethod
    def frustum(left: float, right: float, bottom: float, top: float,
                znear: float, zfar: float) -> Mat4:
        """Perspective projection for an arbitrary view frustum."""
        return Mat4((
            2 * znear / (right - left), 0, (right + left) / (right - left), 0,
            0, 2 * znear / (top - bottom), (top + bottom) / (top - bottom), 0,
            0, 0, -(zfar + znear) / (zfar - znear), -2 * (zfar * znear) / (zfar - znear),
            0, 0, -1, 0,
        ))

    @staticmethod
    def ortho(left: float, right: float, bottom: float, top: float,
              znear: float, zfar: float) -> Mat4:
        """Orthographic projection."""
        return Mat4((
            2 / (right - left), 0, 0, -(right + left) / (right - left),
            0, 2 / (top - bottom), 0, -(top + bottom) / (top - bottom),
            0, 0, -2 / (zfar - znear), -(zfar + znear) / (zfar - znear),
            0, 0, 0, 1,
        ))

    @staticmethod
    def look_at(eye: Vec3, at: Vec3, up: Vec3) -> Mat4:
        """View matrix for a camera at ``eye`` looking towards ``at``."""
        f = at - eye
        s = f.cross(up)
        u = s.cross(f)
        f, u, s = f.normalize(), u.normalize(), s.normalize()
        return Mat4((
            s.x, s.y, s.z, -s.dot(eye),
            u.x, u.y, u.z, -u.dot(eye),
            -f.x, -f.y, -f.z, f.dot(eye),
            0, 0, 0, 1,
        ))

    @staticmethod
    def mirror(p: Vec3, n: Vec3) -> Mat4:
        """Reflection about the plane through ``p`` with unit normal ``n``."""
        k = p.dot(n)
        return Mat4((
            1 - 2 * n.x * n.x, -2 * n.x * n.y, -2 * n.x * n.z, 2 * k * n.x,
            -2 * n.y * n.x, 1 - 2 * n.y * n.y, -2 * n.y * n.z, 2 * k * n.y,
            -2 * n.z * n.x, -2 * n.z * n.y, 1 - 2 * n.z * n.z, 2 * k * n.z,
            0, 0, 0, 1,
        ))

    @staticmethod
    def stereo_look_at_and_projection(eye: Vec3, at: Vec3, up: Vec3,
                                      fovy: float, aspect: float,
                                      znear: float, zfar: float,
                                      focal_length: float,
                                      eye_dist: float) -> StereoMatrices:
        """Off-axis stereo view and projection matrices."""
        wd2 = znear * math.tan(_deg2rad(fovy) / 2)
        shift = eye_dist * (znear / focal_length)
        top, bottom = wd2, -wd2

        left_proj = Mat4.frustum(-aspect * wd2 - shift, aspect * wd2 - shift,
                                 bottom, top, znear, zfar)
        right_proj = Mat4.frustum(-aspect * wd2 + shift, aspect * wd2 + shift,
                                  bottom, top, znear, zfar)

        view = Mat4.look_at(eye, at, up)
        return StereoMatrices(
            left_view=Mat4.translation(-eye_dist / 2, 0, 0) * view,
            right_view=Mat4.translation(eye_dist / 2, 0, 0) * view,
            left_proj=left_proj,
            right_proj=right_proj,
        )


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion with vector part (x, y, z) and scalar part w."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def compute_rotation(self) -> Mat4:
        """Rotation matrix; the quaternion need not be normalised."""
        x, y, z, w = self.x, self.y, self.z, self.w
        n = x * x + y * y + z * z + w * w
        s = 2.0 / n if n > 0.0 else 0.0

        xs, ys, zs = x * s, y * s, z * s
        wx, wy, wz = w * xs, w * ys, w * zs
        xx, xy, xz = x * xs, x * ys, x * zs
        yy, yz, zz = y * ys, y * zs, z * zs

        return Mat4((
            1.0 - (yy + zz), xy - wz, xz + wy, 0,
            xy + wz, 1.0 - (xx + zz), yz - wx, 0,
            xz - wy, yz + wx, 1.0 - (xx + yy), 0,
            0, 0, 0, 1,
        ))