"""Two-dimensional scalar fields with sampling, arithmetic and distance transforms."""

from __future__ import annotations

import math
import numbers
import operator
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Callable

from .image import Image
from .rand import Random, static_rand
from .vec import Vec2, Vec3

_FLT_MIN = 1.1754943508222875e-38
_FLT_MAX = 3.4028234663852886e38

_D1 = 1.0
_D2 = 1.4142135624

_HEADER = struct.Struct("<QQ")

_Op = Callable[[float, float], float]


def _norm(i: int, n: int) -> float:
    return i / (n - 1.0) if n > 1 else 0.0


@dataclass
class Grid2D:
    """A ``width`` x ``height`` grid of floats stored row by row."""

    width: int
    height: int
    data: list[float] = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        size = self.width * self.height
        if self.data is None:
            self.data = [0.0] * size
        else:
            self.data = [float(v) for v in self.data]
            if len(self.data) != size:
                raise ValueError("size mismatch")

    @staticmethod
    def from_image(image: Image) -> Grid2D:
        """Grid of the first component of every pixel, scaled to [0, 1]."""
        cc = image.component_count
        return Grid2D(image.width, image.height,
                      [v / 255.0 for v in image.data[::cc]])

    @staticmethod
    def read(stream: BinaryIO) -> Grid2D:
        """Read a grid written by :meth:`save`."""
        header = stream.read(_HEADER.size)
        if len(header) != _HEADER.size:
            raise ValueError("truncated grid header")
        width, height = _HEADER.unpack(header)
        count = width * height
        payload = stream.read(4 * count)
        if len(payload) != 4 * count:
            raise ValueError("truncated grid data")
        return Grid2D(width, height, list(struct.unpack(f"<{count}f", payload)))

    def save(self, stream: BinaryIO) -> None:
        """Write width and height as 64-bit integers followed by 32-bit floats."""
        stream.write(_HEADER.pack(self.width, self.height))
        stream.write(struct.pack(f"<{len(self.data)}f", *self.data))

    def _index(self, x: int, y: int) -> int:
        return x + y * self.width

    def __str__(self) -> str:
        parts = []
        for i, value in enumerate(self.data):
            parts.append(f"{value:g}")
            if i % self.width == self.width - 1 and i != 0:
                parts.append("\n")
            else:
                parts.append(", ")
        return "".join(parts)

    def to_byte_array(self) -> bytes:
        """RGB bytes with every value scaled by 255 into all three channels."""
        out = bytearray()
        for value in self.data:
            out += bytes([int(value * 255) & 0xFF]) * 3
        return bytes(out)

    def set_value(self, x: int, y: int, value: float) -> None:
        self.data[self._index(x, y)] = float(value)

    def get_value(self, x: int, y: int) -> float:
        return self.data[self._index(x, y)]

    def get_value_normalized(self, x: float, y: float) -> float:
        """Nearest-lower cell at normalised coordinates in [0, 1)."""
        return self.data[self._index(int(x * self.width), int(y * self.height))]

    def _corners(self, x, y):
        if y is None:
            x, y = x
        x = max(min(x, 1.0), 0.0)
        y = max(min(y, 1.0), 0.0)
        sx = x * (self.width - 1)
        sy = y * (self.height - 1)
        fx, fy = math.floor(sx), math.floor(sy)
        cx, cy = math.ceil(sx), math.ceil(sy)
        values = (self.get_value(fx, fy), self.get_value(cx, fy),
                  self.get_value(fx, cy), self.get_value(cx, cy))
        return sx - fx, sy - fy, values

    def sample(self, x, y: float | None = None) -> float:
        """Bilinear lookup at clamped normalised coordinates; ``x`` may be a Vec2."""
        alpha, beta, (va, vb, vc, vd) = self._corners(x, y)
        return ((va * (1.0 - alpha) + vb * alpha) * (1.0 - beta)
                + (vc * (1.0 - alpha) + vd * alpha) * beta)

    def normal(self, x, y: float | None = None) -> Vec3:
        """Surface normal of the height field at normalised coordinates."""
        _, _, (va, vb, vc, vd) = self._corners(x, y)
        w, h = self.width, self.height
        n1 = Vec3(1.0 / w, vb - va, 0.0).cross(Vec3(0.0, vc - va, 1.0 / h))
        n2 = Vec3(-1.0 / w, vc - vd, 0.0).cross(Vec3(0.0, vb - vd, -1.0 / h))
        return ((n1 + n2) / 2.0).normalize()

    @staticmethod
    def gen_random(width: int, height: int, seed: int | None = None) -> Grid2D:
        """Grid of uniform values in [0, 1); unseeded grids use the shared generator."""
        rng = static_rand if seed is None else Random(seed)
        return Grid2D(width, height, [rng.rand01() for _ in range(width * height)])

    def _scalar(self, value: object, op: _Op):
        if isinstance(value, numbers.Real):
            return Grid2D(self.width, self.height, [op(v, value) for v in self.data])
        return NotImplemented

    def _combine(self, other: Grid2D, op: _Op) -> Grid2D:
        """Combine two grids, resampling the smaller one.

        When ``other`` covers the larger area, or neither grid covers the other,
        ``other`` supplies the left operand.
        """
        w = max(self.width, other.width)
        h = max(self.height, other.height)

        if other.width == self.width and other.height == self.height:
            return Grid2D(w, h, list(map(op, self.data, other.data)))

        coords = [(_norm(x, w), _norm(y, h)) for y in range(h) for x in range(w)]
        if w == self.width and h == self.height:
            values = [op(v, other.sample(nx, ny))
                      for v, (nx, ny) in zip(self.data, coords)]
        elif w == other.width and h == other.height:
            values = [op(v, self.sample(nx, ny))
                      for v, (nx, ny) in zip(other.data, coords)]
        else:
            values = [op(other.sample(nx, ny), self.sample(nx, ny))
                      for nx, ny in coords]
        return Grid2D(w, h, values)

    def _binary(self, other: object, op: _Op):
        if isinstance(other, Grid2D):
            return self._combine(other, op)
        return self._scalar(other, op)

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __truediv__(self, other):
        if isinstance(other, Grid2D):
            return self._combine(other, operator.truediv)
        if isinstance(other, numbers.Real):
            return self * (1.0 / other)
        return NotImplemented

    def normalize(self, max_val: float = 1.0) -> None:
        """Rescale in place so the values span [0, max_val].

        A constant grid raises ZeroDivisionError.
        """
        if not self.data:
            return
        lo = min(self.data)
        hi = max(self.data)
        scale = max_val / (hi - lo)
        self.data = [(v - lo) * scale for v in self.data]

    def max_value(self) -> tuple[int, int]:
        """Position (x, y) of the first largest value above the smallest positive float."""
        best = _FLT_MIN
        pos = (0, 0)
        for i, value in enumerate(self.data):
            if best < value:
                best = value
                pos = (i % self.width, i // self.width)
        return pos

    def min_value(self) -> tuple[int, int]:
        """Position (x, y) of the first smallest value."""
        best = _FLT_MAX
        pos = (0, 0)
        for i, value in enumerate(self.data):
            if best > value:
                best = value
                pos = (i % self.width, i // self.width)
        return pos

    def fill(self, value: float) -> None:
        self.data = [float(value)] * len(self.data)

    def to_signed_distance(self, threshold: float) -> Grid2D:
        """Approximate signed distance to the ``threshold`` contour.

        Cells at or above the threshold are positive, the others negative.
        The outermost ring of cells is left at the largest float magnitude.
        """
        w, h = self.width, self.height
        inside = [v >= threshold for v in self.data]
        dist = [_FLT_MAX] * len(self.data)
        nearest: list[tuple[int, int] | None] = [None] * len(self.data)
        idx = self._index

        for y in range(1, h - 1):
            for x in range(1, w - 1):
                i = idx(x, y)
                if any(inside[idx(nx, ny)] != inside[i]
                       for nx, ny in ((x - 1, y), (x + 1, y), (x, y + 1), (x, y - 1))):
                    dist[i] = 0.0
                    nearest[i] = (x, y)

        def relax(x: int, y: int, steps) -> None:
            i = idx(x, y)
            for dx, dy, d in steps:
                j = idx(x + dx, y + dy)
                if dist[j] + d < dist[i]:
                    nearest[i] = nearest[j]
                    px, py = nearest[i]
                    dist[i] = math.hypot(x - px, y - py)

        forward = ((-1, -1, _D2), (0, -1, _D1), (1, -1, _D2), (-1, 0, _D1))
        backward = ((1, 0, _D1), (-1, 1, _D2), (0, 1, _D1), (1, 1, _D2))

        for y in range(1, h - 1):
            for x in range(1, w - 1):
                relax(x, y, forward)
        for y in range(h - 2, 0, -1):
            for x in range(w - 2, 0, -1):
                relax(x, y, backward)

        return Grid2D(w, h, [d if ins else -d for d, ins in zip(dist, inside)])