"""Raster images with 8-bit components stored row by row."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Protocol

from .vec import Vec4

_LUT_LARGE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
_LUT_SMALL = "@%#*+=-:. "


class Kernel(Protocol):
    """A convolution kernel such as a Grid2D."""

    width: int
    height: int

    def get_value(self, x: int, y: int) -> float: ...


def _u8(value: float) -> int:
    """Truncate to an integer and wrap into the byte range."""
    return int(value) & 0xFF


def _luminance(r: int, g: int, b: int) -> int:
    """Truncated 0.299 R + 0.587 G + 0.114 B, computed exactly."""
    return (299 * r + 587 * g + 114 * b) // 1000


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class Image:
    """An image of ``width`` x ``height`` pixels with ``component_count`` bytes each."""

    width: int = 100
    height: int = 100
    component_count: int = 4
    data: bytearray = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        size = self.width * self.height * self.component_count
        if self.data is None:
            self.data = bytearray(size)
        else:
            self.data = bytearray(self.data)
            if len(self.data) != size:
                raise ValueError(
                    f"data has {len(self.data)} bytes, expected "
                    f"{self.width}*{self.height}*{self.component_count}={size}"
                )

    @staticmethod
    def from_color(color: Vec4) -> Image:
        """A single RGBA pixel of the given colour with components in [0, 1]."""
        return Image(1, 1, 4, bytes(_u8(c * 255) for c in color))

    def _pixels(self) -> Iterator[tuple[int, ...]]:
        return zip(*[iter(self.data)] * self.component_count)

    def _expand_to_rgba(self, alpha_of) -> None:
        out = bytearray()
        for r, g, b in self._pixels():
            out += bytes((r, g, b, alpha_of(r, g, b)))
        self.data = out
        self.component_count = 4

    def multiply(self, color: Vec4) -> None:
        """Scale every pixel by ``color``; an RGB image gains an alpha channel."""
        factors = tuple(color)
        if self.component_count == 4:
            self.data = bytearray(
                _u8(v * factors[i % 4]) for i, v in enumerate(self.data)
            )
        elif self.component_count == 3:
            alpha = _u8(255 * color.a)
            out = bytearray()
            for r, g, b in self._pixels():
                out += bytes((_u8(r * color.r), _u8(g * color.g),
                              _u8(b * color.b), alpha))
            self.data = out
            self.component_count = 4

    def generate_alpha(self, alpha: int = 255) -> None:
        """Set a constant alpha; an RGB image gains an alpha channel."""
        if self.component_count == 4:
            self.data[3::4] = bytes([alpha]) * (len(self.data) // 4)
        elif self.component_count == 3:
            self._expand_to_rgba(lambda r, g, b: alpha)

    def generate_alpha_from_luminance(self) -> None:
        """Set alpha to the pixel luminance; an RGB image gains an alpha channel."""
        if self.component_count == 4:
            out = bytearray()
            for r, g, b, _ in self._pixels():
                out += bytes((r, g, b, _luminance(r, g, b)))
            self.data = out
        elif self.component_count == 3:
            self._expand_to_rgba(_luminance)

    def compute_index(self, x: int, y: int, component: int) -> int:
        return component + (x + y * self.width) * self.component_count

    def get_value(self, x: int, y: int, component: int) -> int:
        return self.data[self.compute_index(x, y, component)]

    def set_value(self, x: int, y: int, component: int, value: int) -> None:
        self.data[self.compute_index(x, y, component)] = value

    def set_gray(self, x: int, y: int, value: int) -> None:
        """Set the first three components of a pixel to ``value``."""
        index = self.compute_index(x, y, 0)
        self.data[index:index + 3] = bytes([value]) * 3

    def set_normalized_value(self, x: int, y: int, value: float,
                             component: int | None = None) -> None:
        """Store ``value`` clamped to [0, 1] and scaled to a byte.

        Without ``component`` the first three components are set.
        """
        byte = int(_clamp01(value) * 255)
        if component is None:
            self.set_gray(x, y, byte)
        else:
            self.set_value(x, y, component, byte)

    @staticmethod
    def _linear(a: int, b: int, alpha: float) -> int:
        return int(a * (1.0 - alpha) + b * alpha)

    def sample(self, x: float, y: float, component: int) -> int:
        """Bilinear lookup at normalised coordinates in [0, 1]."""
        sx = x * (self.width - 1)
        sy = y * (self.height - 1)
        fx, fy = math.floor(sx), math.floor(sy)
        cx, cy = math.ceil(sx), math.ceil(sy)
        alpha = sx - fx
        beta = sy - fy
        top = self._linear(self.get_value(fx, fy, component),
                           self.get_value(cx, fy, component), alpha)
        bottom = self._linear(self.get_value(fx, cy, component),
                              self.get_value(cx, cy, component), alpha)
        return self._linear(top, bottom, beta)

    def get_lumi_value(self, x: int, y: int) -> int:
        """Luminance of a pixel; 0 for images with more than four components."""
        cc = self.component_count
        if cc == 1:
            return self.get_value(x, y, 0)
        if cc == 2:
            return (self.get_value(x, y, 0) + self.get_value(x, y, 1)) // 2
        if cc in (3, 4):
            return _luminance(*(self.get_value(x, y, c) for c in range(3)))
        return 0

    def to_code(self, var_name: str = "myImage", padding: bool = False) -> str:
        """Source text that declares this image as a literal."""
        parts = [
            f"Image {var_name} {{{self.width},{self.height},{self.component_count},\n",
            "              {",
        ]
        last = len(self.data) - 1
        for i, value in enumerate(self.data):
            if i % 30 == 0:
                parts.append("\n              ")
            parts.append(f"{value:3d}" if padding else str(value))
            parts.append("," if i < last else "\n")
        parts.append("          }};\n")
        return "".join(parts)

    def to_ascii_art(self, small_table: bool = True) -> str:
        """Render every fourth pixel as doubled characters, top row first."""
        lut = _LUT_SMALL if small_table else _LUT_LARGE
        top = len(lut) - 1
        lines = []
        for y in range(0, self.height, 4):
            row = self.height - 1 - y
            lines.append("".join(
                lut[min(self.get_lumi_value(x, row) * len(lut) // 255, top)] * 2
                for x in range(0, self.width, 4)
            ))
        return "".join(line + "\n" for line in lines)

    def filter(self, kernel: Kernel) -> Image:
        """Convolve with ``kernel``; the border it cannot cover stays zero."""
        result = Image(self.width, self.height, self.component_count)
        hw = kernel.width // 2
        hh = kernel.height // 2
        for y in range(hh, self.height - hh):
            for x in range(hw, self.width - hw):
                for c in range(self.component_count):
                    conv = sum(
                        self.get_value(x + u - hw, y + v - hh, c) * kernel.get_value(u, v)
                        for u in range(kernel.height)
                        for v in range(kernel.width)
                    )
                    result.set_value(x, y, c, _u8(abs(conv)))
        return result

    def to_grayscale(self) -> Image:
        """Single-component image of the pixel luminances."""
        return Image(self.width, self.height, 1, bytes(
            self.get_lumi_value(x, y)
            for y in range(self.height)
            for x in range(self.width)
        ))

    @staticmethod
    def gen_test_image(width: int, height: int) -> Image:
        """RGBA test pattern: primaries, their complements and a grey ramp."""
        part_y1 = height // 3
        part_y2 = height * 2 // 3
        part_x1 = width // 3
        part_x2 = width * 2 // 3

        result = Image(width, height, 4)
        for y in range(height):
            bands = (y < part_y1, part_y1 <= y < part_y2, y >= part_y2)
            grey = int(255 * ((y >= part_y1) * 0.5 + (y >= part_y2) * 0.5))
            for x in range(width):
                if x < part_x2:
                    rgb = [int(b) for b in bands]
                    if x >= part_x1:
                        rgb = [1 - v for v in rgb]
                    pixel = [v * 255 for v in rgb]
                else:
                    pixel = [grey] * 3
                index = result.compute_index(x, y, 0)
                result.data[index:index + 4] = bytes((*pixel, 255))
        return result

    def crop(self, bl_x: int, bl_y: int, tr_x: int, tr_y: int) -> Image:
        """The region [bl_x, tr_x) x [bl_y, tr_y)."""
        data = bytearray()
        for y in range(bl_y, tr_y):
            data += self.data[self.compute_index(bl_x, y, 0):self.compute_index(tr_x, y, 0)]
        return Image(tr_x - bl_x, tr_y - bl_y, self.component_count, data)

    def resample(self, new_width: int) -> Image:
        """Bilinearly resample to ``new_width``, keeping the aspect ratio."""
        new_height = int(new_width * self.height / self.width)
        result = Image(new_width, new_height, self.component_count)
        for y in range(new_height):
            for x in range(new_width):
                for c in range(self.component_count):
                    result.set_value(x, y, c, self.sample(x / new_width, y / new_height, c))
        return result

    def crop_to_aspect_and_resample(self, new_width: int, new_height: int) -> Image:
        """Centre-crop to the new aspect ratio and box-filter down to the new size.

        Raises ValueError if the crop would have to be enlarged.
        """
        if new_width == self.width and new_height == self.height:
            return Image(self.width, self.height, self.component_count, self.data)

        aspect = self.width / self.height
        new_aspect = new_width / new_height
        start_x = int(self.width * ((1.0 - new_aspect / aspect) / 2.0)) if aspect > new_aspect else 0
        start_y = int(self.height * ((1.0 - aspect / new_aspect) / 2.0)) if aspect < new_aspect else 0
        span_x = self.width - 2 * start_x
        span_y = self.height - 2 * start_y

        reduction = span_x // new_width
        if reduction == 0:
            raise ValueError("target size is larger than the cropped image")
        area = reduction * reduction

        result = Image(new_width, new_height, self.component_count)
        for y in range(new_height):
            for x in range(new_width):
                sums = [0] * self.component_count
                for dy in range(reduction):
                    sy = int(start_y + y / new_height * span_y + dy)
                    for dx in range(reduction):
                        sx = int(start_x + x / new_width * span_x + dx)
                        for c in range(self.component_count):
                            sums[c] += self.get_value(sx, sy, c)
                for c, total in enumerate(sums):
                    result.set_value(x, y, c, _u8(total // area))
        return result

    def _rows(self) -> list[bytearray]:
        stride = self.width * self.component_count
        return [self.data[i:i + stride] for i in range(0, len(self.data), stride)]

    def flip_horizontal(self) -> Image:
        """Mirror about the horizontal axis: the row order is reversed."""
        data = bytearray().join(reversed(self._rows()))
        return Image(self.width, self.height, self.component_count, data)

    def flip_vertical(self) -> Image:
        """Mirror about the vertical axis: the pixel order in each row is reversed."""
        cc = self.component_count
        data = bytearray()
        for row in self._rows():
            for x in reversed(range(self.width)):
                data += row[x * cc:(x + 1) * cc]
        return Image(self.width, self.height, cc, data)