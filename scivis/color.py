"""Conversions between RGB, HSV, HSL, CMY(K) and YUV colour spaces.

Components are floats; RGB, saturation, value and lightness lie in [0, 1]
and hue is given in degrees.
"""

from __future__ import annotations

import math

from .matrix import Mat4
from .vec import Vec3, Vec4

_RGB_TO_YUV = Mat4((
    0.299, 0.587, 0.114, 0.0,
    -0.147, -0.289, 0.436, 0.0,
    0.615, -0.515, -0.100, 0.0,
    0.0, 0.0, 0.0, 1.0,
))

_YUV_TO_RGB = Mat4((
    1.0, 0.0, 1.140, 0.0,
    1.0, -0.395, -0.581, 0.0,
    1.0, 2.032, 0.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
))


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def rgb_to_hsv(rgb: Vec3) -> Vec3:
    """Convert RGB to (hue in degrees, saturation, value)."""
    r, g, b = rgb
    lo = min(r, g, b)
    hi = max(r, g, b)
    delta = hi - lo

    h = 0.0
    if hi != lo:
        if hi == r:
            h = math.fmod(60.0 * ((g - b) / delta) + 360.0, 360.0)
        elif hi == g:
            h = math.fmod(60.0 * ((b - r) / delta) + 120.0, 360.0)
        else:
            h = math.fmod(60.0 * ((r - g) / delta) + 240.0, 360.0)

    s = 0.0 if hi == 0 else delta / hi
    return Vec3(h, s, hi)


def hsv_to_rgb(hsv: Vec3) -> Vec3:
    """Convert (hue in degrees, saturation, value) to RGB.

    The hue is truncated to whole degrees and wrapped; saturation and value
    are clamped to [0, 1].
    """
    h = math.fmod(int(hsv.x), 360) / 60.0
    s = _clamp01(hsv.y)
    v = _clamp01(hsv.z)

    if s == 0:
        return Vec3(v, v, v)

    i = math.floor(h)
    f = h - i
    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    sectors = {
        0: (v, t, p),
        1: (q, v, p),
        2: (p, v, t),
        3: (p, q, v),
        4: (t, p, v),
    }
    return Vec3(*sectors.get(i, (v, p, q)))


def hsl_to_hsv(hsl: Vec3) -> Vec3:
    """Convert (hue, saturation, lightness) to (hue, saturation, value)."""
    h, s, l = hsl
    v = s * min(l, 1.0 - l) + l
    return Vec3(h, 2.0 - 2.0 * l / v if v > 0 else 0.0, v)


def hsv_to_hsl(hsv: Vec3) -> Vec3:
    """Convert (hue, saturation, value) to (hue, saturation, lightness)."""
    h, s, v = hsv
    l = v - v * s / 2.0
    m = min(l, 1.0 - l)
    return Vec3(h, (v - l) / m if m > 0 else l, l)


def rgb_to_cmy(rgb: Vec3) -> Vec3:
    """Convert RGB to subtractive CMY."""
    return Vec3(1.0 - rgb.x, 1.0 - rgb.y, 1.0 - rgb.z)


def cmy_to_rgb(cmy: Vec3) -> Vec3:
    """Convert CMY back to RGB."""
    return Vec3(1.0 - cmy.x, 1.0 - cmy.y, 1.0 - cmy.z)


def rgb_to_cmyk(rgb: Vec3) -> Vec4:
    """Convert RGB to CMYK by pulling the common part of CMY into black."""
    cmy = rgb_to_cmy(rgb)
    k = min(cmy)
    return Vec4(cmy.x - k, cmy.y - k, cmy.z - k, k)


def cmyk_to_rgb(cmyk: Vec4) -> Vec3:
    """Convert CMYK to RGB."""
    return Vec3(
        1.0 - (cmyk.x + cmyk.w),
        1.0 - (cmyk.y + cmyk.w),
        1.0 - (cmyk.z + cmyk.w),
    )


def rgb_to_yuv(rgb: Vec3) -> Vec3:
    """Convert RGB to YUV."""
    return (_RGB_TO_YUV * Vec4(rgb.x, rgb.y, rgb.z, 1.0)).xyz


def yuv_to_rgb(yuv: Vec3) -> Vec3:
    """Convert YUV to RGB."""
    return (_YUV_TO_RGB * Vec4(yuv.x, yuv.y, yuv.z, 1.0)).xyz