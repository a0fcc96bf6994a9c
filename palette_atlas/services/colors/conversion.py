"""
RGB <-> HSL and RGB <-> HSB conversion.

Pure functions, no state. Achromatic input (max == min) is a defined branch
with hue 0 and saturation 0, not an approximation.
"""

import math
from typing import Sequence, Union

from .models import HSB, HSL, RGB

RGBLike = Union[RGB, Sequence[int]]


def _channels(rgb: RGBLike):
    if isinstance(rgb, RGB):
        return rgb.r, rgb.g, rgb.b
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def _hue_degrees(r: float, g: float, b: float, max_v: float, delta: float) -> float:
    if max_v == r:
        hue = math.fmod((g - b) / delta, 6)
    elif max_v == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    hue *= 60
    return hue + 360 if hue < 0 else hue


def rgb_to_hsl(rgb: RGBLike) -> HSL:
    """
    Convert 8-bit RGB to HSL.

    Args:
        rgb: RGB value or 3-item sequence with channels in [0, 255]

    Returns:
        HSL with h in [0, 360), s and l in [0, 1]
    """
    r8, g8, b8 = _channels(rgb)
    r, g, b = r8 / 255.0, g8 / 255.0, b8 / 255.0

    max_v = max(r, g, b)
    min_v = min(r, g, b)
    delta = max_v - min_v
    lightness = (max_v + min_v) / 2.0

    if delta == 0:
        return HSL(0.0, 0.0, lightness)

    hue = _hue_degrees(r, g, b, max_v, delta)
    saturation = delta / (1 - abs(2 * lightness - 1))
    # float noise at the extremes can land a hair above 1
    saturation = min(1.0, max(0.0, saturation))

    return HSL(hue, saturation, lightness)


def hsl_to_rgb(hsl: HSL) -> RGB:
    """
    Convert HSL back to 8-bit RGB.

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 1].
    Channels are rounded to the nearest integer.
    """
    h = hsl.h % 360
    s = min(1.0, max(0.0, hsl.s))
    l = min(1.0, max(0.0, hsl.l))

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs(math.fmod(h / 60, 2) - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    def to_u8(v: float) -> int:
        return min(255, max(0, int(round((v + m) * 255))))

    return RGB(to_u8(r), to_u8(g), to_u8(b))


def rgb_to_hsb(rgb: RGBLike) -> HSB:
    """Convert 8-bit RGB to hue/saturation/brightness, s and b in [0, 1]."""
    r8, g8, b8 = _channels(rgb)
    r, g, b = r8 / 255.0, g8 / 255.0, b8 / 255.0

    max_v = max(r, g, b)
    delta = max_v - min(r, g, b)
    if delta == 0:
        return HSB(0.0, 0.0, max_v)
    return HSB(_hue_degrees(r, g, b, max_v, delta), delta / max_v, max_v)


def hsb_to_rgb(h: float, s: float, b: float) -> RGB:
    """
    Convert HSB to 8-bit RGB.

    Hue wraps in both directions, so `h - 120` and `h + 240` agree.
    Saturation and brightness are clamped to [0, 1]; channels round half up.
    """
    sector = (math.fmod(h, 360) + 360) % 360 / 60
    s = min(1.0, max(0.0, s))
    v = min(1.0, max(0.0, b))

    i = math.floor(sector)
    f = sector - i
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))

    r, g, bl = {
        0: (v, t, p),
        1: (q, v, p),
        2: (p, v, t),
        3: (p, q, v),
        4: (t, p, v),
    }.get(i, (v, p, q))

    return RGB(*(int(math.floor(c * 255 + 0.5)) for c in (r, g, bl)))
