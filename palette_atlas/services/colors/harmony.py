"""
Colors derived from a single base color.

Shades and tints step HSB brightness; harmonies rotate hue and keep
saturation and brightness. Contrast follows the WCAG 2 definition of
relative luminance.
"""

from enum import Enum
from typing import Dict, List

from .conversion import hsb_to_rgb, rgb_to_hsb
from .hexkeys import normalize_hex
from .models import RGB

SHADE_STEPS = (-0.45, -0.25, 0.0, 0.20, 0.40)
MONOCHROME_STEPS = (-0.30, -0.15, 0.0, 0.15, 0.30)

AAA_CONTRAST = 7.0
AA_CONTRAST = 4.5

BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


class HarmonyMode(str, Enum):
    ANALOGOUS = "analogous"
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    MONOCHROMATIC = "monochromatic"

    @classmethod
    def parse(cls, value) -> "HarmonyMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown harmony mode: {value!r}") from None


def _brightness_steps(rgb: RGB, steps) -> List[RGB]:
    h, s, b = rgb_to_hsb(rgb)
    return [hsb_to_rgb(h, s, b + delta) for delta in steps]


def _rotate(rgb: RGB, degrees: float) -> RGB:
    h, s, b = rgb_to_hsb(rgb)
    return hsb_to_rgb(h + degrees, s, b)


def shades_and_tints(rgb: RGB) -> List[RGB]:
    """
    Darker and lighter variants of `rgb`, dark to light.

    Steps that clamp to the same color (e.g. tints of white) collapse to
    one entry by normalized hex.
    """
    unique: Dict[str, RGB] = {}
    for color in _brightness_steps(rgb, SHADE_STEPS):
        unique.setdefault(normalize_hex(color.hex), color)
    return sorted(unique.values(), key=lambda c: rgb_to_hsb(c).b)


def complementary(rgb: RGB) -> RGB:
    return _rotate(rgb, 180)


def analogous(rgb: RGB) -> List[RGB]:
    return [_rotate(rgb, -30), rgb, _rotate(rgb, 30)]


def triadic(rgb: RGB) -> List[RGB]:
    return [rgb, _rotate(rgb, 120), _rotate(rgb, -120)]


def monochromatic(rgb: RGB) -> List[RGB]:
    """Five brightness variants at a fixed hue; clamped steps may repeat."""
    return _brightness_steps(rgb, MONOCHROME_STEPS)


def harmony_colors(rgb: RGB, mode) -> List[RGB]:
    """Colors for one harmony mode, base color included."""
    mode = HarmonyMode.parse(mode)
    if mode is HarmonyMode.ANALOGOUS:
        return analogous(rgb)
    if mode is HarmonyMode.COMPLEMENTARY:
        return [rgb, complementary(rgb)]
    if mode is HarmonyMode.TRIADIC:
        return triadic(rgb)
    return monochromatic(rgb)


def relative_luminance(rgb: RGB) -> float:
    """WCAG relative luminance in [0, 1]."""
    def linear(channel: int) -> float:
        v = channel / 255.0
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    return 0.2126 * linear(rgb.r) + 0.7152 * linear(rgb.g) + 0.0722 * linear(rgb.b)


def contrast_ratio(a: RGB, b: RGB) -> float:
    """Contrast ratio in [1, 21]; symmetric in its arguments."""
    la = relative_luminance(a)
    lb = relative_luminance(b)
    return (max(la, lb) + 0.05) / (min(la, lb) + 0.05)


def contrast_rating(ratio: float) -> str:
    """'AAA', 'AA' or 'low' for normal-size text."""
    if ratio >= AAA_CONTRAST:
        return "AAA"
    if ratio >= AA_CONTRAST:
        return "AA"
    return "low"
