"""
Color value types shared by the palette and atlas services.

RGB is the immutable 8-bit triple every other module speaks; NamedColor is
the catalog entry supplied by collaborators. Hex parsing here is tolerant:
catalog data is not validated by this package, so malformed strings are
read as far as they go instead of raising.
"""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

_HEX_PREFIX_RE = re.compile(r"^[0-9A-Fa-f]*")


@dataclass(frozen=True)
class RGB:
    """8-bit RGB triple. Components are always within [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel, value in (("r", self.r), ("g", self.g), ("b", self.b)):
            if not 0 <= value <= 255:
                raise ValueError(f"RGB channel {channel}={value} outside [0, 255]")

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "RGB":
        """Build from any 3-item sequence (tuple, list, numpy row)."""
        r, g, b = (int(v) for v in values[:3])
        return cls(r, g, b)

    @property
    def hex(self) -> str:
        """Upper-case `#RRGGBB` form."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def rgb_text(self) -> str:
        return f"RGB({self.r}, {self.g}, {self.b})"

    @property
    def cmyk_text(self) -> str:
        """Naive CMYK breakdown, integer-truncated percentages."""
        rf, gf, bf = self.r / 255, self.g / 255, self.b / 255
        k = 1 - max(rf, gf, bf)
        if k == 1:
            return "C:0%, M:0%, Y:0%, K:100%"
        c = (1 - rf - k) / (1 - k)
        m = (1 - gf - k) / (1 - k)
        y = (1 - bf - k) / (1 - k)
        return f"C:{int(c * 100)}%, M:{int(m * 100)}%, Y:{int(y * 100)}%, K:{int(k * 100)}%"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def distance_sq(self, other: "RGB") -> int:
        """Squared Euclidean distance in RGB space."""
        dr = self.r - other.r
        dg = self.g - other.g
        db = self.b - other.b
        return dr * dr + dg * dg + db * db


class HSL(NamedTuple):
    """Hue in degrees [0, 360), saturation and lightness in [0, 1]."""
    h: float
    s: float
    l: float


class HSB(NamedTuple):
    """Hue in degrees [0, 360), saturation and brightness (HSV value) in [0, 1]."""
    h: float
    s: float
    b: float


@dataclass(frozen=True)
class VendorInfo:
    """Brand metadata attached to a catalog color. Display and sorting only."""
    brand: Optional[str] = None
    line: Optional[str] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class NamedColor:
    """A catalog entry: display name, hex string and optional vendor tag."""
    name: str
    hex: str
    vendor: Optional[VendorInfo] = None

    @property
    def rgb(self) -> RGB:
        return hex_to_rgb(self.hex)

    @property
    def sort_key(self) -> str:
        """Listing order key: name, vendor code, lower-case hex."""
        code = self.vendor.code if self.vendor and self.vendor.code else ""
        return f"{self.name}|{code}|{self.hex.lower()}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse a hex color string into RGB.

    Accepts `#RRGGBB`, `RRGGBB` and the 3-digit shorthand. Parsing stops at
    the first non-hex character and missing digits read as zero, so the
    function never raises on malformed input.

    Args:
        hex_color: Hex color string

    Returns:
        RGB value
    """
    digits = hex_color.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    digits = _HEX_PREFIX_RE.match(digits).group(0)[:6]
    number = int(digits, 16) if digits else 0
    return RGB((number >> 16) & 0xFF, (number >> 8) & 0xFF, number & 0xFF)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert an RGB triple (RGB, tuple or uint8 array) to `#RRGGBB`."""
    if isinstance(rgb, RGB):
        return rgb.hex
    r, g, b = [int(x) for x in rgb[:3]]
    return f"#{r:02X}{g:02X}{b:02X}"
