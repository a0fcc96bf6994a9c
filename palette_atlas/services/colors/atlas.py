"""
Hue x lightness/saturation atlas.

Groups a collection of named colors into a sparse 2-D grid of buckets.
Each bucket counts its members and remembers the first color seen for it
in input order. Raw indices are clamped into range, never dropped. Every
call rebuilds the grid from scratch.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from loguru import logger

from .conversion import rgb_to_hsl
from .models import HSL, NamedColor


class AtlasMode(str, Enum):
    """Quantity plotted on the vertical axis."""
    LIGHTNESS = "lightness"
    SATURATION = "saturation"

    @classmethod
    def parse(cls, value) -> "AtlasMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown atlas mode: {value!r}") from None


@dataclass(frozen=True)
class BucketKey:
    hue_index: int
    y_index: int

    @property
    def id(self) -> str:
        return f"{self.hue_index}-{self.y_index}"


@dataclass
class BucketData:
    count: int = 0
    representative: Optional[NamedColor] = None


@dataclass
class AtlasResult:
    """Sparse bucket map plus the inclusive range of occupied rows."""
    buckets: Dict[BucketKey, BucketData] = field(default_factory=dict)
    y_min: int = 0
    y_max: int = 0
    hue_bins: int = 1
    y_bins: int = 1
    mode: AtlasMode = AtlasMode.LIGHTNESS

    @property
    def total(self) -> int:
        return sum(b.count for b in self.buckets.values())

    def get(self, hue_index: int, y_index: int) -> Optional[BucketData]:
        return self.buckets.get(BucketKey(hue_index, y_index))

    def grid(self) -> List[List[Optional[BucketData]]]:
        """Display rows, highest y first; each row spans every hue column."""
        return [
            [self.get(h, y) for h in range(self.hue_bins)]
            for y in reversed(range(self.y_bins))
        ]

    def favorite_keys(self, is_favorite: Callable[[str], bool]) -> Set[BucketKey]:
        """Keys whose representative satisfies the favorites predicate."""
        return {
            key for key, data in self.buckets.items()
            if data.representative is not None and is_favorite(data.representative.hex)
        }


def _check_bins(hue_bins: int, y_bins: int) -> None:
    if hue_bins < 1 or y_bins < 1:
        raise ValueError(f"Bin counts must be >= 1 (hue_bins={hue_bins}, y_bins={y_bins})")


def bin_index(value: float, bins: int) -> int:
    """floor(value * bins) clamped into [0, bins - 1]."""
    return max(0, min(bins - 1, math.floor(value * bins)))


def bucket_key_for_hsl(hsl: HSL, hue_bins: int, y_bins: int, mode: AtlasMode) -> BucketKey:
    """Bucket for an HSL value. A hue of exactly 360 lands in the last column."""
    y_raw = hsl.l if mode is AtlasMode.LIGHTNESS else hsl.s
    return BucketKey(bin_index(hsl.h / 360.0, hue_bins), bin_index(y_raw, y_bins))


def bucket_key_for(color: NamedColor, hue_bins: int, y_bins: int, mode: AtlasMode) -> BucketKey:
    return bucket_key_for_hsl(rgb_to_hsl(color.rgb), hue_bins, y_bins, mode)


def aggregate_buckets(colors: Iterable[NamedColor],
                      hue_bins: int,
                      y_bins: int,
                      mode=AtlasMode.LIGHTNESS) -> AtlasResult:
    """
    Bucket a color collection into the hue x (lightness|saturation) grid.

    Args:
        colors: Colors in caller order; order decides representatives
        hue_bins: Number of hue columns
        y_bins: Number of lightness or saturation rows
        mode: AtlasMode or its string value

    Returns:
        AtlasResult with buckets in first-seen order and the occupied row
        range (0, 0 when no colors were given)

    Raises:
        ValueError: If a bin count is below 1 or the mode is unknown
    """
    _check_bins(hue_bins, y_bins)
    mode = AtlasMode.parse(mode)

    buckets: Dict[BucketKey, BucketData] = {}
    y_min: Optional[int] = None
    y_max: Optional[int] = None

    for color in colors:
        key = bucket_key_for(color, hue_bins, y_bins, mode)
        data = buckets.get(key)
        if data is None:
            data = buckets[key] = BucketData()
        data.count += 1
        if data.representative is None:
            data.representative = color

        y_min = key.y_index if y_min is None else min(y_min, key.y_index)
        y_max = key.y_index if y_max is None else max(y_max, key.y_index)

    result = AtlasResult(
        buckets=buckets,
        y_min=y_min if y_min is not None else 0,
        y_max=y_max if y_max is not None else 0,
        hue_bins=hue_bins,
        y_bins=y_bins,
        mode=mode,
    )
    logger.debug(f"Aggregated {result.total} colors into {len(buckets)} buckets "
                 f"({hue_bins}x{y_bins}, {mode.value}), rows {result.y_min}..{result.y_max}")
    return result


def bucket_members(colors: Iterable[NamedColor],
                   key: BucketKey,
                   hue_bins: int,
                   y_bins: int,
                   mode=AtlasMode.LIGHTNESS,
                   offset: int = 0,
                   limit: Optional[int] = None) -> Tuple[List[NamedColor], int]:
    """
    List the colors that fall into one bucket.

    Members are sorted by name, vendor code, then lower-case hex and sliced
    to the requested page.

    Returns:
        Tuple of (page of colors, total member count)
    """
    _check_bins(hue_bins, y_bins)
    mode = AtlasMode.parse(mode)

    members = [c for c in colors if bucket_key_for(c, hue_bins, y_bins, mode) == key]
    members.sort(key=lambda c: c.sort_key)

    start = max(0, offset)
    end = None if limit is None else start + max(0, limit)
    return members[start:end], len(members)
