"""
Named color lookup for sampled or picked colors.
"""

from typing import Iterable, Optional, Sequence, Tuple

from loguru import logger

from .hexkeys import normalize_hex
from .models import RGB, NamedColor, hex_to_rgb


def nearest_named_color(rgb: RGB, colors: Iterable[NamedColor]) -> Optional[NamedColor]:
    """Closest catalog color by squared RGB distance; first one wins on ties."""
    nearest = None
    best = None
    for color in colors:
        distance = rgb.distance_sq(color.rgb)
        if best is None or distance < best:
            best = distance
            nearest = color
    return nearest


def find_named_color(hex_color: str,
                     colors: Sequence[NamedColor]) -> Tuple[Optional[NamedColor], bool]:
    """
    Resolve a hex string against a catalog.

    An exact normalized-hex match is preferred; otherwise the nearest color
    is returned.

    Returns:
        Tuple of (matched color or None for an empty catalog, exact flag)
    """
    target = normalize_hex(hex_color)
    for color in colors:
        if normalize_hex(color.hex) == target:
            return color, True

    nearest = nearest_named_color(hex_to_rgb(hex_color), colors)
    if nearest is not None:
        logger.debug(f"No exact match for #{target}; nearest is {nearest.name} ({nearest.hex})")
    return nearest, False
