"""
Hex key normalization and the lookups built on it.

Two hex strings name the same color iff their normalized forms are equal:
surrounding whitespace trimmed, upper-cased, one leading '#' removed.
Malformed strings normalize the same way and simply never match a real color.
"""

from typing import Dict, Iterable, List, Set

from loguru import logger

from .models import NamedColor


def normalize_hex(hex_color: str) -> str:
    """Canonical lookup key for a hex string. Total function, never raises."""
    key = hex_color.strip().upper()
    if key.startswith("#"):
        key = key[1:]
    return key


def same_color(a: str, b: str) -> bool:
    return normalize_hex(a) == normalize_hex(b)


class FavoritesIndex:
    """
    Membership set of favorite colors keyed by normalized hex.

    The owning collaborator persists the favorites; this class only answers
    `is_favorite` and keeps the set free of duplicate spellings.
    """

    def __init__(self, hexes: Iterable[str] = ()):
        self._keys: Set[str] = {normalize_hex(h) for h in hexes}

    def __contains__(self, hex_color: str) -> bool:
        return self.is_favorite(hex_color)

    def __len__(self) -> int:
        return len(self._keys)

    def is_favorite(self, hex_color: str) -> bool:
        return normalize_hex(hex_color) in self._keys

    def add(self, hex_color: str) -> bool:
        """Add a color. Returns False if an equivalent spelling was already present."""
        key = normalize_hex(hex_color)
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def remove(self, hex_color: str) -> bool:
        key = normalize_hex(hex_color)
        if key not in self._keys:
            return False
        self._keys.discard(key)
        return True

    def toggle(self, hex_color: str) -> bool:
        """Flip membership; returns the new state."""
        if self.remove(hex_color):
            return False
        self.add(hex_color)
        return True

    def keys(self) -> Set[str]:
        return set(self._keys)


def dedupe_by_hex(colors: Iterable[NamedColor]) -> List[NamedColor]:
    """Keep the first color per normalized hex, preserving input order."""
    seen: Dict[str, NamedColor] = {}
    total = 0
    for color in colors:
        total += 1
        seen.setdefault(normalize_hex(color.hex), color)
    unique = list(seen.values())
    if len(unique) < total:
        logger.debug(f"Deduplicated {total} colors to {len(unique)} by normalized hex")
    return unique
