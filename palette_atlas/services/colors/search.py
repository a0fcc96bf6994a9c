"""
Catalog search and ordering.

A query matches a color when its lower-cased text is a substring of the
color's name, vendor brand or vendor code, or when its normalized hex form
is a substring of the color's normalized hex. Results are ordered by name.
"""

from threading import Lock
from typing import Iterable, List

from loguru import logger

from .hexkeys import normalize_hex
from .models import NamedColor, hex_to_rgb


def _matches(color: NamedColor, query_lower: str, query_hex: str) -> bool:
    if query_lower and query_lower in color.name.lower():
        return True
    if query_hex and query_hex in normalize_hex(color.hex):
        return True
    vendor = color.vendor
    if vendor is not None and query_lower:
        if vendor.brand and query_lower in vendor.brand.lower():
            return True
        if vendor.code and query_lower in vendor.code.lower():
            return True
    return False


def _by_name(colors: Iterable[NamedColor], ascending: bool) -> List[NamedColor]:
    return sorted(colors, key=lambda c: c.name, reverse=not ascending)


class ColorSearchEngine:
    """
    Incremental search over a fixed catalog.

    When both the text and hex forms of a query extend the previous query
    (typing another character), only the previous results are filtered
    again; any other query scans the whole catalog.
    """

    def __init__(self, colors: Iterable[NamedColor] = ()):
        self._lock = Lock()
        self.replace_all(colors)

    def replace_all(self, colors: Iterable[NamedColor]):
        with self._lock:
            self._all = list(colors)
            self._last_lower = ""
            self._last_hex = ""
            self._last_results = list(self._all)

    def search(self, query: str, ascending: bool = True) -> List[NamedColor]:
        raw = query.strip()
        query_lower = raw.lower()
        query_hex = normalize_hex(raw)

        with self._lock:
            if not query_lower and not query_hex:
                results = _by_name(self._all, ascending)
            else:
                extends = (query_lower.startswith(self._last_lower)
                           and query_hex.startswith(self._last_hex))
                base = self._last_results if extends else self._all
                results = _by_name(
                    (c for c in base if _matches(c, query_lower, query_hex)), ascending
                )
            self._last_lower = query_lower
            self._last_hex = query_hex
            self._last_results = results

        logger.debug(f"Search {raw!r}: {len(results)} of {len(self._all)} colors")
        return list(results)


def search_colors(colors: Iterable[NamedColor], query: str,
                  ascending: bool = True) -> List[NamedColor]:
    """One-shot search; an empty query returns every color sorted by name."""
    return ColorSearchEngine(colors).search(query, ascending)


def luma(color: NamedColor) -> float:
    """Rec. 709 weighted brightness of the color's 8-bit channels."""
    rgb = hex_to_rgb(color.hex)
    return 0.2126 * rgb.r + 0.7152 * rgb.g + 0.0722 * rgb.b


def sort_by_luminance(colors: Iterable[NamedColor], ascending: bool = True) -> List[NamedColor]:
    return sorted(colors, key=luma, reverse=not ascending)
