"""
Catalog Browsing Orchestrators

Search over a client-supplied catalog and the detail view for a single
hex value (value forms, shades and tints, harmony, text contrast).
"""

from typing import Optional

from palette_atlas.config import config
from palette_atlas.schemas import (
    ColorDetailResponse, ContrastEntry, NamedColorModel, PaletteColor,
    SearchRequest, SearchResponse
)
from palette_atlas.services.colors.conversion import rgb_to_hsb, rgb_to_hsl
from palette_atlas.services.colors.harmony import (
    BLACK, WHITE, HarmonyMode, contrast_rating, contrast_ratio, harmony_colors,
    shades_and_tints
)
from palette_atlas.services.colors.models import hex_to_rgb
from palette_atlas.services.colors.search import search_colors, sort_by_luminance
from palette_atlas.utils.logging import get_logger
from palette_atlas.utils.metrics import get_metrics


def _palette_color(rgb) -> PaletteColor:
    return PaletteColor(hex=rgb.hex, rgb=list(rgb.as_tuple()))


def handle_search(request: SearchRequest,
                  order: str = "name",
                  ascending: bool = True) -> SearchResponse:
    """Filter the catalog by query, ordered by name or by brightness."""
    if order not in config.SEARCH_ORDERS:
        raise ValueError(f"order must be one of {config.SEARCH_ORDERS}")

    metrics = get_metrics()
    metrics.increment_request_count("search")
    colors = [c.to_named_color() for c in request.colors]

    results = search_colors(colors, request.query, ascending=ascending)
    if order == "luminance":
        results = sort_by_luminance(results, ascending=ascending)
    if not results:
        metrics.increment_empty_count("search")

    get_logger().debug(f"Search matched {len(results)} of {len(colors)} colors",
                       extra={"order": order})
    return SearchResponse(
        query=request.query,
        order=order,
        total=len(results),
        items=[NamedColorModel.from_named_color(c) for c in results],
    )


def handle_color_detail(hex_color: str, harmony: Optional[str] = None) -> ColorDetailResponse:
    """Describe one color. Malformed hex is read leniently, never rejected."""
    mode = HarmonyMode.parse(harmony or config.HARMONY_MODE_DEFAULT)
    get_metrics().increment_request_count("detail")

    rgb = hex_to_rgb(hex_color)
    contrast = []
    for name, text in (("black", BLACK), ("white", WHITE)):
        ratio = contrast_ratio(text, rgb)
        contrast.append(ContrastEntry(text_color=name, ratio=round(ratio, 2),
                                      rating=contrast_rating(ratio)))

    return ColorDetailResponse(
        query=hex_color,
        color=_palette_color(rgb),
        rgb_text=rgb.rgb_text,
        cmyk_text=rgb.cmyk_text,
        hsl=list(rgb_to_hsl(rgb)),
        hsb=list(rgb_to_hsb(rgb)),
        shades_tints=[_palette_color(c) for c in shades_and_tints(rgb)],
        harmony_mode=mode.value,
        harmony=[_palette_color(c) for c in harmony_colors(rgb, mode)],
        contrast=contrast,
    )
