"""
Atlas and Matching Orchestrators

Request handling for the atlas grid, bucket listings and named color
lookup. The core functions stay pure; this layer converts schemas,
applies config limits, logs and records metrics.
"""

import time
from typing import List, Optional

from palette_atlas.config import config
from palette_atlas.schemas import (
    AtlasRequest, AtlasResponse, BucketEntry, BucketMember, BucketMembersResponse,
    MatchRequest, MatchResponse, NamedColorModel
)
from palette_atlas.services.colors.atlas import (
    AtlasMode, BucketKey, aggregate_buckets, bucket_members
)
from palette_atlas.services.colors.hexkeys import FavoritesIndex, normalize_hex
from palette_atlas.services.colors.matching import find_named_color
from palette_atlas.services.colors.models import NamedColor
from palette_atlas.services.colors.swatches import render_atlas_grid
from palette_atlas.utils.ids import generate_request_id
from palette_atlas.utils.logging import get_logger
from palette_atlas.utils.metrics import get_metrics, stage_timer


def _validate_grid(hue_bins: int, y_bins: int, mode: str) -> AtlasMode:
    if not config.validate_bins(hue_bins) or not config.validate_bins(y_bins):
        raise ValueError(f"Bin counts must be between 1 and {config.ATLAS_MAX_BINS}")
    if not config.validate_mode(str(mode).lower()):
        raise ValueError(f"mode must be one of {config.SUPPORTED_MODES}")
    return AtlasMode.parse(mode)


def _colors(request) -> List[NamedColor]:
    return [c.to_named_color() for c in request.colors]


def handle_atlas(request: AtlasRequest,
                 hue_bins: Optional[int] = None,
                 y_bins: Optional[int] = None,
                 mode: Optional[str] = None,
                 include_grid: bool = False) -> AtlasResponse:
    """Bucket the request's colors and flag buckets whose representative is a favorite."""
    log = get_logger()
    metrics = get_metrics()
    request_id = generate_request_id("atlas")
    start_time = time.time()

    hue_bins = config.ATLAS_HUE_BINS if hue_bins is None else hue_bins
    y_bins = config.ATLAS_Y_BINS if y_bins is None else y_bins
    atlas_mode = _validate_grid(hue_bins, y_bins, mode or config.ATLAS_MODE_DEFAULT)

    metrics.increment_request_count("atlas")
    colors = _colors(request)
    favorites = FavoritesIndex(request.favorites)

    with stage_timer("aggregation", request_id=request_id):
        result = aggregate_buckets(colors, hue_bins, y_bins, atlas_mode)

    if not colors:
        metrics.increment_empty_count("atlas")

    favorite_keys = result.favorite_keys(favorites.is_favorite)
    buckets = [
        BucketEntry(
            id=key.id,
            hue_index=key.hue_index,
            y_index=key.y_index,
            count=data.count,
            representative=(NamedColorModel.from_named_color(data.representative)
                            if data.representative is not None else None),
            is_favorite=key in favorite_keys,
        )
        for key, data in result.buckets.items()
    ]

    grid_png = None
    if include_grid:
        with stage_timer("rendering", request_id=request_id):
            grid_png = render_atlas_grid(result, cell_size=config.GRID_CELL_SIZE,
                                         favorites=favorite_keys)

    log.info(f"Atlas built: {len(buckets)} buckets from {len(colors)} colors",
             extra={"request_id": request_id,
                    "ms_total": round((time.time() - start_time) * 1000, 1)})

    return AtlasResponse(
        hue_bins=hue_bins,
        y_bins=y_bins,
        mode=atlas_mode.value,
        y_min=result.y_min,
        y_max=result.y_max,
        total_colors=result.total,
        buckets=buckets,
        grid_png_b64=grid_png,
    )


def handle_bucket_members(request: AtlasRequest,
                          hue_index: int,
                          y_index: int,
                          hue_bins: Optional[int] = None,
                          y_bins: Optional[int] = None,
                          mode: Optional[str] = None,
                          offset: int = 0,
                          limit: Optional[int] = None) -> BucketMembersResponse:
    """List one bucket's colors, sorted and paginated."""
    hue_bins = config.ATLAS_HUE_BINS if hue_bins is None else hue_bins
    y_bins = config.ATLAS_Y_BINS if y_bins is None else y_bins
    atlas_mode = _validate_grid(hue_bins, y_bins, mode or config.ATLAS_MODE_DEFAULT)
    if not (0 <= hue_index < hue_bins and 0 <= y_index < y_bins):
        raise ValueError(f"Bucket ({hue_index}, {y_index}) outside {hue_bins}x{y_bins} grid")

    get_metrics().increment_request_count("bucket")
    key = BucketKey(hue_index, y_index)
    favorites = FavoritesIndex(request.favorites)
    limit = config.ATLAS_PAGE_SIZE if limit is None else limit

    page, total = bucket_members(_colors(request), key, hue_bins, y_bins, atlas_mode,
                                 offset=offset, limit=limit)
    items = [
        BucketMember(**NamedColorModel.from_named_color(c).model_dump(),
                     is_favorite=favorites.is_favorite(c.hex))
        for c in page
    ]
    get_logger().debug(f"Bucket {key.id}: {len(items)}/{total} members")
    return BucketMembersResponse(id=key.id, total=total, offset=offset, items=items)


def handle_match(request: MatchRequest) -> MatchResponse:
    """Resolve a hex value to a catalog color, exact first then nearest."""
    get_metrics().increment_request_count("match")
    match, exact = find_named_color(request.hex, _colors(request))
    return MatchResponse(
        query=request.hex,
        normalized=normalize_hex(request.hex),
        exact=exact,
        match=NamedColorModel.from_named_color(match) if match is not None else None,
    )
