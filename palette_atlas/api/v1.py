"""
Palette Atlas v1 API Routes
Palette extraction, atlas grid, bucket listing and color matching endpoints.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from palette_atlas.config import config
from palette_atlas.schemas import (
    AtlasRequest, AtlasResponse, BucketMembersResponse, ColorDetailResponse, ErrorResponse,
    MatchRequest, MatchResponse, MetricsResponse, PaletteRequest, PaletteResponse,
    SearchRequest, SearchResponse
)
from palette_atlas.services.colors.atlas_api import (
    handle_atlas, handle_bucket_members, handle_match
)
from palette_atlas.services.colors.catalog_api import handle_color_detail, handle_search
from palette_atlas.services.colors.extract_api import handle_palette
from palette_atlas.utils.logging import get_logger
from palette_atlas.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Palette Atlas"])

MODE_PATTERN = "^(lightness|saturation)$"
ORDER_PATTERN = "^(name|luminance)$"
HARMONY_PATTERN = "^(analogous|complementary|triadic|monochromatic)$"

BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid parameters"}}


def _bad_request(e: ValueError) -> HTTPException:
    get_metrics().increment_failure_count("validation")
    get_logger().warning(f"Rejected request: {e}")
    return HTTPException(status_code=400, detail=str(e))


@router.post("/palette", response_model=PaletteResponse,
             responses=BAD_REQUEST,
             summary="Extract Palette",
             description="Cluster an image's sampled pixels into a k-color palette")
def extract_palette(
    request: PaletteRequest,
    k: int = Query(config.KMEANS_K, ge=1, le=config.KMEANS_MAX_K, description="Number of palette colors"),
    seed: Optional[int] = Query(None, ge=0, description="Seed for centroid initialization"),
    include_swatch: bool = Query(True, description="Render a PNG strip of the palette")
) -> PaletteResponse:
    try:
        return handle_palette(request, k=k, seed=seed, include_swatch=include_swatch)
    except ValueError as e:
        raise _bad_request(e)


@router.post("/atlas", response_model=AtlasResponse,
             responses=BAD_REQUEST,
             summary="Build Color Atlas",
             description="Bucket colors into a hue x lightness/saturation grid")
def build_atlas(
    request: AtlasRequest,
    hue_bins: int = Query(config.ATLAS_HUE_BINS, ge=1, le=config.ATLAS_MAX_BINS),
    y_bins: int = Query(config.ATLAS_Y_BINS, ge=1, le=config.ATLAS_MAX_BINS),
    mode: str = Query(config.ATLAS_MODE_DEFAULT, pattern=MODE_PATTERN),
    include_grid: bool = Query(False, description="Render the grid as PNG")
) -> AtlasResponse:
    try:
        return handle_atlas(request, hue_bins=hue_bins, y_bins=y_bins, mode=mode,
                            include_grid=include_grid)
    except ValueError as e:
        raise _bad_request(e)


@router.post("/atlas/bucket", response_model=BucketMembersResponse,
             responses=BAD_REQUEST,
             summary="List Bucket Colors",
             description="Sorted, paginated members of one atlas bucket")
def list_bucket(
    request: AtlasRequest,
    hue_index: int = Query(..., ge=0),
    y_index: int = Query(..., ge=0),
    hue_bins: int = Query(config.ATLAS_HUE_BINS, ge=1, le=config.ATLAS_MAX_BINS),
    y_bins: int = Query(config.ATLAS_Y_BINS, ge=1, le=config.ATLAS_MAX_BINS),
    mode: str = Query(config.ATLAS_MODE_DEFAULT, pattern=MODE_PATTERN),
    offset: int = Query(0, ge=0),
    limit: int = Query(config.ATLAS_PAGE_SIZE, ge=1, le=1000)
) -> BucketMembersResponse:
    try:
        return handle_bucket_members(request, hue_index, y_index, hue_bins=hue_bins,
                                     y_bins=y_bins, mode=mode, offset=offset, limit=limit)
    except ValueError as e:
        raise _bad_request(e)


@router.post("/colors/match", response_model=MatchResponse,
             summary="Match Named Color",
             description="Exact normalized-hex match, falling back to the nearest color")
def match_color(request: MatchRequest) -> MatchResponse:
    return handle_match(request)


@router.get("/metrics", response_model=MetricsResponse)
def metrics_summary() -> MetricsResponse:
    return MetricsResponse(**get_metrics().get_summary())


@router.post("/colors/search", response_model=SearchResponse,
             responses=BAD_REQUEST,
             summary="Search Colors",
             description="Substring search over name, brand, vendor code and hex")
def search(
    request: SearchRequest,
    order: str = Query("name", pattern=ORDER_PATTERN, description="Sort by name or luminance"),
    ascending: bool = Query(True)
) -> SearchResponse:
    try:
        return handle_search(request, order=order, ascending=ascending)
    except ValueError as e:
        raise _bad_request(e)


@router.get("/colors/detail", response_model=ColorDetailResponse,
            responses=BAD_REQUEST,
            summary="Color Detail",
            description="Value forms, shades and tints, harmony and text contrast for one color")
def color_detail(
    hex_color: str = Query(..., alias="hex", min_length=1, description="Hex color, '#' optional"),
    harmony: str = Query(config.HARMONY_MODE_DEFAULT, pattern=HARMONY_PATTERN)
) -> ColorDetailResponse:
    try:
        return handle_color_detail(hex_color, harmony=harmony)
    except ValueError as e:
        raise _bad_request(e)
