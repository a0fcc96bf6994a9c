"""
Palette Atlas API Schemas
Pydantic models for palette extraction and atlas request/response validation.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from palette_atlas.services.colors.models import NamedColor, VendorInfo


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palette-atlas", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# PALETTE EXTRACTION SCHEMAS
# ============================================================================

class PaletteRequest(BaseModel):
    """Image to extract a palette from."""
    image_b64: str = Field(
        ...,
        min_length=1,
        description="Base64-encoded PNG/JPEG image, optionally as a data URL"
    )


class PaletteColor(BaseModel):
    """Single palette centroid."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-F]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="[r, g, b] in 0-255")


class PaletteResponse(BaseModel):
    """Palette extraction response. `palette` is empty when no pixels could be sampled."""
    request_id: str
    k: int = Field(..., description="Requested number of clusters")
    sampled_pixels: int = Field(..., description="Number of pixel samples clustered")
    palette: List[PaletteColor] = Field(..., description="Centroids in creation order")
    swatch_png_b64: Optional[str] = Field(None, description="Base64 PNG strip of the palette")


# ============================================================================
# ATLAS SCHEMAS
# ============================================================================

class VendorModel(BaseModel):
    brand: Optional[str] = None
    line: Optional[str] = None
    code: Optional[str] = None


class NamedColorModel(BaseModel):
    """Catalog color as supplied by the client. Hex strings are not validated."""
    name: str
    hex: str
    vendor: Optional[VendorModel] = None

    def to_named_color(self) -> NamedColor:
        vendor = VendorInfo(**self.vendor.model_dump()) if self.vendor else None
        return NamedColor(name=self.name, hex=self.hex, vendor=vendor)

    @classmethod
    def from_named_color(cls, color: NamedColor) -> "NamedColorModel":
        vendor = None
        if color.vendor is not None:
            vendor = VendorModel(brand=color.vendor.brand, line=color.vendor.line, code=color.vendor.code)
        return cls(name=color.name, hex=color.hex, vendor=vendor)


class AtlasRequest(BaseModel):
    """Color collection to bucket, in the order that decides representatives."""
    colors: List[NamedColorModel] = Field(default_factory=list)
    favorites: List[str] = Field(default_factory=list, description="Favorite hex values")


class BucketEntry(BaseModel):
    id: str = Field(..., description="Bucket id formatted '{hue_index}-{y_index}'")
    hue_index: int
    y_index: int
    count: int
    representative: Optional[NamedColorModel] = None
    is_favorite: bool = False


class AtlasResponse(BaseModel):
    hue_bins: int
    y_bins: int
    mode: str
    y_min: int = Field(..., description="Lowest occupied row (0 when empty)")
    y_max: int = Field(..., description="Highest occupied row (0 when empty)")
    total_colors: int
    buckets: List[BucketEntry]
    grid_png_b64: Optional[str] = None


class BucketMember(NamedColorModel):
    is_favorite: bool = False


class BucketMembersResponse(BaseModel):
    id: str
    total: int
    offset: int
    items: List[BucketMember]


# ============================================================================
# MATCHING SCHEMAS
# ============================================================================

class MatchRequest(BaseModel):
    hex: str = Field(..., min_length=1)
    colors: List[NamedColorModel] = Field(default_factory=list)


class MatchResponse(BaseModel):
    query: str
    normalized: str
    exact: bool
    match: Optional[NamedColorModel] = None


class MetricsResponse(BaseModel):
    uptime_seconds: float
    counters: Dict[str, int]
    timing_stats: Dict[str, Dict[str, float]]
    sample_count_stats: Dict[str, Any]


# ============================================================================
# SEARCH AND COLOR DETAIL SCHEMAS
# ============================================================================

class SearchRequest(BaseModel):
    """Catalog to search. An empty query lists every color."""
    query: str = Field("", description="Name, brand, vendor code or hex fragment")
    colors: List[NamedColorModel] = Field(default_factory=list)


class SearchResponse(BaseModel):
    query: str
    order: str
    total: int
    items: List[NamedColorModel]


class ContrastEntry(BaseModel):
    text_color: str = Field(..., description="Text color the ratio was measured against")
    ratio: float = Field(..., description="WCAG contrast ratio, 1 to 21")
    rating: str = Field(..., description="'AAA', 'AA' or 'low'")


class ColorDetailResponse(BaseModel):
    """Value forms and derived colors for one hex value."""
    query: str
    color: PaletteColor
    rgb_text: str
    cmyk_text: str
    hsl: List[float] = Field(..., description="[h, s, l] with h in degrees, s and l in 0-1")
    hsb: List[float] = Field(..., description="[h, s, b] with h in degrees, s and b in 0-1")
    shades_tints: List[PaletteColor] = Field(..., description="Dark to light, unique by hex")
    harmony_mode: str
    harmony: List[PaletteColor]
    contrast: List[ContrastEntry]
