"""
Palette Extraction Orchestrator

Coordinates decode -> sample -> cluster -> render for the palette endpoint.
"""

import time
from typing import Optional

from palette_atlas.config import config
from palette_atlas.schemas import PaletteColor, PaletteRequest, PaletteResponse
from palette_atlas.services.colors.kmeans import cluster_palette
from palette_atlas.services.colors.sampling import decode_base64_image, sample_pixels
from palette_atlas.services.colors.swatches import render_swatch_strip
from palette_atlas.utils.ids import generate_request_id
from palette_atlas.utils.logging import get_logger
from palette_atlas.utils.metrics import get_metrics, stage_timer


def handle_palette(request: PaletteRequest,
                   k: Optional[int] = None,
                   seed: Optional[int] = None,
                   include_swatch: bool = True) -> PaletteResponse:
    """
    Extract a k-color palette from a base64 image.

    Args:
        request: Request body with the encoded image
        k: Number of palette colors (default from config)
        seed: Seed for centroid initialization; random when None
        include_swatch: Whether to render a PNG strip of the palette

    Returns:
        PaletteResponse; the palette is empty when the image could not be
        decoded or had no pixels

    Raises:
        ValueError: For an out-of-range k or an oversized payload
    """
    log = get_logger()
    metrics = get_metrics()
    request_id = generate_request_id("pal")
    start_time = time.time()
    k = config.KMEANS_K if k is None else k

    metrics.increment_request_count("palette")
    log.info("Starting palette extraction", extra={"request_id": request_id, "k": k})

    if not config.validate_k(k):
        raise ValueError(f"k must be between 1 and {config.KMEANS_MAX_K}")

    max_b64_chars = config.MAX_FILE_MB * 1024 * 1024 * 4 // 3
    if len(request.image_b64) > max_b64_chars:
        raise ValueError(f"Image payload exceeds {config.MAX_FILE_MB}MB")

    with stage_timer("decode", request_id=request_id):
        pixels = decode_base64_image(request.image_b64)

    with stage_timer("sampling", request_id=request_id):
        samples = sample_pixels(pixels)
    metrics.record_sample_count(len(samples))

    with stage_timer("clustering", request_id=request_id):
        palette = cluster_palette(samples, k=k, rng_seed=seed)

    if not palette:
        metrics.increment_empty_count("palette")
        log.warning("No pixels sampled; returning empty palette", extra={"request_id": request_id})

    swatch = None
    if include_swatch and palette:
        with stage_timer("rendering", request_id=request_id):
            swatch = render_swatch_strip(palette, chip_size=config.SWATCH_CHIP_SIZE)

    total_ms = (time.time() - start_time) * 1000
    metrics.record_timing("palette_total", total_ms)
    log.info(f"Palette extraction complete: {len(palette)} colors",
             extra={"request_id": request_id, "ms_total": round(total_ms, 1)})

    return PaletteResponse(
        request_id=request_id,
        k=k,
        sampled_pixels=len(samples),
        palette=[PaletteColor(hex=c.hex, rgb=list(c.as_tuple())) for c in palette],
        swatch_png_b64=swatch,
    )
