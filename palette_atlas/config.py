"""
Palette Atlas Configuration
Manages environment variables and defaults for the palette and atlas services.
"""
import os
from typing import Literal

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for Palette Atlas services."""
    
    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTE_ATLAS_LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.environ.get("PALETTE_ATLAS_LOG_JSON", "false").lower() in ("1", "true", "yes")
    
    # Payload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTE_ATLAS_MAX_FILE_MB", "10"))
    
    # Pixel sampling
    SAMPLE_MAX_EDGE: int = int(os.environ.get("PALETTE_ATLAS_SAMPLE_MAX_EDGE", "200"))
    SAMPLE_GRID_DIVISOR: int = int(os.environ.get("PALETTE_ATLAS_SAMPLE_GRID_DIVISOR", "40"))
    
    # Clustering
    KMEANS_K: int = int(os.environ.get("PALETTE_ATLAS_KMEANS_K", "5"))
    KMEANS_ITERATIONS: int = int(os.environ.get("PALETTE_ATLAS_KMEANS_ITERATIONS", "10"))
    KMEANS_MAX_K: int = int(os.environ.get("PALETTE_ATLAS_KMEANS_MAX_K", "16"))
    
    # Atlas grid
    ATLAS_HUE_BINS: int = int(os.environ.get("PALETTE_ATLAS_HUE_BINS", "6"))
    ATLAS_Y_BINS: int = int(os.environ.get("PALETTE_ATLAS_Y_BINS", "5"))
    ATLAS_MAX_BINS: int = int(os.environ.get("PALETTE_ATLAS_MAX_BINS", "36"))
    ATLAS_MODE_DEFAULT: Literal["lightness", "saturation"] = os.environ.get(
        "PALETTE_ATLAS_MODE_DEFAULT", "lightness"
    )
    ATLAS_PAGE_SIZE: int = int(os.environ.get("PALETTE_ATLAS_PAGE_SIZE", "60"))
    
    # Rendering
    SWATCH_CHIP_SIZE: int = int(os.environ.get("PALETTE_ATLAS_SWATCH_CHIP_SIZE", "40"))
    GRID_CELL_SIZE: int = int(os.environ.get("PALETTE_ATLAS_GRID_CELL_SIZE", "32"))
    
    # Color detail
    HARMONY_MODE_DEFAULT: str = os.environ.get("PALETTE_ATLAS_HARMONY_MODE_DEFAULT", "complementary")
    
    SUPPORTED_MODES = ["lightness", "saturation"]
    SEARCH_ORDERS = ["name", "luminance"]
    HARMONY_MODES = ["analogous", "complementary", "triadic", "monochromatic"]
    
    @classmethod
    def validate_k(cls, k: int) -> bool:
        """Validate cluster count."""
        return 1 <= k <= cls.KMEANS_MAX_K
    
    @classmethod
    def validate_bins(cls, bins: int) -> bool:
        """Validate a hue or y bin count."""
        return 1 <= bins <= cls.ATLAS_MAX_BINS
    
    @classmethod
    def validate_mode(cls, mode: str) -> bool:
        """Validate atlas vertical axis mode."""
        return mode in cls.SUPPORTED_MODES


# Global config instance
config = Config()
