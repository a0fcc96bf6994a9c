"""
Palette Atlas

Palette extraction from raster images and hue x lightness/saturation
bucketing of named color collections.
"""

__version__ = "1.0.0"
