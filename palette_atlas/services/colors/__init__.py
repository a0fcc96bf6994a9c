"""
Palette Atlas Colors Module

Provides color-space conversion, hex key normalization, pixel sampling,
k-means palette clustering and the hue grid aggregation used for
browsing named color collections.
"""

__version__ = "1.0.0"
