"""
K-means palette clustering over RGB samples.

Fixed iteration budget, random initialization with replacement, nearest
centroid by squared Euclidean distance with ties going to the lowest index,
and integer-truncated means. A centroid that receives no samples in a pass
keeps its previous value.
"""

from typing import List, Optional, Protocol, Sequence, Union

import numpy as np
from loguru import logger

from palette_atlas.config import config

from .models import RGB


class IndexSource(Protocol):
    """Anything that can draw `size` integers in [low, high), e.g. numpy Generator."""

    def integers(self, low: int, high: int, size: int) -> Sequence[int]: ...


SampleInput = Union[np.ndarray, Sequence[RGB], Sequence[Sequence[int]]]


def _as_sample_array(samples: SampleInput) -> np.ndarray:
    if isinstance(samples, np.ndarray):
        if samples.size == 0:
            return np.empty((0, 3), dtype=np.int64)
        if samples.ndim == 1:
            return samples.reshape(-1, 3).astype(np.int64)
        # (N, 4) or (H, W, 4) buffers carry alpha in the last axis
        return samples.reshape(-1, samples.shape[-1])[:, :3].astype(np.int64)

    rows = [s.as_tuple() if isinstance(s, RGB) else tuple(s[:3]) for s in samples]
    if not rows:
        return np.empty((0, 3), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64)


def assign_nearest(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Index of the nearest centroid for every sample.

    Distances are exact integers; argmin returns the first minimum, which is
    the lowest centroid index on ties.
    """
    diffs = samples[:, None, :] - centroids[None, :, :]
    distances = np.einsum("nkc,nkc->nk", diffs, diffs)
    return np.argmin(distances, axis=1)


def cluster_palette(samples: SampleInput,
                    k: Optional[int] = None,
                    iterations: Optional[int] = None,
                    rng: Optional[IndexSource] = None,
                    rng_seed: Optional[int] = None) -> List[RGB]:
    """
    Cluster RGB samples into a k-color palette.

    Args:
        samples: (N, 3) array or sequence of RGB triples
        k: Number of centroids, must be >= 1 (default from config)
        iterations: Number of assignment/update passes (default from config)
        rng: Source used to pick initial centroids; anything with a numpy
            Generator style `integers(low, high, size)` method
        rng_seed: Seed for a fresh numpy Generator when `rng` is not given

    Returns:
        Exactly k centroids in creation order, or an empty list when there
        are no samples.

    Raises:
        ValueError: If k < 1
    """
    k = config.KMEANS_K if k is None else k
    iterations = config.KMEANS_ITERATIONS if iterations is None else iterations
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    points = _as_sample_array(samples)
    n_samples = len(points)
    if n_samples == 0:
        logger.info("No samples to cluster; returning empty palette")
        return []

    if rng is None:
        rng = np.random.default_rng(rng_seed)

    logger.info(f"Starting clustering with k={k}, {n_samples} samples")

    seeds = np.asarray(rng.integers(0, n_samples, size=k), dtype=np.int64)
    centroids = points[seeds].copy()

    for iteration in range(iterations):
        labels = assign_nearest(points, centroids)

        # Fresh accumulators every pass
        sums = np.zeros((k, 3), dtype=np.int64)
        np.add.at(sums, labels, points)
        counts = np.bincount(labels, minlength=k)

        assigned = counts > 0
        centroids[assigned] = sums[assigned] // counts[assigned, None]

        logger.debug(f"Pass {iteration + 1}/{iterations}: "
                     f"cluster sizes {counts.tolist()}")

    palette = [RGB.from_sequence(c) for c in centroids]
    logger.info(f"Clustering complete: {[c.hex for c in palette]}")
    return palette
