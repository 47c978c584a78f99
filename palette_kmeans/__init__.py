"""
palette_kmeans — кластеризация цветов методом K-means (k-means++ посев)
и перекраска изображений в уменьшенную палитру.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from palette_kmeans.core import (
    Assignment,
    ClusteringResult,
    EmptyClusterWarning,
    EmptyDatasetError,
    InvalidClusterCountError,
    KMeansCPUNumpy,
    Point,
)

__version__ = "0.1.0"


def fit_kmeans(
    X: Any,
    n_clusters: int,
    rng: np.random.Generator | int | None = None,
    **kwargs: Any,
) -> ClusteringResult:
    """Однопоточный KMeans с посевом k-means++ одной строкой."""
    return KMeansCPUNumpy(n_clusters=n_clusters, **kwargs).fit(X, rng=rng)


__all__ = [
    "Assignment",
    "ClusteringResult",
    "EmptyClusterWarning",
    "EmptyDatasetError",
    "InvalidClusterCountError",
    "KMeansCPUNumpy",
    "Point",
    "fit_kmeans",
]
