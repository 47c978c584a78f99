"""
Начальная расстановка центроидов методом k-means++.

Первый центроид выбирается равномерно, каждый следующий с вероятностью,
пропорциональной квадрату расстояния точки до ближайшего уже выбранного
центроида. Источник случайности передаётся явно.
"""

from __future__ import annotations

import logging

import numpy as np

from .errors import EmptyDatasetError, InvalidClusterCountError

logger = logging.getLogger(__name__)


def make_rng(rng: np.random.Generator | int | None = None) -> np.random.Generator:
    """Генератор как есть, либо default_rng(seed) для int/None."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def nearest_centroid_distances(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Квадрат расстояния каждой точки до ближайшего центроида.

    Args:
        X: Данные формы (N, D)
        centroids: Центроиды формы (M, D), M >= 1

    Returns:
        Массив формы (N,)
    """
    # (N, M, D) → (N, M)
    diff = X[:, None, :] - centroids[None, :, :]
    distances = np.einsum("nmd,nmd->nm", diff, diff)
    return distances.min(axis=1)


def kmeans_plusplus(
    X: np.ndarray,
    n_clusters: int,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """
    Выбирает n_clusters начальных центроидов среди точек X.

    Выборка с возвращением: если различных точек меньше n_clusters,
    центроиды совпадут, что допустимо (дальше возможны пустые кластеры).

    Args:
        X: Данные формы (N, D)
        n_clusters: Количество центроидов (>= 1)
        rng: numpy Generator, seed или None

    Returns:
        Массив центроидов формы (n_clusters, D), float64

    Raises:
        EmptyDatasetError: Если X пуст
        InvalidClusterCountError: Если n_clusters < 1
        FloatingPointError: Если квадраты расстояний переполнились
    """
    if X.shape[0] == 0:
        raise EmptyDatasetError("Cannot seed centroids from an empty dataset")
    if n_clusters < 1:
        raise InvalidClusterCountError(f"n_clusters must be >= 1, got {n_clusters}")

    rng = make_rng(rng)
    N, D = X.shape
    centroids = np.empty((n_clusters, D), dtype=np.float64)

    first = int(rng.integers(N))
    centroids[0] = X[first]
    closest = nearest_centroid_distances(X, centroids[:1])

    for c in range(1, n_clusters):
        total = float(closest.sum())
        if not np.isfinite(total):
            raise FloatingPointError(
                f"Non-finite seeding weights while choosing centroid {c + 1}"
            )
        if total > 0.0:
            probs = closest / total
            idx = int(rng.choice(N, p=probs))
        else:
            # все точки уже совпадают с каким-то центроидом
            logger.debug("All points coincide with chosen centroids, sampling uniformly")
            idx = int(rng.integers(N))
        centroids[c] = X[idx]

        new_dist = nearest_centroid_distances(X, centroids[c : c + 1])
        np.minimum(closest, new_dist, out=closest)

    return centroids
