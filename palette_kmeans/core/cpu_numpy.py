# core/cpu_numpy.py
from __future__ import annotations

import numpy as np

from palette_kmeans.metrics.metrics import cluster_sizes

from .base import KMeansBase

# Строк за один блок при поиске ближайшего центроида: (block, K, D) в памяти
ASSIGN_BLOCK_ROWS = 65_536


class KMeansCPUNumpy(KMeansBase):
    """Простая однопоточная реализация KMeans на NumPy (baseline)."""

    def compute_labels(self, X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        N = X.shape[0]
        labels = np.empty(N, dtype=np.intp)
        for start in range(0, N, ASSIGN_BLOCK_ROWS):
            block = X[start : start + ASSIGN_BLOCK_ROWS]
            # (B, K, D) → (B, K); argmin берёт первый минимум, то есть меньший индекс
            diff = block[:, None, :] - centroids[None, :, :]
            distances = np.einsum("bkd,bkd->bk", diff, diff)
            labels[start : start + block.shape[0]] = np.argmin(distances, axis=1)
        return labels

    def accumulate_clusters(
        self, X: np.ndarray, labels: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        # один проход O(N): раскладываем точки по корзинам кластеров
        D = X.shape[1]
        sums = np.zeros((self.K, D), dtype=np.float64)
        np.add.at(sums, labels, X)
        counts = cluster_sizes(labels, self.K).astype(np.int64)
        return sums, counts
