"""
Валидация загруженных точек перед кластеризацией.

Модуль предоставляет функции для проверки того, что загрузчик отдал
движку корректный датасет.
"""

from __future__ import annotations

import numpy as np

from palette_kmeans.core.errors import EmptyDatasetError


def validate_points(X: np.ndarray, dim: int | None = None) -> None:
    """
    Проверяет корректность массива точек.

    Args:
        X: Массив точек формы (N, D)
        dim: Ожидаемая размерность D (если задана)

    Raises:
        EmptyDatasetError: Если точек нет
        ValueError: Если форма неверна или есть NaN/inf
    """
    if X.ndim != 2:
        raise ValueError(f"Expected a 2-D array of points, got shape {X.shape}")
    if X.shape[0] == 0:
        raise EmptyDatasetError("Dataset contains no points")
    if dim is not None and X.shape[1] != dim:
        raise ValueError(f"Expected {dim} dimensions, got {X.shape[1]}")
    if not np.all(np.isfinite(X)):
        raise ValueError("Dataset contains NaN or infinite values")
