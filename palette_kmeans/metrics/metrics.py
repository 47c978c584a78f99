"""
Метрика ошибки кластеризации и критерий сходимости.

Модуль предоставляет функции для вычисления инерции (суммы квадратов
расстояний точек до своих центроидов), размеров кластеров и проверки
сходимости по изменению инерции.
"""

from __future__ import annotations

import numpy as np


def inertia(X: np.ndarray, centroids: np.ndarray, labels: np.ndarray) -> float:
    """
    Вычисляет суммарную внутрикластерную сумму квадратов расстояний.

    Один проход O(N): каждой точке сопоставляется её центроид через labels.

    Args:
        X: Данные формы (N, D)
        centroids: Центроиды формы (K, D)
        labels: Индексы кластеров формы (N,)

    Returns:
        Значение инерции (>= 0)
    """
    diff = X - centroids[labels]
    return float(np.einsum("nd,nd->", diff, diff))


def cluster_sizes(labels: np.ndarray, k: int) -> np.ndarray:
    """
    Количество точек в каждом из k кластеров.

    Args:
        labels: Индексы кластеров формы (N,)
        k: Количество кластеров

    Returns:
        Массив формы (k,) с числом точек (пустые кластеры дают 0)
    """
    return np.bincount(labels, minlength=k)[:k]


def converged(previous: float, current: float, tol: float = 0.0) -> bool:
    """
    Проверка сходимости по инерции.

    При tol=0.0 это точное равенство двух последовательных значений.

    Raises:
        ValueError: Если tol отрицателен
    """
    if tol < 0:
        raise ValueError("tol cannot be negative")
    if tol == 0.0:
        return current == previous
    return abs(current - previous) <= tol
