"""
Общие фикстуры для всех тестов.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Детерминированный генератор для посева k-means++."""
    return np.random.default_rng(42)


@pytest.fixture
def small_dataset():
    """Фикстура с небольшим тестовым датасетом (2D, 2 кластера)."""
    gen = np.random.default_rng(42)
    # Два явно разделённых кластера
    cluster1 = gen.standard_normal((30, 2)) + [0, 0]
    cluster2 = gen.standard_normal((30, 2)) + [8, 8]
    X = np.vstack([cluster1, cluster2])
    initial_centroids = np.array([
        [-1.0, -1.0],
        [9.0, 9.0],
    ])
    return X, initial_centroids


@pytest.fixture
def medium_dataset():
    """Фикстура со средним тестовым датасетом (10D, 3 кластера)."""
    gen = np.random.default_rng(42)
    cluster1 = gen.standard_normal((50, 10)) + [0] * 10
    cluster2 = gen.standard_normal((50, 10)) + [5] * 10
    cluster3 = gen.standard_normal((50, 10)) + [-5] * 10
    X = np.vstack([cluster1, cluster2, cluster3])
    initial_centroids = np.array([
        [-1.0] * 10,
        [6.0] * 10,
        [-6.0] * 10,
    ])
    return X, initial_centroids


@pytest.fixture
def simple_2d_dataset():
    """Фикстура с очень простым 2D датасетом для базовых тестов."""
    X = np.array([
        [0.0, 0.0],
        [1.0, 1.0],
        [2.0, 2.0],
        [10.0, 10.0],
        [11.0, 11.0],
        [12.0, 12.0],
    ])
    initial_centroids = np.array([
        [0.5, 0.5],
        [11.0, 11.0],
    ])
    return X, initial_centroids


@pytest.fixture
def rgb_blobs():
    """Пиксели RGB вокруг четырёх цветов (для свойств сходимости)."""
    gen = np.random.default_rng(7)
    centers = np.array([
        [20.0, 20.0, 20.0],
        [220.0, 40.0, 40.0],
        [40.0, 200.0, 60.0],
        [50.0, 60.0, 230.0],
    ])
    X = np.vstack([c + gen.normal(0, 12.0, (40, 3)) for c in centers])
    return X, centers
