"""
Тесты посева k-means++.
"""

import numpy as np
import pytest
from palette_kmeans.core.cpu_numpy import KMeansCPUNumpy
from palette_kmeans.core.errors import EmptyDatasetError, InvalidClusterCountError
from palette_kmeans.core.seeding import kmeans_plusplus, nearest_centroid_distances


class TestNearestCentroidDistances:
    def test_point_on_centroid(self):
        X = np.array([[0.0, 0.0, 0.0]])
        centroids = np.array([[0.0, 0.0, 0.0], [10.4, 1.0, 4.9]])
        np.testing.assert_array_equal(nearest_centroid_distances(X, centroids), [0.0])

    def test_takes_minimum(self):
        X = np.array([[0.0, 0.0], [10.0, 0.0]])
        centroids = np.array([[1.0, 0.0], [7.0, 0.0]])
        np.testing.assert_array_equal(nearest_centroid_distances(X, centroids), [1.0, 9.0])


class TestKMeansPlusPlus:
    """Тесты выбора начальных центроидов."""

    def test_returns_k_points_from_data(self, rgb_blobs, rng):
        X, _ = rgb_blobs
        centroids = kmeans_plusplus(X, 4, rng)

        assert centroids.shape == (4, 3)
        for c in centroids:
            assert np.any(np.all(X == c, axis=1))

    def test_deterministic_with_seed(self, rgb_blobs):
        X, _ = rgb_blobs
        a = kmeans_plusplus(X, 4, np.random.default_rng(123))
        b = kmeans_plusplus(X, 4, np.random.default_rng(123))
        np.testing.assert_array_equal(a, b)

    def test_int_seed_accepted(self, rgb_blobs):
        X, _ = rgb_blobs
        np.testing.assert_array_equal(kmeans_plusplus(X, 3, 5), kmeans_plusplus(X, 3, 5))

    def test_spreads_over_separated_groups(self):
        """Точка, совпадающая с уже выбранным центроидом, не может быть выбрана."""
        X = np.array([[0.0, 0.0, 0.0]] * 2 + [[10.0, 10.0, 10.0]] * 2)
        for seed in range(20):
            centroids = kmeans_plusplus(X, 2, np.random.default_rng(seed))
            assert not np.array_equal(centroids[0], centroids[1])

    def test_fewer_distinct_points_than_k(self):
        """Различных точек меньше k: центроиды повторяются, ошибки нет."""
        X = np.array([[1.0, 1.0], [1.0, 1.0], [2.0, 2.0]])
        centroids = kmeans_plusplus(X, 5, np.random.default_rng(0))

        assert centroids.shape == (5, 2)
        assert np.all(np.isfinite(centroids))
        assert {tuple(c) for c in centroids} <= {(1.0, 1.0), (2.0, 2.0)}

    def test_k_equals_one(self, rgb_blobs, rng):
        X, _ = rgb_blobs
        assert kmeans_plusplus(X, 1, rng).shape == (1, 3)

    def test_empty_dataset(self, rng):
        with pytest.raises(EmptyDatasetError):
            kmeans_plusplus(np.empty((0, 3)), 2, rng)

    def test_zero_clusters(self, rgb_blobs, rng):
        X, _ = rgb_blobs
        with pytest.raises(InvalidClusterCountError):
            kmeans_plusplus(X, 0, rng)

    def test_second_centroid_proportional_to_squared_distance(self):
        """Вес точки равен квадрату расстояния до ближайшего центроида: 1 и 9."""
        X = np.array([[0.0], [1.0], [3.0]])
        gen = np.random.default_rng(2024)
        n_draws = 4000
        hits = np.zeros(3)

        # первый центроид выбирается равномерно, учитываем только запуски с X[0]
        runs = 0
        while runs < n_draws:
            centroids = kmeans_plusplus(X, 2, gen)
            if centroids[0, 0] != 0.0:
                continue
            runs += 1
            hits[int(np.flatnonzero(X[:, 0] == centroids[1, 0])[0])] += 1

        freq = hits / n_draws
        assert freq[0] == 0.0
        np.testing.assert_allclose(freq[1:], [0.1, 0.9], atol=0.03)

    def test_overflowing_distances_raise(self):
        X = np.array([[0.0], [1e200], [2e200]])
        with np.errstate(over="ignore", invalid="ignore"):
            with pytest.raises(FloatingPointError):
                kmeans_plusplus(X, 2, np.random.default_rng(0))

    def test_fit_reports_seeding_overflow(self):
        X = np.array([[0.0], [1e200], [2e200]])
        with np.errstate(over="ignore", invalid="ignore"):
            with pytest.raises(FloatingPointError):
                KMeansCPUNumpy(n_clusters=2).fit(X, rng=0)

    def test_does_not_use_global_state(self, rgb_blobs):
        """Глобальный np.random не влияет на посев."""
        X, _ = rgb_blobs
        np.random.seed(1)
        a = kmeans_plusplus(X, 4, np.random.default_rng(9))
        np.random.seed(2)
        b = kmeans_plusplus(X, 4, np.random.default_rng(9))
        np.testing.assert_array_equal(a, b)
