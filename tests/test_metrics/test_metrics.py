"""
Тесты метрики ошибки и критерия сходимости.
"""

import numpy as np
import pytest
from palette_kmeans.metrics.metrics import cluster_sizes, converged, inertia


class TestInertia:
    """Тесты вычисления инерции."""

    def test_inertia_single_cluster(self):
        """(1+1+1) + 0 + (1+1+1) = 6."""
        X = np.array([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [3.0, 3.0, 3.0]])
        centroids = np.array([[2.0, 2.0, 2.0]])
        labels = np.array([0, 0, 0])
        assert inertia(X, centroids, labels) == 6.0

    def test_inertia_zero_when_points_on_centroids(self):
        X = np.array([[0.0, 0.0], [5.0, 5.0]])
        centroids = np.array([[5.0, 5.0], [0.0, 0.0]])
        labels = np.array([1, 0])
        assert inertia(X, centroids, labels) == 0.0

    def test_inertia_uses_assigned_not_nearest(self):
        """Инерция считается по назначению, а не по ближайшему центроиду."""
        X = np.array([[0.0, 0.0]])
        centroids = np.array([[0.0, 0.0], [3.0, 4.0]])
        assert inertia(X, centroids, np.array([1])) == 25.0

    def test_inertia_matches_loop(self):
        gen = np.random.default_rng(0)
        X = gen.normal(size=(50, 4))
        centroids = gen.normal(size=(3, 4))
        labels = gen.integers(0, 3, size=50)

        expected = sum(float(np.sum((x - centroids[l]) ** 2)) for x, l in zip(X, labels))
        assert inertia(X, centroids, labels) == pytest.approx(expected, rel=1e-12)


class TestClusterSizes:
    def test_counts_with_empty_cluster(self):
        np.testing.assert_array_equal(cluster_sizes(np.array([0, 2, 2, 0, 0]), 4), [3, 0, 2, 0])


class TestConverged:
    """Тесты критерия сходимости."""

    def test_exact_equality(self):
        assert converged(6.0, 6.0)
        assert not converged(6.0, 6.0 + 1e-12)

    def test_sentinel_never_equal(self):
        assert not converged(-1.0, 0.0)

    def test_tolerance(self):
        assert converged(10.0, 10.4, tol=0.5)
        assert not converged(10.0, 11.0, tol=0.5)

    def test_negative_tolerance(self):
        with pytest.raises(ValueError):
            converged(1.0, 1.0, tol=-0.1)
