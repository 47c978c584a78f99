"""
Тесты типа Point и приведения датасета к массиву.
"""

import numpy as np
import pytest
from palette_kmeans.core.errors import DimensionMismatchError, EmptyDatasetError
from palette_kmeans.core.point import Assignment, Point, as_points_array, squared_distance


class TestPoint:
    """Тесты арифметики точек."""

    def test_squared_distance_simple_case(self):
        assert Point.zeros(3).squared_distance(Point.of(1, 1, 1)) == 3.0

    def test_squared_distance_example(self):
        a = Point.of(10.0, 98.3, 29.1)
        b = Point.of(5.0, 98.3, 198.7)
        assert a.squared_distance(b) == pytest.approx(28789.16)

    def test_squared_distance_zero_for_same_point(self):
        p = Point.of(200.0, 10.0, 0.0)
        assert p.squared_distance(p) == 0.0

    def test_squared_distance_no_8bit_saturation(self):
        """Большие разности каналов не обрезаются до 255."""
        assert Point.of(0, 0, 0).squared_distance(Point.of(255, 255, 255)) == 3 * 255.0**2

    def test_squared_distance_symmetry(self):
        gen = np.random.default_rng(0)
        for _ in range(50):
            a = Point.from_array(gen.uniform(-100, 100, 4))
            b = Point.from_array(gen.uniform(-100, 100, 4))
            assert squared_distance(a, b) == squared_distance(b, a)
            assert squared_distance(a, a) == 0.0
            assert squared_distance(a, b) >= 0.0

    def test_add(self):
        assert Point.of(1, 2, 3) + Point.of(0.5, 0.5, 0.5) == Point.of(1.5, 2.5, 3.5)

    def test_immutable(self):
        p = Point.of(1, 2, 3)
        with pytest.raises(AttributeError):
            p.channels = (0.0,)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            Point.of(1, 2) + Point.of(1, 2, 3)
        with pytest.raises(DimensionMismatchError):
            Point.of(1, 2).squared_distance(Point.of(1, 2, 3))

    def test_as_array(self):
        arr = Point.of(1, 2, 3).as_array()
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr, [1.0, 2.0, 3.0])

    def test_assignment_is_frozen(self):
        a = Assignment(point_index=3, cluster_ind=1)
        with pytest.raises(AttributeError):
            a.cluster_ind = 2


class TestAsPointsArray:
    """Тесты приведения входных данных к (N, D) float64."""

    def test_from_points(self):
        X = as_points_array([Point.of(1, 2, 3), Point.of(4, 5, 6)])
        assert X.shape == (2, 3)
        assert X.dtype == np.float64

    def test_from_nested_lists(self):
        X = as_points_array([[0, 0], [1, 1], [2, 2]])
        assert X.shape == (3, 2)

    def test_from_uint8_array(self):
        X = as_points_array(np.array([[255, 0, 0]], dtype=np.uint8))
        assert X.dtype == np.float64
        assert X[0, 0] == 255.0

    def test_empty(self):
        with pytest.raises(EmptyDatasetError):
            as_points_array([])
        with pytest.raises(EmptyDatasetError):
            as_points_array(np.empty((0, 3)))

    def test_ragged(self):
        with pytest.raises(DimensionMismatchError):
            as_points_array([Point.of(1, 2), Point.of(1, 2, 3)])

    def test_list_of_scalars_is_one_channel(self):
        """Список чисел ведёт себя как 1-D массив: точки с одним каналом."""
        X = as_points_array([1, 2, 3])

        assert X.shape == (3, 1)
        np.testing.assert_array_equal(X, as_points_array(np.array([1, 2, 3])))

    def test_scalars_mixed_with_vectors(self):
        with pytest.raises(DimensionMismatchError):
            as_points_array([1.0, [2.0, 3.0]])
