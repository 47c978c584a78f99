"""
Точка (цвет) фиксированной размерности и назначение точки кластеру.

Внутренняя арифметика всегда во float64: 8-битные каналы появляются только
на границе ввода-вывода изображений.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence

import numpy as np

from .errors import DimensionMismatchError, EmptyDatasetError


@dataclass(frozen=True)
class Point:
    """
    Неизменяемый вектор из D вещественных каналов.

    Пример:
        >>> Point.of(1, 1, 1).squared_distance(Point.zeros(3))
        3.0
    """

    channels: tuple[float, ...]

    @classmethod
    def of(cls, *values: float) -> Point:
        return cls(tuple(float(v) for v in values))

    @classmethod
    def zeros(cls, dim: int) -> Point:
        return cls((0.0,) * dim)

    @classmethod
    def from_array(cls, arr: Iterable[float]) -> Point:
        return cls(tuple(float(v) for v in arr))

    @property
    def dim(self) -> int:
        return len(self.channels)

    def __len__(self) -> int:
        return len(self.channels)

    def __getitem__(self, i: int) -> float:
        return self.channels[i]

    def __iter__(self) -> Iterator[float]:
        return iter(self.channels)

    def _check_dim(self, other: Point) -> None:
        if self.dim != other.dim:
            raise DimensionMismatchError(
                f"Point dimensions differ: {self.dim} != {other.dim}"
            )

    def __add__(self, other: Point) -> Point:
        """Покомпонентная сумма (аккумулятор шага обновления)."""
        if not isinstance(other, Point):
            return NotImplemented
        self._check_dim(other)
        return Point(tuple(a + b for a, b in zip(self.channels, other.channels)))

    def squared_distance(self, other: Point) -> float:
        return squared_distance(self, other)

    def as_array(self) -> np.ndarray:
        return np.asarray(self.channels, dtype=np.float64)


def squared_distance(a: Point, b: Point) -> float:
    """
    Квадрат евклидова расстояния: сумма (a[i] - b[i])^2 по всем каналам.

    Без усечения промежуточных значений; 0 тогда и только тогда, когда
    точки совпадают покомпонентно.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(
            f"Point dimensions differ: {len(a)} != {len(b)}"
        )
    return float(sum((x - y) * (x - y) for x, y in zip(a, b)))


@dataclass(frozen=True)
class Assignment:
    """Пара (индекс входной точки, индекс ближайшего центроида)."""

    point_index: int
    cluster_ind: int


def _as_row(p: Any) -> tuple:
    if isinstance(p, Point):
        return p.channels
    # скаляр: одноканальная точка, как у 1-D ndarray
    if np.ndim(p) == 0:
        return (p,)
    return tuple(p)


def as_points_array(data: Sequence[Point] | np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    """
    Приводит датасет к массиву float64 формы (N, D).

    Принимает последовательность Point, вложенные списки или ndarray.
    Массив float64 возвращается без копирования.

    Raises:
        EmptyDatasetError: если точек нет
        DimensionMismatchError: если точки разной размерности
    """
    if isinstance(data, np.ndarray):
        X = np.asarray(data, dtype=np.float64)
    else:
        rows = [_as_row(p) for p in data]
        if not rows:
            raise EmptyDatasetError("Dataset contains no points")
        dims = {len(r) for r in rows}
        if len(dims) != 1:
            raise DimensionMismatchError(
                f"Points have inconsistent dimensions: {sorted(dims)}"
            )
        X = np.array(rows, dtype=np.float64)

    if X.ndim == 1:
        X = X.reshape(-1, 1) if X.size else X.reshape(0, 1)
    if X.ndim != 2:
        raise DimensionMismatchError(f"Expected a 2-D dataset, got shape {X.shape}")
    if X.shape[0] == 0:
        raise EmptyDatasetError("Dataset contains no points")
    return X
