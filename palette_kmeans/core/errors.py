"""
Иерархия ошибок движка кластеризации.

Фатальные ошибки поднимаются синхронно из точки входа (seeding / fit),
частичных результатов не возвращается. Пустой кластер не фатален и
сообщается через EmptyClusterWarning.
"""

from __future__ import annotations


class KMeansError(Exception):
    """Базовое исключение пакета."""


class EmptyDatasetError(KMeansError, ValueError):
    """Датасет не содержит ни одной точки."""


class InvalidClusterCountError(KMeansError, ValueError):
    """Некорректное число кластеров (k < 1 или пустой набор центроидов)."""


class DimensionMismatchError(KMeansError, ValueError):
    """Размерности точек/центроидов не совпадают."""


class EmptyClusterWarning(UserWarning):
    """На шаге обновления кластер не получил ни одной точки."""
