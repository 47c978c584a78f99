"""
Загрузка табличных датасетов для кластеризации.

Модуль предоставляет класс Dataset для загрузки точек из текстовых файлов
с разделителями (CSV, TSV, пробелы).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from palette_kmeans.core.point import Point
from palette_kmeans.data.validation import validate_points

logger = logging.getLogger(__name__)


class Dataset:
    """
    Набор точек для кластеризации, загруженный из текстового файла.

    Формат файла:
    # комментарии (игнорируются)
    необязательная строка заголовка
    N строк: D числовых колонок
    """

    def __init__(self, X: np.ndarray, source: str | Path | None = None) -> None:
        """
        Инициализация датасета.

        Args:
            X: Массив точек формы (N, D)
            source: Путь к исходному файлу (для логов)
        """
        validate_points(X)
        self.X = X
        self.source = Path(source) if source is not None else None

    @property
    def n_points(self) -> int:
        return int(self.X.shape[0])

    @property
    def dim(self) -> int:
        return int(self.X.shape[1])

    def points(self) -> list[Point]:
        return [Point.from_array(row) for row in self.X]

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        delimiter: str | None = ",",
        columns: Sequence[int] | None = None,
        header: bool | None = None,
    ) -> Dataset:
        """
        Загружает точки из текстового файла с разделителями.

        Args:
            path: Путь к файлу
            delimiter: Разделитель колонок (None: любые пробелы)
            columns: Индексы используемых колонок (по умолчанию все)
            header: Пропустить первую строку; None: определить автоматически

        Raises:
            FileNotFoundError: Если файла нет
            ValueError: Если значения не числовые или строки разной длины
        """
        path = Path(path)
        logger.info(f"Loading dataset from {path}")
        X = load_points(path, delimiter=delimiter, columns=columns, header=header)
        logger.info(f"Dataset loaded: X.shape={X.shape}")
        return cls(X, source=path)


def _is_numeric_row(parts: Sequence[str]) -> bool:
    try:
        [float(p) for p in parts]
    except ValueError:
        return False
    return True


def load_points(
    path: str | Path,
    delimiter: str | None = ",",
    columns: Sequence[int] | None = None,
    header: bool | None = None,
) -> np.ndarray:
    """
    Парсит текст с разделителями в массив float64 формы (N, D).

    Пустые строки и строки, начинающиеся с '#', пропускаются.
    """
    rows: list[list[float]] = []
    first = True

    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            parts = [p.strip() for p in line.split(delimiter)]
            if columns is not None:
                try:
                    parts = [parts[c] for c in columns]
                except IndexError:
                    raise ValueError(
                        f"{path}:{lineno}: expected at least {max(columns) + 1} columns, "
                        f"got {len(parts)}"
                    ) from None

            if first:
                first = False
                skip = header if header is not None else not _is_numeric_row(parts)
                if skip:
                    continue

            try:
                values = [float(p) for p in parts]
            except ValueError:
                raise ValueError(f"{path}:{lineno}: non-numeric value in {line!r}") from None

            if rows and len(values) != len(rows[0]):
                raise ValueError(
                    f"{path}:{lineno}: expected {len(rows[0])} columns, got {len(values)}"
                )
            rows.append(values)

    X = np.array(rows, dtype=np.float64)
    if X.size == 0:
        X = X.reshape(0, 0)
    return X
