"""
Таймер для замеров шагов назначения и обновления.

Контекстный менеджер Timer на time.perf_counter(): не зависит от системных
часов, подходит для коротких интервалов внутри одной итерации EM.
"""
from __future__ import annotations
import time
from typing import Any


class Timer:
    """
    Контекстный менеджер для измерения времени выполнения кода.

    Пример использования:
        with Timer() as t:
            labels = model.assign_clusters(X, centroids)
        t_assign = t.elapsed
    """

    def __init__(self) -> None:
        self.start: float = 0.0
        self.end: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> Timer:
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        # Время фиксируется и при исключении внутри блока
        self.end = time.perf_counter()
        self.elapsed = self.end - self.start
