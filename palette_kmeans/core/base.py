from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

import numpy as np

from palette_kmeans.core.errors import (
    DimensionMismatchError,
    EmptyClusterWarning,
    EmptyDatasetError,
    InvalidClusterCountError,
)
from palette_kmeans.core.point import Assignment, Point, as_points_array
from palette_kmeans.core.seeding import kmeans_plusplus, make_rng
from palette_kmeans.metrics.metrics import converged as inertia_converged
from palette_kmeans.metrics.metrics import inertia
from palette_kmeans.metrics.timers import Timer

_log = logging.getLogger(__name__)

# "Предыдущая" инерция до первой итерации: реальная инерция не бывает < 0
INERTIA_SENTINEL = -1.0

CONVERGENCE_MODES = ("inertia", "labels")


class KMeansState(str, Enum):
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    ITERATING = "iterating"
    CONVERGED = "converged"
    # достигнут лимит n_iters без сходимости
    EXHAUSTED = "exhausted"


@dataclass
class ClusteringResult:
    """Итог одного запуска fit: финальные центроиды и назначения."""

    centroids: np.ndarray
    labels: np.ndarray
    inertia: float
    n_iters: int
    converged: bool
    history: List[float] = field(default_factory=list)
    empty_cluster_events: int = 0

    @property
    def n_clusters(self) -> int:
        return int(self.centroids.shape[0])

    def centroid_points(self) -> List[Point]:
        return [Point.from_array(c) for c in self.centroids]

    def assignments(self) -> List[Assignment]:
        return [Assignment(i, int(c)) for i, c in enumerate(self.labels)]


class KMeansBase(ABC):
    """
    Базовый класс для реализаций KMeans.

    Отвечает за цикл итераций (EM), посев k-means++, обработку пустых
    кластеров и сбор низкоуровневых таймингов:
    - T_назначения: время шага assign_clusters;
    - T_обновления: время шага update_centroids;
    - T_итерации: сумма двух предыдущих.

    Наследники реализуют только compute_labels (поиск ближайшего центроида)
    и accumulate_clusters (суммы и количества точек по кластерам).
    """

    def __init__(
        self,
        n_clusters: int,
        n_iters: int = 300,
        tol: float = 0.0,
        convergence: str = "inertia",
        logger: Any | None = None,
        record_history: bool = False,
    ):
        if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
            raise InvalidClusterCountError(
                f"n_clusters must be an integer, got {n_clusters!r}"
            )
        if n_clusters < 1:
            raise InvalidClusterCountError(f"n_clusters must be >= 1, got {n_clusters}")
        if n_iters < 1:
            raise ValueError(f"n_iters must be >= 1, got {n_iters}")
        if tol < 0:
            raise ValueError(f"tol must be >= 0, got {tol}")
        if convergence not in CONVERGENCE_MODES:
            raise ValueError(
                f"convergence must be one of {CONVERGENCE_MODES}, got {convergence!r}"
            )

        self.K = int(n_clusters)
        self.n_iters = n_iters
        self.tol = tol  # Порог сходимости по изменению инерции (0.0: точное равенство)
        self.convergence = convergence
        self.logger = logger
        self.record_history = record_history

        self.state = KMeansState.UNINITIALIZED
        self.centroids: np.ndarray | None = None
        self.labels: np.ndarray | None = None
        self.inertia_: float | None = None
        self.history: List[float] = []
        self.empty_cluster_events: int = 0

        # агрегированные тайминги за один вызов fit(...)
        self.t_assign_total: float = 0.0
        self.t_update_total: float = 0.0
        self.t_iter_total: float = 0.0

        # Реальное количество выполненных итераций
        self.n_iters_actual: int = 0

    def _warn(self, msg: str) -> None:
        if self.logger:
            self.logger.warning(msg)
        else:
            _log.warning(msg)

    # ---------- Seeding ----------

    def seed(
        self,
        X: np.ndarray,
        initial_centroids: np.ndarray | None = None,
        rng: np.random.Generator | int | None = None,
    ) -> np.ndarray:
        """Uninitialized -> Seeded: k-means++ либо проверка переданных центроидов."""
        if initial_centroids is None:
            centroids = kmeans_plusplus(X, self.K, make_rng(rng))
        else:
            centroids = np.array(initial_centroids, dtype=np.float64)
            if centroids.ndim != 2 or centroids.shape[0] != self.K:
                raise InvalidClusterCountError(
                    f"Expected {self.K} initial centroids, got shape {centroids.shape}"
                )
            if centroids.shape[1] != X.shape[1]:
                raise DimensionMismatchError(
                    f"Centroid dimension {centroids.shape[1]} != data dimension {X.shape[1]}"
                )

        self.centroids = centroids
        self.state = KMeansState.SEEDED
        return centroids

    # ---------- Expectation ----------

    def assign_clusters(self, X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """
        Шаг назначения: индекс ближайшего центроида для каждой точки.

        При равных расстояниях выбирается меньший индекс кластера.
        Порядок результата совпадает с порядком X.
        """
        if X.shape[0] == 0:
            raise EmptyDatasetError("Cannot assign an empty dataset")
        if centroids.shape[0] == 0:
            raise InvalidClusterCountError("Cannot assign points to an empty set of centroids")
        if centroids.shape[1] != X.shape[1]:
            raise DimensionMismatchError(
                f"Centroid dimension {centroids.shape[1]} != data dimension {X.shape[1]}"
            )
        return self.compute_labels(X, centroids)

    # ---------- Maximization ----------

    def update_centroids(
        self,
        X: np.ndarray,
        labels: np.ndarray,
        centroids: np.ndarray | None = None,
    ) -> np.ndarray:
        """
        Шаг обновления: среднее точек каждого кластера.

        Пустой кластер сохраняет предыдущее значение центроида
        (EmptyClusterWarning), деления на ноль не происходит.
        """
        previous = self.centroids if centroids is None else centroids
        if previous is None:
            raise RuntimeError("update_centroids requires current centroids")

        sums, counts = self.accumulate_clusters(X, labels)

        new_centroids = np.array(previous, dtype=np.float64, copy=True)
        non_empty = counts > 0
        new_centroids[non_empty] = sums[non_empty] / counts[non_empty, None]

        empty = np.flatnonzero(~non_empty)
        if empty.size:
            self.empty_cluster_events += int(empty.size)
            msg = f"Empty clusters {empty.tolist()} keep their previous centroids"
            warnings.warn(msg, EmptyClusterWarning, stacklevel=2)
            self._warn(msg)

        return new_centroids

    # ---------- Driver loop ----------

    def fit(
        self,
        X: Any,
        initial_centroids: np.ndarray | None = None,
        rng: np.random.Generator | int | None = None,
    ) -> ClusteringResult:
        """
        Основной цикл KMeans с остановкой по сходимости.

        Алгоритм останавливается, когда:
        - инерция совпала с предыдущей (|Δ| <= tol, при tol=0 точное равенство),
          либо назначения не изменились (convergence="labels"), ИЛИ
        - достигнуто максимальное количество итераций (n_iters).

        Собирает тайминги по шагам назначения и обновления центроидов.
        """
        X = as_points_array(X)
        if not np.all(np.isfinite(X)):
            raise ValueError("Dataset contains NaN or infinite values")

        self.seed(X, initial_centroids, rng)
        assert self.centroids is not None

        # сбрасываем накопленное состояние для нового запуска
        self.t_assign_total = 0.0
        self.t_update_total = 0.0
        self.t_iter_total = 0.0
        self.n_iters_actual = 0
        self.history = []
        self.empty_cluster_events = 0
        self.labels = None

        prev_inertia = INERTIA_SENTINEL
        prev_labels: np.ndarray | None = None
        is_converged = False

        for i in range(self.n_iters):
            self.state = KMeansState.ITERATING

            with Timer() as t_assign:
                labels = self.assign_clusters(X, self.centroids)
            with Timer() as t_update:
                self.centroids = self.update_centroids(X, labels)

            self.labels = labels
            current = inertia(X, self.centroids, labels)
            if not (np.isfinite(current) and np.all(np.isfinite(self.centroids))):
                raise FloatingPointError(
                    f"Non-finite centroids or inertia at iteration {i + 1}"
                )
            self.inertia_ = current
            if self.record_history:
                self.history.append(current)

            t_assign_elapsed = t_assign.elapsed
            t_update_elapsed = t_update.elapsed
            self.t_assign_total += t_assign_elapsed
            self.t_update_total += t_update_elapsed
            self.t_iter_total += t_assign_elapsed + t_update_elapsed
            self.n_iters_actual = i + 1

            if self.convergence == "labels":
                is_converged = prev_labels is not None and np.array_equal(labels, prev_labels)
            else:
                is_converged = inertia_converged(prev_inertia, current, self.tol)

            if self.logger and (i == 0 or (i + 1) % 10 == 0 or is_converged):
                status = " (converged)" if is_converged else ""
                self.logger.info(
                    f"  Iteration {i + 1}/{self.n_iters}{status} "
                    f"(T_assign={t_assign_elapsed:.6f}s, "
                    f"T_update={t_update_elapsed:.6f}s, "
                    f"inertia={current:.6e})"
                )

            if is_converged:
                self.state = KMeansState.CONVERGED
                if self.logger:
                    self.logger.info(
                        f"  Convergence reached after {i + 1} iterations "
                        f"(inertia={current:.6e}, criterion={self.convergence})"
                    )
                break

            prev_inertia = current
            prev_labels = labels
        else:
            self.state = KMeansState.EXHAUSTED
            self._warn(
                f"KMeans stopped after n_iters={self.n_iters} without convergence "
                f"(inertia={self.inertia_:.6e})"
            )

        return self.result()

    def result(self) -> ClusteringResult:
        if self.centroids is None or self.labels is None or self.inertia_ is None:
            raise RuntimeError("Model is not fitted")
        return ClusteringResult(
            centroids=self.centroids.copy(),
            labels=self.labels.copy(),
            inertia=float(self.inertia_),
            n_iters=self.n_iters_actual,
            converged=self.state == KMeansState.CONVERGED,
            history=list(self.history),
            empty_cluster_events=self.empty_cluster_events,
        )

    def predict(self, X: Any) -> np.ndarray:
        """Назначение новых точек обученным центроидам."""
        if self.centroids is None or self.state == KMeansState.UNINITIALIZED:
            raise RuntimeError("Model is not fitted")
        return self.assign_clusters(as_points_array(X), self.centroids)

    @abstractmethod
    def compute_labels(self, X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """Индекс ближайшего центроида для каждой точки (минимальный при равенстве)."""
        raise NotImplementedError

    @abstractmethod
    def accumulate_clusters(
        self, X: np.ndarray, labels: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Суммы точек (K, D) и их количества (K,) по кластерам."""
        raise NotImplementedError
