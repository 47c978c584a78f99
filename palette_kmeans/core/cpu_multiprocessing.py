from __future__ import annotations

from dataclasses import dataclass
from multiprocessing import Pool, RawArray, cpu_count
from typing import Any, List, Optional, Tuple

import numpy as np

from palette_kmeans.core.base import ClusteringResult, KMeansBase


@dataclass(frozen=True)
class MultiprocessingConfig:
    """Параметры многопроцессорного KMeans."""

    n_processes: int = 4
    chunk_size: Optional[int] = None


# --- Глобальное состояние: shared X в воркерах ---
_SHARED_X_BUF: RawArray | None = None
_SHARED_X_SHAPE: Tuple[int, int] | None = None


def _init_shared_X(raw: RawArray, shape: Tuple[int, int]) -> None:
    """Инициализатор пула: регистрирует shared X."""
    global _SHARED_X_BUF, _SHARED_X_SHAPE
    _SHARED_X_BUF = raw
    _SHARED_X_SHAPE = shape


def _get_shared_X() -> np.ndarray:
    """NumPy-представление shared X (только чтение)."""
    assert _SHARED_X_BUF is not None and _SHARED_X_SHAPE is not None
    arr = np.frombuffer(_SHARED_X_BUF, dtype=np.float64)
    return arr.reshape(_SHARED_X_SHAPE)


def _assign_chunk_worker(args: Tuple[np.ndarray, np.ndarray]) -> np.ndarray:
    """Назначение для чанка: idx + центроиды, чтение X из shared."""
    idx, centroids = args
    X = _get_shared_X()
    X_chunk = X[idx]
    diff = X_chunk[:, None, :] - centroids[None, :, :]
    distances = np.einsum("mkd,mkd->mk", diff, diff, optimize=True)
    return np.argmin(distances, axis=1).astype(np.intp, copy=False)


def _partial_reduce_worker(
    args: Tuple[np.ndarray, np.ndarray, int, int]
) -> Tuple[np.ndarray, np.ndarray]:
    """Частичная редукция: возвращает (sums[K,D], counts[K]) для чанка."""
    idx, labels_chunk, K, D = args
    X = _get_shared_X()
    X_chunk = X[idx]

    sums = np.zeros((K, D), dtype=np.float64)
    np.add.at(sums, labels_chunk, X_chunk)
    counts = np.bincount(labels_chunk, minlength=K).astype(np.int64)

    return sums, counts


class KMeansCPUMultiprocessing(KMeansBase):
    """
    K-Means на CPU с multiprocessing и shared X (пул один раз на fit).

    Воркеры только читают X и центроиды. pool.map возвращает результаты
    в порядке чанков, поэтому метки собираются в порядке входных данных,
    а шаг обновления начинается только после получения всех чанков.
    """

    def __init__(
        self,
        n_clusters: int,
        n_iters: int = 300,
        tol: float = 0.0,
        convergence: str = "inertia",
        mp: MultiprocessingConfig = MultiprocessingConfig(),
        logger: Any | None = None,
        record_history: bool = False,
    ) -> None:
        super().__init__(
            n_clusters=n_clusters,
            n_iters=n_iters,
            tol=tol,
            convergence=convergence,
            logger=logger,
            record_history=record_history,
        )
        self.mp = mp

        # Пул и чанки переиспользуются в рамках fit
        self._pool: Optional[Pool] = None
        self._chunks: Optional[List[np.ndarray]] = None
        self._shared_X: Optional[np.ndarray] = None

    # --- Пул и разбиение ---

    def _make_chunks(self, N: int, n_procs: int) -> List[np.ndarray]:
        """Разбиение индексов на чанки."""
        if self.mp.chunk_size is None:
            chunks = np.array_split(np.arange(N), n_procs)
        else:
            cs = int(self.mp.chunk_size)
            if cs <= 0:
                raise ValueError("chunk_size must be positive")
            chunks = [np.arange(i, min(i + cs, N)) for i in range(0, N, cs)]
        return [idx for idx in chunks if idx.size > 0]

    def _ensure_pool_and_chunks(self, X: np.ndarray) -> None:
        """Ленивая инициализация пула, shared X и чанков."""
        if self._pool is not None and self._chunks is not None and self._shared_X is X:
            return
        # другой X (например, predict после fit): пересоздаём пул
        self._close_pool()

        n_procs = max(1, min(int(self.mp.n_processes), cpu_count()))
        N = X.shape[0]

        self._chunks = self._make_chunks(N, n_procs)

        # Копируем X один раз в shared RawArray (float64)
        X_c = np.ascontiguousarray(X, dtype=np.float64)
        raw = RawArray("d", int(X_c.size))
        shared_view = np.frombuffer(raw, dtype=np.float64).reshape(X_c.shape)
        shared_view[:] = X_c

        # Пул инициализирует ссылку на shared X в каждом процессе
        self._pool = Pool(
            processes=n_procs,
            initializer=_init_shared_X,
            initargs=(raw, X_c.shape),
        )
        self._shared_X = X

    def _close_pool(self) -> None:
        """Закрыть пул после fit."""
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
        self._pool = None
        self._chunks = None
        self._shared_X = None

    # ---------- Assignment (parallel over chunks) ----------

    def compute_labels(self, X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        N = X.shape[0]
        self._ensure_pool_and_chunks(X)
        assert self._pool is not None and self._chunks is not None

        labels = np.empty(N, dtype=np.intp)

        # Аргументы воркерам: индексы чанка + центроиды
        args: List[Tuple[np.ndarray, np.ndarray]] = [
            (idx, centroids) for idx in self._chunks
        ]

        results = self._pool.map(_assign_chunk_worker, args)

        for idx, lbl_chunk in zip(self._chunks, results):
            labels[idx] = lbl_chunk

        return labels

    # ---------- Update (parallel reduction) ----------

    def accumulate_clusters(
        self, X: np.ndarray, labels: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        D = X.shape[1]
        K = self.K

        self._ensure_pool_and_chunks(X)
        assert self._pool is not None and self._chunks is not None

        args_list: List[Tuple[np.ndarray, np.ndarray, int, int]] = [
            (idx, labels[idx], K, D) for idx in self._chunks
        ]

        partials: List[Tuple[np.ndarray, np.ndarray]] = self._pool.map(
            _partial_reduce_worker, args_list
        )

        sums_total = np.zeros((K, D), dtype=np.float64)
        counts_total = np.zeros(K, dtype=np.int64)

        for sums, counts in partials:
            sums_total += sums
            counts_total += counts

        return sums_total, counts_total

    def fit(
        self,
        X: Any,
        initial_centroids: np.ndarray | None = None,
        rng: np.random.Generator | int | None = None,
    ) -> ClusteringResult:
        """fit с переиспользованием пула и гарантированным закрытием."""
        try:
            return super().fit(X, initial_centroids, rng)
        finally:
            self._close_pool()

    def predict(self, X: Any) -> np.ndarray:
        try:
            return super().predict(X)
        finally:
            self._close_pool()
