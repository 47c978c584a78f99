from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from palette_kmeans.core.base import CONVERGENCE_MODES, KMeansBase
from palette_kmeans.core.cpu_multiprocessing import (
    KMeansCPUMultiprocessing,
    MultiprocessingConfig,
)
from palette_kmeans.core.cpu_numpy import KMeansCPUNumpy
from palette_kmeans.core.errors import InvalidClusterCountError


class Backend(str, Enum):
    NUMPY = "numpy"
    MULTIPROCESSING = "multiprocessing"


@dataclass
class ClusteringConfig:
    """
    Параметры запуска кластеризации.

    Attributes:
        n_clusters: Количество кластеров k
        n_iters: Верхняя граница числа итераций
        tol: Порог сходимости по инерции (0.0: точное равенство)
        convergence: "inertia" или "labels"
        seed: Seed генератора для посева k-means++ (None: случайный)
        backend: "numpy" или "multiprocessing"
        n_processes: Число процессов для backend="multiprocessing"
        chunk_size: Размер чанка для backend="multiprocessing"
    """

    n_clusters: int = 10
    n_iters: int = 300
    tol: float = 0.0
    convergence: str = "inertia"
    seed: Optional[int] = None
    backend: str = Backend.NUMPY.value
    n_processes: int = 4
    chunk_size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.n_clusters < 1:
            raise InvalidClusterCountError(
                f"n_clusters must be >= 1, got {self.n_clusters}"
            )
        if self.n_iters < 1:
            raise ValueError(f"n_iters must be >= 1, got {self.n_iters}")
        if self.tol < 0:
            raise ValueError(f"tol must be >= 0, got {self.tol}")
        if self.convergence not in CONVERGENCE_MODES:
            raise ValueError(
                f"convergence must be one of {CONVERGENCE_MODES}, got {self.convergence!r}"
            )
        if self.backend not in [b.value for b in Backend]:
            raise ValueError(
                f"backend must be one of {[b.value for b in Backend]}, got {self.backend!r}"
            )
        if self.n_processes < 1:
            raise ValueError(f"n_processes must be >= 1, got {self.n_processes}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ClusteringConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str | Path) -> ClusteringConfig:
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def merged(self, **overrides: Any) -> ClusteringConfig:
        """Копия с переопределёнными полями (None значения игнорируются)."""
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ClusteringConfig.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def make_model(
    config: ClusteringConfig,
    logger: Any | None = None,
    record_history: bool = False,
) -> KMeansBase:
    """Создаёт модель KMeans под выбранный backend."""
    common: Dict[str, Any] = dict(
        n_clusters=config.n_clusters,
        n_iters=config.n_iters,
        tol=config.tol,
        convergence=config.convergence,
        logger=logger,
        record_history=record_history,
    )
    if config.backend == Backend.MULTIPROCESSING.value:
        return KMeansCPUMultiprocessing(
            mp=MultiprocessingConfig(
                n_processes=config.n_processes,
                chunk_size=config.chunk_size,
            ),
            **common,
        )
    return KMeansCPUNumpy(**common)
