import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import numpy as np

from palette_kmeans.core.base import ClusteringResult
from palette_kmeans.core.point import as_points_array
from palette_kmeans.metrics.timers import Timer
from palette_kmeans.utils.logging import format_run_prefix


class _PrefixedLogger:
    """Обёртка над логгером, добавляющая префикс к каждому сообщению."""

    def __init__(self, base_logger: logging.Logger | None, prefix: str) -> None:
        self._base = base_logger
        self._prefix = prefix

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self._base:
            self._base.info(f"{self._prefix} {msg}", *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self._base:
            self._base.warning(f"{self._prefix} {msg}", *args, **kwargs)


class SeedSweepRunner:
    """
    Запускает серию прогонов KMeans на одном наборе точек с разными seed.

    Ожидается, что снаружи будет передан:
    - points: массив (N, D) или последовательность Point
    - model_factory: callable, создающий модель KMeans (принимает logger=)
    """

    def __init__(
        self,
        points: Any,
        model_factory: Callable[..., Any],
        logger: logging.Logger | None = None,
    ) -> None:
        self.X = as_points_array(points)
        self.model_factory = model_factory
        self.logger = logger
        self.best: Optional[ClusteringResult] = None

    def _meta(self, model: Any, seed: int) -> Dict[str, Any]:
        return {"N": self.X.shape[0], "D": self.X.shape[1], "K": model.K, "seed": seed}

    def run(self, seeds: Iterable[int]) -> Dict[str, Any]:
        """
        Один fit на каждый seed, посев k-means++ с np.random.default_rng(seed).

        :param seeds: значения seed для генератора
        :return: словарь со статистикой по прогонам и лучшим прогоном
        """
        seeds = list(seeds)
        if not seeds:
            raise ValueError("At least one seed is required")

        runs: List[Dict[str, Any]] = []
        inertias: List[float] = []
        times: List[float] = []
        self.best = None
        best_seed: int | None = None

        for run_idx, seed in enumerate(seeds, start=1):
            model = self.model_factory(logger=None)
            prefix = format_run_prefix(self._meta(model, seed))
            if self.logger:
                model.logger = _PrefixedLogger(self.logger, prefix)

            if self.logger:
                self.logger.info(f"{prefix} Run {run_idx}/{len(seeds)}")

            with Timer() as t_fit:
                result = model.fit(self.X, rng=np.random.default_rng(seed))
            t_fit_val = float(t_fit.elapsed)

            times.append(t_fit_val)
            inertias.append(result.inertia)
            runs.append(
                {
                    "seed": seed,
                    "inertia": result.inertia,
                    "n_iters_actual": result.n_iters,
                    "converged": result.converged,
                    "empty_cluster_events": result.empty_cluster_events,
                    "T_fit": t_fit_val,
                    "T_assign_total": float(model.t_assign_total),
                    "T_update_total": float(model.t_update_total),
                    "T_iter_total": float(model.t_iter_total),
                }
            )

            if self.best is None or result.inertia < self.best.inertia:
                self.best = result
                best_seed = seed

        stats: Dict[str, Any] = {
            "inertia_avg": float(np.mean(inertias)),
            "inertia_std": float(np.std(inertias)),
            "inertia_min": float(np.min(inertias)),
            "T_fit_avg": float(np.mean(times)),
            "T_fit_std": float(np.std(times)),
            "T_fit_min": float(np.min(times)),
            "best_seed": best_seed,
            "runs": runs,
        }

        if self.logger:
            self.logger.info(
                f"Sweep over {len(seeds)} seeds: "
                f"inertia_min={stats['inertia_min']:.6e} (seed={best_seed}), "
                f"inertia_avg={stats['inertia_avg']:.6e}, "
                f"T_fit_avg={stats['T_fit_avg']:.6f}s"
            )

        return stats
