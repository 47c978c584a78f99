"""
График инерции по итерациям для нескольких seed.

Читает CSV с точками, запускает KMeans с record_history=True для каждого
seed и сохраняет PNG с кривыми сходимости.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from palette_kmeans.core.cpu_numpy import KMeansCPUNumpy  # noqa: E402
from palette_kmeans.data.dataset import Dataset  # noqa: E402


def collect_histories(
    X: np.ndarray, n_clusters: int, seeds: Sequence[int], n_iters: int = 300
) -> Dict[int, List[float]]:
    """Инерция после каждой итерации для каждого seed."""
    histories: Dict[int, List[float]] = {}
    for seed in seeds:
        model = KMeansCPUNumpy(n_clusters=n_clusters, n_iters=n_iters, record_history=True)
        result = model.fit(X, rng=np.random.default_rng(seed))
        histories[seed] = result.history
    return histories


def plot_histories(histories: Dict[int, List[float]], output: Path, title: str) -> None:
    fig, ax = plt.subplots(figsize=(8, 5))
    for seed, history in histories.items():
        ax.plot(range(1, len(history) + 1), history, marker="o", markersize=3, label=f"seed={seed}")
    ax.set_xlabel("Итерация")
    ax.set_ylabel("Инерция")
    ax.set_yscale("log")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output, dpi=120)
    plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot KMeans inertia per iteration.")
    parser.add_argument("input", type=Path)
    parser.add_argument("-k", "--clusters", type=int, default=8)
    parser.add_argument("--seeds", type=int, nargs="+", default=[0, 1, 2, 3, 4])
    parser.add_argument("--out", type=Path, default=Path("visualizations") / "convergence.png")
    args = parser.parse_args()

    dataset = Dataset.from_csv(args.input)
    histories = collect_histories(dataset.X, args.clusters, args.seeds)
    plot_histories(
        histories,
        args.out,
        title=f"K-means convergence (N={dataset.n_points}, D={dataset.dim}, K={args.clusters})",
    )
    print(f"Saved plot to {args.out}")


if __name__ == "__main__":
    main()
