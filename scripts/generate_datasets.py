"""
Генератор синтетических датасетов для проверки кластеризации.

Создаёт CSV-файлы с кластеризованными точками (sklearn.make_blobs), которые
читает команда ``palette-kmeans cluster``. Рядом сохраняется JSON с
метаданными и истинными центрами.
"""

from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import numpy as np
from sklearn.datasets import make_blobs


@dataclass
class DatasetConfig:
    """Конфигурация параметров датасета."""

    N: int
    D: int
    K: int
    cluster_std: float = 1.0
    center_box_range: tuple[float, float] = (0.0, 255.0)
    seed: int = 42


def generate_blobs_dataset(config: DatasetConfig) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Генерация синтетического датасета с помощью make_blobs.

    Returns:
        Кортеж (data, labels, centers):
        - data: массив данных (N x D)
        - labels: метки кластеров (N,)
        - centers: центры кластеров (K x D)
    """
    data, labels, centers = make_blobs(
        n_samples=config.N,
        n_features=config.D,
        centers=config.K,
        cluster_std=config.cluster_std,
        center_box=config.center_box_range,
        random_state=config.seed,
        return_centers=True,
    )
    return data, labels, centers


def save_dataset_csv(
    data: np.ndarray,
    centers: np.ndarray,
    filepath: Path,
    config: DatasetConfig,
) -> dict[str, Any]:
    """
    Сохраняет точки в CSV (заголовок x0..xD-1) и метаданные в <name>.json.

    Returns:
        Словарь метаданных
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    header = ",".join(f"x{i}" for i in range(config.D))
    np.savetxt(filepath, data, delimiter=",", header=header, comments="", fmt="%.6f")

    metadata = {
        **asdict(config),
        "center_box_range": list(config.center_box_range),
        "generated": time.strftime("%Y-%m-%d %H:%M:%S"),
        "filepath": filepath.name,
        "centers": centers.tolist(),
    }
    with open(filepath.with_suffix(".json"), "w", encoding="utf-8") as f:
        json.dump(metadata, f, ensure_ascii=False, indent=2)

    return metadata


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate blob datasets as CSV.")
    parser.add_argument("--out", type=Path, default=Path("datasets") / "blobs.csv")
    parser.add_argument("-N", type=int, default=10_000)
    parser.add_argument("-D", type=int, default=3)
    parser.add_argument("-K", type=int, default=8)
    parser.add_argument("--std", type=float, default=10.0)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    config = DatasetConfig(N=args.N, D=args.D, K=args.K, cluster_std=args.std, seed=args.seed)
    data, _, centers = generate_blobs_dataset(config)
    save_dataset_csv(data, centers, args.out, config)
    print(f"Saved {args.N:,} points (D={args.D}, K={args.K}) to {args.out}")


if __name__ == "__main__":
    main()
