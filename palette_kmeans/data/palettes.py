"""
Фиксированные палитры для перекраски кластеров.

Okabe-Ito — палитра, различимая при основных формах дальтонизма.
"""

from __future__ import annotations

from typing import Dict

import numpy as np

PALETTES: Dict[str, np.ndarray] = {
    "okabe-ito": np.array(
        [
            [0, 0, 0],
            [230, 159, 0],
            [86, 180, 233],
            [0, 158, 115],
            [240, 228, 66],
            [0, 114, 178],
            [213, 94, 0],
            [204, 121, 167],
        ],
        dtype=np.float64,
    ),
    # стартовые центроиды первой версии программы
    "primaries": np.array(
        [
            [0, 0, 0],
            [255, 0, 0],
            [0, 255, 0],
            [0, 0, 255],
            [255, 0, 255],
            [255, 255, 255],
        ],
        dtype=np.float64,
    ),
}


def get_palette(name: str) -> np.ndarray:
    try:
        return PALETTES[name].copy()
    except KeyError:
        raise ValueError(
            f"Unknown palette {name!r}, available: {sorted(PALETTES)}"
        ) from None


def map_centroids_to_palette(centroids: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """
    Заменяет каждый центроид ближайшим цветом палитры.

    При равных расстояниях берётся цвет с меньшим индексом.

    Returns:
        Массив формы (K, 3) с цветами палитры
    """
    diff = centroids[:, None, :] - palette[None, :, :]
    distances = np.einsum("kpd,kpd->kp", diff, diff)
    return palette[np.argmin(distances, axis=1)]
