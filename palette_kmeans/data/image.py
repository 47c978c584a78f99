"""
Ввод-вывод изображений для кластеризации цветов.

Декодирование в плоский массив цветов float64, перекраска по назначениям
и кодирование обратно. Преобразование к 8 битам происходит только здесь:
округление и обрезка в [0, 255], без переполнения.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from palette_kmeans.core.base import ClusteringResult, KMeansBase
from palette_kmeans.data.palettes import get_palette, map_centroids_to_palette

logger = logging.getLogger(__name__)


def load_image_pixels(path: str | Path) -> Tuple[np.ndarray, Tuple[int, int]]:
    """
    Читает изображение и возвращает пиксели RGB.

    Returns:
        Кортеж (pixels, (width, height)), pixels формы (H*W, 3), float64,
        порядок: построчно слева направо
    """
    with Image.open(path) as img:
        rgb = img.convert("RGB")
        width, height = rgb.size
        arr = np.asarray(rgb, dtype=np.uint8)
    logger.info(f"Loaded image {path} ({width}x{height})")
    return arr.reshape(-1, 3).astype(np.float64), (width, height)


def to_uint8(colors: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(colors), 0, 255).astype(np.uint8)


def recolor_pixels(centroids: np.ndarray, labels: np.ndarray) -> np.ndarray:
    """Каждому пикселю — цвет центроида его кластера (чистый lookup)."""
    return centroids[labels]


def save_image(pixels: np.ndarray, size: Tuple[int, int], path: str | Path) -> None:
    width, height = size
    if pixels.shape[0] != width * height:
        raise ValueError(
            f"Expected {width * height} pixels for {width}x{height}, got {pixels.shape[0]}"
        )
    img = Image.fromarray(to_uint8(pixels).reshape(height, width, 3))
    img.save(path)
    logger.info(f"Saved image {path}")


def quantize_image(
    src: str | Path,
    dst: str | Path,
    model: KMeansBase,
    rng: np.random.Generator | int | None = None,
    palette: str | None = None,
) -> ClusteringResult:
    """
    Кластеризует цвета изображения и сохраняет перекрашенную копию.

    Args:
        src: Входное изображение
        dst: Куда сохранить результат
        model: Модель KMeans с нужным числом кластеров
        rng: Источник случайности для посева
        palette: Имя палитры для замены центроидов (None: цвета центроидов)
    """
    pixels, size = load_image_pixels(src)
    result = model.fit(pixels, rng=rng)

    colors = result.centroids
    if palette is not None:
        colors = map_centroids_to_palette(result.centroids, get_palette(palette))

    save_image(recolor_pixels(colors, result.labels), size, dst)
    return result
