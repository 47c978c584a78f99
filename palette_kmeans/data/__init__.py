from .dataset import Dataset, load_points
from .validation import validate_points
from .palettes import PALETTES, get_palette, map_centroids_to_palette
from .image import load_image_pixels, recolor_pixels, save_image, quantize_image

__all__ = [
    "Dataset",
    "load_points",
    "validate_points",
    "PALETTES",
    "get_palette",
    "map_centroids_to_palette",
    "load_image_pixels",
    "recolor_pixels",
    "save_image",
    "quantize_image",
]
