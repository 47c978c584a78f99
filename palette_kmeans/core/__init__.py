from .errors import (
    KMeansError,
    EmptyDatasetError,
    InvalidClusterCountError,
    DimensionMismatchError,
    EmptyClusterWarning,
)
from .point import Point, Assignment, squared_distance, as_points_array
from .seeding import kmeans_plusplus, nearest_centroid_distances, make_rng
from .base import KMeansBase, KMeansState, ClusteringResult
from .cpu_numpy import KMeansCPUNumpy
from .cpu_multiprocessing import KMeansCPUMultiprocessing, MultiprocessingConfig

__all__ = [
    "KMeansError",
    "EmptyDatasetError",
    "InvalidClusterCountError",
    "DimensionMismatchError",
    "EmptyClusterWarning",
    "Point",
    "Assignment",
    "squared_distance",
    "as_points_array",
    "kmeans_plusplus",
    "nearest_centroid_distances",
    "make_rng",
    "KMeansBase",
    "KMeansState",
    "ClusteringResult",
    "KMeansCPUNumpy",
    "KMeansCPUMultiprocessing",
    "MultiprocessingConfig",
]
