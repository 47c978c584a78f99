from .config import Backend, ClusteringConfig, make_model
from .runner import SeedSweepRunner

__all__ = ["Backend", "ClusteringConfig", "make_model", "SeedSweepRunner"]
