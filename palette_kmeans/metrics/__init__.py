from .timers import Timer
from .metrics import inertia, cluster_sizes, converged

__all__ = [
    "Timer",
    "inertia",
    "cluster_sizes",
    "converged",
]
