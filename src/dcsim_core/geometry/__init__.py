# src/dcsim_core/geometry/__init__.py
from .clustering import (
    ClusteringMode,
    PointCluster,
    TaggedPoint,
    TerminalSource,
    TerminalTag,
    cluster_points,
)

__all__ = [
    "ClusteringMode",
    "PointCluster",
    "TaggedPoint",
    "TerminalSource",
    "TerminalTag",
    "cluster_points",
]
