# src/dcsim_core/geometry/clustering.py
"""
Groups spatially coincident points (component terminals and wire endpoints) into
equivalence classes that later become electrical nodes.

The default strategy is single-seed grouping: each new group is seeded by the
first unprocessed point, and only points within the tolerance of that seed join
it. Distances are never measured to other members of the growing group, so
the result is not a transitive closure:

* two points on opposite sides of the seed, each within T of it, end up together
  even when they are up to 2T apart;
* a point within T of a member but farther than T from the seed starts (or joins)
  another group.

`ClusteringMode.TRANSITIVE` is available for callers that want true single-linkage
closure over the tolerance graph. It can assign different nodes in ambiguous
layouts and is therefore opt-in.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np
from scipy.spatial import cKDTree

from ..constants import DEFAULT_CLUSTER_TOLERANCE
from ..data_structures import Point

logger = logging.getLogger(__name__)

# Widens the kd-tree ball query slightly; the exact `<= tolerance` test is applied afterwards.
_QUERY_SLACK = 1e-9


class ClusteringMode(Enum):
    SINGLE_SEED = "single_seed"
    TRANSITIVE = "transitive"

    def __str__(self):
        return self.value


class TerminalSource(Enum):
    COMPONENT = "component"
    WIRE = "wire"


@dataclass(frozen=True)
class TerminalTag:
    """
    Identifies who owns a clustered point.

    For a component terminal, `owner_index` is the component's position in the input
    list and `terminal_index` the terminal's position on it. For a wire endpoint,
    `owner_index` is the wire's position and `terminal_index` is 0 (start) or 1 (end).
    """
    source: TerminalSource
    owner_index: int
    terminal_index: int
    component_id: Optional[Hashable] = None
    is_ground: bool = False

    @property
    def is_component_terminal(self) -> bool:
        return self.source is TerminalSource.COMPONENT

    @property
    def label(self) -> str:
        if self.is_component_terminal:
            return f"{self.component_id}.{self.terminal_index}"
        return f"wire{self.owner_index}.{'start' if self.terminal_index == 0 else 'end'}"


@dataclass(frozen=True)
class TaggedPoint:
    point: Point
    tag: TerminalTag


@dataclass(frozen=True)
class PointCluster:
    """One equivalence class of coincident points. `members[0]` is the seed."""
    index: int
    members: Tuple[TaggedPoint, ...]

    @property
    def seed(self) -> TaggedPoint:
        return self.members[0]

    @property
    def tags(self) -> Tuple[TerminalTag, ...]:
        return tuple(m.tag for m in self.members)

    @property
    def contains_ground(self) -> bool:
        return any(m.tag.is_ground for m in self.members)

    @property
    def contains_component_terminal(self) -> bool:
        return any(m.tag.is_component_terminal for m in self.members)


def cluster_points(
    tagged_points: Sequence[TaggedPoint],
    tolerance: float = DEFAULT_CLUSTER_TOLERANCE,
    mode: ClusteringMode = ClusteringMode.SINGLE_SEED,
) -> List[PointCluster]:
    """
    Partitions `tagged_points` into clusters of coincident points.

    Clusters are returned in creation order, and members keep input order (seed
    first), so the output is fully determined by the input order.

    Raises:
        ValueError: If `tolerance` is negative or not finite.
    """
    if not np.isfinite(tolerance) or tolerance < 0:
        raise ValueError(f"Cluster tolerance must be a non-negative finite number, got {tolerance!r}.")
    if not tagged_points:
        return []

    coords = np.array([(tp.point.x, tp.point.y) for tp in tagged_points], dtype=float)
    tree = cKDTree(coords)

    if mode is ClusteringMode.SINGLE_SEED:
        groups = _single_seed_groups(coords, tree, tolerance)
    elif mode is ClusteringMode.TRANSITIVE:
        groups = _transitive_groups(coords, tree, tolerance)
    else:
        raise ValueError(f"Unsupported clustering mode: {mode!r}")

    clusters = [
        PointCluster(index=i, members=tuple(tagged_points[j] for j in group))
        for i, group in enumerate(groups)
    ]
    logger.debug(
        f"Clustered {len(tagged_points)} points into {len(clusters)} groups "
        f"(mode={mode}, tolerance={tolerance:g})."
    )
    return clusters


def _within(coords: np.ndarray, seed_idx: int, candidates: Sequence[int], tolerance: float) -> List[int]:
    """Exact distance filter; returns the candidates within `tolerance` of the seed, in index order."""
    if not candidates:
        return []
    cand = np.asarray(sorted(candidates), dtype=int)
    deltas = coords[cand] - coords[seed_idx]
    dist = np.hypot(deltas[:, 0], deltas[:, 1])
    return [int(c) for c in cand[dist <= tolerance]]


def _single_seed_groups(coords: np.ndarray, tree: cKDTree, tolerance: float) -> List[List[int]]:
    processed = np.zeros(len(coords), dtype=bool)
    groups: List[List[int]] = []

    for seed in range(len(coords)):
        if processed[seed]:
            continue
        processed[seed] = True
        group = [seed]

        nearby = tree.query_ball_point(coords[seed], r=tolerance + _QUERY_SLACK)
        candidates = [j for j in nearby if not processed[j]]
        for j in _within(coords, seed, candidates, tolerance):
            processed[j] = True
            group.append(j)

        groups.append(group)
    return groups


def _transitive_groups(coords: np.ndarray, tree: cKDTree, tolerance: float) -> List[List[int]]:
    graph = nx.Graph()
    graph.add_nodes_from(range(len(coords)))
    for i, j in tree.query_pairs(r=tolerance + _QUERY_SLACK):
        if np.hypot(*(coords[i] - coords[j])) <= tolerance:
            graph.add_edge(i, j)

    groups = [sorted(component) for component in nx.connected_components(graph)]
    groups.sort(key=lambda g: g[0])
    return groups
