"""Euclidean metric shared by the network builder and the connectivity repairer."""

import itertools
import math
from collections.abc import Sequence

import numpy as np
from scipy.spatial import cKDTree

from core.types import Position

# Relative slack added to the KD-tree search radius; candidates are re-checked
# with distance() so boundary pairs are decided by the same formula everywhere.
_RADIUS_SLACK = 1e-9


def distance(a: Position, b: Position) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def pairs_within(positions: Sequence[Position], threshold: float) -> list[tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, whose points lie at most ``threshold`` apart.

    Pairs are returned in lexicographic order, i.e. the order a nested
    ``for i: for j > i`` scan would visit them.
    """
    if len(positions) < 2 or threshold < 0:
        return []

    if math.isinf(threshold):
        return list(itertools.combinations(range(len(positions)), 2))

    points = np.asarray(positions, dtype=float)
    tree = cKDTree(points)
    search_radius = threshold + max(threshold, 1.0) * _RADIUS_SLACK
    candidates = tree.query_pairs(r=search_radius)

    return sorted(
        (i, j)
        for i, j in candidates
        if distance(positions[i], positions[j]) <= threshold
    )
