# simplex_homology/geometry/filtration.py
"""
Vietoris–Rips style filtration of a point cloud, up to triangles.

Every pair i<j is an edge at its distance; every triple i<j<k is a triangle at
the largest of its three pairwise distances. Both are read from the same
distance matrix, so a triangle's value is bit-identical to the value of its
longest edge and the face relation is monotone.

Cost is O(V^2) edges and O(V^3) triangles, fine for a few hundred points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Dict, List, Tuple

import numpy as np

from ..simplices.combinatorics import Edge, Simp, Tri
from ..utils.exceptions import ValidationError
from ..utils.logging import setup_logger
from .metrics import as_metric

logger = setup_logger(__name__)


@dataclass
class FiltrationLevel:
    """Simplices first appearing at one filtration value, in discovery order."""
    edges: List[Edge] = field(default_factory=list)
    triangles: List[Tri] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.edges) + len(self.triangles)


Filtration = Dict[float, FiltrationLevel]


def as_point_array(points: Any) -> np.ndarray:
    """
    Coerce ``points`` to a finite float array of shape (n, d).

    Empty input (``[]``, ``np.zeros((0, 2))``) becomes an (0, 2) array.
    """
    X = np.asarray(points, dtype=float)
    if X.size == 0:
        return np.zeros((0, 2), dtype=float)
    if X.ndim != 2:
        raise ValidationError(f"points must be (n_points, d). Got {X.shape}.", "points", "(n, d)", X.shape)
    if not np.all(np.isfinite(X)):
        raise ValidationError("points must have finite coordinates.", "points")
    return X


def pairwise_distances(points: Any, *, metric: Any = None) -> np.ndarray:
    X = as_point_array(points)
    if X.shape[0] == 0:
        return np.zeros((0, 0), dtype=float)
    D = np.asarray(as_metric(metric).pairwise(X), dtype=float)
    if D.shape != (X.shape[0], X.shape[0]):
        raise ValidationError(
            f"metric returned shape {D.shape}, expected {(X.shape[0], X.shape[0])}.", "metric"
        )
    return D


def simplex_filtration_value(simplex: Simp, distances: np.ndarray) -> float:
    """Max pairwise distance among the vertices of ``simplex`` (0.0 for a vertex)."""
    if len(simplex) < 2:
        return 0.0
    return float(max(distances[a, b] for a, b in combinations(simplex, 2)))


def build_rips_filtration(points: Any, *, metric: Any = None) -> Filtration:
    """
    Enumerate every edge and triangle on ``points`` and group them by value.

    Parameters
    ----------
    points : (V, 2) array-like
        Point cloud. Any (V, d) works with the default Euclidean metric.
    metric : optional
        Anything :func:`simplex_homology.geometry.metrics.as_metric` accepts.

    Returns
    -------
    filtration : dict
        value -> FiltrationLevel(edges, triangles). Vertices are implicit at 0.
        Keys are exact distance values; insertion order is discovery order
        (edges lexicographic, then triangles lexicographic).
    """
    D = pairwise_distances(points, metric=metric)
    n = D.shape[0]
    filtration: Filtration = {}

    if n < 2:
        logger.debug(f"Rips filtration on {n} point(s): no edges or triangles")
        return filtration

    iu, ju = np.triu_indices(n, k=1)
    edge_vals = D[iu, ju]
    for a, b, val in zip(iu.tolist(), ju.tolist(), edge_vals.tolist()):
        filtration.setdefault(val, FiltrationLevel()).edges.append((a, b))

    n_tris = 0
    if n >= 3:
        tri_idx = np.array(list(combinations(range(n), 3)), dtype=np.intp)
        i, j, k = tri_idx[:, 0], tri_idx[:, 1], tri_idx[:, 2]
        tri_vals = np.maximum(np.maximum(D[i, j], D[j, k]), D[i, k])
        for (a, b, c), val in zip(tri_idx.tolist(), tri_vals.tolist()):
            filtration.setdefault(val, FiltrationLevel()).triangles.append((a, b, c))
        n_tris = tri_idx.shape[0]

    logger.debug(
        f"Rips filtration: {n} vertices, {len(edge_vals)} edges, {n_tris} triangles, "
        f"{len(filtration)} distinct values"
    )
    return filtration


def filtration_values(filtration: Filtration) -> List[float]:
    return sorted(filtration.keys())


def count_simplices(filtration: Filtration) -> Dict[int, int]:
    """Number of edges (dim 1) and triangles (dim 2) across all levels."""
    n1 = sum(len(level.edges) for level in filtration.values())
    n2 = sum(len(level.triangles) for level in filtration.values())
    return {1: n1, 2: n2}


def flatten_filtration(filtration: Filtration) -> List[Tuple[float, Simp]]:
    """(value, simplex) pairs in ascending value, edges before triangles per value."""
    out: List[Tuple[float, Simp]] = []
    for val in filtration_values(filtration):
        level = filtration[val]
        out.extend((val, e) for e in level.edges)
        out.extend((val, t) for t in level.triangles)
    return out
