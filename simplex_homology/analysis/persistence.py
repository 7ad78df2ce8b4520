# simplex_homology/analysis/persistence.py
"""
Degree-1 persistent homology of a Rips filtration, with witness simplices.

Pipeline
--------
points -> build_rips_filtration -> index_filtration -> reduce_columns
       -> extract_persistence_pairs -> persistence_image

A pivot (low -> col) with ``low >= V`` pairs the edge at row ``low`` (birth of a
loop) with the triangle at column ``col`` (its death). Pivots with ``low < V``
are edge columns that merge two components; they are returned separately as
``component_pairs`` and are not part of ``pairs`` or the image.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

import numpy as np

from ..config import DEFAULT_IMAGE_CONFIG, ENGINE, PersistenceImageConfig
from ..geometry.filtration import as_point_array, build_rips_filtration
from ..reduction.boundary_reduction import Column, ReductionResult, reduce_columns, sorted_indices
from ..reduction.indexer import IndexedFiltration, index_filtration
from ..simplices.combinatorics import Edge, Tri
from ..utils.exceptions import InvariantViolation
from ..utils.logging import setup_logger
from .persistence_image import persistence_image

logger = setup_logger(__name__)


# ============================================================
# Results
# ============================================================

@dataclass
class PersistencePair:
    birth: float
    death: float
    birth_edges: List[Edge] = field(default_factory=list)
    death_triangles: List[Tri] = field(default_factory=list)

    @property
    def persistence(self) -> float:
        return self.death - self.birth

    def to_dict(self) -> Dict[str, Any]:
        return {
            "birth": float(self.birth),
            "death": float(self.death),
            "birthEdges": [list(e) for e in self.birth_edges],
            "deathTriangles": [list(t) for t in self.death_triangles],
        }


@dataclass
class ComponentPair:
    """A connected component born at 0 and merged by ``edge`` at ``death``."""
    death: float
    edge: Edge

    @property
    def birth(self) -> float:
        return 0.0


@dataclass
class PersistenceResult:
    pairs: List[PersistencePair]
    persistence_image: np.ndarray
    component_pairs: List[ComponentPair] = field(default_factory=list)
    n_vertices: int = 0
    n_columns: int = 0
    image_config: PersistenceImageConfig = DEFAULT_IMAGE_CONFIG

    def diagram(self) -> np.ndarray:
        """(n_pairs, 2) array of (birth, death)."""
        if not self.pairs:
            return np.zeros((0, 2), dtype=float)
        return np.array([[p.birth, p.death] for p in self.pairs], dtype=float)

    def persistence_values(self) -> np.ndarray:
        return np.array([p.persistence for p in self.pairs], dtype=float)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pairs": [p.to_dict() for p in self.pairs],
            "persistenceImage": self.persistence_image.tolist(),
        }


# ============================================================
# Extraction
# ============================================================

def _witness_edges(indexed: IndexedFiltration, boundary: Set[int]) -> List[Edge]:
    edges: List[Edge] = []
    for row in sorted_indices(boundary):
        simplex = indexed.simplex_at_row(row)
        if len(simplex) != ENGINE.EDGE_ARITY:
            raise InvariantViolation("Birth witness from the edge range is not an edge.", simplex=simplex, row=row)
        edges.append(simplex)  # type: ignore[arg-type]
    return edges


def _witness_triangles(indexed: IndexedFiltration, members: Set[int]) -> List[Tri]:
    tris: List[Tri] = []
    for pos in sorted_indices(members):
        simplex = indexed.simplices[pos]
        if len(simplex) != ENGINE.TRIANGLE_ARITY:
            raise InvariantViolation("Death witness from the triangle range is not a triangle.", simplex=simplex, column=pos)
        tris.append(simplex)  # type: ignore[arg-type]
    return tris


def extract_persistence_pairs(
    indexed: IndexedFiltration,
    columns: List[Column],
    reduction: ReductionResult,
) -> Tuple[List[PersistencePair], List[ComponentPair]]:
    """
    Read birth/death pairs off a reduced filtration.

    Parameters
    ----------
    indexed : IndexedFiltration
    columns : list of Column
        The columns after :func:`reduce_columns` (with membership tracking).
    reduction : ReductionResult

    Returns
    -------
    pairs : list of PersistencePair
        Loop pairs with ``birth != death``, in order of death column.
    component_pairs : list of ComponentPair
        Component merges with non-zero death value.
    """
    V = indexed.n_vertices
    pairs: List[PersistencePair] = []
    components: List[ComponentPair] = []
    n_zero_length = 0

    for low, col in reduction.pivots.items():
        death = indexed.values[col]

        if low < V:
            if death != 0.0:
                components.append(ComponentPair(death=death, edge=indexed.simplices[col]))  # type: ignore[arg-type]
            continue

        birth = indexed.value_at_row(low)
        if birth == death:
            n_zero_length += 1
            continue

        reduced = columns[col]
        pairs.append(
            PersistencePair(
                birth=birth,
                death=death,
                birth_edges=_witness_edges(indexed, reduced.boundary),
                death_triangles=_witness_triangles(indexed, reduced.members),
            )
        )

    logger.debug(
        f"Extracted {len(pairs)} loop pairs ({n_zero_length} zero-length dropped), "
        f"{len(components)} component pairs"
    )
    return pairs, components


# ============================================================
# Entry point
# ============================================================

def compute_persistence(
    points: Any,
    *,
    image_config: Optional[PersistenceImageConfig] = None,
    metric: Any = None,
) -> PersistenceResult:
    """
    Persistent H1 of the Rips filtration on ``points`` plus its persistence image.

    Parameters
    ----------
    points : (V, 2) array-like
    image_config : PersistenceImageConfig, optional
        Defaults to a 50x50 image, 10x10 quadrature, sigma=10, window 500.
    metric : optional
        Passed to the filtration builder (default Euclidean).

    Returns
    -------
    PersistenceResult
    """
    cfg = (image_config or DEFAULT_IMAGE_CONFIG).validate()
    X = as_point_array(points)
    n_vertices = int(X.shape[0])

    filtration = build_rips_filtration(X, metric=metric)
    indexed = index_filtration(filtration, n_vertices)
    columns = indexed.columns()
    reduction = reduce_columns(columns, track_members=True)
    pairs, components = extract_persistence_pairs(indexed, columns, reduction)
    image = persistence_image(pairs, cfg)

    logger.info(f"Persistence on {n_vertices} points: {len(pairs)} pairs over {len(indexed)} columns")
    return PersistenceResult(
        pairs=pairs,
        persistence_image=image,
        component_pairs=components,
        n_vertices=n_vertices,
        n_columns=len(indexed),
        image_config=cfg,
    )
