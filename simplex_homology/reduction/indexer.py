# simplex_homology/reduction/indexer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..config import ENGINE
from ..geometry.filtration import Filtration, flatten_filtration
from ..simplices.combinatorics import Edge, Simp, triangle_edges
from ..utils.exceptions import InvariantViolation
from ..utils.logging import setup_logger
from .boundary_reduction import Column, boundary_column

logger = setup_logger(__name__)


@dataclass
class IndexedFiltration:
    """
    Edges and triangles of a filtration in one global order.

    Rows [0, n_vertices) are the implicit vertex rows; the simplex at column
    position ``c`` owns row ``n_vertices + c``. Within a filtration value all
    edges come before all triangles, so a triangle's edges always have rows
    before the triangle is built.

    simplices[c], values[c], boundaries[c] describe column ``c``; boundaries are
    row indices. edge_index maps a sorted vertex pair to its column position.
    """
    n_vertices: int
    simplices: List[Simp] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    boundaries: List[List[int]] = field(default_factory=list)
    edge_index: Dict[Edge, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.simplices)

    def row_of(self, position: int) -> int:
        return self.n_vertices + int(position)

    def position_of(self, row: int) -> int:
        pos = int(row) - self.n_vertices
        if pos < 0 or pos >= len(self.simplices):
            raise InvariantViolation("Row is not an indexed simplex row.", row=row, n_vertices=self.n_vertices)
        return pos

    def simplex_at_row(self, row: int) -> Simp:
        return self.simplices[self.position_of(row)]

    def value_at_row(self, row: int) -> float:
        return self.values[self.position_of(row)]

    def columns(self) -> List[Column]:
        """Fresh (unreduced) columns with membership sets, ready for reduction."""
        return [boundary_column(rows, c) for c, rows in enumerate(self.boundaries)]


def index_filtration(filtration: Filtration, n_vertices: int) -> IndexedFiltration:
    """
    Lay out every edge and triangle of ``filtration`` as boundary-matrix columns.

    Raises
    ------
    InvariantViolation
        If a triangle's edge was not indexed earlier (the filtration is not
        closed under faces).
    """
    indexed = IndexedFiltration(n_vertices=int(n_vertices))

    for val, simplex in flatten_filtration(filtration):
        position = len(indexed.simplices)

        if len(simplex) == ENGINE.EDGE_ARITY:
            a, b = simplex
            if not (0 <= a < b < indexed.n_vertices):
                raise InvariantViolation("Edge references a vertex outside [0, V).", simplex=simplex)
            rows = [a, b]
            indexed.edge_index[(a, b)] = position
        elif len(simplex) == ENGINE.TRIANGLE_ARITY:
            rows = []
            for e in triangle_edges(simplex):
                edge_pos = indexed.edge_index.get(e)
                if edge_pos is None:
                    raise InvariantViolation("Triangle edge was not indexed before the triangle.", simplex=simplex, edge=e)
                rows.append(indexed.row_of(edge_pos))
        else:
            raise InvariantViolation("Filtration simplices must be edges or triangles.", simplex=simplex)

        indexed.simplices.append(simplex)
        indexed.values.append(val)
        indexed.boundaries.append(rows)

    logger.debug(f"Indexed {len(indexed)} columns over {indexed.n_vertices} vertex rows")
    return indexed
