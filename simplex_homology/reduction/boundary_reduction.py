# simplex_homology/reduction/boundary_reduction.py
"""
Boundary matrix reduction over Z2 (the standard persistence algorithm).

A column is the set of rows in its boundary. Adding two columns over Z2 is the
symmetric difference ``a ^= b`` and the pivot ("low") is the largest row, so
the storage of a column only grows with the number of rows it holds, never
with its position in the matrix.

A second set, ``members``, can be carried through the same additions. It
starts as {the column's own position} and ends up recording which original
columns were summed into the reduced one; that is where witness triangles
(filtration mode) and cycle representatives (static mode) come from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Set

from ..utils.exceptions import InvariantViolation
from ..utils.logging import setup_logger

logger = setup_logger(__name__)


# ============================================================
# Z2 chain helpers
# ============================================================

def z2_chain(indices: Iterable[int]) -> Set[int]:
    """Z2 sum of unit vectors: repeated indices cancel."""
    chain: Set[int] = set()
    for i in indices:
        chain ^= {int(i)}
    return chain


def sorted_indices(chain: Iterable[int]) -> List[int]:
    return sorted(chain)


def low_of(chain: Set[int]) -> int:
    """Largest row, or -1 for the zero column."""
    return max(chain) if chain else -1


# ============================================================
# Columns
# ============================================================

@dataclass
class Column:
    boundary: Set[int] = field(default_factory=set)
    members: Set[int] = field(default_factory=set)

    @property
    def low(self) -> int:
        return low_of(self.boundary)

    @property
    def is_zero(self) -> bool:
        return not self.boundary

    def rows(self) -> List[int]:
        return sorted_indices(self.boundary)

    def member_positions(self) -> List[int]:
        return sorted_indices(self.members)


def boundary_column(rows: Iterable[int], position: int) -> Column:
    """Column for the simplex at ``position`` whose boundary rows are ``rows``."""
    return Column(boundary=z2_chain(rows), members={int(position)})


@dataclass
class ReductionResult:
    """
    pivots : row -> column position that owns that row as its low
    zero_columns : positions whose boundary reduced to zero (cycles), ascending
    n_additions : number of column additions performed
    """
    pivots: Dict[int, int] = field(default_factory=dict)
    zero_columns: List[int] = field(default_factory=list)
    n_additions: int = 0

    @property
    def rank(self) -> int:
        return len(self.pivots)

    def pivot_columns(self) -> List[int]:
        """Columns with a non-zero reduced boundary, in the order they were claimed."""
        return list(self.pivots.values())


# ============================================================
# Reduction
# ============================================================

def reduce_columns(columns: Sequence[Column], *, track_members: bool = True) -> ReductionResult:
    """
    Reduce ``columns`` in place, left to right.

    For each column: while its low is already claimed by an earlier column, add
    that column to it. Then either the column is zero (a cycle) or its low is
    free and gets claimed. Each addition strictly lowers the column's low, so
    the loop ends.

    Parameters
    ----------
    columns : sequence of Column
        Mutated in place; position in the sequence is the column index.
    track_members : bool
        Also add the ``members`` sets alongside the boundaries.

    Returns
    -------
    ReductionResult
    """
    result = ReductionResult()
    pivots = result.pivots

    for c, col in enumerate(columns):
        while True:
            low = low_of(col.boundary)
            if low < 0:
                result.zero_columns.append(c)
                break

            owner = pivots.get(low)
            if owner is None:
                pivots[low] = c
                break

            other = columns[owner]
            col.boundary ^= other.boundary
            if track_members:
                col.members ^= other.members
            result.n_additions += 1

    logger.debug(
        f"Reduced {len(columns)} columns: {len(pivots)} pivots, "
        f"{len(result.zero_columns)} zero columns, {result.n_additions} additions"
    )
    return result


def is_reduced(columns: Sequence[Column]) -> bool:
    """True iff no two non-zero columns share a low."""
    seen = set()
    for col in columns:
        low = col.low
        if low < 0:
            continue
        if low in seen:
            return False
        seen.add(low)
    return True


def check_pivot_map(columns: Sequence[Column], pivots: Dict[int, int]) -> None:
    """
    Confirm ``pivots`` is consistent with the reduced ``columns``: every entry
    points at a column whose current low is that row, and no column is listed
    twice.
    """
    owners = list(pivots.values())
    if len(set(owners)) != len(owners):
        raise InvariantViolation("A column owns more than one pivot row.", n_pivots=len(owners))
    for row, c in pivots.items():
        if columns[c].low != row:
            raise InvariantViolation(
                "Pivot map entry does not match the column's low.", row=row, column=c, low=columns[c].low
            )
