# simplex_homology/analysis/homology.py
"""
Static Z2 homology of a fixed simplicial complex.

For each dimension p the p-simplices are reduced as boundary columns (rows are
their (p-1)-faces). Zero columns give a basis of the cycle space Z_p, columns
that keep a pivot give a basis of the boundary space B_{p-1}, so

    beta_p = dim Z_p - dim B_p,

where B_p is what dimension p+1 reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..reduction.boundary_reduction import Column, boundary_column, reduce_columns, sorted_indices
from ..simplices.combinatorics import Simp, check_simplex, facets as simplex_facets
from ..utils.exceptions import InvariantViolation, ValidationError
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

Chain = List[Simp]  # a Z2 chain, listed as the simplices with coefficient 1


@dataclass
class HomologyGroups:
    """
    dimension : p
    cycle_generators : basis of Z_p, each generator a list of p-simplices
    boundary_generators : basis of B_{p-1}, each generator a list of (p-1)-simplices
    """
    dimension: int
    cycle_generators: List[Chain] = field(default_factory=list)
    boundary_generators: List[Chain] = field(default_factory=list)

    @property
    def n_cycles(self) -> int:
        return len(self.cycle_generators)

    @property
    def n_boundaries(self) -> int:
        return len(self.boundary_generators)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cycleGenerators": [[list(s) for s in gen] for gen in self.cycle_generators],
            "boundaryGenerators": [[list(s) for s in gen] for gen in self.boundary_generators],
        }


def _check_simplices(simplices: Sequence[Sequence[int]], dimension: Optional[int] = None) -> List[Simp]:
    out = [check_simplex(s) for s in simplices]
    if out:
        size = len(out[0]) if dimension is None else dimension + 1
        bad = [s for s in out if len(s) != size]
        if bad:
            raise ValidationError(
                f"Expected simplices with {size} vertices; got e.g. {bad[0]}.", "simplices", size, len(bad[0])
            )
    if len(set(out)) != len(out):
        raise ValidationError("Duplicate simplices in one dimension.", "simplices")
    return out


def homology_groups(
    simplices: Sequence[Sequence[int]],
    facets: Optional[Sequence[Sequence[int]]] = None,
    *,
    dimension: Optional[int] = None,
) -> HomologyGroups:
    """
    Cycle space Z_p and boundary space B_{p-1} generated by a list of p-simplices.

    Parameters
    ----------
    simplices : sequence of sorted vertex tuples, all of the same size p+1
    facets : sequence of (p-1)-simplices, optional
        The complex's (p-1)-skeleton. When given, every facet of every simplex
        must be in it. When omitted, facets are indexed as they are met.
    dimension : int, optional
        p; inferred from the simplices when omitted.

    Returns
    -------
    HomologyGroups

    Raises
    ------
    InvariantViolation
        If ``facets`` is given and some simplex has a facet outside it.
    """
    simps = _check_simplices(simplices, dimension)
    if dimension is None:
        dimension = len(simps[0]) - 1 if simps else 0
    groups = HomologyGroups(dimension=int(dimension))

    if not simps:
        return groups

    # 0-simplices have no boundary: each vertex is its own cycle
    if dimension == 0:
        groups.cycle_generators = [[s] for s in simps]
        return groups

    strict = facets is not None
    facet_list: List[Simp] = _check_simplices(facets, dimension - 1) if strict else []
    facet_index: Dict[Simp, int] = {f: i for i, f in enumerate(facet_list)}

    columns: List[Column] = []
    for pos, s in enumerate(simps):
        rows = []
        for f in simplex_facets(s):
            idx = facet_index.get(f)
            if idx is None:
                if strict:
                    raise InvariantViolation("Facet missing from the (p-1)-skeleton.", simplex=s, facet=f)
                idx = len(facet_list)
                facet_list.append(f)
                facet_index[f] = idx
            rows.append(idx)
        columns.append(boundary_column(rows, pos))

    reduction = reduce_columns(columns, track_members=True)

    groups.cycle_generators = [
        [simps[m] for m in sorted_indices(columns[c].members)] for c in reduction.zero_columns
    ]
    groups.boundary_generators = [
        [facet_list[r] for r in sorted_indices(columns[c].boundary)] for c in reduction.pivots.values()
    ]

    logger.debug(
        f"dim {dimension}: {len(simps)} simplices, dim Z = {groups.n_cycles}, dim B = {groups.n_boundaries}"
    )
    return groups


def compute_betti_data(simplices_by_dimension: Mapping[int, Sequence[Sequence[int]]]) -> Dict[int, HomologyGroups]:
    """
    Run :func:`homology_groups` for every dimension of a complex.

    Parameters
    ----------
    simplices_by_dimension : mapping p -> sequence of sorted vertex tuples
        A face-closed complex. Facets of p-simplices are checked against the
        (p-1) entry whenever the mapping has one.

    Returns
    -------
    dict p -> HomologyGroups, for every p in the mapping (ascending).
    """
    dims = sorted(int(p) for p in simplices_by_dimension.keys())
    if any(p < 0 for p in dims):
        raise ValidationError("Dimensions must be non-negative.", "simplices_by_dimension", ">= 0", dims)

    out: Dict[int, HomologyGroups] = {}
    for p in dims:
        facets = simplices_by_dimension.get(p - 1) if p > 0 else None
        out[p] = homology_groups(simplices_by_dimension[p], facets, dimension=p)

    logger.info(
        "Homology: " + ", ".join(f"dim {p}: Z={g.n_cycles} B={g.n_boundaries}" for p, g in out.items())
    )
    return out


def betti_numbers(betti_data: Mapping[int, HomologyGroups]) -> Dict[int, int]:
    """beta_p = |Z_p| - |B_p|, with B_p read from dimension p+1 (0 when absent)."""
    out: Dict[int, int] = {}
    for p in sorted(betti_data.keys()):
        n_bound = betti_data[p + 1].n_boundaries if (p + 1) in betti_data else 0
        out[p] = betti_data[p].n_cycles - n_bound
    return out


def compute_betti_numbers(simplices_by_dimension: Mapping[int, Sequence[Sequence[int]]]) -> Dict[int, int]:
    return betti_numbers(compute_betti_data(simplices_by_dimension))
