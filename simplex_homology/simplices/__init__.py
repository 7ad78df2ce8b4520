from .combinatorics import (
    Edge,
    Simp,
    Tri,
    canon_edge,
    canon_simplex,
    canon_tri,
    check_simplex,
    facets,
    iter_faces,
    simplex_dim,
    triangle_edges,
)
