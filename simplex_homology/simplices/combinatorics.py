# combinatorics.py
from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from ..utils.exceptions import ValidationError

Edge = Tuple[int, int]
Tri = Tuple[int, int, int]
Simp = Tuple[int, ...]  # generic simplex as sorted tuple


def canon_edge(a: int, b: int) -> Edge:
    a, b = int(a), int(b)
    return (a, b) if a < b else (b, a)


def canon_tri(a: int, b: int, c: int) -> Tri:
    return tuple(sorted((int(a), int(b), int(c))))  # type: ignore[return-value]


def canon_simplex(sig: Iterable[int]) -> Simp:
    return tuple(sorted(int(x) for x in sig))


def simplex_dim(sig: Simp) -> int:
    return len(sig) - 1


def check_simplex(sig: Sequence[int]) -> Simp:
    """
    Return ``sig`` as a tuple of ints, insisting it is already strictly increasing.

    Simplices handed to the engine are identified by their sorted vertex tuple,
    so an unsorted or repeated vertex list is rejected rather than silently
    reordered.
    """
    s = tuple(int(v) for v in sig)
    if len(s) == 0:
        raise ValidationError("Empty simplex.", "simplex", "non-empty vertex tuple", s)
    if any(v < 0 for v in s):
        raise ValidationError("Vertex labels must be non-negative.", "simplex", ">= 0", s)
    if any(s[i] >= s[i + 1] for i in range(len(s) - 1)):
        raise ValidationError("Simplex vertices must be strictly increasing.", "simplex", "sorted, distinct", s)
    return s


def facets(sig: Simp) -> List[Simp]:
    """Codimension-1 faces, in the order 'drop vertex 0', 'drop vertex 1', ..."""
    return [sig[:i] + sig[i + 1:] for i in range(len(sig))]


def triangle_edges(tri: Tri) -> Tuple[Edge, Edge, Edge]:
    i, j, k = tri
    return (canon_edge(i, j), canon_edge(j, k), canon_edge(i, k))


def iter_faces(sig: Simp) -> Iterator[Simp]:
    """All non-empty faces of ``sig`` (itself included), shortest first."""
    n = len(sig)
    for size in range(1, n + 1):
        for mask in range(1 << n):
            if bin(mask).count("1") == size:
                yield tuple(sig[i] for i in range(n) if mask >> i & 1)
