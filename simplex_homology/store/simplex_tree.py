# simplex_homology/store/simplex_tree.py
"""
Persistent (copy-on-write) simplex tree.

A simplex is a root-to-node path with increasing labels; there is one root per
vertex and vertex labels are always 0..n-1. Every edit returns a new
``SimplexTree``; nodes are immutable, so subtrees an edit does not touch are
shared between the old and the new version instead of being copied.

This is the store that feeds :func:`simplex_homology.analysis.homology.compute_betti_data`
through :meth:`SimplexTree.simplices_by_dimension`.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..simplices.combinatorics import Simp, canon_simplex
from ..utils.exceptions import ValidationError
from ..utils.logging import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class SimplexTreeNode:
    label: int
    children: Tuple["SimplexTreeNode", ...] = ()  # sorted by label

    def _labels(self) -> List[int]:
        return [c.label for c in self.children]

    def child(self, label: int) -> Optional["SimplexTreeNode"]:
        labels = self._labels()
        i = bisect_left(labels, label)
        if i < len(labels) and labels[i] == label:
            return self.children[i]
        return None

    def with_child(self, node: "SimplexTreeNode") -> "SimplexTreeNode":
        """Copy with ``node`` inserted (or replacing the child with the same label)."""
        labels = self._labels()
        i = bisect_left(labels, node.label)
        if i < len(labels) and labels[i] == node.label:
            if self.children[i] is node:
                return self
            kids = self.children[:i] + (node,) + self.children[i + 1:]
        else:
            kids = self.children[:i] + (node,) + self.children[i:]
        return replace(self, children=kids)

    def size(self) -> int:
        return 1 + sum(c.size() for c in self.children)


# ============================================================
# Recursive edits (all return new nodes, sharing untouched ones)
# ============================================================

def _insert(node: SimplexTreeNode, simplex: Simp, index: int) -> SimplexTreeNode:
    """
    Insert [node.label, *subsequence of simplex[index:]] for every subsequence:
    the simplex below ``node`` together with all of its faces.
    """
    if index >= len(simplex):
        return node
    label = simplex[index]
    child = node.child(label) or SimplexTreeNode(label)
    node = node.with_child(_insert(child, simplex, index + 1))
    return _insert(node, simplex, index + 1)


def _delete(node: SimplexTreeNode, simplex: Simp, index: int) -> Optional[SimplexTreeNode]:
    """Remove every path through ``node`` that contains simplex[index:]."""
    if simplex[index] == node.label:
        if index == len(simplex) - 1:
            return None
        index += 1
    elif node.label > simplex[index]:
        # labels only grow below this node
        return node

    kids: List[SimplexTreeNode] = []
    changed = False
    for c in node.children:
        new_c = _delete(c, simplex, index)
        if new_c is not c:
            changed = True
        if new_c is not None:
            kids.append(new_c)
    return replace(node, children=tuple(kids)) if changed else node


def _remove_vertex(node: SimplexTreeNode, vertex: int) -> Optional[SimplexTreeNode]:
    if node.label == vertex:
        return None

    kids: List[SimplexTreeNode] = []
    changed = False
    for c in node.children:
        new_c = _remove_vertex(c, vertex)
        if new_c is not c:
            changed = True
        if new_c is not None:
            kids.append(new_c)

    label = node.label - 1 if node.label > vertex else node.label
    if not changed and label == node.label:
        return node
    return SimplexTreeNode(label, tuple(kids))


# ============================================================
# Tree
# ============================================================

@dataclass(frozen=True)
class SimplexTree:
    roots: Tuple[SimplexTreeNode, ...] = ()

    @classmethod
    def from_simplices(cls, n_vertices: int, simplices: Iterable[Sequence[int]] = ()) -> "SimplexTree":
        tree = cls(tuple(SimplexTreeNode(v) for v in range(int(n_vertices))))
        for s in simplices:
            tree = tree.insert_simplex(s)
        return tree

    @property
    def n_vertices(self) -> int:
        return len(self.roots)

    def __len__(self) -> int:
        return sum(r.size() for r in self.roots)

    def _check(self, simplex: Sequence[int]) -> Simp:
        s = canon_simplex(simplex)
        if not s:
            raise ValidationError("Empty simplex.", "simplex")
        if len(set(s)) != len(s):
            raise ValidationError("Simplex has repeated vertices.", "simplex", actual=s)
        if s[0] < 0 or s[-1] >= self.n_vertices:
            raise ValidationError(
                f"Vertex out of range [0, {self.n_vertices}).", "simplex", f"< {self.n_vertices}", s
            )
        return s

    # ----------------------------
    # edits
    # ----------------------------

    def add_vertex(self) -> "SimplexTree":
        return SimplexTree(self.roots + (SimplexTreeNode(self.n_vertices),))

    def insert_simplex(self, simplex: Sequence[int]) -> "SimplexTree":
        """New tree with ``simplex`` and all its faces present."""
        s = self._check(simplex)
        roots = list(self.roots)
        for i, v in enumerate(s):
            roots[v] = _insert(roots[v], s, i + 1)
        return SimplexTree(tuple(roots))

    def delete_simplex(self, simplex: Sequence[int]) -> "SimplexTree":
        """
        New tree without ``simplex`` and without every simplex containing it.
        Deleting a single vertex is :meth:`remove_vertex`.
        """
        s = self._check(simplex)
        if len(s) == 1:
            return self.remove_vertex(s[0])
        roots = []
        for r in self.roots:
            new_r = _delete(r, s, 0)
            # a root is never the last vertex of a simplex with >= 2 vertices
            assert new_r is not None
            roots.append(new_r)
        return SimplexTree(tuple(roots))

    def remove_vertex(self, vertex: int) -> "SimplexTree":
        """New tree without ``vertex``; labels above it shift down by one."""
        v = self._check([vertex])[0]
        roots = []
        for r in self.roots[:v] + self.roots[v + 1:]:
            new_r = _remove_vertex(r, v)
            assert new_r is not None
            roots.append(new_r)
        logger.debug(f"Removed vertex {v}; {len(roots)} vertices remain")
        return SimplexTree(tuple(roots))

    # ----------------------------
    # queries
    # ----------------------------

    def contains(self, simplex: Sequence[int]) -> bool:
        s = canon_simplex(simplex)
        if not s or s[0] < 0 or s[-1] >= self.n_vertices:
            return False
        node: Optional[SimplexTreeNode] = self.roots[s[0]]
        for v in s[1:]:
            node = node.child(v) if node is not None else None
        return node is not None

    def __contains__(self, simplex: Sequence[int]) -> bool:
        return self.contains(simplex)

    def iter_simplices(self) -> Iterator[Simp]:
        """All simplices in lexicographic order."""
        def walk(node: SimplexTreeNode, prefix: Simp) -> Iterator[Simp]:
            here = prefix + (node.label,)
            yield here
            for c in node.children:
                yield from walk(c, here)

        for r in self.roots:
            yield from walk(r, ())

    def simplices_by_dimension(self) -> Dict[int, List[Simp]]:
        """dimension -> simplices (lexicographic), only for non-empty dimensions."""
        out: Dict[int, List[Simp]] = {}
        for s in self.iter_simplices():
            out.setdefault(len(s) - 1, []).append(s)
        return dict(sorted(out.items()))

    def dimension(self) -> int:
        """Largest simplex dimension, -1 for the empty complex."""
        dims = self.simplices_by_dimension()
        return max(dims) if dims else -1

    def to_gudhi_simplex_tree(self, *, filtration_value: float = 0.0):
        """
        Export as a static ``gudhi.SimplexTree`` (every simplex at
        ``filtration_value``). Imports gudhi lazily.
        """
        try:
            import gudhi
        except ImportError as e:
            raise ImportError("This function requires `gudhi`. Install with `pip install gudhi`.") from e

        st = gudhi.SimplexTree()
        for s in self.iter_simplices():
            st.insert(list(s), filtration=float(filtration_value))
        return st
