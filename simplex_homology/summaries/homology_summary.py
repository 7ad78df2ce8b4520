# simplex_homology/summaries/homology_summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..analysis.homology import HomologyGroups, betti_numbers
from ..analysis.persistence import PersistenceResult


# ----------------------------
# Summary data containers
# ----------------------------

@dataclass
class HomologySummary:
    """Dimensions of Z_p, B_p and the Betti numbers of a static complex."""
    n_simplices: Dict[int, int]
    dim_Z: Dict[int, int]
    dim_B: Dict[int, int]
    betti: Dict[int, int]

    def to_text(self) -> str:
        lines: List[str] = ["Homology Summary (Z2 coefficients)"]
        if not self.betti:
            lines.append("  empty complex")
            return "\n".join(lines)
        for p in sorted(self.betti):
            lines.append(
                f"  dim {p}: #simplices = {self.n_simplices.get(p, 0)}, "
                f"dim Z_{p} = {self.dim_Z[p]}, dim B_{p} = {self.dim_B[p]}, "
                f"beta_{p} = {self.betti[p]}"
            )
        return "\n".join(lines)

    def to_markdown(self) -> str:
        md: List[str] = ["### Homology Summary ($\\mathbb{Z}_2$)"]
        if not self.betti:
            md.append("- *Empty complex*")
            return "\n".join(md)
        md.append("")
        for p in sorted(self.betti):
            md.append(
                f"- $\\beta_{{{p}}} = \\dim Z_{{{p}}} - \\dim B_{{{p}}} = "
                f"{self.dim_Z[p]} - {self.dim_B[p]} = {self.betti[p]}$"
            )
        return "\n".join(md)

    def show_summary(self, *, show: bool = True, mode: str = "auto") -> str:
        return _show(self, show=show, mode=mode)


@dataclass
class PersistenceSummary:
    """Headline numbers of a :class:`PersistenceResult`."""
    n_points: int
    n_columns: int
    n_pairs: int
    n_component_pairs: int
    max_persistence: Optional[float]
    most_persistent: Optional[Tuple[float, float]]
    image_shape: Tuple[int, int]
    image_mass: float
    weighting: str

    def to_text(self) -> str:
        lines: List[str] = ["Persistence Summary (H1, Rips filtration)"]
        lines.append(f"  n_points = {self.n_points}, n_columns = {self.n_columns}")
        lines.append(f"  loop pairs = {self.n_pairs}, component merges = {self.n_component_pairs}")
        if self.most_persistent is not None:
            b, d = self.most_persistent
            lines.append(f"  most persistent loop: birth = {b:.4g}, death = {d:.4g} (persistence {d - b:.4g})")
        else:
            lines.append("  no loops with positive persistence")
        lines.append(
            f"  persistence image: {self.image_shape[0]}x{self.image_shape[1]}, "
            f"mass = {self.image_mass:.4g} (weighting = {self.weighting})"
        )
        return "\n".join(lines)

    def to_markdown(self) -> str:
        md: List[str] = ["### Persistence Summary ($H_1$, Rips)"]
        md.append(f"- $n_\\text{{points}} = {self.n_points}$, $n_\\text{{columns}} = {self.n_columns}$")
        md.append(f"- loop pairs: {self.n_pairs}, component merges: {self.n_component_pairs}")
        if self.most_persistent is not None:
            b, d = self.most_persistent
            md.append(f"- most persistent loop: $({b:.4g}, {d:.4g})$")
        md.append(f"- image: ${self.image_shape[0]} \\times {self.image_shape[1]}$, mass ${self.image_mass:.4g}$")
        return "\n".join(md)

    def show_summary(self, *, show: bool = True, mode: str = "auto") -> str:
        return _show(self, show=show, mode=mode)


# ----------------------------
# Builders
# ----------------------------

def summarize_homology(
    betti_data: Mapping[int, HomologyGroups],
    n_simplices: Optional[Mapping[int, int]] = None,
) -> HomologySummary:
    betti = betti_numbers(betti_data)
    dim_Z = {p: g.n_cycles for p, g in betti_data.items()}
    dim_B = {p: (betti_data[p + 1].n_boundaries if (p + 1) in betti_data else 0) for p in betti_data}
    if n_simplices is None:
        # a p-simplex is either a cycle column or a pivot column
        n_simplices = {p: g.n_cycles + g.n_boundaries for p, g in betti_data.items()}
    return HomologySummary(
        n_simplices=dict(n_simplices),
        dim_Z=dim_Z,
        dim_B=dim_B,
        betti=betti,
    )


def summarize_persistence(result: PersistenceResult) -> PersistenceSummary:
    pers = result.persistence_values()
    most: Optional[Tuple[float, float]] = None
    max_pers: Optional[float] = None
    if pers.size:
        k = int(np.argmax(pers))
        most = (float(result.pairs[k].birth), float(result.pairs[k].death))
        max_pers = float(pers[k])
    img = np.asarray(result.persistence_image)
    return PersistenceSummary(
        n_points=result.n_vertices,
        n_columns=result.n_columns,
        n_pairs=len(result.pairs),
        n_component_pairs=len(result.component_pairs),
        max_persistence=max_pers,
        most_persistent=most,
        image_shape=(int(img.shape[0]), int(img.shape[1])),
        image_mass=float(img.sum()),
        weighting=result.image_config.weighting,
    )


# ----------------------------
# Display
# ----------------------------

def _display_markdown(summary) -> bool:
    try:
        from IPython.display import Markdown, display  # type: ignore
    except ImportError:
        return False
    display(Markdown(summary.to_markdown()))
    return True


def _show(summary, *, show: bool, mode: str) -> str:
    """
    mode: 'auto' (markdown in notebooks, text otherwise), 'latex', 'text' or 'both'.
    Returns the plain-text summary either way.
    """
    if mode not in {"auto", "latex", "text", "both"}:
        raise ValueError("mode must be one of: 'auto', 'latex', 'text', 'both'")
    text = summary.to_text()
    if not show:
        return text

    did_rich = False
    if mode in {"latex", "auto", "both"}:
        did_rich = _display_markdown(summary)
    if mode == "both" or mode == "text" or (mode == "auto" and not did_rich):
        print("\n" + text + "\n")
    return text
