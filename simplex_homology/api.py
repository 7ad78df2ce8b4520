from __future__ import annotations

"""
Public API re-exports for simplex_homology.

Import style:
    from simplex_homology.api import compute_persistence, compute_betti_data, SimplexTree, ...

Notes
-----
- This file is curated: engine internals (chain helpers, indexer) stay in
  their subpackages.
- compute_persistence / compute_betti_data are the two engine entry points; both
  are pure functions of their input.
"""

# ----------------------------
# Filtration mode
# ----------------------------
from .analysis.persistence import (
    ComponentPair,
    PersistencePair,
    PersistenceResult,
    compute_persistence,
)
from .analysis.persistence_image import persistence_image
from .geometry.filtration import build_rips_filtration

# ----------------------------
# Static mode
# ----------------------------
from .analysis.homology import (
    HomologyGroups,
    betti_numbers,
    compute_betti_data,
    compute_betti_numbers,
    homology_groups,
)

# ----------------------------
# Shared kernel
# ----------------------------
from .reduction.boundary_reduction import Column, ReductionResult, reduce_columns

# ----------------------------
# Complex store
# ----------------------------
from .store.simplex_tree import SimplexTree

# ----------------------------
# Summaries / config / errors
# ----------------------------
from .summaries.homology_summary import (
    HomologySummary,
    PersistenceSummary,
    summarize_homology,
    summarize_persistence,
)
from .config import DEFAULT_IMAGE_CONFIG, PersistenceImageConfig
from .utils.exceptions import HomologyError, InvariantViolation, ValidationError
from .utils.logging import setup_logger

__all__ = [
    # filtration mode
    "ComponentPair",
    "PersistencePair",
    "PersistenceResult",
    "compute_persistence",
    "persistence_image",
    "build_rips_filtration",
    # static mode
    "HomologyGroups",
    "betti_numbers",
    "compute_betti_data",
    "compute_betti_numbers",
    "homology_groups",
    # kernel
    "Column",
    "ReductionResult",
    "reduce_columns",
    # store
    "SimplexTree",
    # summaries
    "HomologySummary",
    "PersistenceSummary",
    "summarize_homology",
    "summarize_persistence",
    # config / errors / logging
    "DEFAULT_IMAGE_CONFIG",
    "PersistenceImageConfig",
    "HomologyError",
    "InvariantViolation",
    "ValidationError",
    "setup_logger",
]
