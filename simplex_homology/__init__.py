# simplex_homology/__init__.py
from __future__ import annotations

"""
simplex_homology: Z2 homology of small simplicial complexes.

Two entry points share one boundary-matrix reduction:
    - compute_persistence(points): H1 persistence of a Rips filtration on a 2D
      point cloud, with witness simplices and a persistence image;
    - compute_betti_data(simplices_by_dimension): cycle and boundary spaces
      (hence Betti numbers) of a fixed complex.

Recommended usage:
    import simplex_homology as sh

Public API:
    Curated user-facing symbols are re-exported from :mod:`simplex_homology.api`.
"""

from ._version import __version__
from .api import *  # noqa: F401,F403
from .api import __all__ as _api_all

__all__ = ["__version__", *_api_all]
