# simplex_homology/config.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .utils.exceptions import ValidationError

WEIGHTINGS = ("raw", "max")


@dataclass(frozen=True)
class EngineConstants:
    """Simplex sizes the filtration engine indexes; Rips filtrations stop at triangles."""
    EDGE_ARITY: int = 2
    TRIANGLE_ARITY: int = 3


@dataclass(frozen=True)
class PersistenceImageConfig:
    """
    Raster settings for :func:`simplex_homology.analysis.persistence_image.persistence_image`.

    grid_size : G, the image is (G, G)
    subgrid_size : S, midpoint quadrature uses S x S samples per cell
    sigma : Gaussian bandwidth, in distance units
    domain_size : side of the square (birth, persistence) window, in distance units
    weighting :
        'raw' weights each pair by its persistence (death - birth).
        'max' divides that weight by the largest persistence among the pairs,
        which rescales the whole image; the two conventions are not
        interchangeable.
    """
    grid_size: int = 50
    subgrid_size: int = 10
    sigma: float = 10.0
    domain_size: float = 500.0
    weighting: str = "raw"

    @property
    def cell_size(self) -> float:
        return float(self.domain_size) / int(self.grid_size)

    @property
    def subcell_size(self) -> float:
        return self.cell_size / int(self.subgrid_size)

    def validate(self) -> "PersistenceImageConfig":
        if int(self.grid_size) <= 0:
            raise ValidationError("grid_size must be positive.", "grid_size", "> 0", self.grid_size)
        if int(self.subgrid_size) <= 0:
            raise ValidationError("subgrid_size must be positive.", "subgrid_size", "> 0", self.subgrid_size)
        if not float(self.sigma) > 0:
            raise ValidationError("sigma must be positive.", "sigma", "> 0", self.sigma)
        if not float(self.domain_size) > 0:
            raise ValidationError("domain_size must be positive.", "domain_size", "> 0", self.domain_size)
        if self.weighting not in WEIGHTINGS:
            raise ValidationError(
                f"weighting must be one of {WEIGHTINGS}.", "weighting", WEIGHTINGS, self.weighting
            )
        return self

    def with_options(self, **kwargs: Any) -> "PersistenceImageConfig":
        return replace(self, **kwargs).validate()


DEFAULT_IMAGE_CONFIG = PersistenceImageConfig()
ENGINE = EngineConstants()
