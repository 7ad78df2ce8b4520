# simplex_homology/analysis/persistence_image.py
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..config import DEFAULT_IMAGE_CONFIG, PersistenceImageConfig
from ..utils.exceptions import ValidationError
from ..utils.logging import setup_logger

logger = setup_logger(__name__)


def as_birth_death(pairs: Any) -> np.ndarray:
    """
    (n, 2) float array of (birth, death) from PersistencePair objects,
    (birth, death) tuples or an (n, 2) array.
    """
    if isinstance(pairs, np.ndarray):
        bd = np.asarray(pairs, dtype=float)
    else:
        rows = []
        for p in pairs:
            if hasattr(p, "birth") and hasattr(p, "death"):
                rows.append((float(p.birth), float(p.death)))
            else:
                b, d = p
                rows.append((float(b), float(d)))
        bd = np.array(rows, dtype=float)

    if bd.size == 0:
        return np.zeros((0, 2), dtype=float)
    if bd.ndim != 2 or bd.shape[1] != 2:
        raise ValidationError(f"pairs must be (n, 2) (birth, death). Got {bd.shape}.", "pairs", "(n, 2)", bd.shape)
    if not np.all(np.isfinite(bd)):
        raise ValidationError("pairs must be finite; drop essential classes first.", "pairs")
    return bd


def persistence_weights(persistence: np.ndarray, weighting: str = "raw") -> np.ndarray:
    """
    'raw' : weight = persistence
    'max' : weight = persistence / max(persistence)  (all zeros if the max is 0)
    """
    pers = np.asarray(persistence, dtype=float)
    if weighting == "raw":
        return pers.copy()
    if weighting == "max":
        if pers.size == 0:
            return pers.copy()
        top = float(pers.max())
        if top <= 0:
            return np.zeros_like(pers)
        return pers / top
    raise ValidationError(f"Unknown weighting {weighting!r}.", "weighting", ("raw", "max"), weighting)


def persistence_image(pairs: Any, config: Optional[PersistenceImageConfig] = None) -> np.ndarray:
    """
    Rasterize a persistence diagram as a (G, G) grid of integrated densities.

    Each pair becomes a point (birth, death - birth) carrying a persistence
    weight. The density at x is

        sum_k w_k * exp(-||x - c_k||^2 / (2 sigma^2)) / (2 pi sigma^2)

    and each cell stores its integral, estimated by the midpoint rule on an
    S x S sub-grid. Row 0 is the top of the window (largest persistence),
    column 0 its left edge (birth 0). No normalization of the total mass.

    Parameters
    ----------
    pairs : iterable of PersistencePair / (birth, death), or (n, 2) array
    config : PersistenceImageConfig, optional

    Returns
    -------
    image : (G, G) float array
    """
    cfg = (config or DEFAULT_IMAGE_CONFIG).validate()
    G = int(cfg.grid_size)
    S = int(cfg.subgrid_size)
    sigma = float(cfg.sigma)

    bd = as_birth_death(pairs)
    if bd.shape[0] == 0:
        return np.zeros((G, G), dtype=float)

    births = bd[:, 0]
    pers = bd[:, 1] - bd[:, 0]
    weights = persistence_weights(pers, cfg.weighting)

    h = cfg.subcell_size
    mids = (np.arange(G * S, dtype=float) + 0.5) * h  # sub-cell midpoints along one axis

    # the Gaussian factorizes over the two axes, so the (G*S)^2 density grid is
    # one weighted outer-product sum
    two_s2 = 2.0 * sigma * sigma
    gx = np.exp(-((mids[None, :] - births[:, None]) ** 2) / two_s2)  # (n, G*S)
    gy = np.exp(-((mids[None, :] - pers[:, None]) ** 2) / two_s2)    # (n, G*S)
    density = (gy * weights[:, None]).T @ gx / (np.pi * two_s2)       # [y, x]

    cells = density.reshape(G, S, G, S).sum(axis=(1, 3)) * (h * h)
    image = np.ascontiguousarray(cells[::-1, :])

    logger.debug(
        f"Persistence image {G}x{G} (S={S}, sigma={sigma}, weighting={cfg.weighting}) "
        f"from {bd.shape[0]} pairs, mass={float(image.sum()):.6g}"
    )
    return image
