# simplex_homology/geometry/metrics.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

import numpy as np
from scipy.spatial.distance import cdist, pdist, squareform


# ============================================================
# Vectorized metric objects
# ============================================================

class Metric(Protocol):
    """Vectorized metric interface: returns full distance matrices."""
    name: str

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        ...


@dataclass(frozen=True)
class EuclideanMetric:
    name: str = "euclidean"

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if Y is None:
            # pdist is exactly symmetric with a zero diagonal
            if X.shape[0] == 0:
                return np.zeros((0, 0), dtype=float)
            return squareform(pdist(X, metric="euclidean"))
        Y = np.asarray(Y, dtype=float)
        if Y.ndim == 1:
            Y = Y.reshape(-1, 1)
        return cdist(X, Y, metric="euclidean")


@dataclass(frozen=True)
class SciPyCdistMetric:
    """Wrapper for a scalar metric(p, q) (or a scipy metric name) via cdist."""
    metric: Union[Callable, str]
    name: str = "scipy_cdist"

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        Y = X if Y is None else np.asarray(Y, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if Y.ndim == 1:
            Y = Y.reshape(-1, 1)
        return cdist(X, Y, metric=self.metric)


def as_metric(metric: Union["Metric", Callable, str, None]) -> "Metric":
    """Convert a Metric object, a callable(p, q) or a scipy metric name into a Metric."""
    if metric is None:
        return EuclideanMetric()
    if hasattr(metric, "pairwise"):
        return metric  # type: ignore[return-value]
    if isinstance(metric, str):
        return SciPyCdistMetric(metric=metric, name=metric)
    return SciPyCdistMetric(metric=metric, name=getattr(metric, "__name__", "custom_metric"))
