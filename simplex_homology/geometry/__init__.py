from .filtration import (
    Filtration,
    FiltrationLevel,
    build_rips_filtration,
    count_simplices,
    filtration_values,
    flatten_filtration,
    pairwise_distances,
    simplex_filtration_value,
)
from .metrics import EuclideanMetric, Metric, SciPyCdistMetric, as_metric
