from .boundary_reduction import (
    Column,
    ReductionResult,
    boundary_column,
    check_pivot_map,
    is_reduced,
    low_of,
    reduce_columns,
    sorted_indices,
    z2_chain,
)
from .indexer import IndexedFiltration, index_filtration
