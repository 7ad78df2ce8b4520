from .homology import HomologyGroups, betti_numbers, compute_betti_data, compute_betti_numbers, homology_groups
from .persistence import (
    ComponentPair,
    PersistencePair,
    PersistenceResult,
    compute_persistence,
    extract_persistence_pairs,
)
from .persistence_image import as_birth_death, persistence_image, persistence_weights
