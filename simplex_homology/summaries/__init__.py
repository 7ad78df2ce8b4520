from .homology_summary import (
    HomologySummary,
    PersistenceSummary,
    summarize_homology,
    summarize_persistence,
)
