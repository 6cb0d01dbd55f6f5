from .analytics import (
    compute_party_stats,
    compute_state_stats,
    compute_vote_share,
    generate_insights,
    summarize,
)
from .enrichment import DEFAULT_TABLES, ReferenceTables
from .loader import DatasetLoadError, ElectionDataset, load_dataset

__all__ = [
    "compute_party_stats",
    "compute_state_stats",
    "compute_vote_share",
    "generate_insights",
    "summarize",
    "DEFAULT_TABLES",
    "ReferenceTables",
    "DatasetLoadError",
    "ElectionDataset",
    "load_dataset",
]
