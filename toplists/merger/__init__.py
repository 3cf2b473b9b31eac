"""Merge engine for ranked domain lists.

Normalizes domain keys and folds the primary source, then every
local-market source, into one mapping of merged entries.
"""

from toplists.merger.merger import (
    ListMerger,
    fold_primary,
    fold_secondary,
    merge_sources,
)
from toplists.merger.metrics import MergerMetrics
from toplists.merger.models import AggregatedEntry
from toplists.merger.normalizer import EMPTY_KEY, normalize_domain


__all__ = [
    "EMPTY_KEY",
    "AggregatedEntry",
    "ListMerger",
    "MergerMetrics",
    "fold_primary",
    "fold_secondary",
    "merge_sources",
    "normalize_domain",
]
