"""Composite ranker for merged domain entries."""

from toplists.ranker.metrics import RankerMetrics
from toplists.ranker.ranker import (
    CompositeRanker,
    SortKey,
    composite_sort_key,
    local_ranks,
    rank_entries,
    synthesize_url,
)


__all__ = [
    "CompositeRanker",
    "RankerMetrics",
    "SortKey",
    "composite_sort_key",
    "local_ranks",
    "rank_entries",
    "synthesize_url",
]
