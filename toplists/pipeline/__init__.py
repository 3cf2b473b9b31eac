"""Aggregation pipeline wiring the reader, merger and ranker together."""

from toplists.pipeline.aggregator import ListAggregator, aggregate_pure
from toplists.pipeline.models import RankedEntry, RankedList, compute_checksum


__all__ = [
    "ListAggregator",
    "RankedEntry",
    "RankedList",
    "aggregate_pure",
    "compute_checksum",
]
