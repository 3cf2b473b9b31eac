"""Auxiliary statistics over domain test results."""

from toplists.stats.org_frequency import (
    StatsInputError,
    count_org_frequencies,
    count_orgs,
    format_org_frequency_tsv,
    write_org_frequency_tsv,
)


__all__ = [
    "StatsInputError",
    "count_org_frequencies",
    "count_orgs",
    "format_org_frequency_tsv",
    "write_org_frequency_tsv",
]
