"""Source list reading.

Turns the list files written by the per-provider fetchers into uniform
``SourceRecord`` sequences.
"""

from toplists.sources.io import load_source_file, load_source_files
from toplists.sources.models import ReadStats, SourceRecord
from toplists.sources.reader import (
    SourceRecordReader,
    extract_domain,
    extract_rank,
    read_records,
)


__all__ = [
    "ReadStats",
    "SourceRecord",
    "SourceRecordReader",
    "extract_domain",
    "extract_rank",
    "load_source_file",
    "load_source_files",
    "read_records",
]
