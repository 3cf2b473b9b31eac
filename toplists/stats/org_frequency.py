"""Frequency of AS organisations across per-domain test results.

Each test-result file carries a ``domainDetails`` tree in which hosting
lookups record an ``org`` string such as ``"AS15169 Google LLC"``. This
module counts those strings over a directory of results and renders the
counts as a TSV table.
"""

import json
import re
from collections import Counter
from pathlib import Path

import structlog

from toplists.renderer.io import AtomicWriter
from toplists.renderer.models import GeneratedFile


logger = structlog.get_logger()

ORG_KEY = "org"
DETAILS_KEY = "domainDetails"
TSV_HEADER = "asn\torg_name\tcount"

_ASN_PATTERN = re.compile(r"(AS\d+)\s+(.*)")


class StatsInputError(Exception):
    """Raised when the results directory cannot be listed."""

    def __init__(self, base_dir: Path, reason: str) -> None:
        """Initialize the error.

        Args:
            base_dir: Directory that failed.
            reason: Underlying error message.
        """
        self.base_dir = base_dir
        self.reason = reason
        super().__init__(f"Failed to read directory: {base_dir} ({reason})")


def _walk(node: object, counts: Counter[str]) -> None:
    if isinstance(node, list):
        for item in node:
            _walk(item, counts)
        return
    if isinstance(node, dict):
        for key, value in node.items():
            if key == ORG_KEY and isinstance(value, str):
                counts[value] += 1
            else:
                _walk(value, counts)


def count_orgs(data: object, counts: Counter[str] | None = None) -> Counter[str]:
    """Count ``org`` strings in one parsed result document.

    Args:
        data: Parsed JSON document.
        counts: Counter to add to; a new one is created if omitted.

    Returns:
        The updated counter.
    """
    counts = Counter() if counts is None else counts
    if isinstance(data, dict) and DETAILS_KEY in data:
        _walk(data[DETAILS_KEY], counts)
    return counts


def count_org_frequencies(base_dir: Path) -> Counter[str]:
    """Count ``org`` strings over every ``*.json`` file in a directory.

    Unreadable or invalid files are skipped.

    Args:
        base_dir: Directory of test-result files (not searched recursively).

    Returns:
        Counter of org string to occurrences.

    Raises:
        StatsInputError: If the directory cannot be listed.
    """
    try:
        paths = sorted(
            p for p in base_dir.iterdir() if p.is_file() and p.name.endswith(".json")
        )
    except OSError as e:
        raise StatsInputError(base_dir, str(e)) from e

    log = logger.bind(component="stats", base_dir=str(base_dir))
    counts: Counter[str] = Counter()
    skipped = 0

    for path in paths:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            skipped += 1
            continue
        count_orgs(data, counts)

    log.info(
        "org_frequencies_counted",
        files=len(paths),
        files_skipped=skipped,
        distinct_orgs=len(counts),
    )
    return counts


def format_org_frequency_tsv(counts: Counter[str]) -> str:
    """Render org counts as TSV, most frequent first.

    Orgs of the form ``AS<number> <name>`` are split into the ``asn`` and
    ``org_name`` columns; anything else leaves ``asn`` empty.

    Args:
        counts: Counter of org string to occurrences.

    Returns:
        TSV text with a header line and a trailing newline.
    """
    rows = sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    lines = [TSV_HEADER]
    for org, count in rows:
        match = _ASN_PATTERN.fullmatch(org)
        if match:
            lines.append(f"{match.group(1)}\t{match.group(2)}\t{count}")
        else:
            lines.append(f"\t{org}\t{count}")

    return "\n".join(lines) + "\n"


def write_org_frequency_tsv(counts: Counter[str], output_path: Path) -> GeneratedFile:
    """Write the org frequency table.

    Args:
        counts: Counter of org string to occurrences.
        output_path: TSV file to write.

    Returns:
        GeneratedFile describing the written table.
    """
    writer = AtomicWriter(output_path.parent)
    return writer.write(
        output_path,
        format_org_frequency_tsv(counts),
        entries=len(counts),
    )
