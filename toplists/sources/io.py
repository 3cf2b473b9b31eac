"""Loading of list files written by the fetchers."""

import json
from pathlib import Path

import structlog

from toplists.config.schemas.sources import SourceConfig


logger = structlog.get_logger()


def load_source_file(path: Path, source_name: str | None = None) -> object:
    """Read a fetched list file.

    A missing or unparsable file is logged and read as an empty list so
    that the source contributes nothing instead of aborting the run.

    Args:
        path: JSON file produced by a fetcher.
        source_name: Source name for log context.

    Returns:
        Parsed JSON content, or an empty list.
    """
    log = logger.bind(component="reader", source_name=source_name, path=str(path))
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        log.warning("source_file_unreadable", error=str(e))
        return []

    try:
        data: object = json.loads(content)
    except json.JSONDecodeError as e:
        log.warning("source_file_invalid_json", error=str(e), line=e.lineno)
        return []

    return data


def load_source_files(
    sources: list[SourceConfig],
    data_dir: Path,
) -> dict[str, object]:
    """Read the list file of every given source.

    Args:
        sources: Sources to read; relative paths resolve against data_dir.
        data_dir: Directory holding the fetched list files.

    Returns:
        Source name to parsed list data.
    """
    raw: dict[str, object] = {}
    for source in sources:
        path = Path(source.path)
        if not path.is_absolute():
            path = data_dir / path
        raw[source.name] = load_source_file(path, source_name=source.name)
    return raw
