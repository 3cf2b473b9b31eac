"""JSON renderer for the merged list output."""

import json
from pathlib import Path

import structlog

from toplists.pipeline.models import RankedList
from toplists.renderer.io import AtomicWriter
from toplists.renderer.models import GeneratedFile


logger = structlog.get_logger()


def render_json(ranked: RankedList) -> str:
    """Serialize the ranked list.

    Each entry becomes ``{"website", "url", "rank"}``; non-ASCII text is
    kept as is and the layout is indented by two spaces.

    Args:
        ranked: Aggregation result.

    Returns:
        JSON document text.
    """
    return json.dumps(ranked.to_json_list(), ensure_ascii=False, indent=2)


class JsonRenderer:
    """Writes the merged list to its output file."""

    def __init__(self, run_id: str, output_path: Path) -> None:
        """Initialize the JSON renderer.

        Args:
            run_id: Unique run identifier.
            output_path: File the merged list is written to.
        """
        self._run_id = run_id
        self._output_path = output_path
        self._writer = AtomicWriter(output_path.parent, run_id)
        self._log = logger.bind(run_id=run_id, component="renderer")

    def render(self, ranked: RankedList) -> GeneratedFile:
        """Render the merged list.

        Args:
            ranked: Aggregation result.

        Returns:
            GeneratedFile describing the written output.
        """
        generated = self._writer.write(
            self._output_path,
            render_json(ranked),
            entries=len(ranked.entries),
        )
        self._log.info(
            "output_written",
            path=generated.absolute_path,
            entries=generated.entries,
            bytes=generated.bytes_written,
        )
        return generated
