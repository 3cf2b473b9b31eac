"""Atomic file writing for rendered output."""

import hashlib
from pathlib import Path

import structlog

from toplists.renderer.models import GeneratedFile


logger = structlog.get_logger()


class AtomicWriter:
    """Writes files through a temporary sibling and a rename.

    Readers see either the complete old file or the complete new file,
    never a partial write.
    """

    def __init__(self, base_dir: Path, run_id: str | None = None) -> None:
        """Initialize the atomic writer.

        Args:
            base_dir: Base directory for relative path calculation.
            run_id: Optional run ID for logging context.
        """
        self._base_dir = base_dir
        self._log = logger.bind(component="atomic_writer")
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def write(self, path: Path, content: str, entries: int = 0) -> GeneratedFile:
        """Write content to file with atomic semantics.

        Args:
            path: Target file path.
            content: Content to write (encoded as UTF-8).
            entries: Number of list entries in content, for the manifest.

        Returns:
            GeneratedFile with path, checksum, and size information.
        """
        content_bytes = content.encode("utf-8")
        sha256 = hashlib.sha256(content_bytes).hexdigest()

        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        temp_path.write_bytes(content_bytes)
        temp_path.replace(path)

        try:
            relative_path = str(path.relative_to(self._base_dir))
        except ValueError:
            relative_path = str(path)

        self._log.debug(
            "file_written",
            path=relative_path,
            bytes=len(content_bytes),
            sha256=sha256[:12],
        )

        return GeneratedFile(
            path=relative_path,
            absolute_path=str(path.resolve()),
            bytes_written=len(content_bytes),
            sha256=sha256,
            entries=entries,
        )
