"""Data models for rendered output."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedFile:
    """Information about a generated file.

    Attributes:
        path: Path relative to the output base directory when possible.
        absolute_path: Absolute path to file.
        bytes_written: Number of bytes written.
        sha256: SHA-256 checksum of content.
        entries: Number of list entries in the file.
    """

    path: str
    absolute_path: str
    bytes_written: int
    sha256: str
    entries: int = 0
