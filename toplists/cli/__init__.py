"""Command line interface."""

from toplists.cli.main import cli


__all__ = ["cli"]
