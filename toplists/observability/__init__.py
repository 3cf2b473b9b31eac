"""Observability module for structured logging."""

from toplists.observability.logging import (
    configure_logging,
    level_for,
    round_durations,
    run_context,
)


__all__ = [
    "configure_logging",
    "level_for",
    "round_durations",
    "run_context",
]
