"""structlog setup shared by the toplists commands."""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import Any, TextIO

import structlog


DURATION_SUFFIX = "_duration_ms"


def round_durations(
    _logger: object, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Round ``*_duration_ms`` timings to two decimals."""
    for key, value in event_dict.items():
        if key.endswith(DURATION_SUFFIX) and isinstance(value, float):
            event_dict[key] = round(value, 2)
    return event_dict


def level_for(verbose: bool) -> int:
    """Map the CLI ``--verbose`` flag to a log level."""
    return logging.DEBUG if verbose else logging.INFO


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    output: TextIO | None = None,
) -> None:
    """Configure structlog for one command invocation.

    Args:
        level: Minimum level emitted.
        json_format: Render JSON lines instead of console output.
        output: Stream to write to; the current ``sys.stderr`` if omitted,
            so stdout stays free for command results.
    """
    stream = output if output is not None else sys.stderr
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            round_durations,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


@contextmanager
def run_context(run_id: str, command: str) -> Iterator[None]:
    """Attach ``run_id`` and ``command`` to every log line inside the block.

    Args:
        run_id: Identifier of the current run.
        command: CLI command name.
    """
    with structlog.contextvars.bound_contextvars(run_id=run_id, command=command):
        yield
