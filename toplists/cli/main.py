"""CLI commands for merging top-domain lists."""

import logging
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from toplists import __version__
from toplists.config.constants import COMPONENT_CLI
from toplists.config.effective import EffectiveConfig
from toplists.config.error_hints import format_validation_error
from toplists.config.loader import ConfigLoader, ConfigValidationError
from toplists.errors import PrimarySourceMissingError
from toplists.observability.logging import configure_logging, level_for, run_context
from toplists.pipeline.aggregator import ListAggregator
from toplists.renderer.json_renderer import JsonRenderer
from toplists.settings import get_settings
from toplists.sources.io import load_source_files
from toplists.stats.org_frequency import (
    StatsInputError,
    count_org_frequencies,
    write_org_frequency_tsv,
)


logger = structlog.get_logger()

DEFAULT_RESULTS_DIR = Path("../test_results")
DEFAULT_STATS_OUTPUT = Path("as-org-frequency-stats-result.tsv")


@dataclass
class MergeOptions:
    """Options for the merge command."""

    config_path: Path | None
    data_dir: Path
    output_path: Path | None
    json_logs: bool
    verbose: bool


def _echo_validation_errors(loader: ConfigLoader) -> None:
    click.echo("Configuration validation failed:", err=True)
    for error in loader.validation_errors:
        formatted = format_validation_error(
            location=error["loc"],
            message=error["msg"],
            error_type=error.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)


def _load_configuration(
    config_path: Path | None, run_id: str, log: structlog.stdlib.BoundLogger
) -> EffectiveConfig:
    """Load the sources configuration, exiting on failure.

    Args:
        config_path: sources.yaml path; None selects the built-in lists.
        run_id: Run identifier.
        log: Logger instance.

    Returns:
        Validated effective configuration.
    """
    loader = ConfigLoader(run_id=run_id)

    try:
        if config_path is None:
            effective = loader.load_default()
        else:
            effective = loader.load(config_path)
    except ConfigValidationError as e:
        log.warning(
            "config_load_failed",
            error=str(e),
            validation_errors=loader.validation_errors,
        )
        _echo_validation_errors(loader)
        sys.exit(1)

    log.info(
        "config_validated",
        sources_count=len(effective.sources.sources),
        config_checksum=effective.compute_checksum(),
    )
    return effective


def _execute_merge(options: MergeOptions) -> None:
    run_id = str(uuid.uuid4())
    configure_logging(level=level_for(options.verbose), json_format=options.json_logs)
    with run_context(run_id, "merge"):
        _run_merge(options, run_id)


def _run_merge(options: MergeOptions, run_id: str) -> None:
    log = logger.bind(component=COMPONENT_CLI)
    log.info(
        "merge_run_started",
        config_path=str(options.config_path) if options.config_path else None,
        data_dir=str(options.data_dir),
    )

    config = _load_configuration(options.config_path, run_id, log)
    raw = load_source_files(config.get_enabled_sources(), options.data_dir)

    try:
        ranked = ListAggregator(run_id=run_id, config=config).aggregate(raw)
    except PrimarySourceMissingError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    output_path = options.output_path or options.data_dir / config.sources.output
    generated = JsonRenderer(run_id, output_path).render(ranked)

    click.echo("Merge complete!")
    click.echo(f"  Websites: {ranked.entries_total}")
    for name, count in ranked.records_by_source.items():
        click.echo(f"  {name}: {count} records")
    click.echo(f"  Output: {generated.absolute_path}")
    click.echo(f"  Checksum: {ranked.output_checksum}")


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Top-domain list merger CLI."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to sources.yaml (default: TOPLISTS_CONFIG or built-in lists).",
)
@click.option(
    "--data-dir",
    "data_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding fetched list files (default: TOPLISTS_DATA_DIR or cwd).",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output JSON file (default: the config's output inside the data dir).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: TOPLISTS_JSON_LOGS or false).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def merge(
    config_path: Path | None,
    data_dir: Path | None,
    output_path: Path | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Merge the fetched lists into one ranked list."""
    settings = get_settings()
    options = MergeOptions(
        config_path=config_path or settings.config_path,
        data_dir=data_dir or settings.data_dir,
        output_path=output_path or settings.output_path,
        json_logs=settings.json_logs if json_logs is None else json_logs,
        verbose=verbose,
    )
    _execute_merge(options)


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to sources.yaml configuration file.",
)
def validate(config_path: Path) -> None:
    """Validate the sources configuration without merging."""
    run_id = str(uuid.uuid4())
    configure_logging(level=logging.WARNING)

    loader = ConfigLoader(run_id=run_id)
    with run_context(run_id, "validate"):
        try:
            effective = loader.load(config_path)
        except ConfigValidationError:
            _echo_validation_errors(loader)
            sys.exit(1)

    primary = effective.primary_source
    click.echo("Configuration is valid!")
    click.echo(f"  Sources: {len(effective.sources.sources)}")
    click.echo(f"  Enabled: {len(effective.get_enabled_sources())}")
    click.echo(f"  Primary: {primary.name if primary else '(none)'}")
    click.echo(f"  Checksum: {effective.compute_checksum()}")
    if primary is None:
        click.echo("Warning: no enabled primary source; merge will abort.", err=True)


@cli.command("org-stats")
@click.argument(
    "base_dir",
    type=click.Path(path_type=Path),
    default=DEFAULT_RESULTS_DIR,
)
@click.argument(
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_STATS_OUTPUT,
)
def org_stats(base_dir: Path, output_path: Path) -> None:
    """Count AS organisations across test-result JSON files."""
    configure_logging(level=logging.WARNING)

    try:
        counts = count_org_frequencies(base_dir)
    except StatsInputError:
        click.echo(f"Failed to read directory: {base_dir}", err=True)
        sys.exit(1)

    try:
        generated = write_org_frequency_tsv(counts, output_path)
    except OSError:
        click.echo(f"Failed to write output: {output_path}", err=True)
        sys.exit(1)

    click.echo(f"Wrote {generated.entries} orgs to {generated.path}")
