"""Loading and validation of sources.yaml."""

import hashlib
import json
import time
from enum import Enum
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from toplists.config.constants import COMPONENT_CONFIG, FILE_TYPE_SOURCES
from toplists.config.effective import EffectiveConfig
from toplists.config.schemas.sources import SourcesConfig


logger = structlog.get_logger()


class LoaderState(str, Enum):
    """Outcome of a ConfigLoader.

    - UNLOADED: Nothing loaded yet
    - READY: A configuration was validated and returned
    - FAILED: Loading stopped on an error; see ``validation_errors``
    """

    UNLOADED = "UNLOADED"
    READY = "READY"
    FAILED = "FAILED"


class ConfigValidationError(Exception):
    """Raised when the sources file is missing, unparsable or invalid."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: Validation error details with loc, msg and type keys.
            file_path: Path of the sources file.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class ConfigLoaderReuseError(Exception):
    """Raised when a loader that already ran is asked to load again."""

    def __init__(self, state: LoaderState) -> None:
        self.state = state
        super().__init__(f"ConfigLoader already used (state: {state.value})")


class ConfigLoader:
    """Loads one sources configuration for one run.

    A loader is single-use: it finishes either READY with checksums and
    timing recorded, or FAILED with the collected errors.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Unique identifier for the current run.
        """
        self._run_id = run_id
        self._state = LoaderState.UNLOADED
        self._file_checksums: dict[str, str] = {}
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0
        self._log = logger.bind(run_id=run_id, component=COMPONENT_CONFIG)

    @property
    def state(self) -> LoaderState:
        """Get the loader outcome."""
        return self._state

    @property
    def file_checksums(self) -> dict[str, str]:
        """Get SHA-256 checksums of loaded files."""
        return self._file_checksums.copy()

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def _ensure_unused(self) -> None:
        if self._state is not LoaderState.UNLOADED:
            raise ConfigLoaderReuseError(self._state)

    def load(self, sources_path: Path) -> EffectiveConfig:
        """Load and validate the sources configuration file.

        Args:
            sources_path: Path to sources.yaml.

        Returns:
            EffectiveConfig with the validated configuration.

        Raises:
            ConfigValidationError: If the file is missing, is not valid
                YAML, or does not match the schema.
            ConfigLoaderReuseError: If this loader already ran.
        """
        self._ensure_unused()
        start_time = time.perf_counter()
        self._log.info(
            "loading_config_file",
            file_path=str(sources_path),
            file_type=FILE_TYPE_SOURCES,
        )

        try:
            content_bytes = sources_path.read_bytes()
            checksum = hashlib.sha256(content_bytes).hexdigest()
            self._file_checksums[str(sources_path.resolve())] = checksum
            data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
            sources = SourcesConfig.model_validate(data)
        except FileNotFoundError as e:
            self._fail([{"loc": "file", "msg": str(e), "type": "file_not_found"}])
            raise ConfigValidationError(self.validation_errors, str(sources_path)) from e
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            self._fail([{"loc": "yaml", "msg": str(e), "type": "yaml_parse_error"}])
            raise ConfigValidationError(self.validation_errors, str(sources_path)) from e
        except ValidationError as e:
            self._fail(
                [
                    {
                        "loc": ".".join(str(part) for part in err["loc"]) or "sources",
                        "msg": err["msg"],
                        "type": err["type"],
                    }
                    for err in e.errors()
                ]
            )
            raise ConfigValidationError(self.validation_errors, str(sources_path)) from e

        self._log.info(
            "config_file_loaded",
            file_path=str(sources_path),
            file_sha256=checksum,
            source_count=len(sources.sources),
        )
        return self._ready(sources, start_time)

    def load_default(self) -> EffectiveConfig:
        """Build the configuration from the built-in source list.

        Returns:
            EffectiveConfig for the default Taiwan lists.

        Raises:
            ConfigLoaderReuseError: If this loader already ran.
        """
        self._ensure_unused()
        start_time = time.perf_counter()
        self._log.info("loading_default_config")
        return self._ready(SourcesConfig.default(), start_time)

    def _ready(self, sources: SourcesConfig, start_time: float) -> EffectiveConfig:
        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000
        self._state = LoaderState.READY
        self._log.info(
            "config_ready",
            source_count=len(sources.sources),
            config_validation_duration_ms=self._validation_duration_ms,
        )
        return EffectiveConfig(
            sources=sources,
            file_checksums=self._file_checksums.copy(),
            run_id=self._run_id,
        )

    def _fail(self, errors: list[dict[str, str]]) -> None:
        self._state = LoaderState.FAILED
        self._validation_errors.extend(errors)
        self._log.error(
            "config_validation_failed",
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )

    def get_validation_summary(self) -> dict[str, object]:
        """Get a summary of the validation process.

        Returns:
            Dictionary with validation summary.
        """
        return {
            "run_id": self._run_id,
            "state": self._state.value,
            "file_checksums": self._file_checksums,
            "validation_error_count": len(self._validation_errors),
            "validation_errors": self._validation_errors,
            "validation_duration_ms": self._validation_duration_ms,
        }

    def get_validation_summary_json(self) -> str:
        """Get validation summary as JSON string with stable ordering."""
        return json.dumps(self.get_validation_summary(), sort_keys=True, indent=2)
