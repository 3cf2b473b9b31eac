"""Error types for list aggregation."""

from enum import Enum


class AggregationErrorClass(str, Enum):
    """Classification of aggregation errors.

    - INPUT: A source's raw data is not shaped as expected
    - CONFIG: The source configuration cannot drive an aggregation
    """

    INPUT = "INPUT"
    CONFIG = "CONFIG"


class AggregationError(Exception):
    """Base exception for aggregation errors.

    Provides structured error information for logging and CLI reporting.
    """

    def __init__(
        self,
        error_class: AggregationErrorClass,
        message: str,
        source_name: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        """Initialize the aggregation error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            source_name: Name of the source involved, if any.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.source_name = source_name
        self.details = details or {}

    def to_dict(
        self,
    ) -> dict[str, str | int | bool | None | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "source_name": self.source_name,
            "details": self.details,
        }


class MalformedSourceInputError(AggregationError):
    """A source's raw data is not a list.

    Only that source's contribution is lost; the pipeline continues with
    zero records for it.
    """

    def __init__(
        self,
        message: str,
        source_name: str | None = None,
        received_type: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            source_name: Name of the offending source.
            received_type: Python type name of the data that was received.
        """
        super().__init__(
            error_class=AggregationErrorClass.INPUT,
            message=message,
            source_name=source_name,
            details={"received_type": received_type},
        )
        self.received_type = received_type


class PrimarySourceMissingError(AggregationError):
    """No enabled source is designated as primary.

    This is the one condition that aborts a whole aggregation.
    """

    def __init__(self, configured: list[str]) -> None:
        """Initialize the error.

        Args:
            configured: Names of the sources that are configured.
        """
        super().__init__(
            error_class=AggregationErrorClass.CONFIG,
            message="No enabled primary source is configured",
            details={"configured_sources": ",".join(configured)},
        )
        self.configured = configured
