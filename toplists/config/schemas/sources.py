"""Source list configuration schema."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from toplists.config.constants import (
    DEFAULT_DOMAIN_FIELD,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SOURCES,
)


class SourceConfig(BaseModel):
    """Configuration for a single ranking list.

    Attributes:
        name: Source name, used as the key in each entry's rank mapping.
        path: List file produced by the source's fetcher.
        domain_field: Item field holding the domain.
        url_field: Item field holding a canonical URL, if the list has one.
        primary: Whether this source is authoritative for URLs.
        enabled: Whether the source takes part in aggregation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1, max_length=100, pattern=r"^[a-z0-9_-]+$")]
    path: Annotated[str, Field(min_length=1)]
    domain_field: Annotated[str, Field(min_length=1)] = DEFAULT_DOMAIN_FIELD
    url_field: str | None = None
    primary: bool = False
    enabled: bool = True

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject remote locations; fetching belongs to the fetchers."""
        if v.startswith(("http://", "https://")):
            msg = "path must point to a local list file, not a URL"
            raise ValueError(msg)
        return v

    @field_validator("url_field")
    @classmethod
    def validate_url_field(cls, v: str | None) -> str | None:
        """Treat a blank URL field as undeclared."""
        if v is not None and not v.strip():
            return None
        return v


class SourcesConfig(BaseModel):
    """Root configuration for sources.yaml.

    Attributes:
        version: Schema version.
        output: File the merged list is written to.
        sources: Ranking lists in declaration order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    output: Annotated[str, Field(min_length=1)] = DEFAULT_OUTPUT_FILE
    sources: Annotated[list[SourceConfig], Field(min_length=1)]

    @model_validator(mode="after")
    def validate_unique_names(self) -> "SourcesConfig":
        """Ensure all source names are unique."""
        names = [s.name for s in self.sources]
        duplicates = [name for name in names if names.count(name) > 1]
        if duplicates:
            msg = f"Duplicate source names found: {set(duplicates)}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_single_primary(self) -> "SourcesConfig":
        """Ensure at most one source is designated primary."""
        primaries = [s.name for s in self.sources if s.primary]
        if len(primaries) > 1:
            msg = f"Only one primary source is allowed, found: {primaries}"
            raise ValueError(msg)
        return self

    @classmethod
    def default(cls) -> "SourcesConfig":
        """Build the built-in Taiwan list configuration."""
        return cls.model_validate({"sources": DEFAULT_SOURCES})
