"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment defaults for the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    config_path: Path | None = Field(default=None, validation_alias="TOPLISTS_CONFIG")
    data_dir: Path = Field(default=Path(), validation_alias="TOPLISTS_DATA_DIR")
    output_path: Path | None = Field(default=None, validation_alias="TOPLISTS_OUTPUT")
    json_logs: bool = Field(default=False, validation_alias="TOPLISTS_JSON_LOGS")


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
