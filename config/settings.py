"""
Linter configuration using Pydantic Settings.

Loads configuration from POSTGRLS_* environment variables with sensible
defaults. Command line options take precedence.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


def split_table_list(value: str) -> list[str]:
    """Split a comma separated table list, dropping blank entries."""
    return [name.strip() for name in value.split(",") if name.strip()]


class Settings(BaseSettings):
    """Linter settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POSTGRLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Tables never checked, comma separated
    exclude: str = ""

    # Input
    stdin_filename: str = "stdin"
    encoding: str = "utf-8"

    # Output
    output_indent: int = 2
    log_level: str = "WARNING"

    @property
    def excluded_tables(self) -> list[str]:
        """Excluded table names as a list."""
        return split_table_list(self.exclude)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
