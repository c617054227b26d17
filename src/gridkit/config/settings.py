"""Environment-driven library defaults.

All values are loaded from environment variables (prefix ``GRIDKIT_``) or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults applied when a call does not say otherwise."""

    model_config = SettingsConfigDict(
        env_prefix="GRIDKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_dtype: str = "int64"
    """numpy dtype name used by ``Matrix.zeros`` when no dtype is passed."""
    cell_separator: str = Field(default=" ", min_length=1)
    """Separator placed between cells by ``format_matrix``."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


# Module-level singleton, import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
