"""Profiler configuration helpers."""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings sourced from ``LINEPROF_*`` environment variables."""

    max_rows: int = Field(
        default=30,
        ge=1,
        description="Maximum number of ranked lines kept in a report.",
    )
    ignore_files: List[str] = Field(
        default_factory=list,
        description="Extra path substrings to exclude from instrumentation.",
    )
    ignore_lines: List[str] = Field(
        default_factory=list,
        description="Extra regular expressions for source lines hidden from reports.",
    )
    output_path: str = Field(default="lineprof.html", description="Where reports are written")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="LINEPROF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
