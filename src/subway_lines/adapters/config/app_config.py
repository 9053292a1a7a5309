"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    data_file: str = Field(
        default="subway_lines.json",
        description="Path to the JSON file holding lines and segments",
    )

    # TOML config file with lines to import
    config_file: str | None = Field(
        default="lines.example.toml",
        description="Path to TOML configuration file with lines and their segments",
    )

    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load lines configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_lines_config(self) -> list[dict[str, Any]]:
        """Parse and return lines configuration as a list of dicts from TOML file.

        Each line is a ``[[lines]]`` table with ``name``, ``color`` and an
        optional ``[[lines.segments]]`` array of ``source``/``target``/``distance``.

        Raises ValueError if lines are malformed or line names are not unique.
        """
        toml_data = self._load_toml_data()

        lines = toml_data.get("lines", [])
        if not isinstance(lines, list):
            raise ValueError("TOML config 'lines' must be a list")

        for line in lines:
            if not isinstance(line, dict):
                raise ValueError("Each entry in 'lines' must be a table")
            if "name" not in line:
                raise ValueError("All lines must have a 'name' field")

        names = [line["name"] for line in lines]
        if len(names) != len(set(names)):
            duplicates = {n for n in names if names.count(n) > 1}
            raise ValueError(f"Line names must be unique. Duplicate names found: {duplicates}")

        return lines
