"""Adapters layer - configuration and storage integrations."""

from subway_lines.adapters.config import AppConfig
from subway_lines.adapters.json_file import JsonFileLineRepository
from subway_lines.adapters.memory import InMemoryLineRepository

__all__ = [
    "AppConfig",
    "InMemoryLineRepository",
    "JsonFileLineRepository",
]
