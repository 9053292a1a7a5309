"""JSON file storage adapters."""

from subway_lines.adapters.json_file.json_file_line_repository import (
    CorruptStoreError,
    JsonFileLineRepository,
)

__all__ = ["CorruptStoreError", "JsonFileLineRepository"]
