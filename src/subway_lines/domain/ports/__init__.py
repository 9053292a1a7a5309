"""Ports (interfaces) for the ports-and-adapters architecture."""

from subway_lines.domain.ports.line_repository import LineRepository

__all__ = [
    "LineRepository",
]
