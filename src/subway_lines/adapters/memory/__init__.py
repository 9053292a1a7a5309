"""In-memory storage adapters."""

from subway_lines.adapters.memory.in_memory_line_repository import InMemoryLineRepository

__all__ = ["InMemoryLineRepository"]
