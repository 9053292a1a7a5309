"""In-memory line repository implementation."""

from __future__ import annotations

import logging

from subway_lines.domain.errors import InconsistentChainError
from subway_lines.domain.models.chain_change import ChainChange
from subway_lines.domain.models.line import Line
from subway_lines.domain.models.segment import Segment
from subway_lines.domain.ports.line_repository import LineRepository

logger = logging.getLogger(__name__)


class InMemoryLineRepository(LineRepository):
    """Dictionary-backed storage for lines and their segments."""

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self._lines: dict[int, Line] = {}
        self._segments: dict[int, set[Segment]] = {}
        self._next_id = 1

    async def find_line(self, line_id: int) -> Line | None:
        return self._lines.get(line_id)

    async def find_line_by_name(self, name: str) -> Line | None:
        return next((line for line in self._lines.values() if line.name == name), None)

    async def find_all_lines(self) -> list[Line]:
        return [self._lines[line_id] for line_id in sorted(self._lines)]

    async def save_line(self, name: str, color: str) -> Line:
        line = Line(id=self._next_id, name=name, color=color)
        self._lines[line.id] = line
        self._segments[line.id] = set()
        self._next_id += 1
        return line

    async def find_segments(self, line_id: int) -> list[Segment]:
        return list(self._segments.get(line_id, set()))

    async def apply_change(self, line_id: int, change: ChainChange) -> None:
        """Apply a chain change to the stored segments of a line.

        Args:
            line_id: The line to update.
            change: Segments to delete and insert.

        Raises:
            InconsistentChainError: If a segment to delete is not stored.
        """
        stored = self._segments.setdefault(line_id, set())
        missing = [segment for segment in change.removed if segment not in stored]
        if missing:
            raise InconsistentChainError(
                f"Cannot delete segment(s) not stored for line {line_id}: "
                f"{', '.join(str(segment) for segment in missing)}"
            )
        stored.difference_update(change.removed)
        stored.update(change.added)
        logger.debug(
            f"Line {line_id}: deleted {len(change.removed)}, inserted {len(change.added)} segment(s)"
        )
