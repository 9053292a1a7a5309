"""Line repository port."""

from typing import Protocol

from subway_lines.domain.models.chain_change import ChainChange
from subway_lines.domain.models.line import Line
from subway_lines.domain.models.segment import Segment


class LineRepository(Protocol):
    """Port for storing lines and their segments."""

    async def find_line(self, line_id: int) -> Line | None:
        """Find a line by its identifier."""
        ...

    async def find_line_by_name(self, name: str) -> Line | None:
        """Find a line by its name."""
        ...

    async def find_all_lines(self) -> list[Line]:
        """Return all lines ordered by identifier."""
        ...

    async def save_line(self, name: str, color: str) -> Line:
        """Store a new line and return it with its assigned identifier."""
        ...

    async def find_segments(self, line_id: int) -> list[Segment]:
        """Return the stored segments of a line, in no particular order."""
        ...

    async def apply_change(self, line_id: int, change: ChainChange) -> None:
        """Delete the removed segments, then insert the added ones."""
        ...
