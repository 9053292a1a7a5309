"""JSON file line repository implementation.

The whole store is a single JSON document that is re-read on every call and
rewritten atomically (temporary file plus rename) after every change.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from subway_lines.domain.errors import InconsistentChainError
from subway_lines.domain.models.chain_change import ChainChange
from subway_lines.domain.models.line import Line
from subway_lines.domain.models.segment import Segment
from subway_lines.domain.models.station import Station
from subway_lines.domain.ports.line_repository import LineRepository

logger = logging.getLogger(__name__)


class CorruptStoreError(Exception):
    """The JSON document exists but cannot be read as a line store."""


class StoredSegment(BaseModel):
    """Segment row as written to the JSON document."""

    source: str
    target: str
    distance: int

    @classmethod
    def from_segment(cls, segment: Segment) -> StoredSegment:
        return cls(source=segment.source.name, target=segment.target.name, distance=segment.distance)

    def to_segment(self) -> Segment:
        return Segment(Station(self.source), Station(self.target), self.distance)


class StoredLine(BaseModel):
    """Line row, including its segments."""

    id: int
    name: str
    color: str
    segments: list[StoredSegment] = Field(default_factory=list)

    def to_line(self) -> Line:
        return Line(id=self.id, name=self.name, color=self.color)


class LineStore(BaseModel):
    """Top-level JSON document."""

    next_id: int = 1
    lines: list[StoredLine] = Field(default_factory=list)

    def find(self, line_id: int) -> StoredLine | None:
        return next((line for line in self.lines if line.id == line_id), None)


class JsonFileLineRepository(LineRepository):
    """Stores lines and segments in a JSON file."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the repository.

        Args:
            path: Location of the JSON document. It is created on first write.
        """
        self._path = Path(path)

    async def find_line(self, line_id: int) -> Line | None:
        stored = self._load().find(line_id)
        return stored.to_line() if stored else None

    async def find_line_by_name(self, name: str) -> Line | None:
        stored = next((line for line in self._load().lines if line.name == name), None)
        return stored.to_line() if stored else None

    async def find_all_lines(self) -> list[Line]:
        return [line.to_line() for line in sorted(self._load().lines, key=lambda line: line.id)]

    async def save_line(self, name: str, color: str) -> Line:
        store = self._load()
        line = Line(id=store.next_id, name=name, color=color)
        store.lines.append(StoredLine(id=line.id, name=line.name, color=line.color))
        store.next_id += 1
        self._save(store)
        return line

    async def find_segments(self, line_id: int) -> list[Segment]:
        stored = self._load().find(line_id)
        if stored is None:
            return []
        return [segment.to_segment() for segment in stored.segments]

    async def apply_change(self, line_id: int, change: ChainChange) -> None:
        """Apply a chain change to the stored segments of a line.

        Raises:
            InconsistentChainError: If the line or a segment to delete is not stored.
        """
        store = self._load()
        stored_line = store.find(line_id)
        if stored_line is None:
            raise InconsistentChainError(f"Line {line_id} is not stored in {self._path}")

        segments = {segment.to_segment() for segment in stored_line.segments}
        missing = [segment for segment in change.removed if segment not in segments]
        if missing:
            raise InconsistentChainError(
                f"Cannot delete segment(s) not stored for line {line_id}: "
                f"{', '.join(str(segment) for segment in missing)}"
            )
        segments = change.apply(frozenset(segments))
        stored_line.segments = [
            StoredSegment.from_segment(segment)
            for segment in sorted(segments, key=lambda s: (s.source.name, s.target.name))
        ]
        self._save(store)

    def _load(self) -> LineStore:
        if not self._path.exists():
            return LineStore()
        try:
            return LineStore.model_validate_json(self._path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise CorruptStoreError(f"{self._path} is not a valid line store: {e}") from e

    def _save(self, store: LineStore) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(store.model_dump_json(indent=2))
            os.replace(temp_name, self._path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(store.lines)} line(s) to {self._path}")
