"""Application services (use cases) for line and section management."""

import asyncio
import logging
from typing import TYPE_CHECKING

from subway_lines.domain.errors import (
    ChainError,
    DuplicateLineError,
    LineNotFoundError,
)
from subway_lines.domain.models import (
    Chain,
    ChainChange,
    Line,
    LineConfiguration,
    Station,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from subway_lines.domain.ports import LineRepository


class SectionService:
    """Service for registering lines and maintaining their station chains.

    Each mutation is a read-modify-write cycle over the repository: load the
    segments of a line, rebuild a Chain, apply the change and persist the
    resulting diff. The cycle runs under a lock scoped to the line, so two
    mutations of the same line never interleave while different lines are
    updated independently.
    """

    def __init__(self, line_repository: "LineRepository") -> None:
        """Initialize with a line repository."""
        self._line_repository = line_repository
        self._line_locks: dict[int, asyncio.Lock] = {}
        self._registration_lock = asyncio.Lock()

    def _lock_for(self, line_id: int) -> asyncio.Lock:
        # No await between lookup and insert, so the event loop cannot race here.
        if line_id not in self._line_locks:
            self._line_locks[line_id] = asyncio.Lock()
        return self._line_locks[line_id]

    async def register_line(self, name: str, color: str) -> Line:
        """Register a new, empty line.

        Raises:
            DuplicateLineError: If a line with this name already exists.
            InvalidLineError: If the name or color is not acceptable.
        """
        async with self._registration_lock:
            if await self._line_repository.find_line_by_name(name) is not None:
                raise DuplicateLineError(f"Line {name!r} already exists")
            line = await self._line_repository.save_line(name, color)
        logger.info(f"Registered line {line.name!r} with id {line.id}")
        return line

    async def add_section(
        self, line_id: int, source: Station, target: Station, distance: int
    ) -> ChainChange:
        """Insert a segment into a line, splitting an existing one when needed."""
        line = await self._get_line(line_id)
        async with self._lock_for(line_id):
            chain = await self._load_chain(line_id)
            try:
                change = chain.insert(source, target, distance)
            except ChainError as e:
                logger.warning(
                    f"Rejected section {source} -> {target} ({distance}) on {line.name!r}: {e}"
                )
                raise
            await self._line_repository.apply_change(line_id, change)

        logger.info(
            f"Added section {source} -> {target} ({distance}) to {line.name!r}: "
            f"{len(change.added)} added, {len(change.removed)} removed"
        )
        return change

    async def remove_station(self, line_id: int, station: Station) -> ChainChange:
        """Remove a station from a line, merging its neighbouring segments."""
        line = await self._get_line(line_id)
        async with self._lock_for(line_id):
            chain = await self._load_chain(line_id)
            try:
                change = chain.remove(station)
            except ChainError as e:
                logger.warning(f"Rejected removal of {station} from {line.name!r}: {e}")
                raise
            await self._line_repository.apply_change(line_id, change)

        logger.info(f"Removed station {station} from {line.name!r}")
        return change

    async def get_ordered_stations(self, line_id: int) -> list[Station]:
        """Get the stations of a line from head to tail."""
        await self._get_line(line_id)
        chain = await self._load_chain(line_id)
        return chain.ordered_stations()

    async def get_all_lines(self) -> list[tuple[Line, list[Station]]]:
        """Get every line together with its ordered stations."""
        result = []
        for line in await self._line_repository.find_all_lines():
            chain = await self._load_chain(line.id)
            result.append((line, chain.ordered_stations()))
        return result

    async def find_line_by_name(self, name: str) -> Line:
        """Find a line by name.

        Raises:
            LineNotFoundError: If no line has this name.
        """
        line = await self._line_repository.find_line_by_name(name)
        if line is None:
            raise LineNotFoundError(f"Line {name!r} does not exist")
        return line

    async def import_lines(self, line_configs: list[LineConfiguration]) -> list[Line]:
        """Register configured lines and replay their segments.

        Every pending line is first replayed on a detached Chain, so a
        rejected segment aborts the import before anything is stored. The
        segments then go through add_section one by one, so imported data
        obeys the same rules as interactive edits. Lines that already exist
        are skipped.
        """
        pending: list[LineConfiguration] = []
        for line_config in line_configs:
            if await self._line_repository.find_line_by_name(line_config.name) is not None:
                logger.info(f"Line {line_config.name!r} already exists, skipping import")
                continue
            self._check_line_config(line_config)
            pending.append(line_config)

        imported: list[Line] = []
        for line_config in pending:
            line = await self.register_line(line_config.name, line_config.color)
            for segment in line_config.segments:
                await self.add_section(
                    line.id,
                    Station(segment.source),
                    Station(segment.target),
                    segment.distance,
                )
            imported.append(line)
        return imported

    @staticmethod
    def _check_line_config(line_config: LineConfiguration) -> None:
        """Raise the first error replaying the configured segments would hit."""
        chain = Chain()
        for segment in line_config.segments:
            try:
                chain.insert(Station(segment.source), Station(segment.target), segment.distance)
            except ChainError as e:
                logger.warning(f"Rejected configured line {line_config.name!r}: {e}")
                raise

    async def _get_line(self, line_id: int) -> Line:
        line = await self._line_repository.find_line(line_id)
        if line is None:
            raise LineNotFoundError(f"Line with id {line_id} does not exist")
        return line

    async def _load_chain(self, line_id: int) -> Chain:
        segments = await self._line_repository.find_segments(line_id)
        logger.debug(f"Loaded {len(segments)} segment(s) for line {line_id}")
        return Chain(segments)
