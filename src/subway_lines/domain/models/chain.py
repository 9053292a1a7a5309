"""Segment chain domain model.

A chain holds the segments of a single line and keeps them arranged as one
simple directed path. Mutations are planned against the current snapshot,
validated in full and only then committed, so a rejected request never
leaves the chain half-changed.
"""

import logging
from collections.abc import Iterable, Iterator

from subway_lines.domain.errors import (
    DisconnectedSegmentError,
    DistanceTooLongError,
    DuplicateSegmentError,
    InconsistentChainError,
    StationNotFoundError,
)
from subway_lines.domain.models.chain_change import ChainChange
from subway_lines.domain.models.segment import Segment
from subway_lines.domain.models.station import Station

logger = logging.getLogger(__name__)


class Chain:
    """Ordered chain of stations for one line, stored as a set of segments."""

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        """Initialize from a snapshot of stored segments.

        The snapshot is copied; later changes to the caller's collection do
        not affect the chain.
        """
        self._segments: frozenset[Segment] = frozenset(segments)

    @property
    def segments(self) -> frozenset[Segment]:
        return self._segments

    @property
    def stations(self) -> frozenset[Station]:
        """All stations that appear in any segment."""
        return frozenset(
            station for segment in self._segments for station in (segment.source, segment.target)
        )

    @property
    def total_distance(self) -> int:
        return sum(segment.distance for segment in self._segments)

    def is_empty(self) -> bool:
        return not self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __contains__(self, station: object) -> bool:
        return any(segment.contains(station) for segment in self._segments)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"Chain({sorted(str(segment) for segment in self._segments)})"

    def insert(self, source: Station, target: Station, distance: int) -> ChainChange:
        """Insert a segment, splitting an existing one when needed.

        Args:
            source: Upstream station of the new segment.
            target: Downstream station of the new segment.
            distance: Distance from source to target.

        Returns:
            The segments added to and removed from the chain.

        Raises:
            InvalidSegmentError: If the requested segment itself is invalid.
            DuplicateSegmentError: If both stations are already on the chain.
            DisconnectedSegmentError: If neither station is on the chain.
            DistanceTooLongError: If the split segment is not longer than distance.
        """
        change = self._plan_insert(Segment(source, target, distance))
        self._commit(change)
        return change

    def remove(self, station: Station) -> ChainChange:
        """Remove a station, merging its neighbouring segments when interior.

        Raises:
            StationNotFoundError: If the station is not on the chain.
        """
        change = self._plan_remove(station)
        self._commit(change)
        return change

    def ordered_stations(self) -> list[Station]:
        """Return the stations from head to tail.

        Raises:
            InconsistentChainError: If the segments branch, form a cycle or
                split into several fragments.
        """
        if not self._segments:
            return []

        next_station: dict[Station, Station] = {}
        targets: set[Station] = set()
        for segment in self._segments:
            if segment.source in next_station:
                raise InconsistentChainError(
                    f"Station {segment.source} has more than one outgoing segment"
                )
            if segment.target in targets:
                raise InconsistentChainError(
                    f"Station {segment.target} has more than one incoming segment"
                )
            next_station[segment.source] = segment.target
            targets.add(segment.target)

        heads = [station for station in next_station if station not in targets]
        if len(heads) != 1:
            raise InconsistentChainError(f"Expected exactly one head station, found {len(heads)}")

        # Sources and targets are unique, so the walk from the head cannot revisit a station.
        ordered = [heads[0]]
        while ordered[-1] in next_station:
            ordered.append(next_station[ordered[-1]])

        if len(ordered) != len(self._segments) + 1:
            raise InconsistentChainError(
                f"Walk from {heads[0]} reached {len(ordered)} stations, "
                f"but the chain has {len(self._segments)} segments"
            )
        return ordered

    def _plan_insert(self, requested: Segment) -> ChainChange:
        if not self._segments:
            logger.debug(f"Starting empty chain with {requested}")
            return ChainChange(added=(requested,))

        has_source = requested.source in self
        has_target = requested.target in self
        if has_source and has_target:
            raise DuplicateSegmentError(
                f"Both {requested.source} and {requested.target} are already on the line"
            )
        if not has_source and not has_target:
            raise DisconnectedSegmentError(
                f"Neither {requested.source} nor {requested.target} is on the line"
            )

        if has_source:
            return self._plan_downstream(requested)
        return self._plan_upstream(requested)

    def _plan_downstream(self, requested: Segment) -> ChainChange:
        """Attach a new station below an existing source station."""
        outgoing = self._find_outgoing(requested.source)
        if outgoing is None:
            logger.debug(f"Appending {requested} after tail {requested.source}")
            return ChainChange(added=(requested,))

        self._check_split(outgoing, requested)
        remainder = Segment(
            requested.target, outgoing.target, outgoing.distance - requested.distance
        )
        logger.debug(f"Splitting {outgoing} into {requested} and {remainder}")
        return ChainChange(added=(requested, remainder), removed=(outgoing,))

    def _plan_upstream(self, requested: Segment) -> ChainChange:
        """Attach a new station above an existing target station."""
        incoming = self._find_incoming(requested.target)
        if incoming is None:
            logger.debug(f"Prepending {requested} before head {requested.target}")
            return ChainChange(added=(requested,))

        self._check_split(incoming, requested)
        remainder = Segment(
            incoming.source, requested.source, incoming.distance - requested.distance
        )
        logger.debug(f"Splitting {incoming} into {remainder} and {requested}")
        return ChainChange(added=(remainder, requested), removed=(incoming,))

    def _plan_remove(self, station: Station) -> ChainChange:
        if station not in self:
            raise StationNotFoundError(f"Station {station} is not on the line")

        if len(self._segments) == 1:
            logger.debug(f"Removing {station} clears the chain")
            return ChainChange(removed=tuple(self._segments))

        incoming = self._find_incoming(station)
        outgoing = self._find_outgoing(station)
        if incoming is not None and outgoing is not None:
            merged = Segment(
                incoming.source, outgoing.target, incoming.distance + outgoing.distance
            )
            logger.debug(f"Merging {incoming} and {outgoing} into {merged}")
            return ChainChange(added=(merged,), removed=(incoming, outgoing))

        endpoint = outgoing if outgoing is not None else incoming
        logger.debug(f"Dropping end segment {endpoint}")
        return ChainChange(removed=(endpoint,))  # type: ignore[arg-type]

    @staticmethod
    def _check_split(existing: Segment, requested: Segment) -> None:
        if requested.distance_at_least(existing.distance):
            raise DistanceTooLongError(
                f"Distance {requested.distance} must be shorter than the "
                f"existing segment {existing}"
            )

    def _find_outgoing(self, station: Station) -> Segment | None:
        return next((segment for segment in self._segments if segment.is_source(station)), None)

    def _find_incoming(self, station: Station) -> Segment | None:
        return next((segment for segment in self._segments if segment.is_target(station)), None)

    def _commit(self, change: ChainChange) -> None:
        self._segments = change.apply(self._segments)
