"""Segment domain model."""

from dataclasses import dataclass

from subway_lines.domain.errors import InvalidSegmentError
from subway_lines.domain.models.station import Station


@dataclass(frozen=True)
class Segment:
    """Directed edge between two adjacent stations of a line.

    ``target`` lies ``distance`` units downstream of ``source`` with no
    station in between. Segments are never changed in place; splitting or
    merging always produces new segments.
    """

    source: Station
    target: Station
    distance: int

    def __post_init__(self) -> None:
        if isinstance(self.distance, bool) or not isinstance(self.distance, int):
            raise InvalidSegmentError(
                f"Segment distance must be an integer, got {self.distance!r}"
            )
        if self.distance <= 0:
            raise InvalidSegmentError(
                f"Segment distance must be positive, got {self.distance} "
                f"for {self.source} -> {self.target}"
            )
        if self.source == self.target:
            raise InvalidSegmentError(f"Segment cannot connect {self.source} to itself")

    def contains(self, station: Station) -> bool:
        """Check if the station is either endpoint of this segment."""
        return self.is_source(station) or self.is_target(station)

    def is_source(self, station: Station) -> bool:
        return self.source == station

    def is_target(self, station: Station) -> bool:
        return self.target == station

    def distance_at_least(self, distance: int) -> bool:
        """Check if this segment is at least ``distance`` long."""
        return self.distance >= distance

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} ({self.distance})"
