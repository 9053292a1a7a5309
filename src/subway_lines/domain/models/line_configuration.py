"""Line configuration domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SegmentConfiguration:
    """A configured segment, given by station names."""

    source: str
    target: str
    distance: int


@dataclass(frozen=True)
class LineConfiguration:
    """Configuration for a line to seed, with its segments in insertion order."""

    name: str
    color: str
    segments: list[SegmentConfiguration]
