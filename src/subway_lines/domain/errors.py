"""Domain errors for subway line maintenance.

Every error carries a stable ``kind`` so outer layers can map it to their own
transport (HTTP status, exit code, ...) without matching on message text.
"""

from typing import ClassVar

from subway_lines.domain.models.error_details import ErrorDetails


class SubwayError(ValueError):
    """Base class for all subway domain errors."""

    kind: ClassVar[str] = "SubwayError"

    def to_details(self) -> ErrorDetails:
        """Describe this error as an ErrorDetails model."""
        return ErrorDetails(kind=self.kind, reason=str(self))


class ChainError(SubwayError):
    """Base class for errors raised by the segment-chain engine."""

    kind: ClassVar[str] = "ChainError"


class InvalidSegmentError(ChainError):
    """Segment with non-positive distance or identical endpoints."""

    kind: ClassVar[str] = "InvalidSegment"


class DuplicateSegmentError(ChainError):
    """Both endpoints of a new segment already belong to the chain."""

    kind: ClassVar[str] = "DuplicateSegment"


class DisconnectedSegmentError(ChainError):
    """Neither endpoint of a new segment belongs to the chain."""

    kind: ClassVar[str] = "DisconnectedSegment"


class DistanceTooLongError(ChainError):
    """Split distance is not shorter than the segment being split."""

    kind: ClassVar[str] = "DistanceTooLong"


class StationNotFoundError(ChainError):
    """Station is not part of the chain."""

    kind: ClassVar[str] = "StationNotFound"


class InconsistentChainError(ChainError):
    """Segments do not form a single simple path."""

    kind: ClassVar[str] = "InconsistentChain"


class InvalidLineError(SubwayError):
    """Line name or color is not acceptable."""

    kind: ClassVar[str] = "InvalidLine"


class LineNotFoundError(SubwayError):
    """No line is stored under the given identifier."""

    kind: ClassVar[str] = "LineNotFound"


class DuplicateLineError(SubwayError):
    """A line with the same name is already registered."""

    kind: ClassVar[str] = "DuplicateLine"
