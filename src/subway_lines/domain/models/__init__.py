"""Domain models for subway lines."""

from subway_lines.domain.models.chain import Chain
from subway_lines.domain.models.chain_change import ChainChange
from subway_lines.domain.models.error_details import ErrorDetails
from subway_lines.domain.models.line import Line
from subway_lines.domain.models.line_configuration import (
    LineConfiguration,
    SegmentConfiguration,
)
from subway_lines.domain.models.segment import Segment
from subway_lines.domain.models.station import Station

__all__ = [
    "Chain",
    "ChainChange",
    "ErrorDetails",
    "Line",
    "LineConfiguration",
    "Segment",
    "SegmentConfiguration",
    "Station",
]
