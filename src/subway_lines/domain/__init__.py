"""Domain layer - core business logic and models."""

from subway_lines.domain.models import (
    Chain,
    ChainChange,
    Line,
    Segment,
    Station,
)
from subway_lines.domain.ports import LineRepository

__all__ = [
    "Chain",
    "ChainChange",
    "Line",
    "LineRepository",
    "Segment",
    "Station",
]
