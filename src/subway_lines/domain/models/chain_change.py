"""Chain change domain model."""

from dataclasses import dataclass

from subway_lines.domain.models.segment import Segment


@dataclass(frozen=True)
class ChainChange:
    """Segments a chain mutation added and removed.

    Callers persist ``removed`` as deletions and ``added`` as insertions;
    no other stored segment is touched by the mutation.
    """

    added: tuple[Segment, ...] = ()
    removed: tuple[Segment, ...] = ()

    def apply(self, segments: frozenset[Segment]) -> frozenset[Segment]:
        """Return the segment set that results from applying this change."""
        return (segments - frozenset(self.removed)) | frozenset(self.added)

    def is_empty(self) -> bool:
        return not self.added and not self.removed
