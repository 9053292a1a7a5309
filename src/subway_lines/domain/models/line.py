"""Line domain model."""

from dataclasses import dataclass
from typing import ClassVar

from subway_lines.domain.errors import InvalidLineError


@dataclass(frozen=True)
class Line:
    """Represents a subway line. Its stations are kept separately as segments."""

    MIN_NAME_LENGTH: ClassVar[int] = 3
    MAX_NAME_LENGTH: ClassVar[int] = 10

    id: int
    name: str
    color: str

    def __post_init__(self) -> None:
        if not self.MIN_NAME_LENGTH <= len(self.name) <= self.MAX_NAME_LENGTH:
            raise InvalidLineError(
                f"Line name must be between {self.MIN_NAME_LENGTH} and "
                f"{self.MAX_NAME_LENGTH} characters, got {self.name!r}"
            )
        if not self.color.strip():
            raise InvalidLineError(f"Line {self.name!r} needs a color")
