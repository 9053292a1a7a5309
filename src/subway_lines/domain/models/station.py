"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents a subway station, identified by its name."""

    name: str

    def __str__(self) -> str:
        return self.name
