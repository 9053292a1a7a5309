"""Error details domain model."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Details about a rejected operation, keyed by a stable error kind."""

    model_config = ConfigDict(frozen=True)

    kind: str
    reason: str
