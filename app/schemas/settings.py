"""Game defaults schemas."""

from pydantic import BaseModel, Field

from app.schemas.session import Chip


class GameSettings(BaseModel):
    """Defaults applied when a new session starts."""

    default_conversion_rate: float = Field(..., gt=0)
    chips: list[Chip] = Field(default_factory=list)
