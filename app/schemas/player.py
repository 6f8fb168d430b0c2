"""Player schemas."""

from pydantic import BaseModel, Field


class Player(BaseModel):
    """A player with a balance accumulated across sessions."""

    id: str
    name: str
    balance: float = 0.0


class PlayerCreate(BaseModel):
    """Request body for creating a player."""

    name: str = Field(..., min_length=1, max_length=50)


class PlayerRename(BaseModel):
    """Request body for renaming a player."""

    name: str = Field(..., min_length=1, max_length=50)
