"""Game session, chip and loan schemas."""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

BANK_SENTINEL = "bank"


class Bank(BaseModel):
    """The external chip reserve. Never carries a balance of its own."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bank"] = "bank"

    def is_player(self, player_id: str) -> bool:
        return False


class PlayerRef(BaseModel):
    """A tracked player taking part in a loan."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["player"] = "player"
    player_id: str

    def is_player(self, player_id: str) -> bool:
        return self.player_id == player_id


def parse_party(value: Any) -> Any:
    """Accept the wire form (``"bank"`` or a player id) for a loan party."""
    if isinstance(value, str):
        if value == BANK_SENTINEL:
            return Bank()
        return PlayerRef(player_id=value)
    return value


def format_party(party: Bank | PlayerRef) -> str:
    """Return the wire form of a loan party."""
    if isinstance(party, Bank):
        return BANK_SENTINEL
    return party.player_id


Party = Annotated[
    Union[Bank, PlayerRef],
    BeforeValidator(parse_party),
    PlainSerializer(format_party, return_type=str),
]


class Chip(BaseModel):
    """One chip denomination available in a session."""

    id: str
    label: str
    color: str = "#FFFFFF"
    value: int = Field(..., ge=1)
    count: int = Field(0, ge=0)


class SessionPlayer(BaseModel):
    """A player's chip position within one session."""

    player_id: str
    starting_chips: int
    final_chips: int
    chip_counts: dict[str, int] | None = None


class BorrowTransaction(BaseModel):
    """Chips moved mid-session between a player and another party."""

    id: str
    borrower: Party
    lender: Party
    amount: int
    timestamp: datetime


class GameSession(BaseModel):
    """A poker night, active until completed."""

    id: str
    date: datetime
    end_time: datetime | None = None
    conversion_rate: float
    starting_chips: int
    chips: list[Chip] = Field(default_factory=list)
    players: list[SessionPlayer]
    borrow_transactions: list[BorrowTransaction] = Field(default_factory=list)
    completed: bool = False

    def find_player(self, player_id: str) -> SessionPlayer | None:
        for session_player in self.players:
            if session_player.player_id == player_id:
                return session_player
        return None


class SessionStart(BaseModel):
    """Request body for starting a session."""

    player_ids: list[str] = Field(..., min_length=1)
    chips: list[Chip] | None = None
    conversion_rate: float | None = Field(None, gt=0)


class FinalChipsUpdate(BaseModel):
    """Request body for setting a player's final chip total."""

    final_chips: int = Field(..., ge=0)


class ChipCountUpdate(BaseModel):
    """Request body for setting one denomination count."""

    count: int = Field(..., ge=0)


class LoanCreate(BaseModel):
    """Request body for recording a chip loan."""

    borrower: str = Field(..., min_length=1)
    lender: str = Field(..., min_length=1)
    amount: int = Field(..., ge=1)


class SessionComplete(BaseModel):
    """Request body for completing a session."""

    final_chips: dict[str, int] | None = None
