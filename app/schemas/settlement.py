"""Settlement schemas."""

from pydantic import BaseModel, Field


class SettlementTransaction(BaseModel):
    """One suggested payment between two players."""

    from_player_id: str
    to_player_id: str
    amount: float


class SettlementResponse(BaseModel):
    """Minimal settlement plan with balance totals."""

    transactions: list[SettlementTransaction] = Field(default_factory=list)
    total_amount: float = 0.0
    total_owed: float = 0.0
    total_receivable: float = 0.0
