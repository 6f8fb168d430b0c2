"""Player statistics schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class BalancePoint(BaseModel):
    """Cumulative balance after one completed session."""

    session_number: int
    session_id: str
    date: datetime
    balance: float


class PlayerStats(BaseModel):
    """Aggregate results for one player over completed sessions."""

    player_id: str
    player_name: str
    total_sessions: int = 0
    total_minutes_played: float = 0.0
    average_session: str = "0m"
    total_money_moved: float = 0.0
    current_balance: float = 0.0
    win_sessions: int = 0
    loss_sessions: int = 0
    best_session: float = 0.0
    worst_session: float = 0.0
    balance_history: list[BalancePoint] = Field(default_factory=list)
