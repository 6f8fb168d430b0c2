"""Settlement suggestions over current player balances."""

from __future__ import annotations

from app.schemas.settlement import SettlementResponse
from app.services.player_service import PlayerService
from app.services.settlement import compute_minimal_settlement
from supabase import Client


class SettlementService:
    """Build payment suggestions from the persisted player balances."""

    def __init__(self, client: Client) -> None:
        self.players = PlayerService(client)

    def suggest(self) -> SettlementResponse:
        """Return the minimal payment plan plus owed/receivable totals."""
        players = self.players.list_players()
        transactions = compute_minimal_settlement(players)
        return SettlementResponse(
            transactions=transactions,
            total_amount=round(sum(tx.amount for tx in transactions), 2),
            total_owed=round(sum(-p.balance for p in players if p.balance < 0), 2),
            total_receivable=round(sum(p.balance for p in players if p.balance > 0), 2),
        )
