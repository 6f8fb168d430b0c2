"""Player roster and balance service."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping

from app.schemas.player import Player
from app.services.codec import player_from_row
from app.services.common import SupabaseService
from app.services.settlement import SETTLEMENT_EPSILON
from app.utils.errors import ConflictError, InvalidInputError, NotFoundError
from app.utils.time import now_utc
from supabase import Client

logger = logging.getLogger(__name__)


class PlayerService:
    """Create, rename and delete players, and move their balances."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)

    def list_players(self) -> list[Player]:
        """Return every player ordered by name."""
        rows = self.db.select_many("players", order_by="name")
        return [player_from_row(row) for row in rows]

    def get_player(self, player_id: str) -> Player:
        row = self.db.select_one("players", {"id": player_id}, not_found_label="Player")
        return player_from_row(row)

    def create_player(self, name: str) -> Player:
        """Create a player with a zero balance."""
        normalized = name.strip()
        if not normalized:
            raise InvalidInputError("Player name is required")

        row = self.db.insert_one(
            "players",
            {"id": str(uuid.uuid4()), "name": normalized, "balance": 0.0},
        )
        return player_from_row(row)

    def rename_player(self, player_id: str, name: str) -> Player:
        normalized = name.strip()
        if not normalized:
            raise InvalidInputError("Player name is required")

        rows = self.db.update(
            "players",
            {"id": player_id},
            {"name": normalized, "updated_at": now_utc().isoformat()},
        )
        if not rows:
            raise NotFoundError("Player")
        return player_from_row(rows[0])

    def delete_player(self, player_id: str) -> None:
        """Delete a player whose balance is settled."""
        player = self.get_player(player_id)
        if abs(player.balance) >= SETTLEMENT_EPSILON:
            raise ConflictError(
                f"{player.name} still has an outstanding balance of {player.balance:.2f}",
                code="BALANCE_OUTSTANDING",
            )
        self.db.delete("players", {"id": player_id})

    def apply_deltas(self, deltas: Mapping[str, float], reverse: bool = False) -> list[Player]:
        """Add session deltas to balances, or subtract them when ``reverse``."""
        players = {player.id: player for player in self.list_players()}
        updated: list[Player] = []
        for player_id, delta in deltas.items():
            player = players.get(player_id)
            if player is None:
                logger.warning("Skipping balance update for unknown player %s", player_id)
                continue

            balance = player.balance - delta if reverse else player.balance + delta
            rows = self.db.update(
                "players",
                {"id": player_id},
                {"balance": balance, "updated_at": now_utc().isoformat()},
            )
            updated.append(player_from_row(rows[0]) if rows else player.model_copy(update={"balance": balance}))
        return updated

    def reset_balances(self) -> list[Player]:
        """Zero every player's balance."""
        timestamp = now_utc().isoformat()
        players = self.list_players()
        for player in players:
            self.db.update("players", {"id": player.id}, {"balance": 0.0, "updated_at": timestamp})
        logger.info("Reset balances for %s players", len(players))
        return [player.model_copy(update={"balance": 0.0}) for player in players]
