"""Game session lifecycle: start, track chips and loans, complete, delete."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping

from app.config import settings
from app.schemas.session import (
    BorrowTransaction,
    Chip,
    GameSession,
    PlayerRef,
    SessionPlayer,
    parse_party,
)
from app.services.codec import session_from_row, session_to_row
from app.services.common import SupabaseService
from app.services.player_service import PlayerService
from app.services.settings_service import SettingsService
from app.services.settlement import compute_session_deltas, final_chips_from_counts
from app.utils.errors import InvalidInputError, NotFoundError, SessionCompletedError
from app.utils.time import now_utc
from supabase import Client

logger = logging.getLogger(__name__)


def split_chips(chips: list[Chip], player_count: int) -> list[Chip]:
    """Divide a table-wide chip set evenly between players, rounding down."""
    if player_count < 1:
        return [chip.model_copy() for chip in chips]
    return [chip.model_copy(update={"count": chip.count // player_count}) for chip in chips]


class SessionService:
    """Session persistence plus the balance side effects of completion."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)
        self.players = PlayerService(client)
        self.settings = SettingsService(client)

    def list_sessions(self, completed: bool | None = None) -> list[GameSession]:
        """Return sessions newest first, optionally filtered by completion."""
        filters = {"completed": completed} if completed is not None else None
        rows = self.db.select_many(
            "game_sessions",
            filters=filters,
            order_by="date",
            descending=True,
        )
        return [session_from_row(row) for row in rows]

    def get_session(self, session_id: str) -> GameSession:
        row = self.db.select_one("game_sessions", {"id": session_id}, not_found_label="Session")
        return session_from_row(row)

    def session_deltas(self, session: GameSession) -> dict[str, float]:
        """Return the monetary result per player for a session's current state."""
        return compute_session_deltas(
            session.starting_chips,
            session.conversion_rate,
            session.players,
            session.borrow_transactions,
        )

    def start_session(
        self,
        player_ids: list[str],
        chips: list[Chip] | None = None,
        conversion_rate: float | None = None,
    ) -> GameSession:
        """Open a new active session for the given players.

        Without explicit chips the default chip set is split between players.
        Every player starts with the same stack.
        """
        seated = list(dict.fromkeys(player_ids))
        if len(seated) < settings.min_session_players:
            raise InvalidInputError(
                f"Please select at least {settings.min_session_players} players"
            )

        known = {player.id for player in self.players.list_players()}
        missing = [player_id for player_id in seated if player_id not in known]
        if missing:
            raise NotFoundError(f"Player {missing[0]}")

        if chips is None or conversion_rate is None:
            defaults = self.settings.get_settings()
            if chips is None:
                chips = split_chips(defaults.chips, len(seated))
            if conversion_rate is None:
                conversion_rate = defaults.default_conversion_rate

        starting_chips = sum(chip.value * chip.count for chip in chips)
        initial_counts = {chip.id: chip.count for chip in chips}
        session = GameSession(
            id=str(uuid.uuid4()),
            date=now_utc(),
            conversion_rate=conversion_rate,
            starting_chips=starting_chips,
            chips=chips,
            players=[
                SessionPlayer(
                    player_id=player_id,
                    starting_chips=starting_chips,
                    final_chips=starting_chips,
                    chip_counts=dict(initial_counts),
                )
                for player_id in seated
            ],
        )
        self._save(session)
        logger.info(
            "Started session %s with %s players at %s chips each",
            session.id,
            len(seated),
            starting_chips,
        )
        return session

    def set_final_chips(self, session_id: str, player_id: str, final_chips: int) -> GameSession:
        """Record a player's counted chip total."""
        session = self._get_active(session_id)
        self._seated(session, player_id).final_chips = final_chips
        return self._save(session)

    def set_chip_count(
        self,
        session_id: str,
        player_id: str,
        chip_id: str,
        count: int,
    ) -> GameSession:
        """Record one denomination count and re-derive the player's total."""
        session = self._get_active(session_id)
        if not any(chip.id == chip_id for chip in session.chips):
            raise NotFoundError("Chip")

        session_player = self._seated(session, player_id)
        counts = dict(session_player.chip_counts or {})
        counts[chip_id] = count
        session_player.chip_counts = counts
        session_player.final_chips = final_chips_from_counts(counts, session.chips)
        return self._save(session)

    def add_loan(self, session_id: str, borrower: str, lender: str, amount: int) -> GameSession:
        """Record chips handed from ``lender`` to ``borrower`` mid-session."""
        session = self._get_active(session_id)
        if amount < 1:
            raise InvalidInputError("Loan amount must be at least 1 chip")

        borrower_party = parse_party(borrower)
        lender_party = parse_party(lender)
        if borrower_party == lender_party:
            raise InvalidInputError("Borrower and lender must be different parties")
        for party in (borrower_party, lender_party):
            if isinstance(party, PlayerRef) and session.find_player(party.player_id) is None:
                raise InvalidInputError(f"Player {party.player_id} is not in this session")

        session.borrow_transactions.append(
            BorrowTransaction(
                id=str(uuid.uuid4()),
                borrower=borrower_party,
                lender=lender_party,
                amount=amount,
                timestamp=now_utc(),
            )
        )
        return self._save(session)

    def remove_loan(self, session_id: str, loan_id: str) -> GameSession:
        session = self._get_active(session_id)
        remaining = [loan for loan in session.borrow_transactions if loan.id != loan_id]
        if len(remaining) == len(session.borrow_transactions):
            raise NotFoundError("Loan")
        session.borrow_transactions = remaining
        return self._save(session)

    def complete_session(
        self,
        session_id: str,
        final_chips: Mapping[str, int] | None = None,
    ) -> tuple[GameSession, dict[str, float]]:
        """Finalize a session and add its deltas to player balances.

        ``final_chips`` overrides counted totals for the listed players.
        """
        session = self._get_active(session_id)
        for player_id, chips in (final_chips or {}).items():
            if chips < 0:
                raise InvalidInputError("Final chips cannot be negative")
            self._seated(session, player_id).final_chips = chips

        deltas = self.session_deltas(session)
        self.players.apply_deltas(deltas)

        session.completed = True
        session.end_time = now_utc()
        self._save(session)
        logger.info("Completed session %s for %s players", session.id, len(deltas))
        return session, deltas

    def delete_session(self, session_id: str) -> dict[str, float]:
        """Delete a session, reversing its balance effect when completed.

        Returns the deltas that were subtracted (empty for an active session).
        """
        session = self.get_session(session_id)
        reversed_deltas: dict[str, float] = {}
        if session.completed:
            reversed_deltas = self.session_deltas(session)
            self.players.apply_deltas(reversed_deltas, reverse=True)

        self.db.delete("game_sessions", {"id": session_id})
        logger.info(
            "Deleted %s session %s",
            "completed" if session.completed else "active",
            session_id,
        )
        return reversed_deltas

    def _get_active(self, session_id: str) -> GameSession:
        session = self.get_session(session_id)
        if session.completed:
            raise SessionCompletedError()
        return session

    @staticmethod
    def _seated(session: GameSession, player_id: str) -> SessionPlayer:
        session_player = session.find_player(player_id)
        if session_player is None:
            raise NotFoundError("Session player")
        return session_player

    def _save(self, session: GameSession) -> GameSession:
        row = session_to_row(session)
        row["updated_at"] = now_utc().isoformat()
        self.db.upsert_one("game_sessions", row)
        return session
