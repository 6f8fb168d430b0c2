"""Row <-> record conversion for the Supabase tables.

Nested session structures (chips, seated players, loans) live in JSON text
columns; this module is the only place that encodes or decodes them.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from app.schemas.player import Player
from app.schemas.session import BorrowTransaction, Chip, GameSession, SessionPlayer
from app.schemas.settings import GameSettings

_CHIPS = TypeAdapter(list[Chip])
_SESSION_PLAYERS = TypeAdapter(list[SessionPlayer])
_LOANS = TypeAdapter(list[BorrowTransaction])


def _encode(adapter: TypeAdapter, value: Any) -> str:
    return adapter.dump_json(value).decode("utf-8")


def _decode(adapter: TypeAdapter, raw: Any) -> list:
    # Text columns hold JSON strings, jsonb columns come back decoded.
    if raw is None or raw == "":
        return []
    if isinstance(raw, (str, bytes)):
        return adapter.validate_json(raw)
    return adapter.validate_python(raw)


def player_from_row(row: dict[str, Any]) -> Player:
    return Player(id=str(row["id"]), name=row["name"], balance=float(row.get("balance") or 0))


def session_from_row(row: dict[str, Any]) -> GameSession:
    """Decode a ``game_sessions`` row."""
    return GameSession(
        id=str(row["id"]),
        date=row["date"],
        end_time=row.get("end_time"),
        conversion_rate=float(row["conversion_rate"]),
        starting_chips=int(row["starting_chips"]),
        chips=_decode(_CHIPS, row.get("chips")),
        players=_decode(_SESSION_PLAYERS, row.get("players")),
        borrow_transactions=_decode(_LOANS, row.get("borrow_transactions")),
        completed=bool(row.get("completed")),
    )


def session_to_row(session: GameSession) -> dict[str, Any]:
    """Encode a session for the ``game_sessions`` table."""
    return {
        "id": session.id,
        "date": session.date.isoformat(),
        "end_time": session.end_time.isoformat() if session.end_time else None,
        "conversion_rate": session.conversion_rate,
        "starting_chips": session.starting_chips,
        "chips": _encode(_CHIPS, session.chips),
        "players": _encode(_SESSION_PLAYERS, session.players),
        "borrow_transactions": (
            _encode(_LOANS, session.borrow_transactions) if session.borrow_transactions else None
        ),
        "completed": session.completed,
    }


def settings_from_row(row: dict[str, Any]) -> GameSettings:
    return GameSettings(
        default_conversion_rate=float(row["default_conversion_rate"]),
        chips=_decode(_CHIPS, row.get("chips")),
    )


def settings_to_row(game_settings: GameSettings, row_id: str) -> dict[str, Any]:
    return {
        "id": row_id,
        "default_conversion_rate": game_settings.default_conversion_rate,
        "chips": _encode(_CHIPS, game_settings.chips),
    }
