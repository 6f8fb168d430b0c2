"""Per-player statistics over completed sessions."""

from __future__ import annotations

from collections.abc import Iterable

from app.schemas.player import Player
from app.schemas.session import GameSession
from app.schemas.statistics import BalancePoint, PlayerStats
from app.services.player_service import PlayerService
from app.services.session_service import SessionService
from app.services.settlement import compute_session_deltas
from app.utils.time import format_duration, minutes_between, parse_timestamp
from supabase import Client


def compute_player_stats(player: Player, sessions: Iterable[GameSession]) -> PlayerStats:
    """Aggregate a player's results over the completed sessions they played.

    Sessions are replayed oldest first to build the cumulative balance history.
    """
    played = sorted(
        (
            session
            for session in sessions
            if session.completed and session.find_player(player.id) is not None
        ),
        key=lambda session: parse_timestamp(session.date),
    )

    stats = PlayerStats(player_id=player.id, player_name=player.name)
    cumulative = 0.0
    for index, session in enumerate(played, start=1):
        delta = compute_session_deltas(
            session.starting_chips,
            session.conversion_rate,
            [session.find_player(player.id)],
            session.borrow_transactions,
        )[player.id]

        cumulative += delta
        stats.balance_history.append(
            BalancePoint(
                session_number=index,
                session_id=session.id,
                date=session.date,
                balance=cumulative,
            )
        )
        stats.total_money_moved += abs(delta)
        if delta > 0:
            stats.win_sessions += 1
        if delta < 0:
            stats.loss_sessions += 1
        stats.best_session = max(stats.best_session, delta)
        stats.worst_session = min(stats.worst_session, delta)
        if session.end_time:
            stats.total_minutes_played += minutes_between(session.date, session.end_time)

    stats.total_sessions = len(played)
    stats.current_balance = cumulative
    if played:
        stats.average_session = format_duration(stats.total_minutes_played / len(played))
    return stats


class StatisticsService:
    """Load players and sessions and compute statistics for everyone who played."""

    def __init__(self, client: Client) -> None:
        self.players = PlayerService(client)
        self.sessions = SessionService(client)

    def player_statistics(self) -> list[PlayerStats]:
        completed = self.sessions.list_sessions(completed=True)
        stats = [
            compute_player_stats(player, completed)
            for player in self.players.list_players()
        ]
        stats = [entry for entry in stats if entry.total_sessions > 0]
        stats.sort(key=lambda entry: (-entry.total_sessions, entry.player_name))
        return stats
