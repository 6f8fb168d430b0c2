"""Player statistics tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from app.schemas.player import Player
from app.schemas.session import BorrowTransaction, GameSession, SessionPlayer
from app.services.statistics_service import compute_player_stats

START = datetime(2026, 1, 10, 19, 0, tzinfo=UTC)


def _session(
    session_id: str,
    day: int,
    finals: dict[str, int],
    minutes: int | None = 120,
    completed: bool = True,
    loans: list[BorrowTransaction] | None = None,
) -> GameSession:
    date = START + timedelta(days=day)
    return GameSession(
        id=session_id,
        date=date,
        end_time=date + timedelta(minutes=minutes) if minutes is not None else None,
        conversion_rate=0.1,
        starting_chips=100,
        players=[
            SessionPlayer(player_id=player_id, starting_chips=100, final_chips=final)
            for player_id, final in finals.items()
        ],
        borrow_transactions=loans or [],
        completed=completed,
    )


def test_stats_for_player_without_sessions() -> None:
    stats = compute_player_stats(Player(id="p1", name="Amy"), [])

    assert stats.total_sessions == 0
    assert stats.balance_history == []
    assert stats.average_session == "0m"


def test_stats_replay_sessions_in_date_order() -> None:
    """History is cumulative and oldest first regardless of input order."""
    sessions = [
        _session("s3", 3, {"p1": 100, "p2": 100}, minutes=None),
        _session("s1", 1, {"p1": 150, "p2": 50}, minutes=90),
        _session("s2", 2, {"p1": 80, "p2": 120}, minutes=150),
        _session("active", 4, {"p1": 1000, "p2": 0}, completed=False),
        _session("other", 5, {"p3": 200, "p4": 0}),
    ]

    stats = compute_player_stats(Player(id="p1", name="Amy"), sessions)

    assert stats.total_sessions == 3
    assert [point.session_id for point in stats.balance_history] == ["s1", "s2", "s3"]
    assert [point.balance for point in stats.balance_history] == pytest.approx([5.0, 3.0, 3.0])
    assert stats.current_balance == pytest.approx(3.0)
    assert stats.win_sessions == 1
    assert stats.loss_sessions == 1
    assert stats.best_session == pytest.approx(5.0)
    assert stats.worst_session == pytest.approx(-2.0)
    assert stats.total_money_moved == pytest.approx(7.0)
    assert stats.total_minutes_played == pytest.approx(240.0)
    assert stats.average_session == "1h 20m"


def test_stats_back_out_loans() -> None:
    loan = BorrowTransaction(
        id="l1", borrower="p1", lender="bank", amount=30, timestamp=START
    )
    sessions = [_session("s1", 1, {"p1": 150, "p2": 80}, loans=[loan])]

    stats = compute_player_stats(Player(id="p1", name="Amy"), sessions)

    assert stats.current_balance == pytest.approx(2.0)
