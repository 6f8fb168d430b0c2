"""Session delta calculator tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.schemas.session import Bank, BorrowTransaction, Chip, PlayerRef, SessionPlayer
from app.services.settlement import (
    compute_session_deltas,
    final_chips_from_counts,
    loan_correction,
)

STAMP = datetime(2026, 3, 14, 20, 0, tzinfo=UTC)


def _seat(player_id: str, final_chips: int, starting_chips: int = 100) -> SessionPlayer:
    return SessionPlayer(player_id=player_id, starting_chips=starting_chips, final_chips=final_chips)


def _loan(borrower, lender, amount: int, loan_id: str = "loan-1") -> BorrowTransaction:
    return BorrowTransaction(id=loan_id, borrower=borrower, lender=lender, amount=amount, timestamp=STAMP)


def test_winnings_without_loans() -> None:
    """Without loans the delta is the chip difference times the rate."""
    deltas = compute_session_deltas(100, 0.01, [_seat("p1", 150)], [])

    assert deltas == {"p1": pytest.approx(0.5)}


def test_delta_is_exact_without_loans() -> None:
    """No correction term means exactly (final - starting) * rate."""
    seats = [_seat("p1", 173), _seat("p2", 27), _seat("p3", 100)]

    deltas = compute_session_deltas(100, 0.07, seats, [])

    assert deltas == {
        "p1": (173 - 100) * 0.07,
        "p2": (27 - 100) * 0.07,
        "p3": (100 - 100) * 0.07,
    }


def test_bank_loan_is_backed_out() -> None:
    """Chips borrowed from the bank are not winnings."""
    deltas = compute_session_deltas(100, 0.01, [_seat("p1", 150)], [_loan("p1", "bank", 20)])

    assert deltas["p1"] == pytest.approx(0.3)


def test_player_loan_shifts_both_corrections() -> None:
    """Borrower gains +X correction, lender -X, and the pair total is unchanged."""
    loans = [_loan("a", "b", 40)]

    assert loan_correction("a", loans) == 40
    assert loan_correction("b", loans) == -40

    seats = [_seat("a", 180), _seat("b", 20)]
    with_loan = compute_session_deltas(100, 1.0, seats, loans)
    without_loan = compute_session_deltas(100, 1.0, seats, [])

    assert with_loan == {"a": 40.0, "b": -40.0}
    assert sum(with_loan.values()) == sum(without_loan.values())


def test_bank_loans_do_not_conserve_value() -> None:
    """Chips entering from the bank change the players' total."""
    seats = [_seat("a", 170), _seat("b", 50)]

    deltas = compute_session_deltas(100, 1.0, seats, [_loan("a", "bank", 20)])

    assert deltas == {"a": 50.0, "b": -50.0}
    assert sum(compute_session_deltas(100, 1.0, seats, []).values()) == 20.0


def test_parties_accept_wire_and_tagged_forms() -> None:
    """``"bank"`` parses to the bank, anything else to a player reference."""
    loan = _loan("p1", "bank", 5)

    assert loan.borrower == PlayerRef(player_id="p1")
    assert loan.lender == Bank()
    assert loan.model_dump(mode="json")["lender"] == "bank"
    assert _loan(PlayerRef(player_id="p1"), Bank(), 5) == loan


def test_loans_from_other_players_are_ignored() -> None:
    """Only loans naming the player affect their correction."""
    loans = [_loan("x", "y", 15, "l1"), _loan("bank", "p1", 10, "l2")]

    assert loan_correction("p1", loans) == -10
    assert loan_correction("bank", loans) == 0


def test_reapplying_deltas_in_reverse_restores_balances() -> None:
    """Subtracting recomputed deltas undoes adding them."""
    seats = [_seat("a", 233), _seat("b", 12), _seat("c", 55)]
    loans = [_loan("b", "a", 30, "l1"), _loan("c", "bank", 25, "l2")]
    balances = {"a": 12.34, "b": -7.5, "c": 0.0}

    applied = {
        player_id: balance + compute_session_deltas(100, 0.05, seats, loans)[player_id]
        for player_id, balance in balances.items()
    }
    restored = {
        player_id: balance - compute_session_deltas(100, 0.05, seats, loans)[player_id]
        for player_id, balance in applied.items()
    }

    assert restored == pytest.approx(balances)


def test_final_chips_from_counts() -> None:
    """Counts are weighted by denomination value; unknown chips are ignored."""
    chips = [
        Chip(id="white", label="1", value=1, count=20),
        Chip(id="red", label="5", value=5, count=20),
        Chip(id="green", label="25", value=25, count=10),
    ]

    total = final_chips_from_counts({"white": 7, "red": 3, "green": 2, "ghost": 99}, chips)

    assert total == 7 + 15 + 50
