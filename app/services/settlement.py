"""Session delta and minimal debt settlement calculations.

Everything here is pure: no I/O, no shared state, and no validation. Callers
pass a snapshot loaded from the store and persist whatever they derive from
the result.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from app.schemas.player import Player
from app.schemas.session import BorrowTransaction, Chip, SessionPlayer
from app.schemas.settlement import SettlementTransaction

SETTLEMENT_EPSILON = 0.01


def loan_correction(player_id: str, loans: Iterable[BorrowTransaction]) -> int:
    """Return chips borrowed minus chips lent by ``player_id``.

    Borrowed chips inflate a final stack without being winnings, lent chips
    deflate it. The bank never matches a player id.
    """
    correction = 0
    for loan in loans:
        if loan.borrower.is_player(player_id):
            correction += loan.amount
        if loan.lender.is_player(player_id):
            correction -= loan.amount
    return correction


def compute_session_deltas(
    starting_chips: int,
    conversion_rate: float,
    session_players: Iterable[SessionPlayer],
    loans: Iterable[BorrowTransaction],
) -> dict[str, float]:
    """Return each session player's monetary result, keyed by player id.

    ``((final - starting) - loan_correction) * conversion_rate``; no rounding.
    """
    loans = list(loans)
    deltas: dict[str, float] = {}
    for session_player in session_players:
        correction = loan_correction(session_player.player_id, loans)
        chip_delta = (session_player.final_chips - starting_chips) - correction
        deltas[session_player.player_id] = chip_delta * conversion_rate
    return deltas


def final_chips_from_counts(chip_counts: Mapping[str, int], chips: Iterable[Chip]) -> int:
    """Return the chip total for per-denomination counts."""
    values = {chip.id: chip.value for chip in chips}
    return sum(count * values[chip_id] for chip_id, count in chip_counts.items() if chip_id in values)


def compute_minimal_settlement(players: Iterable[Player]) -> list[SettlementTransaction]:
    """Return payments that bring every balance within one cent of zero.

    Greedy: the largest debtor repeatedly pays the largest creditor, so each
    payment settles at least one side and ``N`` unsettled players need at most
    ``N - 1`` payments. Ties on equal balances go to the smaller player id.
    """
    working = [
        [str(player.id), float(player.balance)]
        for player in players
        if abs(player.balance) >= SETTLEMENT_EPSILON
    ]

    transactions: list[SettlementTransaction] = []
    while working:
        debtor = min(working, key=lambda entry: (entry[1], entry[0]))
        creditor = min(working, key=lambda entry: (-entry[1], entry[0]))

        if abs(debtor[1]) < SETTLEMENT_EPSILON and creditor[1] < SETTLEMENT_EPSILON:
            break
        # Only one side left unsettled: nobody to pay or be paid.
        if debtor[1] >= 0 or creditor[1] <= 0:
            break

        amount = round(min(abs(debtor[1]), creditor[1]), 2)
        if amount < SETTLEMENT_EPSILON:
            break

        transactions.append(
            SettlementTransaction(
                from_player_id=debtor[0],
                to_player_id=creditor[0],
                amount=amount,
            )
        )
        debtor[1] += amount
        creditor[1] -= amount
        working = [entry for entry in working if abs(entry[1]) >= SETTLEMENT_EPSILON]

    return transactions
