"""Print current player balances and reset them all to zero."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Reset every player's balance to zero in public.players.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the current state, do not modify balances.",
    )
    return parser.parse_args()


def print_balances(title: str, players: Sequence) -> None:
    """Print balances in a readable list."""
    print(f"\n{title}:")
    for player in players:
        print(f"  {player.name}: ${player.balance:.2f}")


def main() -> None:
    """CLI entry point."""
    args = parse_args()

    from app.config import settings
    from app.services.player_service import PlayerService
    from app.services.session_service import SessionService
    from app.utils.supabase_client import SupabaseConnection

    with SupabaseConnection.from_settings(settings) as client:
        players = PlayerService(client)
        sessions = SessionService(client).list_sessions()

        print("=== CURRENT STATE ===")
        print_balances("Players", players.list_players())
        print(f"\nTotal sessions: {len(sessions)}")
        print(f"Completed: {sum(1 for session in sessions if session.completed)}")

        if args.dry_run:
            return

        print("\n=== RESETTING BALANCES TO ZERO ===")
        print_balances("Balances after reset", players.reset_balances())


if __name__ == "__main__":
    main()
