"""Game defaults and data reset service."""

from __future__ import annotations

import logging

from app.config import settings
from app.schemas.session import Chip
from app.schemas.settings import GameSettings
from app.services.codec import settings_from_row, settings_to_row
from app.services.common import SupabaseService
from supabase import Client

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = "default"
DEFAULT_CHIPS = [
    Chip(id="chip-1", label="1", color="#8B4513", value=1, count=20),
    Chip(id="chip-2", label="5", color="#FFFFFF", value=5, count=20),
    Chip(id="chip-3", label="25", color="#2E7D32", value=25, count=20),
    Chip(id="chip-4", label="50", color="#1976D2", value=50, count=20),
    Chip(id="chip-5", label="100", color="#FBC02D", value=100, count=20),
]


class SettingsService:
    """Read and write the default conversion rate and chip set."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)

    def get_settings(self) -> GameSettings:
        """Return stored defaults, or the built-in ones when none are saved."""
        rows = self.db.select_many("settings", filters={"id": SETTINGS_ROW_ID})
        if not rows:
            return GameSettings(
                default_conversion_rate=settings.default_conversion_rate,
                chips=[chip.model_copy() for chip in DEFAULT_CHIPS],
            )
        return settings_from_row(rows[0])

    def update_settings(self, game_settings: GameSettings) -> GameSettings:
        row = self.db.upsert_one("settings", settings_to_row(game_settings, SETTINGS_ROW_ID))
        return settings_from_row(row)

    def clear_all_data(self) -> None:
        """Delete every player and session. Defaults are kept."""
        sessions = self.db.delete_all("game_sessions")
        players = self.db.delete_all("players")
        logger.warning("Cleared %s sessions and %s players", len(sessions), len(players))
