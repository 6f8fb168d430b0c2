"""API router package."""

from app.routers import game_settings, players, sessions, settlement, statistics

__all__ = [
    "game_settings",
    "players",
    "sessions",
    "settlement",
    "statistics",
]
