"""Service package exports with lazy loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "PlayerService": "app.services.player_service",
    "SessionService": "app.services.session_service",
    "SettingsService": "app.services.settings_service",
    "SettlementService": "app.services.settlement_service",
    "StatisticsService": "app.services.statistics_service",
    "SupabaseService": "app.services.common",
    "compute_minimal_settlement": "app.services.settlement",
    "compute_session_deltas": "app.services.settlement",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
