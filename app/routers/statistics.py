"""Statistics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_db_client
from app.services.statistics_service import StatisticsService
from supabase import Client

router = APIRouter()


@router.get("")
def get_statistics(client: Client = Depends(get_db_client)) -> dict:
    """Return per-player statistics, most active players first."""
    return {"players": StatisticsService(client).player_statistics()}
