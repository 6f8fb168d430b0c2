"""Game defaults endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_db_client
from app.schemas.settings import GameSettings
from app.services.settings_service import SettingsService
from supabase import Client

router = APIRouter()


@router.get("")
def get_settings(client: Client = Depends(get_db_client)) -> dict:
    return {"settings": SettingsService(client).get_settings()}


@router.put("")
def update_settings(payload: GameSettings, client: Client = Depends(get_db_client)) -> dict:
    """Replace the default conversion rate and chip set."""
    return {"settings": SettingsService(client).update_settings(payload)}


@router.post("/clear")
def clear_all_data(client: Client = Depends(get_db_client)) -> dict:
    """Delete every player and session."""
    SettingsService(client).clear_all_data()
    return {"cleared": True}
