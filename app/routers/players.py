"""Player endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.dependencies import get_db_client
from app.schemas.player import PlayerCreate, PlayerRename
from app.services.player_service import PlayerService
from supabase import Client

router = APIRouter()


@router.get("")
def list_players(client: Client = Depends(get_db_client)) -> dict:
    """List all players with their balances."""
    return {"players": PlayerService(client).list_players()}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_player(payload: PlayerCreate, client: Client = Depends(get_db_client)) -> dict:
    """Create a player with a zero balance."""
    return {"player": PlayerService(client).create_player(payload.name)}


@router.patch("/{player_id}")
def rename_player(
    player_id: str,
    payload: PlayerRename,
    client: Client = Depends(get_db_client),
) -> dict:
    """Rename a player. Balances only move through sessions."""
    return {"player": PlayerService(client).rename_player(player_id, payload.name)}


@router.delete("/{player_id}")
def delete_player(player_id: str, client: Client = Depends(get_db_client)) -> dict:
    """Delete a player whose balance is settled."""
    PlayerService(client).delete_player(player_id)
    return {"deleted": True}
