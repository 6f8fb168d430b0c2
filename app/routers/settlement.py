"""Settlement endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_db_client
from app.schemas.settlement import SettlementResponse
from app.services.settlement_service import SettlementService
from supabase import Client

router = APIRouter()


@router.get("", response_model=SettlementResponse)
def get_settlement(client: Client = Depends(get_db_client)) -> SettlementResponse:
    """Return the minimal set of payments that settles all balances."""
    return SettlementService(client).suggest()
