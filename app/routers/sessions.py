"""Game session endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_db_client
from app.schemas.session import (
    ChipCountUpdate,
    FinalChipsUpdate,
    LoanCreate,
    SessionComplete,
    SessionStart,
)
from app.services.session_service import SessionService
from supabase import Client

router = APIRouter()


@router.get("")
def list_sessions(
    completed: bool | None = Query(default=None),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return sessions newest first."""
    return {"sessions": SessionService(client).list_sessions(completed=completed)}


@router.post("", status_code=status.HTTP_201_CREATED)
def start_session(payload: SessionStart, client: Client = Depends(get_db_client)) -> dict:
    """Start a new active session."""
    session = SessionService(client).start_session(
        player_ids=payload.player_ids,
        chips=payload.chips,
        conversion_rate=payload.conversion_rate,
    )
    return {"session": session}


@router.get("/{session_id}")
def get_session(session_id: str, client: Client = Depends(get_db_client)) -> dict:
    return {"session": SessionService(client).get_session(session_id)}


@router.get("/{session_id}/deltas")
def get_session_deltas(session_id: str, client: Client = Depends(get_db_client)) -> dict:
    """Preview each player's monetary result for the session as it stands."""
    service = SessionService(client)
    session = service.get_session(session_id)
    return {"deltas": service.session_deltas(session)}


@router.put("/{session_id}/players/{player_id}/chips")
def set_final_chips(
    session_id: str,
    player_id: str,
    payload: FinalChipsUpdate,
    client: Client = Depends(get_db_client),
) -> dict:
    """Set a player's counted chip total."""
    session = SessionService(client).set_final_chips(session_id, player_id, payload.final_chips)
    return {"session": session}


@router.put("/{session_id}/players/{player_id}/chip-counts/{chip_id}")
def set_chip_count(
    session_id: str,
    player_id: str,
    chip_id: str,
    payload: ChipCountUpdate,
    client: Client = Depends(get_db_client),
) -> dict:
    """Set one denomination count for a player."""
    session = SessionService(client).set_chip_count(session_id, player_id, chip_id, payload.count)
    return {"session": session}


@router.post("/{session_id}/loans", status_code=status.HTTP_201_CREATED)
def add_loan(
    session_id: str,
    payload: LoanCreate,
    client: Client = Depends(get_db_client),
) -> dict:
    """Record a chip loan between players or with the bank."""
    session = SessionService(client).add_loan(
        session_id,
        borrower=payload.borrower,
        lender=payload.lender,
        amount=payload.amount,
    )
    return {"session": session}


@router.delete("/{session_id}/loans/{loan_id}")
def remove_loan(session_id: str, loan_id: str, client: Client = Depends(get_db_client)) -> dict:
    return {"session": SessionService(client).remove_loan(session_id, loan_id)}


@router.post("/{session_id}/complete")
def complete_session(
    session_id: str,
    payload: SessionComplete | None = None,
    client: Client = Depends(get_db_client),
) -> dict:
    """Complete a session and apply its results to player balances."""
    session, deltas = SessionService(client).complete_session(
        session_id,
        final_chips=payload.final_chips if payload else None,
    )
    return {"session": session, "deltas": deltas}


@router.delete("/{session_id}")
def delete_session(session_id: str, client: Client = Depends(get_db_client)) -> dict:
    """Delete a session; a completed one has its balance changes reversed."""
    reversed_deltas = SessionService(client).delete_session(session_id)
    return {"deleted": True, "reversed_deltas": reversed_deltas}
