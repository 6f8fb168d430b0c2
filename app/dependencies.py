"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Depends, Request

from app.utils.supabase_client import SupabaseConnection
from supabase import Client


def get_connection(request: Request) -> SupabaseConnection:
    """Return the connection opened by the application lifespan."""
    return request.app.state.supabase


def get_db_client(connection: SupabaseConnection = Depends(get_connection)) -> Client:
    """Return the service-role Supabase client used by backend services."""
    return connection.client
