"""Pytest fixtures for backend tests."""

from __future__ import annotations

import os
from collections import defaultdict
from typing import Any

import pytest
from fastapi.testclient import TestClient


def _set_default_env() -> None:
    os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
    os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-key")


_set_default_env()


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]]) -> None:
        self.data = data


class FakeQuery:
    """Just enough of the PostgREST request builder for the services."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows
        self._op = "select"
        self._payload: Any = None
        self._filters: list = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, *_columns: str, **_kwargs: Any) -> FakeQuery:
        self._op = "select"
        return self

    def insert(self, payload: Any) -> FakeQuery:
        self._op, self._payload = "insert", payload
        return self

    def upsert(self, payload: Any) -> FakeQuery:
        self._op, self._payload = "upsert", payload
        return self

    def update(self, payload: dict[str, Any]) -> FakeQuery:
        self._op, self._payload = "update", payload
        return self

    def delete(self) -> FakeQuery:
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column: str, value: Any) -> FakeQuery:
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> FakeQuery:
        self._limit = count
        return self

    def _matching(self) -> list[dict[str, Any]]:
        return [row for row in self._rows if all(check(row) for check in self._filters)]

    def execute(self) -> FakeResponse:
        if self._op == "insert":
            row = dict(self._payload)
            self._rows.append(row)
            return FakeResponse([dict(row)])

        if self._op == "upsert":
            payload = dict(self._payload)
            for row in self._rows:
                if row.get("id") == payload.get("id"):
                    row.update(payload)
                    return FakeResponse([dict(row)])
            self._rows.append(payload)
            return FakeResponse([dict(payload)])

        matched = self._matching()
        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in matched])

        if self._op == "delete":
            for row in matched:
                self._rows.remove(row)
            return FakeResponse([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: row.get(column), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return FakeResponse([dict(row) for row in matched])


class FakeSupabaseClient:
    """In-memory stand-in for the Supabase client's ``table()`` API."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables[name])


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    """Create an empty in-memory store."""
    return FakeSupabaseClient()


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a FastAPI test client."""
    from app.main import app

    return TestClient(app)


@pytest.fixture
def api(client: TestClient, fake_client: FakeSupabaseClient):
    """Test client whose routes talk to the in-memory store."""
    from app.dependencies import get_db_client
    from app.main import app

    app.dependency_overrides[get_db_client] = lambda: fake_client
    yield client
    app.dependency_overrides.clear()
