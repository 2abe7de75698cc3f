"""
conftest.py — Shared Test Fixtures for the portfolio gateway

Provides an in-memory stand-in for the backing data/auth service and a
FastAPI TestClient wired to it.

Business Rules:
- No test talks to a real Supabase project
- FakeDataService mimics PostgREST ordering, eq-filters and server-assigned
  id/created_at, and GoTrue password login / token lookup
- Each test function gets a fresh fake (no state leaks between tests)

Called by: all test files via pytest autodiscovery
Depends on: portfolio_api.dependencies (get_data_service), portfolio_api.main
"""

import os

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from collections import defaultdict
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from portfolio_api.services.data_service import DataServiceError

ADMIN_EMAIL = "admin@portfolio.dev"
ADMIN_PASSWORD = "correct-horse"
VALID_TOKEN = "valid-access-token"

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeDataService:
    """In-memory backing service with the same async surface as DataService."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.users: dict[str, dict] = {}
        self.passwords: dict[str, str] = {}
        self.tokens: dict[str, dict] = {}
        self.errors: dict[str, DataServiceError] = {}
        self.calls: list[tuple] = []
        self._next_id: dict[str, int] = defaultdict(lambda: 1)
        self._ticks = 0

    # ── Test setup helpers ───────────────────────────────────────────

    def add_user(self, email: str, password: str, token: str) -> dict:
        user = {"id": f"user-{len(self.users) + 1}", "email": email, "role": "authenticated"}
        self.users[email] = user
        self.passwords[email] = password
        self.tokens[token] = user
        return user

    def seed(self, table: str, *rows: dict) -> list[dict]:
        return [self._store(table, dict(row)) for row in rows]

    def fail(self, table: str, payload: dict, status_code: int = 400) -> None:
        """Make every call against `table` raise with `payload`."""
        self.errors[table] = DataServiceError(payload, status_code)

    def _store(self, table: str, row: dict) -> dict:
        if "id" not in row:
            row["id"] = self._next_id[table]
        self._next_id[table] = max(self._next_id[table], int(row["id"])) + 1
        if table == "messages" and "created_at" not in row:
            self._ticks += 1
            row["created_at"] = (_EPOCH + timedelta(seconds=self._ticks)).isoformat()
        self.tables[table].append(row)
        return row

    def _check(self, table: str) -> None:
        if table in self.errors:
            raise self.errors[table]

    @staticmethod
    def _matches(row: dict, match: dict) -> bool:
        return all(str(row.get(col)) == str(val) for col, val in match.items())

    # ── DataService surface ──────────────────────────────────────────

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        self.calls.append(("sign_in_with_password", email))
        if self.passwords.get(email) != password:
            raise DataServiceError(
                {"code": 400, "error_code": "invalid_credentials", "msg": "Invalid login credentials"},
                400,
            )
        token = next(t for t, u in self.tokens.items() if u["email"] == email)
        return {"access_token": token, "token_type": "bearer", "user": self.users[email]}

    async def get_user(self, token: str) -> dict:
        self.calls.append(("get_user", token))
        user = self.tokens.get(token)
        if not user:
            raise DataServiceError({"code": 403, "msg": "invalid JWT"}, 403)
        return user

    async def select(self, table, *, order=None, ascending=True, single=False):
        self.calls.append(("select", table, order, ascending, single))
        self._check(table)
        rows = [dict(r) for r in self.tables[table]]
        if order:
            rows.sort(key=lambda r: r.get(order), reverse=not ascending)
        if single:
            if len(rows) != 1:
                raise DataServiceError(
                    {"code": "PGRST116", "details": f"The result contains {len(rows)} rows",
                     "hint": None, "message": "JSON object requested, multiple (or no) rows returned"},
                    406,
                )
            return rows[0]
        return rows

    async def insert(self, table, rows, *, returning=True):
        self.calls.append(("insert", table, rows, returning))
        self._check(table)
        stored = [dict(self._store(table, dict(row))) for row in rows]
        return stored if returning else []

    async def update(self, table, values, match):
        self.calls.append(("update", table, values, match))
        self._check(table)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, match):
                row.update(values)
                updated.append(dict(row))
        return updated

    async def delete(self, table, match):
        self.calls.append(("delete", table, match))
        self._check(table)
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, match)]


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture()
def fake_service() -> FakeDataService:
    """A fresh fake backing service with one admin account."""
    svc = FakeDataService()
    svc.add_user(ADMIN_EMAIL, ADMIN_PASSWORD, VALID_TOKEN)
    return svc


@pytest.fixture()
def client(fake_service: FakeDataService) -> TestClient:
    """FastAPI TestClient with the backing service swapped for the fake."""
    from portfolio_api.dependencies import get_data_service
    from portfolio_api.main import app

    app.dependency_overrides[get_data_service] = lambda: fake_service

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
