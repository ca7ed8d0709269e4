"""
conftest.py — Shared Test Fixtures for Motion API

Provides an in-memory stand-in for the Supabase client and a FastAPI
TestClient wired to it through dependency overrides.

Business Rules:
- Tests never reach a real Supabase project or the Motion backend
- Each test function gets a fresh, empty fake database
- Rate limiting is disabled so repeated calls never hit 429

Called by: all test files via pytest autodiscovery
Depends on: motion_api.main (app), motion_api.database (get_supabase)
"""

import os

os.environ["TESTING"] = "1"  # Must be set before importing app modules
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["NEXT_PUBLIC_API_URL"] = "http://backend.test"

import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from motion_api.database import get_supabase
from motion_api.main import app


# ── Fake Supabase ────────────────────────────────────────────────────
# Mimics the supabase-py builder chain closely enough for the routers:
# table().select()/insert()/upsert()/update()/delete(), eq/in_/is_/gte/lte,
# not_, order/limit,
# execute() -> object with .data.


def _sort_key(value):
    return (value is None, value if value is not None else 0)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.on_conflict = None
        self.filters: list[tuple[str, object]] = []
        self.in_filters: list[tuple[str, list]] = []
        self.checks: list = []
        self.negate_next = False
        self.ordering: list[tuple[str, bool]] = []
        self.row_limit: int | None = None

    # builders
    def select(self, *columns, **kwargs):
        return self

    def insert(self, payload, **kwargs):
        self.op, self.payload = "insert", payload
        return self

    def upsert(self, payload, on_conflict: str = "id", **kwargs):
        self.op, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def update(self, payload, **kwargs):
        self.op, self.payload = "update", payload
        return self

    def delete(self, **kwargs):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def in_(self, column, values):
        self.in_filters.append((column, list(values)))
        return self

    @property
    def not_(self):
        self.negate_next = True
        return self

    def _check(self, predicate):
        negate, self.negate_next = self.negate_next, False
        self.checks.append((lambda row: not predicate(row)) if negate else predicate)
        return self

    def is_(self, column, value):
        expected = None if value in ("null", None) else value
        return self._check(lambda row: row.get(column) is expected)

    def gte(self, column, value):
        return self._check(lambda row: row.get(column) is not None and row.get(column) >= value)

    def lte(self, column, value):
        return self._check(lambda row: row.get(column) is not None and row.get(column) <= value)

    def order(self, column, desc: bool = False, **kwargs):
        self.ordering.append((column, desc))
        return self

    def limit(self, size):
        self.row_limit = size
        return self

    # execution
    def _matches(self, row: dict) -> bool:
        return all(row.get(c) == v for c, v in self.filters) and all(
            row.get(c) in vs for c, vs in self.in_filters
        ) and all(check(row) for check in self.checks)

    def execute(self):
        self.db.calls.append(self)
        self.db.raise_if_failing(self.table, self.op)
        if (self.table, self.op) in self.db.empty_results:
            return SimpleNamespace(data=[])
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db.with_id(self.table, item) for item in items]
            rows.extend(created)
            return SimpleNamespace(data=[dict(r) for r in created])

        if self.op == "upsert":
            key = self.on_conflict or "id"
            existing = next((r for r in rows if r.get(key) == self.payload.get(key)), None)
            if existing is None:
                existing = self.db.with_id(self.table, self.payload)
                rows.append(existing)
            else:
                existing.update(self.payload)
            return SimpleNamespace(data=[dict(existing)])

        matched = [r for r in rows if self._matches(r)]

        if self.op == "update":
            for r in matched:
                r.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=[dict(r) for r in matched])

        for column, desc in reversed(self.ordering):
            matched = sorted(matched, key=lambda r: _sort_key(r.get(column)), reverse=desc)
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return SimpleNamespace(data=[dict(r) for r in matched])


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db, self.name, self.params = db, name, params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        self.db.raise_if_failing(f"rpc:{self.name}", "rpc")
        return SimpleNamespace(data=None)


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[FakeQuery] = []
        self.rpc_calls: list[tuple[str, dict]] = []
        self._failures: dict[tuple[str, str | None], dict] = {}
        self.empty_results: set[tuple[str, str]] = set()
        self._ids = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return FakeRpc(self, name, params)

    # helpers for tests
    def seed(self, table: str, *rows: dict) -> None:
        self.tables.setdefault(table, []).extend(dict(r) for r in rows)

    def rows(self, table: str) -> list[dict]:
        return self.tables.get(table, [])

    def fail(self, table: str, op: str | None = None, message: str = "boom", code: str = "XX000"):
        """Make matching execute() calls raise APIError. op=None matches any."""
        self._failures[(table, op)] = {"message": message, "code": code, "hint": None, "details": None}

    def raise_if_failing(self, table: str, op: str) -> None:
        for key in ((table, op), (table, None)):
            if key in self._failures:
                raise APIError(self._failures[key])

    def empty(self, table: str, op: str) -> None:
        """Make matching execute() calls return no rows without writing."""
        self.empty_results.add((table, op))

    def with_id(self, table: str, item: dict) -> dict:
        row = dict(item)
        row.setdefault("id", f"{table}-{next(self._ids)}")
        return row


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture()
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def client(fake_db: FakeSupabase):
    """FastAPI TestClient with get_supabase overridden to the fake."""
    app.dependency_overrides[get_supabase] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()
