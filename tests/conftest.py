from __future__ import annotations

from typing import Any

import pytest


class FakeResponse:
    def __init__(self, data: Any, count: int | None = None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.calls: list[tuple[str, tuple]] = []

    def __getattr__(self, name: str):
        def method(*args, **kwargs):
            self.calls.append((name, args))
            if name == "insert":
                self.client.inserted.setdefault(self.table, []).append(args[0])
            return self

        return method

    def execute(self) -> FakeResponse:
        self.client.queries.append(self)
        result = self.client.results.get(self.table, [])
        if isinstance(result, Exception):
            raise result
        return FakeResponse(result)


class FakeSupabase:
    """Records query-builder calls and returns canned rows per table."""

    def __init__(self, results: dict[str, Any] | None = None) -> None:
        self.results = results or {}
        self.queries: list[FakeQuery] = []
        self.inserted: dict[str, list[Any]] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase():
    """Factory for in-memory Supabase stand-ins: ``fake_supabase({"table": rows})``."""
    return FakeSupabase
