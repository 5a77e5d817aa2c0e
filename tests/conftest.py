import os
import sys
from typing import Any, Dict, List

import pytest

# Make the repo root importable when running `pytest` from anywhere.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from streakshare.services import supabase as supabase_service  # noqa: E402


class _Response:
    def __init__(self, data):
        self.data = data


class _Query:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self._op = None
        self._payload = None
        self._filters: Dict[str, Any] = {}

    def insert(self, data):
        self._op, self._payload = "insert", data
        return self

    def upsert(self, data, on_conflict=None):
        self._op, self._payload = "upsert", data
        return self

    def select(self, *columns):
        self._op = "select"
        return self

    def eq(self, column, value):
        self._filters[column] = value
        return self

    def limit(self, n):
        return self

    def execute(self):
        if self.table_name in self.db.failing_tables:
            raise RuntimeError(f"{self.table_name} unavailable")

        rows: List[Dict[str, Any]] = self.db.tables.setdefault(self.table_name, [])
        if self._op == "insert":
            rows.append(self._payload)
            return _Response([self._payload])
        if self._op == "upsert":
            rows[:] = [r for r in rows if r.get("key") != self._payload["key"]]
            rows.append(self._payload)
            return _Response([self._payload])

        found = [r for r in rows if all(r.get(k) == v for k, v in self._filters.items())]
        return _Response(found)


class FakeSupabase:
    """In-memory stand-in for the supabase-py client (table/insert/upsert/select)."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failing_tables = set()

    def table(self, name: str) -> _Query:
        return _Query(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])

    def value(self, table: str, key: str):
        for row in self.rows(table):
            if row.get("key") == key:
                return row["value"]
        return None


@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    supabase_service.set_client(fake)
    yield fake
    supabase_service.set_client(None)


@pytest.fixture
def sent_messages(monkeypatch):
    """Capture outgoing Telegram messages instead of calling the Bot API."""
    sent = []

    def fake_send(chat_id, text, reply_markup=None):
        sent.append({"chat_id": chat_id, "text": text, "reply_markup": reply_markup})
        return True, None

    monkeypatch.setattr("streakshare.api.webhook.send_message", fake_send)
    return sent


@pytest.fixture
def client(fake_supabase):
    from streakshare.main import create_app

    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
