"""
Pytest configuration and shared fixtures.

This module provides:
- An in-memory stand-in for the Supabase client that records every query
  chain and answers with rows queued per table
- Profiles for each role
- A TestClient with the Supabase and current-profile dependencies overridden
"""

import os
from collections import defaultdict, deque
from types import SimpleNamespace

import pytest

# Settings load at import time; keep tests independent of a local .env
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "")

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.core.dependencies import get_current_profile  # noqa: E402
from app.database.supabase_client import get_supabase, get_admin_supabase  # noqa: E402


ADMIN = {"id": "admin-1", "role": "admin", "full_name": "Alice Admin", "email": "alice@example.org"}
SUPERVISOR = {"id": "super-1", "role": "supervisor", "full_name": "Sam Supervisor", "email": "sam@example.org"}
TEACHER = {"id": "teacher-1", "role": "teacher", "full_name": "Tom Teacher", "email": "tom@example.org"}
OTHER_TEACHER = {"id": "teacher-2", "role": "teacher", "full_name": "Tina Teacher", "email": "tina@example.org"}


class FakeQuery:
    """Records a PostgREST query chain; execute() answers from the client's queue."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls = []

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def insert(self, *args, **kwargs):
        return self._record("insert", *args, **kwargs)

    def update(self, *args, **kwargs):
        return self._record("update", *args, **kwargs)

    def delete(self, *args, **kwargs):
        return self._record("delete", *args, **kwargs)

    def eq(self, *args, **kwargs):
        return self._record("eq", *args, **kwargs)

    def in_(self, *args, **kwargs):
        return self._record("in_", *args, **kwargs)

    def is_(self, *args, **kwargs):
        return self._record("is_", *args, **kwargs)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def limit(self, *args, **kwargs):
        return self._record("limit", *args, **kwargs)

    def single(self):
        return self._record("single")

    def maybe_single(self):
        return self._record("maybe_single")

    @property
    def not_(self):
        return self._record("not_")

    @property
    def names(self):
        return [name for name, _, _ in self.calls]

    def args_of(self, name):
        return [args for call, args, _ in self.calls if call == name]

    def first_arg(self, name):
        return self.args_of(name)[0][0]

    def execute(self):
        self.client.queries.append(self)
        queue = self.client.responses[self.table]
        data = queue.popleft() if queue else []
        if isinstance(data, Exception):
            raise data
        return SimpleNamespace(data=data)


class FakeRpc:
    def __init__(self, client, name, params):
        self.client = client
        self.name = name
        self.params = params

    def execute(self):
        self.client.rpc_calls.append((self.name, self.params))
        queue = self.client.responses[f"rpc:{self.name}"]
        data = queue.popleft() if queue else None
        if isinstance(data, Exception):
            raise data
        return SimpleNamespace(data=data)


class FakeSupabase:
    def __init__(self):
        self.responses = defaultdict(deque)
        self.queries = []
        self.rpc_calls = []
        self.auth = SimpleNamespace()

    def queue(self, table, *responses):
        """Queue the data returned by the next execute() calls on a table"""
        self.responses[table].extend(responses)
        return self

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params or {})

    def queries_on(self, table):
        return [q for q in self.queries if q.table == table]

    def writes(self, table, operation):
        return [q for q in self.queries_on(table) if operation in q.names]


class APIError(Exception):
    """Shape of postgrest errors: the backend message lives in .message"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_admin_supabase] = lambda: None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def as_user(client):
    """Return the client acting as the given profile"""
    def _as(profile):
        app.dependency_overrides[get_current_profile] = lambda: profile
        return client
    return _as
