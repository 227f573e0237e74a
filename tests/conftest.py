import os

# Configure the app before anything from ticketdesk is imported.
os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "ticketdesk_test")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import mongomock  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from ticketdesk.core.db import set_db  # noqa: E402

PASSWORD = "password123"


class AsyncCursor:
    """Awaitable facade over a mongomock cursor, shaped like Motor's."""

    def __init__(self, cursor):
        self._cursor = cursor

    def sort(self, *args, **kwargs):
        self._cursor = self._cursor.sort(*args, **kwargs)
        return self

    def skip(self, n):
        self._cursor = self._cursor.skip(n)
        return self

    def limit(self, n):
        self._cursor = self._cursor.limit(n)
        return self

    async def to_list(self, length=None):
        docs = list(self._cursor)
        return docs if length is None else docs[:length]


class AsyncCollection:
    _ASYNC = {"find_one", "insert_one", "update_one", "update_many", "delete_one", "count_documents", "create_index"}

    def __init__(self, collection):
        self.sync = collection

    def find(self, *args, **kwargs):
        return AsyncCursor(self.sync.find(*args, **kwargs))

    def __getattr__(self, name):
        if name not in self._ASYNC:
            raise AttributeError(name)
        method = getattr(self.sync, name)

        async def call(*args, **kwargs):
            return method(*args, **kwargs)
        return call


class AsyncDatabase:
    def __init__(self, db):
        self.sync = db

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return AsyncCollection(self.sync[name])

    def __getitem__(self, name):
        return AsyncCollection(self.sync[name])


@pytest.fixture
def db():
    database = AsyncDatabase(mongomock.MongoClient()["ticketdesk_test"])
    set_db(database)
    yield database
    set_db(None)


@pytest.fixture
def client(db):
    from ticketdesk.main import app

    with TestClient(app) as c:
        yield c


def register(client, username, role="employee", password=PASSWORD):
    r = client.post("/auth/register", json={"username": username, "password": password, "role": role})
    assert r.status_code == 201, r.text
    body = r.json()
    return body["user"], body["tokens"]["access"]["token"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(client):
    return register(client, "admin", role="admin")


@pytest.fixture
def employee(client):
    return register(client, "employee1")


@pytest.fixture
def other_employee(client):
    return register(client, "employee2")
