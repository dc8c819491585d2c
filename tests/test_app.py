import json
from types import SimpleNamespace

import pytest
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from contesthub.core import check_required_settings
from contesthub.database import Database, get_database
from contesthub.main import app
from contesthub.utils.errors import Unavailable
from contesthub.utils.response import success_response, validation_error_response


def test_missing_secret_key_fails_fast(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(RuntimeError):
        check_required_settings()


def test_database_not_connected():
    with pytest.raises(Unavailable):
        Database("mongodb://localhost:27017", "contesthub_test").get_db()


class PingAdmin:
    def __init__(self, reachable):
        self.reachable = reachable

    async def command(self, name):
        if not self.reachable:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1.0}


class UnreachableClient:
    def __init__(self, url, **kwargs):
        self.admin = PingAdmin(reachable=False)

    def close(self):
        pass


class ReachableClient:
    def __init__(self, url, **kwargs):
        self.admin = PingAdmin(reachable=True)
        self.store = AsyncMongoMockClient()

    def __getitem__(self, name):
        return self.store[name]

    def close(self):
        pass


async def test_failed_connect_leaves_no_client_and_retries(monkeypatch):
    database = Database("mongodb://mongo:27017", "contesthub_test")
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(database=database)))
    monkeypatch.setattr("contesthub.database.AsyncIOMotorClient", UnreachableClient)

    with pytest.raises(ServerSelectionTimeoutError):
        await database.connect_db()
    assert database.client is None
    with pytest.raises(Unavailable):
        await get_database(request)

    monkeypatch.setattr("contesthub.database.AsyncIOMotorClient", ReachableClient)
    db = await get_database(request)

    await db.users.insert_one({"email": "a@example.com"})
    with pytest.raises(DuplicateKeyError):
        await db.users.insert_one({"email": "a@example.com"})


async def test_root_and_health(client):
    root = await client.get("/")
    health = await client.get("/health")

    assert root.status_code == 200
    assert health.json() == {"status": "healthy"}


class UnreachableCollection:
    def find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers")


class UnreachableDatabase:
    contests = UnreachableCollection()
    users = UnreachableCollection()


async def test_store_failure_answers_503(client):
    async def unreachable():
        return UnreachableDatabase()

    app.dependency_overrides[get_database] = unreachable

    response = await client.get("/contests")

    assert response.status_code == 503
    assert response.json() == {"success": False, "message": "Database unavailable"}


async def test_request_body_errors_answer_422(client, creator):
    response = await client.post("/contests", json={"price": "lots"}, headers=creator)

    assert response.status_code == 422
    assert response.json()["success"] is False
    assert "body.title" in response.json()["errors"]


def test_response_envelopes():
    done = success_response("Done")
    listed = success_response("Listed", data=[])
    failed = validation_error_response(errors={"body.title": "Field required"})

    assert json.loads(done.body) == {"success": True, "message": "Done"}
    assert json.loads(listed.body)["data"] == []
    assert failed.status_code == 422
    assert json.loads(failed.body)["errors"] == {"body.title": "Field required"}
