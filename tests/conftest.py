import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime

import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from contesthub.database import get_database
from contesthub.main import app
from contesthub.models.auth.token import TokenData
from contesthub.models.auth.user import Role
from contesthub.services.auth.security import security_service


@pytest.fixture
def db():
    return AsyncMongoMockClient()["contesthub_test"]


@pytest.fixture
async def client(db):
    async def override_get_database():
        return db

    app.dependency_overrides[get_database] = override_get_database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def make_user(db, email, role="user", name=None, contest_limit=2, password=None):
    """Insert a user directly and return its auth headers"""
    await db.users.insert_one({
        "name": name if name is not None else email.split("@")[0],
        "email": email,
        "password": security_service.get_password_hash(password) if password else None,
        "role": role,
        "photoURL": None,
        "bio": "",
        "contestLimit": contest_limit,
        "package": None,
        "createdAt": datetime.utcnow(),
    })
    return auth_headers(email, role)


def auth_headers(email, role="user"):
    token = security_service.create_access_token(email, role)
    return {"Authorization": f"Bearer {token}"}


def caller(email, role):
    return TokenData(email=email, role=Role(role))


async def insert_contest(db, creator_email, status="pending", participants=None, submissions=None, **fields):
    """Insert a contest directly and return its id as a string"""
    document = {
        "title": "Logo Design",
        "description": "Design a logo",
        "category": "Design",
        "image": None,
        "price": 5,
        "prizeMoney": 100,
        "taskInstruction": "Upload a PNG",
        "creatorEmail": creator_email,
        "status": status,
        "endDate": datetime(2030, 1, 1),
        "createdAt": datetime.utcnow(),
        "participants": participants or [],
        "submissions": submissions or [],
    }
    document.update(fields)
    result = await db.contests.insert_one(document)
    return str(result.inserted_id)


@pytest.fixture
async def creator(db):
    return await make_user(db, "creator@example.com", role="creator", name="Cara Creator")


@pytest.fixture
async def admin(db):
    return await make_user(db, "admin@example.com", role="admin", name="Ada Admin")


@pytest.fixture
async def member(db):
    return await make_user(db, "member@example.com", role="user", name="Max Member")
