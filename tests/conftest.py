"""Pytest configuration and shared fixtures"""

import asyncio
import os
import sys
from pathlib import Path

import fakeredis
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables before the app modules read them
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("MONGODB_DB", "dsolar_test")
os.environ["CSRF_ENABLED"] = "false"
os.environ["SECURITY_HEADERS_ENABLED"] = "true"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ["TURNSTILE_SECRET_KEY"] = ""

from dsolar import config, database, rate_limiter, turnstile  # noqa: E402
from dsolar.security_utils import hash_password  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
def mongo_client():
    """In-memory MongoDB shared by the app and the test"""
    client = AsyncMongoMockClient()
    database.set_client(client)
    asyncio.run(database.ensure_indexes(database.get_database()))
    yield client
    database.set_client(None)


@pytest.fixture
def db(mongo_client):
    return database.get_database()


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Fresh in-memory Redis for rate limiting and caching"""
    server = fakeredis.FakeRedis(decode_responses=True)
    server.flushall()
    monkeypatch.setattr(rate_limiter, "redis_client", server)
    rate_limiter.memory_cache.clear()
    yield server
    rate_limiter.memory_cache.clear()


@pytest.fixture(autouse=True)
def no_turnstile(monkeypatch):
    monkeypatch.setattr(turnstile, "TURNSTILE_SECRET_KEY", None)


@pytest.fixture
def sent_emails(monkeypatch):
    """Capture outgoing email instead of talking to SMTP/Resend"""
    from dsolar import email_service

    outbox = []

    async def fake_send_email(to, subject, mjml_content, from_address=None, reply_to=None):
        outbox.append({"to": to, "subject": subject, "body": mjml_content, "reply_to": reply_to})
        return {"id": f"test-{len(outbox)}"}

    monkeypatch.setattr(email_service, "send_email", fake_send_email)
    return outbox


@pytest.fixture
def client(mongo_client, sent_emails):
    from dsolar.main import app

    return TestClient(app)


@pytest.fixture
def admin_user(db):
    asyncio.run(
        db[database.ADMINS].insert_one(
            {
                "username": ADMIN_USERNAME,
                "email": "admin@dsolar.com",
                "password": hash_password(ADMIN_PASSWORD),
            }
        )
    )
    return ADMIN_USERNAME


@pytest.fixture
def admin_client(client, admin_user):
    """TestClient carrying a valid admin session cookie"""
    response = client.post(
        "/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    assert config.SESSION_COOKIE_NAME in client.cookies
    return client


def run(coro):
    """Run a coroutine against the in-memory database from a sync test"""
    return asyncio.run(coro)
