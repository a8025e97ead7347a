"""Pytest configuration and fixtures."""

import base64
import os
import sys
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables before importing jobtracker modules
os.environ.setdefault("GOOGLE_CLIENT_ID", "test_client_id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test_client_secret")
os.environ.setdefault(
    "GOOGLE_REDIRECT_URI", "http://localhost:8000/api/gmail/callback"
)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["COOKIE_SECURE"] = "false"


def encode_body(text: str) -> str:
    """Encode text the way Gmail encodes message bodies (base64url, no padding)."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def make_message(
    message_id: str,
    subject: str,
    body: str,
    sender: str = "Jane <jane@acme.io>",
    date: str = "Mon, 05 Oct 2026 10:00:00 +0000",
    html: bool = False,
) -> dict:
    """Build a Gmail full-format message resource."""
    return {
        "id": message_id,
        "internalDate": "1791194400000",
        "payload": {
            "mimeType": "multipart/alternative",
            "headers": [
                {"name": "Subject", "value": subject},
                {"name": "From", "value": sender},
                {"name": "Date", "value": date},
            ],
            "parts": [
                {
                    "mimeType": "text/html" if html else "text/plain",
                    "body": {"data": encode_body(body)},
                }
            ],
        },
    }


@pytest.fixture
def message_factory():
    """Factory for Gmail message resources."""
    return make_message


@pytest.fixture
def body_encoder():
    """Gmail-style body encoder."""
    return encode_body


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite database."""
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
    from sqlalchemy.orm import sessionmaker

    from jobtracker.core.storage import Base
    from jobtracker.models import ApplicationRecord  # noqa: F401

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def repository(session_factory):
    """Application repository over the test database."""
    from jobtracker.repositories.application_repository import ApplicationRepository

    return ApplicationRepository(session_factory)


@pytest.fixture
def application_fields():
    """Factory for record fields with an application date relative to now."""
    from jobtracker.models.application import ApplicationStatus, utc_now

    def _make(days_ago: int = 1, status: str = ApplicationStatus.APPLIED.value, **extra):
        fields = {
            "company": "Acme",
            "position": "Backend Engineer",
            "application_date": utc_now() - timedelta(days=days_ago),
            "status": status,
        }
        fields.update(extra)
        return fields

    return _make


@pytest.fixture
def mock_gmail_client():
    """Mock Gmail client serving messages from an in-memory mailbox."""
    client = MagicMock()
    client.access_token = "test_access_token"
    client.refresh_token = "test_refresh_token"
    client.mailbox = {}

    async def list_message_ids(query, page_token=None, max_results=200):
        return list(client.mailbox), None

    async def get_message(message_id):
        return client.mailbox[message_id]

    client.list_message_ids = AsyncMock(side_effect=list_message_ids)
    client.get_message = AsyncMock(side_effect=get_message)
    client.close = AsyncMock()
    return client
