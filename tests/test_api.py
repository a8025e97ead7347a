"""Tests for API endpoints."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from jobtracker.core.exceptions import (
    ApplicationNotFoundError,
    NotConnectedError,
    RepositoryError,
)
from jobtracker.models.application import ApplicationRecord
from jobtracker.services.gmail_client import GmailAPIError
from jobtracker.services.sync_service import SyncResult


def _record(**overrides) -> ApplicationRecord:
    fields = {
        "id": "abc123",
        "company": "Acme",
        "position": "Backend Engineer",
        "application_date": datetime(2026, 10, 15),
        "status": "applied",
        "last_update": datetime(2026, 10, 15, 9, 0),
        "created_at": datetime(2026, 10, 15, 9, 0),
    }
    fields.update(overrides)
    return ApplicationRecord(**fields)


def _issue_state() -> str:
    """Register a pending OAuth state as /connect would."""
    from jobtracker.routers import gmail as gmail_routes

    gmail_routes._state_store["state-123"] = "testclient"
    return "state-123"


@pytest.fixture
def mock_repository():
    """Mock repository injected in place of the database one."""
    repository = MagicMock()
    repository.list = AsyncMock(return_value=[])
    repository.get = AsyncMock(return_value=None)
    repository.create = AsyncMock(side_effect=lambda fields: _record(**fields))
    repository.update = AsyncMock(return_value=_record())
    repository.delete = AsyncMock(return_value=None)
    repository.find_by_field = AsyncMock(return_value=[])
    return repository


@pytest.fixture
def client(mock_repository):
    """Create test client with the repository dependency overridden."""
    from jobtracker.main import app
    from jobtracker.repositories.application_repository import (
        get_application_repository,
    )

    app.dependency_overrides[get_application_repository] = lambda: mock_repository
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestInfoEndpoints:
    """Tests for service info endpoints."""

    def test_api_info(self, client):
        response = client.get("/api")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Job Tracker API"
        assert "version" in data

    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_openapi_lists_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        assert "/api/applications" in paths
        assert "/api/applications/{application_id}/follow-up" in paths
        assert "/api/gmail/sync" in paths


class TestApplicationEndpoints:
    """Tests for /api/applications."""

    def test_list_sweeps_stale_records(self, client, mock_repository):
        """Test an old applied record comes back ghosted and is persisted."""
        stale = _record(id="old", application_date=datetime(2020, 1, 1))
        fresh = _record(id="new", application_date=datetime.now())
        mock_repository.list.return_value = [fresh, stale]
        mock_repository.update.return_value = _record(
            id="old", application_date=datetime(2020, 1, 1), status="ghosted"
        )

        response = client.get("/api/applications")

        assert response.status_code == 200
        data = response.json()
        assert [a["id"] for a in data] == ["new", "old"]
        assert [a["status"] for a in data] == ["applied", "ghosted"]
        mock_repository.update.assert_awaited_once()
        assert mock_repository.update.await_args.args[0] == "old"
        assert mock_repository.update.await_args.args[1]["status"] == "ghosted"

    def test_list_repository_failure(self, client, mock_repository):
        mock_repository.list.side_effect = RepositoryError("list", "db down")

        response = client.get("/api/applications")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch applications"

    def test_create(self, client, mock_repository):
        response = client.post(
            "/api/applications",
            json={
                "company": "Globex",
                "position": "Data Engineer",
                "application_date": "2026-10-10T00:00:00Z",
                "notes": "Referral",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["company"] == "Globex"
        assert data["status"] == "applied"
        fields = mock_repository.create.await_args.args[0]
        assert fields["application_date"] == datetime(2026, 10, 10)
        assert fields["status"] == "applied"

    def test_create_validation_error(self, client):
        response = client.post("/api/applications", json={"company": "Globex"})
        assert response.status_code == 422

    def test_create_invalid_status(self, client):
        response = client.post(
            "/api/applications",
            json={
                "company": "Globex",
                "position": "Dev",
                "application_date": "2026-10-10",
                "status": "hired",
            },
        )
        assert response.status_code == 422

    def test_update(self, client, mock_repository):
        response = client.patch(
            "/api/applications/abc123",
            json={"status": "interview", "notes": "Call Friday"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        mock_repository.update.assert_awaited_once_with(
            "abc123", {"status": "interview", "notes": "Call Friday"}
        )

    def test_update_missing(self, client, mock_repository):
        mock_repository.update.side_effect = ApplicationNotFoundError("nope")
        response = client.patch("/api/applications/nope", json={"notes": "x"})
        assert response.status_code == 404

    def test_update_repository_failure(self, client, mock_repository):
        mock_repository.update.side_effect = RepositoryError("update", "db down")
        response = client.patch("/api/applications/abc123", json={"notes": "x"})
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to update application"

    def test_delete(self, client, mock_repository):
        response = client.delete("/api/applications/abc123")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        mock_repository.delete.assert_awaited_once_with("abc123")

    def test_delete_missing(self, client, mock_repository):
        mock_repository.delete.side_effect = ApplicationNotFoundError("nope")
        assert client.delete("/api/applications/nope").status_code == 404

    def test_follow_up(self, client, mock_repository):
        response = client.post("/api/applications/abc123/follow-up")

        assert response.status_code == 200
        record_id, fields = mock_repository.update.await_args.args
        assert record_id == "abc123"
        assert fields["status"] == "waiting"
        assert fields["notes"] == "Follow-up sent"
        assert fields["follow_up_date"] == fields["last_update"]

    def test_stats(self, client, mock_repository):
        mock_repository.list.return_value = [
            _record(id="1", status="offer"),
            _record(id="2", status="ghosted"),
        ]
        response = client.get("/api/applications/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["offers"] == 1
        assert data["response_rate"] == 50


class TestGmailEndpoints:
    """Tests for /api/gmail."""

    def test_connect_returns_auth_url(self, client):
        response = client.post("/api/gmail/connect")

        assert response.status_code == 200
        auth_url = response.json()["auth_url"]
        assert auth_url.startswith("https://accounts.google.com/")
        assert "gmail.readonly" in auth_url

    def test_status_disconnected(self, client):
        response = client.get("/api/gmail/status")
        assert response.json() == {"connected": False}

    def test_status_connected(self, client):
        client.cookies.set("gmail_access_token", "tok")
        response = client.get("/api/gmail/status")
        assert response.json() == {"connected": True}

    def test_callback_without_code(self, client):
        response = client.get("/api/gmail/callback")
        assert response.status_code == 400

    def test_callback_invalid_state(self, client):
        response = client.get("/api/gmail/callback?code=c&state=unknown")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid OAuth state"

    @patch("jobtracker.routers.gmail.GmailClient")
    def test_callback_sets_token_cookies(self, mock_gmail_cls, client):
        """Test a successful callback stores both tokens and redirects home."""
        state = _issue_state()

        gmail = MagicMock()
        gmail.exchange_code = AsyncMock(
            return_value={
                "access_token": "access-1",
                "refresh_token": "refresh-1",
                "expires_in": 3599,
            }
        )
        mock_gmail_cls.return_value.__aenter__.return_value = gmail

        response = client.get(
            f"/api/gmail/callback?code=c&state={state}", follow_redirects=False
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/"
        cookies = " ".join(response.headers.get_list("set-cookie"))
        assert "gmail_access_token=access-1" in cookies
        assert "gmail_refresh_token=refresh-1" in cookies
        assert "HttpOnly" in cookies
        gmail.exchange_code.assert_awaited_once_with("c")

    @patch("jobtracker.routers.gmail.GmailClient")
    def test_callback_exchange_failure(self, mock_gmail_cls, client):
        state = _issue_state()

        gmail = MagicMock()
        gmail.exchange_code = AsyncMock(side_effect=GmailAPIError(400, "bad code"))
        mock_gmail_cls.return_value.__aenter__.return_value = gmail

        response = client.get(f"/api/gmail/callback?code=c&state={state}")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to authenticate with Gmail"

        # The state is single use even when the exchange fails
        retry = client.get(f"/api/gmail/callback?code=c&state={state}")
        assert retry.status_code == 400
        assert retry.json()["detail"] == "Invalid OAuth state"

    def test_pending_states_are_capped(self, client):
        """Test repeated connects evict the oldest pending states."""
        from jobtracker.routers import gmail as gmail_routes

        gmail_routes._state_store.clear()
        try:
            for _ in range(gmail_routes.MAX_PENDING_STATES + 5):
                assert client.post("/api/gmail/connect").status_code == 200
            assert len(gmail_routes._state_store) == gmail_routes.MAX_PENDING_STATES
        finally:
            gmail_routes._state_store.clear()

    @patch("jobtracker.routers.gmail.GmailClient")
    def test_connect_opens_no_http_client(self, mock_gmail_cls, client):
        mock_gmail_cls.build_authorization_url.return_value = "https://consent"

        response = client.post("/api/gmail/connect")

        assert response.json() == {"auth_url": "https://consent"}
        mock_gmail_cls.assert_not_called()

    def test_oauth2callback_forwards_query(self, client):
        response = client.get(
            "/api/oauth2callback?code=abc&state=xyz", follow_redirects=False
        )
        assert response.status_code == 307
        assert response.headers["location"] == "/api/gmail/callback?code=abc&state=xyz"

    def test_disconnect_clears_cookies(self, client):
        client.cookies.set("gmail_access_token", "tok")
        response = client.post("/api/gmail/disconnect")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        cookies = " ".join(response.headers.get_list("set-cookie"))
        assert "gmail_access_token=" in cookies
        assert "gmail_refresh_token=" in cookies

    def test_sync_not_connected(self, client):
        response = client.post("/api/gmail/sync")
        assert response.status_code == 401

    @patch("jobtracker.routers.gmail.SyncService")
    def test_sync_success(self, mock_sync_cls, client, mock_repository):
        mock_sync_cls.return_value.sync = AsyncMock(
            return_value=SyncResult(new_applications=2, total_messages=40)
        )
        client.cookies.set("gmail_access_token", "tok")
        client.cookies.set("gmail_refresh_token", "ref")

        response = client.post("/api/gmail/sync")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "new_applications": 2,
            "total_messages": 40,
        }
        gmail, repository = mock_sync_cls.call_args.args
        assert gmail.access_token == "tok"
        assert gmail.refresh_token == "ref"
        assert repository is mock_repository

    @patch("jobtracker.routers.gmail.SyncService")
    def test_sync_rejected_token(self, mock_sync_cls, client):
        mock_sync_cls.return_value.sync = AsyncMock(
            side_effect=NotConnectedError("Gmail access token was rejected")
        )
        client.cookies.set("gmail_access_token", "expired")

        response = client.post("/api/gmail/sync")

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "error",
        [
            GmailAPIError(500, "Backend Error"),
            RepositoryError("find_by_field", "db down"),
            httpx.ConnectError("unreachable"),
        ],
    )
    @patch("jobtracker.routers.gmail.SyncService")
    def test_sync_failure(self, mock_sync_cls, client, error):
        mock_sync_cls.return_value.sync = AsyncMock(side_effect=error)
        client.cookies.set("gmail_access_token", "tok")

        response = client.post("/api/gmail/sync")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to sync Gmail"
