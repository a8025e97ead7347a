import logging
from typing import Any

import httpx

from jobtracker.core.config import settings

logger = logging.getLogger(__name__)

GMAIL_READONLY_SCOPE = "https://www.googleapis.com/auth/gmail.readonly"


class GmailAPIError(Exception):
    """Gmail API error."""

    def __init__(
        self, status_code: int, message: str, response_data: dict | None = None
    ):
        self.status_code = status_code
        self.message = message
        self.response_data = response_data or {}
        super().__init__(message)


class GmailClient:
    """Minimal Gmail REST client for read-only inbox scans.

    The access and refresh tokens are supplied by the caller (they live in
    cookies); this client never refreshes them.
    """

    AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    API_BASE = "https://gmail.googleapis.com/gmail/v1"

    def __init__(
        self,
        access_token: str | None = None,
        refresh_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.access_token = access_token
        self.refresh_token = refresh_token
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self.client = httpx.AsyncClient(
            base_url=self.API_BASE,
            headers=headers,
            timeout=httpx.Timeout(30.0),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.client.aclose()

    @staticmethod
    def _error_data(response: httpx.Response) -> dict:
        try:
            return response.json()
        except ValueError:
            return {"message": response.text[:500]}

    async def _make_request(self, method: str, endpoint: str, **kwargs) -> dict:
        """Make a single request; non-2xx responses raise GmailAPIError."""
        response = await self.client.request(method, endpoint, **kwargs)
        if response.is_error:
            error_data = self._error_data(response)
            logger.error(
                f"Gmail API error: {response.status_code} - {error_data}, "
                f"Endpoint: {endpoint}, Method: {method}"
            )
            raise GmailAPIError(response.status_code, str(error_data), error_data)
        return response.json()

    @classmethod
    def build_authorization_url(cls, state: str) -> str:
        """Build the Google consent screen URL for read-only Gmail access."""
        params = {
            "client_id": settings.google_client_id,
            "redirect_uri": settings.google_redirect_uri,
            "response_type": "code",
            "scope": GMAIL_READONLY_SCOPE,
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        return str(httpx.URL(cls.AUTH_URL, params=params))

    async def exchange_code(self, code: str) -> dict:
        """Exchange an authorization code for an access/refresh token pair."""
        data = {
            "grant_type": "authorization_code",
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "code": code,
            "redirect_uri": settings.google_redirect_uri,
        }
        response = await self.client.post(self.TOKEN_URL, data=data)
        if response.is_error:
            error_data = self._error_data(response)
            logger.error(f"Token exchange failed: {response.status_code} - {error_data}")
            raise GmailAPIError(response.status_code, str(error_data), error_data)
        return response.json()

    async def list_message_ids(
        self, query: str, page_token: str | None = None, max_results: int = 200
    ) -> tuple[list[str], str | None]:
        """List one page of message ids matching a Gmail search query."""
        params: dict[str, Any] = {"q": query, "maxResults": max_results}
        if page_token:
            params["pageToken"] = page_token

        data = await self._make_request("GET", "/users/me/messages", params=params)
        ids = [m["id"] for m in data.get("messages", []) if m.get("id")]
        return ids, data.get("nextPageToken")

    async def get_message(self, message_id: str) -> dict[str, Any]:
        """Get a full message resource (headers and MIME payload)."""
        return await self._make_request(
            "GET", f"/users/me/messages/{message_id}", params={"format": "full"}
        )
