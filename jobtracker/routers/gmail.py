"""Gmail integration: OAuth connect flow, status and inbox sync."""

import logging
import secrets

import httpx
from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from fastapi.responses import RedirectResponse
from starlette.requests import Request

from jobtracker.core.config import settings
from jobtracker.core.exceptions import (
    NotConnectedError,
    RepositoryError,
    server_error_exception,
    unauthorized_exception,
)
from jobtracker.repositories.application_repository import (
    ApplicationRepository,
    get_application_repository,
)
from jobtracker.schemas.gmail import (
    ConnectionStatusResponse,
    ConnectResponse,
    SyncResponse,
)
from jobtracker.services.gmail_client import GmailAPIError, GmailClient
from jobtracker.services.sync_service import SyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gmail", tags=["gmail"])
redirect_router = APIRouter(prefix="/api", tags=["gmail"])

ACCESS_TOKEN_COOKIE = "gmail_access_token"
REFRESH_TOKEN_COOKIE = "gmail_refresh_token"
ACCESS_TOKEN_MAX_AGE = 3600
REFRESH_TOKEN_MAX_AGE = 30 * 24 * 60 * 60

MAX_PENDING_STATES = 100

# Insertion ordered, so the first key is the oldest pending state
_state_store: dict[str, str] = {}


@router.post("/connect", response_model=ConnectResponse)
async def connect(request: Request):
    """Start the OAuth flow and return the Google consent URL."""
    state = secrets.token_urlsafe(16)
    while len(_state_store) >= MAX_PENDING_STATES:
        _state_store.pop(next(iter(_state_store)))
    _state_store[state] = request.client.host if request.client else ""
    return ConnectResponse(auth_url=GmailClient.build_authorization_url(state))


@router.get("/callback")
async def callback(code: str | None = None, state: str | None = None):
    """Handle the OAuth redirect from Google and store tokens in cookies."""
    if not code:
        raise HTTPException(status_code=400, detail="No authorization code provided")
    if not state or _state_store.pop(state, None) is None:
        raise HTTPException(status_code=400, detail="Invalid OAuth state")

    try:
        async with GmailClient() as gmail:
            token_data = await gmail.exchange_code(code)
    except (GmailAPIError, httpx.RequestError) as e:
        logger.error(f"Error handling Gmail callback: {e}")
        raise server_error_exception("Failed to authenticate with Gmail")

    redirect_response = RedirectResponse(url="/")
    redirect_response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token_data.get("access_token", ""),
        max_age=token_data.get("expires_in", ACCESS_TOKEN_MAX_AGE),
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    if token_data.get("refresh_token"):
        redirect_response.set_cookie(
            key=REFRESH_TOKEN_COOKIE,
            value=token_data["refresh_token"],
            max_age=REFRESH_TOKEN_MAX_AGE,
            httponly=True,
            samesite="lax",
            secure=settings.cookie_secure,
        )

    logger.info("Gmail connected")
    return redirect_response


@redirect_router.get("/oauth2callback")
async def oauth2callback(request: Request):
    """Forward OAuth callbacks registered on the legacy path."""
    target = "/api/gmail/callback"
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return RedirectResponse(url=target)


@router.post("/disconnect")
async def disconnect(response: Response):
    """Forget the Gmail tokens."""
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
    logger.info("Gmail disconnected")
    return {"success": True}


@router.get("/status", response_model=ConnectionStatusResponse)
async def connection_status(gmail_access_token: str | None = Cookie(None)):
    """Report whether an access token cookie is present."""
    return ConnectionStatusResponse(connected=bool(gmail_access_token))


@router.post("/sync", response_model=SyncResponse)
async def sync(
    gmail_access_token: str | None = Cookie(None),
    gmail_refresh_token: str | None = Cookie(None),
    repository: ApplicationRepository = Depends(get_application_repository),
):
    """Scan the last 30 days of mail and record detected applications."""
    try:
        async with GmailClient(gmail_access_token, gmail_refresh_token) as gmail:
            result = await SyncService(gmail, repository).sync()
    except NotConnectedError as e:
        raise unauthorized_exception(e.detail)
    except (GmailAPIError, RepositoryError, httpx.RequestError) as e:
        logger.error(f"Error syncing Gmail: {e}")
        raise server_error_exception("Failed to sync Gmail")

    return SyncResponse(
        new_applications=result.new_applications,
        total_messages=result.total_messages,
    )
