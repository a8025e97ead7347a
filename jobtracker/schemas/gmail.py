"""Schemas for the Gmail integration endpoints."""

from pydantic import BaseModel


class ConnectResponse(BaseModel):
    """Consent URL the browser should be sent to."""

    auth_url: str


class ConnectionStatusResponse(BaseModel):
    """Whether a Gmail access token cookie is present."""

    connected: bool


class SyncResponse(BaseModel):
    """Outcome of a sync pass; partial failures are not distinguished."""

    success: bool = True
    new_applications: int
    total_messages: int
