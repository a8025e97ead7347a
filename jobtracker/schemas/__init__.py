"""Pydantic schemas for request/response validation."""

from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStats,
    ApplicationUpdate,
    SuccessResponse,
)
from jobtracker.schemas.gmail import (
    ConnectionStatusResponse,
    ConnectResponse,
    SyncResponse,
)

__all__ = [
    "ApplicationCreate",
    "ApplicationResponse",
    "ApplicationStats",
    "ApplicationUpdate",
    "ConnectResponse",
    "ConnectionStatusResponse",
    "SuccessResponse",
    "SyncResponse",
]
