"""Application services."""

from jobtracker.services.application_service import (
    ApplicationService,
    get_application_service,
)
from jobtracker.services.classifier import EmailClassification, classify
from jobtracker.services.gmail_client import GmailAPIError, GmailClient
from jobtracker.services.sweeper import GHOSTED_AFTER, sweep
from jobtracker.services.sync_service import SyncResult, SyncService

__all__ = [
    "GHOSTED_AFTER",
    "ApplicationService",
    "EmailClassification",
    "GmailAPIError",
    "GmailClient",
    "SyncResult",
    "SyncService",
    "classify",
    "get_application_service",
    "sweep",
]
