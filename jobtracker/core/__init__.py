"""Core application components."""

from jobtracker.core.config import settings
from jobtracker.core.exceptions import (
    ApplicationNotFoundError,
    MessageProcessingError,
    NotConnectedError,
    RepositoryError,
    TrackerError,
)
from jobtracker.core.storage import Base, close_engine, get_session_factory, init_models

__all__ = [
    "ApplicationNotFoundError",
    "Base",
    "MessageProcessingError",
    "NotConnectedError",
    "RepositoryError",
    "TrackerError",
    "close_engine",
    "get_session_factory",
    "init_models",
    "settings",
]
