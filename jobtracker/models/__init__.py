"""Database models."""

from jobtracker.models.application import (
    ApplicationRecord,
    ApplicationStatus,
    utc_now,
)

__all__ = [
    "ApplicationRecord",
    "ApplicationStatus",
    "utc_now",
]
