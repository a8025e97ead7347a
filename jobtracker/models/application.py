"""Job application record model."""

import uuid
from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobtracker.core.storage import Base


def utc_now() -> datetime:
    """Return current UTC time as timezone-naive datetime for DB storage."""
    return datetime.now(UTC).replace(tzinfo=None)


def _new_id() -> str:
    return uuid.uuid4().hex


class ApplicationStatus(str, Enum):
    """Lifecycle status of a tracked application."""

    APPLIED = "applied"
    WAITING = "waiting"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    GHOSTED = "ghosted"


ACTIVE_STATUSES = frozenset(
    {
        ApplicationStatus.APPLIED.value,
        ApplicationStatus.WAITING.value,
        ApplicationStatus.INTERVIEW.value,
    }
)


class ApplicationRecord(Base):
    """Model for a single tracked job application."""

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    application_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ApplicationStatus.APPLIED.value
    )
    last_update: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Gmail message id for auto-detected records
    email_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True, index=True
    )
    follow_up_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False
    )
