"""Schemas for application tracker requests and responses."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobtracker.models.application import ApplicationStatus


def _to_naive_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


class ApplicationCreate(BaseModel):
    """Request to add an application manually."""

    company: str = Field(..., min_length=1, description="Company name")
    position: str = Field(..., min_length=1, description="Position or job title")
    application_date: datetime = Field(..., description="Date the application was sent")
    status: ApplicationStatus = Field(default=ApplicationStatus.APPLIED)
    notes: str | None = Field(default=None, description="Free-form notes")

    @field_validator("application_date")
    @classmethod
    def normalize_application_date(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


class ApplicationUpdate(BaseModel):
    """Partial update of an application; unset fields are left alone."""

    company: str | None = Field(default=None, min_length=1)
    position: str | None = Field(default=None, min_length=1)
    application_date: datetime | None = None
    status: ApplicationStatus | None = None
    notes: str | None = None

    @field_validator("application_date")
    @classmethod
    def normalize_application_date(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


class ApplicationResponse(BaseModel):
    """A tracked application as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    company: str
    position: str
    application_date: datetime
    status: ApplicationStatus
    last_update: datetime
    notes: str | None = None
    email_id: str | None = None
    follow_up_date: datetime | None = None
    created_at: datetime | None = None


class ApplicationStats(BaseModel):
    """Dashboard counters over all applications."""

    total: int
    active: int
    offers: int
    rejections: int
    ghosted: int
    response_rate: int = Field(..., description="Percent of applications not ghosted")


class SuccessResponse(BaseModel):
    """Acknowledgement for mutations without a body."""

    success: bool = True
