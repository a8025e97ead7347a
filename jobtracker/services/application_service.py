"""Service for user-facing application tracker operations."""

import logging
from datetime import datetime

from fastapi import Depends

from jobtracker.models.application import (
    ACTIVE_STATUSES,
    ApplicationRecord,
    ApplicationStatus,
    utc_now,
)
from jobtracker.repositories.application_repository import (
    ApplicationRepository,
    get_application_repository,
)
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationStats,
    ApplicationUpdate,
)
from jobtracker.services.sweeper import sweep

logger = logging.getLogger(__name__)

FOLLOW_UP_NOTE = "Follow-up sent"


class ApplicationService:
    """Core service for tracked applications."""

    def __init__(self, repository: ApplicationRepository):
        self.repository = repository

    async def list_applications(
        self, now: datetime | None = None
    ) -> list[ApplicationRecord]:
        """List applications newest first, ghosting stale ones on the way."""
        records = await self.repository.list(order_by="application_date")
        return await sweep(records, self.repository, now=now)

    async def create_application(self, data: ApplicationCreate) -> ApplicationRecord:
        """Add an application entered by the user."""
        fields = data.model_dump()
        fields["status"] = data.status.value
        record = await self.repository.create(fields)
        logger.info(f"Created application {record.id} for {record.company}")
        return record

    async def update_application(
        self, application_id: str, data: ApplicationUpdate
    ) -> ApplicationRecord:
        """Apply a partial update; any status may replace any other."""
        fields = {
            name: value
            for name, value in data.model_dump(exclude_unset=True).items()
            if value is not None or name == "notes"
        }
        if "status" in fields:
            fields["status"] = ApplicationStatus(fields["status"]).value
        return await self.repository.update(application_id, fields)

    async def delete_application(self, application_id: str) -> None:
        await self.repository.delete(application_id)
        logger.info(f"Deleted application {application_id}")

    async def mark_followed_up(
        self, application_id: str, now: datetime | None = None
    ) -> ApplicationRecord:
        """Record that the user followed up on an application.

        The status becomes ``waiting`` and the notes are replaced whatever
        the record's previous status or notes were.
        """
        now = now or utc_now()
        return await self.repository.update(
            application_id,
            {
                "status": ApplicationStatus.WAITING.value,
                "follow_up_date": now,
                "last_update": now,
                "notes": FOLLOW_UP_NOTE,
            },
        )

    async def get_stats(self) -> ApplicationStats:
        """Compute dashboard counters over the swept application list."""
        records = await self.list_applications()
        total = len(records)
        ghosted = sum(1 for r in records if r.status == ApplicationStatus.GHOSTED)
        response_rate = round((total - ghosted) / total * 100) if total else 0

        return ApplicationStats(
            total=total,
            active=sum(1 for r in records if r.status in ACTIVE_STATUSES),
            offers=sum(1 for r in records if r.status == ApplicationStatus.OFFER),
            rejections=sum(
                1 for r in records if r.status == ApplicationStatus.REJECTED
            ),
            ghosted=ghosted,
            response_rate=response_rate,
        )


def get_application_service(
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ApplicationService:
    """FastAPI dependency for the application service."""
    return ApplicationService(repository)
