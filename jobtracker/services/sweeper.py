"""Read-time staleness sweep that marks unanswered applications as ghosted."""

import logging
from datetime import datetime, timedelta

from jobtracker.core.exceptions import ApplicationNotFoundError
from jobtracker.models.application import (
    ApplicationRecord,
    ApplicationStatus,
    utc_now,
)
from jobtracker.repositories.application_repository import ApplicationRepository

logger = logging.getLogger(__name__)

GHOSTED_AFTER = timedelta(days=14)


def is_stale(record: ApplicationRecord, now: datetime) -> bool:
    """Check whether an applied record has waited past the ghosting threshold."""
    return (
        record.status == ApplicationStatus.APPLIED
        and now - record.application_date > GHOSTED_AFTER
    )


async def sweep(
    records: list[ApplicationRecord],
    repository: ApplicationRepository,
    now: datetime | None = None,
) -> list[ApplicationRecord]:
    """Persist applied -> ghosted for stale records and return the adjusted list.

    Records are written one at a time; concurrent sweeps may issue the same
    write twice, which is harmless. A record deleted since it was listed is
    dropped from the result.
    """
    now = now or utc_now()
    swept = []
    for record in records:
        if is_stale(record, now):
            try:
                record = await repository.update(
                    record.id,
                    {"status": ApplicationStatus.GHOSTED.value, "last_update": now},
                )
            except ApplicationNotFoundError:
                logger.warning(f"Application {record.id} vanished before sweep write")
                continue
            logger.info(
                f"Marked application {record.id} ({record.company}) as ghosted"
            )
        swept.append(record)
    return swept
