"""Repository for job application records."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from jobtracker.core.exceptions import ApplicationNotFoundError, RepositoryError
from jobtracker.core.storage import get_session_factory
from jobtracker.models.application import ApplicationRecord, utc_now

logger = logging.getLogger(__name__)


class ApplicationRepository:
    """Document-style access to application records.

    Each operation runs in its own session and commits immediately; there
    is no transaction spanning several calls.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _column(field: str):
        if field not in ApplicationRecord.__table__.columns:
            raise ValueError(f"Unknown application field: {field}")
        return getattr(ApplicationRecord, field)

    async def list(
        self, order_by: str = "application_date", descending: bool = True
    ) -> list[ApplicationRecord]:
        """Return all records ordered by the given field."""
        column = self._column(order_by)
        query = select(ApplicationRecord).order_by(
            column.desc() if descending else column.asc()
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Database error listing applications: {e}")
            raise RepositoryError("list", str(e)) from e

    async def get(self, application_id: str) -> ApplicationRecord | None:
        """Get a single record by id."""
        try:
            async with self.session_factory() as session:
                return await session.get(ApplicationRecord, application_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error getting application {application_id}: {e}")
            raise RepositoryError("get", str(e)) from e

    async def create(self, fields: dict[str, Any]) -> ApplicationRecord:
        """Create a record and return it with its assigned id."""
        now = utc_now()
        values = {**fields}
        values.setdefault("created_at", now)
        values["last_update"] = now
        try:
            async with self.session_factory() as session:
                record = ApplicationRecord(**values)
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return record
        except SQLAlchemyError as e:
            logger.error(f"Database error creating application: {e}")
            raise RepositoryError("create", str(e)) from e

    async def update(
        self, application_id: str, fields: dict[str, Any]
    ) -> ApplicationRecord:
        """Apply a partial update; last_update is always refreshed."""
        values = {**fields}
        values.setdefault("last_update", utc_now())
        for name in values:
            self._column(name)

        try:
            async with self.session_factory() as session:
                record = await session.get(ApplicationRecord, application_id)
                if record is None:
                    raise ApplicationNotFoundError(application_id)
                for name, value in values.items():
                    setattr(record, name, value)
                await session.commit()
                await session.refresh(record)
                return record
        except SQLAlchemyError as e:
            logger.error(f"Database error updating application {application_id}: {e}")
            raise RepositoryError("update", str(e)) from e

    async def delete(self, application_id: str) -> None:
        """Delete a record by id."""
        try:
            async with self.session_factory() as session:
                record = await session.get(ApplicationRecord, application_id)
                if record is None:
                    raise ApplicationNotFoundError(application_id)
                await session.delete(record)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting application {application_id}: {e}")
            raise RepositoryError("delete", str(e)) from e

    async def find_by_field(self, field: str, value: Any) -> list[ApplicationRecord]:
        """Return records whose field equals value."""
        query = select(ApplicationRecord).where(self._column(field) == value)
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Database error querying applications by {field}: {e}")
            raise RepositoryError("find_by_field", str(e)) from e


def get_application_repository() -> ApplicationRepository:
    """FastAPI dependency for the application repository."""
    return ApplicationRepository(get_session_factory())
