"""Data access layer."""

from jobtracker.repositories.application_repository import (
    ApplicationRepository,
    get_application_repository,
)

__all__ = ["ApplicationRepository", "get_application_repository"]
