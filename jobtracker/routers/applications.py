"""API routes for tracked job applications."""

import logging

from fastapi import APIRouter, Depends, status

from jobtracker.core.exceptions import (
    ApplicationNotFoundError,
    RepositoryError,
    not_found_exception,
    server_error_exception,
)
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStats,
    ApplicationUpdate,
    SuccessResponse,
)
from jobtracker.services.application_service import (
    ApplicationService,
    get_application_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    service: ApplicationService = Depends(get_application_service),
):
    """List applications, newest first. Stale ones are marked as ghosted."""
    try:
        return await service.list_applications()
    except RepositoryError as e:
        logger.error(f"Error fetching applications: {e}")
        raise server_error_exception("Failed to fetch applications")


@router.get("/stats", response_model=ApplicationStats)
async def application_stats(
    service: ApplicationService = Depends(get_application_service),
):
    """Dashboard counters over all applications."""
    try:
        return await service.get_stats()
    except RepositoryError as e:
        logger.error(f"Error computing application stats: {e}")
        raise server_error_exception("Failed to fetch applications")


@router.post(
    "", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED
)
async def create_application(
    request: ApplicationCreate,
    service: ApplicationService = Depends(get_application_service),
):
    """Add an application manually."""
    try:
        return await service.create_application(request)
    except RepositoryError as e:
        logger.error(f"Error creating application: {e}")
        raise server_error_exception("Failed to create application")


@router.patch("/{application_id}", response_model=SuccessResponse)
async def update_application(
    application_id: str,
    request: ApplicationUpdate,
    service: ApplicationService = Depends(get_application_service),
):
    """Update status, notes or other fields of an application."""
    try:
        await service.update_application(application_id, request)
        return SuccessResponse()
    except ApplicationNotFoundError as e:
        raise not_found_exception(e.message)
    except RepositoryError as e:
        logger.error(f"Error updating application: {e}")
        raise server_error_exception("Failed to update application")


@router.delete("/{application_id}", response_model=SuccessResponse)
async def delete_application(
    application_id: str,
    service: ApplicationService = Depends(get_application_service),
):
    """Delete an application."""
    try:
        await service.delete_application(application_id)
        return SuccessResponse()
    except ApplicationNotFoundError as e:
        raise not_found_exception(e.message)
    except RepositoryError as e:
        logger.error(f"Error deleting application: {e}")
        raise server_error_exception("Failed to delete application")


@router.post("/{application_id}/follow-up", response_model=SuccessResponse)
async def mark_follow_up(
    application_id: str,
    service: ApplicationService = Depends(get_application_service),
):
    """Acknowledge a follow-up: status becomes waiting and notes are replaced."""
    try:
        await service.mark_followed_up(application_id)
        return SuccessResponse()
    except ApplicationNotFoundError as e:
        raise not_found_exception(e.message)
    except RepositoryError as e:
        logger.error(f"Error marking follow-up: {e}")
        raise server_error_exception("Failed to mark follow-up")
