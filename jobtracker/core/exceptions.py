"""Custom exceptions for the application."""

from fastapi import HTTPException, status


class TrackerError(Exception):
    """Base exception for tracker errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NotConnectedError(TrackerError):
    """Raised when a Gmail operation runs without a valid access token."""

    def __init__(self, detail: str = "Not authenticated with Gmail"):
        self.detail = detail
        super().__init__(detail)


class MessageProcessingError(TrackerError):
    """Raised when a single email cannot be decoded or parsed."""

    def __init__(self, message_id: str | None, reason: str):
        self.message_id = message_id
        self.reason = reason
        super().__init__(f"Failed to process message {message_id}: {reason}")


class RepositoryError(TrackerError):
    """Raised when a backing-store operation fails."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Repository {operation} failed: {detail}")


class ApplicationNotFoundError(TrackerError):
    """Raised when no record exists for the given identifier."""

    def __init__(self, application_id: str):
        self.application_id = application_id
        super().__init__(f"Application {application_id} not found")


def unauthorized_exception(detail: str = "Not authenticated") -> HTTPException:
    """Return a 401 Unauthorized exception."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
    )


def not_found_exception(detail: str = "Resource not found") -> HTTPException:
    """Return a 404 Not Found exception."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )


def server_error_exception(detail: str = "Internal error") -> HTTPException:
    """Return a 500 Internal Server Error exception."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )
