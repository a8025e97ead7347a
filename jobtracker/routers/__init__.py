"""API routers."""

from jobtracker.routers.applications import router as applications_router
from jobtracker.routers.gmail import redirect_router as oauth_redirect_router
from jobtracker.routers.gmail import router as gmail_router

__all__ = ["applications_router", "gmail_router", "oauth_redirect_router"]
