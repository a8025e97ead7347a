"""Job Tracker - personal job application tracker with Gmail scanning."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtracker import __version__
from jobtracker.core.storage import close_engine, init_models
from jobtracker.routers import applications_router, gmail_router, oauth_redirect_router

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Initializing application...")
    await init_models()
    logger.info("Application initialized")

    yield

    logger.info("Shutting down...")
    await close_engine()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Job Tracker",
    description="Personal job application tracker with Gmail inbox scanning",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(applications_router)
app.include_router(gmail_router)
app.include_router(oauth_redirect_router)


@app.get("/")
@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "message": "Job Tracker API",
        "version": __version__,
        "docs": "/docs",
        "status": "active",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "jobtracker"}
