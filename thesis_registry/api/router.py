"""API router factory with core endpoints."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from thesis_registry.utils.db import verify_db_connection

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_api_router() -> APIRouter:
    """Create the router holding every resource under ``/api``.

    Returns:
        APIRouter with resource routes and health checks.
    """
    from thesis_registry.api.dashboard import router as dashboard_router
    from thesis_registry.api.institutes import router as institutes_router
    from thesis_registry.api.people import router as people_router
    from thesis_registry.api.subject_topics import router as subject_topics_router
    from thesis_registry.api.theses import router as theses_router
    from thesis_registry.api.universities import router as universities_router

    router = APIRouter(prefix=API_PREFIX)

    @router.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
    async def health_check() -> dict:
        """Health check endpoint - basic application health."""
        return {"status": "ok", "message": "Thesis Registry API is running"}

    @router.get(
        "/health/db",
        tags=["Health"],
        status_code=status.HTTP_200_OK,
        response_model=None,
    )
    async def health_check_db() -> JSONResponse:
        """Deep health check - includes database connectivity check.

        Returns:
            Health status with database connectivity information.
        """
        try:
            await verify_db_connection()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": str(e),
                },
            )
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "ok", "database": "connected"},
        )

    router.include_router(universities_router)
    router.include_router(institutes_router)
    router.include_router(people_router)
    router.include_router(subject_topics_router)
    router.include_router(theses_router)
    router.include_router(dashboard_router)

    return router
