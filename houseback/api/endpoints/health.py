"""
Health checks - for load balancers, Kubernetes, and monitoring.
Liveness answers without touching dependencies; readiness pings the database.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from houseback.db.session import check_database

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def root():
    return {"message": "Server is on"}


@router.get("/health")
async def health():
    """Liveness: is the process up?"""
    return {"message": "Server is healthy"}


@router.get("/health/ready")
async def ready(request: Request):
    """Readiness: can the database answer a query?"""
    try:
        await check_database(request.app.state.engine)
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc.__class__.__name__)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"message": "Database unavailable", "database": "unavailable"},
        )
    return {"message": "Server is ready", "database": "ok"}
