"""
API router - aggregates endpoint modules. Paths are served from the root.
"""

from fastapi import APIRouter

from houseback.api.endpoints import auth, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
