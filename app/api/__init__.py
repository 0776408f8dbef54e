"""
API router aggregation.
"""
from fastapi import APIRouter

from app.api.endpoints import auth, health

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router)
api_router.include_router(auth.router)
