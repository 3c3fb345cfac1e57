"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from mediahub.api import health, images

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(images.router, prefix="/v1/images", tags=["images"])
