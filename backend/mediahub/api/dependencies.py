"""
Service wiring for route handlers.
"""
from mediahub.config import settings
from mediahub.database import AsyncSessionLocal
from mediahub.repositories.image_repository import ImageRepository
from mediahub.services.image_service import ImageService
from mediahub.services.url_service import UrlService


def get_image_service() -> ImageService:
    """
    Dependency providing an ImageService backed by the shared pool.
    Usage: service: ImageService = Depends(get_image_service)
    """
    return ImageService(
        repository=ImageRepository(AsyncSessionLocal),
        url_service=UrlService(settings.server_url),
        max_upload_size=settings.max_upload_size,
    )
