"""
Business logic services.
"""
from mediahub.services.image_service import ImageService
from mediahub.services.url_service import UrlService

__all__ = [
    "ImageService",
    "UrlService",
]
