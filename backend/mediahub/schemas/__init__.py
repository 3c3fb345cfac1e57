"""
Pydantic schemas for API request/response validation.
"""
from mediahub.schemas.image import ImageResource, ImageInfo

__all__ = [
    "ImageResource",
    "ImageInfo",
]
