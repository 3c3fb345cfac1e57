"""
Data access layer.
"""
from mediahub.repositories.image_repository import ImageRepository

__all__ = ["ImageRepository"]
