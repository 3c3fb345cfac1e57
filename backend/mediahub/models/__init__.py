"""
Database models package.
"""
from mediahub.models.base import Base
from mediahub.models.user import User
from mediahub.models.image import Image

__all__ = [
    "Base",
    "User",
    "Image",
]
