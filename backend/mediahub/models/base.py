"""
Declarative base shared by all models.
"""
from sqlalchemy.orm import DeclarativeBase
import uuid


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def generate_uuid() -> uuid.UUID:
    """Generate a random UUID primary key."""
    return uuid.uuid4()
