"""
User model.
Users are provisioned by the authorization layer; this service only
references them as image owners.
"""
from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from mediahub.models.base import Base, generate_uuid


class User(Base):
    """Owner of uploaded images."""
    
    __tablename__ = "users"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=generate_uuid)
    email = Column(String(255), nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
