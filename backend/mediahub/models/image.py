"""
Image model.

Stores the raw bytes together with their descriptive metadata in a single
row, so one INSERT is the only durable side effect of an upload.

Invariants:
- size == len(image)
- filename is unique across all rows
- mime is image/jpeg or image/png
- rows are never updated by this service
"""
from sqlalchemy import (
    Column,
    String,
    Integer,
    LargeBinary,
    DateTime,
    ForeignKey,
    Uuid,
)
from sqlalchemy.sql import func

from mediahub.models.base import Base, generate_uuid


class Image(Base):
    """
    Stored image.
    
    Attributes:
        id: Unique identifier, assigned at insert
        owner_id: Uploading user (supplied by the authorization layer)
        height: Pixel height reported by the decoder
        width: Pixel width reported by the decoder
        mime: Declared MIME type (image/jpeg or image/png)
        filename: Server generated name, e.g. 3fa1c9e07b2d4410.png
        url: Absolute URL derived from filename
        size: Byte length of `image`
        image: Raw bytes
        created_at: Insert timestamp
    """
    __tablename__ = "images"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=generate_uuid)
    
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    
    height = Column(Integer, nullable=False)
    width = Column(Integer, nullable=False)
    
    mime = Column(String(32), nullable=False)
    
    # Lookup key for downloads
    filename = Column(String(64), nullable=False, unique=True)
    
    url = Column(String, nullable=False)
    
    size = Column(Integer, nullable=False)
    
    image = Column(LargeBinary, nullable=False)
    
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    
    def __repr__(self):
        return (
            f"<Image(id={self.id}, owner={self.owner_id}, "
            f"filename={self.filename}, size={self.size})>"
        )
