"""
Image response schemas.
Raw bytes are never part of these; they are only served by the download path.
"""
from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID


class ImageResource(BaseModel):
    """Schema for a stored image, as returned after upload."""
    id: UUID
    owner_id: UUID
    height: int = Field(..., gt=0)
    width: int = Field(..., gt=0)
    mime: str
    filename: str
    url: str
    size: int = Field(..., ge=0)
    
    model_config = ConfigDict(from_attributes=True)


class ImageInfo(BaseModel):
    """Metadata-only projection returned by lookup by id."""
    height: int
    width: int
    mime: str
    filename: str
    size: int
    owner_id: UUID
    
    model_config = ConfigDict(from_attributes=True)
