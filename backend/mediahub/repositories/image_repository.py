"""
Repository for stored images.
Every write is a single INSERT ... RETURNING; there is no update or delete path.
"""
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mediahub.errors import NotFound, PersistenceError
from mediahub.models.image import Image
from mediahub.schemas.image import ImageInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewImage:
    """A validated, named upload that has not been persisted yet."""
    height: int
    width: int
    mime: str
    filename: str
    url: str
    image: bytes
    
    @property
    def size(self) -> int:
        return len(self.image)


class ImageRepository:
    """Persists images and looks them up by filename or id."""
    
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
    
    async def save(self, new_image: NewImage, owner_id: UUID) -> Image:
        """
        Insert one row holding the bytes and their metadata.
        
        Args:
            new_image: Validated upload
            owner_id: Owner supplied by the authorization layer
            
        Returns:
            The stored Image, including its generated id
            
        Raises:
            PersistenceError: On connectivity loss or constraint violation
        """
        stmt = (
            insert(Image)
            .values(
                height=new_image.height,
                width=new_image.width,
                mime=new_image.mime,
                filename=new_image.filename,
                url=new_image.url,
                size=new_image.size,
                image=new_image.image,
                owner_id=owner_id,
            )
            .returning(Image)
        )
        
        try:
            async with self._session_factory() as session:
                result = await session.scalars(stmt)
                image = result.one()
                await session.commit()
        except IntegrityError as exc:
            logger.error(f"Constraint violation storing {new_image.filename}: {exc.orig}")
            raise PersistenceError(
                "Image violates a storage constraint",
                details={"filename": new_image.filename},
            ) from exc
        except (SQLAlchemyError, OSError) as exc:
            logger.error(f"Failed to store {new_image.filename}: {exc}")
            raise PersistenceError(
                "Unable to store image",
                details={"filename": new_image.filename},
            ) from exc
        
        return image
    
    async def download(self, filename: str) -> Image:
        """
        Fetch the full record, bytes included, by exact filename.
        
        Raises:
            NotFound: If no image has this filename
            PersistenceError: On connectivity loss
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Image).where(Image.filename == filename)
                )
                image = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError("Unable to load image") from exc
        
        if image is None:
            raise NotFound(f"Image {filename} not found", details={"filename": filename})
        
        return image
    
    async def get_info(self, image_id: UUID) -> ImageInfo:
        """
        Fetch metadata for `image_id` without loading the bytes.
        
        Raises:
            NotFound: If no image has this id
            PersistenceError: On connectivity loss
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(
                        Image.height,
                        Image.width,
                        Image.mime,
                        Image.filename,
                        Image.size,
                        Image.owner_id,
                    ).where(Image.id == image_id)
                )
                row = result.one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError("Unable to load image metadata") from exc
        
        if row is None:
            raise NotFound(f"Image {image_id} not found", details={"image_id": str(image_id)})
        
        return ImageInfo.model_validate(row)
