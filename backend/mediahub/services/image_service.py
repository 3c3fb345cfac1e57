"""
Image service: the upload pipeline and the retrieval paths.

Upload flow (each step fails fast, nothing is retried):
1. Read the multipart field into memory, bounded by max_upload_size
2. Check the declared MIME type and decode the bytes for dimensions
3. Generate a unique filename
4. Resolve the public URL for that filename
5. Insert the row (the only durable side effect)
"""
import logging
import time
from typing import AsyncIterator, Optional
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from mediahub.errors import ConfigError, MediaError, PersistenceError
from mediahub.models.image import Image
from mediahub.repositories.image_repository import ImageRepository, NewImage
from mediahub.schemas.image import ImageInfo
from mediahub.services.ingest import read_stream
from mediahub.services.naming import make_filename
from mediahub.services.url_service import UrlService
from mediahub.services.validation import identify, normalize_mime
from mediahub.utils.logging import (
    log_image_downloaded,
    log_image_upload_failed,
    log_image_uploaded,
)
from mediahub.utils.metrics import (
    image_upload_failures_total,
    image_upload_size_bytes,
    images_downloaded_total,
    images_uploaded_total,
)

logger = logging.getLogger(__name__)

IMAGES_PATH = "api/v1/images"


class ImageService:
    """
    Service for image ingestion and retrieval.
    
    Holds no mutable state; one instance can serve concurrent requests.
    """
    
    def __init__(
        self,
        repository: ImageRepository,
        url_service: UrlService,
        max_upload_size: Optional[int] = None,
    ):
        self.repository = repository
        self.url_service = url_service
        self.max_upload_size = max_upload_size
    
    async def from_upload(
        self,
        stream: AsyncIterator[bytes],
        content_type: Optional[str],
    ) -> NewImage:
        """
        Turn an upload stream into a validated, named, not yet stored image.
        
        Args:
            stream: Chunks of the multipart field
            content_type: Content-Type declared for the field
            
        Raises:
            ReadError, PayloadTooLarge, UnsupportedFormat, DecodeError, ConfigError
        """
        mime = normalize_mime(content_type)
        data = await read_stream(stream, max_size=self.max_upload_size)
        
        # Pillow decoding is CPU bound; keep it off the event loop
        width, height = await run_in_threadpool(identify, data, mime)
        
        filename = make_filename(len(data), mime)
        url = self.url_service.create_server_url(f"{IMAGES_PATH}/{filename}")
        
        return NewImage(
            height=height,
            width=width,
            mime=mime,
            filename=filename,
            url=url,
            image=data,
        )
    
    async def save(self, new_image: NewImage, owner_id: UUID) -> Image:
        """Persist `new_image` for `owner_id`."""
        return await self.repository.save(new_image, owner_id)
    
    async def upload(
        self,
        stream: AsyncIterator[bytes],
        content_type: Optional[str],
        owner_id: UUID,
    ) -> Image:
        """
        Run the whole upload pipeline and return the stored image.
        
        Raises:
            MediaError: The first failing stage's error
        """
        start_time = time.time()
        
        try:
            new_image = await self.from_upload(stream, content_type)
            image = await self.save(new_image, owner_id)
        except MediaError as exc:
            image_upload_failures_total.labels(reason=exc.error_code).inc()
            log_image_upload_failed(
                logger,
                user_id=str(owner_id),
                reason=exc.error_code,
                error=exc.message,
                duration_ms=(time.time() - start_time) * 1000,
                include_traceback=isinstance(exc, (PersistenceError, ConfigError)),
            )
            raise
        
        images_uploaded_total.labels(mime=image.mime).inc()
        image_upload_size_bytes.observe(image.size)
        log_image_uploaded(
            logger,
            image_id=str(image.id),
            user_id=str(owner_id),
            filename=image.filename,
            size=image.size,
            duration_ms=(time.time() - start_time) * 1000,
        )
        
        return image
    
    async def download(self, filename: str) -> Image:
        """Fetch the stored image, bytes included, by filename."""
        start_time = time.time()
        image = await self.repository.download(filename)
        
        images_downloaded_total.inc()
        log_image_downloaded(
            logger,
            filename=filename,
            size=image.size,
            duration_ms=(time.time() - start_time) * 1000,
        )
        return image
    
    async def get_info(self, image_id: UUID) -> ImageInfo:
        """Fetch the metadata projection for `image_id`."""
        return await self.repository.get_info(image_id)
