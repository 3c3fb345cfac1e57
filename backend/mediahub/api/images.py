"""
Image endpoints.

- POST /v1/images                  upload one image (multipart field "file")
- GET  /v1/images/{filename}       raw bytes of a stored image
- GET  /v1/images/{image_id}/info  metadata only

Requires an authenticated caller (X-User-Id set by the auth layer).
"""
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from mediahub.api.dependencies import get_image_service
from mediahub.auth.dependencies import get_current_user_id
from mediahub.config import settings
from mediahub.errors import (
    ConfigError,
    DecodeError,
    MediaError,
    NotFound,
    PayloadTooLarge,
    PersistenceError,
    ReadError,
    UnsupportedFormat,
)
from mediahub.schemas.image import ImageInfo, ImageResource
from mediahub.services.image_service import ImageService
from mediahub.services.ingest import iter_upload_chunks

router = APIRouter()

# Most specific classes first: PayloadTooLarge is a ReadError
ERROR_STATUS = (
    (PayloadTooLarge, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    (ReadError, status.HTTP_400_BAD_REQUEST),
    (DecodeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (UnsupportedFormat, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ConfigError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: MediaError) -> HTTPException:
    """Map a media error to the HTTP status shown to the caller."""
    for error_class, status_code in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    
    # Server-side failures keep their details out of the response
    if status_code >= 500:
        detail = {"error": exc.error_code, "message": "Unable to process image"}
    else:
        detail = {"error": exc.error_code, "message": exc.message}
    
    return HTTPException(status_code=status_code, detail=detail)


@router.post("", response_model=ImageResource, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    owner_id: UUID = Depends(get_current_user_id),
    service: ImageService = Depends(get_image_service),
):
    """
    Upload a JPEG or PNG image.
    
    The stored image is served back at the returned `url`.
    """
    try:
        image = await service.upload(
            iter_upload_chunks(file, settings.upload_chunk_size),
            file.content_type,
            owner_id,
        )
    except MediaError as exc:
        raise to_http_exception(exc) from exc
    
    return ImageResource.model_validate(image)


@router.get("/{image_id}/info", response_model=ImageInfo)
async def get_image_info(
    image_id: UUID,
    owner_id: UUID = Depends(get_current_user_id),
    service: ImageService = Depends(get_image_service),
):
    """Return metadata for an image without its bytes."""
    try:
        return await service.get_info(image_id)
    except MediaError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{filename}")
async def download_image(
    filename: str,
    owner_id: UUID = Depends(get_current_user_id),
    service: ImageService = Depends(get_image_service),
):
    """Return the stored bytes with their MIME type."""
    try:
        image = await service.download(filename)
    except MediaError as exc:
        raise to_http_exception(exc) from exc
    
    return Response(
        content=image.image,
        media_type=image.mime,
        headers={"Content-Disposition": f'inline; filename="{image.filename}"'},
    )
