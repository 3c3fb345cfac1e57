"""
Format validation for uploaded images.

Uses Pillow to decode untrusted bytes and report their dimensions.
The caller-declared MIME type is advisory for decoding; it is only checked
against the supported whitelist, which happens before any decode work.
"""
import logging
from io import BytesIO
from typing import Dict, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from mediahub.errors import DecodeError, UnsupportedFormat

logger = logging.getLogger(__name__)

# Supported MIME types and the file extension used when naming them
MIME_EXTENSIONS: Dict[str, str] = {
    "image/jpeg": "jpeg",
    "image/png": "png",
}

# Pillow format name -> MIME type, used only to flag mismatched uploads
PIL_FORMAT_MIMES: Dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
}


def normalize_mime(content_type: Optional[str]) -> str:
    """
    Normalize a Content-Type header value.
    
    Strips parameters and whitespace and lowercases, so
    "Image/PNG; charset=binary" becomes "image/png".
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def extension_from_mime(mime: str) -> str:
    """
    Map a supported MIME type to its file extension.
    
    Raises:
        UnsupportedFormat: If `mime` is not image/jpeg or image/png
    """
    try:
        return MIME_EXTENSIONS[mime]
    except KeyError:
        raise UnsupportedFormat(
            f"MIME type {mime or '<missing>'} is not supported",
            details={"mime": mime, "supported": sorted(MIME_EXTENSIONS)},
        ) from None


def decode_dimensions(data: bytes) -> Tuple[int, int, Optional[str]]:
    """
    Fully decode `data` and return (width, height, pillow_format).
    
    Raises:
        DecodeError: If the bytes are not a well-formed raster image
    """
    try:
        with Image.open(BytesIO(data)) as img:
            # Force a full decode so truncated or corrupt payloads fail here
            img.load()
            width, height = img.size
            image_format = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as exc:
        raise DecodeError(
            "Uploaded file is not a valid image",
            details={"reason": str(exc)},
        ) from exc
    
    if width <= 0 or height <= 0:
        raise DecodeError("Decoded image has no pixels", details={"width": width, "height": height})
    
    return width, height, image_format


def identify(data: bytes, declared_mime: str) -> Tuple[int, int]:
    """
    Validate an upload and return its (width, height).
    
    Args:
        data: Raw upload bytes
        declared_mime: Normalized Content-Type sent by the caller
        
    Returns:
        Tuple of (width, height) reported by the decoder
        
    Raises:
        UnsupportedFormat: If declared_mime is not in the whitelist
        DecodeError: If the bytes do not decode as an image
    """
    extension_from_mime(declared_mime)
    
    width, height, image_format = decode_dimensions(data)
    
    detected = PIL_FORMAT_MIMES.get(image_format or "")
    if detected != declared_mime:
        logger.warning(
            f"Declared MIME {declared_mime} does not match decoded format {image_format}",
            extra={"declared_mime": declared_mime, "decoded_format": image_format},
        )
    
    return width, height
