"""
Error taxonomy for the media pipeline.

Every stage raises one of these and the first failure aborts the upload.
Rendering to HTTP status codes happens in the API layer, never here.
"""
from typing import Any, Dict, Optional


class MediaError(Exception):
    """
    Base exception for all media errors.

    Carries a human readable message, a stable error code and optional
    context in `details`.
    """

    error_code: str = "MEDIA_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ReadError(MediaError):
    """Raised when the upload stream fails while being accumulated."""

    error_code = "READ_ERROR"


class PayloadTooLarge(ReadError):
    """Raised when the accumulated upload exceeds the configured ceiling."""

    error_code = "PAYLOAD_TOO_LARGE"


class DecodeError(MediaError):
    """Raised when the bytes are not a well-formed raster image."""

    error_code = "DECODE_ERROR"


class UnsupportedFormat(MediaError):
    """Raised when the mime type is not in the supported whitelist."""

    error_code = "UNSUPPORTED_FORMAT"


class PersistenceError(MediaError):
    """Raised on connectivity loss or constraint violation while storing."""

    error_code = "PERSISTENCE_ERROR"


class NotFound(MediaError):
    """Raised when a lookup by filename or id matches no record."""

    error_code = "NOT_FOUND"


class ConfigError(MediaError):
    """Raised when the server base URL is missing or malformed."""

    error_code = "CONFIG_ERROR"
