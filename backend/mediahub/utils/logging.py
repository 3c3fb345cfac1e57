"""
Structured JSON logging for the media service.

Every record carries:
- timestamp (ISO8601)
- level
- service
- event (for the event helpers below)

Optional fields (included when applicable):
- user_id
- image_id
- image_filename
- duration_ms

Usage:
    from mediahub.utils.logging import configure_logging, log_image_uploaded
    
    configure_logging('mediahub-api', 'INFO')
    log_image_uploaded(logger, image_id='123', user_id='456', filename='9f..png', size=5000)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""
    
    _service_name = None
    _configured = False
    
    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.
        
        Args:
            service_name: Service identifier (e.g. mediahub-api)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return
        
        cls._service_name = service_name
        
        root_logger = logging.getLogger()
        root_logger.handlers = []
        
        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(levelname)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )
        
        # stdout, picked up by the container runtime
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        
        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True
        
        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    user_id: Optional[str] = None,
    image_id: Optional[str] = None,
    filename: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.
    
    Args:
        event: Event name (mandatory)
        user_id: Optional owner ID
        image_id: Optional image record ID
        filename: Optional generated filename
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
        
    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }
    
    if user_id:
        extra["user_id"] = str(user_id)
    if image_id:
        extra["image_id"] = str(image_id)
    if filename:
        extra["image_filename"] = filename
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
    
    return extra


def log_image_uploaded(
    logger: logging.Logger,
    image_id: str,
    user_id: str,
    filename: str,
    size: int,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a committed upload.
    
    Args:
        logger: Logger instance
        image_id: Stored record ID (required)
        user_id: Owner ID (required)
        filename: Generated filename (required)
        size: Stored byte length (required)
        duration_ms: Optional end-to-end duration
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="image_uploaded",
        user_id=user_id,
        image_id=image_id,
        filename=filename,
        duration_ms=duration_ms,
        size=size,
        **kwargs
    )
    
    logger.info(f"Image uploaded: {filename}", extra=extra)


def log_image_upload_failed(
    logger: logging.Logger,
    user_id: str,
    reason: str,
    error: str,
    duration_ms: Optional[float] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a rejected or failed upload.
    
    Client-side rejections (bad format, oversized payload) are logged at
    warning level; storage failures should pass include_traceback=True.
    
    Args:
        logger: Logger instance
        user_id: Owner ID (required)
        reason: Error code of the failing stage (required)
        error: Error message (required)
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to log at error level with exc_info
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="image_upload_failed",
        user_id=user_id,
        duration_ms=duration_ms,
        reason=reason,
        error=str(error),
        **kwargs
    )
    
    message = f"Image upload failed: {reason} - {error}"
    
    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.warning(message, extra=extra)


def log_image_downloaded(
    logger: logging.Logger,
    filename: str,
    size: int,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log a served download."""
    extra = _build_log_extra(
        event="image_downloaded",
        filename=filename,
        duration_ms=duration_ms,
        size=size,
        **kwargs
    )
    
    logger.info(f"Image downloaded: {filename}", extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
