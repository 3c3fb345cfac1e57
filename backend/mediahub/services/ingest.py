"""
Accumulates a streamed multipart field into a single in-memory buffer.
"""
import logging
from typing import AsyncIterator, Optional

from fastapi import UploadFile

from mediahub.errors import PayloadTooLarge, ReadError

logger = logging.getLogger(__name__)


async def iter_upload_chunks(upload: UploadFile, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield the contents of `upload` in chunks of at most `chunk_size` bytes."""
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        yield chunk


async def read_stream(
    stream: AsyncIterator[bytes],
    max_size: Optional[int] = None,
) -> bytes:
    """
    Consume every chunk of `stream`, preserving arrival order.
    
    Args:
        stream: Async iterator of byte chunks
        max_size: Optional ceiling on the accumulated length; None disables it
        
    Returns:
        The complete payload
        
    Raises:
        PayloadTooLarge: As soon as the accumulated length exceeds max_size
        ReadError: If the stream fails while a chunk is being read
    """
    buffer = bytearray()
    
    try:
        async for chunk in stream:
            buffer.extend(chunk)
            if max_size is not None and len(buffer) > max_size:
                raise PayloadTooLarge(
                    f"Upload exceeds the {max_size} byte limit",
                    details={"max_size": max_size},
                )
    except ReadError:
        raise
    except Exception as exc:
        logger.warning(f"Upload stream failed after {len(buffer)} bytes: {exc}")
        raise ReadError(f"Failed to read upload: {exc}") from exc
    
    return bytes(buffer)
