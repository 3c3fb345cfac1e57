"""
Filename generation for stored images.

Names are unique, not content addressed: the hash input includes a random
UUID and the current time, so identical uploads get different names.
"""
import hashlib
import time
import uuid

from mediahub.services.validation import extension_from_mime


def make_filename(size: int, mime: str) -> str:
    """
    Generate an opaque filename of the form "<hash>.<extension>".
    
    Args:
        size: Byte length of the upload
        mime: Normalized MIME type
        
    Returns:
        Filename such as "3fa1c9e07b2d4410.png"
        
    Raises:
        UnsupportedFormat: If `mime` has no supported extension
    """
    extension = extension_from_mime(mime)
    timestamp_ms = time.time_ns() // 1_000_000
    
    seed = f"{uuid.uuid4()}_{size}_{extension}_{timestamp_ms}"
    
    # 64-bit digest; uniqueness comes from the seed, not the hash
    digest = hashlib.blake2b(seed.encode("utf-8"), digest_size=8).hexdigest()
    
    return f"{digest}.{extension}"
