"""
FastAPI dependencies for caller identity.

Token verification happens upstream (API gateway / auth proxy), which
forwards the verified user id in the X-User-Id header. This service only
reads it; it never re-derives or validates identity itself.
"""
from typing import Optional
from uuid import UUID

from fastapi import Header, HTTPException, status


async def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
) -> UUID:
    """
    FastAPI dependency returning the authenticated caller's id.
    
    Raises:
        HTTPException 401: If the header is missing or not a UUID
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authenticated user",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authenticated user id",
            headers={"WWW-Authenticate": "Bearer"},
        )
