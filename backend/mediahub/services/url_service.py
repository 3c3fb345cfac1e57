"""
Builds absolute, caller-facing URLs from paths relative to the server root.
"""
from typing import Optional
from urllib.parse import urljoin, urlsplit

from mediahub.errors import ConfigError


class UrlService:
    """Joins relative resource paths onto the configured server base address."""
    
    def __init__(self, server_url: Optional[str]):
        self._server_url = server_url
    
    def _base(self) -> str:
        if not self._server_url or not self._server_url.strip():
            raise ConfigError("Server URL is not configured")
        
        base = self._server_url.strip()
        parts = urlsplit(base)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(
                f"Server URL {base!r} is not an absolute http(s) URL",
                details={"server_url": base},
            )
        
        # urljoin drops the last path segment unless the base ends with a slash
        if not base.endswith("/"):
            base += "/"
        return base
    
    def create_server_url(self, path: str) -> str:
        """
        Resolve `path` against the server base address.
        
        Example:
            UrlService("https://media.example.com").create_server_url("api/v1/images/a.png")
            -> "https://media.example.com/api/v1/images/a.png"
        
        Raises:
            ConfigError: If the base address is missing or malformed
        """
        return urljoin(self._base(), path.lstrip("/"))
