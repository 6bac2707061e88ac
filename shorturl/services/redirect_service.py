"""
Redirect Service

This service resolves the path parameter of a redirect request to the URL
to redirect to. Kept apart from the shortening flow so the read path has no
dependency on validation or DNS.
"""

from shorturl.core.exceptions import ShortCodeNotFoundError
from shorturl.core.validators import is_storable_code, parse_requested_code
from shorturl.services.registry import URLRegistry


class RedirectService:
    """Service for handling URL redirections."""

    def __init__(self, registry: URLRegistry):
        self.registry = registry

    async def get_redirect_url(self, raw_code: str) -> str:
        """
        Get the original URL for a short code taken from the request path.

        Raises:
            ShortCodeNotFoundError: If raw_code is not a registered code.
                short_code carries the requested integer (e.g. 0 or -5), or
                None when raw_code is not an integer at all.
        """
        requested = parse_requested_code(raw_code)
        if requested is None or not is_storable_code(requested):
            raise ShortCodeNotFoundError(requested)

        entry = await self.registry.lookup(requested)
        return entry.original_url
