"""
URL Shortening Service

This service runs the request-side steps of shortening a URL, in order:
1. Reject empty input
2. Syntactic validation (scheme and hostname)
3. Normalization (http:// is prepended when no scheme is given)
4. Reachability check (DNS) on the hostname
5. Registration in the URL registry

Steps 1-4 all fail the same way, with InvalidURLError, and none of them
touches the registry.
"""

import logging

from shorturl.core.exceptions import InvalidURLError
from shorturl.core.validators import is_valid_url, normalize_url, validate_url_length
from shorturl.db.models import URLEntry
from shorturl.services.reachability import ReachabilityChecker
from shorturl.services.registry import URLRegistry

logger = logging.getLogger(__name__)


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Handles URL validation, the reachability check and registration.
    Separated from API layer for testability and maintainability.
    """

    def __init__(self, registry: URLRegistry, reachability: ReachabilityChecker):
        """
        Initialize the URL shortening service.

        Args:
            registry: Registry that owns the short code mapping
            reachability: DNS check run before registration
        """
        self.registry = registry
        self.reachability = reachability

    async def shorten(self, raw_url: str) -> URLEntry:
        """
        Validate, normalize and register a user supplied URL.

        Args:
            raw_url: The URL as submitted, scheme optional

        Returns:
            The new or already existing entry

        Raises:
            InvalidURLError: If the URL is empty, malformed or unreachable
            CodeSpaceExhaustedError: If no free short code could be drawn
            DatabaseError: If the store fails
        """
        if not raw_url or not raw_url.strip():
            raise InvalidURLError("", reason="Empty URL")

        if not validate_url_length(raw_url) or not is_valid_url(raw_url):
            raise InvalidURLError(
                raw_url,
                reason="Invalid URL format. URL must use http:// or https:// and have a valid domain"
            )

        normalized_url = normalize_url(raw_url)

        if not await self.reachability.check(normalized_url):
            raise InvalidURLError(normalized_url, reason="Host does not resolve")

        return await self.registry.register(normalized_url)
