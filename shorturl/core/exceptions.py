"""
Custom Exceptions

This module defines the error taxonomy of the short URL service.

- InvalidURLError: rejected input, surfaced as {"error": "invalid url"}
- ShortCodeNotFoundError: lookup of an unregistered code, surfaced as 404
- CodeSpaceExhaustedError: code generation gave up, surfaced as 500
- DatabaseError: unreadable or corrupt store, surfaced as 500
"""

from typing import Optional


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidURLError(URLShortenerException):
    """Raised when URL validation or the reachability check fails."""

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}")


class ShortCodeNotFoundError(URLShortenerException):
    """Raised when a short code is not registered."""

    def __init__(self, short_code: Optional[int]):
        self.short_code = short_code
        super().__init__(f"Short code {short_code} not found")


class CodeSpaceExhaustedError(URLShortenerException):
    """
    Raised when no free short code was drawn within the attempt cap.

    The random range is sized to stay sparse, so hitting this means the
    sizing policy failed. It is fatal for the request and never retried.
    """

    def __init__(self, attempts: int, upper_bound: int):
        self.attempts = attempts
        self.upper_bound = upper_bound
        super().__init__(
            f"Unable to generate unique short URL after {attempts} attempts "
            f"in range [1, {upper_bound}]"
        )


class DatabaseError(URLShortenerException):
    """Raised when store operations fail."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class DuplicateEntryError(DatabaseError):
    """Raised by a store when an append violates a uniqueness rule."""

    def __init__(self, original_url: str, short_code: int, original_error: Optional[Exception] = None):
        self.original_url = original_url
        self.short_code = short_code
        super().__init__(
            f"entry ({short_code}, {original_url}) conflicts with an existing entry",
            original_error=original_error,
        )


class ServiceUnavailableError(URLShortenerException):
    """Raised when a required service is unavailable."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        super().__init__(f"Service '{service_name}' is unavailable")
