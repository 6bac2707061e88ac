"""
Input Validators and Normalizers

Pure functions that decide whether user input is a registrable URL and
turn it into the form that gets stored. Nothing here touches the network;
the DNS check lives in shorturl.services.reachability.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

ALLOWED_SCHEMES = {"http", "https"}
MAX_URL_LENGTH = 2048

_HTTP_PREFIX = re.compile(r"^https?://", re.IGNORECASE)
_HOSTNAME_CHARS = re.compile(r"[a-z0-9.-]+")
_REQUESTED_CODE = re.compile(r"-?[0-9]+")

MAX_SHORT_CODE = 2**63 - 1


def normalize_url(raw_url: str) -> str:
    """
    Strip surrounding whitespace and prepend http:// when no http(s) scheme is given.

    Example:
        normalize_url("freecodecamp.org") -> "http://freecodecamp.org"
        normalize_url("https://example.com") -> "https://example.com"
    """
    url = raw_url.strip()
    if _HTTP_PREFIX.match(url):
        return url
    return f"http://{url}"


def _parse_hostname(url: str) -> Optional[str]:
    """Return the IDNA-encoded hostname of url, or None if it does not parse."""
    try:
        parts = urlsplit(url)
        # Accessing .port validates it and raises ValueError when malformed
        parts.port
    except ValueError:
        return None

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.hostname:
        return None

    try:
        hostname = parts.hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return None

    if not _HOSTNAME_CHARS.fullmatch(hostname):
        return None
    return hostname


def is_valid_url(raw_url: str) -> bool:
    """
    Validate a candidate URL.

    The input is normalized first, so a bare domain like "example.com" is
    checked as "http://example.com". The URL is accepted only when it parses,
    its scheme is http or https, and its hostname contains a dot (which
    rejects "localhost" and other bare names).

    Args:
        raw_url: The user supplied string

    Returns:
        True if the URL may be registered, False otherwise
    """
    if not raw_url or not isinstance(raw_url, str) or not raw_url.strip():
        return False

    hostname = _parse_hostname(normalize_url(raw_url))
    return hostname is not None and "." in hostname


def lookup_hostname(url: str) -> Optional[str]:
    """
    Extract the hostname to check for reachability.

    A leading "www." is stripped, so "http://www.example.com" yields "example.com".
    """
    hostname = _parse_hostname(url)
    if hostname is None:
        return None
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname or None


def parse_requested_code(raw_code: str) -> Optional[int]:
    """
    Read a path parameter as an integer, sign allowed.

    This is the value echoed back when a code is not found, so "0" and "-5"
    parse to 0 and -5. Anything that is not a plain decimal integer is None.
    """
    if not raw_code or not isinstance(raw_code, str):
        return None

    if not _REQUESTED_CODE.fullmatch(raw_code):
        return None

    try:
        return int(raw_code)
    except ValueError:
        # More digits than int() accepts
        return None


def is_storable_code(code: int) -> bool:
    """True if code is positive and fits a 64 bit integer column."""
    return 0 < code <= MAX_SHORT_CODE


def validate_url_length(url: str, max_length: int = MAX_URL_LENGTH) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length
