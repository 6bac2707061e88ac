"""
Reachability Service

Checks that the host of a URL resolves before the URL is registered. The
check runs on the event loop's resolver (getaddrinfo in the default
executor), so a slow DNS answer only holds up the request that asked.

A lookup error or a timeout is a failed check; the caller reports the URL
as invalid and never reaches the registry.
"""

import asyncio
import logging
import socket

from shorturl.core.validators import lookup_hostname

logger = logging.getLogger(__name__)


class ReachabilityChecker:
    """Resolves the hostname of a normalized URL with a timeout."""

    def __init__(self, timeout: float = 5.0, enabled: bool = True):
        self.timeout = timeout
        self.enabled = enabled

    async def check(self, normalized_url: str) -> bool:
        """
        Return True if the URL's hostname (minus a leading "www.") resolves.
        """
        if not self.enabled:
            return True

        hostname = lookup_hostname(normalized_url)
        if hostname is None:
            return False

        return await self.resolve(hostname)

    async def resolve(self, hostname: str) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await asyncio.wait_for(
                loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.info(f"DNS lookup for {hostname} timed out after {self.timeout}s")
            return False
        except (OSError, UnicodeError) as e:
            # socket.gaierror is a subclass of OSError
            logger.info(f"DNS lookup for {hostname} failed: {e}")
            return False
        return True
