"""
URL Registry Manager

This module owns the lifecycle of the application's URL registry.

Design:
- The registry and its store are built on application startup, not at import
- Request handlers receive them through FastAPI dependencies
  (get_registry, get_reachability_checker), which tests override
- The store is closed on shutdown
"""

import logging
from typing import Optional

from shorturl.core.exceptions import ServiceUnavailableError
from shorturl.core.setting import Settings, settings
from shorturl.db.factory import get_url_store
from shorturl.services.reachability import ReachabilityChecker
from shorturl.services.registry import URLRegistry

logger = logging.getLogger(__name__)

# Set by initialize_registry() on startup
_registry: Optional[URLRegistry] = None
_reachability: Optional[ReachabilityChecker] = None


def get_registry() -> URLRegistry:
    """
    FastAPI dependency returning the application's registry.

    Raises:
        ServiceUnavailableError: If called before startup finished
    """
    if _registry is None:
        raise ServiceUnavailableError("url_registry")
    return _registry


def get_reachability_checker() -> ReachabilityChecker:
    """FastAPI dependency returning the DNS reachability checker."""
    if _reachability is None:
        raise ServiceUnavailableError("reachability_checker")
    return _reachability


async def initialize_registry(config: Settings = settings) -> URLRegistry:
    """
    Build the configured store, initialize it and wrap it in a registry.

    Store failures propagate so the application refuses to start on an
    unreadable store.
    """
    global _registry, _reachability

    if _registry is not None:
        logger.warning("URL registry already initialized")
        return _registry

    store = get_url_store(config)
    await store.initialize()

    _registry = URLRegistry(
        store,
        max_attempts=config.MAX_CODE_ATTEMPTS,
        range_multiplier=config.CODE_RANGE_MULTIPLIER,
    )
    _reachability = ReachabilityChecker(
        timeout=config.DNS_TIMEOUT_SECONDS,
        enabled=config.CHECK_REACHABILITY,
    )

    logger.info(
        f"URL registry initialized: "
        f"storage={store.name}, "
        f"reachability_check={'on' if config.CHECK_REACHABILITY else 'off'}"
    )
    return _registry


async def shutdown_registry() -> None:
    """Close the store and drop the registry."""
    global _registry, _reachability

    if _registry is not None:
        logger.info("Shutting down URL registry")
        await _registry.store.close()

    _registry = None
    _reachability = None
