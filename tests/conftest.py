"""
Test configuration and fixtures for the short URL service.

The application's registry and DNS checker are replaced through FastAPI
dependency overrides, so no test touches the network or the default
database file.
"""

import os

# Must be set before shorturl.core.setting is imported
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("CHECK_REACHABILITY", "false")

import random

import pytest
from fastapi.testclient import TestClient

from shorturl.core.registry_manager import get_reachability_checker, get_registry
from shorturl.db.memory_store import InMemoryURLStore
from shorturl.main import app
from shorturl.services.reachability import ReachabilityChecker
from shorturl.services.registry import URLRegistry


class FakeReachabilityChecker(ReachabilityChecker):
    """Resolves every hostname except the ones listed as unresolvable."""

    def __init__(self, unresolvable=()):
        super().__init__(timeout=1.0, enabled=True)
        self.unresolvable = set(unresolvable)
        self.resolved = []

    async def resolve(self, hostname: str) -> bool:
        self.resolved.append(hostname)
        return hostname not in self.unresolvable


@pytest.fixture
def store():
    return InMemoryURLStore()


@pytest.fixture
def registry(store):
    return URLRegistry(store, rng=random.Random(1234))


@pytest.fixture
def reachability():
    return FakeReachabilityChecker(unresolvable={"does-not-exist.invalid"})


@pytest.fixture
def client(registry, reachability):
    """Test client wired to the in-memory registry and fake DNS."""
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_reachability_checker] = lambda: reachability

    yield TestClient(app)

    app.dependency_overrides.clear()
