"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from shorturl.core.exceptions import DatabaseError
from shorturl.core.registry_manager import get_registry
from shorturl.core.setting import Settings
from shorturl.db.memory_store import InMemoryURLStore
from shorturl.main import app, docs_options
from shorturl.services.registry import URLRegistry


class TestCreateShortURL:

    def test_json_body(self, client):
        response = client.post("/api/shorturl", json={"url": "https://example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["original_url"] == "https://example.com"
        assert isinstance(data["short_url"], int)

    def test_form_body(self, client):
        response = client.post("/api/shorturl", data={"url": "freecodecamp.org"})

        assert response.status_code == 200
        assert response.json()["original_url"] == "http://freecodecamp.org"

    def test_repeated_post_returns_same_code(self, client):
        first = client.post("/api/shorturl", data={"url": "https://example.com"}).json()
        second = client.post("/api/shorturl", json={"url": "https://example.com"}).json()

        assert first == second

    @pytest.mark.parametrize("payload", [
        {"url": ""},
        {"url": "not a url"},
        {"url": "ftp://example.com"},
        {"url": "https://does-not-exist.invalid"},
        {},
    ])
    def test_invalid_url(self, client, payload):
        response = client.post("/api/shorturl", data=payload)

        assert response.status_code == 200
        assert response.json() == {"error": "invalid url"}
        assert client.get("/health").json()["entries"] == 0

    def test_malformed_json(self, client):
        response = client.post(
            "/api/shorturl",
            content=b"{broken",
            headers={"content-type": "application/json"},
        )
        assert response.json() == {"error": "invalid url"}

    def test_multipart_without_boundary(self, client):
        response = client.post(
            "/api/shorturl",
            content=b"url=https://example.com",
            headers={"content-type": "multipart/form-data"},
        )

        assert response.status_code == 200
        assert response.json() == {"error": "invalid url"}
        assert client.get("/health").json()["entries"] == 0

    def test_non_string_url(self, client):
        response = client.post("/api/shorturl", json={"url": 12})
        assert response.json() == {"error": "invalid url"}


class TestRedirect:

    def test_round_trip(self, client):
        code = client.post("/api/shorturl", json={"url": "https://example.com"}).json()["short_url"]

        response = client.get(f"/api/shorturl/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com"

    def test_unknown_code(self, client):
        response = client.get("/api/shorturl/999999999", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found", "short": 999999999}

    @pytest.mark.parametrize("raw, echoed", [("0", 0), ("-5", -5), ("9" * 20, int("9" * 20))])
    def test_integer_outside_code_range_is_echoed(self, client, raw, echoed):
        response = client.get(f"/api/shorturl/{raw}", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found", "short": echoed}

    def test_non_numeric_code(self, client):
        response = client.get("/api/shorturl/abc", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found", "short": None}


class TestMisc:

    def test_hello(self, client):
        assert client.get("/api/hello").json() == {"greeting": "hello API"}

    def test_index_page(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert 'action="/api/shorturl"' in response.text

    def test_health(self, client):
        client.post("/api/shorturl", json={"url": "https://example.com"})

        response = client.get("/health")
        assert response.json() == {"status": "healthy", "storage": "memory", "entries": 1}

    def test_requests_carry_process_time(self, client):
        assert "x-process-time" in client.get("/api/hello").headers

    def test_docs_served_outside_production(self, client):
        assert client.get("/docs").status_code == 200
        assert docs_options(Settings(ENV_SETTING="staging"))["openapi_url"] == "/openapi.json"

    def test_docs_hidden_in_production(self):
        assert docs_options(Settings(ENV_SETTING="production")) == {
            "docs_url": None,
            "redoc_url": None,
            "openapi_url": None,
        }


class TestFailures:

    def test_code_space_exhausted_is_a_server_error(self, client, registry):
        registry.max_attempts = 0

        response = client.post("/api/shorturl", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Unable to generate unique short URL"}

    def test_store_failure_is_a_server_error(self, client):
        class BrokenStore(InMemoryURLStore):
            async def list_entries(self):
                raise DatabaseError("data.json is not valid JSON")

        app.dependency_overrides[get_registry] = lambda: URLRegistry(BrokenStore())

        response = client.get("/api/shorturl/12")

        assert response.status_code == 500
        assert response.json() == {"error": "storage error"}

    def test_registry_not_initialized(self):
        app.dependency_overrides.clear()
        response = TestClient(app).get("/api/shorturl/12")

        assert response.status_code == 503


def test_startup_builds_registry_from_settings():
    app.dependency_overrides.clear()

    with TestClient(app) as client:
        response = client.post("/api/shorturl", json={"url": "https://example.com"})
        code = response.json()["short_url"]
        assert client.get(f"/api/shorturl/{code}", follow_redirects=False).status_code == 302
        assert client.get("/health").json()["storage"] == "memory"

    # Registry is dropped on shutdown
    assert TestClient(app).get("/api/hello").status_code == 200
    assert TestClient(app).get("/api/shorturl/1").status_code == 503
