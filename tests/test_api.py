"""Tests for API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from shortener import URLShortener, ShortIDGenerator
from web_app import create_app

from tests.helpers import fixed_bytes


@pytest.mark.asyncio
class TestShortenEndpoint:
    """Test POST /api/shorten."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0]}
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["short_id"]) == 8
        assert data["original_url"] == sample_urls[0]
        assert data["short_url"] == f"http://testserver/{data['short_id']}"
        assert "created_at" in data

    async def test_short_url_behind_proxy(self, client, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0]},
            headers={
                "X-Forwarded-Proto": "https",
                "X-Forwarded-Host": "short.link",
                "X-Forwarded-Prefix": "/s",
            },
        )

        data = response.json()
        assert data["short_url"] == f"https://short.link/s/{data['short_id']}"

    async def test_short_url_with_configured_prefix(self, engine, config, sample_urls):
        config.path_prefix = "/go"
        transport = ASGITransport(app=create_app(engine=engine, config=config))
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        data = response.json()
        assert data["short_url"] == f"http://testserver/go/{data['short_id']}"

    async def test_original_url_returned_verbatim(self, client, engine):
        url = " https://example.com/padded "

        response = await client.post("/api/shorten", json={"url": url})

        assert response.status_code == 200
        assert response.json()["original_url"] == url
        assert engine.resolve(response.json()["short_id"]) == url

    async def test_json_content_type_with_charset(self, client):
        response = await client.post(
            "/api/shorten",
            content=b'{"url": "https://example.com"}',
            headers={"Content-Type": "application/json; charset=utf-8"},
        )

        assert response.status_code == 200

    async def test_missing_content_type_accepted(self, client):
        response = await client.post("/api/shorten", content=b'{"url": "https://example.com"}')

        assert response.status_code == 200

    @pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com/file", "http:///path", ""])
    async def test_shorten_invalid_url(self, client, engine, url):
        response = await client.post("/api/shorten", json={"url": url})

        assert response.status_code == 400
        assert "Invalid URL" in response.json()["detail"]
        assert len(engine) == 0

    async def test_unsupported_content_type(self, client):
        response = await client.post(
            "/api/shorten",
            content=b'{"url": "http://example.com"}',
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 415

    @pytest.mark.parametrize("body", [
        b'{"url":',
        b'{"url":"http://example.com"}{"x":1}',
        b'{"url":"http://example.com","custom_code":"abc"}',
        b'{"url": 123}',
        b'{}',
        b'["http://example.com"]',
        b'null',
        b'',
    ])
    async def test_malformed_payload(self, client, engine, body):
        response = await client.post(
            "/api/shorten",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert len(engine) == 0

    async def test_method_not_allowed(self, client):
        response = await client.get("/api/shorten")

        assert response.status_code == 405

    async def test_generation_exhausted(self, config):
        engine = URLShortener(
            generator=ShortIDGenerator(random_bytes=fixed_bytes(b"\x00" * 6)),
        )
        engine.create("https://example.com/taken")
        transport = ASGITransport(app=create_app(engine=engine, config=config))

        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.post("/api/shorten", json={"url": "https://example.com/new"})

        assert response.status_code == 500
        assert len(engine) == 1


@pytest.mark.asyncio
class TestRedirect:
    """Test GET /{short_id}."""

    async def test_redirect(self, client, engine):
        short_id = engine.create("https://example.com/abc")

        response = await client.get(f"/{short_id}")

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/abc"

    @pytest.mark.parametrize("path", ["/missingid", "/abc12345", "/abc", "/a/b", "/"])
    async def test_not_found(self, client, path):
        response = await client.get(path)

        assert response.status_code == 404

    async def test_method_not_allowed(self, client, engine):
        short_id = engine.create("https://example.com/abc")

        response = await client.post(f"/{short_id}")

        assert response.status_code == 405

    async def test_create_then_follow(self, client):
        create = await client.post("/api/shorten", json={"url": "http://example.com/long/path"})
        short_id = create.json()["short_id"]

        response = await client.get(f"/{short_id}")

        assert response.status_code == 302
        assert response.headers["location"] == "http://example.com/long/path"


@pytest.mark.asyncio
class TestInfoEndpoints:
    """Test URL info, stats and health."""

    async def test_get_url_info(self, client, sample_urls):
        create_response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0]}
        )
        short_id = create_response.json()["short_id"]

        response = await client.get(f"/api/urls/{short_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["short_id"] == short_id
        assert data["original_url"] == sample_urls[0]
        assert data["created_at"] == create_response.json()["created_at"]

    async def test_get_url_info_not_found(self, client):
        response = await client.get("/api/urls/nonexistent")

        assert response.status_code == 404

    async def test_statistics(self, client, sample_urls):
        for url in sample_urls:
            await client.post("/api/shorten", json={"url": url})

        response = await client.get("/api/stats")

        assert response.status_code == 200
        assert response.json() == {"total_urls": 3, "max_attempts": 10, "storage": "memory"}

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "healthy"
        assert data["total_urls"] == 0

    async def test_simple_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
class TestUnhealthyStore:
    """Health endpoints while the store lock is held."""

    @pytest.fixture
    async def stuck(self, config):
        engine = URLShortener(health_timeout=0.05)
        transport = ASGITransport(app=create_app(engine=engine, config=config))
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            engine._lock.acquire_write()
            try:
                yield client
            finally:
                engine._lock.release_write()

    async def test_simple_health_check_unavailable(self, stuck):
        response = await stuck.get("/health")

        assert response.status_code == 503

    async def test_health_check_reports_unhealthy(self, stuck):
        response = await stuck.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["store"] == "unhealthy"
        assert data["total_urls"] is None
