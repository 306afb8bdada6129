"""Tests that concurrent requests neither lose clicks nor reuse codes.

Every mutation holds the store lock across its read-modify-write and the
flush that follows, so interleaved requests on one event loop must behave as
if they ran one after another.
"""

import asyncio
import pytest
from httpx import ASGITransport, AsyncClient

from web_app import create_app
from config import Config


@pytest.fixture
def app(store, logger):
    config = Config(storage_backend="memory", base_url="http://testserver")
    return create_app(store=store, config=config, logger=logger)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Many simultaneous requests against one store."""

    async def test_concurrent_shorten_requests(self, client, store):
        """Concurrent POST /api/shorten calls all succeed with unique codes."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/api/shorten", json={"url": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        short_codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code} body={r.text}"
            data = r.json()
            assert data["original_url"] == urls[i]
            short_codes.append(data["short_code"])

        assert len(short_codes) == len(set(short_codes)), "All short_codes must be unique under concurrency"
        assert len(store.table) == concurrency

    async def test_concurrent_same_custom_code(self, client, sample_urls):
        """Exactly one of several racing requests wins a custom code."""
        tasks = [
            client.post("/api/shorten", json={"url": sample_urls[0], "custom_code": "raceme"})
            for _ in range(10)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses == [200] + [409] * 9

    async def test_concurrent_redirect_requests(self, client, store):
        """Concurrent redirects are each counted exactly once."""
        create_resp = await client.post(
            "/api/shorten",
            json={"url": "https://example.com/redirect-target"},
        )
        assert create_resp.status_code == 200
        short_code = create_resp.json()["short_code"]

        tasks = [client.get(f"/{short_code}", follow_redirects=False) for _ in range(20)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        record = store.table[short_code]
        assert record.clicks == 20
        assert len(record.click_history) == 20
