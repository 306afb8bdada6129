"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timezone

from shortlinks.clock import FrozenClock
from shortlinks.persistence import TablePersistence
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage.memory import MemoryKeyValueStore
from shortlinks.store import ShortLinkStore
from shortlinks.common.logging_config import setup_logging


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Clock frozen at noon UTC, advanced manually by tests."""
    return FrozenClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def kv_store():
    """In-memory key-value backend."""
    return MemoryKeyValueStore()


@pytest.fixture
def persistence(kv_store, logger):
    return TablePersistence(kv_store, logger=logger)


@pytest.fixture
def short_code_generator(logger):
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6, logger=logger)


@pytest.fixture
async def store(persistence, short_code_generator, clock, logger) -> ShortLinkStore:
    """Create a loaded store with a frozen clock and UTC statistics."""
    store = ShortLinkStore(
        persistence=persistence,
        short_code_generator=short_code_generator,
        clock=clock,
        base_url="https://sho.rt",
        stats_tz=timezone.utc,
        logger=logger,
    )
    await store.load()
    return store


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
