"""Tests for table persistence and key-value backends."""

import json

import pytest
from datetime import datetime, timezone

from shortlinks.models import ClickEvent, LinkRecord
from shortlinks.persistence import TablePersistence
from shortlinks.storage import redis_store
from shortlinks.storage import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
    create_kv_store,
)


def make_table():
    created = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    first = LinkRecord.create("https://example.com/a", "abc123", created, 30)
    first.record_click(ClickEvent(created, referrer="direct", user_agent="pytest"))
    first.record_click(ClickEvent(created, referrer="https://ref.example", user_agent=None))
    second = LinkRecord.create("https://example.com/b", "custom", created, 10080)
    return {first.short_code: first, second.short_code: second}


class TestTablePersistence:
    """Test load/save of the whole table."""

    @pytest.mark.asyncio
    async def test_round_trip(self, persistence):
        table = make_table()

        assert await persistence.save(table)
        loaded = await persistence.load()

        assert list(loaded) == list(table)
        for code, record in table.items():
            assert loaded[code].clicks == record.clicks
            assert len(loaded[code].click_history) == len(record.click_history)
            assert loaded[code] == record

    @pytest.mark.asyncio
    async def test_missing_blob_gives_empty_table(self, persistence):
        assert await persistence.load() == {}

    @pytest.mark.asyncio
    async def test_corrupt_blob_gives_empty_table(self, kv_store, persistence):
        await kv_store.set("shortened_urls", "{not json")

        assert await persistence.load() == {}

    @pytest.mark.asyncio
    async def test_non_object_blob_gives_empty_table(self, kv_store, persistence):
        await kv_store.set("shortened_urls", json.dumps(["abc"]))

        assert await persistence.load() == {}

    @pytest.mark.asyncio
    async def test_malformed_record_gives_empty_table(self, kv_store, persistence):
        await kv_store.set("shortened_urls", json.dumps({"abc": {"short_code": "abc"}}))

        assert await persistence.load() == {}

    @pytest.mark.asyncio
    async def test_custom_key(self, kv_store):
        persistence = TablePersistence(kv_store, key="links")

        await persistence.save(make_table())

        assert "links" in kv_store.data
        assert "shortened_urls" not in kv_store.data

    def test_clicks_rebuilt_from_history(self):
        data = make_table()["abc123"].to_dict()
        data["clicks"] = 99

        record = LinkRecord.from_dict(data)

        assert record.clicks == 2

    def test_naive_timestamps_read_as_utc(self):
        data = make_table()["custom"].to_dict()
        data["created_at"] = "2024-01-01T12:00:00"

        record = LinkRecord.from_dict(data)

        assert record.created_at.tzinfo is not None
        assert record.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestFileKeyValueStore:
    """Test the JSON file backend."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, tmp_path):
        store = FileKeyValueStore(str(tmp_path / "nested" / "kv.json"))

        assert await store.get("missing") is None
        await store.set("a", "1")
        await store.set("b", "2")

        assert await store.get("a") == "1"
        assert await store.get("b") == "2"
        assert await store.health_check()

    @pytest.mark.asyncio
    async def test_survives_reopen(self, tmp_path):
        path = str(tmp_path / "kv.json")
        persistence = TablePersistence(FileKeyValueStore(path))
        await persistence.save(make_table())

        reopened = TablePersistence(FileKeyValueStore(path))
        loaded = await reopened.load()

        assert set(loaded) == {"abc123", "custom"}

    @pytest.mark.asyncio
    async def test_corrupt_file_gives_empty_table(self, tmp_path):
        path = tmp_path / "kv.json"
        path.write_text("garbage", encoding="utf-8")

        persistence = TablePersistence(FileKeyValueStore(str(path)))

        assert await persistence.load() == {}


class FlakyRedis:
    """Stand-in Redis client whose first ping fails."""

    instances = []

    def __init__(self, fail_ping):
        self.fail_ping = fail_ping
        self.closed = False
        self.values = {}
        FlakyRedis.instances.append(self)

    async def ping(self):
        if self.fail_ping:
            raise ConnectionError("redis unreachable")
        return True

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value):
        self.values[key] = value

    async def aclose(self):
        self.closed = True


class TestRedisKeyValueStore:
    """Test the Redis backend connection handling."""

    @pytest.mark.asyncio
    async def test_failed_connect_is_not_cached(self, monkeypatch):
        FlakyRedis.instances = []
        outcomes = iter([True, False])
        monkeypatch.setattr(
            redis_store.redis, "from_url",
            lambda *args, **kwargs: FlakyRedis(fail_ping=next(outcomes)),
        )
        store = RedisKeyValueStore("redis://localhost:6379/0")

        assert not await store.health_check()
        assert store.client is None
        assert FlakyRedis.instances[0].closed

        await store.set("shortened_urls", "{}")

        assert store.client is FlakyRedis.instances[1]
        assert await store.get("shortened_urls") == "{}"
        assert FlakyRedis.instances[1].values == {"shortlinks:shortened_urls": "{}"}


class TestBackendFactory:
    """Test backend selection."""

    def test_memory(self):
        assert isinstance(create_kv_store("memory"), MemoryKeyValueStore)

    def test_file(self, tmp_path):
        store = create_kv_store("file", storage_path=str(tmp_path / "x.json"))
        assert isinstance(store, FileKeyValueStore)

    def test_redis(self):
        store = create_kv_store("redis", redis_url="redis://localhost:6379/0")
        assert isinstance(store, RedisKeyValueStore)
        assert store.get_storage_key("shortened_urls") == "shortlinks:shortened_urls"

    def test_redis_requires_url(self):
        with pytest.raises(ValueError, match="redis_url"):
            create_kv_store("redis")

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_kv_store("sqlite")
