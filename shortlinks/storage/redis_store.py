"""Redis key-value store."""

import logging
from typing import Optional

import redis.asyncio as redis

from .base import KeyValueStoreBase


class RedisKeyValueStore(KeyValueStoreBase):
    """Stores values as plain Redis strings under a namespaced key."""
    
    def __init__(
        self,
        redis_url: str,
        namespace: str = "shortlinks",
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.
        
        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            namespace: Prefix added to every key
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = None
    
    async def connect(self) -> None:
        """Connect to Redis; the client is kept only once it answers a ping."""
        client = redis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception:
            await client.aclose()
            raise
        self.client = client
        self.logger.info("Connected to Redis")
    
    def get_storage_key(self, key: str) -> str:
        """Namespace a storage key."""
        return f"{self.namespace}:{key}"
    
    async def _client(self) -> redis.Redis:
        if self.client is None:
            await self.connect()
        return self.client
    
    async def get(self, key: str) -> Optional[str]:
        client = await self._client()
        return await client.get(self.get_storage_key(key))
    
    async def set(self, key: str, value: str) -> None:
        client = await self._client()
        await client.set(self.get_storage_key(key), value)
    
    async def health_check(self) -> bool:
        try:
            client = await self._client()
            return bool(await client.ping())
        except Exception as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False
    
    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
