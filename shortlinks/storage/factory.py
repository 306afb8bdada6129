"""Build a key-value backend from configuration values."""

import logging
from typing import Optional

from .base import KeyValueStoreBase
from .file_store import FileKeyValueStore
from .memory import MemoryKeyValueStore
from .redis_store import RedisKeyValueStore

BACKENDS = ("memory", "file", "redis")


def create_kv_store(
    backend: str,
    storage_path: str = "data/shortlinks.json",
    redis_url: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> KeyValueStoreBase:
    """Instantiate the backend named by ``backend``.
    
    Raises:
        ValueError: Unknown backend, or redis selected without a URL
    """
    backend = backend.lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "file":
        return FileKeyValueStore(storage_path, logger=logger)
    if backend == "redis":
        if not redis_url:
            raise ValueError("redis_url is required for the redis storage backend")
        return RedisKeyValueStore(redis_url, logger=logger)
    raise ValueError(f"Unknown storage backend '{backend}' (expected one of {', '.join(BACKENDS)})")
