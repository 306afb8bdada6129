"""Key-value persistence backends."""

from .base import KeyValueStoreBase
from .memory import MemoryKeyValueStore
from .file_store import FileKeyValueStore
from .redis_store import RedisKeyValueStore
from .factory import create_kv_store

__all__ = [
    "KeyValueStoreBase",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "RedisKeyValueStore",
    "create_kv_store",
]
