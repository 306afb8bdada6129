"""In-process key-value store."""

from typing import Dict, Optional

from .base import KeyValueStoreBase


class MemoryKeyValueStore(KeyValueStoreBase):
    """Dictionary-backed store; contents live as long as the process."""
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
    
    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)
    
    async def set(self, key: str, value: str) -> None:
        self.data[key] = value
    
    async def health_check(self) -> bool:
        return True
