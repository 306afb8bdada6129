"""Abstract base class for key-value persistence backends."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreBase(ABC):
    """String-keyed durable store the short link table is written to."""
    
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Read the value stored under a key.
        
        Args:
            key: Storage key
            
        Returns:
            The stored string, or None if absent
        """
        pass
    
    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Write a value under a key, replacing any previous value.
        
        Args:
            key: Storage key
            value: Serialized value
        """
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is usable.
        
        Returns:
            True if healthy, False otherwise
        """
        pass
    
    async def close(self) -> None:
        """Release backend resources."""
        pass
