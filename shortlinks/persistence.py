"""Load and save the whole link table through a key-value backend."""

import json
import logging
from typing import Dict, Optional

from .models import LinkRecord
from .storage.base import KeyValueStoreBase

DEFAULT_STORAGE_KEY = "shortened_urls"

LinkTable = Dict[str, LinkRecord]


class TablePersistence:
    """Serializes the link table as one JSON blob under a fixed key.
    
    Persistence is best-effort: load falls back to an empty table and save
    failures are logged, never raised. The in-memory table stays
    authoritative for the life of the process.
    """
    
    def __init__(
        self,
        kv_store: KeyValueStoreBase,
        key: str = DEFAULT_STORAGE_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        self.kv_store = kv_store
        self.key = key
        self.logger = logger or logging.getLogger(__name__)
    
    @staticmethod
    def dumps(table: LinkTable) -> str:
        return json.dumps({code: record.to_dict() for code, record in table.items()})
    
    @staticmethod
    def loads(blob: str) -> LinkTable:
        """Parse a serialized table.
        
        Raises:
            ValueError: If the blob is not a JSON object of records
        """
        raw = json.loads(blob)
        if not isinstance(raw, dict):
            raise ValueError("Stored link table is not a JSON object")
        
        table: LinkTable = {}
        for code, data in raw.items():
            try:
                record = LinkRecord.from_dict(data)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Malformed record for '{code}': {e}") from e
            table[record.short_code] = record
        return table
    
    async def load(self) -> LinkTable:
        """Read the table; any failure yields an empty table."""
        try:
            blob = await self.kv_store.get(self.key)
        except Exception as e:
            self.logger.error(f"Failed to load URLs from storage: {e}")
            return {}
        
        if blob is None:
            self.logger.info("No stored URLs found, starting with an empty table")
            return {}
        
        try:
            table = self.loads(blob)
        except ValueError as e:
            self.logger.error(f"Failed to parse stored URLs: {e}")
            return {}
        
        self.logger.info(f"Loaded {len(table)} URLs from storage")
        return table
    
    async def save(self, table: LinkTable) -> bool:
        """Write the whole table.
        
        Returns:
            True if the write succeeded
        """
        try:
            await self.kv_store.set(self.key, self.dumps(table))
        except Exception as e:
            self.logger.error(f"Failed to save URLs to storage: {e}")
            return False
        
        self.logger.debug(f"Saved {len(table)} URLs to storage")
        return True
