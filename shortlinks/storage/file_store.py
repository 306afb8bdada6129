"""JSON file key-value store."""

import asyncio
import json
import logging
import os
import tempfile
from typing import Dict, Optional

from .base import KeyValueStoreBase


class FileKeyValueStore(KeyValueStoreBase):
    """Keeps every key in one JSON document on disk.
    
    Writes go to a temporary file that replaces the target, so a crash
    mid-write leaves the previous document intact. Blocking file IO runs in
    a worker thread.
    """
    
    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """Initialize file store.
        
        Args:
            path: Location of the JSON document
            logger: Optional logger instance
        """
        self.path = os.path.abspath(path)
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()
    
    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data
    
    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".kv-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    
    def _set_sync(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
    
    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)
    
    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set_sync, key, value)
        self.logger.debug(f"Wrote key '{key}' to {self.path}")
    
    async def health_check(self) -> bool:
        directory = os.path.dirname(self.path)
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Storage directory {directory} unavailable: {e}")
            return False
        return os.access(directory, os.W_OK)
