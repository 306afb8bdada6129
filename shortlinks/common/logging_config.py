"""Logging configuration for the short link service."""

import logging
import sys
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

LOGGER_NAME = "shortlinks"


class RecentLogHandler(logging.Handler):
    """Keeps the newest log records in memory, newest first."""
    
    def __init__(self, capacity: int = 1000, level: int = logging.NOTSET):
        super().__init__(level)
        self.entries: Deque[Dict[str, Any]] = deque(maxlen=capacity)
    
    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.entries.appendleft({
                "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            })
        except Exception:
            self.handleError(record)
    
    def get_logs(self, level: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        """Return up to ``limit`` entries, optionally only those at ``level``."""
        entries = list(self.entries)
        if level:
            level = level.upper()
            entries = [entry for entry in entries if entry["level"] == level]
        return entries[:limit]
    
    def clear(self) -> int:
        """Drop every entry and return how many there were."""
        count = len(self.entries)
        self.entries.clear()
        return count


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    recent_capacity: int = 1000,
) -> logging.Logger:
    """Setup logging configuration.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format
        recent_capacity: Number of records kept for the recent-log view
        
    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    
    # Remove existing handlers
    logger.handlers.clear()
    
    if json_format:
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    logger.addHandler(RecentLogHandler(capacity=recent_capacity))
    
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)


def get_recent_log_handler(logger: Optional[logging.Logger] = None) -> Optional[RecentLogHandler]:
    """Find the recent-log handler attached by :func:`setup_logging`."""
    logger = logger or get_logger()
    for handler in logger.handlers:
        if isinstance(handler, RecentLogHandler):
            return handler
    return None
