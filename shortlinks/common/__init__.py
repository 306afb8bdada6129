"""Common utilities for the short link service."""

from .validators import (
    is_alphanumeric_code,
    is_valid_url,
    validate_custom_code,
    validate_validity_minutes,
)
from .logging_config import setup_logging, RecentLogHandler

__all__ = [
    "is_alphanumeric_code",
    "is_valid_url",
    "validate_custom_code",
    "validate_validity_minutes",
    "setup_logging",
    "RecentLogHandler",
]
