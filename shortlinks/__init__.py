"""Core engine for the short link service."""

from .errors import (
    ShortLinkError,
    InvalidUrlError,
    InvalidFormatError,
    InvalidLengthError,
    CodeTakenError,
    InvalidValidityPeriodError,
    CodeGenerationError,
)
from .models import ClickEvent, LinkRecord, LinkView, LinkStats
from .shortcode import ShortCodeGenerator
from .persistence import TablePersistence
from .store import ShortLinkStore

__all__ = [
    "ShortLinkError",
    "InvalidUrlError",
    "InvalidFormatError",
    "InvalidLengthError",
    "CodeTakenError",
    "InvalidValidityPeriodError",
    "CodeGenerationError",
    "ClickEvent",
    "LinkRecord",
    "LinkView",
    "LinkStats",
    "ShortCodeGenerator",
    "TablePersistence",
    "ShortLinkStore",
]
