"""Validation utilities for the short link store."""

import re
from urllib.parse import urlparse
from typing import Tuple

from ..errors import InvalidFormatError, InvalidLengthError, InvalidValidityPeriodError

SHORT_CODE_PATTERN = re.compile(r"[A-Za-z0-9]+")
MIN_CUSTOM_CODE_LENGTH = 3
MAX_CUSTOM_CODE_LENGTH = 20
MIN_VALIDITY_MINUTES = 1
MAX_VALIDITY_MINUTES = 10080  # one week


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Only the shape is checked: an absolute URL with a scheme and an
    authority. Reachability is never tested.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if any(ch.isspace() for ch in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)

        if not result.scheme:
            return False, "URL must include a scheme (e.g. https://)"

        if not result.netloc or not result.hostname:
            return False, "URL must have a valid host"

        # Raises ValueError for out-of-range or non-numeric ports
        result.port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_alphanumeric_code(code: str) -> bool:
    """True if every character of ``code`` is an ASCII letter or digit."""
    return isinstance(code, str) and SHORT_CODE_PATTERN.fullmatch(code) is not None


def validate_custom_code(
    short_code: str,
    min_length: int = MIN_CUSTOM_CODE_LENGTH,
    max_length: int = MAX_CUSTOM_CODE_LENGTH,
) -> None:
    """Validate a caller-supplied short code.

    The character check runs before the length check, so ``"a b!"`` is a
    format error and ``"ab"`` is a length error.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Raises:
        InvalidFormatError: If the code is not purely alphanumeric
        InvalidLengthError: If the code length is out of range
    """
    if not is_alphanumeric_code(short_code):
        raise InvalidFormatError("Custom short code must be alphanumeric")

    if len(short_code) < min_length or len(short_code) > max_length:
        raise InvalidLengthError(
            f"Custom short code must be between {min_length}-{max_length} characters"
        )


def validate_validity_minutes(validity_minutes: int) -> None:
    """Check that a validity period is a whole number of minutes within range.

    Raises:
        InvalidValidityPeriodError: If the value is not an int in range
    """
    if isinstance(validity_minutes, bool) or not isinstance(validity_minutes, int):
        raise InvalidValidityPeriodError("Validity period must be a whole number of minutes")

    if not MIN_VALIDITY_MINUTES <= validity_minutes <= MAX_VALIDITY_MINUTES:
        raise InvalidValidityPeriodError(
            f"Validity period must be between {MIN_VALIDITY_MINUTES} and "
            f"{MAX_VALIDITY_MINUTES} minutes"
        )
