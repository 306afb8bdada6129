"""Tests for common utilities."""

import logging

import pytest
from shortlinks.common.validators import (
    is_alphanumeric_code,
    is_valid_url,
    validate_custom_code,
    validate_validity_minutes,
)
from shortlinks.common.logging_config import RecentLogHandler, get_recent_log_handler, setup_logging
from shortlinks.errors import InvalidFormatError, InvalidLengthError, InvalidValidityPeriodError


class TestValidators:
    """Test validation utilities."""
    
    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://example.com")
        assert valid
        
        valid, _ = is_valid_url("http://example.com/path")
        assert valid
        
        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid
        
        valid, _ = is_valid_url("ftp://files.example.com/pub")
        assert valid
    
    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()
        
        valid, _ = is_valid_url("not-a-url")
        assert not valid
        
        valid, _ = is_valid_url("example.com/path")
        assert not valid
        
        valid, _ = is_valid_url("https://")
        assert not valid
        
        valid, _ = is_valid_url("https://exa mple.com")
        assert not valid
        
        valid, _ = is_valid_url("mailto:someone@example.com")
        assert not valid
    
    def test_invalid_port(self):
        valid, error = is_valid_url("https://example.com:99999/")
        assert not valid
        assert "invalid" in error.lower()
    
    def test_valid_custom_codes(self):
        validate_custom_code("abc")
        validate_custom_code("MyLink2024")
        validate_custom_code("a" * 20)
    
    def test_invalid_custom_codes(self):
        with pytest.raises(InvalidLengthError):
            validate_custom_code("ab")
        
        with pytest.raises(InvalidLengthError):
            validate_custom_code("a" * 21)
        
        with pytest.raises(InvalidFormatError):
            validate_custom_code("a b!")
        
        with pytest.raises(InvalidFormatError):
            validate_custom_code("test_code")
        
        with pytest.raises(InvalidFormatError):
            validate_custom_code("abc\n")
        
        with pytest.raises(InvalidFormatError):
            validate_custom_code("abcd\n")
    
    def test_is_alphanumeric_code(self):
        """The whole string must match, not just a prefix before a newline."""
        assert is_alphanumeric_code("abc123")
        assert is_alphanumeric_code("ABC123")
        
        assert not is_alphanumeric_code("")
        assert not is_alphanumeric_code("abc 123")
        assert not is_alphanumeric_code("abc-123")
        assert not is_alphanumeric_code("abc_123")
        assert not is_alphanumeric_code("abc123\n")
        assert not is_alphanumeric_code("abc\r\n")
        assert not is_alphanumeric_code(None)
    
    @pytest.mark.parametrize("minutes", [1, 30, 10080])
    def test_valid_validity(self, minutes):
        validate_validity_minutes(minutes)
    
    @pytest.mark.parametrize("minutes", [0, -5, 10081, 2.5, "30", True])
    def test_invalid_validity(self, minutes):
        with pytest.raises(InvalidValidityPeriodError):
            validate_validity_minutes(minutes)


class TestRecentLogs:
    """Test the in-memory recent log buffer."""
    
    def test_newest_first_and_level_filter(self):
        handler = RecentLogHandler(capacity=10)
        logger = logging.getLogger("shortlinks.tests.recent")
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        try:
            logger.info("first")
            logger.warning("second")
            logger.info("third")
        finally:
            logger.removeHandler(handler)
        
        logs = handler.get_logs()
        assert [entry["message"] for entry in logs] == ["third", "second", "first"]
        
        warnings = handler.get_logs(level="warning")
        assert [entry["message"] for entry in warnings] == ["second"]
        
        assert len(handler.get_logs(limit=2)) == 2
    
    def test_capacity_bounds_buffer(self):
        handler = RecentLogHandler(capacity=3)
        logger = logging.getLogger("shortlinks.tests.capacity")
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            for i in range(5):
                logger.info(f"message {i}")
        finally:
            logger.removeHandler(handler)
        
        messages = [entry["message"] for entry in handler.get_logs()]
        assert messages == ["message 4", "message 3", "message 2"]
        
        handler.clear()
        assert handler.get_logs() == []
    
    def test_setup_logging_attaches_recent_handler(self):
        logger = setup_logging(level="INFO", recent_capacity=5)
        
        handler = get_recent_log_handler(logger)
        assert handler is not None
        assert handler.entries.maxlen == 5
