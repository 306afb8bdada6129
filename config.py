"""Configuration management for the short link service."""

from datetime import tzinfo
from typing import Literal, Optional
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""
    
    # Storage settings
    storage_backend: Literal["memory", "file", "redis"] = Field(
        default="file",
        description="Key-value backend holding the link table"
    )
    
    storage_path: str = Field(
        default="data/shortlinks.json",
        description="JSON document used by the file backend"
    )
    
    storage_key: str = Field(
        default="shortened_urls",
        description="Key the serialized link table is stored under"
    )
    
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the redis backend"
    )
    
    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=9200,
        description="Port to listen on"
    )
    
    # Short link settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for generating short URLs"
    )
    
    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )
    
    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )
    
    max_collision_retries: int = Field(
        default=10,
        ge=1,
        description="Draws per code length before widening generated codes"
    )
    
    default_validity_minutes: int = Field(
        default=30,
        ge=1,
        le=10080,
        description="Validity period used when a request does not give one"
    )
    
    stats_timezone: str = Field(
        default="",
        description="IANA timezone for hourly/daily click stats (empty = server local time)"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    recent_log_capacity: int = Field(
        default=1000,
        ge=1,
        description="Number of log records kept for GET /api/logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }
    
    def get_stats_tz(self) -> Optional[tzinfo]:
        """Timezone for click aggregation, or None for local time."""
        return ZoneInfo(self.stats_timezone) if self.stats_timezone else None


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
