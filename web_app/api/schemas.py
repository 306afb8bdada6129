"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)
    custom_code: Optional[str] = Field(None, description="Optional custom short code (3-20 alphanumeric characters)")
    validity_minutes: Optional[int] = Field(None, description="Link lifetime in minutes (1-10080, default 30)")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "custom_code": None,
                    "validity_minutes": 30
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "myrepo",
                    "validity_minutes": 1440
                }
            ]
        }
    }


class BatchShortenRequest(BaseModel):
    """Request to shorten several URLs at once."""
    
    items: List[ShortenRequest] = Field(..., min_length=1, max_length=5)


class ClickEventResponse(BaseModel):
    """A recorded click."""
    
    timestamp: datetime
    referrer: Optional[str] = None
    user_agent: Optional[str] = None


class LinkResponse(BaseModel):
    """A short link with derived fields."""
    
    short_code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    expires_at: datetime = Field(..., description="Expiry timestamp")
    validity_minutes: int
    clicks: int
    is_expired: bool
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_code": "abc123",
                    "short_url": "https://short.link/abc123",
                    "original_url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z",
                    "expires_at": "2024-01-01T12:30:00Z",
                    "validity_minutes": 30,
                    "clicks": 0,
                    "is_expired": False
                }
            ]
        }
    }


class LinkStatsResponse(LinkResponse):
    """A short link with its click history and aggregations."""
    
    click_history: List[ClickEventResponse]
    clicks_by_hour: Dict[int, int]
    clicks_by_day: Dict[str, int]


class LinkListResponse(BaseModel):
    """Every stored link."""
    
    count: int
    urls: List[LinkResponse]


class BatchItemResult(BaseModel):
    """Outcome of one batch item: a link or an error."""
    
    url: str
    link: Optional[LinkResponse] = None
    error: Optional[str] = None


class BatchShortenResponse(BaseModel):
    """Per-item results of a batch shorten request."""
    
    results: List[BatchItemResult]


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage backend status")
    total_urls: int
    timestamp: datetime = Field(..., description="Check timestamp")


class LogEntryResponse(BaseModel):
    """A recent log record."""
    
    timestamp: datetime
    level: str
    logger: str
    message: str


class ClearLogsResponse(BaseModel):
    """Result of clearing the recent log buffer."""
    
    cleared: int = Field(..., description="Number of entries removed")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
