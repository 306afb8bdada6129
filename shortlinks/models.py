"""Data models for the short link store."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional


def _parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string (or pass through a datetime) as an aware datetime."""
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class ClickEvent:
    """A single recorded access to a short code."""

    timestamp: datetime
    referrer: Optional[str] = None
    user_agent: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "referrer": self.referrer,
            "user_agent": self.user_agent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClickEvent":
        """Create from dictionary."""
        return cls(
            timestamp=_parse_timestamp(data["timestamp"]),
            referrer=data.get("referrer"),
            user_agent=data.get("user_agent"),
        )


@dataclass
class LinkRecord:
    """A shortened link and its click history.

    Everything except ``clicks`` and ``click_history`` is fixed at creation.
    Clicks are only added through :meth:`record_click` so that ``clicks``
    always equals ``len(click_history)``.
    """

    original_url: str
    short_code: str
    created_at: datetime
    expires_at: datetime
    validity_minutes: int
    clicks: int = 0
    click_history: List[ClickEvent] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        original_url: str,
        short_code: str,
        created_at: datetime,
        validity_minutes: int,
    ) -> "LinkRecord":
        """Build a fresh record whose expiry is derived from the validity period."""
        return cls(
            original_url=original_url,
            short_code=short_code,
            created_at=created_at,
            expires_at=created_at + timedelta(minutes=validity_minutes),
            validity_minutes=validity_minutes,
        )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def record_click(self, event: ClickEvent) -> None:
        """Append a click event and bump the counter."""
        self.click_history.append(event)
        self.clicks += 1

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_url": self.original_url,
            "short_code": self.short_code,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "validity_minutes": self.validity_minutes,
            "clicks": self.clicks,
            "click_history": [event.to_dict() for event in self.click_history],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LinkRecord":
        """Create from dictionary.

        The counter is rebuilt from the history so a hand-edited blob cannot
        break the ``clicks == len(click_history)`` invariant.
        """
        history = [ClickEvent.from_dict(event) for event in data.get("click_history") or []]
        return cls(
            original_url=data["original_url"],
            short_code=data["short_code"],
            created_at=_parse_timestamp(data["created_at"]),
            expires_at=_parse_timestamp(data["expires_at"]),
            validity_minutes=int(data["validity_minutes"]),
            clicks=len(history),
            click_history=history,
        )


@dataclass
class LinkView:
    """A record as shown in listings, with derived fields."""

    record: LinkRecord
    short_url: str
    is_expired: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.record.to_dict(),
            "short_url": self.short_url,
            "is_expired": self.is_expired,
        }


@dataclass
class LinkStats(LinkView):
    """A record with its click aggregations."""

    clicks_by_hour: Dict[int, int] = field(default_factory=dict)
    clicks_by_day: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "clicks_by_hour": dict(self.clicks_by_hour),
            "clicks_by_day": dict(self.clicks_by_day),
        }
