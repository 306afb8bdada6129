"""Click aggregation for link statistics."""

from datetime import tzinfo
from typing import Dict, Iterable, Optional

from .models import ClickEvent


def clicks_by_hour(history: Iterable[ClickEvent], tz: Optional[tzinfo] = None) -> Dict[int, int]:
    """Count clicks per hour of day (0-23), ignoring the calendar date.

    Args:
        history: Click events in recorded order
        tz: Timezone used to read the hour; the local zone when None

    Returns:
        Mapping of hour to count, keys in order of first occurrence
    """
    hourly: Dict[int, int] = {}
    for click in history:
        hour = click.timestamp.astimezone(tz).hour
        hourly[hour] = hourly.get(hour, 0) + 1
    return hourly


def clicks_by_day(history: Iterable[ClickEvent], tz: Optional[tzinfo] = None) -> Dict[str, int]:
    """Count clicks per calendar day, keyed by ISO date (``YYYY-MM-DD``)."""
    daily: Dict[str, int] = {}
    for click in history:
        day = click.timestamp.astimezone(tz).date().isoformat()
        daily[day] = daily.get(day, 0) + 1
    return daily
