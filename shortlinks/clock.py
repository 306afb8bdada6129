"""Time sources for the short link store."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class FrozenClock:
    """Manually advanced clock, used to simulate elapsed time."""
    
    def __init__(self, start: Optional[datetime] = None):
        self.current = start or utc_now()
    
    def __call__(self) -> datetime:
        return self.current
    
    def advance(self, **kwargs) -> datetime:
        """Move the clock forward by a ``timedelta(**kwargs)``."""
        self.current = self.current + timedelta(**kwargs)
        return self.current
