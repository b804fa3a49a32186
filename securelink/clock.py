"""Time capability: where validation gets "now" from."""

import math
from datetime import datetime, timezone
from typing import Protocol, Union


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Real wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock frozen at a single instant, for deterministic expiration checks."""

    def __init__(self, instant: Union[datetime, int, float]):
        if isinstance(instant, datetime):
            if instant.tzinfo is None:
                instant = instant.replace(tzinfo=timezone.utc)
            self.instant = instant
        else:
            self.instant = datetime.fromtimestamp(instant, tz=timezone.utc)

    def now(self) -> datetime:
        return self.instant

    def __repr__(self) -> str:
        return f"FixedClock({self.instant.isoformat()})"


def unix_seconds(instant: datetime) -> int:
    """Seconds since the epoch, rounded to the nearest second (halves round up)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return math.floor(instant.timestamp() + 0.5)
