from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from data.errors import UnknownSelectorError


@dataclass(frozen=True)
class TimeRange:
    start: datetime
    end: datetime

    @property
    def start_ms(self) -> int:
        return int(self.start.timestamp() * 1000)

    @property
    def end_ms(self) -> int:
        return int(self.end.timestamp() * 1000)


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


# Chronological; an end of None means "up to now" (the current update).
UPDATE_DATE_RANGES: dict[str, tuple[datetime, Optional[datetime]]] = {
    "U42": (_utc(2023, 3, 1), _utc(2023, 6, 1)),
    "U43": (_utc(2023, 6, 1), _utc(2023, 8, 30)),
    "U44": (_utc(2023, 8, 30), _utc(2023, 11, 29)),
    "U45": (_utc(2023, 11, 29), _utc(2024, 2, 28)),
    "U46": (_utc(2024, 2, 28), None),
}


def supported_updates() -> list[str]:
    return list(UPDATE_DATE_RANGES)


def latest_update() -> str:
    return supported_updates()[-1]


def resolve(selector: str, now: Optional[datetime] = None) -> TimeRange:
    """Map an update label to its reporting window; the open-ended entry ends at `now`."""
    try:
        start, end = UPDATE_DATE_RANGES[selector]
    except (KeyError, TypeError):
        raise UnknownSelectorError(selector) from None
    if end is None:
        end = now or datetime.now(timezone.utc)
    return TimeRange(start=start, end=end)
