from datetime import date, datetime, timezone
from typing import Any, Callable


def _local_now() -> datetime:
    return datetime.now().astimezone()


class Clock:
    """Source of "now"; tests pass a fixed callable."""

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or _local_now

    def now(self) -> datetime:
        return self._now()

    def today(self) -> date:
        return self.now().date()


def days_between(start: date, end: date) -> int:
    return (end - start).days


def parse_date(value: Any) -> date | None:
    """Calendar date from ``YYYY-MM-DD`` or a full ISO timestamp; None if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_instant(value: Any) -> datetime | None:
    """Aware datetime from an ISO-8601 string or epoch milliseconds."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def iso_instant(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
