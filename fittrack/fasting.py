"""Fasting sessions.

Completed sessions are grouped by the calendar date the fast started on.
A running fast is stored separately as ``activeFasting``; its elapsed time
is always recomputed from the stored start instant.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from fittrack.clock import Clock, iso_instant, parse_date, parse_instant
from fittrack.errors import InvalidInput
from fittrack.store import ACTIVE_FASTING, FASTING_DATA, JsonStore

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 30


@dataclass(frozen=True)
class FastingSession:
    started_at: datetime
    ended_at: datetime
    duration_hours: float

    def to_record(self) -> dict[str, Any]:
        return {
            "started_at": iso_instant(self.started_at),
            "ended_at": iso_instant(self.ended_at),
            "duration_hours": self.duration_hours,
        }


@dataclass(frozen=True)
class ActiveFast:
    started_at: datetime
    start_date: date


def hours_between(start: datetime, end: datetime) -> float:
    return max(0.0, (end - start).total_seconds() / 3600)


def format_duration(elapsed: timedelta) -> str:
    total = max(0, int(elapsed.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def normalize_session(raw: Any) -> FastingSession | None:
    if not isinstance(raw, dict):
        return None
    started = parse_instant(raw.get("started_at")) or parse_instant(raw.get("startTimestamp"))
    ended = parse_instant(raw.get("ended_at")) or parse_instant(raw.get("endTimestamp"))
    if started is None or ended is None:
        return None
    return FastingSession(started_at=started, ended_at=ended, duration_hours=hours_between(started, ended))


def load_fasting(store: JsonStore) -> dict[date, list[FastingSession]]:
    out: dict[date, list[FastingSession]] = {}
    for key, rows in store.get_dict(FASTING_DATA).items():
        day = parse_date(key)
        if day is None or not isinstance(rows, list):
            logger.warning("Dropping unreadable fasting entries for '%s'", key)
            continue
        sessions = [s for s in (normalize_session(r) for r in rows) if s is not None]
        if sessions:
            out[day] = sessions
    return out


def save_fasting(store: JsonStore, data: dict[date, list[FastingSession]]) -> None:
    store.set(
        FASTING_DATA,
        {day.isoformat(): [s.to_record() for s in sessions] for day, sessions in sorted(data.items()) if sessions},
    )


def _append(store: JsonStore, day: date, session: FastingSession) -> FastingSession:
    data = load_fasting(store)
    data.setdefault(day, []).append(session)
    save_fasting(store, data)
    return session


def active_fast(store: JsonStore) -> ActiveFast | None:
    raw = store.get(ACTIVE_FASTING)
    if not isinstance(raw, dict):
        return None
    started = parse_instant(raw.get("started_at")) or parse_instant(raw.get("startTime"))
    if started is None:
        logger.warning("Discarding unreadable active fasting record")
        return None
    start_date = parse_date(raw.get("start_date") or raw.get("startDate")) or started.date()
    return ActiveFast(started_at=started, start_date=start_date)


def start_fasting(store: JsonStore, clock: Clock) -> ActiveFast:
    if active_fast(store) is not None:
        raise InvalidInput("A fast is already in progress.")
    now = clock.now()
    fast = ActiveFast(started_at=now, start_date=now.date())
    store.set(ACTIVE_FASTING, {"started_at": iso_instant(now), "start_date": fast.start_date.isoformat()})
    logger.info("Fast started at %s", iso_instant(now))
    return fast


def end_fasting(store: JsonStore, clock: Clock) -> FastingSession | None:
    """Close the running fast. ``None`` when there was nothing to end."""
    fast = active_fast(store)
    if fast is None:
        store.remove(ACTIVE_FASTING)
        return None
    now = clock.now()
    session = FastingSession(started_at=fast.started_at, ended_at=now, duration_hours=hours_between(fast.started_at, now))
    _append(store, fast.start_date, session)
    store.remove(ACTIVE_FASTING)
    logger.info("Fast ended after %.1f hours", session.duration_hours)
    return session


def elapsed(store: JsonStore, clock: Clock) -> timedelta | None:
    fast = active_fast(store)
    if fast is None:
        return None
    return max(timedelta(0), clock.now() - fast.started_at)


def parse_clock_time(value: Any, field: str) -> tuple[int, int]:
    text = str(value or "").strip()
    if not text:
        raise InvalidInput("Please enter both start and end times.")
    try:
        hour_s, minute_s = text.split(":")[:2]
        hour, minute = int(hour_s), int(minute_s)
    except ValueError as err:
        raise InvalidInput(f"Invalid {field} '{text}', use HH:MM.") from err
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidInput(f"Invalid {field} '{text}', use HH:MM.")
    return hour, minute


def add_manual_fasting(store: JsonStore, clock: Clock, start_time: Any, end_time: Any) -> FastingSession:
    """Log a fast from today's ``HH:MM`` times; an end not after the start means the next day."""
    start_h, start_m = parse_clock_time(start_time, "start time")
    end_h, end_m = parse_clock_time(end_time, "end time")
    now = clock.now()
    started = now.replace(hour=start_h, minute=start_m, second=0, microsecond=0)
    ended = now.replace(hour=end_h, minute=end_m, second=0, microsecond=0)
    if ended <= started:
        ended += timedelta(days=1)
    session = FastingSession(started_at=started, ended_at=ended, duration_hours=hours_between(started, ended))
    return _append(store, started.date(), session)


def delete_fasting(store: JsonStore, day: date, index: int) -> bool:
    data = load_fasting(store)
    sessions = data.get(day)
    if not sessions or index < 0 or index >= len(sessions):
        return False
    sessions.pop(index)
    if not sessions:
        del data[day]
    save_fasting(store, data)
    return True


def day_total(data: dict[date, list[FastingSession]], day: date) -> dict[str, Any]:
    sessions = data.get(day, [])
    return {
        "date": day.isoformat(),
        "total_hours": sum(s.duration_hours for s in sessions),
        "session_count": len(sessions),
    }


def fasting_history(data: dict[date, list[FastingSession]]) -> list[dict[str, Any]]:
    rows = [
        {"date": day.isoformat(), "index": idx, **session.to_record()}
        for day, sessions in data.items()
        for idx, session in enumerate(sessions)
    ]
    rows.sort(key=lambda r: r["ended_at"], reverse=True)
    return rows[:HISTORY_LIMIT]
