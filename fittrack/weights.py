import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

from fittrack.clock import Clock, iso_instant, parse_date, parse_instant
from fittrack.errors import InvalidInput
from fittrack.store import WEIGHTS, JsonStore

logger = logging.getLogger(__name__)

MAX_WEIGHT_KG = 200.0
HISTORY_LIMIT = 30


@dataclass(frozen=True)
class WeightEntry:
    date: date
    weight_kg: float
    recorded_at: datetime


def _as_float(v: Any) -> float | None:
    if v is None or isinstance(v, bool):
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def normalize_weight(day: date, raw: Any) -> WeightEntry | None:
    # Older records stored a bare number, or {"weight", "date", "timestamp"}.
    if isinstance(raw, dict):
        weight = _as_float(raw.get("weight_kg", raw.get("weight")))
        recorded = parse_instant(raw.get("recorded_at")) or parse_instant(raw.get("timestamp"))
        recorded = recorded or parse_instant(raw.get("date"))
    else:
        weight = _as_float(raw)
        recorded = None
    if weight is None or weight <= 0:
        return None
    if recorded is None:
        recorded = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return WeightEntry(date=day, weight_kg=weight, recorded_at=recorded)


def load_weights(store: JsonStore) -> dict[date, WeightEntry]:
    entries: dict[date, WeightEntry] = {}
    for key, raw in store.get_dict(WEIGHTS).items():
        day = parse_date(key)
        entry = normalize_weight(day, raw) if day else None
        if entry is None:
            logger.warning("Dropping unreadable weight entry for '%s'", key)
            continue
        entries[day] = entry
    return entries


def save_weights(store: JsonStore, entries: dict[date, WeightEntry]) -> None:
    store.set(
        WEIGHTS,
        {
            day.isoformat(): {"weight_kg": e.weight_kg, "recorded_at": iso_instant(e.recorded_at)}
            for day, e in sorted(entries.items())
        },
    )


def validate_weight(value: Any) -> float:
    weight = _as_float(value)
    if weight is None or weight != weight or weight <= 0 or weight > MAX_WEIGHT_KG:
        raise InvalidInput(f"Please enter a valid weight between 1 and {MAX_WEIGHT_KG:.0f} kg")
    return weight


def add_weight(store: JsonStore, clock: Clock, value: Any) -> tuple[WeightEntry, WeightEntry | None]:
    """Record today's weight. Returns the new entry and the one it replaced."""
    weight = validate_weight(value)
    now = clock.now()
    today = clock.today()
    entries = load_weights(store)
    previous = entries.get(today)
    entry = WeightEntry(date=today, weight_kg=weight, recorded_at=now)
    entries[today] = entry
    save_weights(store, entries)
    if previous is not None:
        logger.info("Weight for %s updated from %.1f to %.1f kg", today, previous.weight_kg, weight)
    return entry, previous


def delete_weight(store: JsonStore, day: date) -> bool:
    entries = load_weights(store)
    if day not in entries:
        return False
    del entries[day]
    save_weights(store, entries)
    return True


def newest_first(entries: dict[date, WeightEntry]) -> list[WeightEntry]:
    return sorted(entries.values(), key=lambda e: (e.recorded_at, e.date), reverse=True)


def weight_history(entries: dict[date, WeightEntry], starting_weight_kg: float) -> list[dict[str, Any]]:
    """Newest-first rows with change vs. the previous entry (positive = lost)."""
    ordered = newest_first(entries)
    rows: list[dict[str, Any]] = []
    for idx, entry in enumerate(ordered[:HISTORY_LIMIT]):
        previous = ordered[idx + 1].weight_kg if idx + 1 < len(ordered) else starting_weight_kg
        rows.append(
            {
                "date": entry.date.isoformat(),
                "weight_kg": entry.weight_kg,
                "recorded_at": iso_instant(entry.recorded_at),
                "change_kg": round(previous - entry.weight_kg, 1),
                "total_lost_kg": round(starting_weight_kg - entry.weight_kg, 1),
            }
        )
    return rows
