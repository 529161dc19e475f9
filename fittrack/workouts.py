import logging
from datetime import date
from typing import Any

from fittrack import DAY_TYPES
from fittrack.clock import parse_date
from fittrack.store import CHECKLIST, COMPLETED_WORKOUTS, VISITED_LINKS, JsonStore

logger = logging.getLogger(__name__)

CHECKLIST_ITEMS = {
    "office": ("warmup", "main", "done"),
    "nonoffice": ("warmup", "main", "cooldown", "done"),
}


def load_completions(store: JsonStore) -> dict[date, dict[str, Any]]:
    out: dict[date, dict[str, Any]] = {}
    for key, raw in store.get_dict(COMPLETED_WORKOUTS).items():
        day = parse_date(key)
        if day is None:
            logger.warning("Dropping unreadable completion record '%s'", key)
            continue
        day_type = raw.get("type") if isinstance(raw, dict) else None
        out[day] = {
            "date": day.isoformat(),
            "completed": True,
            "day_type": day_type if day_type in DAY_TYPES else None,
        }
    return out


def mark_workout_complete(store: JsonStore, day: date, day_type: str) -> bool:
    """Mark ``day`` done. Returns False when it already was."""
    completions = store.get_dict(COMPLETED_WORKOUTS)
    key = day.isoformat()
    if key in completions:
        return False
    completions[key] = {"completed": True, "type": day_type, "date": key}
    store.set(COMPLETED_WORKOUTS, completions)
    logger.info("Workout for %s marked complete (%s)", key, day_type)
    return True


def empty_checklist(day: date) -> dict[str, Any]:
    checklist: dict[str, Any] = {
        day_type: {item: False for item in items} for day_type, items in CHECKLIST_ITEMS.items()
    }
    checklist["date"] = day.isoformat()
    return checklist


def load_checklist(store: JsonStore, today: date) -> dict[str, Any]:
    """Today's checklist; anything saved on another day starts over."""
    raw = store.get_dict(CHECKLIST)
    checklist = empty_checklist(today)
    if raw.get("date") != today.isoformat():
        return checklist
    for day_type, items in CHECKLIST_ITEMS.items():
        saved = raw.get(day_type)
        if isinstance(saved, dict):
            for item in items:
                checklist[day_type][item] = bool(saved.get(item, False))
    return checklist


def save_checklist(store: JsonStore, today: date, payload: dict[str, Any]) -> dict[str, Any]:
    checklist = empty_checklist(today)
    for day_type, items in CHECKLIST_ITEMS.items():
        values = payload.get(day_type)
        if isinstance(values, dict):
            for item in items:
                checklist[day_type][item] = bool(values.get(item, False))
    store.set(CHECKLIST, checklist)
    return checklist


def _day_key(program_day: int) -> str:
    return f"day{program_day}"


def visited_links(store: JsonStore, program_day: int) -> list[str]:
    day_links = store.get_dict(VISITED_LINKS).get(_day_key(program_day))
    if not isinstance(day_links, dict):
        return []
    return sorted(k for k, v in day_links.items() if v)


def mark_link_visited(store: JsonStore, program_day: int, link_key: str) -> list[str]:
    links = store.get_dict(VISITED_LINKS)
    day_links = links.get(_day_key(program_day))
    if not isinstance(day_links, dict):
        day_links = {}
    day_links[link_key] = True
    links[_day_key(program_day)] = day_links
    store.set(VISITED_LINKS, links)
    return visited_links(store, program_day)
