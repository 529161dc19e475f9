"""Workout video catalog.

Shape: week number -> day type -> category -> ordered list of
``{"name": ..., "url": ...}``. Only week 1 ships by default; other weeks
fall back to it. The cycle-mode catalog has no week level.
"""

import logging
from pathlib import Path
from typing import Any

from fittrack import DAY_TYPES
from fittrack.store import read_json_file

logger = logging.getLogger(__name__)

CATEGORIES = ("warmup", "main", "hiit", "sprint", "resistance", "cooldown")
MAIN_POOL_CATEGORIES = ("main", "hiit", "sprint", "resistance")

Catalog = dict[int, dict[str, dict[str, list[dict[str, str]]]]]
CycleCatalog = dict[str, dict[str, list[dict[str, str]]]]


def _v(name: str, video_id: str) -> dict[str, str]:
    return {"name": name, "url": f"https://www.youtube.com/watch?v={video_id}"}


DEFAULT_CATALOG: Catalog = {
    1: {
        "office": {
            "warmup": [_v("5-Min Full Body Dynamic Warm-Up", "3qyWpJ34dWw")],
            "main": [_v("20-Min Full Body HIIT (No Equipment)", "HhdYlniTjvg")],
        },
        "nonoffice": {
            "warmup": [
                _v("5-Min Warm-Up for At-Home Workouts", "f3zOrYCwquE"),
                _v("10-Min Cardio Warm-Up (Alternative)", "M0uO8X3_tEA"),
            ],
            "main": [
                _v("40-Min Upper Body Strength (Dumbbells)", "3x1cZIExciE"),
                _v("45-Min Lower Body & Glutes (Dumbbells)", "DENm10PI8Xc"),
                _v("30-Min Core & Cardio Workout", "AG3lA6ZTfVc"),
            ],
            "hiit": [
                _v("20-Min Full Body HIIT (No Equipment)", "HhdYlniTjvg"),
                _v("25-Min High-Intensity Interval Training", "M0uO8X3_tEA"),
                _v("15-Min Quick HIIT Workout", "AG3lA6ZTfVc"),
                _v("30-Min HIIT Cardio & Strength", "XeYkCenyldM"),
            ],
            "sprint": [
                _v("15-Min Sprint Interval Training", "HhdYlniTjvg"),
                _v("20-Min HIIT Sprint Workout", "M0uO8X3_tEA"),
                _v("10-Min Quick Sprint Burst", "AG3lA6ZTfVc"),
            ],
            "resistance": [
                _v("30-Min Full Body Resistance Training", "PoLFAhJU-SY"),
                _v("25-Min Bodyweight Resistance Workout", "DENm10PI8Xc"),
                _v("35-Min Dumbbell Resistance Training", "AG3lA6ZTfVc"),
            ],
            "cooldown": [
                _v("20-Min Full Body Stretch & Mobility", "DppDOK2SvP0"),
                _v("20-Min Yoga Cool-Down", "v7AYKMP6rOE"),
            ],
        },
    },
}

DEFAULT_CYCLE_CATALOG: CycleCatalog = {
    "office": {
        "warmup": [_v("5-Min Gentle Warm-Up", "3qyWpJ34dWw")],
        "main": [
            _v("15-Min Gentle Yoga Flow", "v7AYKMP6rOE"),
            _v("10-Min Light Stretching", "DppDOK2SvP0"),
        ],
    },
    "nonoffice": {
        "warmup": [_v("5-Min Gentle Warm-Up", "f3zOrYCwquE")],
        "main": [
            _v("30-Min Gentle Yoga", "v7AYKMP6rOE"),
            _v("20-Min Light Walking Workout", "M0uO8X3_tEA"),
            _v("25-Min Restorative Stretching", "DppDOK2SvP0"),
        ],
        "cooldown": [
            _v("15-Min Gentle Stretch & Relaxation", "DppDOK2SvP0"),
            _v("20-Min Restorative Yoga", "v7AYKMP6rOE"),
        ],
    },
}


def _normalize_exercises(raw: Any) -> list[dict[str, str]]:
    if not isinstance(raw, list):
        return []
    out: list[dict[str, str]] = []
    for row in raw:
        if not isinstance(row, dict):
            continue
        name = str(row.get("name", "")).strip()
        url = str(row.get("url", "")).strip()
        if name and url:
            out.append({"name": name, "url": url})
    return out


def normalize_day_types(raw: Any) -> dict[str, dict[str, list[dict[str, str]]]]:
    out: dict[str, dict[str, list[dict[str, str]]]] = {}
    if not isinstance(raw, dict):
        return out
    for day_type in DAY_TYPES:
        categories = raw.get(day_type)
        if not isinstance(categories, dict):
            continue
        out[day_type] = {
            category: _normalize_exercises(categories.get(category))
            for category in CATEGORIES
            if category in categories
        }
    return out


def normalize_catalog(raw: Any) -> Catalog:
    weeks = raw.get("weeks") if isinstance(raw, dict) else None
    catalog: Catalog = {}
    if not isinstance(weeks, dict):
        return catalog
    for key, day_types in weeks.items():
        try:
            week = int(key)
        except (TypeError, ValueError):
            logger.warning("Ignoring catalog week '%s'", key)
            continue
        catalog[week] = normalize_day_types(day_types)
    return catalog


def load_catalog(path: Path | str | None) -> tuple[Catalog, CycleCatalog]:
    """Catalog from a JSON file with ``weeks`` and optional ``cycle`` keys.

    Falls back to the bundled catalog when the file is missing or has no
    usable week 1.
    """
    if not path:
        return DEFAULT_CATALOG, DEFAULT_CYCLE_CATALOG
    raw = read_json_file(Path(path), None)
    if not isinstance(raw, dict):
        logger.warning("Catalog file %s unavailable, using the bundled catalog", path)
        return DEFAULT_CATALOG, DEFAULT_CYCLE_CATALOG
    catalog = normalize_catalog(raw)
    if 1 not in catalog:
        logger.warning("Catalog file %s has no week 1, using the bundled catalog", path)
        return DEFAULT_CATALOG, DEFAULT_CYCLE_CATALOG
    cycle = normalize_day_types(raw.get("cycle")) if "cycle" in raw else DEFAULT_CYCLE_CATALOG
    return catalog, cycle
