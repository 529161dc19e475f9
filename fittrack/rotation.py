"""Daily exercise selection.

Round-robin by program day: slot index is ``(day - 1) % len(options)``, so
every option is shown once before any repeats and the pick can be
recomputed from the day alone. The main slot draws from one combined pool
of main, hiit, sprint and resistance videos, so a single main workout is
shown per day and the intensity categories take turns with it.
"""

from dataclasses import dataclass
from typing import Any

from fittrack.catalog import MAIN_POOL_CATEGORIES, Catalog, CycleCatalog


@dataclass(frozen=True)
class Exercise:
    name: str
    url: str
    category: str
    link_key: str


@dataclass(frozen=True)
class DailySelection:
    day: int
    day_type: str
    cycle_mode: bool
    warmup: Exercise | None = None
    main: Exercise | None = None
    cooldown: Exercise | None = None


def rotation_index(day: int, length: int) -> int:
    return (day - 1) % length


def source_workouts(
    week: int,
    day_type: str,
    cycle_active: bool,
    catalog: Catalog,
    cycle_catalog: CycleCatalog,
) -> dict[str, list[dict[str, Any]]]:
    if cycle_active:
        return cycle_catalog.get(day_type) or {}
    week_data = catalog.get(week) or {}
    if week_data.get(day_type):
        return week_data[day_type]
    return (catalog.get(1) or {}).get(day_type) or {}


def _tagged(row: dict[str, Any], category: str, day: int, day_type: str) -> Exercise:
    return Exercise(
        name=str(row.get("name", "")),
        url=str(row.get("url", "")),
        category=category,
        link_key=f"{day_type}-{category}-day{day}",
    )


def pick(options: list[dict[str, Any]] | None, category: str, day: int, day_type: str) -> Exercise | None:
    if not options:
        return None
    return _tagged(options[rotation_index(day, len(options))], category, day, day_type)


def main_pool(workouts: dict[str, list[dict[str, Any]]]) -> list[tuple[dict[str, Any], str]]:
    pool: list[tuple[dict[str, Any], str]] = []
    for category in MAIN_POOL_CATEGORIES:
        for row in workouts.get(category) or []:
            pool.append((row, category))
    return pool


def select_daily_exercises(
    day: int,
    week: int,
    day_type: str,
    cycle_active: bool,
    catalog: Catalog,
    cycle_catalog: CycleCatalog,
) -> DailySelection:
    workouts = source_workouts(week, day_type, cycle_active, catalog, cycle_catalog)

    warmup = pick(workouts.get("warmup"), "warmup", day, day_type)
    cooldown = None
    if day_type == "nonoffice":
        cooldown = pick(workouts.get("cooldown"), "cooldown", day, day_type)

    main = None
    pool = main_pool(workouts)
    if pool:
        row, category = pool[rotation_index(day, len(pool))]
        main = _tagged(row, category, day, day_type)

    return DailySelection(
        day=day,
        day_type=day_type,
        cycle_mode=cycle_active,
        warmup=warmup,
        main=main,
        cooldown=cooldown,
    )
