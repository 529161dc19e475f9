"""Progress numbers shown on the dashboard.

``completion_rate_percent`` divides by days elapsed, not by days that had a
workout opportunity, and is deliberately left unclamped: marking more
workouts than elapsed days (e.g. after a manual day jump backwards) yields
more than 100.
"""

import math
import statistics
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from fittrack import DAYS_PER_WEEK, TOTAL_DAYS
from fittrack.clock import days_between
from fittrack.fasting import FastingSession
from fittrack.weights import WeightEntry

DEFAULT_STARTING_WEIGHT_KG = 83.0
DEFAULT_GOAL_LOSS_KG = 13.0
SUMMARY_WEEKS = 12


@dataclass(frozen=True)
class ProgressSummary:
    workouts_completed_count: int
    completion_rate_percent: int
    latest_weight_kg: float
    total_lost_kg: float
    overall_progress_percent: float
    days_remaining: int


def latest_weight(entries: Iterable[WeightEntry], starting_weight_kg: float) -> float:
    newest = max(entries, key=lambda e: (e.recorded_at, e.date), default=None)
    return newest.weight_kg if newest is not None else starting_weight_kg


def compute_progress(
    current_day: int,
    weight_entries: Iterable[WeightEntry],
    completion_records: Iterable[Any],
    starting_weight_kg: float = DEFAULT_STARTING_WEIGHT_KG,
    goal_loss_kg: float = DEFAULT_GOAL_LOSS_KG,
) -> ProgressSummary:
    count = len(list(completion_records))
    latest = latest_weight(weight_entries, starting_weight_kg)
    lost = starting_weight_kg - latest
    if goal_loss_kg > 0:
        overall = max(0.0, min(100.0, lost / goal_loss_kg * 100))
    else:
        overall = 100.0 if lost >= 0 else 0.0
    return ProgressSummary(
        workouts_completed_count=count,
        # half-up, not banker's rounding
        completion_rate_percent=math.floor(count / max(1, current_day) * 100 + 0.5),
        latest_weight_kg=latest,
        total_lost_kg=lost,
        overall_progress_percent=overall,
        days_remaining=max(0, TOTAL_DAYS - current_day),
    )


def program_week(entry_date: date, start_date: date) -> int:
    return math.ceil((days_between(start_date, entry_date) + 1) / DAYS_PER_WEEK)


def _in_summary(week: int) -> bool:
    return 1 <= week <= SUMMARY_WEEKS


def weekly_weight_summary(entries: Iterable[WeightEntry], start_date: date) -> list[dict[str, Any]]:
    by_week: dict[int, list[WeightEntry]] = defaultdict(list)
    for entry in entries:
        week = program_week(entry.date, start_date)
        if _in_summary(week):
            by_week[week].append(entry)

    out: list[dict[str, Any]] = []
    for week in sorted(by_week):
        rows = sorted(by_week[week], key=lambda e: e.date)
        first, last = rows[0].weight_kg, rows[-1].weight_kg
        out.append(
            {
                "week": week,
                "latest_weight_kg": last,
                "change_kg": round(first - last, 1),
                "average_weight_kg": round(statistics.mean(e.weight_kg for e in rows), 1),
                "entry_count": len(rows),
            }
        )
    return out


def weekly_fasting_summary(data: dict[date, list[FastingSession]], start_date: date) -> list[dict[str, Any]]:
    by_week: dict[int, list[float]] = defaultdict(list)
    for day, sessions in data.items():
        week = program_week(day, start_date)
        if _in_summary(week):
            by_week[week].extend(s.duration_hours for s in sessions)

    out: list[dict[str, Any]] = []
    for week in sorted(by_week):
        hours = by_week[week]
        if not hours:
            continue
        total = sum(hours)
        out.append(
            {
                "week": week,
                "total_hours": round(total, 1),
                "average_hours": round(total / len(hours), 1),
                "session_count": len(hours),
            }
        )
    return out
