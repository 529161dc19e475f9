from datetime import date, datetime, timezone

import pytest

from fittrack.fasting import FastingSession
from fittrack.progress import (
    compute_progress,
    program_week,
    weekly_fasting_summary,
    weekly_weight_summary,
)
from fittrack.weights import WeightEntry


def entry(day, kg, hour=8):
    return WeightEntry(date=day, weight_kg=kg, recorded_at=datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc))


def session(day, hours):
    start = datetime(day.year, day.month, day.day, 20, tzinfo=timezone.utc)
    return FastingSession(started_at=start, ended_at=start, duration_hours=hours)


def test_weight_loss_progress():
    summary = compute_progress(10, [entry(date(2024, 1, 5), 80.0)], [], starting_weight_kg=83.0, goal_loss_kg=13.0)
    assert summary.total_lost_kg == pytest.approx(3.0)
    assert summary.overall_progress_percent == pytest.approx(23.08, abs=0.01)
    assert summary.latest_weight_kg == 80.0
    assert summary.days_remaining == 80


def test_no_entries_uses_starting_weight():
    summary = compute_progress(1, [], [])
    assert summary.latest_weight_kg == 83.0
    assert summary.total_lost_kg == 0.0
    assert summary.overall_progress_percent == 0.0
    assert summary.workouts_completed_count == 0
    assert summary.completion_rate_percent == 0


def test_latest_weight_follows_recorded_time_not_date():
    entries = [
        entry(date(2024, 1, 9), 81.0, hour=7),
        WeightEntry(date=date(2024, 1, 8), weight_kg=82.0, recorded_at=datetime(2024, 1, 10, 6, tzinfo=timezone.utc)),
    ]
    assert compute_progress(10, entries, []).latest_weight_kg == 82.0


def test_weight_gain_is_negative_and_progress_floors_at_zero():
    summary = compute_progress(5, [entry(date(2024, 1, 2), 85.5)], [])
    assert summary.total_lost_kg == pytest.approx(-2.5)
    assert summary.overall_progress_percent == 0.0


def test_progress_caps_at_hundred():
    assert compute_progress(5, [entry(date(2024, 1, 2), 65.0)], []).overall_progress_percent == 100.0


def test_completion_rate_is_not_clamped():
    summary = compute_progress(2, [], [{}, {}, {}])
    assert summary.workouts_completed_count == 3
    assert summary.completion_rate_percent == 150


def test_completion_rate_rounds_half_up():
    assert compute_progress(8, [], [{}]).completion_rate_percent == 13


@pytest.mark.parametrize("day,remaining", [(1, 89), (60, 30), (90, 0)])
def test_days_remaining(day, remaining):
    assert compute_progress(day, [], []).days_remaining == remaining


@pytest.mark.parametrize(
    "entry_date,week",
    [(date(2024, 1, 1), 1), (date(2024, 1, 7), 1), (date(2024, 1, 8), 2), (date(2023, 12, 25), 0)],
)
def test_program_week(entry_date, week):
    assert program_week(entry_date, date(2024, 1, 1)) == week


def test_weekly_weight_summary_groups_and_excludes_out_of_range():
    start = date(2024, 1, 1)
    entries = [
        entry(date(2024, 1, 5), 79.0),
        entry(date(2024, 1, 1), 80.0),
        entry(date(2024, 1, 9), 78.5),
        entry(date(2023, 12, 25), 84.0),
        entry(date(2024, 6, 1), 70.0),
    ]
    summary = weekly_weight_summary(entries, start)
    assert summary == [
        {"week": 1, "latest_weight_kg": 79.0, "change_kg": 1.0, "average_weight_kg": 79.5, "entry_count": 2},
        {"week": 2, "latest_weight_kg": 78.5, "change_kg": 0.0, "average_weight_kg": 78.5, "entry_count": 1},
    ]


def test_weekly_fasting_summary():
    start = date(2024, 1, 1)
    data = {
        date(2024, 1, 2): [session(date(2024, 1, 2), 16.0), session(date(2024, 1, 2), 2.0)],
        date(2024, 1, 4): [session(date(2024, 1, 4), 14.0)],
        date(2024, 3, 30): [session(date(2024, 3, 30), 12.0)],
    }
    assert weekly_fasting_summary(data, start) == [
        {"week": 1, "total_hours": 32.0, "average_hours": 10.7, "session_count": 3},
    ]
