from datetime import date

import pytest

from fittrack.errors import InvalidInput
from fittrack.program_day import ProgramDayCalculator, ProgramPosition
from fittrack.store import MANUAL_DAY_MODE, MANUAL_DAY_OVERRIDE, START_DATE


@pytest.fixture
def calc(store, clock):
    return ProgramDayCalculator(store, clock)


@pytest.mark.parametrize(
    "today,expected",
    [
        ((2024, 1, 1), (1, 1)),
        ((2024, 1, 7), (7, 1)),
        ((2024, 1, 8), (8, 2)),
        ((2024, 3, 30), (90, 13)),
        ((2024, 6, 1), (90, 13)),
        ((2023, 12, 28), (1, 1)),
    ],
)
def test_automatic_day_from_start_date(calc, store, now, today, expected):
    store.set(START_DATE, "2024-01-01")
    now.set(*today)
    position = calc.compute_current_day()
    assert (position.day, position.week) == expected
    assert position.manual is False


def test_first_read_initializes_start_date_to_today(calc, store):
    assert not store.has(START_DATE)
    assert calc.compute_current_day() == ProgramPosition(day=1, week=1)
    assert store.get(START_DATE) == "2024-01-10"


def test_start_date_written_as_timestamp_is_read_as_a_date(calc, store, now):
    store.set(START_DATE, "2024-01-01T00:00:00.000Z")
    now.set(2024, 1, 3)
    assert calc.compute_current_day().day == 3


@pytest.mark.parametrize("value", [0, 91, -5, "abc", "", None, 12.5])
def test_set_manual_day_rejects_out_of_range(calc, store, value):
    with pytest.raises(InvalidInput):
        calc.set_manual_day(value)
    assert not store.has(MANUAL_DAY_OVERRIDE)
    assert not store.has(MANUAL_DAY_MODE)


@pytest.mark.parametrize("value,week", [(1, 1), (90, 13), ("40", 6)])
def test_set_manual_day_accepts_boundaries(calc, value, week):
    position = calc.set_manual_day(value)
    assert position.day == int(value)
    assert position.week == week
    assert position.manual is True


def test_clear_override_returns_to_automatic_day(calc, store, now):
    store.set(START_DATE, "2024-01-01")
    now.set(2024, 1, 20)
    automatic = calc.compute_current_day()

    calc.set_manual_day(40)
    assert calc.compute_current_day().day == 40

    assert calc.clear_manual_override() == automatic
    assert store.get(START_DATE) == "2024-01-01"


def test_clear_override_without_override_is_a_no_op(calc):
    first = calc.clear_manual_override()
    assert calc.clear_manual_override() == first


def test_legacy_string_override_is_honoured(calc, store):
    store.set(MANUAL_DAY_OVERRIDE, "12")
    store.set(MANUAL_DAY_MODE, "true")
    assert calc.compute_current_day() == ProgramPosition(day=12, week=2, manual=True)


def test_garbage_override_falls_back_to_automatic(calc, store):
    store.set(START_DATE, "2024-01-08")
    store.set(MANUAL_DAY_OVERRIDE, "soon")
    store.set(MANUAL_DAY_MODE, True)
    assert calc.compute_current_day() == ProgramPosition(day=3, week=1)


def test_override_outside_range_is_clamped(calc, store):
    store.set(MANUAL_DAY_OVERRIDE, 250)
    store.set(MANUAL_DAY_MODE, True)
    assert calc.compute_current_day().day == 90


def test_reset_start_date(calc, store, now):
    store.set(START_DATE, "2023-11-01")
    assert calc.reset_start_date() == date(2024, 1, 10)
    assert calc.compute_current_day().day == 1
