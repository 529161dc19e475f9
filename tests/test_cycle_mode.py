from datetime import date

import pytest

from fittrack.cycle_mode import CycleModeTracker
from fittrack.day_type import load_day_type, select_day_type
from fittrack.errors import InvalidInput
from fittrack.store import PERIOD_DATA, SELECTED_DAY_TYPE


@pytest.fixture
def cycle(store, clock):
    return CycleModeTracker(store, clock)


def open_window(store, start="2024-01-10"):
    store.set(PERIOD_DATA, {"active": True, "startDate": start, "endDate": None})


def test_inactive_without_a_window(cycle):
    assert cycle.is_active_today() is False


@pytest.mark.parametrize(
    "today,active",
    [((2024, 1, 9), False), ((2024, 1, 10), True), ((2024, 1, 11), True), ((2024, 2, 20), True)],
)
def test_open_window_covers_start_and_later(cycle, store, now, today, active):
    open_window(store)
    now.set(*today)
    assert cycle.is_active_today() is active


def test_toggle_closes_an_open_window(cycle, store, now):
    open_window(store)
    now.set(2024, 1, 14)

    window = cycle.toggle()

    assert window.active is False
    assert window.end_date == date(2024, 1, 14)
    assert store.get(PERIOD_DATA)["endDate"] == "2024-01-14"
    assert cycle.is_active_today() is False
    now.set(2024, 1, 15)
    assert cycle.is_active_today() is False


def test_toggle_opens_a_window_and_forces_office(cycle, store):
    store.set(SELECTED_DAY_TYPE, "nonoffice")

    window = cycle.toggle()

    assert window.active is True
    assert window.start_date == date(2024, 1, 10)
    assert window.end_date is None
    assert store.get(SELECTED_DAY_TYPE) == "office"
    assert cycle.is_active_today() is True


def test_closed_window_reopens_on_toggle(cycle, store, now):
    store.set(PERIOD_DATA, {"active": False, "startDate": "2024-01-01", "endDate": "2024-01-05"})
    window = cycle.toggle()
    assert window.active is True
    assert window.start_date == date(2024, 1, 10)


def test_active_flag_without_start_date_is_inactive(cycle, store):
    store.set(PERIOD_DATA, {"active": True, "startDate": None, "endDate": None})
    assert cycle.is_active_today() is False


def test_nonoffice_rejected_while_cycle_mode_is_active(store):
    with pytest.raises(InvalidInput):
        select_day_type(store, "nonoffice", cycle_active=True)
    assert select_day_type(store, "office", cycle_active=True) == "office"


def test_unknown_day_type_rejected(store):
    with pytest.raises(InvalidInput):
        select_day_type(store, "weekend", cycle_active=False)
    assert not store.has(SELECTED_DAY_TYPE)


def test_day_type_defaults_to_nonoffice(store):
    assert load_day_type(store) == "nonoffice"
    select_day_type(store, "office", cycle_active=False)
    assert load_day_type(store) == "office"


def test_loading_day_type_during_cycle_mode_forces_office(store):
    store.set(SELECTED_DAY_TYPE, "nonoffice")
    assert load_day_type(store, cycle_active=True) == "office"
    assert store.get(SELECTED_DAY_TYPE) == "office"
