from datetime import datetime, timedelta, timezone

import pytest

from fittrack.clock import Clock
from fittrack.store import JsonStore


class FakeNow:
    """Settable "now" for a Clock."""

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def set(self, year: int, month: int, day: int, hour: int = 9, minute: int = 0) -> None:
        self.moment = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)

    def advance(self, **kwargs) -> None:
        self.moment += timedelta(**kwargs)


@pytest.fixture
def now() -> FakeNow:
    return FakeNow(datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def clock(now: FakeNow) -> Clock:
    return Clock(now)


@pytest.fixture
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "data")
