import logging
from dataclasses import dataclass
from datetime import date

from fittrack.clock import Clock, parse_date
from fittrack.day_type import force_office
from fittrack.store import PERIOD_DATA, JsonStore

logger = logging.getLogger(__name__)


@dataclass
class CycleWindow:
    active: bool = False
    start_date: date | None = None
    end_date: date | None = None

    def covers(self, day: date) -> bool:
        if not self.active or self.start_date is None:
            return False
        if day < self.start_date:
            return False
        # an open window runs until it is closed
        return self.end_date is None or day <= self.end_date

    def to_record(self) -> dict:
        return {
            "active": self.active,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


def window_from_record(raw: dict) -> CycleWindow:
    start = parse_date(raw.get("startDate"))
    active = raw.get("active") is True and start is not None
    return CycleWindow(active=active, start_date=start, end_date=parse_date(raw.get("endDate")))


class CycleModeTracker:
    def __init__(self, store: JsonStore, clock: Clock) -> None:
        self.store = store
        self.clock = clock

    def window(self) -> CycleWindow:
        return window_from_record(self.store.get_dict(PERIOD_DATA))

    def is_active_today(self) -> bool:
        return self.window().covers(self.clock.today())

    def toggle(self) -> CycleWindow:
        today = self.clock.today()
        window = self.window()
        if window.covers(today):
            window.active = False
            window.end_date = today
            logger.info("Cycle mode closed on %s", today)
        else:
            window = CycleWindow(active=True, start_date=today, end_date=None)
            force_office(self.store)
            logger.info("Cycle mode opened on %s", today)
        self.store.set(PERIOD_DATA, window.to_record())
        return window
