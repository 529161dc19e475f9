"""Which day of the 90-day program it is.

Two modes:

* automatic: day 1 is the stored start date, each calendar day after it
  advances the program by one.
* manual: the user pinned a day number; it wins until cleared.

Nothing is cached. Every call reads the persisted records again, so the two
modes cannot disagree after an override is set or cleared.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from fittrack import DAYS_PER_WEEK, TOTAL_DAYS
from fittrack.clock import Clock, days_between, parse_date
from fittrack.errors import InvalidInput
from fittrack.store import MANUAL_DAY_MODE, MANUAL_DAY_OVERRIDE, START_DATE, JsonStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramPosition:
    day: int
    week: int
    manual: bool = False


def clamp_day(day: int) -> int:
    return max(1, min(TOTAL_DAYS, day))


def week_for_day(day: int) -> int:
    return math.ceil(day / DAYS_PER_WEEK)


def parse_day_number(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class ProgramDayCalculator:
    def __init__(self, store: JsonStore, clock: Clock) -> None:
        self.store = store
        self.clock = clock

    def start_date(self) -> date:
        saved = parse_date(self.store.get(START_DATE))
        if saved is not None:
            return saved
        today = self.clock.today()
        self.store.set(START_DATE, today.isoformat())
        logger.info("Program start date initialized to %s", today)
        return today

    def reset_start_date(self) -> date:
        today = self.clock.today()
        self.store.set(START_DATE, today.isoformat())
        logger.info("Program start date reset to %s", today)
        return today

    def manual_day(self) -> int | None:
        # older records hold the flag as the string "true"
        if self.store.get(MANUAL_DAY_MODE) not in (True, "true"):
            return None
        return parse_day_number(self.store.get(MANUAL_DAY_OVERRIDE))

    def compute_current_day(self) -> ProgramPosition:
        manual = self.manual_day()
        if manual is not None:
            day = clamp_day(manual)
            return ProgramPosition(day=day, week=week_for_day(day), manual=True)

        elapsed = days_between(self.start_date(), self.clock.today())
        day = clamp_day(elapsed + 1)
        return ProgramPosition(day=day, week=week_for_day(day))

    def set_manual_day(self, value: Any) -> ProgramPosition:
        day = parse_day_number(value)
        if day is None or day < 1 or day > TOTAL_DAYS:
            raise InvalidInput(f"Please enter a valid day number between 1 and {TOTAL_DAYS}")
        self.store.set(MANUAL_DAY_OVERRIDE, day)
        self.store.set(MANUAL_DAY_MODE, True)
        logger.info("Manual program day set to %d", day)
        return self.compute_current_day()

    def clear_manual_override(self) -> ProgramPosition:
        if self.store.has(MANUAL_DAY_OVERRIDE) or self.store.has(MANUAL_DAY_MODE):
            logger.info("Manual program day cleared")
        self.store.remove(MANUAL_DAY_OVERRIDE)
        self.store.remove(MANUAL_DAY_MODE)
        return self.compute_current_day()
