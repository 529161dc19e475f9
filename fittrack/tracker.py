import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from fittrack import DAY_TYPES
from fittrack import day_type as day_types
from fittrack import fasting, weights, workouts
from fittrack.catalog import Catalog, CycleCatalog, load_catalog
from fittrack.clock import Clock, iso_instant
from fittrack.config import AppConfig, goal_loss_kg, load_settings, save_settings
from fittrack.cycle_mode import CycleModeTracker, CycleWindow
from fittrack.program_day import ProgramDayCalculator, ProgramPosition
from fittrack.progress import (
    ProgressSummary,
    compute_progress,
    weekly_fasting_summary,
    weekly_weight_summary,
)
from fittrack.rotation import DailySelection, select_daily_exercises
from fittrack.store import JsonStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramState:
    """Snapshot of everything the day's screen depends on."""

    day: int
    week: int
    manual: bool
    start_date: date
    today: date
    day_type: str
    cycle_mode: bool

    @property
    def available_day_types(self) -> tuple[str, ...]:
        return ("office",) if self.cycle_mode else DAY_TYPES


class FitnessTracker:
    def __init__(
        self,
        store: JsonStore,
        clock: Clock | None = None,
        catalog: Catalog | None = None,
        cycle_catalog: CycleCatalog | None = None,
    ) -> None:
        self.store = store
        self.clock = clock or Clock()
        default_catalog, default_cycle = load_catalog(None)
        self.catalog = catalog if catalog is not None else default_catalog
        self.cycle_catalog = cycle_catalog if cycle_catalog is not None else default_cycle
        self.days = ProgramDayCalculator(store, self.clock)
        self.cycle = CycleModeTracker(store, self.clock)

    @classmethod
    def from_config(cls, config: AppConfig, clock: Clock | None = None) -> "FitnessTracker":
        catalog, cycle_catalog = load_catalog(config.catalog_file)
        return cls(JsonStore(config.data_dir), clock=clock, catalog=catalog, cycle_catalog=cycle_catalog)

    # program day

    def compute_current_day(self) -> ProgramPosition:
        return self.days.compute_current_day()

    def set_manual_day(self, value: Any) -> ProgramPosition:
        return self.days.set_manual_day(value)

    def clear_manual_override(self) -> ProgramPosition:
        return self.days.clear_manual_override()

    def state(self) -> ProgramState:
        position = self.days.compute_current_day()
        cycle_active = self.cycle.is_active_today()
        return ProgramState(
            day=position.day,
            week=position.week,
            manual=position.manual,
            start_date=self.days.start_date(),
            today=self.clock.today(),
            day_type=day_types.load_day_type(self.store, cycle_active),
            cycle_mode=cycle_active,
        )

    # cycle mode and day type

    def is_cycle_mode_active(self) -> bool:
        return self.cycle.is_active_today()

    def cycle_window(self) -> CycleWindow:
        return self.cycle.window()

    def toggle_cycle_mode(self) -> CycleWindow:
        return self.cycle.toggle()

    def select_day_type(self, value: str) -> str:
        return day_types.select_day_type(self.store, value, self.cycle.is_active_today())

    # workouts

    def todays_workout(self, state: ProgramState | None = None) -> DailySelection:
        state = state or self.state()
        return select_daily_exercises(
            state.day, state.week, state.day_type, state.cycle_mode, self.catalog, self.cycle_catalog
        )

    def mark_workout_complete(self) -> bool:
        state = self.state()
        return workouts.mark_workout_complete(self.store, state.today, state.day_type)

    def checklist(self) -> dict[str, Any]:
        return workouts.load_checklist(self.store, self.clock.today())

    def save_checklist(self, payload: dict[str, Any]) -> dict[str, Any]:
        return workouts.save_checklist(self.store, self.clock.today(), payload)

    def visited_links(self) -> list[str]:
        return workouts.visited_links(self.store, self.compute_current_day().day)

    def mark_link_visited(self, link_key: str) -> list[str]:
        return workouts.mark_link_visited(self.store, self.compute_current_day().day, link_key)

    # weights

    def settings(self) -> dict[str, Any]:
        return load_settings(self.store)

    def update_settings(self, payload: dict[str, Any]) -> dict[str, Any]:
        return save_settings(self.store, payload)

    def add_weight(self, value: Any) -> tuple[weights.WeightEntry, weights.WeightEntry | None]:
        return weights.add_weight(self.store, self.clock, value)

    def delete_weight(self, day: date) -> bool:
        return weights.delete_weight(self.store, day)

    def weight_history(self) -> list[dict[str, Any]]:
        return weights.weight_history(weights.load_weights(self.store), self.settings()["starting_weight_kg"])

    def weekly_weights(self) -> list[dict[str, Any]]:
        return weekly_weight_summary(weights.load_weights(self.store).values(), self.days.start_date())

    # fasting

    def start_fasting(self) -> fasting.ActiveFast:
        return fasting.start_fasting(self.store, self.clock)

    def end_fasting(self) -> fasting.FastingSession | None:
        return fasting.end_fasting(self.store, self.clock)

    def active_fast(self) -> dict[str, Any] | None:
        fast = fasting.active_fast(self.store)
        elapsed = fasting.elapsed(self.store, self.clock)
        if fast is None or elapsed is None:
            return None
        return {
            "started_at": iso_instant(fast.started_at),
            "start_date": fast.start_date.isoformat(),
            "elapsed_hours": elapsed.total_seconds() / 3600,
            "elapsed": fasting.format_duration(elapsed),
        }

    def add_manual_fasting(self, start_time: Any, end_time: Any) -> fasting.FastingSession:
        return fasting.add_manual_fasting(self.store, self.clock, start_time, end_time)

    def delete_fasting(self, day: date, index: int) -> bool:
        return fasting.delete_fasting(self.store, day, index)

    def fasting_overview(self) -> dict[str, Any]:
        data = fasting.load_fasting(self.store)
        return {
            "today": fasting.day_total(data, self.clock.today()),
            "history": fasting.fasting_history(data),
        }

    def weekly_fasting(self) -> list[dict[str, Any]]:
        return weekly_fasting_summary(fasting.load_fasting(self.store), self.days.start_date())

    # progress

    def compute_progress(self) -> ProgressSummary:
        settings = self.settings()
        return compute_progress(
            self.compute_current_day().day,
            weights.load_weights(self.store).values(),
            workouts.load_completions(self.store).values(),
            starting_weight_kg=settings["starting_weight_kg"],
            goal_loss_kg=goal_loss_kg(settings),
        )

    def reset(self) -> ProgramState:
        self.store.clear()
        self.days.reset_start_date()
        logger.warning("All tracker data cleared")
        return self.state()
