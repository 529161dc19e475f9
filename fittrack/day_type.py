import logging

from fittrack import DAY_TYPES
from fittrack.errors import InvalidInput
from fittrack.store import SELECTED_DAY_TYPE, JsonStore

logger = logging.getLogger(__name__)

DEFAULT_DAY_TYPE = "nonoffice"


def load_day_type(store: JsonStore, cycle_active: bool = False) -> str:
    if cycle_active:
        if store.get(SELECTED_DAY_TYPE) != "office":
            store.set(SELECTED_DAY_TYPE, "office")
        return "office"
    saved = store.get(SELECTED_DAY_TYPE)
    if saved in DAY_TYPES:
        return saved
    return DEFAULT_DAY_TYPE


def force_office(store: JsonStore) -> None:
    store.set(SELECTED_DAY_TYPE, "office")


def select_day_type(store: JsonStore, day_type: str, cycle_active: bool) -> str:
    value = str(day_type or "").strip().lower()
    if value not in DAY_TYPES:
        raise InvalidInput(f"Unknown day type '{day_type}', use one of: {', '.join(DAY_TYPES)}")
    if cycle_active and value == "nonoffice":
        raise InvalidInput(
            "Cycle mode is active. Only the 20-minute office workout is available right now."
        )
    store.set(SELECTED_DAY_TYPE, value)
    logger.debug("Day type set to %s", value)
    return value
