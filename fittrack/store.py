import json
import logging
import threading
from pathlib import Path
from typing import Any

from fittrack.errors import CorruptStoredRecord

logger = logging.getLogger(__name__)

START_DATE = "startDate"
SELECTED_DAY_TYPE = "selectedDayType"
WEIGHTS = "weights"
COMPLETED_WORKOUTS = "completedWorkouts"
CHECKLIST = "checklist"
VISITED_LINKS = "visitedLinks"
FASTING_DATA = "fastingData"
ACTIVE_FASTING = "activeFasting"
PERIOD_DATA = "periodData"
MANUAL_DAY_OVERRIDE = "manualDayOverride"
MANUAL_DAY_MODE = "manualDayMode"
SETTINGS = "settings"

RECORD_KEYS = (
    START_DATE,
    SELECTED_DAY_TYPE,
    WEIGHTS,
    COMPLETED_WORKOUTS,
    CHECKLIST,
    VISITED_LINKS,
    FASTING_DATA,
    ACTIVE_FASTING,
    PERIOD_DATA,
    MANUAL_DAY_OVERRIDE,
    MANUAL_DAY_MODE,
)

FILE_LOCK = threading.Lock()


def read_json_file(path: Path, default: Any) -> Any:
    with FILE_LOCK:
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError) as err:
            logger.warning("%s", CorruptStoredRecord(path.stem, str(err)))
            return default


def write_json_file(path: Path, payload: Any) -> None:
    with FILE_LOCK:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2))


class JsonStore:
    """Named JSON records, one file per key under ``data_dir``."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        return read_json_file(self.path_for(key), default)

    def get_dict(self, key: str) -> dict[str, Any]:
        raw = self.get(key, {})
        if isinstance(raw, dict):
            return raw
        logger.warning("Record '%s' is not an object, ignoring it", key)
        return {}

    def set(self, key: str, value: Any) -> None:
        write_json_file(self.path_for(key), value)

    def remove(self, key: str) -> None:
        with FILE_LOCK:
            path = self.path_for(key)
            if path.exists():
                path.unlink()

    def has(self, key: str) -> bool:
        return self.path_for(key).exists()

    def clear(self) -> None:
        """Remove every tracker record; user settings are kept."""
        for key in RECORD_KEYS:
            self.remove(key)
