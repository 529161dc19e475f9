import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from fittrack.progress import DEFAULT_GOAL_LOSS_KG, DEFAULT_STARTING_WEIGHT_KG
from fittrack.store import SETTINGS, JsonStore

load_dotenv()


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    catalog_file: Path | None
    log_level: str


def load_config() -> AppConfig:
    catalog = os.getenv("FITTRACK_CATALOG_FILE", "").strip()
    return AppConfig(
        data_dir=Path(os.getenv("FITTRACK_DATA_DIR", "data")),
        catalog_file=Path(catalog) if catalog else None,
        log_level=os.getenv("FITTRACK_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def default_settings() -> dict[str, Any]:
    return {
        "starting_weight_kg": DEFAULT_STARTING_WEIGHT_KG,
        "goal_weight_kg": DEFAULT_STARTING_WEIGHT_KG - DEFAULT_GOAL_LOSS_KG,
    }


def sanitize_weight_value(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    if n <= 0:
        return None
    return max(20.0, min(200.0, n))


def _merge(raw: Any) -> dict[str, Any]:
    settings = default_settings()
    if isinstance(raw, dict):
        for key in settings.keys():
            value = sanitize_weight_value(raw.get(key))
            if value is not None:
                settings[key] = value
    return settings


def load_settings(store: JsonStore) -> dict[str, Any]:
    return _merge(store.get(SETTINGS, {}))


def save_settings(store: JsonStore, settings: dict[str, Any]) -> dict[str, Any]:
    merged = _merge(settings)
    store.set(SETTINGS, merged)
    return merged


def goal_loss_kg(settings: dict[str, Any]) -> float:
    return settings["starting_weight_kg"] - settings["goal_weight_kg"]
