"""Configuration management for Cadence."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CADENCE_HOME = Path(os.environ.get("CADENCE_HOME", Path.home() / ".cadence"))
CONFIG_FILE = CADENCE_HOME / "config" / "cadence.conf"
DATA_DIR = CADENCE_HOME / "data"


@dataclass
class Config:
    """Cadence configuration."""

    store_backend: str = "file"
    store_file: str = ""
    # PostgREST / Supabase settings
    rest_url: str = ""
    rest_api_key: str = ""
    rest_table: str = "tasks"
    request_timeout: float = 10.0
    user_id: str = "local"
    language: str = "pt"
    # Occurrences materialized ahead of a recurring task
    daily_horizon: int = 30
    weekly_horizon: int = 12
    monthly_horizon: int = 6

    @property
    def horizons(self) -> dict[str, int]:
        return {
            "daily": self.daily_horizon,
            "weekly": self.weekly_horizon,
            "monthly": self.monthly_horizon,
        }


def _as_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key.upper()}: {value!r}")
        return default


def load_config() -> Config:
    """Load configuration from cadence.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            end_quote = value.find(value[0], 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "store_backend":
                config.store_backend = value.lower()
            case "store_file":
                config.store_file = value
            case "rest_url":
                config.rest_url = value.rstrip("/")
            case "rest_api_key":
                config.rest_api_key = value
            case "rest_table":
                config.rest_table = value
            case "request_timeout":
                try:
                    config.request_timeout = float(value)
                except ValueError:
                    logger.warning(f"Ignoring non-numeric REQUEST_TIMEOUT: {value!r}")
            case "user_id":
                config.user_id = value
            case "language":
                config.language = value.lower()
            case "daily_horizon":
                config.daily_horizon = _as_int(key, value, config.daily_horizon)
            case "weekly_horizon":
                config.weekly_horizon = _as_int(key, value, config.weekly_horizon)
            case "monthly_horizon":
                config.monthly_horizon = _as_int(key, value, config.monthly_horizon)
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
