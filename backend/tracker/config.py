import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from pydantic import BaseModel

# Data directory: use TRACKER_DATA_DIR env var if set (e.g. /data in Docker),
# otherwise fall back to ~/.config/expense-tracker for local dev
_data_dir = os.environ.get("TRACKER_DATA_DIR")
DATA_DIR = Path(_data_dir) if _data_dir else Path.home() / ".config" / "expense-tracker"
DATABASE_FILE = "expenses.db"

STORAGE_SQLITE = "sqlite"
STORAGE_MEMORY = "memory"


class Settings(BaseModel):
    """Runtime settings, read from TRACKER_* environment variables."""
    data_dir: Path = DATA_DIR
    database_url: str | None = None
    storage: str = STORAGE_SQLITE
    # Single-user deployment: every request acts as this user
    user_id: int = 1
    # Placeholder until budgets are configurable
    budget: Decimal = Decimal("3000")
    sample_data: bool = False
    log_level: str = "INFO"

    @property
    def sqlite_url(self) -> str:
        """Database URL, defaulting to a SQLite file in the data directory."""
        return self.database_url or f"sqlite:///{self.data_dir / DATABASE_FILE}"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Build settings from the environment, ignoring unset variables."""
    values: dict = {}
    env = os.environ

    if "TRACKER_DATA_DIR" in env:
        values["data_dir"] = env["TRACKER_DATA_DIR"]
    if "TRACKER_DATABASE_URL" in env:
        values["database_url"] = env["TRACKER_DATABASE_URL"]
    if "TRACKER_STORAGE" in env:
        values["storage"] = env["TRACKER_STORAGE"].strip().lower()
    if "TRACKER_USER_ID" in env:
        values["user_id"] = env["TRACKER_USER_ID"]
    if "TRACKER_BUDGET" in env:
        values["budget"] = env["TRACKER_BUDGET"]
    if "TRACKER_SAMPLE_DATA" in env:
        values["sample_data"] = _env_flag(env["TRACKER_SAMPLE_DATA"])
    if "TRACKER_LOG_LEVEL" in env:
        values["log_level"] = env["TRACKER_LOG_LEVEL"].upper()

    settings = Settings(**values)
    if settings.storage not in (STORAGE_SQLITE, STORAGE_MEMORY):
        raise ValueError(f"Unknown storage backend: {settings.storage}")
    return settings


@lru_cache
def get_settings() -> Settings:
    """Settings for this process. Call ``get_settings.cache_clear()`` to reload."""
    return load_settings()


def ensure_data_dir(settings: Settings) -> None:
    """Ensure the data directory exists."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)
