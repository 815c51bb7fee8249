"""User settings for sizeup, stored as JSON."""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from sizeup.scanner import ScanStrategy, default_max_workers, expand_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SIZEUP_CONFIG"
DEFAULT_CONFIG_FILE = "~/.sizeup/config.json"

# 10 KB, the threshold the desktop front end used
DEFAULT_SIZE_LIMIT = 10 * 1024


class Settings(BaseModel):
    """Settings read by the command line and TUI front ends."""

    size_limit: int = Field(DEFAULT_SIZE_LIMIT, ge=0, description="Default threshold in bytes")
    max_workers: int = Field(
        default_factory=default_max_workers, ge=1, description="Scan worker threads"
    )
    strategy: ScanStrategy = Field(
        ScanStrategy.REWALK, description="How folder totals are computed"
    )
    protected_paths: list[str] = Field(
        default_factory=list,
        description="Extra paths that delete refuses to remove (supports ~)",
    )


def config_file() -> Path:
    """Location of the settings file ($SIZEUP_CONFIG wins)."""
    return expand_path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from disk.

    A missing, unreadable or invalid file gives the defaults.
    """
    path = path or config_file()
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            return Settings.model_validate(json.load(f))
    except (json.JSONDecodeError, OSError, ValidationError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> bool:
    """Save settings to disk. Returns False if the file cannot be written."""
    path = path or config_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(settings.model_dump(mode="json"), f, indent=2)
        return True
    except OSError as e:
        logger.warning("Cannot write config %s: %s", path, e)
        return False


def update_setting(settings: Settings, key: str, value: str) -> Settings:
    """
    Return a copy of settings with one key changed from its string form.

    protected_paths takes a comma-separated list.

    Raises:
        KeyError: Unknown key
        ValueError: Value does not validate
    """
    if key not in Settings.model_fields:
        raise KeyError(key)

    data = settings.model_dump(mode="json")
    if key == "protected_paths":
        data[key] = [p.strip() for p in value.split(",") if p.strip()]
    else:
        data[key] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ValueError(str(e)) from e
