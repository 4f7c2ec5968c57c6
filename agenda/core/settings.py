"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import logging
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``.

    ``AGENDA_DATA_DIR`` in the environment overrides the platform default.
    """

    environ = dict(env if env is not None else os.environ)
    override = environ.get("AGENDA_DATA_DIR")
    if override:
        return Path(override).expanduser()

    platform_id = (platform or sys.platform).lower()
    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = home_dir / "Library" / "Application Support"
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return base.expanduser() / sanitized


APP_NAME = "Agenda"


DATA_DIR = get_default_data_dir(APP_NAME)
BACKUP_DIR = DATA_DIR / "backups"
LOG_DIR = DATA_DIR / "logs"

DB_PATH = DATA_DIR / "agenda.db"
CONFIG_PATH = DATA_DIR / "config.json"
LOG_PATH = LOG_DIR / "agenda.log"


def ensure_data_dirs() -> None:
    for _dir in (DATA_DIR, BACKUP_DIR, LOG_DIR):
        _dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class StoreSettings:
    # Key prefixes are shared with localStorage exports of the original app.
    task_prefix: str = "agenda_tasks_"
    log_prefix: str = "agenda_log_"


STORE = StoreSettings()


@dataclass(frozen=True)
class TaskSettings:
    max_text_length: int = 500
    annotation_marker: str = " (📅 "


TASKS = TaskSettings()


@dataclass(frozen=True)
class BackupSettings:
    enabled: bool = True
    directory: Path = BACKUP_DIR
    keep_days: int = 7


BACKUP = BackupSettings()


@dataclass(frozen=True)
class LoggingSettings:
    path: Path = LOG_PATH
    level: int = logging.INFO
    max_bytes: int = 1_000_000
    backup_count: int = 3
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


LOGGING = LoggingSettings()


__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "BACKUP_DIR",
    "LOG_DIR",
    "DB_PATH",
    "CONFIG_PATH",
    "LOG_PATH",
    "STORE",
    "TASKS",
    "BACKUP",
    "LOGGING",
    "ensure_data_dirs",
    "get_default_data_dir",
]
