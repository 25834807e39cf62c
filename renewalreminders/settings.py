"""
Application settings for RenewalReminders.

Values come from the environment, optionally seeded from a ``.env`` file in the
working directory.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DB_PATH_ENV = "RENEWALREMINDERS_DB_PATH"
TZ_ENV = "RENEWALREMINDERS_TZ"
LOG_LEVEL_ENV = "RENEWALREMINDERS_LOG_LEVEL"

DEFAULT_TZ = "UTC"
DEFAULT_LOG_LEVEL = "WARNING"


def get_db_path():
    """
    Get the path to the database file.

    Uses RENEWALREMINDERS_DB_PATH when set, otherwise ~/.renewalreminders/reminders.db.
    The parent directory is created if needed.
    """
    configured = os.environ.get(DB_PATH_ENV, "").strip()
    if configured:
        db_path = Path(configured).expanduser()
    else:
        db_path = Path.home() / ".renewalreminders" / "reminders.db"

    if not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def get_timezone_name():
    return os.environ.get(TZ_ENV, "").strip() or DEFAULT_TZ


def get_log_level():
    return (os.environ.get(LOG_LEVEL_ENV, "").strip() or DEFAULT_LOG_LEVEL).upper()
