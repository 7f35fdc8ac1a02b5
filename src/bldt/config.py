"""Configuration utilities for bldt.

This module centralizes constants and small helpers related to where the
table database lives and how refreshes talk to remote sources.
"""

import os
from datetime import timedelta
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "bldt"

DATA_DIR_ENV_VAR = "BLDT_HOME"

# On-disk record format version; anything else is rejected at load time.
DATABASE_VERSION = 1

DEFAULT_TIMEOUT = timedelta(seconds=60)

USER_AGENT = f"{APP_NAME}/0.1.0"

READ_LOCK_FILE_NAME = ".read.lock"
WRITE_LOCK_FILE_NAME = ".write.lock"


def get_data_dir() -> Path:
    """Return the default database location.

    Returns:
        The value of the `BLDT_HOME` environment variable if set, otherwise the
        per-user data directory reported by platformdirs.
    """
    if value := os.environ.get(DATA_DIR_ENV_VAR):
        return Path(value).expanduser()
    return Path(user_data_dir(APP_NAME, appauthor=False))
