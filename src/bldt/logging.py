"""Logging setup for the bldt CLI.

Two sinks are configured by the ``bldt`` group before any command runs:

- a Rich console handler on stderr, so the TSV written by ``bldt show`` and
  the progress lines of ``bldt update`` stay alone on stdout;
- a "flight recorder", an in-memory buffer of DEBUG records that is written
  to a log file only when a refresh goes wrong (WARNING or worse).

Records from the HTTP stack and the lock library are tagged with a short
``[httpx]``-style prefix on the console so they stand apart from table
progress messages.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import filelock
import httpx
from platformdirs import user_log_dir
from rich.console import Console
from rich.logging import RichHandler

from bldt.config import (
    APP_NAME,
    DATA_DIR_ENV_VAR,
    DEFAULT_TIMEOUT,
    READ_LOCK_FILE_NAME,
    USER_AGENT,
    WRITE_LOCK_FILE_NAME,
)

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "bldt"

FLIGHT_RECORDER_FILE_NAME = "latest.log"


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from outside the project with their top-level logger name.

    ``httpcore.connection`` becomes ``[httpcore]``; bldt's own records get an
    empty prefix. Nothing is filtered out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown on the console; forced to DEBUG in debug mode.
        debug_mode: Show timestamps, logger names and source locations instead
            of the short third-party prefix.
        color: Follows click-extra's ``--color/--no-color``.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def default_log_path() -> Path:
    """Return the per-user flight-recorder file, creating its directory."""
    return (
        Path(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True))
        / FLIGHT_RECORDER_FILE_NAME
    )


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder writing to *path*.

    Up to *capacity* records are kept in memory. The buffer is written out
    when a record at *flush_level* or above arrives, and on close when
    *flush_on_close* is set. The file is truncated on the first write of a
    run and not created at all when nothing is flushed, so an ``update``
    that went fine leaves the previous failure's log alone.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
    data_dir: Path | None = None,
) -> None:
    """Log a one-line summary at INFO and the run's diagnostics at DEBUG.

    The diagnostics are what a failed ``update`` report needs: interpreter and
    platform, the httpx and filelock versions, where the database lives and
    which lock files guard it, the HTTP defaults, the logging setup and any
    ``-L`` overrides.

    Args:
        data_dir: Default database location, when known. It is reported
            together with whether ``BLDT_HOME`` chose it; nothing is created.
    """
    logger.info(
        "bldt %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("httpx: %s", httpx.__version__)
    logger.debug("filelock: %s", filelock.__version__)
    if data_dir is not None:
        logger.debug(
            "Database location: %s (%s)",
            data_dir,
            DATA_DIR_ENV_VAR if os.environ.get(DATA_DIR_ENV_VAR) else "default",
        )
        logger.debug("Lock files: %s, %s", READ_LOCK_FILE_NAME, WRITE_LOCK_FILE_NAME)
    logger.debug(
        "HTTP defaults: timeout=%ss, user-agent=%s",
        DEFAULT_TIMEOUT.total_seconds(),
        USER_AGENT,
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            str(log_path) if log_path else "<none>",
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
