"""bldt CLI entry point.

Defines the top-level ``bldt`` command (via Click-Extra) and registers the
table commands.

Currently available commands
- ``bldt update`` — refresh one or all tables from their remote sources.
- ``bldt show`` — print the cached entries as tab separated values.
- ``bldt presets`` — list the built-in table definitions.

Notes
- The CLI version is sourced from `bldt.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Logging goes to stderr (Rich) and, with the flight recorder on, to
  ``--log-path`` whenever a WARNING or worse is emitted.

Examples
    $ bldt --version
    $ bldt update -t insane
    $ bldt show --location ./tables > tables.tsv
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from bldt import __version__
from bldt.config import get_data_dir
from bldt.logging import (
    config_console_handler,
    config_flight_recorder,
    default_log_path,
    log_startup,
)

from .helpers.log_level_parser import parse_log_level
from .tables import presets, show, update

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """bldt command-line interface.

    Keeps a local copy of BMS difficulty tables. Each table is downloaded from
    its publisher, converted to a common entry format and stored as JSON so it
    can be searched offline; later updates only transfer what has changed.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('Environment:', fg='blue', bold=True, underline=True)}",
        "  BLDT_HOME: default database location",
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=None,
    envvar="BLDT_LOG_PATH",
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="BLDT_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "(tunable via BLDT_FLIGHT_RECORDER_CAPACITY) at DEBUG granularity "
        "(unaffected by -v/-q) and writes them to --log-path when a "
        "WARNING/ERROR occurs, or on clean exit if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Force-flush the flight recorder buffer to --log-path on program exit. "
        "Normally the buffer only dumps on WARNING/ERROR; console output is unaffected."
    ),
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). This changes the "
        "logger's own level, so it applies to BOTH console and flight-recorder. "
        "Repeatable (e.g. -L httpx=INFO -L filelock=DEBUG) or via "
        "BLDT_LOGGER_LEVELS (comma/space list)."
    ),
    default=("httpx=WARNING", "httpcore=WARNING", "filelock=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def bldt(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path | None,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """bldt command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) console
    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) flight recorder
    if flight_recorder:
        if log_path is None:
            log_path = default_log_path()
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) per-logger overrides
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
        data_dir=get_data_dir(),
    )

    ctx.call_on_close(logging.shutdown)


bldt.add_command(update)
bldt.add_command(show)
bldt.add_command(presets)
