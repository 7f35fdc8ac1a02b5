"""Table commands: ``update``, ``show`` and ``presets``.

Behavior
- ``update`` creates the database location when needed and prints one
  progress line per table variant on stdout. A batch update goes on past
  failing tables; they are listed on stderr afterwards and the command exits
  non-zero.
- ``show`` never creates anything: the location must already hold a database.
  Output is tab separated on stdout, one entry per line, with a header.
- Human-oriented notices go to **stderr** so stdout stays machine-readable.

Failure modes
- Unknown ``--target-id`` → usage error listing nothing else.
- Lock held by another process, corrupt record, missing location,
  transport/parse failure → ``ClickException`` with the error message.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

import click
import httpx

from bldt.adapters.progress import ConsoleProgress
from bldt.config import DATA_DIR_ENV_VAR, DEFAULT_TIMEOUT, USER_AGENT
from bldt.domain import VARIANTS
from bldt.errors import BldtError
from bldt.interfaces import OutcomeKind, RefreshOutcome
from bldt.registry import default_registry
from bldt.service_layer import TableDatabase

from .helpers import error, hyperlink, success, warn

if TYPE_CHECKING:
    from bldt.domain import Entry, TableSnapshot

logger = logging.getLogger(__name__)

SHOW_HEADER = (
    "Table Name",
    "Level",
    "Title",
    "Artist",
    "Style",
    "Body URL",
    "Additional URL",
    "MD5",
    "SHA-256",
)


def make_client(timeout: timedelta) -> httpx.Client:
    """Build the HTTP client used by ``update``.

    Redirects are followed and proxies are taken from the environment.
    """
    return httpx.Client(
        timeout=timeout.total_seconds(),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def _validate_target_id(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: str | None,
) -> str | None:
    if value is not None and value not in default_registry():
        raise click.BadParameter(f"'{value}': There is no table with such an ID.")
    return value


target_id_option = click.option(
    "--target-id",
    "-t",
    "target_id",
    default=None,
    callback=_validate_target_id,
    help="Identifier of a single table (see 'bldt presets'); all tables if omitted.",
)

location_option = click.option(
    "--location",
    "-l",
    "location",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar=DATA_DIR_ENV_VAR,
    show_envvar=True,
    help="Database directory (defaults to the per-user data directory).",
)


def _open(location: Path | None, *, create: bool) -> TableDatabase:
    try:
        return TableDatabase.open(location, create=create)
    except BldtError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@target_id_option
@location_option
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT.total_seconds(),
    show_default=True,
    help="Per-request timeout in seconds.",
)
def update(target_id: str | None, location: Path | None, timeout: float) -> None:
    """Download tables and update the local database."""
    db = _open(location, create=True)
    progress = ConsoleProgress()
    request_timeout = timedelta(seconds=timeout)
    with make_client(request_timeout) as client:
        if target_id is not None:
            try:
                db.refresh(
                    client, target_id, timeout=request_timeout, progress=progress
                )
            except BldtError as e:
                raise click.ClickException(str(e)) from e
            success("Completed")
            return

        click.echo("Update all preset tables.")
        results: dict[str, RefreshOutcome] = {}
        try:
            db.refresh_all(
                client, timeout=request_timeout, progress=progress, results=results
            )
        except BldtError as e:
            raise click.ClickException(str(e)) from e

    failed = {
        table_id: outcome
        for table_id, outcome in results.items()
        if outcome.kind is OutcomeKind.FAILED
    }
    if failed:
        for table_id, outcome in failed.items():
            error(f"{table_id}: {outcome.cause}")
        warn(f"{len(failed)} of {len(results)} table(s) failed to update.")
        raise click.exceptions.Exit(1)
    success("Completed")


def _clean(value: object) -> str:
    """Render *value* as one TSV field: tabs become spaces, None is empty."""
    if value is None:
        return ""
    return str(value).replace("\t", " ")


def _sort_key(entry: Entry) -> tuple[int, str, str]:
    return (entry.variant.slot, entry.name.casefold(), entry.author.casefold())


def _show_rows(snapshot: TableSnapshot) -> list[str]:
    table = snapshot.table
    rows = []
    for entry in sorted(snapshot.entries, key=_sort_key):
        profile = table.profile(entry.variant)
        if profile is None:
            # entries only exist for supported variants
            continue
        level = f"{profile.symbol}{profile.label_of(entry.rank)}"
        fields = (
            table.name,
            level,
            entry.name,
            entry.author,
            entry.variant,
            entry.body_url,
            entry.additional_url,
            entry.md5,
            entry.sha256,
        )
        rows.append("\t".join(_clean(field) for field in fields))
    return rows


@click.command()
@target_id_option
@location_option
def show(target_id: str | None, location: Path | None) -> None:
    """Print cached entries as tab separated values."""
    db = _open(location, create=False)
    snapshots = db.all() if target_id is None else [db.get(target_id)]
    click.echo("\t".join(SHOW_HEADER))
    for snapshot in snapshots:
        if snapshot is None:
            continue
        for row in _show_rows(snapshot):
            click.echo(row)


@click.command()
def presets() -> None:
    """List the built-in table definitions."""
    for table in default_registry():
        click.echo(f"===== {table.name} =====")
        click.echo(f"ID : {table.id}")
        click.echo(f"URL: {hyperlink(table.home_url)}")
        for variant in VARIANTS:
            state = "Enable" if table.supports(variant) else "Disable"
            click.echo(f"{variant.short_name.upper()} : {state}")
        click.echo()
