"""Progress sink implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from bldt.interfaces import RefreshStatus

if TYPE_CHECKING:
    from bldt.domain import TableConfiguration, Variant

# pylint: disable=too-few-public-methods

STATUS_STYLES = {
    RefreshStatus.DONE: "green",
    RefreshStatus.UNNECESSARY: "cyan",
    RefreshStatus.ERROR: "bold red",
}


class NullProgress:
    """Discard every notification."""

    def publish(
        self,
        table: TableConfiguration,
        variant: Variant,
        index: int,
        count: int,
        status: RefreshStatus,
    ) -> None:
        return None


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """One recorded notification."""

    table_id: str
    variant: Variant
    index: int
    count: int
    status: RefreshStatus


@dataclass
class RecordingProgress:
    """Keep every notification in `events`, in order."""

    events: list[ProgressEvent] = field(default_factory=list)

    def publish(
        self,
        table: TableConfiguration,
        variant: Variant,
        index: int,
        count: int,
        status: RefreshStatus,
    ) -> None:
        self.events.append(ProgressEvent(table.id, variant, index, count, status))

    def statuses(self, table_id: str | None = None) -> list[RefreshStatus]:
        """Statuses in order, optionally for one table only."""
        return [
            event.status
            for event in self.events
            if table_id is None or event.table_id == table_id
        ]


class ConsoleProgress:
    """Print ``(i/n) Updating '<name>' <VARIANT> ... <STATUS>`` lines.

    Args:
        console: Rich console to print to; defaults to stdout.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def publish(
        self,
        table: TableConfiguration,
        variant: Variant,
        index: int,
        count: int,
        status: RefreshStatus,
    ) -> None:
        if status is RefreshStatus.START:
            self._console.print(
                f"({index + 1}/{count}) Updating '{table.name}' {variant} ... ",
                end="",
                markup=False,
                highlight=False,
            )
        else:
            self._console.print(status.name, style=STATUS_STYLES[status], highlight=False)
