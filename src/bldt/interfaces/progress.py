"""Refresh progress interface definitions."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bldt.domain import TableConfiguration, Variant


class RefreshStatus(Enum):
    """Lifecycle notifications for one ``(table, variant)`` during a refresh.

    Each supported variant gets `START` followed by exactly one of `DONE`,
    `UNNECESSARY` or `ERROR`, unless the refresh is cancelled in between.
    """

    START = "start"
    DONE = "done"
    UNNECESSARY = "unnecessary"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self is not RefreshStatus.START


class ProgressSink(Protocol):  # pylint: disable=too-few-public-methods
    """Receiver of refresh lifecycle notifications."""

    def publish(
        self,
        table: TableConfiguration,
        variant: Variant,
        index: int,
        count: int,
        status: RefreshStatus,
    ) -> None:
        """Report *status* for *variant* of *table*.

        Args:
            table: Table being refreshed.
            variant: Variant being processed (always one the table supports).
            index: Zero-based position of the table in the current batch.
            count: Number of tables in the current batch.
            status: Lifecycle status.
        """
