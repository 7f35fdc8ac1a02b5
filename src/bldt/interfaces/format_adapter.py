"""Format adapter interface definitions."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bldt.domain import Entry, TableConfiguration, Variant


class FormatAdapter(abc.ABC):
    """Translate one remote source's wire format into entries."""

    @abc.abstractmethod
    def parse(
        self, table: TableConfiguration, variant: Variant, raw: bytes
    ) -> list[Entry]:
        """Parse a fully downloaded body for one ``(table, variant)`` pair.

        Args:
            table: Configuration of the table being refreshed.
            variant: Variant the body was fetched for; the table is guaranteed
                to have a profile for it.
            raw: Raw response body.

        Returns:
            The entries of this variant. Every entry's `variant` must be *variant*
            and its `rank` a valid index into the variant's label list.

        Raises:
            ParseError: If the body is not in the expected format.
            OSError: Propagated unchanged by the table database.

        Note:
            Any other exception, or a ``None`` result, is reported by the table
            database as a `ParseError` for the whole table.
        """
