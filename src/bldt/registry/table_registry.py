"""Insertion-ordered, append-only registry of table configurations."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from bldt.errors import DuplicateTableError, UnknownTableError

if TYPE_CHECKING:
    from bldt.domain import TableConfiguration

logger = logging.getLogger(__name__)


class TableRegistry:
    """Known tables, in registration order.

    Configurations can be added but never removed; identifiers are unique.
    A registry is handed to `TableDatabase` explicitly, so separate databases
    (and tests) can work with separate sets of tables.
    """

    def __init__(self, tables: Iterable[TableConfiguration] = ()) -> None:
        self._tables: dict[str, TableConfiguration] = {}
        for table in tables:
            self.add(table)

    def add(self, table: TableConfiguration) -> None:
        """Register *table*.

        Raises:
            DuplicateTableError: If a table with the same identifier exists.
        """
        if table.id in self._tables:
            raise DuplicateTableError(table.id)
        self._tables[table.id] = table
        logger.debug("Registered table '%s'", table.id)

    def get(self, table_id: str) -> TableConfiguration | None:
        return self._tables.get(table_id)

    def require(self, table_id: str) -> TableConfiguration:
        """Like `get`, but raise `UnknownTableError` for an unknown identifier."""
        if (table := self._tables.get(table_id)) is None:
            raise UnknownTableError(table_id)
        return table

    def all(self) -> list[TableConfiguration]:
        return list(self._tables.values())

    def ids(self) -> list[str]:
        return list(self._tables)

    def rename(self, table_id: str, name: str) -> None:
        """Replace the display name of a registered table."""
        self.require(table_id).name = name

    def apply_display_names(self, names: Mapping[str, str]) -> None:
        """Set display names from an ``{identifier: name}`` mapping (e.g. a locale).

        Identifiers not in the registry are ignored.
        """
        for table_id, name in names.items():
            if table_id in self._tables:
                self._tables[table_id].name = name

    def __contains__(self, table_id: object) -> bool:
        return table_id in self._tables

    def __iter__(self) -> Iterator[TableConfiguration]:
        return iter(list(self._tables.values()))

    def __len__(self) -> int:
        return len(self._tables)
