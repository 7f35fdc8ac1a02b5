"""Immutable, indexed in-memory view of one table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, TypeAlias

from bldt.errors import InvalidDefinitionError

from .validation import is_sha256, normalize_hash
from .variant import Variant, VariantPair

if TYPE_CHECKING:
    from .entry import Entry
    from .table import TableConfiguration

CompositeKey: TypeAlias = tuple[str, str, Variant]


@dataclass(frozen=True, slots=True)
class SourceState:
    """What is known about one variant's remote source after the last refresh.

    `modified_at` is the last ``Last-Modified`` value the server reported and
    `data_hash` the SHA-256 of the last body that was parsed. Either may be
    None independently.
    """

    modified_at: datetime | None = None
    data_hash: str | None = None

    def __post_init__(self) -> None:
        if self.data_hash is not None and not is_sha256(self.data_hash):
            raise InvalidDefinitionError(
                "source state", f"data hash is not SHA-256: {self.data_hash}"
            )
        object.__setattr__(self, "data_hash", normalize_hash(self.data_hash))


UNKNOWN_SOURCE = SourceState()


class TableSnapshot:
    """Entries of one table plus refresh bookkeeping.

    Snapshots are never mutated: a refresh that changes anything builds a new
    one. Three lookup indexes are built up front from the same entry list (by
    SHA-256, by MD5, and by ``(name, author, variant)``); when two entries
    share a key the later one wins.

    Args:
        table: Owning table configuration.
        last_updated: Time of the last successful local update, None if the table
            was never refreshed.
        sources: Per-variant remote source state.
        entries: Entries of all variants.
    """

    def __init__(
        self,
        table: TableConfiguration,
        last_updated: datetime | None,
        sources: VariantPair[SourceState],
        entries: Iterable[Entry],
    ) -> None:
        self._table = table
        self._last_updated = last_updated
        self._sources = sources
        self._entries = tuple(entries)
        self._by_sha256: dict[str, Entry] = {}
        self._by_md5: dict[str, Entry] = {}
        self._by_key: dict[CompositeKey, Entry] = {}
        for entry in self._entries:
            self._by_key[(entry.name, entry.author, entry.variant)] = entry
            if entry.md5 is not None:
                self._by_md5[entry.md5] = entry
            if entry.sha256 is not None:
                self._by_sha256[entry.sha256] = entry

    @classmethod
    def empty(cls, table: TableConfiguration) -> TableSnapshot:
        """Snapshot of a table that has never been refreshed."""
        return cls(table, None, VariantPair(UNKNOWN_SOURCE, UNKNOWN_SOURCE), ())

    @property
    def table(self) -> TableConfiguration:
        return self._table

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @property
    def sources(self) -> VariantPair[SourceState]:
        return self._sources

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def modified_at(self, variant: Variant) -> datetime | None:
        return self._sources[variant].modified_at

    def data_hash(self, variant: Variant) -> str | None:
        return self._sources[variant].data_hash

    def entries_of(self, variant: Variant) -> list[Entry]:
        """Entries belonging to *variant*, in stored order."""
        return [entry for entry in self._entries if entry.variant is variant]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def query(
        self,
        name: str,
        author: str,
        variant: Variant,
        md5: str | None = None,
        sha256: str | None = None,
    ) -> Entry | None:
        """Find an entry by exact match.

        The SHA-256 index is tried first (when *sha256* is given), then the MD5
        index (when *md5* is given), then the ``(name, author, variant)`` key.
        Hash lookups ignore case.

        Returns:
            The matching entry, or None.
        """
        if sha256 is not None and (entry := self._by_sha256.get(sha256.lower())):
            return entry
        if md5 is not None and (entry := self._by_md5.get(md5.lower())):
            return entry
        return self._by_key.get((name, author, variant))

    def __repr__(self) -> str:
        return (
            f"TableSnapshot(table={self._table.id!r}, entries={len(self._entries)}, "
            f"last_updated={self._last_updated!r})"
        )
