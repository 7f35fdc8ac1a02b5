"""Per-variant configuration of a table."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from bldt.errors import InvalidDefinitionError

NOT_FOUND = -1


class VariantProfile:
    """Symbol, source URL and ordered rank labels of one table variant.

    Args:
        symbol: Non-empty prefix shown before rank labels (some adapters also
            expect it in the remote data).
        source_url: URL the variant's catalog is fetched from.
        labels: Ordered, non-empty, duplicate-free rank labels.
    """

    __slots__ = ("_symbol", "_source_url", "_labels", "_indices")

    def __init__(self, symbol: str, source_url: str, labels: Iterable[str]) -> None:
        if not symbol:
            raise InvalidDefinitionError("variant profile", "symbol is empty")
        if not source_url:
            raise InvalidDefinitionError("variant profile", "source URL is empty")
        labels = tuple(labels)
        if not labels:
            raise InvalidDefinitionError("variant profile", "labels are empty")
        indices: dict[str, int] = {}
        for index, label in enumerate(labels):
            if not label:
                raise InvalidDefinitionError(
                    "variant profile", "can't use an empty label"
                )
            if label in indices:
                raise InvalidDefinitionError(
                    "variant profile", f"label '{label}' is duplicated"
                )
            indices[label] = index
        self._symbol = symbol
        self._source_url = source_url
        self._labels = labels
        self._indices = MappingProxyType(indices)

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def source_url(self) -> str:
        return self._source_url

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def rank_of(self, label: str) -> int:
        """Return the rank index of *label*, or `NOT_FOUND` (-1) if unknown."""
        return self._indices.get(label, NOT_FOUND)

    def is_valid_rank(self, rank: int) -> bool:
        """Return True if *rank* indexes into the label list."""
        return 0 <= rank < len(self._labels)

    def label_of(self, rank: int) -> str:
        """Return the label at *rank*."""
        return self._labels[rank]

    def __repr__(self) -> str:
        return (
            f"VariantProfile(symbol={self._symbol!r}, source_url={self._source_url!r}, "
            f"labels={list(self._labels)!r})"
        )
