"""The fixed two-slot variant dimension.

Every table has at most two sub-catalogs (single play and double play). The
on-disk format and the lookup logic hard-code exactly two slots, so variants
are a closed enum and per-variant data lives in a `VariantPair`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class Variant(Enum):
    """One of the two sub-catalogs of a table."""

    SINGLE = "sp"
    DOUBLE = "dp"

    @property
    def short_name(self) -> str:
        """Short lowercase token ("sp" / "dp")."""
        return self.value

    @property
    def slot(self) -> int:
        """Index of this variant in two-slot arrays (0 for SINGLE, 1 for DOUBLE)."""
        return 0 if self is Variant.SINGLE else 1

    @property
    def dp_mode(self) -> bool:
        """Value of the on-disk ``dpMode`` flag for this variant."""
        return self is Variant.DOUBLE

    @classmethod
    def from_dp_mode(cls, dp_mode: bool) -> Variant:
        """Map the on-disk ``dpMode`` flag to a variant."""
        return cls.DOUBLE if dp_mode else cls.SINGLE

    @classmethod
    def from_slot(cls, slot: int) -> Variant:
        """Map a two-slot array index back to a variant."""
        return VARIANTS[slot]

    def __str__(self) -> str:
        return self.name


VARIANTS: tuple[Variant, Variant] = (Variant.SINGLE, Variant.DOUBLE)


@dataclass(frozen=True)
class VariantPair(Generic[T]):
    """Immutable pair of per-variant values with named accessors."""

    single: T
    double: T

    def __getitem__(self, variant: Variant) -> T:
        return self.single if variant is Variant.SINGLE else self.double

    def __iter__(self) -> Iterator[T]:
        yield self.single
        yield self.double

    def items(self) -> Iterator[tuple[Variant, T]]:
        """Yield ``(variant, value)`` in slot order."""
        yield Variant.SINGLE, self.single
        yield Variant.DOUBLE, self.double

    def replace(self, variant: Variant, value: T) -> VariantPair[T]:
        """Return a copy with the slot for *variant* set to *value*."""
        if variant is Variant.SINGLE:
            return VariantPair(value, self.double)
        return VariantPair(self.single, value)

    @classmethod
    def of(cls, values: dict[Variant, T], default: T) -> VariantPair[T]:
        """Build a pair from a partial mapping, filling gaps with *default*."""
        return cls(
            values.get(Variant.SINGLE, default), values.get(Variant.DOUBLE, default)
        )
