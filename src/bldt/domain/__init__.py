"""Domain model: entries, variants, table configurations and snapshots."""

from .entry import Entry
from .profile import NOT_FOUND, VariantProfile
from .snapshot import UNKNOWN_SOURCE, SourceState, TableSnapshot
from .table import TableConfiguration
from .variant import VARIANTS, Variant, VariantPair

__all__ = [
    "Entry",
    "NOT_FOUND",
    "SourceState",
    "TableConfiguration",
    "TableSnapshot",
    "UNKNOWN_SOURCE",
    "VARIANTS",
    "Variant",
    "VariantPair",
    "VariantProfile",
]
