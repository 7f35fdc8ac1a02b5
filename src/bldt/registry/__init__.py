"""Table registry and the built-in table presets."""

from .presets import PRESETS, TablePreset, default_registry
from .table_registry import TableRegistry

__all__ = ["PRESETS", "TablePreset", "TableRegistry", "default_registry"]
