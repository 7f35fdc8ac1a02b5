"""Interfaces (application boundary) for bldt.

Contracts between the table database and its collaborators: format adapters
that turn remote bytes into entries, progress sinks that observe a refresh,
and the per-table outcome record of a batch refresh. Concrete implementations
live in `bldt.adapters`.
"""

from .format_adapter import FormatAdapter
from .outcome import OutcomeKind, RefreshOutcome
from .progress import ProgressSink, RefreshStatus

__all__ = [
    "FormatAdapter",
    "OutcomeKind",
    "ProgressSink",
    "RefreshOutcome",
    "RefreshStatus",
]
