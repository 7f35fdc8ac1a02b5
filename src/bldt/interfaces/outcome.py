"""Per-table result of a batch refresh."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(Enum):
    """How a table's refresh ended within a batch."""

    SUCCESS = "success"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    """Outcome of one table within a batch refresh.

    `cause` is set only for `OutcomeKind.FAILED`.
    """

    kind: OutcomeKind
    cause: BaseException | None = None

    @classmethod
    def success(cls) -> RefreshOutcome:
        return cls(OutcomeKind.SUCCESS)

    @classmethod
    def aborted(cls) -> RefreshOutcome:
        return cls(OutcomeKind.ABORTED)

    @classmethod
    def failed(cls, cause: BaseException) -> RefreshOutcome:
        return cls(OutcomeKind.FAILED, cause)

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS
