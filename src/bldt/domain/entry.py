"""Catalog entries."""

from __future__ import annotations

from dataclasses import dataclass

from bldt.errors import InvalidDefinitionError

from .validation import is_md5, is_sha256, normalize_hash
from .variant import Variant


@dataclass(frozen=True, slots=True)
class Entry:
    """Immutable record describing one catalog item.

    Conventions:
      - `name` is non-empty; `author` may be empty.
      - `rank` is an index into the owning variant profile's label list. Only
        non-negativity is checked here; the upper bound is the loader's (or
        the format adapter's) responsibility since it depends on the table.
      - `md5` / `sha256` are stored lowercase.
    """

    name: str
    author: str
    variant: Variant
    rank: int
    body_url: str | None = None
    additional_url: str | None = None
    md5: str | None = None
    sha256: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidDefinitionError("entry", "name must not be empty")
        if self.rank < 0:
            raise InvalidDefinitionError(
                "entry", f"rank is negative: {self.rank}", key=self.name
            )
        if self.md5 is not None and not is_md5(self.md5):
            raise InvalidDefinitionError("entry", f"invalid MD5: {self.md5}", key=self.name)
        if self.sha256 is not None and not is_sha256(self.sha256):
            raise InvalidDefinitionError(
                "entry", f"invalid SHA-256: {self.sha256}", key=self.name
            )
        object.__setattr__(self, "md5", normalize_hash(self.md5))
        object.__setattr__(self, "sha256", normalize_hash(self.sha256))
