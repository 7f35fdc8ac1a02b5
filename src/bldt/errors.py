"""Exception taxonomy for the table database.

Every error raised by bldt derives from `BldtError`. Errors that concern a
single table carry its identifier as ``key`` so callers (and the CLI) can
report which table failed without parsing messages.
"""

from __future__ import annotations

from pathlib import Path


class BldtError(Exception):
    """Base class for all bldt errors."""

    def __init__(self, key: str | None = None, message: str | None = None) -> None:
        if message is None:
            message = f"table ({key}) error" if key else "table database error"
        super().__init__(message)
        self.key = key


# --- Definition errors ---


class InvalidDefinitionError(BldtError, ValueError):
    """Raised when an entry, variant profile or table configuration is malformed."""

    def __init__(self, kind: str, reason: str, key: str | None = None) -> None:
        label = f"{kind} ({key})" if key else kind
        super().__init__(key, f"Invalid {label}: {reason}")
        self.kind = kind
        self.reason = reason


class DuplicateTableError(BldtError):
    """Raised when a table configuration with the same identifier is registered twice."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Table ({key}) is already registered")


class UnknownTableError(BldtError, KeyError):
    """Raised when a table identifier is not in the registry."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"No table with such ID: {key}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


# --- Load errors ---


class LocationNotFoundError(BldtError, FileNotFoundError):
    """Raised when the database location is missing (or is not a directory)."""

    def __init__(self, location: Path, reason: str = "location not found") -> None:
        super().__init__(None, f"{location}: {reason}")
        self.location = location
        self.reason = reason


class CorruptDatabaseError(BldtError):
    """Raised when an on-disk table record fails structural or semantic validation."""

    def __init__(self, key: str, path: Path, reason: str) -> None:
        super().__init__(key, f"{path}: Unacceptable tampering was detected ({reason})")
        self.path = path
        self.reason = reason


# --- Refresh errors ---


class LockError(BldtError):
    """Raised when a required database lock cannot be acquired."""

    def __init__(self, lock_name: str, location: Path) -> None:
        super().__init__(None, f"{location}: failed to acquire {lock_name} lock")
        self.lock_name = lock_name
        self.location = location


class TransportError(BldtError):
    """Raised when a remote source cannot be fetched (bad URL, network, non-200)."""

    def __init__(self, key: str, url: str, reason: str) -> None:
        super().__init__(key, f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ParseError(BldtError):
    """Raised when a format adapter cannot translate a remote body into entries."""

    def __init__(self, key: str | None, reason: str) -> None:
        label = f"table ({key})" if key else "table"
        super().__init__(key, f"Failed to parse {label}: {reason}")
        self.reason = reason


class RefreshCancelledError(BldtError):
    """Raised when a cooperative cancellation request is observed during a refresh."""

    def __init__(self, key: str | None = None) -> None:
        label = f"table ({key})" if key else "tables"
        super().__init__(key, f"Refresh of {label} was cancelled")
