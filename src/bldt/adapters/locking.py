"""Exclusive, cross-process file locks.

Locks are advisory: they only exclude processes that also take them. Nothing
stops a non-participating process from writing the database files directly.
"""

from __future__ import annotations

import logging
from pathlib import Path

from filelock import FileLock, Timeout

logger = logging.getLogger(__name__)


class ExclusiveFileLock:
    """Non-blocking whole-file lock backed by a dedicated lock file.

    The lock file is created on first use and left in place afterwards.

    Args:
        path: Location of the lock file.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = FileLock(self._path, thread_local=False)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_held(self) -> bool:
        """True while this instance holds the lock."""
        return self._lock.is_locked

    def acquire(self) -> bool:
        """Try to take the lock without waiting.

        Returns:
            True if this instance now holds the lock; False if it already held
            it, another holder has it, or the lock file can't be opened.
        """
        if self._lock.is_locked:
            return False
        try:
            self._lock.acquire(blocking=False)
        except Timeout:
            logger.debug("Lock is held elsewhere: %s", self._path)
            return False
        except OSError as e:
            logger.debug("Can't open lock file %s: %s", self._path, e)
            return False
        return True

    def release(self) -> bool:
        """Release the lock.

        Returns:
            True if the lock was held and has been released; False (no-op) otherwise.
        """
        if not self._lock.is_locked:
            return False
        self._lock.release(force=True)
        return True

    def probe(self) -> bool:
        """Return True if the lock could be taken right now (acquire, then release)."""
        if not self.acquire():
            return False
        self.release()
        return True

    def __repr__(self) -> str:
        return f"ExclusiveFileLock(path={str(self._path)!r}, held={self.is_held})"
