"""The table database: a locked, JSON-on-disk cache of remote difficulty tables.

One record file (``<identifier>.json``) is kept per registered table under the
database location, next to two lock files. Loading takes the write lock;
refreshing takes both the read and the write lock for its whole duration, so
two processes never refresh (or load while refreshing) the same location.

A refresh walks the variants of a table in slot order (SINGLE, then DOUBLE)
and, for each one, performs a conditional GET against its source URL:

* ``304 Not Modified``, or a ``200`` whose body has the same SHA-256 as the
  last parsed one, leaves the variant's entries as they are;
* any other ``200`` body is handed to the table's format adapter and replaces
  the variant's entries;
* anything else fails the whole table and nothing is written.

The record is rewritten (temp file + atomic rename) only when something
actually changed: new entries, or a ``Last-Modified`` value that differs from
the stored one.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias

import httpx

from bldt.adapters.locking import ExclusiveFileLock
from bldt.adapters.progress import NullProgress
from bldt.adapters.record_codec import decode_record, encode_record
from bldt.config import READ_LOCK_FILE_NAME, WRITE_LOCK_FILE_NAME, get_data_dir
from bldt.domain import (
    UNKNOWN_SOURCE,
    VARIANTS,
    SourceState,
    TableSnapshot,
    Variant,
    VariantPair,
)
from bldt.errors import (
    LocationNotFoundError,
    LockError,
    ParseError,
    RefreshCancelledError,
    TransportError,
    UnknownTableError,
)
from bldt.interfaces import RefreshOutcome, RefreshStatus
from bldt.registry import TableRegistry, default_registry
from bldt.utils.timestamps import format_http_date, now, parse_http_date

if TYPE_CHECKING:
    from threading import Event

    from bldt.domain import Entry, TableConfiguration, VariantProfile
    from bldt.interfaces import ProgressSink

logger = logging.getLogger(__name__)

# Size of the blocks the response body is read in; cancellation is checked
# between blocks.
CHUNK_SIZE = 4096

RECORD_SUFFIX = ".json"

RequestTimeout: TypeAlias = timedelta | float | None


@dataclass(frozen=True, slots=True)
class _VariantResult:
    """What one variant contributes to the outgoing record.

    `entries` is None when the variant's stored entries are kept as they are.
    """

    state: SourceState
    entries: list[Entry] | None
    dirty: bool


@dataclass(frozen=True, slots=True)
class _RefreshContext:
    """Per-table arguments threaded through one refresh."""

    client: httpx.Client
    table: TableConfiguration
    index: int
    count: int
    timeout: RequestTimeout
    progress: ProgressSink
    cancel: Event | None

    def publish(self, variant: Variant, status: RefreshStatus) -> None:
        self.progress.publish(self.table, variant, self.index, self.count, status)

    def check_cancelled(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            logger.info("Refresh of '%s' was cancelled", self.table.id)
            raise RefreshCancelledError(self.table.id)


class TableDatabase:
    """Snapshots of every registered table, backed by a directory on disk.

    Construction loads every table's record under the write lock. Tables
    without a record start as empty snapshots.

    Args:
        location: Database directory.
        create: Create *location* (and missing parents) if it doesn't exist.
        registry: Table configurations to manage; defaults to the built-in
            presets.

    Raises:
        LocationNotFoundError: If *location* is missing and *create* is False,
            or if it exists but is not a directory.
        LockError: If the write lock is held by someone else.
        CorruptDatabaseError: If a record fails validation.
        OSError: On any other I/O failure.
    """

    def __init__(
        self,
        location: Path | str,
        *,
        create: bool = False,
        registry: TableRegistry | None = None,
    ) -> None:
        self._location = Path(location)
        self._registry = default_registry() if registry is None else registry
        self._ensure_location(create)
        self._read_lock = ExclusiveFileLock(self._location / READ_LOCK_FILE_NAME)
        self._write_lock = ExclusiveFileLock(self._location / WRITE_LOCK_FILE_NAME)
        self._snapshots: dict[str, TableSnapshot] = self._load()

    @classmethod
    def open(
        cls,
        location: Path | str | None = None,
        *,
        create: bool = False,
        registry: TableRegistry | None = None,
    ) -> TableDatabase:
        """Load the database at *location* (defaults to `config.get_data_dir()`)."""
        if location is None:
            location = get_data_dir()
        return cls(location, create=create, registry=registry)

    # --- Loading ---

    def _ensure_location(self, create: bool) -> None:
        if self._location.is_dir():
            return
        if self._location.exists():
            raise LocationNotFoundError(self._location, "not a directory")
        if not create:
            raise LocationNotFoundError(self._location)
        logger.info("Creating database location %s", self._location)
        self._location.mkdir(parents=True, exist_ok=True)

    def _load(self) -> dict[str, TableSnapshot]:
        logger.debug("Loading table database from %s", self._location)
        with self._locked(write=True):
            snapshots = {table.id: self._load_table(table) for table in self._registry}
        logger.debug(
            "Loaded %d table(s), %d entries in total",
            len(snapshots),
            sum(len(snapshot) for snapshot in snapshots.values()),
        )
        return snapshots

    def _load_table(self, table: TableConfiguration) -> TableSnapshot:
        path = self._record_path(table.id)
        if not path.is_file():
            logger.debug("%s: no record yet", table.id)
            return TableSnapshot.empty(table)
        return decode_record(table, path, path.read_bytes())

    def _record_path(self, table_id: str) -> Path:
        return self._location / f"{table_id}{RECORD_SUFFIX}"

    # --- Locking ---

    @contextmanager
    def _locked(self, *, read: bool = False, write: bool = False) -> Iterator[None]:
        """Hold the requested locks for the duration of the block.

        Raises:
            LockError: If any requested lock can't be taken; locks already
                taken are released first.
        """
        held: list[ExclusiveFileLock] = []
        wanted = (("read", self._read_lock, read), ("write", self._write_lock, write))
        try:
            for name, lock, requested in wanted:
                if not requested:
                    continue
                if not lock.acquire():
                    raise LockError(name, self._location)
                held.append(lock)
            yield
        finally:
            for lock in reversed(held):
                lock.release()

    def is_busy(self) -> bool:
        """Return True if another holder has either database lock right now."""
        return not (self._read_lock.probe() and self._write_lock.probe())

    # --- Read API ---

    @property
    def location(self) -> Path:
        return self._location

    @property
    def registry(self) -> TableRegistry:
        return self._registry

    def all(self) -> list[TableSnapshot]:
        """Snapshots of all loaded tables, in registration order."""
        return [
            self._snapshots[table.id]
            for table in self._registry
            if table.id in self._snapshots
        ]

    def get(self, table_id: str) -> TableSnapshot | None:
        """Return the snapshot of *table_id*, or None if it isn't loaded."""
        return self._snapshots.get(table_id)

    def __contains__(self, table_id: object) -> bool:
        return table_id in self._snapshots

    def __iter__(self) -> Iterator[TableSnapshot]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._snapshots)

    def query(  # pylint: disable=too-many-arguments
        self,
        table_id: str,
        name: str,
        author: str,
        variant: Variant,
        md5: str | None = None,
        sha256: str | None = None,
    ) -> Entry | None:
        """Look an entry up in one table; see `TableSnapshot.query`.

        Raises:
            UnknownTableError: If *table_id* isn't loaded.
        """
        snapshot = self._snapshots.get(table_id)
        if snapshot is None:
            raise UnknownTableError(table_id)
        return snapshot.query(name, author, variant, md5=md5, sha256=sha256)

    # --- Refresh ---

    def refresh(
        self,
        client: httpx.Client,
        table_id: str,
        *,
        timeout: RequestTimeout = None,
        progress: ProgressSink | None = None,
        cancel: Event | None = None,
    ) -> None:
        """Refresh one table from its remote sources.

        Args:
            client: HTTP client used for every request.
            table_id: Identifier of the table to refresh.
            timeout: Per-request timeout (seconds or timedelta); the client's
                own default applies when None.
            progress: Receiver of lifecycle notifications.
            cancel: Cooperative cancellation flag (e.g. `threading.Event`).

        Raises:
            UnknownTableError: If *table_id* isn't registered.
            LockError: If the read or write lock is held elsewhere.
            TransportError: On a bad URL, a network failure or a status other
                than 200 / 304.
            ParseError: If the format adapter rejects a body.
            RefreshCancelledError: If *cancel* was set.
            OSError: If the record can't be written.
        """
        table = self._registry.require(table_id)
        with self._locked(read=True, write=True):
            self._refresh_table(
                _RefreshContext(
                    client, table, 0, 1, timeout, progress or NullProgress(), cancel
                )
            )

    def refresh_all(
        self,
        client: httpx.Client,
        *,
        timeout: RequestTimeout = None,
        progress: ProgressSink | None = None,
        cancel: Event | None = None,
        results: MutableMapping[str, RefreshOutcome] | None = None,
    ) -> None:
        """Refresh every registered table, in registration order.

        Without *results*, the first failing table aborts the batch and its
        error propagates. With *results*, the mapping is cleared and then
        receives one `RefreshOutcome` per table: failures are recorded and the
        batch goes on. Cancellation always ends the batch: the current table and
        every table after it are recorded as aborted and
        `RefreshCancelledError` propagates.

        Raises:
            LockError: If the read or write lock is held elsewhere.
            RefreshCancelledError: If *cancel* was set.
            BldtError: The first failure, when *results* is None.
        """
        if results is not None:
            results.clear()
        progress = progress or NullProgress()
        with self._locked(read=True, write=True):
            tables = self._registry.all()
            for index, table in enumerate(tables):
                context = _RefreshContext(
                    client, table, index, len(tables), timeout, progress, cancel
                )
                if results is None:
                    self._refresh_table(context)
                    continue
                try:
                    self._refresh_table(context)
                except RefreshCancelledError:
                    for remaining in tables[index:]:
                        results[remaining.id] = RefreshOutcome.aborted()
                    raise
                except Exception as e:  # pylint: disable=broad-exception-caught
                    logger.warning("Failed to refresh '%s': %s", table.id, e)
                    results[table.id] = RefreshOutcome.failed(e)
                else:
                    results[table.id] = RefreshOutcome.success()

    def _refresh_table(self, context: _RefreshContext) -> None:
        table = context.table
        logger.info(
            "Refreshing '%s' (%d/%d)", table.id, context.index + 1, context.count
        )
        context.check_cancelled()

        current = self._snapshots.get(table.id) or TableSnapshot.empty(table)
        states = {variant: current.sources[variant] for variant in VARIANTS}
        contents = {variant: current.entries_of(variant) for variant in VARIANTS}
        dirty = False
        for variant in VARIANTS:
            profile = table.profile(variant)
            if profile is None:
                continue
            context.check_cancelled()
            context.publish(variant, RefreshStatus.START)
            result = self._refresh_variant(context, variant, profile, states[variant])
            states[variant] = result.state
            if result.entries is not None:
                contents[variant] = result.entries
            dirty = dirty or result.dirty

        if not dirty:
            logger.info("'%s' is up to date", table.id)
            return
        snapshot = TableSnapshot(
            table,
            now(),
            VariantPair.of(states, UNKNOWN_SOURCE),
            [entry for variant in VARIANTS for entry in contents[variant]],
        )
        self._commit(snapshot)
        self._snapshots[table.id] = snapshot
        logger.info("'%s' updated: %d entries", table.id, len(snapshot))

    def _refresh_variant(
        self,
        context: _RefreshContext,
        variant: Variant,
        profile: VariantProfile,
        known: SourceState,
    ) -> _VariantResult:
        table = context.table
        url = profile.source_url
        raw, last_modified = self._fetch(context, variant, url, known)
        if raw is None:
            logger.debug("%s %s: not modified", table.id, variant)
            context.publish(variant, RefreshStatus.UNNECESSARY)
            return _VariantResult(known, None, False)

        modified_at = known.modified_at
        dirty = False
        if last_modified is not None:
            try:
                parsed = parse_http_date(last_modified)
            except ValueError:
                logger.debug("%s: ignoring bad Last-Modified %r", url, last_modified)
            else:
                if parsed != known.modified_at:
                    modified_at = parsed
                    dirty = True

        data_hash = hashlib.sha256(raw).hexdigest()
        if known.data_hash is not None and known.data_hash.lower() == data_hash:
            logger.debug("%s %s: body unchanged", table.id, variant)
            context.publish(variant, RefreshStatus.UNNECESSARY)
            return _VariantResult(SourceState(modified_at, known.data_hash), None, dirty)

        entries = self._parse(context, variant, raw)
        context.check_cancelled()
        logger.debug("%s %s: parsed %d entries", table.id, variant, len(entries))
        context.publish(variant, RefreshStatus.DONE)
        return _VariantResult(SourceState(modified_at, data_hash), entries, True)

    def _fetch(
        self,
        context: _RefreshContext,
        variant: Variant,
        url: str,
        known: SourceState,
    ) -> tuple[bytes | None, str | None]:
        """GET *url*; return ``(body, Last-Modified)``, or ``(None, None)`` on 304."""
        table = context.table

        def fail(reason: str) -> TransportError:
            context.publish(variant, RefreshStatus.ERROR)
            return TransportError(table.id, url, reason)

        headers = {}
        if known.modified_at is not None:
            headers["If-Modified-Since"] = format_http_date(known.modified_at)
        options: dict[str, Any] = {}
        if context.timeout is not None:
            options["timeout"] = _seconds(context.timeout)

        try:
            request = context.client.build_request("GET", url, headers=headers, **options)
            response = context.client.send(request, stream=True)
        except httpx.InvalidURL as e:
            raise fail(f"can't use this URL: {e}") from e
        except httpx.HTTPError as e:
            raise fail(str(e) or type(e).__name__) from e

        try:
            logger.debug("%s: %s", url, response.status_code)
            if response.status_code == httpx.codes.NOT_MODIFIED:
                return None, None
            if response.status_code != httpx.codes.OK:
                raise fail(f"received {response.status_code}")
            try:
                raw = self._read_body(context, response)
            except httpx.HTTPError as e:
                raise fail(str(e) or type(e).__name__) from e
            return raw, response.headers.get("Last-Modified")
        finally:
            response.close()

    @staticmethod
    def _read_body(context: _RefreshContext, response: httpx.Response) -> bytes:
        buffer = bytearray()
        for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
            buffer.extend(chunk)
            context.check_cancelled()
        return bytes(buffer)

    @staticmethod
    def _parse(context: _RefreshContext, variant: Variant, raw: bytes) -> list[Entry]:
        table = context.table
        adapter = table.adapter
        try:
            entries = adapter.parse(table, variant, raw)
        except (ParseError, OSError):
            context.publish(variant, RefreshStatus.ERROR)
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            context.publish(variant, RefreshStatus.ERROR)
            raise ParseError(table.id, f"{type(adapter).__name__}: {e}") from e
        if entries is None:
            context.publish(variant, RefreshStatus.ERROR)
            raise ParseError(table.id, f"{type(adapter).__name__} returned nothing")
        return list(entries)

    def _commit(self, snapshot: TableSnapshot) -> None:
        """Write *snapshot* to its record file via a temp file and atomic rename."""
        table_id = snapshot.table.id
        data = encode_record(snapshot)
        path = self._record_path(table_id)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._location,
                prefix=f".{table_id}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("%s: wrote %s", table_id, path)

    def __repr__(self) -> str:
        return f"TableDatabase(location={str(self._location)!r}, tables={len(self)})"


def _seconds(timeout: timedelta | float) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)
