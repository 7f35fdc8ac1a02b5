"""JSON codec for the on-disk table record (``<identifier>.json``).

Record layout::

    {
      "version": 1,
      "id": "<table identifier>",
      "lastUpdated": "<ISO-8601 zoned timestamp>",
      "modified": [
        {"dateTime": "<ISO-8601>" | null, "dataHash": "<sha256>" | null},  # SINGLE
        {"dateTime": ..., "dataHash": ...}                                   # DOUBLE
      ],
      "contents": [
        {"title": ..., "artist": ..., "dpMode": false, "levelIndex": 0,
         "bodyUrl": ..., "additionalUrl": ..., "md5": ..., "sha256": ...}
      ]
    }

Any deviation in the record's envelope is treated as tampering and raises
`CorruptDatabaseError`. Individual entries are validated one by one and
malformed ones are skipped.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from bldt.config import DATABASE_VERSION
from bldt.domain import Entry, SourceState, TableSnapshot, Variant, VariantPair
from bldt.domain.validation import is_md5, is_sha256, optional_hash, optional_url
from bldt.errors import CorruptDatabaseError
from bldt.utils.timestamps import format_iso, parse_iso

if TYPE_CHECKING:
    from bldt.domain import TableConfiguration

logger = logging.getLogger(__name__)

VARIANT_COUNT = 2


class _Tampered(Exception):
    """Internal signal carrying the reason a record was rejected."""


def decode_record(
    table: TableConfiguration, path: Path, data: bytes | str
) -> TableSnapshot:
    """Decode and validate the record of *table* read from *path*.

    Args:
        table: Configuration the record must belong to.
        path: Where the record was read from (used in error messages).
        data: Record contents (UTF-8 bytes or text).

    Returns:
        A snapshot built from the record.

    Raises:
        CorruptDatabaseError: If the record fails validation or can't be parsed.
    """
    try:
        return _decode(table, data)
    except _Tampered as e:
        logger.debug("Rejecting %s: %s", path, e)
        raise CorruptDatabaseError(table.id, path, str(e)) from None
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.debug("Unexpected error while decoding %s: %s", path, e)
        raise CorruptDatabaseError(table.id, path, f"broken database: {e}") from e


def _decode(table: TableConfiguration, data: bytes | str) -> TableSnapshot:
    root = json.loads(data)
    if not isinstance(root, dict):
        raise _Tampered("record is not an object")

    version = root["version"]
    if not _is_int(version) or version != DATABASE_VERSION:
        raise _Tampered(f"unsupported version: {version!r}")

    record_id = root["id"]
    if record_id != table.id:
        raise _Tampered(f"identifier mismatch: {record_id!r}")

    last_updated_text = root["lastUpdated"]
    if not isinstance(last_updated_text, str):
        raise _Tampered(f"invalid lastUpdated: {last_updated_text!r}")
    last_updated = _parse_timestamp(last_updated_text, "lastUpdated")

    sources = _decode_sources(root["modified"])

    raw_contents = root["contents"]
    if not isinstance(raw_contents, list):
        raise _Tampered("contents is not an array")
    entries = [
        entry
        for index, raw in enumerate(raw_contents)
        if (entry := _decode_entry(table, index, raw)) is not None
    ]
    return TableSnapshot(table, last_updated, sources, entries)


def _decode_sources(raw_modified: Any) -> VariantPair[SourceState]:
    if not isinstance(raw_modified, list) or len(raw_modified) != VARIANT_COUNT:
        raise _Tampered("modified must be an array of 2 elements")
    states: list[SourceState] = []
    for slot, raw in enumerate(raw_modified):
        if not isinstance(raw, dict):
            raise _Tampered(f"modified[{slot}] is not an object")
        date_time = raw["dateTime"]
        data_hash = raw["dataHash"]
        modified_at: datetime | None = None
        if date_time is not None:
            if not isinstance(date_time, str):
                raise _Tampered(f"invalid modified[{slot}].dateTime: {date_time!r}")
            modified_at = _parse_timestamp(date_time, f"modified[{slot}].dateTime")
        if data_hash is not None and not (
            isinstance(data_hash, str) and is_sha256(data_hash)
        ):
            raise _Tampered(f"invalid modified[{slot}].dataHash: {data_hash!r}")
        states.append(SourceState(modified_at, data_hash))
    return VariantPair(states[0], states[1])


def _parse_timestamp(value: str, field: str) -> datetime:
    try:
        return parse_iso(value)
    except ValueError as e:
        raise _Tampered(f"invalid {field}: {value!r}") from e


def _decode_entry(table: TableConfiguration, index: int, raw: Any) -> Entry | None:
    """Validate one ``contents`` element; return None (and log why) to skip it."""

    def skip(reason: str) -> None:
        logger.debug("%s: contents[%d]: skip because %s", table.id, index, reason)

    if not isinstance(raw, dict):
        skip("it's not an object")
        return None

    title = raw.get("title")
    if not isinstance(title, str) or not title:
        skip("invalid title")
        return None
    if "artist" not in raw:
        skip("artist not found")
        return None
    # a null artist is an unknown one
    artist = raw["artist"] if raw["artist"] is not None else ""
    if not isinstance(artist, str):
        skip(f"invalid artist: {artist!r}")
        return None

    dp_mode = raw.get("dpMode", False)
    if not isinstance(dp_mode, bool):
        skip(f"invalid dpMode: {dp_mode!r}")
        return None
    variant = Variant.from_dp_mode(dp_mode)
    profile = table.profile(variant)
    if profile is None:
        skip(f"unsupported variant {variant}")
        return None

    rank = raw.get("levelIndex", -1)
    if not _is_int(rank) or not profile.is_valid_rank(rank):
        skip(f"levelIndex out of range: {rank!r}")
        return None

    def invalid(field: str):
        return lambda value: logger.debug(
            "%s: contents[%d]: invalid %s: %r", table.id, index, field, value
        )

    return Entry(
        name=title,
        author=artist,
        variant=variant,
        rank=rank,
        body_url=optional_url(raw.get("bodyUrl"), invalid("bodyUrl")),
        additional_url=optional_url(raw.get("additionalUrl"), invalid("additionalUrl")),
        md5=optional_hash(raw.get("md5"), is_md5, invalid("md5")),
        sha256=optional_hash(raw.get("sha256"), is_sha256, invalid("sha256")),
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def encode_record(snapshot: TableSnapshot) -> str:
    """Serialize *snapshot* as a record.

    Raises:
        ValueError: If the snapshot has never been updated (no ``lastUpdated``).
    """
    if snapshot.last_updated is None:
        raise ValueError(f"{snapshot.table.id}: can't encode a never-updated snapshot")
    record = {
        "version": DATABASE_VERSION,
        "id": snapshot.table.id,
        "lastUpdated": format_iso(snapshot.last_updated),
        "modified": [
            {
                "dateTime": (
                    None if state.modified_at is None else format_iso(state.modified_at)
                ),
                "dataHash": state.data_hash,
            }
            for state in snapshot.sources
        ],
        "contents": [_encode_entry(entry) for entry in snapshot.entries],
    }
    return json.dumps(record, ensure_ascii=False, indent=2)


def _encode_entry(entry: Entry) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "title": entry.name,
        "artist": entry.author,
        "dpMode": entry.variant.dp_mode,
        "levelIndex": entry.rank,
    }
    optional = {
        "bodyUrl": entry.body_url,
        "additionalUrl": entry.additional_url,
        "md5": entry.md5,
        "sha256": entry.sha256,
    }
    encoded.update({key: value for key, value in optional.items() if value is not None})
    return encoded
