"""Adapter for the common ``score.json`` table format.

The body is a UTF-8 JSON array of objects::

    [{"level": "3", "title": "...", "artist": "...", "url": "...",
      "url_diff": "...", "md5": "...", "sha256": "..."}, ...]
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from bldt.domain import NOT_FOUND, Entry
from bldt.domain.validation import is_md5, is_sha256, optional_hash, optional_url
from bldt.errors import ParseError
from bldt.interfaces import FormatAdapter

if TYPE_CHECKING:
    from bldt.domain import TableConfiguration, Variant

logger = logging.getLogger(__name__)


class ScoreJsonAdapter(FormatAdapter):
    """Parse score.json bodies; records with an unknown level, no title or no artist are skipped."""

    def parse(
        self, table: TableConfiguration, variant: Variant, raw: bytes
    ) -> list[Entry]:
        try:
            records = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(table.id, f"bad JSON format: {e}") from e
        if not isinstance(records, list):
            raise ParseError(table.id, "top level is not an array")

        profile = table.profile(variant)
        if profile is None:
            raise ParseError(table.id, f"variant {variant} is not supported")

        entries: list[Entry] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                logger.debug("%s: contents[%d]: bad data format", table.id, index)
                continue

            label = _text(record.get("level"))
            if not label:
                logger.debug("%s: contents[%d]: skip, no level", table.id, index)
                continue
            if (rank := profile.rank_of(label)) == NOT_FOUND:
                logger.debug(
                    "%s: contents[%d]: skip, unknown level %r", table.id, index, label
                )
                continue

            title = _text(record.get("title"))
            if not title:
                logger.debug("%s: contents[%d]: skip, no title", table.id, index)
                continue
            artist = _text(record.get("artist"))
            if artist is None:
                logger.debug("%s: contents[%d]: skip, no artist", table.id, index)
                continue

            def invalid(field: str, i: int = index):
                return lambda value: logger.debug(
                    "%s: contents[%d]: invalid %s: %r", table.id, i, field, value
                )

            entries.append(
                Entry(
                    name=title,
                    author=artist,
                    variant=variant,
                    rank=rank,
                    body_url=optional_url(record.get("url"), invalid("url")),
                    additional_url=optional_url(
                        record.get("url_diff"), invalid("url_diff")
                    ),
                    md5=optional_hash(record.get("md5"), is_md5, invalid("md5")),
                    sha256=optional_hash(
                        record.get("sha256"), is_sha256, invalid("sha256")
                    ),
                )
            )
        return entries


def _text(value: object) -> str | None:
    """Coerce a scalar JSON value to text the way table authors expect (levels may be numbers)."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
