"""Adapter for the GENOCIDE tables, published as CP932 HTML pages.

The entries are embedded in a script block::

    var mname = [
    [1,"☆12","Title","...","<a href='http://example.com/x.zip'>Artist</a>", ...],
    ...
    ];

Element 1 is the level (variant symbol followed by the rank label), element
2 the title and element 4 the artist, optionally wrapped in a link to the
chart body.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from bldt.domain import NOT_FOUND, Entry
from bldt.domain.validation import optional_url
from bldt.errors import ParseError
from bldt.interfaces import FormatAdapter

if TYPE_CHECKING:
    from bldt.domain import TableConfiguration, Variant

logger = logging.getLogger(__name__)

ENCODING = "cp932"
MIN_FIELDS = 5

CONTENTS_BEGIN = re.compile(r"^\s*var\s+mname\s*=\s*\[\s*$")
CONTENTS_END = re.compile(r"^\s*\];\s*$")
ARTIST_LINK = re.compile(r"^<a\s+href\s*=\s*'([^']*)'\s*>?(.+)</a>$")
# Backslash escapes JSON doesn't know (e.g. "\'") are kept as literal text.
INVALID_ESCAPE = re.compile(r'\\([^"/\\bfnrtu])')


class GenocideHtmlAdapter(FormatAdapter):
    """Extract entries from the ``mname`` array of a GENOCIDE table page."""

    def parse(
        self, table: TableConfiguration, variant: Variant, raw: bytes
    ) -> list[Entry]:
        profile = table.profile(variant)
        if profile is None:
            raise ParseError(table.id, f"variant {variant} is not supported")

        records = self._extract_records(table, raw)
        symbol = profile.symbol
        entries: list[Entry] = []
        for index, record in enumerate(records):
            if not isinstance(record, list):
                logger.debug("%s: contents[%d]: bad data format", table.id, index)
                continue
            if len(record) < MIN_FIELDS:
                logger.debug(
                    "%s: contents[%d]: too few fields: %d", table.id, index, len(record)
                )
                continue

            level = record[1]
            if not isinstance(level, str) or not level.startswith(symbol):
                logger.debug("%s: contents[%d]: invalid level %r", table.id, index, level)
                continue
            rank = profile.rank_of(level[len(symbol) :])
            if rank == NOT_FOUND:
                logger.debug("%s: contents[%d]: unknown level %r", table.id, index, level)
                continue

            title = record[2] if isinstance(record[2], str) else ""
            if not title:
                logger.debug("%s: contents[%d]: title is empty", table.id, index)
                continue

            artist_field = record[4] if isinstance(record[4], str) else ""
            body_url = None
            if match := ARTIST_LINK.match(artist_field):
                artist = match.group(2)
                body_url = optional_url(
                    match.group(1),
                    lambda value, i=index: logger.debug(
                        "%s: contents[%d]: invalid body URL: %r", table.id, i, value
                    ),
                )
            else:
                logger.debug(
                    "%s: contents[%d]: abnormal artist pattern: %r",
                    table.id,
                    index,
                    artist_field,
                )
                artist = artist_field

            entries.append(
                Entry(
                    name=title,
                    author=artist,
                    variant=variant,
                    rank=rank,
                    body_url=body_url,
                )
            )
        return entries

    @staticmethod
    def _extract_records(table: TableConfiguration, raw: bytes) -> list:
        lines = raw.decode(ENCODING, errors="replace").splitlines()
        begin = next(
            (i for i, line in enumerate(lines) if CONTENTS_BEGIN.match(line)), None
        )
        if begin is None:
            raise ParseError(table.id, "unknown or invalid HTML source")
        body: list[str] = []
        terminated = False
        for line in lines[begin + 1 :]:
            if CONTENTS_END.match(line):
                terminated = True
                break
            body.append(line)
        if not terminated:
            raise ParseError(table.id, "unknown or invalid HTML source")

        # the last element is usually followed by a dangling comma
        text = "\n".join(body).rstrip().removesuffix(",")
        text = INVALID_ESCAPE.sub(r"\\\\\1", text)
        try:
            records = json.loads(f"[{text}]")
        except json.JSONDecodeError as e:
            raise ParseError(table.id, f"JSON parse error: {e}") from e
        if not records:
            raise ParseError(table.id, "unknown or invalid HTML source")
        return records
