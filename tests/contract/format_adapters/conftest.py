"""Fixtures for format adapter contract tests.

Provided fixtures
-----------------
- **adapter_case**: Parametrized over every built-in adapter. Each case bundles
  the adapter, a table it can parse for, a representative body per supported
  variant, and the number of entries that body should yield.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from bldt.adapters.formats import GenocideHtmlAdapter, ScoreJsonAdapter
from bldt.domain import TableConfiguration, Variant, VariantProfile
from bldt.interfaces import FormatAdapter
from tests.helpers.remote import score_body

GENOCIDE_PAGE = """<html><head><script>
var mname = [
[1,"★1","First","x","<a href='http://x.test/1.zip'>A</a>","y"],
[2,"★???","Second","x","B","y"],
];
</script></head></html>
""".encode("cp932")


@dataclass
class AdapterCase:
    """One adapter plus a table and bodies it understands."""

    adapter: FormatAdapter
    table: TableConfiguration
    bodies: dict[Variant, bytes]
    expected_count: int


def _score_json_case() -> AdapterCase:
    adapter = ScoreJsonAdapter()
    labels = ["0", "1", "2"]
    table = TableConfiguration(
        "score_json",
        "score.json",
        "https://x.test/",
        adapter,
        VariantProfile("sl", "https://x.test/sp.json", labels),
        VariantProfile("DPsl", "https://x.test/dp.json", labels),
    )
    body = score_body(
        {"level": "0", "title": "First", "artist": "A"},
        {"level": "2", "title": "Second", "artist": "B", "md5": "0" * 32},
    )
    return AdapterCase(adapter, table, {Variant.SINGLE: body, Variant.DOUBLE: body}, 2)


def _genocide_case() -> AdapterCase:
    adapter = GenocideHtmlAdapter()
    table = TableConfiguration(
        "genocide",
        "GENOCIDE",
        "https://x.test/",
        adapter,
        VariantProfile("★", "https://x.test/insane.html", ["1", "2", "???"]),
    )
    return AdapterCase(adapter, table, {Variant.SINGLE: GENOCIDE_PAGE}, 2)


@pytest.fixture(params=["score_json", "genocide_html"])
def adapter_case(request: pytest.FixtureRequest) -> AdapterCase:
    """Return a fresh case for the requested adapter."""

    match request.param:
        case "score_json":
            return _score_json_case()
        case "genocide_html":
            return _genocide_case()
        case _:
            raise ValueError(f"unknown adapter: {request.param}")
