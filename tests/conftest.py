"""Global pytest configuration for bldt.

Every test gets the mark of the top-level directory it lives in (``unit``,
``contract``, ``integration``, ``e2e``), unless it already carries it.
Property-based tests live with the layer they exercise and mark themselves
with ``@pytest.mark.property``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

# pylint: disable=unused-argument

pytest_plugins = [
    "tests.fixtures.tables",
    "tests.fixtures.remote",
]

TESTS_ROOT = Path(__file__).parent.resolve()
DIRECTORY_MARKERS = ("unit", "contract", "integration", "e2e")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the default mark of each item's top-level test directory."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if TESTS_ROOT not in path.parents:
            continue
        top = path.relative_to(TESTS_ROOT).parts[0]
        if top not in DIRECTORY_MARKERS:
            continue
        if not any(marker.name == top for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, top))
