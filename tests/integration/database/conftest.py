"""Fixtures for `TableDatabase` integration tests.

Provided fixtures
-----------------
- **open_db**: Factory opening a `TableDatabase` on `db_dir` with the test
  `registry`; keyword arguments are passed through.
- **progress**: A fresh `RecordingProgress`.

Every refresh in these tests talks to the `remote` fake origin through the
shared `client` fixture; nothing leaves the process.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from bldt.adapters.progress import RecordingProgress
from bldt.service_layer import TableDatabase

# pylint: disable=redefined-outer-name


@pytest.fixture
def open_db(db_dir, registry) -> Callable[..., TableDatabase]:
    def _open(**kwargs) -> TableDatabase:
        kwargs.setdefault("registry", registry)
        return TableDatabase(db_dir, **kwargs)

    return _open


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()
