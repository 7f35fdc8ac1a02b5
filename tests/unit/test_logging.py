"""Unit tests for bldt.logging."""

import logging

import pytest

from bldt.logging import (
    ThirdPartyPrefixFilter,
    config_flight_recorder,
    default_log_path,
    log_startup,
)


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "prefix"),
    [
        ("httpx", "[httpx]"),
        ("httpcore.connection", "[httpcore]"),
        ("filelock._api", "[filelock]"),
        ("bldt.service_layer.database", ""),
    ],
)
def test_prefix_filter(name, prefix):
    record = _record(name)
    assert ThirdPartyPrefixFilter().filter(record) is True
    assert record.prefix == prefix


def test_flight_recorder_creates_file_on_first_flush(tmp_path):
    """The log file only appears once a WARNING flushes the buffer."""
    path = tmp_path / "latest.log"
    recorder = config_flight_recorder(path, capacity=10)
    logger = logging.getLogger("bldt.tests.flight")
    logger.addHandler(recorder)
    logger.setLevel(logging.DEBUG)
    try:
        logger.debug("GET https://tables.test/sp.json")
        assert not path.exists()
        logger.warning("Failed to refresh 'alpha'")
        content = path.read_text(encoding="utf-8")
    finally:
        logger.removeHandler(recorder)
        recorder.close()
    assert "DEBUG bldt.tests.flight" in content
    assert "Failed to refresh 'alpha'" in content


def test_default_log_path_is_per_user(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "bldt.logging.user_log_dir", lambda *args, **kwargs: str(tmp_path / "logs")
    )
    assert default_log_path() == tmp_path / "logs" / "latest.log"


@pytest.mark.parametrize(("env", "source"), [("1", "BLDT_HOME"), (None, "default")])
def test_startup_reports_database_location(caplog, monkeypatch, tmp_path, env, source):
    """The database location is reported with where it came from."""
    if env is None:
        monkeypatch.delenv("BLDT_HOME", raising=False)
    else:
        monkeypatch.setenv("BLDT_HOME", str(tmp_path))
    logger = logging.getLogger("bldt.tests.startup")

    with caplog.at_level("DEBUG"):
        log_startup(
            logger,
            app_version="0.1.0",
            level=logging.WARNING,
            handlers=[],
            log_path=None,
            flight_recorder=False,
            flight_capacity=None,
            force_flush_fr=False,
            logger_levels={},
            data_dir=tmp_path,
        )

    messages = [record.getMessage() for record in caplog.records]
    assert "bldt 0.1.0: console=WARNING, flight-recorder=OFF" in messages
    assert f"Database location: {tmp_path} ({source})" in messages
    assert "Lock files: .read.lock, .write.lock" in messages
    assert "Per-logger overrides: <none>" in messages
    assert not any(m.startswith("Flight recorder:") for m in messages)
