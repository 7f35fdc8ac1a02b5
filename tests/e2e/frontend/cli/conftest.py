"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits structured log
messages, fixtures to register that command, obtain a CliRunner, and run
tests within an isolated filesystem, and fixtures that route the table
commands' HTTP traffic to the `remote` fake origin.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from bldt.domain import VARIANTS
from bldt.entrypoints.cli import tables
from bldt.entrypoints.cli.main import bldt
from bldt.registry import default_registry
from tests.helpers.remote import score_body

# pylint: disable=redefined-outer-name,unused-argument


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests.

    Emits DEBUG/INFO/WARNING/ERROR/CRITICAL messages on the 'bldt.demo'
    logger and additional messages on a 'some.thirdparty' logger to exercise
    logger-level filtering and flight-recorder behavior.
    """
    logger = logging.getLogger("bldt.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    bldt.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(bldt, "log-demo")


@pytest.fixture(autouse=True)
def _isolated_home(monkeypatch, tmp_path):
    """Keep the default database and flight-recorder paths inside tmp_path."""
    monkeypatch.setenv("BLDT_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("BLDT_LOG_PATH", str(tmp_path / "latest.log"))


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def offline(monkeypatch, remote):
    """Send every request made by `bldt update` to the `remote` fake origin."""
    monkeypatch.setattr(tables, "make_client", lambda timeout: remote.client())
    return remote


def preset_body(table, variant) -> bytes:
    """A minimal valid body for one preset source: one entry at the first level."""
    profile = table.profile(variant)
    label = f"{profile.symbol}{profile.labels[0]}"
    if table.id.startswith("genocide"):
        page = f'var mname = [\n[1,"{label}","{table.name} chart","x","Artist","y"],\n];\n'
        return page.encode("cp932")
    return score_body(
        {"level": profile.labels[0], "title": f"{table.name} chart", "artist": "Artist"}
    )


@pytest.fixture
def serve_presets(offline):
    """Serve a valid body for every source of every built-in table."""
    for table in default_registry():
        for variant in VARIANTS:
            if table.supports(variant):
                offline.serve(table.profile(variant).source_url, preset_body(table, variant))
    return offline
