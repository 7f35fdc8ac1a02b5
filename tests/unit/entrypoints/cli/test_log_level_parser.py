"""Unit tests for the CLI log level parser.

These tests exercise bldt.entrypoints.cli.helpers.log_level_parser.parse_log_level,
covering default behavior, override semantics, input normalization (commas/spaces),
case-insensitivity, and error handling for malformed input.
"""

import logging
import types

import click
import pytest

from bldt.entrypoints.cli.helpers.log_level_parser import parse_log_level


def make_ctx():
    """Create a minimal Click context stub.

    The parser callback expects a Click context argument but does not use it;
    a lightweight SimpleNamespace is sufficient for testing.
    """
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """When no levels are provided, return the default library logger levels."""
    assert parse_log_level(make_ctx(), None, ()) == {
        "httpx": logging.WARNING,
        "httpcore": logging.WARNING,
        "filelock": logging.WARNING,
    }


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("httpx=INFO", "filelock=ERROR", "httpx=DEBUG")
    out = parse_log_level(make_ctx(), None, value)
    assert out["httpx"] == logging.DEBUG
    assert out["filelock"] == logging.ERROR
    assert out["httpcore"] == logging.WARNING


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    value = "httpx=INFO,  bldt.service_layer=DEBUG filelock=ERROR"
    out = parse_log_level(make_ctx(), None, value)
    assert out["httpx"] == logging.INFO
    assert out["filelock"] == logging.ERROR
    assert out["bldt.service_layer"] == logging.DEBUG


def test_case_insensitive_levels():
    """Level names should be parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("httpx=info", "filelock=WaRnInG"))
    assert out["httpx"] == logging.INFO
    assert out["filelock"] == logging.WARNING


@pytest.mark.parametrize(
    "item", ["not-a-pair", "=INFO"], ids=["no-separator", "no-name"]
)
def test_invalid_pair_raises(item):
    """Malformed NAME=LEVEL pairs should raise click.BadParameter."""
    with pytest.raises(click.BadParameter):
        parse_log_level(make_ctx(), None, (item,))


def test_invalid_level_raises():
    """Unknown level names should raise click.BadParameter."""
    with pytest.raises(click.BadParameter):
        parse_log_level(make_ctx(), None, ("httpx=LOUD",))
