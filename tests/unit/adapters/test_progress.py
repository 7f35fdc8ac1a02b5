"""Unit tests for the progress sink implementations."""

import io

from rich.console import Console

from bldt.adapters.progress import ConsoleProgress, NullProgress, RecordingProgress
from bldt.domain import Variant
from bldt.interfaces import ProgressSink, RefreshStatus


def test_sinks_satisfy_protocol() -> None:
    """All sinks are usable wherever a ProgressSink is expected."""
    sinks: list[ProgressSink] = [NullProgress(), RecordingProgress(), ConsoleProgress()]
    assert all(callable(sink.publish) for sink in sinks)


def test_null_progress_ignores_everything(alpha) -> None:
    assert NullProgress().publish(alpha, Variant.SINGLE, 0, 1, RefreshStatus.START) is None


def test_recording_progress_keeps_order(alpha, beta) -> None:
    """Events are kept in publication order and can be filtered by table."""
    progress = RecordingProgress()
    progress.publish(alpha, Variant.SINGLE, 0, 2, RefreshStatus.START)
    progress.publish(alpha, Variant.SINGLE, 0, 2, RefreshStatus.DONE)
    progress.publish(beta, Variant.SINGLE, 1, 2, RefreshStatus.START)
    progress.publish(beta, Variant.SINGLE, 1, 2, RefreshStatus.ERROR)

    assert progress.statuses() == [
        RefreshStatus.START,
        RefreshStatus.DONE,
        RefreshStatus.START,
        RefreshStatus.ERROR,
    ]
    assert progress.statuses("beta") == [RefreshStatus.START, RefreshStatus.ERROR]
    assert progress.events[2].index == 1
    assert progress.events[2].count == 2


def test_console_progress_prints_one_line_per_variant(beta) -> None:
    """START opens the line; the terminal status closes it."""
    out = io.StringIO()
    progress = ConsoleProgress(Console(file=out, color_system=None, width=200))

    progress.publish(beta, Variant.SINGLE, 0, 3, RefreshStatus.START)
    progress.publish(beta, Variant.SINGLE, 0, 3, RefreshStatus.DONE)
    progress.publish(beta, Variant.DOUBLE, 0, 3, RefreshStatus.START)
    progress.publish(beta, Variant.DOUBLE, 0, 3, RefreshStatus.UNNECESSARY)

    assert out.getvalue().splitlines() == [
        "(1/3) Updating 'Beta' SINGLE ... DONE",
        "(1/3) Updating 'Beta' DOUBLE ... UNNECESSARY",
    ]


def test_status_terminality() -> None:
    assert not RefreshStatus.START.is_terminal
    assert all(
        status.is_terminal
        for status in (RefreshStatus.DONE, RefreshStatus.UNNECESSARY, RefreshStatus.ERROR)
    )
