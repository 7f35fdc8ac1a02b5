"""OSC-8 hyperlink utilities for the bldt CLI.

Table names printed by ``bldt show`` and ``bldt presets`` link to the table's
home page when the terminal supports OSC-8 hyperlinks, and fall back to plain
text otherwise.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Args:
        stream: File-like text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: ``True`` if hyperlinks should be emitted; ``False`` otherwise.

    Notes:
        - Returns ``False`` when the stream is not a TTY (e.g., piped or redirected).
        - Uses a conservative allowlist based on terminal identifiers.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in OSC8_TERMINALS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, text: str | None = None, stream: TextIO | None = None) -> str:
    """Render *text* (defaults to *url*) as a link to *url* when supported.

    Args:
        url: Target URL.
        text: Visible label.
        stream: Stream the result will be written to; defaults to ``sys.stdout``.

    Returns:
        str: The label wrapped in OSC-8 sequences when supported, otherwise the
        plain label.
    """
    label = url if text is None else text
    if not supports_osc8(stream):
        return label
    return f"\x1b]8;;{url}\x07{label}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
