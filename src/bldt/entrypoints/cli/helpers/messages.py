"""Terminal message helpers for the bldt CLI.

Small helpers for rendering user-visible lines with sensible emoji→ASCII fallbacks.
Messages write to stderr so stdout can remain machine-readable.
"""

import click

GLYPHS = {
    "warn": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """Return the emoji marker for *kind*, or its ASCII fallback.

    Args:
        kind: One of ``"warn"``, ``"success"`` or ``"error"``.
    """
    emoji, fallback = GLYPHS[kind]
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**.

    Example:
        ``⚠️  2 table(s) failed to update.``
    """
    click.secho(f"{glyph('warn')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr**.

    Example:
        ``✅  14 table(s) updated.``
    """
    click.secho(f"{glyph('success')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**.

    Example:
        ``❌  insane: https://example.com/insane.json: received 404``
    """
    click.secho(f"{glyph('error')}  {msg}", fg="red", bold=True, err=True)
