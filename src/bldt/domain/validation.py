"""Field validators shared by the record codec and the format adapters.

Optional fields coming from untrusted sources (the on-disk record or a remote
catalog) are validated one at a time. A rejected value is reported through an
``on_invalid`` callback and replaced by ``None``; it never aborts the
surrounding record.
"""

import re
from collections.abc import Callable
from typing import TypeAlias
from urllib.parse import urlsplit

ID_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
MD5_PATTERN = re.compile(r"^[A-Fa-f0-9]{32}$")
SHA256_PATTERN = re.compile(r"^[A-Fa-f0-9]{64}$")

NETWORK_SCHEMES = frozenset({"http", "https", "ftp"})

InvalidCallback: TypeAlias = Callable[[str], None]


def is_identifier(value: str) -> bool:
    """Return True if *value* is a valid table identifier token."""
    return bool(ID_PATTERN.fullmatch(value))


def is_md5(value: str) -> bool:
    """Return True if *value* is 32 hex characters (any case)."""
    return bool(MD5_PATTERN.fullmatch(value))


def is_sha256(value: str) -> bool:
    """Return True if *value* is 64 hex characters (any case)."""
    return bool(SHA256_PATTERN.fullmatch(value))


def normalize_hash(value: str | None) -> str | None:
    """Lowercase a hex digest, passing ``None`` through."""
    return None if value is None else value.lower()


def is_url(value: str) -> bool:
    """Return True if *value* is an absolute URL.

    Network schemes (http, https, ftp) additionally require a host.
    """
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or any(ch.isspace() for ch in value):
        return False
    if parts.scheme.lower() in NETWORK_SCHEMES:
        return bool(parts.hostname)
    return True


def _ignore(_: str) -> None:
    return None


def optional_url(value: object, on_invalid: InvalidCallback = _ignore) -> str | None:
    """Return *value* if it is a usable URL, ``None`` if absent or rejected.

    Args:
        value: Raw field value (``None``, empty string and non-strings count as absent
            or invalid).
        on_invalid: Called with the offending value when it is present but malformed.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not is_url(value):
        on_invalid(str(value))
        return None
    return value


def optional_hash(
    value: object,
    checker: Callable[[str], bool],
    on_invalid: InvalidCallback = _ignore,
) -> str | None:
    """Return the lowercased digest if *value* passes *checker*, else ``None``.

    Args:
        value: Raw field value.
        checker: One of `is_md5` / `is_sha256`.
        on_invalid: Called with the offending value when it is present but malformed.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not checker(value):
        on_invalid(str(value))
        return None
    return value.lower()
