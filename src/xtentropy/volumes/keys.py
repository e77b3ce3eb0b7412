"""Derive a filesystem-safe registry key from a volume's display names."""

from __future__ import annotations

_UNSAFE_CHARS = '\\/:*?"<>|'
_SAFE_TABLE = str.maketrans({c: "_" for c in _UNSAFE_CHARS})


def truncate_short_name(long_name: str, short_name: str) -> str:
    """Cut *short_name* at its last ``", "`` unless *long_name* contains it.

    A comma in the first position is never treated as a cut point.
    """
    if short_name in long_name:
        return short_name
    pos = short_name.rfind(", ", 1)
    if pos == -1:
        return short_name
    return short_name[:pos]


def sanitize(name: str) -> str:
    """Replace characters that are not allowed in file names with ``_``."""
    return name.translate(_SAFE_TABLE)


def derive_volume_key(long_name: str, short_name: str) -> str:
    return sanitize(truncate_short_name(long_name, short_name))
