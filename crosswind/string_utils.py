"""Small string helpers."""

from __future__ import annotations

from collections.abc import Iterable


def join_to_string(values: Iterable[str], delim: str = ",") -> str:
    """Join ``values`` with ``delim`` between consecutive items."""
    return delim.join(values)