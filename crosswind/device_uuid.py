"""Sixteen-byte device identifiers in the canonical 8-4-4-4-12 form."""

from __future__ import annotations

import itertools
import operator
import string
from collections.abc import Iterator
from typing import Any

UUID_BYTE_LENGTH = 16
_GROUPS = (4, 2, 2, 2, 6)
_HEX_DIGITS = frozenset(string.hexdigits)


def _build_layout() -> tuple[int | str, ...]:
    positions = itertools.count()
    tokens: list[int | str] = []
    for group, size in enumerate(_GROUPS):
        if group:
            tokens.append("-")
        tokens.extend(itertools.islice(positions, size))
    return tuple(tokens)


_LAYOUT = _build_layout()


def _scan_hex_octets(text: str, layout: tuple[int | str, ...]) -> Iterator[tuple[int, int]]:
    """Yield ``(position, value)`` pairs for each byte converted, stopping at the first mismatch."""
    pos = 0
    for token in layout:
        if isinstance(token, str):
            if not text.startswith(token, pos):
                return
            pos += len(token)
            continue
        while pos < len(text) and text[pos].isspace():
            pos += 1
        end = pos
        while end < len(text) and end - pos < 2 and text[end] in _HEX_DIGITS:
            end += 1
        if end == pos:
            return
        yield token, int(text[pos:end], 16)
        pos = end


class UUID:
    """A mutable 16-byte identifier.

    Built from nothing (all zeros), a canonical string, or a bytes-like value
    of at least sixteen bytes.
    """

    UUID_BYTE_LENGTH = UUID_BYTE_LENGTH

    __slots__ = ("_bytes",)

    def __init__(self, value: Any = None) -> None:
        self._bytes = bytearray(UUID_BYTE_LENGTH)
        self.assign(value)

    def assign(self, value: Any) -> UUID:
        """Replace the bytes from another UUID, a string or a bytes-like value.

        ``None`` leaves the identifier unchanged. A string is scanned byte by
        byte; bytes after the first one that fails to parse are kept.
        """
        if value is None:
            return self
        if isinstance(value, UUID):
            self._bytes[:] = value._bytes
        elif isinstance(value, str):
            for position, octet in _scan_hex_octets(value, _LAYOUT):
                self._bytes[position] = octet
        else:
            data = bytes(value)
            if len(data) < UUID_BYTE_LENGTH:
                raise ValueError(
                    f"a UUID needs {UUID_BYTE_LENGTH} bytes, got {len(data)}"
                )
            self._bytes[:] = data[:UUID_BYTE_LENGTH]
        return self

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UUID):
            return self._bytes == other._bytes
        if isinstance(other, str):
            return self == UUID(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            data = bytes(other)
            return len(data) >= UUID_BYTE_LENGTH and data[:UUID_BYTE_LENGTH] == self._bytes
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, index: int) -> int:
        return self._bytes[operator.index(index)]

    def __setitem__(self, index: int, value: int) -> None:
        self._bytes[operator.index(index)] = value

    def __bytes__(self) -> bytes:
        return bytes(self._bytes)

    def __str__(self) -> str:
        digits = self._bytes.hex()
        parts = []
        start = 0
        for size in _GROUPS:
            parts.append(digits[start:start + size * 2])
            start += size * 2
        return "-".join(parts)

    def __repr__(self) -> str:
        return f"UUID('{self}')"


INVALID_UUID = UUID()