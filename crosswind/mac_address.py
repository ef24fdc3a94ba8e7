"""Six-octet hardware (MAC) addresses."""

from __future__ import annotations

import operator
import string
from collections.abc import Iterator
from typing import Any

_BYTE_LENGTH = 6
_HEX_DIGITS = frozenset(string.hexdigits)

# Scanning layout: integers are octet positions, strings are literals that must match.
_LAYOUT: tuple[int | str, ...] = (0, ":", 1, ":", 2, ":", 3, ":", 4, ":", 5)


def _scan_hex_octets(text: str, layout: tuple[int | str, ...]) -> Iterator[tuple[int, int]]:
    """Yield ``(position, value)`` pairs for each octet converted, stopping at the first mismatch.

    Each octet is one or two hex digits, optionally preceded by whitespace.
    """
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


class MACAddress:
    """A mutable six-octet MAC address.

    Construct it with no arguments (all zeros), six octet values, a
    ``"xx:xx:xx:xx:xx:xx"`` string, or a bytes-like object of at least six bytes.
    """

    BYTE_LENGTH = _BYTE_LENGTH

    __slots__ = ("_octets",)

    def __init__(self, *args: Any) -> None:
        self._octets = bytearray(_BYTE_LENGTH)
        if len(args) == _BYTE_LENGTH:
            self.assign(bytes(args))
        elif len(args) == 1:
            self.assign(args[0])
        elif args:
            raise TypeError(
                f"MACAddress takes 0, 1 or {_BYTE_LENGTH} arguments, got {len(args)}"
            )

    def assign(self, address: Any) -> MACAddress:
        """Replace the octets from another address, a string or a bytes-like value.

        ``None`` leaves the address unchanged. A string is scanned field by
        field; octets after the first field that fails to parse are kept.
        """
        if address is None:
            return self
        if isinstance(address, MACAddress):
            self._octets[:] = address._octets
        elif isinstance(address, str):
            for position, value in _scan_hex_octets(address, _LAYOUT):
                self._octets[position] = value
        else:
            data = bytes(address)
            if len(data) < _BYTE_LENGTH:
                raise ValueError(
                    f"a MAC address needs {_BYTE_LENGTH} bytes, got {len(data)}"
                )
            self._octets[:] = data[:_BYTE_LENGTH]
        return self

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MACAddress):
            return self._octets == other._octets
        if isinstance(other, str):
            return self == MACAddress(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            data = bytes(other)
            return len(data) >= _BYTE_LENGTH and data[:_BYTE_LENGTH] == self._octets
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, index: int) -> int:
        return self._octets[operator.index(index)]

    def __setitem__(self, index: int, value: int) -> None:
        self._octets[operator.index(index)] = value

    def __bytes__(self) -> bytes:
        return bytes(self._octets)

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self._octets)

    def __repr__(self) -> str:
        return f"MACAddress('{self}')"


INVALID_MAC_ADDRESS = MACAddress()