"""Three-part ``major.minor.build`` version numbers."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

_FIELD = re.compile(r"\s*([+-]?)([0-9]+)")


def _scan_fields(text: str) -> Iterator[int]:
    """Yield each dot-separated unsigned 16-bit field converted, stopping at the first mismatch."""
    pos = 0
    for index in range(3):
        if index:
            if not text.startswith(".", pos):
                return
            pos += 1
        match = _FIELD.match(text, pos)
        if match is None:
            return
        value = int(match.group(2))
        if match.group(1) == "-":
            value = -value
        yield value & 0xFFFF
        pos = match.end()


class Version:
    """A version whose major and minor parts are 8-bit and whose build is 16-bit.

    Ordering uses ``major * 1000000 + minor * 1000 + build``; equality compares
    the three parts.
    """

    __slots__ = ("major", "minor", "build")

    def __init__(self, major: int = 0, minor: int = 0, build: int = 0) -> None:
        self.major = major & 0xFF
        self.minor = minor & 0xFF
        self.build = build & 0xFFFF

    @classmethod
    def parse(cls, text: str) -> Version:
        """Build a version from ``"major.minor.build"``; missing parts are zero."""
        return cls().assign(text)

    def assign(self, other: Any) -> Version:
        """Copy another version, or parse a string into this one.

        Parts that a string does not supply keep their current values;
        ``None`` changes nothing.
        """
        if other is None:
            return self
        if isinstance(other, Version):
            self.major, self.minor, self.build = other.major, other.minor, other.build
            return self
        if not isinstance(other, str):
            raise TypeError(f"cannot assign {type(other).__name__} to Version")
        fields = list(_scan_fields(other))
        if len(fields) > 0:
            self.major = fields[0] & 0xFF
        if len(fields) > 1:
            self.minor = fields[1] & 0xFF
        if len(fields) > 2:
            self.build = fields[2]
        return self

    def _key(self) -> int:
        return self.major * 1_000_000 + self.minor * 1_000 + self.build

    @staticmethod
    def _coerce(other: object) -> Version | None:
        if isinstance(other, Version):
            return other
        if isinstance(other, str):
            return Version.parse(other)
        return None

    def __eq__(self, other: object) -> bool:
        version = self._coerce(other)
        if version is None:
            return NotImplemented
        return (self.major, self.minor, self.build) == (
            version.major,
            version.minor,
            version.build,
        )

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: object) -> bool:
        version = self._coerce(other)
        if version is None:
            return NotImplemented
        return self._key() < version._key()

    def __le__(self, other: object) -> bool:
        version = self._coerce(other)
        if version is None:
            return NotImplemented
        return self._key() <= version._key()

    def __gt__(self, other: object) -> bool:
        version = self._coerce(other)
        if version is None:
            return NotImplemented
        return self._key() > version._key()

    def __ge__(self, other: object) -> bool:
        version = self._coerce(other)
        if version is None:
            return NotImplemented
        return self._key() >= version._key()

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}"

    def __repr__(self) -> str:
        return f"Version({self.major}, {self.minor}, {self.build})"