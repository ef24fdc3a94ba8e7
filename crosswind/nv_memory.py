"""Non-volatile key/value storage organised in namespaces, with a write-guard service."""

from __future__ import annotations

import enum
import struct
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Any

from crosswind.framework import Application, Service

MAX_KEY_LENGTH = 15
MAX_STRING_LENGTH = 4000
MAX_BLOB_LENGTH = 508000

_STR = "str"
_BLOB = "blob"


class NVMError(Exception):
    """Base class for non-volatile memory errors."""


class NVMEraseError(NVMError):
    """Erasing a namespace failed."""


class NVMReadError(NVMError):
    """Reading a value failed."""


class NVMWriteError(NVMError):
    """Writing a value failed."""


class IntKind(enum.Enum):
    """Integer storage types: name, width in bits and signedness."""

    I8 = ("i8", 8, True)
    U8 = ("u8", 8, False)
    I16 = ("i16", 16, True)
    U16 = ("u16", 16, False)
    I32 = ("i32", 32, True)
    U32 = ("u32", 32, False)
    I64 = ("i64", 64, True)
    U64 = ("u64", 64, False)

    @property
    def bits(self) -> int:
        return self.value[1]

    @property
    def signed(self) -> bool:
        return self.value[2]

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


class NVMemory(Service):
    """The non-volatile storage area; namespaces are opened from it."""

    SERVICE_NAME = "NVMemory"

    def __init__(self) -> None:
        self._namespaces: dict[str, dict[str, tuple[Any, Any]]] = {}
        self._initialized = False

    def name(self) -> str:
        return self.SERVICE_NAME

    def init(self) -> None:
        """Make the storage ready for use."""
        self._initialized = True

    def loop(self) -> None:
        """Nothing to do periodically."""

    def erase(self) -> None:
        """Remove every namespace and all their values."""
        for entries in self._namespaces.values():
            entries.clear()
        self._namespaces.clear()

    def open(self, name: str, writable: bool = False) -> NVMNamespace:
        """Open (creating if needed) the namespace ``name``."""
        return NVMNamespace(self, name, writable)

    def _entries(self, name: str) -> dict[str, tuple[Any, Any]]:
        if not self._initialized:
            raise RuntimeError("non-volatile memory has not been initialised")
        if not name or len(name) > MAX_KEY_LENGTH:
            raise ValueError(f"invalid namespace name: {name!r}")
        return self._namespaces.setdefault(name, {})


class NVMNamespace:
    """An open namespace of typed values; read-only unless writing is enabled."""

    def __init__(self, memory: NVMemory, name: str, writable: bool = False) -> None:
        self._memory = memory
        self._name = name
        self._entries: dict[str, tuple[Any, Any]] | None = memory._entries(name)
        self._writable = bool(writable)

    @property
    def name(self) -> str:
        return self._name

    def close(self) -> None:
        self._entries = None

    def __enter__(self) -> NVMNamespace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def erase(self) -> None:
        """Remove every value in this namespace."""
        if self._entries is None:
            raise NVMEraseError("NVM namespace handle not open")
        if not self._writable:
            raise NVMEraseError("NVM namespace is read-only")
        self._entries.clear()

    def is_writable(self) -> bool:
        return self._writable

    def enable_write(self, writable: bool = True) -> None:
        """Reopen the namespace read-write, or read-only when ``writable`` is false."""
        if bool(writable) != self._writable:
            self._writable = bool(writable)
            self._entries = self._memory._entries(self._name)

    def disable_write(self) -> None:
        self.enable_write(False)

    def _lookup(self, key: str, tag: Any) -> Any:
        if self._entries is None:
            raise NVMReadError("NVM namespace handle not open")
        if not key or len(key) > MAX_KEY_LENGTH:
            raise NVMReadError("NVM key doesn't satisfy constraints")
        entry = self._entries.get(key)
        if entry is None or entry[0] != tag:
            raise NVMReadError("NVM key doesn't exist in namespace")
        return entry[1]

    def _store(self, key: str, tag: Any, value: Any) -> None:
        if self._entries is None:
            raise NVMWriteError("NVM namespace handle not open")
        if not self._writable:
            raise NVMWriteError("NVM namespace is read-only")
        if not key or len(key) > MAX_KEY_LENGTH:
            raise NVMWriteError("NVM key doesn't satisfy constraints")
        self._entries[key] = (tag, value)

    def get_int(self, key: str, kind: IntKind = IntKind.I32) -> int:
        """Read an integer stored with the same kind."""
        return self._lookup(key, IntKind(kind))

    def set_int(self, key: str, value: int, kind: IntKind = IntKind.I32) -> None:
        """Store an integer as ``kind``; it must fit the kind's range."""
        kind = IntKind(kind)
        if not kind.min <= value <= kind.max:
            raise ValueError(f"{value} does not fit in {kind.value[0]}")
        self._store(key, kind, int(value))

    def get_str(self, key: str) -> str:
        return self._lookup(key, _STR)

    def set_str(self, key: str, value: str) -> None:
        if len(value.encode("utf-8")) + 1 > MAX_STRING_LENGTH:
            raise NVMWriteError("The value is too large for NVM")
        self._store(key, _STR, value)

    def blob_size(self, key: str) -> int:
        """Size of the blob stored under ``key``, or 0 if there is none."""
        try:
            return len(self._lookup(key, _BLOB))
        except NVMReadError:
            return 0

    def get_blob(self, key: str, length: int | None = None) -> bytes:
        """Read a blob; ``length``, if given, must equal the stored size."""
        size = self.blob_size(key)
        if length is None:
            length = size
        if length > size:
            raise NVMReadError("NVM value larger than destination")
        data = self._lookup(key, _BLOB)
        if length < len(data):
            raise NVMReadError("NVM value larger than destination")
        return data

    def set_blob(self, key: str, value: bytes) -> None:
        data = bytes(value)
        if len(data) > MAX_BLOB_LENGTH:
            raise NVMWriteError("The value is too large for NVM")
        self._store(key, _BLOB, data)

    def get_object(self, key: str, fmt: str) -> tuple[Any, ...]:
        """Unpack a blob with a ``struct`` format."""
        return struct.unpack(fmt, self.get_blob(key, struct.calcsize(fmt)))

    def set_object(self, key: str, fmt: str, *args: Any) -> bytes:
        """Pack values with a ``struct`` format and store them as a blob."""
        data = struct.pack(fmt, *args)
        self.set_blob(key, data)
        return data


class NVMWriter(Service):
    """Holds a namespace read-only and opens it for writing only around updates."""

    SERVICE_NAME = "NVMWriter"

    def __init__(self) -> None:
        self.nvm: NVMNamespace | None = None

    def name(self) -> str:
        return self.SERVICE_NAME

    def depends_on(self) -> set[str]:
        return {NVMemory.SERVICE_NAME}

    def init(self, namespace: NVMNamespace | str | None = None, writable: bool = False) -> None:
        """Attach a namespace, opening it by name from the application's NVMemory."""
        if namespace is None:
            return
        if isinstance(namespace, NVMNamespace):
            self.nvm = namespace
            return
        app = Application.application()
        memory = app.service(NVMemory) if app is not None else None
        if memory is None:
            raise RuntimeError("the NVMWriter service needs a registered NVMemory")
        self.nvm = memory.open(namespace, writable)

    def loop(self) -> None:
        """Nothing to do periodically."""

    def _namespace(self) -> NVMNamespace:
        if self.nvm is None:
            raise RuntimeError("no namespace attached")
        return self.nvm

    def enable_write(self) -> None:
        nvm = self._namespace()
        if not nvm.is_writable():
            nvm.enable_write()

    def disable_write(self) -> None:
        nvm = self._namespace()
        if nvm.is_writable():
            nvm.disable_write()

    @contextmanager
    def writing(self) -> Iterator[NVMNamespace]:
        """Make the namespace writable for the duration of the block."""
        self.enable_write()
        try:
            yield self._namespace()
        finally:
            self.disable_write()

    def write(self, writer: Callable[[], Any]) -> None:
        """Run ``writer`` with the namespace writable."""
        with self.writing():
            writer()