import pytest

from crosswind.framework import Application, Hardware, setup
from crosswind.nv_memory import (
    IntKind,
    NVMemory,
    NVMEraseError,
    NVMNamespace,
    NVMReadError,
    NVMWriteError,
    NVMWriter,
)


@pytest.fixture
def memory():
    mem = NVMemory()
    mem.init()
    return mem


@pytest.mark.parametrize("kind", list(IntKind))
def test_int_round_trip_at_limits(memory, kind):
    ns = memory.open("cfg", True)
    ns.set_int("lo", kind.min, kind)
    ns.set_int("hi", kind.max, kind)
    assert ns.get_int("lo", kind) == kind.min
    assert ns.get_int("hi", kind) == kind.max


def test_int_ranges(memory):
    ns = memory.open("cfg", True)
    ns.set_int("u8", 255, IntKind.U8)
    ns.set_int("i16", -32768, IntKind.I16)
    assert ns.get_int("u8", IntKind.U8) == IntKind.U8.max == 255
    assert ns.get_int("i16", IntKind.I16) == IntKind.I16.min == -32768


def test_int_out_of_range(memory):
    ns = memory.open("cfg", True)
    with pytest.raises(ValueError):
        ns.set_int("x", 256, IntKind.U8)
    with pytest.raises(ValueError):
        ns.set_int("x", -1, IntKind.U32)


def test_read_only_rejects_writes(memory):
    ns = memory.open("cfg")
    assert ns.is_writable() is False
    with pytest.raises(NVMWriteError, match="NVM namespace is read-only"):
        ns.set_int("x", 1)


def test_missing_and_mistyped_keys(memory):
    ns = memory.open("cfg", True)
    with pytest.raises(NVMReadError, match="NVM key doesn't exist in namespace"):
        ns.get_int("nope")
    ns.set_int("x", 7, IntKind.U8)
    with pytest.raises(NVMReadError):
        ns.get_int("x", IntKind.I8)
    with pytest.raises(NVMReadError):
        ns.get_str("x")


def test_key_constraints(memory):
    ns = memory.open("cfg", True)
    with pytest.raises(NVMWriteError, match="constraints"):
        ns.set_int("k" * 16, 1)
    with pytest.raises(NVMReadError, match="constraints"):
        ns.get_int("")


def test_string_round_trip_and_limit(memory):
    ns = memory.open("cfg", True)
    ns.set_str("host", "device.example.com")
    assert ns.get_str("host") == "device.example.com"
    with pytest.raises(NVMWriteError, match="too large"):
        ns.set_str("big", "a" * 4000)


def test_blob_round_trip_and_lengths(memory):
    ns = memory.open("cfg", True)
    ns.set_blob("b", b"\x01\x02\x03")
    assert ns.blob_size("b") == 3
    assert ns.get_blob("b") == b"\x01\x02\x03"
    assert ns.get_blob("b", 3) == b"\x01\x02\x03"
    with pytest.raises(NVMReadError, match="larger than destination"):
        ns.get_blob("b", 2)
    with pytest.raises(NVMReadError, match="larger than destination"):
        ns.get_blob("b", 4)
    assert ns.blob_size("missing") == 0
    with pytest.raises(NVMReadError, match="doesn't exist"):
        ns.get_blob("missing", 0)


def test_object_round_trip(memory):
    ns = memory.open("cfg", True)
    data = ns.set_object("obj", "<Hi", 513, -5)
    assert data == b"\x01\x02\xfb\xff\xff\xff"
    assert ns.get_object("obj", "<Hi") == (513, -5)


def test_erase_namespace(memory):
    ns = memory.open("cfg", True)
    ns.set_int("x", 1)
    ns.erase()
    assert ns.blob_size("x") == 0
    with pytest.raises(NVMReadError):
        ns.get_int("x")
    ns.disable_write()
    with pytest.raises(NVMEraseError, match="read-only"):
        ns.erase()


def test_closed_handle(memory):
    with memory.open("cfg", True) as ns:
        ns.set_int("x", 1)
    with pytest.raises(NVMReadError, match="not open"):
        ns.get_int("x")
    with pytest.raises(NVMWriteError, match="not open"):
        ns.set_int("x", 2)
    with pytest.raises(NVMEraseError, match="not open"):
        ns.erase()


def test_values_persist_across_opens_and_namespaces_isolated(memory):
    memory.open("a", True).set_str("k", "one")
    assert memory.open("a").get_str("k") == "one"
    with pytest.raises(NVMReadError):
        memory.open("b").get_str("k")


def test_memory_erase(memory):
    memory.open("a", True).set_int("k", 3)
    memory.erase()
    with pytest.raises(NVMReadError):
        memory.open("a").get_int("k")


def test_open_before_init_fails():
    with pytest.raises(RuntimeError):
        NVMemory().open("cfg")


def test_enable_disable_write(memory):
    ns = memory.open("cfg")
    ns.enable_write()
    assert ns.is_writable() is True
    ns.set_int("x", 4)
    ns.disable_write()
    assert ns.is_writable() is False
    assert ns.get_int("x") == 4


def test_writer_with_namespace(memory):
    writer = NVMWriter()
    assert writer.depends_on() == {"NVMemory"}
    ns = memory.open("cfg")
    writer.init(ns)
    seen = []
    writer.write(lambda: (seen.append(ns.is_writable()), ns.set_int("x", 9)))
    assert seen == [True]
    assert ns.is_writable() is False
    assert ns.get_int("x") == 9


def test_writer_restores_read_only_after_error(memory):
    writer = NVMWriter()
    ns = memory.open("cfg")
    writer.init(ns)
    with pytest.raises(KeyError):
        with writer.writing():
            raise KeyError("boom")
    assert ns.is_writable() is False


class _Board(Hardware):
    def init(self):
        pass

    def loop(self):
        pass


class _App(Application):
    def hardware(self):
        return _Board()

    def init(self):
        self.memory = self.register_service(NVMemory)
        self.memory.init()

    def loop(self):
        pass


def test_writer_opens_namespace_by_name():
    app = setup(_App)
    writer = NVMWriter()
    writer.init("settings")
    assert isinstance(writer.nvm, NVMNamespace)
    with writer.writing() as ns:
        ns.set_str("mode", "auto")
    assert app.memory.open("settings").get_str("mode") == "auto"