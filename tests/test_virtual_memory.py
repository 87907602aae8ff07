import pytest

from memscope.paging import PagedOutError
from memscope.physical import MemoryReadError, SparseMemory
from memscope.virtual_memory import VirtualMemory

PAGE_DIR = 0x1000


def set_uint(spm, addr, value, width):
    spm.set_range(addr, value.to_bytes(width, "little"))


@pytest.fixture
def i386_mem():
    spm = SparseMemory(0x10000)
    # vaddr 0x400000 -> phys 0x7000, vaddr 0x401000 -> phys 0x5000
    set_uint(spm, PAGE_DIR + 4, 0x2001, 4)
    set_uint(spm, 0x2000, 0x7001, 4)
    set_uint(spm, 0x2004, 0x5001, 4)
    return spm


@pytest.fixture
def amd64_mem():
    spm = SparseMemory(0x10000)
    set_uint(spm, PAGE_DIR, 0x2003, 8)
    set_uint(spm, 0x2000, 0x3003, 8)
    set_uint(spm, 0x3000, 0x4003, 8)
    set_uint(spm, 0x4008, 0x6003, 8)
    return spm


def test_read_within_page(i386_mem):
    data = b"hello world"
    i386_mem.set_range(0x7010, data)
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    assert vm.read(0x400010, len(data)) == data


def test_read_across_page_boundary(i386_mem):
    first = bytes(range(1, 9))
    second = bytes(range(9, 17))
    i386_mem.set_range(0x7FF8, first)
    i386_mem.set_range(0x5000, second)
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    assert vm.read(0x400FF8, 16) == first + second


def test_read_zero_bytes(i386_mem):
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    assert vm.read(0x400000, 0) == b""


def test_read_unmapped_page_raises(i386_mem):
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    with pytest.raises(PagedOutError):
        vm.read(0x402000, 4)


def test_read_past_physical_bound_raises():
    spm = SparseMemory(0x7800)
    set_uint(spm, PAGE_DIR + 4, 0x2001, 4)
    set_uint(spm, 0x2000, 0x7001, 4)
    vm = VirtualMemory(spm, 32, PAGE_DIR, False, "unknown")
    with pytest.raises(MemoryReadError):
        vm.read(0x400000, 0x1000)


def test_read_pointer_32(i386_mem):
    raw = bytes([0x78, 0x56, 0x34, 0x12, 0xFF, 0xFF])
    i386_mem.set_range(0x7020, raw)
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    assert vm.pointer_width == 4
    assert vm.bits == 32
    assert vm.read_pointer(0x400020) == int.from_bytes(raw[:4], "little")


def test_read_pointer_64(amd64_mem):
    raw = bytes([0x10, 0x20, 0x30, 0x40, 0x50, 0x60, 0x70, 0x7F])
    amd64_mem.set_range(0x6010, raw)
    vm = VirtualMemory(amd64_mem, 64, PAGE_DIR, False, "unknown")
    assert vm.pointer_width == 8
    assert vm.bits == 64
    assert vm.read_pointer(0x1010) == int.from_bytes(raw, "little")
    assert vm.read(0x1010, 8) == raw


def test_set_asid_returns_previous(i386_mem):
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    assert vm.set_asid(0x9000) == PAGE_DIR
    assert vm.asid == 0x9000


def test_copy_is_independent(i386_mem):
    data = b"abcd"
    i386_mem.set_range(0x7000, data)
    vm = VirtualMemory(i386_mem, 32, PAGE_DIR, False, "unknown")
    clone = vm.copy()
    clone.set_asid(0x9000)
    assert vm.asid == PAGE_DIR
    assert vm.read(0x400000, 4) == data
    assert clone.pmem is vm.pmem
    assert clone.bits == vm.bits