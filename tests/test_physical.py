import pytest

from memscope.physical import (
    MemoryReadError,
    PhysicalMemory,
    SnapshotMemory,
    SparseMemory,
    load_snapshot,
)


def test_sparse_allocate_reads_zeros():
    pmem = SparseMemory(2048)
    assert pmem.upper_bound == 2048
    assert pmem.read(0, 16) == bytes(16)


def test_sparse_read_back():
    target = bytes([0x12, 0x43, 0x99, 0xA1, 0x00, 0xB2, 0x00, 0x00])
    pmem = SparseMemory(2048 * 1024)
    pmem.set_range(1024, target[:6])
    assert pmem.read(1024, 8) == target


def test_sparse_out_of_bounds_read():
    max_addr = 2048 * 1024
    pmem = SparseMemory(max_addr)
    with pytest.raises(MemoryReadError):
        pmem.read(max_addr - 0x8, 16)


def test_sparse_upper_bound_is_inclusive():
    pmem = SparseMemory(16)
    pmem.set_range(15, b"\xaa\xbb\xcc")
    assert pmem.read(15, 2) == b"\xaa\xbb"
    with pytest.raises(MemoryReadError):
        pmem.read(16, 2)


def test_sparse_set_range_truncates_past_bound():
    pmem = SparseMemory(4)
    pmem.set_range(3, b"\x01\x02\x03")
    assert pmem.read(3, 2) == b"\x01\x02"


def test_negative_address_rejected():
    with pytest.raises(ValueError):
        SparseMemory(10).read(-1, 1)


def test_base_memory_reads_zeros():
    with PhysicalMemory(100) as pmem:
        assert pmem.read(90, 4) == b"\x00" * 4


def test_snapshot_reads_file(tmp_path):
    path = tmp_path / "dump.raw"
    path.write_bytes(bytes(range(64)))
    with load_snapshot(path) as pmem:
        assert pmem.upper_bound == 64
        assert pmem.read(10, 4) == bytes([10, 11, 12, 13])
        assert pmem.read(64, 1) == b"\x00"
        with pytest.raises(MemoryReadError):
            pmem.read(62, 4)


def test_snapshot_closes_on_exit(tmp_path):
    path = tmp_path / "dump.raw"
    path.write_bytes(b"abcd")
    with SnapshotMemory(path) as pmem:
        assert pmem.read(0, 4) == b"abcd"
    assert pmem.closed is True


def test_load_snapshot_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "missing.raw")