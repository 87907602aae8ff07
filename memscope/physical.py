"""Physical memory sources: file snapshots and sparse in-memory images."""

from __future__ import annotations

import os
from typing import BinaryIO


class MemoryReadError(Exception):
    """Raised when a read runs past the upper bound of physical memory."""


class PhysicalMemory:
    """Physical address space of a given upper bound that reads as zeros.

    Addresses up to and including ``max_address`` are readable; anything
    beyond it makes the read fail.
    """

    def __init__(self, max_address: int) -> None:
        self.max_address = max_address

    @property
    def upper_bound(self) -> int:
        return self.max_address

    def _check_range(self, addr: int, size: int) -> None:
        if addr < 0:
            raise ValueError(f"negative physical address {addr:#x}")
        if size < 0:
            raise ValueError(f"negative read size {size}")
        if size and addr + size - 1 > self.max_address:
            raise MemoryReadError(
                f"read of {size} bytes at {addr:#x} exceeds upper bound "
                f"{self.max_address:#x}"
            )

    def read(self, addr: int, size: int) -> bytes:
        """Return ``size`` bytes starting at physical address ``addr``."""
        self._check_range(addr, size)
        return bytes(size)

    def close(self) -> None:
        """Release any resources held by this memory source."""

    def __enter__(self) -> "PhysicalMemory":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class SnapshotMemory(PhysicalMemory):
    """Physical memory backed by a raw dump file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self._file: BinaryIO = open(path, "rb")
        self._file.seek(0, os.SEEK_END)
        super().__init__(self._file.tell())

    @property
    def closed(self) -> bool:
        return self._file.closed

    def read(self, addr: int, size: int) -> bytes:
        self._check_range(addr, size)
        if addr >= self.max_address:
            return bytes(size)
        self._file.seek(addr)
        data = self._file.read(size)
        return data.ljust(size, b"\x00")

    def close(self) -> None:
        self._file.close()


class SparseMemory(PhysicalMemory):
    """Physical memory holding only the bytes that were explicitly set."""

    def __init__(self, size: int) -> None:
        super().__init__(size)
        self._bytes: dict[int, int] = {}

    def set_range(self, start: int, data: bytes) -> None:
        """Store ``data`` at ``start``; bytes past the upper bound are dropped."""
        for addr, value in enumerate(data, start):
            if addr > self.max_address:
                return
            self._bytes[addr] = value

    def read(self, addr: int, size: int) -> bytes:
        self._check_range(addr, size)
        return bytes(self._bytes.get(a, 0) for a in range(addr, addr + size))


def load_snapshot(path: str | os.PathLike) -> SnapshotMemory:
    """Open a raw physical memory dump; raises OSError if it cannot be read."""
    return SnapshotMemory(path)