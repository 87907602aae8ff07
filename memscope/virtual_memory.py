"""Reading process or kernel virtual memory through page translation."""

from __future__ import annotations

from memscope.paging import TranslateProfile
from memscope.physical import PhysicalMemory
from memscope.translator import VirtualMemoryTranslator

PAGE_SIZE = 4096


class VirtualMemory:
    """A virtual address space layered over physical memory."""

    def __init__(
        self,
        pmem: PhysicalMemory,
        bits: int,
        asid: int,
        pae: bool = False,
        profile: str | TranslateProfile = "unknown",
    ) -> None:
        self.pmem = pmem
        self.pae = pae
        self.pointer_width = 4 if bits == 32 else 8
        self._translator = VirtualMemoryTranslator(pmem, bits, asid, pae, profile)

    @property
    def bits(self) -> int:
        return 8 * self.pointer_width

    @property
    def asid(self) -> int:
        return self._translator.asid

    def set_asid(self, asid: int) -> int:
        """Switch address space and return the previous ASID."""
        return self._translator.set_asid(asid)

    def translate(self, addr: int) -> int:
        """Return the physical address behind ``addr``."""
        return self._translator.translate(addr, 0, self.pae)

    def read(self, addr: int, size: int) -> bytes:
        """Read ``size`` bytes at virtual ``addr``, following page boundaries.

        Raises a ``TranslationError`` when a page cannot be translated and
        ``MemoryReadError`` when the physical read fails.
        """
        chunks = []
        while size > 0:
            paddr = self.translate(addr)
            count = min(PAGE_SIZE - paddr % PAGE_SIZE, size)
            chunks.append(self.pmem.read(paddr, count))
            addr += count
            size -= count
        return b"".join(chunks)

    def read_pointer(self, addr: int) -> int:
        """Read a pointer-sized little-endian value at virtual ``addr``."""
        paddr = self.translate(addr)
        data = self.pmem.read(paddr, self.pointer_width)
        return int.from_bytes(data, "little")

    def copy(self) -> "VirtualMemory":
        """Return an independent view sharing the same physical memory."""
        clone = VirtualMemory.__new__(VirtualMemory)
        clone.pmem = self.pmem
        clone.pae = self.pae
        clone.pointer_width = self.pointer_width
        clone._translator = self._translator.copy()
        return clone