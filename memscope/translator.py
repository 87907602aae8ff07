"""Virtual to physical address translation for a single address space."""

from __future__ import annotations

from memscope.paging import (
    TranslateProfile,
    UnsupportedOperationError,
    translate_amd64,
    translate_i386,
    translate_i386_pae,
)
from memscope.physical import PhysicalMemory


class VirtualMemoryTranslator:
    """Walks page tables of one address space, identified by its ASID (CR3)."""

    def __init__(
        self,
        pmem: PhysicalMemory,
        bits: int,
        asid: int,
        pae: bool = False,
        profile: str | TranslateProfile = "unknown",
    ) -> None:
        self.pmem = pmem
        self.bits = bits
        self._asid = asid
        self.pae = pae
        if isinstance(profile, TranslateProfile):
            self.profile = profile
        else:
            self.profile = TranslateProfile.from_name(profile)

    @property
    def asid(self) -> int:
        return self._asid

    def set_asid(self, asid: int) -> int:
        """Switch to another address space and return the previous ASID."""
        old, self._asid = self._asid, asid
        return old

    def translate(self, vm_addr: int, asid: int = 0, pae: bool | None = None) -> int:
        """Return the physical address for ``vm_addr``.

        An ``asid`` of zero means the translator's current address space; a
        ``pae`` of None means the layout the translator was created with.
        Raises a ``TranslationError`` subclass when the walk fails.
        """
        if asid == 0:
            asid = self._asid
        if pae is None:
            pae = self.pae

        if self.bits == 32 and not pae:
            return translate_i386(self.pmem, vm_addr, asid, self.profile)
        if self.bits == 32 and pae:
            return translate_i386_pae(self.pmem, vm_addr, asid, self.profile)
        if self.bits == 64:
            return translate_amd64(self.pmem, vm_addr, asid, self.profile)
        raise UnsupportedOperationError(
            f"cannot translate {self.bits}-bit addresses (pae={pae})"
        )

    def invalidate(self) -> None:
        """Drop any cached translations; nothing is cached at present."""

    def copy(self) -> "VirtualMemoryTranslator":
        """Return an independent translator over the same physical memory."""
        return VirtualMemoryTranslator(
            self.pmem, self.bits, self._asid, self.pae, self.profile
        )