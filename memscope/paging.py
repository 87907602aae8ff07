"""Page table walks for i386, i386 PAE and amd64 address spaces."""

from __future__ import annotations

import enum

from memscope.physical import MemoryReadError, PhysicalMemory


class TranslateProfile(enum.Enum):
    """Operating system conventions that affect page presence checks."""

    UNKNOWN = "unknown"
    GENERIC_LINUX = "linux"
    GENERIC_WINDOWS = "windows"

    @classmethod
    def from_name(cls, name: str) -> "TranslateProfile":
        """Pick the profile for a name such as ``windows-32-7sp1``."""
        if name.startswith("linux"):
            return cls.GENERIC_LINUX
        if name.startswith("windows"):
            return cls.GENERIC_WINDOWS
        return cls.UNKNOWN


class TranslationError(Exception):
    """A virtual address could not be translated."""


class InvalidAddressError(TranslationError):
    """The virtual address is not mapped."""


class PagedOutError(TranslationError):
    """The virtual address is mapped but its page is not resident."""


class UnsupportedOperationError(TranslationError):
    """The requested address space layout is not supported."""


_PRESENT = 1
_LARGE_PAGE = 1 << 7
_GLOBAL = 1 << 8
_PROTOTYPE = 1 << 10
_TRANSITION = 1 << 11


def _read_entry(pmem: PhysicalMemory, addr: int, width: int) -> int:
    """Read a little-endian table entry; unreadable bytes count as zero."""
    try:
        data = pmem.read(addr, width)
    except MemoryReadError:
        available = max(0, min(width, pmem.max_address - addr + 1))
        data = pmem.read(addr, available) if available else b""
    return int.from_bytes(data.ljust(width, b"\x00"), "little")


def _present(entry: int) -> bool:
    return bool(entry & _PRESENT)


def _profile_present(entry: int, profile: TranslateProfile) -> bool:
    present = bool(entry & _PRESENT)
    if profile is TranslateProfile.GENERIC_LINUX:
        return present or bool(entry & _GLOBAL)
    if profile is TranslateProfile.GENERIC_WINDOWS:
        in_transition = bool(entry & _TRANSITION) and not entry & _PROTOTYPE
        return present or in_transition
    return present


def _is_large(entry: int) -> bool:
    return bool(entry & _LARGE_PAGE)


def translate_i386(
    pmem: PhysicalMemory, vaddr: int, asid: int, profile: TranslateProfile
) -> int:
    """Translate a 32-bit non-PAE virtual address; ``asid`` is the CR3 value."""
    pde = _read_entry(pmem, asid + ((vaddr >> 22) & 0x3FF) * 4, 4)
    if not _profile_present(pde, profile):
        if _is_large(pde):
            raise PagedOutError(f"large page for {vaddr:#x} is paged out")
        raise InvalidAddressError(f"no page directory entry for {vaddr:#x}")

    if _is_large(pde):
        return (pde & 0xFFC00000) | (vaddr & 0x003FFFFF)

    pt_base = pde & 0xFFFFF000
    pte = _read_entry(pmem, pt_base + ((vaddr >> 12) & 0x3FF) * 4, 4)
    if not _profile_present(pte, profile):
        raise PagedOutError(f"page for {vaddr:#x} is paged out")

    return ((pte >> 12) << 12) | (vaddr & 0xFFF)


_PAE_ENTRY_MASK = 0xFFFFFFFFFF000


def translate_i386_pae(
    pmem: PhysicalMemory, vaddr: int, asid: int, profile: TranslateProfile
) -> int:
    """Translate a 32-bit PAE virtual address; ``asid`` is the CR3 value."""
    pdpt_base = asid & 0xFFFFFFE0
    pdpe = _read_entry(pmem, pdpt_base + ((vaddr & 0xC0000000) >> 30) * 8, 8)
    if not _profile_present(pdpe, profile):
        raise InvalidAddressError(f"no page directory pointer entry for {vaddr:#x}")

    pd_base = pdpe & _PAE_ENTRY_MASK
    pde = _read_entry(pmem, pd_base + ((vaddr & 0x3FE00000) >> 21) * 8, 8)
    if not _profile_present(pde, profile):
        raise InvalidAddressError(f"no page directory entry for {vaddr:#x}")

    if _is_large(pde):
        return (pde & 0xFFFFFFFE00000) + (vaddr & 0x1FFFFF)

    pt_base = pde & _PAE_ENTRY_MASK
    pte = _read_entry(pmem, pt_base + ((vaddr & 0x1FF000) >> 12) * 8, 8)
    if not _profile_present(pte, profile):
        raise PagedOutError(f"page for {vaddr:#x} is paged out")

    return (pte & _PAE_ENTRY_MASK) + (vaddr & 0xFFF)


_AMD64_ENTRY_MASK = 0xFFFFFFFFFF000


def _amd64_entry(pmem: PhysicalMemory, base: int, index: int) -> int:
    return _read_entry(pmem, (base & _AMD64_ENTRY_MASK) + index * 8, 8)


def translate_amd64(
    pmem: PhysicalMemory, vaddr: int, asid: int, profile: TranslateProfile
) -> int:
    """Translate a 64-bit virtual address; ``asid`` is the CR3 value."""
    pml4e = _amd64_entry(pmem, asid, (vaddr & 0xFF8000000000) >> 39)
    if not _present(pml4e):
        raise InvalidAddressError(f"no PML4 entry for {vaddr:#x}")

    pdpte = _amd64_entry(pmem, pml4e & _AMD64_ENTRY_MASK, (vaddr & 0x007FC0000000) >> 30)
    if not _present(pdpte):
        raise InvalidAddressError(f"no page directory pointer entry for {vaddr:#x}")

    if _is_large(pdpte):
        return (pdpte & 0xFFFFFC0000000) + (vaddr & 0x3FFFFFFF)

    pde = _amd64_entry(pmem, pdpte & _AMD64_ENTRY_MASK, (vaddr & 0x00003FE00000) >> 21)
    if not _profile_present(pde, profile):
        raise InvalidAddressError(f"no page directory entry for {vaddr:#x}")

    if _is_large(pde):
        return (pde & 0xFFFFFFFF00000) + (vaddr & 0x1FFFFF)

    pte = _amd64_entry(pmem, pde & _AMD64_ENTRY_MASK, (vaddr & 0x0000001FF000) >> 12)
    if not _profile_present(pte, profile):
        raise PagedOutError(f"page for {vaddr:#x} is paged out")

    return (pte & _AMD64_ENTRY_MASK) + (vaddr & 0xFFF)