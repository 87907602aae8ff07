"""Fixed Windows kernel structure offsets and handle layout."""

from __future__ import annotations

from dataclasses import dataclass

KDBG_PSLOADEDMODULELIST = 0x48
KDBG_PSACTIVEPROCESSHEAD = 0x50


@dataclass(frozen=True)
class ArchOffsets:
    """Offsets that do not vary between kernel builds of one architecture."""

    kpcr_self_offset: int
    kpcr_current_prcb_offset: int
    kprcb_idle_thread: int
    kdbg_tag_offset: int


I386 = ArchOffsets(
    kpcr_self_offset=0x1C,
    kpcr_current_prcb_offset=0x20,
    kprcb_idle_thread=0x0C,
    kdbg_tag_offset=0x10,
)

AMD64 = ArchOffsets(
    kpcr_self_offset=0x18,
    kpcr_current_prcb_offset=0x20,
    kprcb_idle_thread=0x18,
    kdbg_tag_offset=0x10,
)


@dataclass(frozen=True)
class ExHandle:
    """A handle value split into its handle table index fields."""

    tag_bits: int
    low_index: int
    mid_index: int
    high_index: int
    kernel_flag: int


# Field widths, lowest bits first: tag, low, mid, high, kernel flag.
_LAYOUTS = {
    32: (2, 9, 10, 10, 1),
    64: (2, 8, 9, 9, 36),
}


def offsets_for(bits: int) -> ArchOffsets:
    """Return the static offsets for a 32- or 64-bit kernel."""
    if bits == 32:
        return I386
    if bits == 64:
        return AMD64
    raise ValueError(f"no static offsets for {bits}-bit kernels")


def decode_handle(handle: int, bits: int) -> ExHandle:
    """Split ``handle`` into fields using the layout for ``bits``."""
    try:
        widths = _LAYOUTS[bits]
    except KeyError:
        raise ValueError(f"no handle layout for {bits}-bit kernels") from None
    value = handle & ((1 << bits) - 1)
    fields = []
    for width in widths:
        fields.append(value & ((1 << width) - 1))
        value >>= width
    return ExHandle(*fields)