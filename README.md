# memscope

A library for looking inside a guest's memory from outside it. It reads a
raw physical memory snapshot and walks x86 page tables to turn virtual
addresses into physical ones. It also looks up the offsets of kernel
structures.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Physical memory (`memscope.physical`)

`load_snapshot(path)` opens a raw memory image as a `SnapshotMemory`. It
raises `OSError` if the file cannot be opened.

`SparseMemory(size)` is an in-memory image that reads as zeros until you
fill it with `set_range(start, data)`. Bytes past the upper bound are
dropped.

Both classes derive from `PhysicalMemory` and share these members:

- `read(addr, size)` returns bytes. A read that runs past `max_address`
  (also available as `upper_bound`) raises `MemoryReadError`. A negative
  address or size raises `ValueError`.
- `close()`. Both classes can also be used as context managers.

When reading a snapshot, bytes past the end of the file read as zeros.

```python
from memscope.physical import SparseMemory

with SparseMemory(2048 * 1024) as pmem:
    pmem.set_range(1024, b"\x12\x43\x99\xa1\x00\xb2")
    data = pmem.read(1024, 8)   # b"\x12\x43\x99\xa1\x00\xb2\x00\x00"
```

## Page table walks (`memscope.paging`)

There are three walkers. Each takes the physical memory, the virtual
address, the page-table root (CR3, called the ASID here) and a profile,
and returns a physical address.

| Function | Mode | Large pages |
| --- | --- | --- |
| `translate_i386` | 32-bit | 4 MB |
| `translate_i386_pae` | 32-bit PAE | 2 MB |
| `translate_amd64` | 64-bit | 1 GB and 2 MB |

`TranslateProfile` decides which entries count as present:

| Profile | An entry counts as present when |
| --- | --- |
| `GENERIC_LINUX` | the present bit or the global bit is set |
| `GENERIC_WINDOWS` | the present bit is set, or it is a transition entry (transition bit set, prototype bit clear) |
| `UNKNOWN` | the present bit is set |

`TranslateProfile.from_name(name)` picks the profile from a name's prefix:

- `"linux..."` gives `GENERIC_LINUX`.
- `"windows..."` gives `GENERIC_WINDOWS`.
- Any other name gives `UNKNOWN`.

In 64-bit mode, the top two levels always use the plain present bit.

A failed walk raises a subclass of `TranslationError`:

- `InvalidAddressError`: the address is not mapped.
- `PagedOutError`: the page is mapped but not resident.
- `UnsupportedOperationError`: the mode is not supported (raised by the
  translator).

## Translator (`memscope.translator`)

`VirtualMemoryTranslator(pmem, bits, asid, pae=False, profile="unknown")`
picks the walker from the bit width and the PAE flag. `profile` is either
a name or a `TranslateProfile`.

`translate(vm_addr, asid=0, pae=None)` resolves an address:

- An `asid` of 0 means the translator's current address space.
- A `pae` of `None` means the layout the translator was created with.

Other members:

- `set_asid(asid)` switches the address space and returns the previous
  ASID. The `asid` property holds the current one.
- `invalidate()` does nothing; there is no translation cache.
- `copy()` returns an independent translator over the same memory.

```python
from memscope.translator import VirtualMemoryTranslator

trans = VirtualMemoryTranslator(pmem, 64, 0x1C55A000, False, "windows-64-7sp1")
paddr = trans.translate(0x001E0123)
```

## Virtual memory (`memscope.virtual_memory`)

`VirtualMemory(pmem, bits, asid, pae=False, profile="unknown")` reads
through a translator:

- `read(addr, size)` follows 4 KB page boundaries. It raises a
  `TranslationError` if a page cannot be translated, and
  `MemoryReadError` if the physical read fails.
- `read_pointer(addr)` reads a little-endian pointer. The pointer is
  4 bytes for 32-bit address spaces and 8 bytes otherwise.
- `translate(addr)` returns the physical address behind `addr`.
- `set_asid(asid)` switches the address space, like the translator's.

It also has the properties `bits`, `pointer_width` and `asid`, and a
`copy()` method.

## Structure offsets (`memscope.offsets`, `memscope.win2000`)

`load_type_library(profile)` returns a `TypeLibrary`. Only the
`"windows-32-2000"` profile is available. Any other name raises
`UnknownProfileError`.

A `TypeLibrary` has these methods:

- `translate(name)` returns a `StructureType`. A name the profile does not
  know gives a type whose `is_valid()` is false.
- `offset_of(type, member)` returns a `MemberResult` holding `offset` and
  `type`. It raises `KeyError` if there is no such member.
- `dereference(type)` toggles the pointer bit, so a pointer type gives its
  target type and a target type gives its pointer type.
- `translate_enum(name, idx)` returns the name of an enumeration value, or
  `"unknown"`. This profile defines no enumerations.

`StructureType` also has `is_pointer()` and `is_unknown()`. `is_unknown()`
is true for members the profile gives no structure type.

```python
from memscope.offsets import load_type_library

lib = load_type_library("windows-32-2000")
eprocess = lib.translate("_EPROCESS")
links = lib.offset_of(eprocess, "ActiveProcessLinks")   # offset 0xA0
peb = lib.offset_of(eprocess, "Peb")
peb_type = lib.dereference(peb.type)
```

The Windows 2000 profile is partial. It covers the process, thread,
loader, PEB, object and handle-table members that introspection needs.
`memscope.win2000` exposes its raw lookups:

- `translate_type`
- `offset_of_member`
- `type_of_member`
- `translate_enum`

## Static Windows offsets (`memscope.static_offsets`)

`offsets_for(bits)` returns an `ArchOffsets` for a 32- or 64-bit kernel.
It holds the KPCR self and current-PRCB offsets, the KPRCB idle-thread
offset and the KDBG tag offset. `I386` and `AMD64` are the two instances.
`KDBG_PSLOADEDMODULELIST` and `KDBG_PSACTIVEPROCESSHEAD` are the KDBG
list offsets.

`decode_handle(handle, bits)` splits a handle value into an `ExHandle`
with these fields:

- `tag_bits`
- `low_index`
- `mid_index`
- `high_index`
- `kernel_flag`

Any other bit width raises `ValueError`.

## What it does not do

- It has no command-line tool; it is a library only.
- It does not walk operating-system objects such as process lists, module
  lists or handle tables. It gives you the offsets and address
  translation to build such walks yourself.
- Structure layouts exist only for 32-bit Windows 2000. Other Windows
  versions and Linux kernels have no type library here, although their
  profile names still select the right page-presence rules for
  translation.