"""Type libraries mapping kernel structure members to offsets and types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from memscope import win2000

POINTER = 0x80000000


@dataclass(frozen=True)
class StructureType:
    """A structure type id; ``None`` marks a type the profile does not know."""

    tid: int | None

    def is_valid(self) -> bool:
        return self.tid is not None

    def is_pointer(self) -> bool:
        return self.tid is not None and bool(self.tid & POINTER)

    def is_unknown(self) -> bool:
        return self.tid == 0


@dataclass(frozen=True)
class MemberResult:
    """Where a member lies within its structure, and what type it has."""

    offset: int
    type: StructureType


class UnknownProfileError(ValueError):
    """No type information is available for the requested profile."""


@dataclass(frozen=True)
class _Profile:
    translate: Callable[[str], "int | None"]
    offset_of: Callable[["int | None", str], "int | None"]
    type_of: Callable[["int | None", str], "int | None"]
    translate_enum: Callable[[str, int], str]


_PROFILES: dict[str, _Profile] = {
    "windows-32-2000": _Profile(
        win2000.translate_type,
        win2000.offset_of_member,
        win2000.type_of_member,
        win2000.translate_enum,
    ),
}


class TypeLibrary:
    """Structure layouts for one operating system profile."""

    def __init__(self, profile: str) -> None:
        if profile is None or profile not in _PROFILES:
            raise UnknownProfileError(f"unknown profile: {profile!r}")
        self.profile = profile
        self._impl = _PROFILES[profile]
        self._types: dict[int | None, StructureType] = {}

    def _intern(self, tid: int | None) -> StructureType:
        try:
            return self._types[tid]
        except KeyError:
            st = self._types[tid] = StructureType(tid)
            return st

    def translate(self, name: str) -> StructureType:
        """Return the type named ``name``; check ``is_valid`` on the result."""
        return self._intern(self._impl.translate(name))

    def offset_of(self, structure_type: StructureType, member: str) -> MemberResult:
        """Look up ``member`` of ``structure_type``.

        Raises KeyError when the type has no such member.
        """
        offset = self._impl.offset_of(structure_type.tid, member)
        if offset is None:
            raise KeyError(f"type {structure_type.tid!r} has no member {member!r}")
        mtype = self._intern(self._impl.type_of(structure_type.tid, member))
        return MemberResult(offset, mtype)

    def dereference(self, structure_type: StructureType) -> StructureType:
        """Toggle the pointer bit: a pointer type gives its target and back."""
        if structure_type.tid is None:
            raise ValueError("cannot dereference an invalid structure type")
        return self._intern(structure_type.tid ^ POINTER)

    def translate_enum(self, enum_name: str, idx: int) -> str:
        """Return the name of enumeration value ``idx``, or ``"unknown"``."""
        return self._impl.translate_enum(enum_name, idx)


def load_type_library(profile: str) -> TypeLibrary:
    """Return the type library for ``profile``; raises UnknownProfileError."""
    return TypeLibrary(profile)