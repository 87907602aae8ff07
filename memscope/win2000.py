"""Structure layout profile for 32-bit Windows 2000 kernels.

The profile is partial. It holds the members that kernel introspection
needs and little beyond them.
"""

from __future__ import annotations

import enum

POINTER = 0x80000000


class _T(enum.IntEnum):
    UNKNOWN = 0
    _LIST_ENTRY = enum.auto()
    _UNICODE_STRING = enum.auto()
    _DISPATCHER_HEADER = enum.auto()
    _PEB_LDR_DATA = enum.auto()
    _LDR_DATA_TABLE_ENTRY = enum.auto()
    _CURDIR = enum.auto()
    _RTL_USER_PROCESS_PARAMETERS = enum.auto()
    _FILE_OBJECT = enum.auto()
    _OBJECT_TYPE = enum.auto()
    _OBJECT_HEADER = enum.auto()
    _HANDLE_TABLE = enum.auto()
    _CLIENT_ID = enum.auto()
    _ETHREAD = enum.auto()
    _KPRCB = enum.auto()
    _KPCR = enum.auto()
    _PEB = enum.auto()
    _KPROCESS = enum.auto()
    _EPROCESS = enum.auto()


def _ptr(t: _T) -> int:
    return int(t) | POINTER


# For each structure: member name -> (offset, type id of the member).
_OFFSETS: dict[int, dict[str, tuple[int, int]]] = {
    _T.UNKNOWN: {},
    _T._LIST_ENTRY: {
        "Flink": (0x0, _ptr(_T._LIST_ENTRY)),
        "Blink": (0x4, _ptr(_T._LIST_ENTRY)),
    },
    _T._UNICODE_STRING: {
        "Buffer": (0x4, _ptr(_T.UNKNOWN)),
        "Length": (0x0, _T.UNKNOWN),
        "MaximumLength": (0x2, _T.UNKNOWN),
    },
    _T._DISPATCHER_HEADER: {
        "Type": (0x0, _T.UNKNOWN),
        "Size": (0x2, _T.UNKNOWN),
    },
    _T._PEB_LDR_DATA: {
        "InLoadOrderModuleList": (0xC, _T._LIST_ENTRY),
    },
    _T._LDR_DATA_TABLE_ENTRY: {
        "InLoadOrderLinks": (0x0, _T._LIST_ENTRY),
        "DllBase": (0x18, _ptr(_T.UNKNOWN)),
        "SizeOfImage": (0x20, _T.UNKNOWN),
        "EntryPoint": (0x1C, _ptr(_T.UNKNOWN)),
        "FullDllName": (0x24, _T._UNICODE_STRING),
        "BaseDllName": (0x2C, _T._UNICODE_STRING),
        "Flags": (0x34, _T.UNKNOWN),
        "LoadCount": (0x38, _T.UNKNOWN),
        "CheckSum": (0x40, _T.UNKNOWN),
        "TimeDateStamp": (0x44, _T.UNKNOWN),
    },
    _T._CURDIR: {
        "DosPath": (0x0, _T._UNICODE_STRING),
        "Handle": (0x8, _ptr(_T.UNKNOWN)),
    },
    _T._RTL_USER_PROCESS_PARAMETERS: {
        "CurrentDirectory": (0x24, _T._CURDIR),
        "CommandLine": (0x40, _T._UNICODE_STRING),
        "ImagePathName": (0x38, _T._UNICODE_STRING),
        "DllPath": (0x30, _T._UNICODE_STRING),
        "DesktopInfo": (0x78, _T._UNICODE_STRING),
        "StandardInput": (0x18, _ptr(_T.UNKNOWN)),
        "StandardOutput": (0x1C, _ptr(_T.UNKNOWN)),
        "StandardError": (0x20, _ptr(_T.UNKNOWN)),
    },
    _T._FILE_OBJECT: {
        "FileName": (0x30, _T._UNICODE_STRING),
        "CurrentByteOffset": (0x38, _T.UNKNOWN),
    },
    _T._OBJECT_TYPE: {
        "Name": (0x40, _T._UNICODE_STRING),
        "Index": (0x4C, _T.UNKNOWN),
    },
    _T._OBJECT_HEADER: {
        "Body": (0x18, _T.UNKNOWN),
        "Type": (0x8, _ptr(_T._OBJECT_TYPE)),
    },
    _T._HANDLE_TABLE: {
        "TableCode": (0x0, _T.UNKNOWN),
        "Layer1": (0x8, _T.UNKNOWN),
    },
    _T._CLIENT_ID: {
        "UniqueProcess": (0x0, _ptr(_T.UNKNOWN)),
        "UniqueThread": (0x4, _ptr(_T.UNKNOWN)),
    },
    _T._ETHREAD: {
        "Cid": (0x1E0, _T._CLIENT_ID),
        "ThreadsProcess": (0x22C, _ptr(_T._EPROCESS)),
    },
    _T._KPRCB: {
        "MinorVersion": (0x0, _T.UNKNOWN),
        "MajorVersion": (0x2, _T.UNKNOWN),
        "CurrentThread": (0x4, _ptr(_T._ETHREAD)),
        "NextThread": (0x8, _ptr(_T._ETHREAD)),
        "IdleThread": (0xC, _ptr(_T._ETHREAD)),
    },
    _T._KPCR: {
        "SelfPcr": (0x1C, _ptr(_T._KPCR)),
        "Prcb": (0x20, _ptr(_T._KPRCB)),
        "PrcbData": (0x120, _T._KPRCB),
    },
    _T._PEB: {
        "ProcessParameters": (0x10, _ptr(_T._RTL_USER_PROCESS_PARAMETERS)),
        "ImageBaseAddress": (0x8, _ptr(_T.UNKNOWN)),
        "Ldr": (0xC, _ptr(_T._PEB_LDR_DATA)),
    },
    _T._KPROCESS: {
        "Header": (0x0, _T._DISPATCHER_HEADER),
        "DirectoryTableBase": (0x18, _T.UNKNOWN),
    },
    _T._EPROCESS: {
        "Pcb": (0x0, _T._KPROCESS),
        "UniqueProcessId": (0x9C, _ptr(_T.UNKNOWN)),
        "InheritedFromUniqueProcessId": (0x1C8, _ptr(_T.UNKNOWN)),
        "ImageFileName": (0x1FC, _T.UNKNOWN),
        "ObjectTable": (0x128, _ptr(_T._HANDLE_TABLE)),
        "ActiveProcessLinks": (0xA0, _T._LIST_ENTRY),
        "Peb": (0x1B0, _ptr(_T._PEB)),
        "CreateTime": (0x88, _T.UNKNOWN),
        "ExitTime": (0x90, _T.UNKNOWN),
        "VadRoot": (0x194, _ptr(_T.UNKNOWN)),
        "VadHint": (0x198, _ptr(_T.UNKNOWN)),
        "VirtualSize": (0xC8, _T.UNKNOWN),
    },
}

_TRANSLATE: dict[str, int] = {t.name: int(t) for t in _T}

_ENUMS: dict[str, dict[int, str]] = {}


def _member(tid: int | None, member: str) -> tuple[int, int] | None:
    if tid is None:
        return None
    return _OFFSETS.get(tid, {}).get(member)


def translate_type(name: str) -> int | None:
    """Return the type id for a structure name, or None if it is unknown."""
    return _TRANSLATE.get(name)


def offset_of_member(tid: int | None, member: str) -> int | None:
    """Return the byte offset of ``member`` in type ``tid``, or None."""
    entry = _member(tid, member)
    return None if entry is None else entry[0]


def type_of_member(tid: int | None, member: str) -> int | None:
    """Return the type id of ``member`` in type ``tid``, or None."""
    entry = _member(tid, member)
    return None if entry is None else int(entry[1])


def translate_enum(enum_name: str, idx: int) -> str:
    """Return the name of value ``idx`` of an enumeration, or ``"unknown"``."""
    return _ENUMS.get(enum_name, {}).get(idx, "unknown")