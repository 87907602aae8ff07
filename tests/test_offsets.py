import pytest

from memscope.offsets import (
    MemberResult,
    StructureType,
    TypeLibrary,
    UnknownProfileError,
    load_type_library,
)

PROFILE = "windows-32-2000"


@pytest.fixture
def tlib():
    return load_type_library(PROFILE)


def test_profile_name_kept(tlib):
    assert tlib.profile == PROFILE


@pytest.mark.parametrize("name", ["windows-32-9000", "macos", "", None])
def test_unknown_profile_raises(name):
    with pytest.raises(UnknownProfileError):
        TypeLibrary(name)


def test_translate_known_type_is_valid(tlib):
    st = tlib.translate("_EPROCESS")
    assert st.is_valid()
    assert not st.is_pointer()
    assert not st.is_unknown()


def test_translate_unknown_name_is_invalid(tlib):
    assert not tlib.translate("_BOGUS").is_valid()


def test_translate_unknown_marker(tlib):
    assert tlib.translate("UNKNOWN").is_unknown()


def test_translate_same_name_gives_same_object(tlib):
    first = tlib.translate("_PEB")
    second = tlib.translate("_PEB")
    assert first is second
    assert tlib.offset_of(second, "Ldr").offset == 0xC


def test_offset_of_pointer_member(tlib):
    result = tlib.offset_of(tlib.translate("_EPROCESS"), "UniqueProcessId")
    assert result.offset == 0x9C
    assert result.type.is_pointer()
    assert tlib.dereference(result.type).is_unknown()


def test_pointer_member_dereferences_to_target(tlib):
    result = tlib.offset_of(tlib.translate("_EPROCESS"), "Peb")
    assert result == MemberResult(0x1B0, result.type)
    assert tlib.dereference(result.type) == tlib.translate("_PEB")


def test_embedded_member_type(tlib):
    result = tlib.offset_of(tlib.translate("_LDR_DATA_TABLE_ENTRY"), "BaseDllName")
    assert result.offset == 0x2C
    assert result.type == tlib.translate("_UNICODE_STRING")


def test_dereference_round_trip(tlib):
    st = tlib.translate("_KPCR")
    pointer = tlib.dereference(st)
    assert pointer.is_pointer()
    assert tlib.dereference(pointer) == st


def test_dereference_invalid_raises(tlib):
    with pytest.raises(ValueError):
        tlib.dereference(tlib.translate("_BOGUS"))


def test_unknown_member_raises(tlib):
    with pytest.raises(KeyError):
        tlib.offset_of(tlib.translate("_EPROCESS"), "NoSuchField")


def test_member_of_invalid_type_raises(tlib):
    with pytest.raises(KeyError):
        tlib.offset_of(tlib.translate("_BOGUS"), "Flink")


def test_translate_enum_unknown(tlib):
    assert tlib.translate_enum("_POOL_TYPE", 3) == "unknown"


def test_structure_type_equality_by_tid():
    assert StructureType(5) == StructureType(5)
    assert not StructureType(None).is_valid()
    assert not StructureType(None).is_pointer()