import pytest

from gattkit.constants import (
    ATT_OP_ERROR,
    ATT_OP_FIND_INFO_REQ,
    ATT_OP_READ_BY_GROUP_REQ,
    ATT_OP_READ_BY_TYPE_REQ,
    AttErrorCode,
    Property,
    State,
    att_error_response,
    error_message,
)


def test_error_response_unsupported_request():
    assert att_error_response(0xFF, 0x0000, AttErrorCode.REQ_NOT_SUPP) == bytes.fromhex("01ff000006")


def test_error_response_unsupported_group_type():
    got = att_error_response(ATT_OP_READ_BY_GROUP_REQ, 1, AttErrorCode.UNSUPP_GRP_TYPE)
    assert got == bytes.fromhex("0110010010")


def test_error_response_attr_not_found():
    got = att_error_response(ATT_OP_READ_BY_TYPE_REQ, 4, AttErrorCode.ATTR_NOT_FOUND)
    assert got == bytes.fromhex("010804000a")


def test_error_response_handle_is_little_endian():
    got = att_error_response(ATT_OP_FIND_INFO_REQ, 0x1234, AttErrorCode.INVALID_HANDLE)
    assert got[0] == ATT_OP_ERROR
    assert int.from_bytes(got[2:4], "little") == 0x1234
    assert len(got) == 5


def test_error_message_known_codes():
    assert error_message(AttErrorCode.ATTR_NOT_FOUND) == "attribute not found"
    assert error_message(0x00) == "success"
    assert error_message(AttErrorCode.UNSUPP_GRP_TYPE) == "unsupported group type"


@pytest.mark.parametrize("code", [0x12, 0x7F, 0x80, 0x9F, 0xA0, 0xDF])
def test_error_message_reserved(code):
    assert error_message(code) == "reserved error code"


@pytest.mark.parametrize("code", [0xE0, 0xFF])
def test_error_message_profile(code):
    assert error_message(code) == "profile or service error"


def test_error_message_out_of_range():
    with pytest.raises(ValueError):
        error_message(0x100)


def test_state_names():
    assert str(State.POWERED_ON) == "PoweredOn"
    assert str(State.POWERED_OFF) == "PoweredOff"
    assert str(State(0)) == "Unknown"


def test_property_single():
    prop = Property(0x02)
    assert prop == Property.READ
    assert str(prop) == "read "


def test_property_combined_order():
    prop = Property(0x0C)
    assert prop == Property.WRITE | Property.WRITE_NR
    assert str(prop).split() == ["writeWithoutResponse", "write"]


def test_property_empty():
    assert str(Property(0)) == ""


def test_property_all_flags_listed():
    everything = Property(0xFF)
    assert len(str(everything).split()) == 8
    assert str(everything).endswith("extendedProperties ")