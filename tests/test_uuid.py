import pytest

from gattkit.uuid import UUID, parse_uuid, uuid16


def test_uuid16_wire_order():
    assert bytes(uuid16(0x1800)) == bytes([0x00, 0x18])


def test_uuid16_string_form():
    assert str(uuid16(0x2A00)) == "2a00"


def test_uuid16_length():
    assert len(uuid16(0x2800)) == 2


def test_uuid16_out_of_range():
    with pytest.raises(ValueError):
        uuid16(0x10000)
    with pytest.raises(ValueError):
        uuid16(-1)


def test_parse_128_bit_is_reversed_on_wire():
    u = parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")
    assert u.raw.hex() == "1bc5d5a502000499e31111c1c095fc09"
    assert len(u) == 16


def test_parse_string_round_trip():
    text = "11fac9e0c11111e392460002a5d5c51b"
    assert str(parse_uuid(text)) == text


def test_parse_ignores_dashes_and_case():
    assert parse_uuid("ABAB-ABAB") == parse_uuid("abababab")


def test_parse_16_bit_matches_uuid16():
    assert parse_uuid("2902") == uuid16(0x2902)


def test_parse_invalid_length():
    with pytest.raises(ValueError):
        parse_uuid("abcdef")


def test_parse_invalid_hex():
    with pytest.raises(ValueError):
        parse_uuid("zz00")


def test_equality_and_hash():
    a = UUID(b"\x00\x28")
    b = uuid16(0x2800)
    assert a == b
    assert len({a, b}) == 1
    assert a != uuid16(0x2801)


def test_not_equal_to_bytes():
    assert (uuid16(0x2800) == b"\x00\x28") is False