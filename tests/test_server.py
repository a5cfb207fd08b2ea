import threading

import pytest

from gattkit.attr import Attribute, AttributeRange, generate_attributes
from gattkit.constants import (
    ATTR_APPEARANCE_UUID,
    ATTR_DEVICE_NAME_UUID,
    ATTR_GAP_UUID,
    ATTR_GATT_UUID,
    STATUS_SUCCESS,
    Property,
)
from gattkit.handlers import NotificationsStoppedError
from gattkit.model import Service
from gattkit.server import Central, Security
from gattkit.uuid import parse_uuid, uuid16

LONG = "A really long characteristic"


class FakeConn:
    def __init__(self, reads=()):
        self.reads = list(reads)
        self.written = []
        self.closed = False

    def read(self, n):
        return self.reads.pop(0) if self.reads else b""

    def write(self, data):
        self.written.append(bytes(data))
        return len(data)

    def close(self):
        self.closed = True


def _database():
    state = {"wrote": None, "notifiers": [], "notified": threading.Event()}

    svc = Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b"))
    svc.add_characteristic(parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b")).handle_read(
        lambda resp, req: resp.write("count: 1")
    )

    def on_write(req, data):
        state["wrote"] = data
        return STATUS_SUCCESS

    svc.add_characteristic(parse_uuid("16fe0d80-c111-11e3-b8c8-0002a5d5c51b")).handle_write(on_write)

    def on_notify(req, n):
        state["notifiers"].append(n)
        for i in range(4):
            n.write(f"Count: {i}")
        state["notified"].set()

    svc.add_characteristic(parse_uuid("1c927b50-c116-11e3-8a33-0800200c9a66")).handle_notify(on_notify)

    def read_long(resp, req):
        start = min(req.offset, len(LONG))
        end = min(req.offset + req.cap, len(LONG))
        resp.write(LONG[start:end])

    svc.add_characteristic(parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51c")).handle_read(read_long)
    svc.add_characteristic(parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51d")).set_value(LONG.encode())

    gap = Service(ATTR_GAP_UUID)
    gap.add_characteristic(ATTR_DEVICE_NAME_UUID).set_value(b"Gopher")
    gap.add_characteristic(ATTR_APPEARANCE_UUID).set_value(b"\x00\x80")
    gatt = Service(ATTR_GATT_UUID)

    return generate_attributes([gap, gatt, svc], 1), state


def _request(central, hexstr):
    rsp = central.handle_request(bytes.fromhex(hexstr))
    return None if rsp is None else rsp.hex()


@pytest.mark.parametrize(
    "send,want",
    [
        ("028700", "038700"),
        ("021700", "031700"),
        ("020100", "031700"),
        ("02ff01", "030001"),
    ],
)
def test_mtu_exchange(send, want):
    attrs, _ = _database()
    central = Central(attrs, b"", FakeConn())
    assert _request(central, send) == want


def test_mtu_value_tracked():
    attrs, _ = _database()
    central = Central(attrs, b"", FakeConn())
    assert central.mtu() == 23
    _request(central, "028700")
    assert central.mtu() == 135


@pytest.mark.parametrize(
    "send,want",
    [
        ("FF1234567890", "01ff000006"),
        ("0401000A00", "050101000028020003280300002a040003280500012a"),
        ("0401000200", "05010100002802000328"),
        ("0601000B0000281bc5d5a502000499e31111c1c095fc09", "070700ffff"),
        ("0601000B0003281bc5d5a502000499e31111c1c095fc09", "010601000a"),
        ("10010003001bc5d5a502000499e31111c1c095fc09", "0110010010"),
        ("10010003000028", "1106010005000018"),
        ("1001000E000028", "1106010005000018060006000118"),
        ("0801000500002a", "09080300476f70686572"),
        ("0804000500002a", "010804000a"),
        ("08060006000328", "010806000a"),
        ("0a0900", "0b636f756e743a2031"),
        ("0a1000", "0b41207265616c6c79206c6f6e67206368617261637465"),
        ("0c10001700", "0d6973746963"),
        ("0a1200", "0b41207265616c6c79206c6f6e67206368617261637465"),
        ("0c12001700", "0d6973746963"),
        ("0a5000", "010a500001"),
        ("0a0b00", "010a0b0002"),
        ("0c12006400", "010c120007"),
        ("120300616263", "0112030003"),
        ("120e0001", "01120e000d"),
    ],
)
def test_request_response(send, want):
    attrs, _ = _database()
    central = Central(attrs, b"", FakeConn())
    assert _request(central, send) == want


def test_write_characteristic():
    attrs, state = _database()
    central = Central(attrs, b"", FakeConn())
    assert _request(central, "120b00616263646566") == "13"
    assert state["wrote"] == b"abcdef"


def test_write_command_has_no_response():
    attrs, state = _database()
    central = Central(attrs, b"", FakeConn())
    assert _request(central, "520b00787978") is None
    assert state["wrote"] == b"xyx"


def test_empty_request_raises():
    attrs, _ = _database()
    central = Central(attrs, b"", FakeConn())
    with pytest.raises(ValueError):
        central.handle_request(b"")


def test_short_request_is_invalid_pdu():
    attrs, _ = _database()
    central = Central(attrs, b"", FakeConn())
    assert _request(central, "0a01") == "010a000004"


def test_notifications_start_and_stop():
    attrs, state = _database()
    conn = FakeConn()
    central = Central(attrs, b"", conn)
    assert _request(central, "120e000100") == "13"
    assert state["notified"].wait(5)
    assert [w.hex() for w in conn.written] == [
        "1b0d00436f756e743a2030",
        "1b0d00436f756e743a2031",
        "1b0d00436f756e743a2032",
        "1b0d00436f756e743a2033",
    ]
    notifier = state["notifiers"][0]
    assert notifier.cap() == 20
    assert not notifier.done()

    assert _request(central, "120e000000") == "13"
    assert notifier.done()
    with pytest.raises(NotificationsStoppedError):
        notifier.write(b"late")


def test_send_notification_returns_payload_length():
    attrs, _ = _database()
    conn = FakeConn()
    central = Central(attrs, b"", conn)
    ccc = attrs.at(0x0E)
    assert central.send_notification(ccc, b"hi") == 2
    assert conn.written == [bytes.fromhex("1b0d006869")]


def test_close_stops_notifiers_and_closes_connection():
    attrs, state = _database()
    conn = FakeConn()
    central = Central(attrs, b"", conn)
    _request(central, "120e000100")
    assert state["notified"].wait(5)
    central.close()
    assert conn.closed
    assert state["notifiers"][0].done()


def test_loop_serves_until_end_of_stream():
    attrs, state = _database()
    conn = FakeConn([bytes.fromhex("021700"), bytes.fromhex("0a0900"), bytes.fromhex("520b006f6b")])
    central = Central(attrs, b"", conn)
    central.loop()
    assert [w.hex() for w in conn.written] == ["031700", "0b636f756e743a2031"]
    assert state["wrote"] == b"ok"
    assert conn.closed


def test_id_formats_address():
    attrs, _ = _database()
    assert Central(attrs, bytes([0x02, 0, 0, 0, 0, 0x01]), FakeConn()).id() == "02:00:00:00:00:01"
    assert Central(attrs, b"", FakeConn()).id() == ""


def test_no_attributes_reports_not_found():
    central = Central(None, b"", FakeConn())
    assert _request(central, "0401000A00") == "010401000a"