import pytest

from gattkit.constants import ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID, Property
from gattkit.model import Characteristic, Descriptor, Service
from gattkit.uuid import parse_uuid, uuid16


def _noop(*args):
    return 0


def test_add_characteristic_links_service():
    s = Service(uuid16(0x180F))
    c = s.add_characteristic(uuid16(0x2A19))
    assert s.characteristics == [c]
    assert c.service is s
    assert c.uuid == uuid16(0x2A19)


def test_add_characteristic_duplicate_raises():
    s = Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b"))
    s.add_characteristic(uuid16(0x2A19))
    with pytest.raises(ValueError):
        s.add_characteristic(uuid16(0x2A19))
    assert len(s.characteristics) == 1


def test_names():
    s = Service(uuid16(0x180F))
    c = s.add_characteristic(uuid16(0x2A19))
    d = c.add_descriptor(uuid16(0x2904))
    assert s.name() == "Battery Service"
    assert c.name() == "Battery Level"
    assert d.name() == "Characteristic Presentation Format"
    assert Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")).name() == ""


def test_set_value_enables_read_and_copies():
    c = Service(uuid16(0x1800)).add_characteristic(uuid16(0x2A00))
    buf = bytearray(b"Gopher")
    c.set_value(buf)
    buf[0] = 0
    assert c.value == b"Gopher"
    assert c.props & Property.READ
    with pytest.raises(RuntimeError):
        c.handle_read(_noop)


def test_handle_read_blocks_set_value():
    c = Characteristic(uuid16(0x2A19))
    c.handle_read(_noop)
    assert c.read_handler is _noop
    assert c.props == Property.READ
    with pytest.raises(RuntimeError):
        c.set_value(b"x")


def test_handle_write_sets_props():
    c = Characteristic(uuid16(0x2A19))
    c.handle_write(_noop)
    assert c.props == Property.WRITE | Property.WRITE_NR
    assert c.write_handler is _noop


def test_handle_notify_adds_cccd_once():
    c = Characteristic(uuid16(0x2A19))
    c.handle_notify(_noop)
    cd = c.cccd
    assert cd.uuid == ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID
    assert cd.value == b"\x00\x00"
    assert cd.props == Property.READ | Property.WRITE | Property.WRITE_NR
    assert cd.secure == Property(0)
    assert cd.characteristic is c
    assert c.props & Property.NOTIFY and c.props & Property.INDICATE
    c.handle_notify(_noop)
    assert c.descriptors == [cd]


def test_handle_notify_secure():
    c = Characteristic(uuid16(0x2A19))
    c.secure = Property.NOTIFY
    c.handle_notify(_noop)
    assert c.cccd.secure == Property.READ | Property.WRITE


def test_add_descriptor_duplicate_raises():
    c = Characteristic(uuid16(0x2A19))
    c.add_descriptor(uuid16(0x2904))
    with pytest.raises(ValueError):
        c.add_descriptor(uuid16(0x2904))


def test_descriptor_value_and_handlers():
    d = Descriptor(uuid16(0x2904), 7)
    assert d.handle == 7
    d.set_value([4, 1, 39, 173, 1, 0, 0])
    assert d.value == bytes([4, 1, 39, 173, 1, 0, 0])
    assert d.props == Property.READ
    with pytest.raises(RuntimeError):
        d.handle_read(_noop)

    d2 = Descriptor(uuid16(0x2901))
    d2.handle_read(_noop)
    with pytest.raises(RuntimeError):
        d2.set_value(b"x")
    d2.handle_write(_noop)
    assert d2.props == Property.READ | Property.WRITE | Property.WRITE_NR


def test_characteristic_constructor_fields():
    s = Service(uuid16(0x180F))
    c = Characteristic(uuid16(0x2A19), s, Property.READ, 3, 4)
    assert (c.handle, c.value_handle, c.props, c.service) == (3, 4, Property.READ, s)