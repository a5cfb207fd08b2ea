"""Sample GATT services: battery, counter, GAP and GATT."""

from __future__ import annotations

import logging
import time

from .constants import (
    ATTR_APPEARANCE_UUID,
    ATTR_DEVICE_NAME_UUID,
    ATTR_GAP_UUID,
    ATTR_GATT_UUID,
    ATTR_PERIPHERAL_PRIVACY_UUID,
    ATTR_PREFERRED_PARAMS_UUID,
    ATTR_RECONNECTION_ADDR_UUID,
    ATTR_SERVICE_CHANGED_UUID,
    STATUS_SUCCESS,
)
from .handlers import NotificationsStoppedError
from .model import Service
from .uuid import parse_uuid, uuid16

logger = logging.getLogger(__name__)

BATTERY_SERVICE_UUID = uuid16(0x180F)
BATTERY_LEVEL_UUID = uuid16(0x2A19)
PRESENTATION_FORMAT_UUID = uuid16(0x2904)
# Presentation format of the battery level: uint8, percentage unit.
BATTERY_LEVEL_FORMAT = bytes([4, 1, 39, 173, 1, 0, 0])

COUNT_SERVICE_UUID = parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")
COUNT_READ_UUID = parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b")
COUNT_WRITE_UUID = parse_uuid("16fe0d80-c111-11e3-b8c8-0002a5d5c51b")
COUNT_NOTIFY_UUID = parse_uuid("1c927b50-c116-11e3-8a33-0800200c9a66")

GAP_APPEARANCE_GENERIC_COMPUTER = bytes([0x00, 0x80])
GAP_PERIPHERAL_PRIVACY = bytes([0x00])
GAP_RECONNECTION_ADDRESS = bytes(6)
GAP_PREFERRED_PARAMS = bytes([0x06, 0x00, 0x06, 0x00, 0x00, 0x00, 0xD0, 0x07])

_NOTIFY_INTERVAL = 1.0


def battery_service() -> Service:
    """A battery service whose level starts at 100 and drops by one per read."""
    level = 100

    def read_level(rsp, req):
        nonlocal level
        rsp.write(bytes([level]))
        level = (level - 1) & 0xFF

    s = Service(BATTERY_SERVICE_UUID)
    c = s.add_characteristic(BATTERY_LEVEL_UUID)
    c.handle_read(read_level)
    c.add_descriptor(PRESENTATION_FORMAT_UUID).set_value(BATTERY_LEVEL_FORMAT)
    return s


def count_service() -> Service:
    """A demo service with a counting read, a logging write and a counting notify."""
    count = 0

    def read_count(rsp, req):
        nonlocal count
        rsp.write(f"count: {count}".encode())
        count += 1

    def write_data(request, data):
        logger.info("Wrote: %s", bytes(data).decode("utf-8", errors="replace"))
        return STATUS_SUCCESS

    def notify_count(request, notifier):
        sent = 0
        while not notifier.done():
            try:
                notifier.write(f"Count: {sent}".encode())
            except NotificationsStoppedError:
                return
            sent += 1
            time.sleep(_NOTIFY_INTERVAL)

    s = Service(COUNT_SERVICE_UUID)
    s.add_characteristic(COUNT_READ_UUID).handle_read(read_count)
    s.add_characteristic(COUNT_WRITE_UUID).handle_write(write_data)
    s.add_characteristic(COUNT_NOTIFY_UUID).handle_notify(notify_count)
    return s


def gap_service(name) -> Service:
    """The Generic Access service advertising ``name`` as the device name."""
    s = Service(ATTR_GAP_UUID)
    device_name = name.encode("utf-8") if isinstance(name, str) else bytes(name)
    s.add_characteristic(ATTR_DEVICE_NAME_UUID).set_value(device_name)
    s.add_characteristic(ATTR_APPEARANCE_UUID).set_value(GAP_APPEARANCE_GENERIC_COMPUTER)
    s.add_characteristic(ATTR_PERIPHERAL_PRIVACY_UUID).set_value(GAP_PERIPHERAL_PRIVACY)
    s.add_characteristic(ATTR_RECONNECTION_ADDR_UUID).set_value(GAP_RECONNECTION_ADDRESS)
    s.add_characteristic(ATTR_PREFERRED_PARAMS_UUID).set_value(GAP_PREFERRED_PARAMS)
    return s


def gatt_service() -> Service:
    """The Generic Attribute service with a Service Changed characteristic."""

    def service_changed(request, notifier):
        logger.debug("service change indications are not sent to clients")

    s = Service(ATTR_GATT_UUID)
    s.add_characteristic(ATTR_SERVICE_CHANGED_UUID).handle_notify(service_changed)
    return s