"""Advertising and scan-response packets: building and parsing EIR data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .constants import ATTR_GAP_UUID, ATTR_GATT_UUID
from .uuid import UUID

MAX_EIR_PACKET_LENGTH = 31


class AdvType(enum.IntEnum):
    """Advertising data field types."""

    FLAGS = 0x01
    SOME_UUID16 = 0x02
    ALL_UUID16 = 0x03
    SOME_UUID32 = 0x04
    ALL_UUID32 = 0x05
    SOME_UUID128 = 0x06
    ALL_UUID128 = 0x07
    SHORT_NAME = 0x08
    COMPLETE_NAME = 0x09
    TX_POWER = 0x0A
    CLASS_OF_DEVICE = 0x0D
    SIMPLE_PAIRING_C192 = 0x0E
    SIMPLE_PAIRING_R192 = 0x0F
    SEC_MANAGER_TK = 0x10
    SEC_MANAGER_OOB = 0x11
    SLAVE_CONN_INT = 0x12
    SERVICE_SOL16 = 0x14
    SERVICE_SOL128 = 0x15
    SERVICE_DATA16 = 0x16
    PUB_TARGET_ADDR = 0x17
    RAND_TARGET_ADDR = 0x18
    APPEARANCE = 0x19
    ADV_INTERVAL = 0x1A
    LE_DEVICE_ADDR = 0x1B
    LE_ROLE = 0x1C
    SERVICE_SOL32 = 0x1F
    SERVICE_DATA32 = 0x20
    SERVICE_DATA128 = 0x21
    LE_SEC_CONFIRM = 0x22
    LE_SEC_RANDOM = 0x23
    MANUFACTURER_DATA = 0xFF


class AdvFlag(enum.IntFlag):
    """Advertising flags field bits."""

    LIMITED_DISCOVERABLE = 0x01
    GENERAL_DISCOVERABLE = 0x02
    LE_ONLY = 0x04
    BOTH_CONTROLLER = 0x08
    BOTH_HOST = 0x10


_SERVICE_WIDTHS = {
    AdvType.SOME_UUID16: 2,
    AdvType.ALL_UUID16: 2,
    AdvType.SOME_UUID32: 4,
    AdvType.ALL_UUID32: 4,
    AdvType.SOME_UUID128: 16,
    AdvType.ALL_UUID128: 16,
}

_SOLICITED_WIDTHS = {
    AdvType.SERVICE_SOL16: 2,
    AdvType.SERVICE_SOL32: 4,
    AdvType.SERVICE_SOL128: 16,
}

_SERVICE_DATA_WIDTHS = {
    AdvType.SERVICE_DATA16: 2,
    AdvType.SERVICE_DATA32: 4,
    AdvType.SERVICE_DATA128: 16,
}


@dataclass
class ServiceData:
    """Service data carried in an advertisement."""

    uuid: UUID
    data: bytes


def _split_uuids(data: bytes, width: int):
    if len(data) % width:
        raise ValueError("invalid advertise data")
    return [UUID(data[i : i + width]) for i in range(0, len(data), width)]


@dataclass
class Advertisement:
    """Decoded contents of advertising data received from a peripheral."""

    local_name: str = ""
    manufacturer_data: bytes = b""
    service_data: list = field(default_factory=list)
    services: list = field(default_factory=list)
    overflow_service: list = field(default_factory=list)
    tx_power_level: int = 0
    connectable: bool = False
    solicited_service: list = field(default_factory=list)
    raw: bytes = b""

    def unmarshal(self, data) -> None:
        """Parse EIR fields from ``data`` into this advertisement.

        Raises ValueError on malformed data.
        """
        b = bytes(data)
        while b:
            if len(b) < 2:
                raise ValueError("invalid advertise data")
            length, typ = b[0], b[1]
            if length < 1 or len(b) < 1 + length:
                raise ValueError("invalid advertise data")
            d = b[2 : 1 + length]
            self.raw = d

            if typ in _SERVICE_WIDTHS:
                self.services.extend(_split_uuids(d, _SERVICE_WIDTHS[typ]))
            elif typ in _SOLICITED_WIDTHS:
                self.solicited_service.extend(_split_uuids(d, _SOLICITED_WIDTHS[typ]))
            elif typ in (AdvType.SHORT_NAME, AdvType.COMPLETE_NAME):
                self.local_name = d.decode("utf-8", errors="replace")
            elif typ == AdvType.TX_POWER:
                if not d:
                    raise ValueError("invalid advertise data")
                self.tx_power_level = d[0]
            elif typ == AdvType.MANUFACTURER_DATA:
                self.manufacturer_data = bytes(d)
            elif typ in _SERVICE_DATA_WIDTHS:
                width = _SERVICE_DATA_WIDTHS[typ]
                if len(d) < width:
                    raise ValueError("invalid advertise data")
                payload = d[2 : 2 + len(d) - width]
                self.service_data.append(ServiceData(UUID(d[:width]), payload))
            b = b[1 + length :]


class AdvPacket:
    """Helper for crafting advertising or scan-response data."""

    def __init__(self, data=b""):
        self._b = bytearray(data)

    @property
    def data(self) -> bytes:
        """All bytes appended so far."""
        return bytes(self._b)

    def __len__(self) -> int:
        return min(len(self._b), MAX_EIR_PACKET_LENGTH)

    def to_bytes(self) -> bytes:
        """Return exactly 31 bytes: the packet, truncated or zero-padded."""
        head = bytes(self._b[:MAX_EIR_PACKET_LENGTH])
        return head.ljust(MAX_EIR_PACKET_LENGTH, b"\x00")

    def append_field(self, typ: int, data) -> "AdvPacket":
        """Append a length/type/value field, truncating the value to fit."""
        data = bytes(data)
        if len(self._b) + 2 + len(data) > MAX_EIR_PACKET_LENGTH:
            room = MAX_EIR_PACKET_LENGTH - len(self._b) - 2
            if room < 0:
                raise ValueError("max packet length is 31")
            data = data[:room]
        self._b.append(len(data) + 1)
        self._b.append(int(typ) & 0xFF)
        self._b += data
        return self

    def append_flags(self, flags: int) -> "AdvPacket":
        """Append a flags field."""
        return self.append_field(AdvType.FLAGS, bytes([int(flags) & 0xFF]))

    def append_name(self, name: str) -> "AdvPacket":
        """Append the name, as complete if it fits, otherwise shortened."""
        encoded = name.encode("utf-8")
        typ = AdvType.COMPLETE_NAME
        if len(self._b) + 2 + len(encoded) > MAX_EIR_PACKET_LENGTH:
            typ = AdvType.SHORT_NAME
        return self.append_field(typ, encoded)

    def append_manufacturer_data(self, company_id: int, data) -> "AdvPacket":
        """Append manufacturer-specific data prefixed with the company id."""
        payload = (company_id & 0xFFFF).to_bytes(2, "little") + bytes(data)
        return self.append_field(AdvType.MANUFACTURER_DATA, payload)

    def append_uuid_fit(self, uuids) -> bool:
        """Append service UUID fields while they fit; report whether all fit.

        GAP and GATT service UUIDs are skipped.
        """
        uuids = [u for u in uuids if u != ATTR_GAP_UUID and u != ATTR_GATT_UUID]

        fit = True
        total = len(self._b)
        for u in uuids:
            total += 2 + len(u)
            if total > MAX_EIR_PACKET_LENGTH:
                fit = False
                break

        for u in uuids:
            if len(self._b) + 2 + len(u) > MAX_EIR_PACKET_LENGTH:
                break
            if len(u) == 2:
                self.append_field(AdvType.ALL_UUID16 if fit else AdvType.SOME_UUID16, bytes(u))
            elif len(u) == 16:
                self.append_field(AdvType.ALL_UUID128 if fit else AdvType.SOME_UUID128, bytes(u))
        return fit