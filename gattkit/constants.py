"""Protocol constants for ATT/GATT: opcodes, error codes, states and properties."""

from __future__ import annotations

import enum

from .uuid import uuid16

# Statuses for characteristic read/write operations.
STATUS_SUCCESS = 0
STATUS_INVALID_OFFSET = 1
STATUS_UNEXPECTED_ERROR = 2

ATTR_GAP_UUID = uuid16(0x1800)
ATTR_GATT_UUID = uuid16(0x1801)

ATTR_PRIMARY_SERVICE_UUID = uuid16(0x2800)
ATTR_SECONDARY_SERVICE_UUID = uuid16(0x2801)
ATTR_INCLUDE_UUID = uuid16(0x2802)
ATTR_CHARACTERISTIC_UUID = uuid16(0x2803)

ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID = uuid16(0x2902)
ATTR_SERVER_CHARACTERISTIC_CONFIG_UUID = uuid16(0x2903)

ATTR_DEVICE_NAME_UUID = uuid16(0x2A00)
ATTR_APPEARANCE_UUID = uuid16(0x2A01)
ATTR_PERIPHERAL_PRIVACY_UUID = uuid16(0x2A02)
ATTR_RECONNECTION_ADDR_UUID = uuid16(0x2A03)
ATTR_PREFERRED_PARAMS_UUID = uuid16(0x2A04)
ATTR_SERVICE_CHANGED_UUID = uuid16(0x2A05)

GATT_CCC_NOTIFY_FLAG = 0x0001
GATT_CCC_INDICATE_FLAG = 0x0002

ATT_OP_ERROR = 0x01
ATT_OP_MTU_REQ = 0x02
ATT_OP_MTU_RSP = 0x03
ATT_OP_FIND_INFO_REQ = 0x04
ATT_OP_FIND_INFO_RSP = 0x05
ATT_OP_FIND_BY_TYPE_VALUE_REQ = 0x06
ATT_OP_FIND_BY_TYPE_VALUE_RSP = 0x07
ATT_OP_READ_BY_TYPE_REQ = 0x08
ATT_OP_READ_BY_TYPE_RSP = 0x09
ATT_OP_READ_REQ = 0x0A
ATT_OP_READ_RSP = 0x0B
ATT_OP_READ_BLOB_REQ = 0x0C
ATT_OP_READ_BLOB_RSP = 0x0D
ATT_OP_READ_MULTI_REQ = 0x0E
ATT_OP_READ_MULTI_RSP = 0x0F
ATT_OP_READ_BY_GROUP_REQ = 0x10
ATT_OP_READ_BY_GROUP_RSP = 0x11
ATT_OP_WRITE_REQ = 0x12
ATT_OP_WRITE_RSP = 0x13
ATT_OP_WRITE_CMD = 0x52
ATT_OP_PREP_WRITE_REQ = 0x16
ATT_OP_PREP_WRITE_RSP = 0x17
ATT_OP_EXEC_WRITE_REQ = 0x18
ATT_OP_EXEC_WRITE_RSP = 0x19
ATT_OP_HANDLE_NOTIFY = 0x1B
ATT_OP_HANDLE_IND = 0x1D
ATT_OP_HANDLE_CNF = 0x1E
ATT_OP_SIGNED_WRITE_CMD = 0xD2

# Maps ATT request opcodes to their response opcodes.
ATT_RSP_FOR = {
    ATT_OP_MTU_REQ: ATT_OP_MTU_RSP,
    ATT_OP_FIND_INFO_REQ: ATT_OP_FIND_INFO_RSP,
    ATT_OP_FIND_BY_TYPE_VALUE_REQ: ATT_OP_FIND_BY_TYPE_VALUE_RSP,
    ATT_OP_READ_BY_TYPE_REQ: ATT_OP_READ_BY_TYPE_RSP,
    ATT_OP_READ_REQ: ATT_OP_READ_RSP,
    ATT_OP_READ_BLOB_REQ: ATT_OP_READ_BLOB_RSP,
    ATT_OP_READ_MULTI_REQ: ATT_OP_READ_MULTI_RSP,
    ATT_OP_READ_BY_GROUP_REQ: ATT_OP_READ_BY_GROUP_RSP,
    ATT_OP_WRITE_REQ: ATT_OP_WRITE_RSP,
    ATT_OP_PREP_WRITE_REQ: ATT_OP_PREP_WRITE_RSP,
    ATT_OP_EXEC_WRITE_REQ: ATT_OP_EXEC_WRITE_RSP,
}


class AttErrorCode(enum.IntEnum):
    """ATT protocol error codes."""

    SUCCESS = 0x00
    INVALID_HANDLE = 0x01
    READ_NOT_PERM = 0x02
    WRITE_NOT_PERM = 0x03
    INVALID_PDU = 0x04
    AUTHENTICATION = 0x05
    REQ_NOT_SUPP = 0x06
    INVALID_OFFSET = 0x07
    AUTHORIZATION = 0x08
    PREP_QUEUE_FULL = 0x09
    ATTR_NOT_FOUND = 0x0A
    ATTR_NOT_LONG = 0x0B
    INSUFF_ENCR_KEY_SIZE = 0x0C
    INVAL_ATTR_VALUE_LEN = 0x0D
    UNLIKELY = 0x0E
    INSUFF_ENC = 0x0F
    UNSUPP_GRP_TYPE = 0x10
    INSUFF_RESOURCES = 0x11


_ERROR_NAMES = {
    AttErrorCode.SUCCESS: "success",
    AttErrorCode.INVALID_HANDLE: "invalid handle",
    AttErrorCode.READ_NOT_PERM: "read not permitted",
    AttErrorCode.WRITE_NOT_PERM: "write not permitted",
    AttErrorCode.INVALID_PDU: "invalid PDU",
    AttErrorCode.AUTHENTICATION: "insufficient authentication",
    AttErrorCode.REQ_NOT_SUPP: "request not supported",
    AttErrorCode.INVALID_OFFSET: "invalid offset",
    AttErrorCode.AUTHORIZATION: "insufficient authorization",
    AttErrorCode.PREP_QUEUE_FULL: "prepare queue full",
    AttErrorCode.ATTR_NOT_FOUND: "attribute not found",
    AttErrorCode.ATTR_NOT_LONG: "attribute not long",
    AttErrorCode.INSUFF_ENCR_KEY_SIZE: "insufficient encryption key size",
    AttErrorCode.INVAL_ATTR_VALUE_LEN: "invalid attribute value length",
    AttErrorCode.UNLIKELY: "unlikely error",
    AttErrorCode.INSUFF_ENC: "insufficient encryption",
    AttErrorCode.UNSUPP_GRP_TYPE: "unsupported group type",
    AttErrorCode.INSUFF_RESOURCES: "insufficient resources",
}


def error_message(code: int) -> str:
    """Return the human-readable description of an ATT error code byte."""
    i = int(code)
    if not 0 <= i <= 0xFF:
        raise ValueError(f"ATT error code out of range: {code!r}")
    if i < 0x11:
        return _ERROR_NAMES[AttErrorCode(i)]
    if 0x12 <= i <= 0xDF:
        return "reserved error code"
    if 0xE0 <= i <= 0xFF:
        return "profile or service error"
    return "unknown error"


def att_error_response(opcode: int, handle: int, code: int) -> bytes:
    """Encode an ATT Error Response PDU for the given request."""
    return bytes([ATT_OP_ERROR, opcode & 0xFF, handle & 0xFF, (handle >> 8) & 0xFF, int(code) & 0xFF])


class State(enum.IntEnum):
    """Power state of a BLE device."""

    UNKNOWN = 0
    RESETTING = 1
    UNSUPPORTED = 2
    UNAUTHORIZED = 3
    POWERED_OFF = 4
    POWERED_ON = 5

    def __str__(self) -> str:
        return _STATE_NAMES[self]


_STATE_NAMES = {
    State.UNKNOWN: "Unknown",
    State.RESETTING: "Resetting",
    State.UNSUPPORTED: "Unsupported",
    State.UNAUTHORIZED: "Unauthorized",
    State.POWERED_OFF: "PoweredOff",
    State.POWERED_ON: "PoweredOn",
}


class Property(enum.IntFlag):
    """Characteristic property flags."""

    BROADCAST = 0x01
    READ = 0x02
    WRITE_NR = 0x04
    WRITE = 0x08
    NOTIFY = 0x10
    INDICATE = 0x20
    SIGNED_WRITE = 0x40
    EXTENDED = 0x80

    def __str__(self) -> str:
        return "".join(label + " " for flag, label in _PROPERTY_LABELS if self & flag)


_PROPERTY_LABELS = (
    (Property.BROADCAST, "broadcast"),
    (Property.READ, "read"),
    (Property.WRITE_NR, "writeWithoutResponse"),
    (Property.WRITE, "write"),
    (Property.NOTIFY, "notify"),
    (Property.INDICATE, "indicate"),
    (Property.SIGNED_WRITE, "authenticateSignedWrites"),
    (Property.EXTENDED, "extendedProperties"),
)