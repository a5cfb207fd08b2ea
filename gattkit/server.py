"""ATT server handling one connection from a remote central."""

from __future__ import annotations

import enum
import functools
import logging
import struct
import threading

from .attr import AttributeRange
from .constants import (
    ATT_OP_FIND_BY_TYPE_VALUE_REQ,
    ATT_OP_FIND_BY_TYPE_VALUE_RSP,
    ATT_OP_FIND_INFO_REQ,
    ATT_OP_FIND_INFO_RSP,
    ATT_OP_HANDLE_NOTIFY,
    ATT_OP_MTU_REQ,
    ATT_OP_MTU_RSP,
    ATT_OP_READ_BLOB_REQ,
    ATT_OP_READ_BLOB_RSP,
    ATT_OP_READ_BY_GROUP_REQ,
    ATT_OP_READ_BY_GROUP_RSP,
    ATT_OP_READ_BY_TYPE_REQ,
    ATT_OP_READ_BY_TYPE_RSP,
    ATT_OP_READ_REQ,
    ATT_OP_READ_RSP,
    ATT_OP_WRITE_CMD,
    ATT_OP_WRITE_REQ,
    ATT_OP_WRITE_RSP,
    ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID,
    ATTR_PRIMARY_SERVICE_UUID,
    GATT_CCC_INDICATE_FLAG,
    GATT_CCC_NOTIFY_FLAG,
    AttErrorCode,
    Property,
    att_error_response,
)
from .handlers import Notifier, ReadRequest, Request, ResponseOverflowError, ResponseWriter
from .l2cap_writer import L2capWriter
from .uuid import UUID

logger = logging.getLogger(__name__)

# L2CAP's default MTU; reads are sized to hold one full frame.
_READ_SIZE = 672
_MIN_MTU = 23
_MAX_MTU = 256


class Security(enum.IntEnum):
    """Security level of a connection."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


def _u16(data, offset=0) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def _handle_range(data):
    return _u16(data, 0), _u16(data, 2)


def _format_address(address) -> str:
    if isinstance(address, str):
        return address
    return ":".join(f"{b:02x}" for b in bytes(address))


class Central:
    """A connected remote central, served over ``conn``.

    ``conn`` must provide ``read(n)``, ``write(data)`` and ``close()``;
    ``read`` returning empty bytes marks the end of the connection.
    """

    def __init__(self, attrs, address, conn):
        self.attrs = attrs if attrs is not None else AttributeRange([], 1)
        self.address = address
        self.security = Security.LOW
        self._conn = conn
        self._mtu = _MIN_MTU
        self._notifiers = {}
        self._notifiers_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._dispatch = {
            ATT_OP_MTU_REQ: self._handle_mtu,
            ATT_OP_FIND_INFO_REQ: self._handle_find_info,
            ATT_OP_FIND_BY_TYPE_VALUE_REQ: self._handle_find_by_type_value,
            ATT_OP_READ_BY_TYPE_REQ: self._handle_read_by_type,
            ATT_OP_READ_REQ: self._handle_read,
            ATT_OP_READ_BLOB_REQ: self._handle_read_blob,
            ATT_OP_READ_BY_GROUP_REQ: self._handle_read_by_group,
            ATT_OP_WRITE_REQ: functools.partial(self._handle_write, ATT_OP_WRITE_REQ),
            ATT_OP_WRITE_CMD: functools.partial(self._handle_write, ATT_OP_WRITE_CMD),
        }

    def id(self) -> str:
        """Hardware address of the central as a colon-separated string."""
        return _format_address(self.address)

    def mtu(self) -> int:
        """Current ATT MTU of the connection."""
        return self._mtu

    def close(self) -> None:
        """Stop all notifications and close the connection."""
        with self._notifiers_lock:
            for n in self._notifiers.values():
                n.stop()
        self._conn.close()

    def loop(self) -> None:
        """Serve requests until the connection ends, then close it."""
        while True:
            try:
                data = self._conn.read(_READ_SIZE)
            except OSError:
                data = b""
            if not data:
                self.close()
                break
            rsp = self.handle_request(data)
            if rsp is not None:
                with self._write_lock:
                    self._conn.write(rsp)

    def handle_request(self, data) -> bytes | None:
        """Answer one raw ATT request; returns None when no response is due."""
        data = bytes(data)
        if not data:
            raise ValueError("empty ATT request")
        op, req = data[0], data[1:]
        handler = self._dispatch.get(op)
        if handler is None:
            return att_error_response(op, 0x0000, AttErrorCode.REQ_NOT_SUPP)
        try:
            return handler(req)
        except struct.error:
            return att_error_response(op, 0x0000, AttErrorCode.INVALID_PDU)

    def _handle_mtu(self, req) -> bytes:
        self._mtu = min(max(_u16(req), _MIN_MTU), _MAX_MTU)
        return bytes([ATT_OP_MTU_RSP]) + self._mtu.to_bytes(2, "little")

    def _handle_find_info(self, req) -> bytes:
        start, end = _handle_range(req)
        w = L2capWriter(self._mtu)
        w.write_byte_fit(ATT_OP_FIND_INFO_RSP)

        uuid_len = None
        for a in self.attrs.subrange(start, end):
            if uuid_len is None:
                uuid_len = len(a.typ)
                w.write_byte_fit(0x01 if uuid_len == 2 else 0x02)
            if len(a.typ) != uuid_len:
                break
            w.chunk()
            w.write_uint16_fit(a.handle)
            w.write_uuid_fit(a.typ)
            if not w.commit():
                break

        if uuid_len is None:
            return att_error_response(ATT_OP_FIND_INFO_REQ, start, AttErrorCode.ATTR_NOT_FOUND)
        return w.getvalue()

    def _handle_find_by_type_value(self, req) -> bytes:
        start, end = _handle_range(req)
        typ = UUID(req[4:6])
        target = UUID(req[6:])

        # Only "Discover Primary Services By Service UUID" is supported.
        if typ != ATTR_PRIMARY_SERVICE_UUID:
            return att_error_response(ATT_OP_FIND_BY_TYPE_VALUE_REQ, start, AttErrorCode.ATTR_NOT_FOUND)

        w = L2capWriter(self._mtu)
        w.write_byte_fit(ATT_OP_FIND_BY_TYPE_VALUE_RSP)
        wrote = False
        for a in self.attrs.subrange(start, end):
            if a.typ != ATTR_PRIMARY_SERVICE_UUID or UUID(a.value) != target:
                continue
            service = a.pvt
            w.chunk()
            w.write_uint16_fit(service.handle)
            w.write_uint16_fit(service.end_handle)
            if not w.commit():
                break
            wrote = True

        if not wrote:
            return att_error_response(ATT_OP_FIND_BY_TYPE_VALUE_REQ, start, AttErrorCode.ATTR_NOT_FOUND)
        return w.getvalue()

    def _read_protected(self, attr) -> bool:
        return bool(attr.secure & Property.READ) and self.security > Security.LOW

    def _serve_read(self, attr, offset: int) -> bytes:
        cap = self._mtu - 1
        rsp = ResponseWriter(cap)
        handler = getattr(attr.pvt, "read_handler", None)
        if handler is not None:
            try:
                handler(rsp, ReadRequest(central=self, cap=cap, offset=offset))
            except ResponseOverflowError as exc:
                logger.warning("read handler overflowed its response: %s", exc)
        return rsp.getvalue()

    def _handle_read_by_type(self, req) -> bytes:
        start, end = _handle_range(req)
        typ = UUID(req[4:])

        w = L2capWriter(self._mtu)
        w.write_byte_fit(ATT_OP_READ_BY_TYPE_RSP)
        value_len = None
        for a in self.attrs.subrange(start, end):
            if a.typ != typ:
                continue
            if self._read_protected(a):
                return att_error_response(ATT_OP_READ_BY_TYPE_REQ, start, AttErrorCode.AUTHENTICATION)
            v = a.value
            if v is None:
                v = self._serve_read(a, 0)
            if value_len is None:
                value_len = len(v)
                w.write_byte_fit((value_len + 2) & 0xFF)
            if len(v) != value_len:
                break
            w.chunk()
            w.write_uint16_fit(a.handle)
            w.write_fit(v)
            if not w.commit():
                break

        if value_len is None:
            return att_error_response(ATT_OP_READ_BY_TYPE_REQ, start, AttErrorCode.ATTR_NOT_FOUND)
        return w.getvalue()

    def _check_readable(self, op: int, h: int):
        a = self.attrs.at(h)
        if a is None:
            return None, att_error_response(op, h, AttErrorCode.INVALID_HANDLE)
        if not a.props & Property.READ:
            return None, att_error_response(op, h, AttErrorCode.READ_NOT_PERM)
        if self._read_protected(a):
            return None, att_error_response(op, h, AttErrorCode.AUTHENTICATION)
        return a, None

    def _handle_read(self, req) -> bytes:
        h = _u16(req)
        a, error = self._check_readable(ATT_OP_READ_REQ, h)
        if error is not None:
            return error
        v = a.value
        if v is None:
            v = self._serve_read(a, 0)

        w = L2capWriter(self._mtu)
        w.write_byte_fit(ATT_OP_READ_RSP)
        w.chunk()
        w.write_fit(v)
        w.commit_fit()
        return w.getvalue()

    def _handle_read_blob(self, req) -> bytes:
        h = _u16(req)
        offset = _u16(req, 2)
        a, error = self._check_readable(ATT_OP_READ_BLOB_REQ, h)
        if error is not None:
            return error
        v = a.value
        if v is None:
            v = self._serve_read(a, offset)
            offset = 0  # the handler has already applied the offset

        w = L2capWriter(self._mtu)
        w.write_byte_fit(ATT_OP_READ_BLOB_RSP)
        w.chunk()
        w.write_fit(v)
        if not w.chunk_seek(offset):
            return att_error_response(ATT_OP_READ_BLOB_REQ, h, AttErrorCode.INVALID_OFFSET)
        w.commit_fit()
        return w.getvalue()

    def _handle_read_by_group(self, req) -> bytes:
        start, end = _handle_range(req)
        typ = UUID(req[4:])

        # Only "Discover All Primary Services" is supported.
        if typ != ATTR_PRIMARY_SERVICE_UUID:
            return att_error_response(ATT_OP_READ_BY_GROUP_REQ, start, AttErrorCode.UNSUPP_GRP_TYPE)

        w = L2capWriter(self._mtu)
        w.write_byte_fit(ATT_OP_READ_BY_GROUP_RSP)
        uuid_len = None
        for a in self.attrs.subrange(start, end):
            if a.typ != ATTR_PRIMARY_SERVICE_UUID:
                continue
            if uuid_len is None:
                uuid_len = len(a.value)
                w.write_byte_fit((uuid_len + 4) & 0xFF)
            if len(a.value) != uuid_len:
                break
            service = a.pvt
            w.chunk()
            w.write_uint16_fit(service.handle)
            w.write_uint16_fit(service.end_handle)
            w.write_fit(a.value)
            if not w.commit():
                break

        if uuid_len is None:
            return att_error_response(ATT_OP_READ_BY_GROUP_REQ, start, AttErrorCode.ATTR_NOT_FOUND)
        return w.getvalue()

    def _handle_write(self, op: int, req) -> bytes | None:
        h = _u16(req)
        value = bytes(req[2:])

        a = self.attrs.at(h)
        if a is None:
            return att_error_response(op, h, AttErrorCode.INVALID_HANDLE)

        no_rsp = op == ATT_OP_WRITE_CMD
        flag = Property.WRITE_NR if no_rsp else Property.WRITE
        if not a.props & flag:
            return att_error_response(op, h, AttErrorCode.WRITE_NOT_PERM)
        if not a.secure & flag and self.security > Security.LOW:
            return att_error_response(op, h, AttErrorCode.AUTHENTICATION)

        if a.typ != ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID:
            handler = getattr(a.pvt, "write_handler", None)
            if handler is not None:
                handler(Request(central=self), value)
            return None if no_rsp else bytes([ATT_OP_WRITE_RSP])

        if len(value) != 2:
            return att_error_response(op, h, AttErrorCode.INVAL_ATTR_VALUE_LEN)
        ccc = _u16(value)
        if ccc & (GATT_CCC_NOTIFY_FLAG | GATT_CCC_INDICATE_FLAG):
            self.start_notify(a, self._mtu - 3)
        else:
            self.stop_notify(a)
        return None if no_rsp else bytes([ATT_OP_WRITE_RSP])

    def send_notification(self, attr, data) -> int:
        """Send ``data`` as a value notification for the CCC ``attr``'s characteristic.

        Returns the number of payload bytes sent.
        """
        w = L2capWriter(self._mtu)
        added = 0
        if w.write_byte_fit(ATT_OP_HANDLE_NOTIFY):
            added += 1
        if w.write_uint16_fit(attr.pvt.characteristic.value_handle):
            added += 2
        w.write_fit(data)
        payload = w.getvalue()
        with self._write_lock:
            n = self._conn.write(payload)
        if n is None:
            n = len(payload)
        return n - added

    def start_notify(self, attr, maxlen) -> None:
        """Start notifications for the CCC ``attr`` unless already started."""
        with self._notifiers_lock:
            if attr.handle in self._notifiers:
                return
            char = attr.pvt.characteristic
            notifier = Notifier(self, attr, maxlen)
            self._notifiers[attr.handle] = notifier
        if char.notify_handler is not None:
            threading.Thread(
                target=char.notify_handler,
                args=(Request(central=self), notifier),
                name=f"notify-{attr.handle:04x}",
                daemon=True,
            ).start()

    def stop_notify(self, attr) -> None:
        """Stop notifications for the CCC ``attr`` if they are running."""
        with self._notifiers_lock:
            notifier = self._notifiers.pop(attr.handle, None)
            if notifier is not None:
                notifier.stop()