"""Request contexts, response writers and notifiers used by GATT handlers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from .constants import STATUS_SUCCESS


@dataclass
class Request:
    """Context of a request from a connected central device."""

    central: Any = None


@dataclass
class ReadRequest(Request):
    """A characteristic or descriptor read request.

    ``cap`` is the maximum allowed reply length and ``offset`` the
    requested value offset.
    """

    cap: int = 0
    offset: int = 0


class ResponseOverflowError(ValueError):
    """Raised when a response write exceeds the writer's capacity."""


class NotificationsStoppedError(RuntimeError):
    """Raised when writing to a notifier the central has unsubscribed from."""


def _as_bytes(data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class ResponseWriter:
    """Collects the value returned by a read handler, up to ``capacity`` bytes."""

    def __init__(self, capacity):
        self.capacity = int(capacity)
        self.status = STATUS_SUCCESS
        self._buf = bytearray()

    def write(self, data) -> int:
        """Append ``data`` (bytes or str); raise if it does not fit entirely."""
        data = _as_bytes(data)
        avail = self.capacity - len(self._buf)
        if avail < len(data):
            raise ResponseOverflowError(
                f"requested write {len(data)} bytes, {avail} available"
            )
        self._buf += data
        return len(data)

    def set_status(self, status: int) -> None:
        """Record the result status of the read operation."""
        self.status = status

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buf)


class Notifier:
    """Sends value-change notifications for one attribute to one central."""

    def __init__(self, central, attr, maxlen):
        self.central = central
        self.attr = attr
        self.maxlen = int(maxlen)
        self._lock = threading.Lock()
        self._done = False

    def write(self, data) -> int:
        """Send ``data`` (bytes or str) to the central as a notification."""
        with self._lock:
            if self._done:
                raise NotificationsStoppedError("central stopped notifications")
            return self.central.send_notification(self.attr, _as_bytes(data))

    def done(self) -> bool:
        """Report whether the central asked to stop receiving notifications."""
        with self._lock:
            return self._done

    def cap(self) -> int:
        """Return the maximum number of bytes sendable in one notification."""
        return self.maxlen

    def stop(self) -> None:
        """Mark the notifier as finished; further writes raise."""
        with self._lock:
            self._done = True