"""The flat attribute table a GATT server exposes, built from its services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .constants import ATTR_CHARACTERISTIC_UUID, ATTR_PRIMARY_SERVICE_UUID, Property
from .uuid import UUID

logger = logging.getLogger(__name__)

_TOO_SMALL = -1
_TOO_LARGE = -2


@dataclass
class Attribute:
    """One ATT attribute.

    ``pvt`` points at the service, characteristic or descriptor that the
    attribute belongs to.
    """

    handle: int = 0
    typ: UUID | None = None
    props: Property = Property(0)
    secure: Property = Property(0)
    value: bytes | None = None
    pvt: Any = field(default=None, repr=False)


class AttributeRange:
    """A contiguous run of attributes whose first handle is ``base``."""

    def __init__(self, attrs, base):
        self.attrs = list(attrs)
        self.base = int(base)

    def __len__(self) -> int:
        return len(self.attrs)

    def __iter__(self):
        return iter(self.attrs)

    def _index(self, handle: int) -> int:
        if handle < self.base:
            return _TOO_SMALL
        if handle >= self.base + len(self.attrs):
            return _TOO_LARGE
        return handle - self.base

    def at(self, handle) -> Attribute | None:
        """Return the attribute with ``handle``, or None if it is out of range."""
        i = self._index(int(handle))
        if i < 0:
            return None
        return self.attrs[i]

    def subrange(self, start, end) -> list:
        """Return the attributes with handles in ``[start, end]``; may be empty."""
        start_idx = self._index(int(start))
        if start_idx == _TOO_SMALL:
            start_idx = 0
        elif start_idx == _TOO_LARGE:
            return []

        end_idx = self._index(int(end) + 1)
        if end_idx == _TOO_SMALL:
            return []
        if end_idx == _TOO_LARGE:
            end_idx = len(self.attrs)
        return self.attrs[start_idx:end_idx]


def dump_attributes(attrs) -> list:
    """Log the attribute table at debug level and return the logged lines."""
    lines = ["Generating attribute table:", "handle\ttype\tprops\tsecure\tpvt\tvalue"]
    for a in attrs:
        value = " ".join(f"{b:02X}" for b in (a.value or b""))
        lines.append(
            f"0x{a.handle:04X}\t0x{a.typ}\t0x{int(a.props):02X}\t0x{int(a.secure):02x}"
            f"\t{type(a.pvt).__name__}\t[ {value} ]"
        )
    for line in lines:
        logger.debug("%s", line)
    return lines


def generate_attributes(services, base) -> AttributeRange:
    """Assign handles to ``services`` starting at ``base`` and build their attributes."""
    services = list(services)
    attrs = []
    h = int(base)
    last = len(services) - 1
    for i, s in enumerate(services):
        h, service_attrs = _service_attributes(s, h, i == last)
        attrs.extend(service_attrs)
    dump_attributes(attrs)
    return AttributeRange(attrs, base)


def _service_attributes(service, h: int, last: bool):
    service.handle = h
    attrs = [
        Attribute(
            handle=h,
            typ=ATTR_PRIMARY_SERVICE_UUID,
            props=Property.READ,
            value=bytes(service.uuid),
            pvt=service,
        )
    ]
    h += 1

    for c in service.characteristics:
        h, char_attrs = _characteristic_attributes(c, h)
        attrs.extend(char_attrs)

    service.end_handle = h - 1
    if last:
        h = 0xFFFF
        service.end_handle = h
    return h, attrs


def _characteristic_attributes(c, h: int):
    c.handle = h
    c.value_handle = h + 1
    vh = c.value_handle
    declaration = Attribute(
        handle=c.handle,
        typ=ATTR_CHARACTERISTIC_UUID,
        props=c.props,
        value=bytes([int(c.props) & 0xFF, vh & 0xFF, (vh >> 8) & 0xFF]) + bytes(c.uuid),
        pvt=c,
    )
    value = Attribute(handle=vh, typ=c.uuid, props=c.props, value=c.value, pvt=c)
    h += 2

    attrs = [declaration, value]
    for d in c.descriptors:
        d.handle = h
        attrs.append(Attribute(handle=h, typ=d.uuid, props=d.props, value=d.value, pvt=d))
        h += 1
    return h, attrs