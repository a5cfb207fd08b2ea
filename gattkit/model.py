"""GATT database model: services, characteristics and descriptors."""

from __future__ import annotations

from .constants import ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID, Property
from .known import characteristic_name, descriptor_name, service_name


class Service:
    """A BLE service holding characteristics."""

    def __init__(self, uuid):
        self.uuid = uuid
        self.characteristics = []
        self.handle = 0
        self.end_handle = 0

    def add_characteristic(self, uuid) -> "Characteristic":
        """Add and return a new characteristic; raise if the UUID is already present."""
        if any(c.uuid == uuid for c in self.characteristics):
            raise ValueError(f"service already contains a characteristic with uuid {uuid}")
        c = Characteristic(uuid, self)
        self.characteristics.append(c)
        return c

    def name(self) -> str:
        """Specification name of the service, or "" if unassigned."""
        return service_name(self.uuid)

    def __repr__(self) -> str:
        return f"Service({str(self.uuid)!r})"


class Characteristic:
    """A BLE characteristic."""

    def __init__(self, uuid, service=None, props=Property(0), handle=0, value_handle=0):
        self.uuid = uuid
        self.service = service
        self.props = Property(props)
        self.secure = Property(0)
        self.handle = handle
        self.value_handle = value_handle
        self.end_handle = 0
        self.cccd = None
        self.descriptors = []
        self.value = None
        self.read_handler = None
        self.write_handler = None
        self.notify_handler = None

    def name(self) -> str:
        """Specification name of the characteristic, or "" if unassigned."""
        return characteristic_name(self.uuid)

    def add_descriptor(self, uuid) -> "Descriptor":
        """Add and return a new descriptor; raise if the UUID is already present."""
        if any(d.uuid == uuid for d in self.descriptors):
            raise ValueError(f"characteristic already contains a descriptor with uuid {uuid}")
        d = Descriptor(uuid, 0, self)
        self.descriptors.append(d)
        return d

    def set_value(self, value) -> None:
        """Serve reads with a static value; raise if a read handler is set."""
        if self.read_handler is not None:
            raise RuntimeError("characteristic has been configured with a read handler")
        self.props |= Property.READ
        self.value = bytes(value)

    def handle_read(self, handler) -> None:
        """Route reads to ``handler(response_writer, read_request)``."""
        if self.value is not None:
            raise RuntimeError("characteristic has been configured with a static value")
        self.props |= Property.READ
        self.read_handler = handler

    def handle_write(self, handler) -> None:
        """Route writes (with or without response) to ``handler(request, data)``."""
        self.props |= Property.WRITE | Property.WRITE_NR
        self.write_handler = handler

    def handle_notify(self, handler) -> None:
        """Route subscriptions to ``handler(request, notifier)`` and add a CCC descriptor."""
        if self.cccd is not None:
            return
        p = Property.NOTIFY | Property.INDICATE
        self.props |= p
        self.notify_handler = handler

        secure = Property(0)
        if self.secure & p:
            secure = Property.READ | Property.WRITE
        cd = Descriptor(ATTR_CLIENT_CHARACTERISTIC_CONFIG_UUID, 0, self)
        cd.props = Property.READ | Property.WRITE | Property.WRITE_NR
        cd.secure = secure
        cd.value = b"\x00\x00"
        self.cccd = cd
        self.descriptors.append(cd)

    def __repr__(self) -> str:
        return f"Characteristic({str(self.uuid)!r})"


class Descriptor:
    """A BLE descriptor."""

    def __init__(self, uuid, handle=0, characteristic=None):
        self.uuid = uuid
        self.handle = handle
        self.characteristic = characteristic
        self.props = Property(0)
        self.secure = Property(0)
        self.value = None
        self.read_handler = None
        self.write_handler = None

    def name(self) -> str:
        """Specification name of the descriptor, or "" if unassigned."""
        return descriptor_name(self.uuid)

    def set_value(self, value) -> None:
        """Serve reads with a static value; raise if a read handler is set."""
        if self.read_handler is not None:
            raise RuntimeError("descriptor has been configured with a read handler")
        self.props |= Property.READ
        self.value = bytes(value)

    def handle_read(self, handler) -> None:
        """Route reads to ``handler(response_writer, read_request)``."""
        if self.value is not None:
            raise RuntimeError("descriptor has been configured with a static value")
        self.props |= Property.READ
        self.read_handler = handler

    def handle_write(self, handler) -> None:
        """Route writes (with or without response) to ``handler(request, data)``."""
        self.props |= Property.WRITE | Property.WRITE_NR
        self.write_handler = handler

    def __repr__(self) -> str:
        return f"Descriptor({str(self.uuid)!r})"