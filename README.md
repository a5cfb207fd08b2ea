# gattkit

Building blocks for a Bluetooth Low Energy GATT server (peripheral):

- describe services, characteristics and descriptors (`gattkit.model`),
- lay them out as an ATT attribute table (`gattkit.attr.generate_attributes`),
- answer ATT requests from a connected central (`gattkit.server.Central`),
- craft advertising and scan-response payloads (`gattkit.adv.AdvPacket`)
  and parse received ones (`gattkit.adv.Advertisement`),
- look up the assigned names of well-known UUIDs (`gattkit.known`).

No third-party dependencies; Python 3.10 or later.

## Installation

```
pip install .
```

## UUIDs

```python
from gattkit.uuid import parse_uuid, uuid16

battery = uuid16(0x180F)
custom = parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")
str(battery)    # "180f"
bytes(battery)  # b"\x0f\x18" -- wire (little-endian) order
```

`gattkit.known.service_name(uuid)`, `characteristic_name`, `descriptor_name`
and `attribute_name` return the specification name of an assigned UUID, or
an empty string.

## Defining services

```python
from gattkit.constants import STATUS_SUCCESS
from gattkit.model import Service
from gattkit.uuid import parse_uuid, uuid16

svc = Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b"))

counter = svc.add_characteristic(parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b"))
counter.handle_read(lambda rsp, req: rsp.write(b"count: 1"))

sink = svc.add_characteristic(parse_uuid("16fe0d80-c111-11e3-b8c8-0002a5d5c51b"))
sink.handle_write(lambda request, data: STATUS_SUCCESS)

static = svc.add_characteristic(uuid16(0x2A19))
static.set_value(b"\x64")
```

- A read handler is called as `handler(rsp, req)`: `rsp` is a
  `gattkit.handlers.ResponseWriter` accepting bytes or str up to
  `req.cap` bytes (raising `ResponseOverflowError` beyond that), and
  `req.offset` is the requested value offset.
- A write handler is called as `handler(request, data)`.
- `handle_notify(handler)` adds a Client Characteristic Configuration
  descriptor; when a central subscribes, `handler(request, notifier)` runs in
  a background thread. `notifier.write(data)` sends a notification,
  `notifier.done()` turns true once the central unsubscribes, and further
  writes raise `NotificationsStoppedError`.
- `set_value` and `handle_read` exclude each other; adding a second
  characteristic or descriptor with the same UUID raises `ValueError`.

Sample services live in `gattkit.services`: `gap_service(name)`,
`gatt_service()`, `battery_service()` and `count_service()`.

## Serving a connection

```python
from gattkit.attr import generate_attributes
from gattkit.server import Central
from gattkit.services import count_service, gap_service, gatt_service

attrs = generate_attributes([gap_service("Gopher"), gatt_service(), count_service()], 1)
central = Central(attrs, "00:00:00:00:00:00", conn)  # conn: your L2CAP channel
central.loop()  # serves requests until conn.read returns b"", then closes
```

`conn` is any object with `read(n)`, `write(data)` and `close()`.
A single request can also be answered directly:

```python
central.handle_request(bytes.fromhex("028700"))  # MTU exchange -> b"\x03\x87\x00"
```

Supported requests: MTU exchange (clamped to 23..256), Find Information,
Find By Type Value (primary services), Read By Type, Read, Read Blob,
Read By Group Type (primary services), Write Request and Write Command.
Anything else gets a "request not supported" error response.

`gattkit.attr.dump_attributes(attrs)` returns the attribute table as text
lines and logs them at debug level.

## Advertising

```python
from gattkit.adv import AdvFlag, AdvPacket, Advertisement

pkt = AdvPacket(b"")
pkt.append_flags(AdvFlag.GENERAL_DISCOVERABLE | AdvFlag.LE_ONLY)
pkt.append_uuid_fit([svc.uuid])   # True if every UUID fit
pkt.append_name("Gopher")         # shortened name if it does not fit
payload = pkt.to_bytes()          # always 31 bytes, zero padded; len(pkt) is the used length

adv = Advertisement()
adv.unmarshal(pkt.data)           # raises ValueError on malformed data
adv.local_name                    # "Gopher"
```

## What it does not do

gattkit does not drive a Bluetooth controller. It opens no HCI device or
L2CAP socket, does not put advertising data on the air, does not scan, and
has no client (central-role) side for discovering or reading remote
peripherals. You supply the connection and transmit the advertising bytes
yourself.

## Running the tests

```
pip install .[test]
pytest
```