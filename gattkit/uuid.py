"""Bluetooth UUIDs stored in the little-endian byte order used on the air."""

from __future__ import annotations

_VALID_LENGTHS = (2, 4, 16)


class UUID:
    """A Bluetooth UUID.

    The bytes are kept in wire order (little-endian), so a 16-bit UUID
    0x2800 is held as ``b"\\x00\\x28"``.
    """

    __slots__ = ("_data",)

    def __init__(self, data):
        self._data = bytes(data)

    @property
    def raw(self) -> bytes:
        """The UUID bytes in wire (little-endian) order."""
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return self._data[::-1].hex()

    def __repr__(self) -> str:
        return f"UUID({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, UUID):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)


def uuid16(value: int) -> UUID:
    """Build a 16-bit UUID from an integer."""
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"16-bit UUID out of range: {value!r}")
    return UUID(value.to_bytes(2, "little"))


def parse_uuid(text: str) -> UUID:
    """Parse a hex UUID string, dashes allowed, in big-endian display order."""
    digits = text.replace("-", "")
    data = bytes.fromhex(digits)
    if len(data) not in _VALID_LENGTHS:
        raise ValueError(f"invalid UUID length {len(data)}: {text!r}")
    return UUID(data[::-1])