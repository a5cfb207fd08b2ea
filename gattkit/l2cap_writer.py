"""Builder for L2CAP/ATT response payloads bounded by the connection MTU."""

from __future__ import annotations


class L2capWriter:
    """Accumulates bytes up to ``mtu``, with optional all-or-nothing chunks.

    Writes outside a chunk are truncated to fit. Writes inside a chunk are
    buffered and only land in the output on :meth:`commit` if the whole
    chunk fits, or truncated on :meth:`commit_fit`.
    """

    def __init__(self, mtu):
        self.mtu = int(mtu)
        self._buf = bytearray()
        self._chunk = bytearray()
        self._chunked = False

    def chunk(self) -> None:
        """Start a new chunk; raises if one is already in progress."""
        if self._chunked:
            raise RuntimeError("chunk called twice without committing")
        self._chunked = True

    def commit(self) -> bool:
        """Write the current chunk if it fits entirely; report whether it did."""
        if not self._chunked:
            raise RuntimeError("commit without starting a chunk")
        success = len(self._buf) + len(self._chunk) <= self.mtu
        if success:
            self._buf += self._chunk
        self._chunk.clear()
        self._chunked = False
        return success

    def commit_fit(self) -> None:
        """Write as much of the current chunk as fits, truncating the rest."""
        if not self._chunked:
            raise RuntimeError("commit_fit without starting a chunk")
        writeable = max(0, min(self.mtu - len(self._buf), len(self._chunk)))
        self._buf += self._chunk[:writeable]
        self._chunk.clear()
        self._chunked = False

    def write_byte_fit(self, value: int) -> bool:
        """Write a single byte, with the semantics of :meth:`write_fit`."""
        return self.write_fit(bytes([value & 0xFF]))

    def write_uint16_fit(self, value: int) -> bool:
        """Write a little-endian 16-bit value, with the semantics of :meth:`write_fit`."""
        return self.write_fit((value & 0xFFFF).to_bytes(2, "little"))

    def write_uuid_fit(self, uuid) -> bool:
        """Write a UUID in wire order, with the semantics of :meth:`write_fit`."""
        return self.write_fit(bytes(uuid))

    def writeable(self, pad: int, data) -> int:
        """Return how many bytes of ``data`` would fit after writing ``pad`` bytes."""
        if self._chunked:
            return len(data)
        avail = self.mtu - len(self._buf) - pad
        if avail > len(data):
            return len(data)
        return max(avail, 0)

    def write_fit(self, data) -> bool:
        """Write as much of ``data`` as fits; report whether nothing was truncated."""
        data = bytes(data)
        if self._chunked:
            self._chunk += data
            return True
        avail = max(self.mtu - len(self._buf), 0)
        if avail >= len(data):
            self._buf += data
            return True
        self._buf += data[:avail]
        return False

    def chunk_seek(self, offset: int) -> bool:
        """Drop the first ``offset`` bytes of the current chunk.

        Returns False (and empties the chunk) if fewer bytes were available.
        """
        if not self._chunked:
            raise RuntimeError("chunk_seek requested without chunked write in progress")
        if len(self._chunk) < offset:
            self._chunk.clear()
            return False
        del self._chunk[:offset]
        return True

    def getvalue(self) -> bytes:
        """Return the bytes written so far; raises during a chunked write."""
        if self._chunked:
            raise RuntimeError("bytes requested while chunked write in progress")
        return bytes(self._buf)