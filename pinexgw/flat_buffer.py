"""A fixed-capacity receive buffer with a readable and a writable region."""

from __future__ import annotations

DEFAULT_CAPACITY = 1024 * 1024


class FlatBuffer:
    """Bytes are written into :meth:`prepare`, made readable by :meth:`commit`
    and dropped from the front by :meth:`consume`."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._buf = bytearray(capacity)
        self._in = 0
        self._out = 0
        self._last = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def __len__(self) -> int:
        return self._out - self._in

    def clear(self) -> None:
        """Drop all readable and prepared bytes."""
        self._in = self._out = self._last = 0

    def data(self) -> bytes:
        """Return a copy of the readable bytes."""
        return bytes(self._buf[self._in:self._out])

    def prepare(self, n: int) -> memoryview:
        """Return a writable view of ``n`` bytes after the readable region."""
        if n < 0:
            raise ValueError("n must not be negative")
        if n <= self.capacity - self._out:
            self._last = self._out + n
            return memoryview(self._buf)[self._out:self._last]
        length = len(self)
        if n > self.capacity - length:
            raise ValueError("flat buffer overflow")
        if length:
            self._buf[0:length] = self._buf[self._in:self._out]
        self._in = 0
        self._out = length
        self._last = length + n
        return memoryview(self._buf)[self._out:self._last]

    def commit(self, n: int) -> None:
        """Make up to ``n`` prepared bytes readable."""
        self._out += min(n, self._last - self._out)

    def consume(self, n: int) -> None:
        """Drop ``n`` bytes from the front of the readable region."""
        if n >= len(self):
            self._in = self._out = 0
            return
        self._in += n