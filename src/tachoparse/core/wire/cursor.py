from __future__ import annotations

from tachoparse.core.base.errors import TruncatedError


class Cursor:
    """Read position over an immutable byte buffer.

    Offsets are absolute within the buffer so diagnostics can point back
    into the original download. Reads never go past ``end``.
    """

    def __init__(self, data: bytes, offset: int = 0, end: int | None = None) -> None:
        self._data = data
        self._start = offset
        self._offset = offset
        self._end = len(data) if end is None else end

    @property
    def window(self) -> bytes:
        """All bytes this cursor covers, read or not."""
        return self._data[self._start : self._end]

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def end(self) -> int:
        return self._end

    @property
    def remaining(self) -> int:
        return self._end - self._offset

    @property
    def at_end(self) -> bool:
        return self._offset >= self._end

    def peek(self, n: int) -> bytes:
        """Return the next n bytes without advancing."""
        if n > self.remaining:
            raise TruncatedError(
                f"need {n} bytes at offset {self._offset:#x}, have {self.remaining}"
            )
        return self._data[self._offset : self._offset + n]

    def take(self, n: int) -> bytes:
        """Return the next n bytes and advance past them."""
        chunk = self.peek(n)
        self._offset += n
        return chunk

    def since(self, offset: int) -> bytes:
        """Bytes read between an earlier offset and the current position."""
        return self._data[offset : self._offset]

    def take_rest(self) -> bytes:
        return self.take(self.remaining)

    def uint(self, n: int) -> int:
        return int.from_bytes(self.take(n), "big")

    def skip(self, n: int) -> None:
        self.take(n)

    def sub(self, n: int) -> Cursor:
        """Split off a cursor over the next n bytes and advance past them."""
        if n > self.remaining:
            raise TruncatedError(
                f"need {n} bytes at offset {self._offset:#x}, have {self.remaining}"
            )
        child = Cursor(self._data, self._offset, self._offset + n)
        self._offset += n
        return child
