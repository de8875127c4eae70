"""
cursor.py

Sequential little-endian reader over a fixed byte buffer.
"""

import struct

from .exceptions import OutOfBoundsError

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")


class ByteCursor:
    """
    Read position over an immutable buffer.

    The buffer is borrowed, never copied: take() hands out a bounded view
    of the next n bytes so a chunk decoder cannot read past its chunk.
    """

    def __init__(self, data, offset=0):
        self._view = memoryview(data).cast("B")
        self.offset = offset

    def __len__(self):
        return len(self._view)

    def remaining(self):
        return len(self._view) - self.offset

    def _advance(self, n):
        if n < 0 or self.offset + n > len(self._view):
            raise OutOfBoundsError(
                f"need {n} bytes, {self.remaining()} available", offset=self.offset
            )
        start = self.offset
        self.offset += n
        return start

    def read_bytes(self, n):
        start = self._advance(n)
        return self._view[start:start + n].tobytes()

    def read_string(self, n):
        """Read n bytes as Latin-1 text, dropping trailing NUL padding."""
        return self.read_bytes(n).decode("latin-1").rstrip("\x00")

    def read_u16(self):
        start = self._advance(2)
        return _U16.unpack_from(self._view, start)[0]

    def read_i16(self):
        start = self._advance(2)
        return _I16.unpack_from(self._view, start)[0]

    def read_u32(self):
        start = self._advance(4)
        return _U32.unpack_from(self._view, start)[0]

    def skip(self, n):
        self._advance(n)

    def take(self, n):
        """Return a cursor over the next n bytes and move past them."""
        start = self._advance(n)
        return ByteCursor(self._view[start:start + n])
