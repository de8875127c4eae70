import struct

import pytest

from wavinfo.cursor import ByteCursor
from wavinfo.exceptions import OutOfBoundsError


class TestReads:

    def test_integers_are_little_endian(self):
        c = ByteCursor(struct.pack("<HIh", 0x1234, 0xDEADBEEF, -2300))
        assert c.read_u16() == 0x1234
        assert c.read_u32() == 0xDEADBEEF
        assert c.read_i16() == -2300
        assert c.offset == 8
        assert c.remaining() == 0

    def test_string_strips_trailing_nuls_only(self):
        c = ByteCursor(b"ab\x00c\x00\x00\x00\x00")
        assert c.read_string(8) == "ab\x00c"

    def test_string_is_latin1(self):
        assert ByteCursor(b"caf\xe9").read_string(4) == "caf\xe9"

    def test_skip_advances(self):
        c = ByteCursor(b"xxxxWAVE")
        c.skip(4)
        assert c.read_string(4) == "WAVE"


class TestBounds:

    @pytest.mark.parametrize("op", [
        lambda c: c.read_u32(),
        lambda c: c.read_u16(),
        lambda c: c.read_string(4),
        lambda c: c.skip(4),
        lambda c: c.take(4),
    ])
    def test_overrun_raises_and_keeps_offset(self, op):
        c = ByteCursor(b"\x01\x02\x03")
        c.skip(2)
        with pytest.raises(OutOfBoundsError):
            op(c)
        assert c.offset == 2

    def test_negative_length_rejected(self):
        with pytest.raises(OutOfBoundsError):
            ByteCursor(b"abcd").skip(-1)

    def test_reading_exactly_to_the_end_is_fine(self):
        c = ByteCursor(b"abcd")
        assert c.read_string(4) == "abcd"
        assert c.remaining() == 0


class TestTake:

    def test_take_returns_bounded_cursor(self):
        c = ByteCursor(b"AAAABBBBCC")
        body = c.take(4)
        assert c.offset == 4
        assert len(body) == 4
        assert body.read_string(4) == "AAAA"
        with pytest.raises(OutOfBoundsError):
            body.read_u16()
        assert c.read_string(4) == "BBBB"

    def test_take_of_take(self):
        outer = ByteCursor(bytes(range(16)))
        inner = outer.take(8).take(4)
        assert inner.read_bytes(4) == bytes([0, 1, 2, 3])
