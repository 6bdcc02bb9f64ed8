"""Tests for 32-bit word access at arbitrary bit offsets."""

import random

import pytest

from bitfield import BitField, OutOfRangeError


def as_int(buf: bytearray) -> int:
    """Buffer as an integer whose bit i is bit i of the store."""
    return int.from_bytes(buf, "little")


class TestWordAligned:
    """Test words on slot boundaries."""

    def test_write_and_read(self, area96: bytearray) -> None:
        """Test an aligned word fills exactly one slot."""
        bf = BitField(area96)
        bf.write_uint32(32, 0xDEADBEEF)
        assert bf.read_uint32(32) == 0xDEADBEEF
        assert area96 == bytearray(4) + bytes([0xEF, 0xBE, 0xAD, 0xDE]) + bytearray(4)

    def test_last_slot(self, area96: bytearray) -> None:
        """Test the final slot is writable in strict mode."""
        bf = BitField(area96)
        bf.write_uint32(64, 0xFFFFFFFF)
        assert bf.read_uint32(64) == 0xFFFFFFFF
        assert area96[:8] == bytearray(8)

    def test_value_masked_to_32_bits(self, area96: bytearray) -> None:
        """Test only the low 32 bits of a wider value are stored."""
        bf = BitField(area96)
        bf.write_uint32(0, 0x1_2345_6789)
        assert bf.read_uint32(0) == 0x23456789
        assert bf.read_uint32(32) == 0


class TestWordSplice:
    """Test words straddling two slots."""

    def test_straddling_write(self, area96: bytearray) -> None:
        """Test the value is split across both slots."""
        bf = BitField(area96)
        bf.write_uint32(4, 0xDEADBEEF)
        assert area96[:8] == bytearray([0xF0, 0xEE, 0xDB, 0xEA, 0x0D, 0, 0, 0])
        assert bf.read_uint32(4) == 0xDEADBEEF

    def test_straddling_preserves_neighbours(self) -> None:
        """Test bits below and above the word are kept."""
        buf = bytearray(b"\xff" * 8)
        bf = BitField(buf)
        bf.write_uint32(12, 0)
        assert buf == bytearray([0xFF, 0x0F, 0, 0, 0, 0xF0, 0xFF, 0xFF])

    def test_every_offset(self, patterned96: bytearray) -> None:
        """Test round trip and neighbour preservation at every legal index."""
        rng = random.Random(32)
        bf = BitField(patterned96)
        for index in range(96 - 32 + 1):
            value = rng.getrandbits(32)
            before = as_int(patterned96)
            bf.write_uint32(index, value)
            after = as_int(patterned96)
            expected = (before & ~(0xFFFFFFFF << index)) | (value << index)
            assert after == expected
            assert bf.read_uint32(index) == value


class TestWordBounds:
    """Test word accesses near the end of storage."""

    @pytest.mark.parametrize("index", [65, 80, 95, 96, -1])
    def test_strict_rejects_overrun(self, area96: bytearray, index: int) -> None:
        """Test words that do not fit raise and leave storage untouched."""
        bf = BitField(area96)
        with pytest.raises(OutOfRangeError):
            bf.read_uint32(index)
        with pytest.raises(OutOfRangeError):
            bf.write_uint32(index, 0xFFFFFFFF)
        assert area96 == bytearray(12)

    def test_permissive_write_truncates(self) -> None:
        """Test the high remainder is dropped at the end of storage."""
        buf = bytearray(8)
        bf = BitField(buf, strict=False)
        bf.write_uint32(48, 0x12345678)
        assert buf == bytearray([0, 0, 0, 0, 0, 0, 0x78, 0x56])

    def test_permissive_read_truncates(self) -> None:
        """Test a read past the end returns only the stored low bits."""
        buf = bytearray(b"\xff" * 8)
        bf = BitField(buf, strict=False)
        assert bf.read_uint32(48) == 0xFFFF
        assert bf.read_uint32(63) == 1

    def test_permissive_still_checks_start(self) -> None:
        """Test a word starting past the end raises in permissive mode."""
        bf = BitField(bytearray(8), strict=False)
        with pytest.raises(OutOfRangeError):
            bf.read_uint32(64)
        with pytest.raises(OutOfRangeError):
            bf.write_uint32(-1, 0)
