"""Package level smoke tests."""

import bitfield


def test_version() -> None:
    """Test that version is defined."""
    assert bitfield.__version__ == "1.0.4"


def test_public_api() -> None:
    """Test that the public names are exported."""
    for name in bitfield.__all__:
        assert hasattr(bitfield, name)


def test_basic_usage() -> None:
    """Test the documented setup and a field round trip."""
    area = bytearray(bitfield.bitfield_size(96))
    bf = bitfield.BitField(area)
    bf.write_uintn(20, 0b10110, 5)
    assert bf.read_uintn(20, 5) == 0b10110
