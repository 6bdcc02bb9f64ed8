"""
Fixed-width bit helpers for 32-bit slot addressing.

Pure functions on unsigned 32-bit integers. Python integers are unbounded,
so every helper that can produce bits above bit 31 masks its result with
WORD_MASK.

Bit Numbering Convention:
- Bit 0 = LSB of slot 0
- Bit i lives in slot i // 32 at offset i % 32
"""

WORD_BITS = 32
WORD_BYTES = 4
WORD_MASK = 0xFFFFFFFF


def bit_slot(index: int) -> int:
    """Slot holding bit ``index``."""
    return index // WORD_BITS


def bit_offset(index: int) -> int:
    """Offset of bit ``index`` inside its slot."""
    return index & (WORD_BITS - 1)


def bit_mask(index: int) -> int:
    """Single-bit mask for ``index`` within its slot."""
    return 1 << bit_offset(index)


def mask32(nbits: int) -> int:
    """
    Mask covering the low ``nbits`` bits of a 32-bit word.

    Args:
        nbits: Number of bits (0-32)

    Returns:
        Mask value, 0 when nbits is 0

    Raises:
        ValueError: If nbits is outside 0-32
    """
    if nbits < 0 or nbits > WORD_BITS:
        raise ValueError(f"nbits must be 0-{WORD_BITS}, got {nbits}")
    if nbits == 0:
        return 0
    return WORD_MASK >> (WORD_BITS - nbits)


def mask_merge(a: int, b: int, abits: int) -> int:
    """
    Select bits from ``a`` where ``abits`` is set, from ``b`` elsewhere.

    Args:
        a: Word supplying bits under the mask
        b: Word supplying bits outside the mask
        abits: Selection mask

    Returns:
        Merged 32-bit word
    """
    return (b ^ ((a ^ b) & abits)) & WORD_MASK


def num_slots_for(nbits: int) -> int:
    """Number of 32-bit slots needed to hold ``nbits`` bits."""
    return (nbits + WORD_BITS - 1) // WORD_BITS


def bitfield_size(nbits: int) -> int:
    """
    Bytes needed for a buffer holding ``nbits`` bits.

    Always a whole number of 32-bit slots, so the resulting capacity is
    at least ``nbits`` and less than ``nbits + 32``.

    Args:
        nbits: Number of bits (must be > 0)

    Returns:
        Buffer size in bytes

    Raises:
        ValueError: If nbits <= 0
    """
    if nbits <= 0:
        raise ValueError("nbits must be positive")
    return WORD_BYTES * (((nbits - 1) // WORD_BITS) + 1)
