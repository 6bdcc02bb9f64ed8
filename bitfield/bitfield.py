"""
Bit-addressable view over a caller-owned buffer.

This module provides BitField, which treats any writable buffer as a
densely packed sequence of bits grouped into 32-bit slots. The buffer is
never copied, resized or freed: BitField only holds a memoryview of it.

Storage Layout:
- Slot k occupies bytes 4k..4k+3, little-endian
- Bit 0 = LSB of slot 0, so bit i is bit (i % 8) of byte (i // 8)

Bounds Policy:
- strict=True (default): every access checks its whole span and raises
  OutOfRangeError / InvalidWidthError
- strict=False: word, field and float accesses that run past the last
  slot are truncated, invalid widths read as 0 and write nothing

Single-bit accesses and dump() are checked under both policies.
"""

import logging
import struct

from bitfield.bitops import (
    WORD_BITS,
    WORD_BYTES,
    WORD_MASK,
    bit_mask,
    bit_offset,
    bit_slot,
    mask32,
    mask_merge,
)
from bitfield.errors import InvalidWidthError, OutOfRangeError
from bitfield.floatbits import bits_to_float, float_to_bits

logger = logging.getLogger(__name__)

_SLOT = struct.Struct("<I")


class BitField:
    """Bit, word, field and float accessors over a borrowed buffer."""

    def __init__(self, area, strict: bool = True) -> None:
        """
        Bind a bit field to a writable buffer.

        Args:
            area: Object exporting a writable buffer (bytearray, memoryview,
                array.array, mmap, ...). Size it with bitfield_size().
            strict: Raise on any access that does not fit (see module docs)

        Raises:
            TypeError: If area is read-only or not C-contiguous
        """
        with memoryview(area) as view:
            if view.readonly:
                raise TypeError("BitField needs a writable buffer")
            self._view = view.cast("B")

        self.strict = strict

        nbytes = self._view.nbytes
        self.size = nbytes * 8
        self.num_slots = nbytes // WORD_BYTES
        # Bits past the last whole slot have no backing word
        self._limit = self.num_slots * WORD_BITS

        if nbytes % WORD_BYTES:
            logger.warning(
                "Buffer of %d bytes is not a multiple of %d; bits %d-%d are not addressable",
                nbytes,
                WORD_BYTES,
                self._limit,
                self.size - 1,
            )
        logger.debug(
            "BitField bound: %d bits, %d slots, strict=%s",
            self.size,
            self.num_slots,
            strict,
        )

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return (
            f"BitField(size={self.size}, num_slots={self.num_slots}, "
            f"strict={self.strict})"
        )

    def __enter__(self) -> "BitField":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def release(self) -> None:
        """
        Release the view on the caller's buffer.

        The caller may resize the buffer afterwards; this BitField must not
        be used again.
        """
        self._view.release()

    # ------------------------------------------------------------------
    # Slot access and validation
    # ------------------------------------------------------------------

    def _load(self, slot: int) -> int:
        return _SLOT.unpack_from(self._view, slot * WORD_BYTES)[0]

    def _store(self, slot: int, value: int) -> None:
        _SLOT.pack_into(self._view, slot * WORD_BYTES, value & WORD_MASK)

    def _check(self, index: int, width: int) -> None:
        if index < 0 or index + width > self._limit:
            if width == 1:
                raise OutOfRangeError(
                    f"Bit position {index} out of range [0, {self._limit})"
                )
            raise OutOfRangeError(
                f"Bits [{index}, {index + width}) out of range [0, {self._limit})"
            )

    def _check_span(self, index: int, width: int) -> None:
        # Permissive mode only insists that the span starts inside storage
        self._check(index, width if self.strict else 1)

    def _valid_width(self, width: int) -> bool:
        if 1 <= width <= WORD_BITS:
            return True
        if self.strict:
            raise InvalidWidthError(width)
        logger.debug("Ignoring access with invalid width %d", width)
        return False

    # ------------------------------------------------------------------
    # Single bits
    # ------------------------------------------------------------------

    def read_bit(self, index: int) -> int:
        """
        Get bit value at position.

        Args:
            index: Bit position (0 = LSB of slot 0)

        Returns:
            Bit value (0 or 1)

        Raises:
            OutOfRangeError: If index is out of range
        """
        self._check(index, 1)
        return (self._load(bit_slot(index)) >> bit_offset(index)) & 1

    def set_bit(self, index: int) -> None:
        """Set bit at ``index`` to 1."""
        self._check(index, 1)
        slot = bit_slot(index)
        self._store(slot, self._load(slot) | bit_mask(index))

    def clear_bit(self, index: int) -> None:
        """Set bit at ``index`` to 0."""
        self._check(index, 1)
        slot = bit_slot(index)
        self._store(slot, self._load(slot) & ~bit_mask(index))

    def toggle_bit(self, index: int) -> None:
        """Invert bit at ``index``."""
        self._check(index, 1)
        slot = bit_slot(index)
        self._store(slot, self._load(slot) ^ bit_mask(index))

    def write_bit(self, index: int, value: int) -> None:
        """
        Write one bit.

        Args:
            index: Bit position
            value: Bit value (0 or non-zero for 1)

        Raises:
            OutOfRangeError: If index is out of range
        """
        if value:
            self.set_bit(index)
        else:
            self.clear_bit(index)

    # ------------------------------------------------------------------
    # 32-bit words
    # ------------------------------------------------------------------

    def _read_word(self, index: int) -> int:
        slot = bit_slot(index)
        offset = bit_offset(index)
        result = self._load(slot) >> offset

        if offset != 0:
            if slot + 1 < self.num_slots:
                # Splice in the high bits from the next slot
                result |= (self._load(slot + 1) << (WORD_BITS - offset)) & WORD_MASK
            else:
                logger.debug("Word read at bit %d truncated at end of storage", index)
        return result

    def _write_word(self, index: int, value: int) -> None:
        value &= WORD_MASK
        slot = bit_slot(index)
        offset = bit_offset(index)

        if offset == 0:
            self._store(slot, value)
            return

        low = mask32(offset)
        self._store(slot, (value << offset) | (self._load(slot) & low))
        if slot + 1 < self.num_slots:
            self._store(
                slot + 1,
                (value >> (WORD_BITS - offset)) | (self._load(slot + 1) & ~low),
            )
        else:
            logger.debug("Word write at bit %d truncated at end of storage", index)

    def read_uint32(self, index: int) -> int:
        """
        Read an unsigned 32-bit value starting at any bit position.

        Args:
            index: Bit position of the value's LSB

        Returns:
            Value (0 to 2^32-1)

        Raises:
            OutOfRangeError: If the 32 bits do not fit (strict), or index is
                out of range
        """
        self._check_span(index, WORD_BITS)
        return self._read_word(index)

    def write_uint32(self, index: int, value: int) -> None:
        """
        Write an unsigned 32-bit value starting at any bit position.

        Bits outside [index, index + 32) are preserved. Only the low 32 bits
        of ``value`` are stored.

        Raises:
            OutOfRangeError: If the 32 bits do not fit (strict), or index is
                out of range
        """
        self._check_span(index, WORD_BITS)
        self._write_word(index, value)

    # ------------------------------------------------------------------
    # N-bit fields
    # ------------------------------------------------------------------

    def read_uintn(self, index: int, width: int) -> int:
        """
        Read an unsigned ``width``-bit field.

        Args:
            index: Bit position of the field's LSB
            width: Field width in bits (1-32)

        Returns:
            Field value, or 0 for an invalid width in permissive mode

        Raises:
            InvalidWidthError: If width is outside 1-32 (strict)
            OutOfRangeError: If the field does not fit (strict), or index is
                out of range
        """
        if not self._valid_width(width):
            return 0
        if width == 1:
            return self.read_bit(index)
        if width == WORD_BITS:
            return self.read_uint32(index)

        self._check_span(index, width)
        return self._read_word(index) & mask32(width)

    def write_uintn(self, index: int, value: int, width: int) -> None:
        """
        Write an unsigned ``width``-bit field.

        Only the low ``width`` bits of ``value`` are stored (width 1 sets
        the bit for any non-zero low byte). Every bit outside
        [index, index + width) is preserved. The write reads and rewrites up
        to two slots and is not atomic.

        Args:
            index: Bit position of the field's LSB
            value: Value to store
            width: Field width in bits (1-32)

        Raises:
            InvalidWidthError: If width is outside 1-32 (strict)
            OutOfRangeError: If the field does not fit (strict), or index is
                out of range
        """
        if not self._valid_width(width):
            return
        if width == 1:
            # Set for any non-zero low byte
            self.write_bit(index, value & 0xFF)
            return
        if width == WORD_BITS:
            self.write_uint32(index, value)
            return

        self._check_span(index, width)
        field_mask = mask32(width)
        value &= field_mask
        word = self._read_word(index)
        self._write_word(index, mask_merge(word, value, ~field_mask))

    # ------------------------------------------------------------------
    # Floats
    # ------------------------------------------------------------------

    def read_float(self, index: int) -> float:
        """Read an IEEE-754 single precision value starting at ``index``."""
        return bits_to_float(self.read_uint32(index))

    def write_float(self, index: int, value: float) -> None:
        """
        Write ``value`` as IEEE-754 single precision starting at ``index``.

        Raises:
            OverflowError: If value is finite but too large for binary32
            OutOfRangeError: If the 32 bits do not fit (strict), or index is
                out of range
        """
        self.write_uint32(index, float_to_bits(value))

    # ------------------------------------------------------------------
    # Raw export
    # ------------------------------------------------------------------

    def _check_nbytes(self, n: int) -> None:
        capacity = self.size // 8
        if n < 0 or n > capacity:
            raise OutOfRangeError(f"Cannot dump {n} bytes from {capacity}-byte storage")

    def dump(self, dst, n: int):
        """
        Copy the first ``n`` raw bytes of storage into ``dst``.

        Args:
            dst: Writable buffer with room for at least n bytes
            n: Number of bytes to copy

        Returns:
            dst

        Raises:
            OutOfRangeError: If n exceeds the storage size in bytes
            TypeError: If dst is read-only
            ValueError: If dst is smaller than n bytes
        """
        self._check_nbytes(n)
        with memoryview(dst) as target, target.cast("B") as out:
            if out.readonly:
                raise TypeError("dump destination must be writable")
            if out.nbytes < n:
                raise ValueError(f"Destination holds {out.nbytes} bytes, need {n}")
            out[:n] = self._view[:n]
        return dst

    def to_bytes(self, n: int | None = None) -> bytes:
        """
        Copy of the first ``n`` raw bytes of storage (all of it by default).

        Raises:
            OutOfRangeError: If n exceeds the storage size in bytes
        """
        if n is None:
            n = self.size // 8
        self._check_nbytes(n)
        return self._view[:n].tobytes()
