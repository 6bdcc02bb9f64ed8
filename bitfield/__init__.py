"""
Bit-addressable storage over caller-owned buffers.

Treats any writable buffer as a densely packed sequence of bits and reads
or writes single bits, 1-32 bit unsigned fields, 32-bit words and
IEEE-754 single precision floats at arbitrary bit offsets.
"""

__version__ = "1.0.4"

from bitfield.bitfield import BitField
from bitfield.bitops import bitfield_size
from bitfield.errors import BitFieldError, InvalidWidthError, OutOfRangeError

__all__ = [
    "BitField",
    "BitFieldError",
    "InvalidWidthError",
    "OutOfRangeError",
    "bitfield_size",
    "__version__",
]
