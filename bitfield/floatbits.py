"""
IEEE-754 single precision bridge.

Reinterprets bit patterns between 32-bit unsigned integers and floats with
no numeric conversion beyond the binary32 <-> Python float widening.
NaN patterns, signalling ones included, keep their sign and payload: they
are carried in the top mantissa bits of the double instead of going
through the hardware float conversion, which would quiet them.
"""

import math
import struct

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")
_F64 = struct.Struct("<d")
_U64 = struct.Struct("<Q")

# Mantissa bits a double has beyond a float
_NAN_SHIFT = 52 - 23


def float_to_bits(value: float) -> int:
    """
    Bit pattern of ``value`` encoded as binary32.

    Raises:
        OverflowError: If value is finite but outside binary32 range
    """
    if math.isnan(value):
        bits = _U64.unpack(_F64.pack(value))[0]
        mantissa = (bits >> _NAN_SHIFT) & 0x7FFFFF
        if mantissa == 0:
            # Payload only in the dropped low bits, keep it a NaN
            mantissa = 0x400000
        return ((bits >> 63) << 31) | (0xFF << 23) | mantissa
    return _U32.unpack(_F32.pack(value))[0]


def bits_to_float(bits: int) -> float:
    """Float whose binary32 encoding is the low 32 bits of ``bits``."""
    bits &= 0xFFFFFFFF
    mantissa = bits & 0x7FFFFF
    if (bits >> 23) & 0xFF == 0xFF and mantissa:
        double = ((bits >> 31) << 63) | (0x7FF << 52) | (mantissa << _NAN_SHIFT)
        return _F64.unpack(_U64.pack(double))[0]
    return _F32.unpack(_U32.pack(bits))[0]
