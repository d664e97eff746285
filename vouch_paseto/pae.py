"""
Pre-Authentication Encoding (PAE).

Frames an ordered list of byte strings into one unambiguous buffer:

    LE64(count) || LE64(len(p0)) || p0 || LE64(len(p1)) || p1 || ...

Every distinct list maps to a distinct buffer, so bytes cannot be shifted
between the header, payload, footer and assertion without changing what the
signature covers.
"""

import struct

# The most significant bit is kept clear for interoperability.
_MAX_LE64 = (1 << 63) - 1


def le64(n: int) -> bytes:
    """Encode a non-negative integer as 8 little-endian bytes."""
    if n < 0 or n > _MAX_LE64:
        raise OverflowError(f"{n} does not fit in a 63-bit length field")
    return struct.pack("<Q", n)


def pae(*pieces: bytes) -> bytes:
    """Return the PAE encoding of ``pieces``."""
    out = bytearray(le64(len(pieces)))
    for piece in pieces:
        piece = bytes(piece)
        out += le64(len(piece))
        out += piece
    return bytes(out)
