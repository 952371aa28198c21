"""Run-length encoding of byte strings.

Each run is stored as a little-endian 16-bit count followed by the byte.
"""

from __future__ import annotations

import struct
from itertools import groupby

_RUN = struct.Struct("<HB")
_MAX_RUN = 0xFFFF


def compress_rle(data: bytes) -> bytes:
    """Encode ``data`` as runs of (count, byte) triples."""
    out = bytearray()
    for byte, group in groupby(bytes(data)):
        count = sum(1 for _ in group)
        while count > 0:
            run = min(count, _MAX_RUN)
            out += _RUN.pack(run, byte)
            count -= run
    return bytes(out)


def decompress_rle(data: bytes) -> bytes:
    """Expand data produced by :func:`compress_rle`."""
    data = bytes(data)
    if len(data) % _RUN.size:
        raise ValueError("run-length data must be a multiple of 3 bytes")
    return b"".join(bytes([byte]) * count for count, byte in _RUN.iter_unpack(data))