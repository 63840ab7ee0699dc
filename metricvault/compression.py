"""LZ4 block compression with a little-endian length prefix."""

from __future__ import annotations

import struct

import lz4.block

_SIZE = struct.Struct("<I")


def compress(data: bytes) -> bytes:
    """Compress ``data`` into a 4-byte original length followed by an LZ4 block."""
    data = bytes(data)
    if len(data) > 0xFFFFFFFF:
        raise ValueError("data is too large to compress into one block")
    return _SIZE.pack(len(data)) + lz4.block.compress(data, store_size=False)


def decompress(data: bytes) -> bytes:
    """Reverse :func:`compress`."""
    data = bytes(data)
    if len(data) < _SIZE.size:
        raise ValueError("compressed block is too short")
    (size,) = _SIZE.unpack_from(data)
    if size == 0:
        return b""
    try:
        return lz4.block.decompress(data[_SIZE.size:], uncompressed_size=size)
    except lz4.block.LZ4BlockError as exc:
        raise ValueError(f"corrupt compressed block: {exc}") from exc