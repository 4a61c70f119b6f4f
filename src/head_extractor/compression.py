"""Decompression of chunk payloads and whole data files."""

from __future__ import annotations

import gzip
import logging
import zlib
from enum import IntEnum

from .errors import MalformedTag

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class Compression(IntEnum):
    GZIP = 1
    ZLIB = 2
    UNCOMPRESSED = 3


def decompress(payload: bytes, method: int) -> bytes:
    """Decompress *payload* according to a region compression byte.

    ``1`` is gzip, ``2`` is zlib. Every other value, known or not, is
    returned unchanged and decoded as raw tag bytes.
    """
    try:
        if method == Compression.GZIP:
            return gzip.decompress(payload)
        if method == Compression.ZLIB:
            return zlib.decompress(payload)
    except (OSError, EOFError, zlib.error) as exc:
        name = Compression(method).name.lower()
        raise MalformedTag(f"{name} payload could not be decompressed: {exc}") from exc

    if method != Compression.UNCOMPRESSED:
        logger.debug("Unsupported compression type %d, reading payload as raw tag data", method)
    return payload


def sniff_compression(data: bytes) -> int:
    """Guess the framing of a whole ``.dat`` file from its first bytes."""
    if data[:2] == GZIP_MAGIC:
        return Compression.GZIP
    # zlib header: CM=8 in the low nibble and a valid FCHECK.
    if len(data) >= 2 and data[0] & 0x0F == 8 and (data[0] << 8 | data[1]) % 31 == 0:
        return Compression.ZLIB
    return Compression.UNCOMPRESSED
