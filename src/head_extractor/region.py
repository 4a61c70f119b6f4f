"""Region container reader for ``.mca`` files.

A region file starts with a 4 KiB location table of 1024 big-endian words.
The high three bytes of a word are the chunk's offset in 4 KiB sectors and
the low byte is its length in sectors; a zero word marks an absent chunk.
Each chunk starts with a 4-byte length (counting the compression byte), the
compression byte, and the payload.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .compression import decompress
from .errors import FileAccessError, RegionFrameError

logger = logging.getLogger(__name__)

SECTOR_BYTES = 4096
SLOT_COUNT = 1024
LOCATION_TABLE_BYTES = SLOT_COUNT * 4

_LOCATIONS = struct.Struct(f">{SLOT_COUNT}I")
_CHUNK_HEADER = struct.Struct(">iB")


@dataclass(frozen=True)
class RegionEntry:
    """
    One slot of the location table.

    Attributes:
        compression: The chunk's compression byte, or ``None`` when the
            slot is absent or its chunk header lies past the end of the file.
    """
    index: int
    sector_offset: int
    sector_count: int
    compression: int | None = None

    @property
    def present(self) -> bool:
        return self.sector_offset != 0 or self.sector_count != 0

    @property
    def byte_offset(self) -> int:
        return self.sector_offset * SECTOR_BYTES


# ---------------------------------------------------------------------------
# Location table
# ---------------------------------------------------------------------------

def read_locations(buffer: bytes) -> list[RegionEntry]:
    """Parse the location table at the start of *buffer*.

    Raises:
        RegionFrameError: the buffer is shorter than the table.
    """
    if len(buffer) < LOCATION_TABLE_BYTES:
        raise RegionFrameError(
            f"location table truncated: {len(buffer)} of {LOCATION_TABLE_BYTES} bytes"
        )
    entries = []
    for i, word in enumerate(_LOCATIONS.unpack_from(buffer)):
        sector_offset, sector_count = word >> 8, word & 0xFF
        compression = None
        if word:
            at = sector_offset * SECTOR_BYTES + _CHUNK_HEADER.size - 1
            if at < len(buffer):
                compression = buffer[at]
        entries.append(RegionEntry(i, sector_offset, sector_count, compression))
    return entries


# ---------------------------------------------------------------------------
# Chunk payloads
# ---------------------------------------------------------------------------

def read_chunk(buffer: bytes, entry: RegionEntry) -> bytes:
    """Return the decompressed tag bytes of one present chunk.

    Raises:
        RegionFrameError: the chunk framing runs past the buffer or
            declares an impossible length.
        MalformedTag: the payload cannot be decompressed.
    """
    offset = entry.byte_offset
    if offset + _CHUNK_HEADER.size > len(buffer):
        raise RegionFrameError(
            f"slot {entry.index}: chunk header at offset {offset} is past the end "
            f"of the file ({len(buffer)} bytes)"
        )
    chunk_length, compression = _CHUNK_HEADER.unpack_from(buffer, offset)
    length = chunk_length - 1
    if length < 0:
        raise RegionFrameError(f"slot {entry.index}: invalid chunk length {chunk_length}")

    start = offset + _CHUNK_HEADER.size
    if start + length > len(buffer):
        raise RegionFrameError(
            f"slot {entry.index}: {length}-byte payload at offset {start} runs past "
            f"the end of the file ({len(buffer)} bytes)"
        )
    return decompress(buffer[start:start + length], compression)


def iter_chunks(buffer: bytes) -> Iterator[bytes]:
    """Yield the decompressed tag bytes of every present chunk, in slot order.

    The iterator stops at the first framing error, which is raised to the
    caller; chunks yielded before it are unaffected. An empty buffer (the
    game leaves zero-byte region files behind) yields nothing.
    """
    if not buffer:
        return
    for entry in read_locations(buffer):
        if not entry.present:
            continue
        yield read_chunk(buffer, entry)


def iter_region_file(path: Path | str) -> Iterator[bytes]:
    """Read a region file from disk and iterate over its chunks."""
    try:
        buffer = Path(path).read_bytes()
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc
    if not buffer:
        logger.debug("Skipping empty region file %s", path)
    yield from iter_chunks(buffer)
