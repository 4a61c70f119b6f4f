"""Decoder layer: converts NBT bytes into a Tag tree.

The tree is built with an explicit work stack, so nesting depth is bounded
only by memory and never by the interpreter's recursion limit.
"""

from __future__ import annotations

import re
import struct
from pathlib import Path
from typing import BinaryIO

from .compression import decompress, sniff_compression
from .errors import FileAccessError, MalformedTag
from .model import (
    ARRAY_WIDTHS,
    SCALAR_WIDTHS,
    Compound,
    ListTag,
    OtherTag,
    StringTag,
    Tag,
    TagType,
)

_USHORT = struct.Struct(">H")
_INT = struct.Struct(">i")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


# ---------------------------------------------------------------------------
# Modified UTF-8
# ---------------------------------------------------------------------------

def decode_modified_utf8(raw: bytes) -> str:
    """Decode Java's modified UTF-8 as written by ``DataOutput.writeUTF``.

    NUL is stored as ``C0 80`` and supplementary characters as two
    separately encoded surrogates.
    """
    if raw.isascii():
        return raw.decode("ascii")
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
    except UnicodeDecodeError as exc:
        raise MalformedTag(f"invalid string data: {exc.reason}") from exc
    if _SURROGATE_RE.search(text):
        # Join surrogate pairs; lone surrogates are kept as they are.
        text = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return text


# ---------------------------------------------------------------------------
# Byte reader
# ---------------------------------------------------------------------------

class _Reader:
    """Bounds-checked cursor over an in-memory buffer."""

    __slots__ = ("data", "pos")

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def take(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise MalformedTag(
                f"need {size} bytes at offset {self.pos}, "
                f"only {len(self.data) - self.pos} left"
            )
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def read_type(self) -> TagType:
        value = self.take(1)[0]
        try:
            return TagType(value)
        except ValueError:
            raise MalformedTag(f"unknown tag type {value} at offset {self.pos - 1}") from None

    def read_length(self) -> int:
        (length,) = _INT.unpack(self.take(4))
        if length < 0:
            raise MalformedTag(f"negative length {length} at offset {self.pos - 4}")
        return length

    def read_string(self) -> str:
        (length,) = _USHORT.unpack(self.take(2))
        return decode_modified_utf8(self.take(length))


class _PendingList:
    __slots__ = ("tag", "remaining")

    def __init__(self, tag: ListTag, remaining: int) -> None:
        self.tag = tag
        self.remaining = remaining


def _open(reader: _Reader, tag_type: TagType) -> tuple[Tag, Compound | _PendingList | None]:
    """Read the payload of *tag_type*, or the header of a container.

    Leaves come back complete with no frame. Containers come back empty
    together with the frame that fills them.
    """
    if tag_type is TagType.STRING:
        return StringTag(reader.read_string()), None
    if tag_type is TagType.COMPOUND:
        compound = Compound()
        return compound, compound
    if tag_type is TagType.LIST:
        element_type = reader.read_type()
        (count,) = _INT.unpack(reader.take(4))
        if count < 0:
            raise MalformedTag(f"negative list length {count} at offset {reader.pos - 4}")
        if element_type is TagType.END and count > 0:
            raise MalformedTag(f"list of {count} TAG_End elements at offset {reader.pos - 5}")
        tag = ListTag(element_type)
        return tag, _PendingList(tag, count)
    if tag_type in SCALAR_WIDTHS:
        return OtherTag(tag_type, reader.take(SCALAR_WIDTHS[tag_type])), None
    if tag_type in ARRAY_WIDTHS:
        count = reader.read_length()
        return OtherTag(tag_type, reader.take(count * ARRAY_WIDTHS[tag_type])), None
    raise MalformedTag(f"TAG_End cannot carry a payload (offset {reader.pos})")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def decode_tag(data: bytes | bytearray | memoryview) -> Tag | None:
    """Decode one named root tag from *data*.

    Returns ``None`` when the stream holds only a ``TAG_End`` byte.
    Trailing bytes after the root tag are ignored.

    Raises:
        MalformedTag: the stream is truncated or inconsistent.
    """
    reader = _Reader(bytes(data))
    root_type = reader.read_type()
    if root_type is TagType.END:
        return None
    reader.read_string()  # root name, unused

    root, frame = _open(reader, root_type)
    stack: list[Compound | _PendingList] = [frame] if frame is not None else []

    while stack:
        top = stack[-1]
        if isinstance(top, Compound):
            child_type = reader.read_type()
            if child_type is TagType.END:
                stack.pop()
                continue
            name = reader.read_string()
            child, child_frame = _open(reader, child_type)
            top.entries[name] = child
        else:
            if top.remaining == 0:
                stack.pop()
                continue
            top.remaining -= 1
            child, child_frame = _open(reader, top.tag.element_type)
            top.tag.items.append(child)

        if child_frame is not None:
            stack.append(child_frame)

    return root


def read_tag(stream: BinaryIO) -> Tag | None:
    """Decode one root tag from a binary stream (read to the end)."""
    return decode_tag(stream.read())


def read_data_file(path: Path | str) -> Tag | None:
    """Decode a whole ``.dat`` file: gzip, zlib or raw tag bytes.

    Raises:
        FileAccessError: the file cannot be read.
        MalformedTag: the contents cannot be decompressed or decoded.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc
    return decode_tag(decompress(raw, sniff_compression(raw)))
