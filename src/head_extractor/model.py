"""Tag model for the NBT binary tree format."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union


# ---------------------------------------------------------------------------
# TagType — wire type ids
# ---------------------------------------------------------------------------

class TagType(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12


# Payload width of the fixed-size scalars.
SCALAR_WIDTHS: dict[TagType, int] = {
    TagType.BYTE: 1,
    TagType.SHORT: 2,
    TagType.INT: 4,
    TagType.LONG: 8,
    TagType.FLOAT: 4,
    TagType.DOUBLE: 8,
}

# Element width of the length-prefixed arrays.
ARRAY_WIDTHS: dict[TagType, int] = {
    TagType.BYTE_ARRAY: 1,
    TagType.INT_ARRAY: 4,
    TagType.LONG_ARRAY: 8,
}


# ---------------------------------------------------------------------------
# Tag variants
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class StringTag:
    value: str


@dataclass(slots=True)
class OtherTag:
    """Any numeric scalar or array. The payload is kept as raw bytes."""

    kind: TagType
    payload: bytes = b""


@dataclass(slots=True)
class ListTag:
    element_type: TagType
    items: list[Tag] = field(default_factory=list)


@dataclass(slots=True)
class Compound:
    entries: dict[str, Tag] = field(default_factory=dict)


Tag = Union[Compound, ListTag, StringTag, OtherTag]
