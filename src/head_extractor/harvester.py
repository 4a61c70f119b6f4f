"""Harvest every string leaf from a Tag tree."""

from __future__ import annotations

from typing import Iterator

from .model import Compound, ListTag, StringTag, Tag


def iter_strings(root: Tag | None) -> Iterator[str]:
    """Yield the value of every StringTag under *root*, pre-order.

    Uses an explicit stack; children are pushed in reverse so they pop in
    document order.
    """
    if root is None:
        return
    stack: list[Tag] = [root]
    while stack:
        tag = stack.pop()
        if isinstance(tag, StringTag):
            yield tag.value
        elif isinstance(tag, Compound):
            stack.extend(reversed(tag.entries.values()))
        elif isinstance(tag, ListTag):
            stack.extend(reversed(tag.items))
