"""Head validation: does a string decode to a skin texture descriptor?"""

from __future__ import annotations

import base64
import binascii
import json


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def decode_texture_payload(candidate: str) -> object | None:
    """Base64-decode *candidate* and parse it as JSON.

    Returns ``None`` when either step fails. ``NaN`` and ``Infinity`` are
    rejected, as is nesting too deep for the parser.
    """
    try:
        raw = base64.b64decode(candidate, validate=True)
    except (binascii.Error, ValueError):
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None


def is_valid_head(candidate: str) -> bool:
    """Return True if *candidate* is a base64 ``textures.SKIN.url`` descriptor.

    Accepted shape::

        {"textures": {"SKIN": {"url": "<string>"}}}

    Other members are allowed anywhere. Never raises.
    """
    node = decode_texture_payload(candidate)
    if not isinstance(node, dict):
        return False

    textures = node.get("textures")
    if not isinstance(textures, dict):
        return False

    skin = textures.get("SKIN")
    if not isinstance(skin, dict):
        return False

    return isinstance(skin.get("url"), str)
