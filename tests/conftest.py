"""Shared builders for NBT streams, region files and head strings."""

import base64
import gzip
import io
import json
import struct
import zlib

import nbtlib
import pytest


SKIN_URL = "http://textures.minecraft.net/texture/4b3a1f0e9d"


def encode_head(url: str = SKIN_URL, **extra) -> str:
    payload = {"textures": {"SKIN": {"url": url}}, **extra}
    return base64.b64encode(json.dumps(payload).encode()).decode()


def nbt_bytes(root: dict) -> bytes:
    """Encode *root* as an unnamed root compound with nbtlib."""
    buf = io.BytesIO()
    nbtlib.File(root, gzipped=False, byteorder="big").write(buf, byteorder="big")
    return buf.getvalue()


def skull_chunk(*heads: str) -> bytes:
    """A chunk whose block entities are player heads carrying *heads*."""
    return nbt_bytes({
        "DataVersion": nbtlib.Int(3465),
        "xPos": nbtlib.Int(0),
        "zPos": nbtlib.Int(0),
        "block_entities": nbtlib.List[nbtlib.Compound]([
            {
                "id": nbtlib.String("minecraft:skull"),
                "x": nbtlib.Int(i),
                "y": nbtlib.Int(64),
                "z": nbtlib.Int(0),
                "SkullOwner": nbtlib.Compound({
                    "Id": nbtlib.IntArray([1, 2, 3, 4]),
                    "Properties": nbtlib.Compound({
                        "textures": nbtlib.List[nbtlib.Compound]([
                            {"Value": nbtlib.String(head)},
                        ]),
                    }),
                }),
            }
            for i, head in enumerate(heads)
        ]),
    })


def compress(data: bytes, compression: int) -> bytes:
    if compression == 1:
        return gzip.compress(data)
    if compression == 2:
        return zlib.compress(data)
    return data


def build_region(chunks: dict) -> bytes:
    """Assemble a region file from ``{slot: (compression, payload)}``.

    Payloads are written as given; chunks are laid out after the 8 KiB
    header in slot order.
    """
    header = bytearray(8192)
    body = bytearray()
    sector = 2
    for slot, (compression, payload) in sorted(chunks.items()):
        data = struct.pack(">iB", len(payload) + 1, compression) + payload
        sectors = -(-len(data) // 4096)
        struct.pack_into(">I", header, slot * 4, sector << 8 | sectors)
        body += data + bytes(sectors * 4096 - len(data))
        sector += sectors
    return bytes(header + body)


@pytest.fixture
def make_head():
    return encode_head


@pytest.fixture
def make_nbt():
    return nbt_bytes


@pytest.fixture
def make_skull_chunk():
    return skull_chunk


@pytest.fixture
def make_region():
    def _make(chunks: dict, compression: int = 1) -> bytes:
        return build_region({
            slot: (compression, compress(data, compression))
            for slot, data in chunks.items()
        })
    return _make


@pytest.fixture
def world(tmp_path):
    """A small world save with heads in every kind of file.

    Layout::

        world/
          level.dat                 gzip, one head
          region/r.0.0.mca          two chunks, two heads
          region/r.0.1.mca          empty (zero bytes)
          region/notes.txt          ignored
          entities/r.0.0.mca        one chunk, one head (zlib)
          playerdata/<uuid>.dat     gzip, one head plus a duplicate
          playerdata/<uuid>.dat_old ignored
    """
    root = tmp_path / "world"
    (root / "region").mkdir(parents=True)
    (root / "entities").mkdir()
    (root / "playerdata").mkdir()

    region = build_region({
        0: (2, zlib.compress(skull_chunk(encode_head("http://example/a")))),
        5: (1, gzip.compress(skull_chunk(encode_head("http://example/b")))),
    })
    (root / "region" / "r.0.0.mca").write_bytes(region)
    (root / "region" / "r.0.1.mca").write_bytes(b"")
    (root / "region" / "notes.txt").write_text("not a region")

    entities = build_region({
        31: (2, zlib.compress(nbt_bytes({
            "Entities": nbtlib.List[nbtlib.Compound]([
                {
                    "id": nbtlib.String("minecraft:armor_stand"),
                    "CustomName": nbtlib.String("plain text"),
                    "ArmorItems": nbtlib.List[nbtlib.Compound]([
                        {"tag": nbtlib.Compound({"SkullOwner": nbtlib.Compound({
                            "Properties": nbtlib.Compound({"textures": nbtlib.List[nbtlib.Compound]([
                                {"Value": nbtlib.String(encode_head("http://example/c"))},
                            ])}),
                        })})},
                    ]),
                },
            ]),
        }))),
    })
    (root / "entities" / "r.0.0.mca").write_bytes(entities)

    player = nbt_bytes({
        "Inventory": nbtlib.List[nbtlib.Compound]([
            {"id": nbtlib.String("minecraft:player_head"), "Count": nbtlib.Byte(1),
             "tag": nbtlib.Compound({"SkullOwner": nbtlib.Compound({"Properties": nbtlib.Compound({
                 "textures": nbtlib.List[nbtlib.Compound]([
                     {"Value": nbtlib.String(encode_head("http://example/d"))},
                 ]),
             })})})},
            {"id": nbtlib.String("minecraft:player_head"), "Count": nbtlib.Byte(1),
             "tag": nbtlib.Compound({"SkullOwner": nbtlib.Compound({"Properties": nbtlib.Compound({
                 "textures": nbtlib.List[nbtlib.Compound]([
                     {"Value": nbtlib.String(encode_head("http://example/a"))},
                 ]),
             })})})},
        ]),
    })
    uuid = "0f3c7a52-95d1-4b8e-9f62-1d2e3c4b5a69"
    (root / "playerdata" / f"{uuid}.dat").write_bytes(gzip.compress(player))
    (root / "playerdata" / f"{uuid}.dat_old").write_bytes(gzip.compress(player))

    level = nbt_bytes({
        "Data": nbtlib.Compound({
            "LevelName": nbtlib.String("Heads"),
            "Player": nbtlib.Compound({
                "EnderItems": nbtlib.List[nbtlib.String]([encode_head("http://example/e")]),
            }),
        }),
    })
    (root / "level.dat").write_bytes(gzip.compress(level))
    return root


@pytest.fixture
def world_heads():
    return {encode_head(f"http://example/{name}") for name in "abcde"}
