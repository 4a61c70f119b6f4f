"""Head Extractor — find custom player-head textures in Minecraft worlds."""

from .config import ExtractorConfig
from .decoder import decode_tag, read_data_file, read_tag
from .errors import FileAccessError, HeadExtractorError, MalformedTag, RegionFrameError
from .extractor import ExtractionReport, FileFailure, HeadExtractor, HeadSet, extract_heads
from .harvester import iter_strings
from .model import Compound, ListTag, OtherTag, StringTag, Tag, TagType
from .region import RegionEntry, iter_chunks, iter_region_file, read_locations
from .validator import is_valid_head
from .world import WorldFiles, find_world_files

__all__ = [
    "extract_heads",
    "HeadExtractor",
    "ExtractionReport",
    "FileFailure",
    "HeadSet",
    "ExtractorConfig",
    "WorldFiles",
    "find_world_files",
    "decode_tag",
    "read_tag",
    "read_data_file",
    "iter_chunks",
    "iter_region_file",
    "read_locations",
    "RegionEntry",
    "iter_strings",
    "is_valid_head",
    "Tag",
    "TagType",
    "Compound",
    "ListTag",
    "StringTag",
    "OtherTag",
    "HeadExtractorError",
    "MalformedTag",
    "RegionFrameError",
    "FileAccessError",
]
