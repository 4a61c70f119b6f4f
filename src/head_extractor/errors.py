"""Error kinds raised while reading world files."""

from __future__ import annotations

from pathlib import Path


class HeadExtractorError(Exception):
    """Base class for every error raised by head_extractor."""


class MalformedTag(HeadExtractorError):
    """A tag stream is truncated or internally inconsistent."""


class RegionFrameError(HeadExtractorError):
    """A region file's location table or chunk framing is out of bounds."""


class FileAccessError(HeadExtractorError):
    """An input file or the world directory cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason
