"""Locate the files of a world save that can carry head textures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import ExtractorConfig
from .errors import FileAccessError


@dataclass(frozen=True)
class WorldFiles:
    """Input files of one world, grouped by how they are decoded."""

    region_files: tuple[Path, ...] = field(default_factory=tuple)
    data_files: tuple[Path, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.region_files) + len(self.data_files)


def _list_files(directory: Path, suffix: str) -> list[Path]:
    if not directory.is_dir():
        return []
    return [p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix)]


def find_world_files(world_path: Path | str, config: ExtractorConfig | None = None) -> WorldFiles:
    """Enumerate region, entity, player-data and level files of a world.

    - Region files: ``*mca`` directly inside each of ``config.region_dirs``.
    - Data files: ``*dat`` directly inside ``config.player_data_dir`` plus
      ``config.level_file``.

    Missing subdirectories are skipped.

    Raises:
        FileAccessError: *world_path* is not a directory.
    """
    config = config or ExtractorConfig()
    world = Path(world_path)
    if not world.is_dir():
        raise FileAccessError(world, "not a world directory")

    region_files: list[Path] = []
    for name in config.region_dirs:
        region_files.extend(_list_files(world / name, "mca"))

    data_files = _list_files(world / config.player_data_dir, "dat")
    level = world / config.level_file
    if level.is_file() and level.name.endswith("dat"):
        data_files.append(level)

    return WorldFiles(
        region_files=tuple(sorted(region_files)),
        data_files=tuple(sorted(data_files)),
    )
