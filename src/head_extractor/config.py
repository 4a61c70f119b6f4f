"""Configuration for a head extraction run."""

from __future__ import annotations

import os
from dataclasses import dataclass


def available_cpus() -> int:
    """CPUs this process may run on, honouring affinity where the OS has it."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


@dataclass(frozen=True)
class ExtractorConfig:
    """
    Settings for a head extraction run.

    Attributes:
        workers: Size of the worker pool. ``None`` uses the number of
            available CPUs minus one, with a minimum of one.
        region_dirs: World subdirectories holding ``.mca`` region files.
        player_data_dir: World subdirectory holding player ``.dat`` files.
        level_file: Name of the world's level file.
    """
    workers: int | None = None
    region_dirs: tuple[str, ...] = ("entities", "region")
    player_data_dir: str = "playerdata"
    level_file: str = "level.dat"

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    def resolved_workers(self) -> int:
        if self.workers is not None:
            return self.workers
        return max(1, available_cpus() - 1)
