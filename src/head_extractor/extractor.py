"""
Module: head_extractor.extractor

Purpose:
    Fan extraction out over the files of a world, one task per file, and
    collect every validated head into a single deduplicated set.

Key Classes:
    - HeadSet: Thread-safe set of validated heads
    - HeadExtractor: Runs the per-file tasks on a thread pool
    - ExtractionReport: Heads found plus the files that failed

Key Functions:
    - extract_heads(): Shortcut returning just the set of heads

Failures are isolated per file: a file that cannot be read or decoded is
logged and recorded, and whatever it yielded before failing is kept.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from .config import ExtractorConfig
from .decoder import decode_tag, read_data_file
from .errors import HeadExtractorError
from .harvester import iter_strings
from .model import Tag
from .region import iter_region_file
from .validator import is_valid_head
from .world import WorldFiles, find_world_files

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared result set
# ---------------------------------------------------------------------------

class HeadSet:
    """Set of head strings with atomic insert-if-absent."""

    def __init__(self, heads: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._heads: set[str] = set(heads)

    def add(self, head: str) -> bool:
        """Insert *head*; return True if it was not already present."""
        with self._lock:
            if head in self._heads:
                return False
            self._heads.add(head)
            return True

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._heads)

    def __len__(self) -> int:
        with self._lock:
            return len(self._heads)

    def __contains__(self, head: object) -> bool:
        with self._lock:
            return head in self._heads


# ---------------------------------------------------------------------------
# Per-file work
# ---------------------------------------------------------------------------

def collect_heads(root: Tag | None, heads: HeadSet) -> int:
    """Validate every string under *root* and add survivors to *heads*.

    Returns the number of valid candidates seen, duplicates included.
    """
    found = 0
    for candidate in iter_strings(root):
        if is_valid_head(candidate):
            heads.add(candidate)
            found += 1
    return found


def process_region_file(path: Path, heads: HeadSet) -> int:
    """Harvest every chunk of a region file, in slot order."""
    found = 0
    for chunk in iter_region_file(path):
        found += collect_heads(decode_tag(chunk), heads)
    return found


def process_data_file(path: Path, heads: HeadSet) -> int:
    """Harvest a player-data or level file."""
    return collect_heads(read_data_file(path), heads)


@dataclass(frozen=True)
class FileFailure:
    path: Path
    error: Exception

    def __str__(self) -> str:
        return f"{self.path}: {type(self.error).__name__}: {self.error}"


def _run_task(
    process: Callable[[Path, HeadSet], int],
    path: Path,
    heads: HeadSet,
) -> FileFailure | None:
    try:
        found = process(path, heads)
    except HeadExtractorError as exc:
        logger.warning("Unable to fully process %s: %s", path, exc)
        return FileFailure(path, exc)
    except Exception as exc:
        logger.exception("Unexpected error while processing %s", path)
        return FileFailure(path, exc)
    logger.debug("%s: %d valid heads", path, found)
    return None


# ---------------------------------------------------------------------------
# Coordinator
# ---------------------------------------------------------------------------

@dataclass
class ExtractionReport:
    """
    Result of an extraction run.

    Attributes:
        heads: Every validated head, deduplicated.
        failures: Files whose processing stopped early, sorted by path.
        files_processed: Number of files a task was run for.
    """
    heads: frozenset[str]
    failures: list[FileFailure] = field(default_factory=list)
    files_processed: int = 0


class HeadExtractor:
    """
    Extracts custom head textures from a world save.

    Usage:
        extractor = HeadExtractor(ExtractorConfig(workers=4))
        report = extractor.run(Path("saves/MyWorld"))
        for head in report.heads:
            print(head)
    """

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or ExtractorConfig()

    def run(self, world: WorldFiles | Path | str) -> ExtractionReport:
        """Process every file of *world* and wait for all of them.

        *world* is either an already enumerated WorldFiles or a world
        directory, which is enumerated with find_world_files().

        Raises:
            FileAccessError: *world* is a path that is not a directory.
        """
        files = world if isinstance(world, WorldFiles) else find_world_files(world, self.config)
        jobs: list[tuple[Callable[[Path, HeadSet], int], Path]] = [
            (process_region_file, path) for path in files.region_files
        ]
        jobs.extend((process_data_file, path) for path in files.data_files)

        heads = HeadSet()
        failures: list[FileFailure] = []
        workers = self.config.resolved_workers()
        logger.info("Processing %d files with %d workers", len(jobs), workers)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="head-extractor") as executor:
            futures = [executor.submit(_run_task, process, path, heads) for process, path in jobs]
            for future in as_completed(futures):
                failure = future.result()
                if failure is not None:
                    failures.append(failure)

        failures.sort(key=lambda f: f.path)
        logger.info(
            "Found %d unique heads in %d files (%d failed)",
            len(heads), len(jobs), len(failures),
        )
        return ExtractionReport(
            heads=heads.snapshot(),
            failures=failures,
            files_processed=len(jobs),
        )


def extract_heads(world: WorldFiles | Path | str, config: ExtractorConfig | None = None) -> set[str]:
    """Return the set of validated heads found in *world*."""
    return set(HeadExtractor(config).run(world).heads)
