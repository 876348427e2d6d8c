"""Library scanning: finding files to index and remembering what was already indexed."""

from __future__ import annotations

import enum
import json
import logging
import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_PROGRESS_INTERVAL = 20


@dataclass(frozen=True)
class ScanEvent:
    """Something the scanner reports about its progress."""


@dataclass(frozen=True)
class Cleaning(ScanEvent):
    """Records of deleted or moved files are being removed."""


@dataclass(frozen=True)
class DiscoverProgress(ScanEvent):
    """Number of files found so far that need scanning."""

    discovered: int


@dataclass(frozen=True)
class ScanProgress(ScanEvent):
    """Number of files scanned out of those discovered."""

    current: int
    total: int


@dataclass(frozen=True)
class ScanCompleteWatching(ScanEvent):
    """The scan finished and the library is being watched for changes."""


@dataclass(frozen=True)
class ScanCompleteIdle(ScanEvent):
    """The scan finished and the scanner is idle."""


class ScanState(enum.Enum):
    """The phase the scanner is in."""

    IDLE = enum.auto()
    CLEANUP = enum.auto()
    DISCOVERING = enum.auto()
    SCANNING = enum.auto()


def _extension(path: Path) -> str | None:
    """The text after the last dot of the file name, or None if there is none."""
    name = path.name
    if name == "..":
        return None
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem:
        return None
    return extension


def file_is_scannable_with_provider(path: os.PathLike[str] | str, extensions: Sequence[str]) -> bool:
    """Whether the file's extension is one of ``extensions`` (case-sensitive)."""
    extension = _extension(Path(path))
    return extension is not None and extension in extensions


def _modified_secs(path: Path) -> int:
    modified = os.stat(path).st_mtime_ns
    if modified < 0:
        raise ValueError(f"modification time of {path} is before the epoch")
    return modified // 1_000_000_000


def _parse_entries(raw: object) -> dict[Path, int] | None:
    if not isinstance(raw, Mapping):
        return None
    entries: dict[Path, int] = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        entries[Path(key)] = value
    return entries


@dataclass
class ScanRecord:
    """Modification times, in whole seconds, of files as they were when last scanned."""

    entries: dict[Path, int] = field(default_factory=dict)

    @classmethod
    def load(cls, path: os.PathLike[str] | str) -> ScanRecord:
        """Read a record from a JSON file; a missing or unreadable record is empty.

        Raises ``OSError`` if the file exists but cannot be opened.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        with path.open("r", encoding="utf-8") as file:
            try:
                raw = json.load(file)
            except (json.JSONDecodeError, UnicodeDecodeError) as error:
                raw = error
        entries = None if isinstance(raw, Exception) else _parse_entries(raw)
        if entries is None:
            logger.error("could not read scan record: %s", raw)
            logger.error("scanning will be slow until the scan record is rebuilt")
            return cls()
        return cls(entries)

    def save(self, path: os.PathLike[str] | str) -> None:
        """Write the record as JSON, logging rather than raising if the write fails."""
        path = Path(path)
        data = json.dumps({str(key): value for key, value in self.entries.items()})
        with path.open("w", encoding="utf-8") as file:
            try:
                file.write(data)
            except OSError as error:
                logger.error("Could not write scan record: %s", error)
                logger.error("Scan record will not be saved, this may cause rescans on restart")
                return
        logger.info("Scan record written to %s", path)

    def file_is_scannable(
        self, path: os.PathLike[str] | str, extension_table: Iterable[Sequence[str]]
    ) -> bool:
        """Whether a provider handles the file and it changed since it was last recorded.

        A file that needs scanning is recorded with its current modification time.
        """
        path = Path(path)
        try:
            timestamp = _modified_secs(path)
        except OSError:
            return False

        for extensions in extension_table:
            if not file_is_scannable_with_provider(path, extensions):
                continue
            if self.entries.get(path) == timestamp:
                return False
            self.entries[path] = timestamp
            return True

        return False

    def stale_paths(self) -> list[Path]:
        """Recorded paths that no longer exist."""
        return [path for path in self.entries if not path.exists()]

    def forget(self, path: os.PathLike[str] | str) -> None:
        """Drop a path from the record, if it is there."""
        self.entries.pop(Path(path), None)


class FileDiscovery:
    """Walks directory trees and collects the files that need scanning.

    Iterating ``run()`` performs the walk, yielding a ``DiscoverProgress`` event every
    twenty files found. Afterwards ``to_process`` holds the files found.
    """

    def __init__(
        self,
        roots: Iterable[os.PathLike[str] | str],
        extension_table: Iterable[Sequence[str]],
        record: ScanRecord,
    ) -> None:
        self.roots = [Path(root) for root in roots]
        self.extension_table = [tuple(extensions) for extensions in extension_table]
        self.record = record
        self.visited: set[Path] = set()
        self.to_process: list[Path] = []
        self.discovered_total = 0

    def run(self) -> Iterator[ScanEvent]:
        """Walk every root; raises ``OSError`` if a directory cannot be read."""
        self.visited = set()
        self.to_process = []
        self.discovered_total = 0
        pending = list(self.roots)

        while pending:
            directory = pending.pop()
            if directory in self.visited:
                continue

            # Resolving every entry keeps symlink loops from being walked twice.
            with os.scandir(directory) as entries:
                children = [Path(entry.path).resolve(strict=True) for entry in entries]

            for child in children:
                if child.is_dir():
                    pending.append(child)
                elif self.record.file_is_scannable(child, self.extension_table):
                    self.to_process.append(child)
                    self.discovered_total += 1
                    if self.discovered_total % _PROGRESS_INTERVAL == 0:
                        yield DiscoverProgress(self.discovered_total)

            self.visited.add(directory)