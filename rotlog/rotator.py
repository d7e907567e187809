"""Size-based rotation with a retention cap on the number of log files."""

import contextlib
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO

from rotlog.catalog import FileCatalog
from rotlog.errors import IOFailure
from rotlog.tail import tail_many

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RotationPolicy:
    path: str
    filename_format: str
    max_size_kb: int
    max_backups: int  # files kept on disk, the active one included


class Rotator:
    """Owns the file catalog and hands out append handles for the active file."""

    def __init__(self, policy: RotationPolicy, time_func=None):
        self._policy = policy
        self._catalog = FileCatalog(policy.path, policy.filename_format, time_func)
        self._catalog.scan()

    @property
    def policy(self) -> RotationPolicy:
        return self._policy

    @property
    def catalog(self) -> FileCatalog:
        return self._catalog

    def _open(self, path: str) -> BinaryIO:
        try:
            return open(path, "ab")
        except OSError as e:
            raise IOFailure(f"Cannot open log file {path}: {e}", path) from e

    def create(self) -> BinaryIO:
        """Create a new newest file and return an append handle to it."""
        log_file = self._catalog.create()
        path = self._catalog.path_of(log_file)
        logger.debug("Created log file %s", path)
        return self._open(path)

    def latest_or_create(self) -> BinaryIO:
        newest = self._catalog.newest()
        if newest is None:
            return self.create()
        # "a" mode recreates the file if someone deleted it under us.
        return self._open(self._catalog.path_of(newest))

    def oversized(self, fh: BinaryIO) -> bool:
        try:
            size = os.fstat(fh.fileno()).st_size
        except (OSError, ValueError) as e:
            name = getattr(fh, "name", None)
            raise IOFailure(f"Cannot stat log file {name}: {e}", name) from e
        return size // 1024 >= self._policy.max_size_kb

    def clean(self) -> list[str]:
        """Enforce the retention cap. Safe to call repeatedly."""
        return self._prune(self._policy.max_backups)

    def _prune(self, max_files: int) -> list[str]:
        deleted = self._catalog.prune(max_files)
        if deleted:
            logger.info("Purged %d log file(s): %s", len(deleted), ", ".join(deleted))
        return deleted

    def rotate(self, fh: BinaryIO) -> BinaryIO:
        """Close *fh*, make room under the cap, and return a handle to a fresh file.

        Pruning runs before the new file exists and leaves one free slot for it,
        so after a rotation at most ``max_backups`` files are on disk.
        """
        with contextlib.suppress(OSError):
            fh.close()
        self._prune(self._policy.max_backups - 1)
        new_fh = self.create()
        logger.info("Rotated to %s", new_fh.name)
        return new_fh

    def files(self) -> list[str]:
        """Paths of all log files, oldest first."""
        return self._catalog.paths(oldest_first=True)

    def tail(self, n: int) -> list[str]:
        return tail_many(self.files(), n)
