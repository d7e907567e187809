"""File set catalog: the ordered view of timestamp-named log files in a directory.

The file name is the index. A directory entry belongs to the set only when its
name parses with the configured strftime pattern and renders back to exactly
the same name, so unrelated files in the directory are ignored.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone

from rotlog.errors import IOFailure


def render_name(timestamp: datetime, fmt: str) -> str:
    return timestamp.strftime(fmt)


def parse_name(name: str, fmt: str) -> datetime | None:
    """Return the timestamp encoded in *name*, or None if it isn't a log file name."""
    try:
        ts = datetime.strptime(name, fmt)
    except ValueError:
        return None
    if ts.strftime(fmt) != name:
        return None
    return ts


@dataclass(frozen=True)
class LogFile:
    timestamp: datetime

    def name(self, fmt: str) -> str:
        return render_name(self.timestamp, fmt)

    def path(self, directory: str, fmt: str) -> str:
        return os.path.join(directory, self.name(fmt))


class FileCatalog:
    """Log files of one directory, kept sorted newest first."""

    def __init__(self, directory: str, filename_format: str, time_func=None):
        self._directory = directory
        self._format = filename_format
        self._time_func = time_func or (lambda: datetime.now(timezone.utc))
        self._files: list[LogFile] = []

    @property
    def directory(self) -> str:
        return self._directory

    @property
    def filename_format(self) -> str:
        return self._format

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self):
        return iter(list(self._files))

    def scan(self) -> None:
        """Load the set from disk, creating the directory if it doesn't exist."""
        try:
            os.makedirs(self._directory, exist_ok=True)
            files = []
            with os.scandir(self._directory) as it:
                for entry in it:
                    if entry.is_dir():
                        continue
                    ts = parse_name(entry.name, self._format)
                    if ts is not None:
                        files.append(LogFile(ts))
        except OSError as e:
            raise IOFailure(f"Cannot scan log directory {self._directory}: {e}",
                            self._directory) from e
        files.sort(key=lambda f: f.timestamp, reverse=True)
        self._files = files

    def newest(self) -> LogFile | None:
        return self._files[0] if self._files else None

    def path_of(self, log_file: LogFile) -> str:
        return log_file.path(self._directory, self._format)

    def paths(self, oldest_first: bool = True) -> list[str]:
        files = reversed(self._files) if oldest_first else self._files
        return [self.path_of(f) for f in files]

    def create(self) -> LogFile:
        """Create an empty file stamped "now" and make it the newest entry."""
        # Round-trip through the format so the in-memory timestamp matches
        # what a later scan() would read back from the name.
        name = render_name(self._time_func(), self._format)
        ts = parse_name(name, self._format)
        if ts is None:
            raise IOFailure(
                f"File name {name!r} does not parse back with format {self._format!r}"
            )

        newest = self.newest()
        if newest is not None and ts <= newest.timestamp:
            raise IOFailure(
                f"File name format {self._format!r} cannot tell {name!r} apart "
                f"from the newest file {newest.name(self._format)!r}",
                os.path.join(self._directory, name),
            )

        log_file = LogFile(ts)
        path = self.path_of(log_file)
        try:
            with open(path, "xb"):
                pass
        except OSError as e:
            raise IOFailure(f"Cannot create log file {path}: {e}", path) from e

        self._files.insert(0, log_file)
        return log_file

    def prune(self, max_files: int) -> list[str]:
        """Delete the oldest files until at most *max_files* remain.

        Returns the deleted file names, oldest first. A file is dropped from the
        set only after it is gone from disk.
        """
        deleted = []
        while len(self._files) > max(max_files, 0):
            oldest = self._files[-1]
            path = self.path_of(oldest)
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                raise IOFailure(f"Cannot delete log file {path}: {e}", path) from e
            self._files.pop()
            deleted.append(oldest.name(self._format))
        return deleted
