"""Inspector logic: list the rotated file set and tail it."""

import os

from rotlog.catalog import FileCatalog
from rotlog.errors import IOFailure
from rotlog.tail import tail_many


def _catalog(log_dir: str, filename_format: str) -> FileCatalog | None:
    # Read-only: a missing directory is an empty set, not something to create.
    if not os.path.isdir(log_dir):
        return None
    catalog = FileCatalog(log_dir, filename_format)
    catalog.scan()
    return catalog


def list_log_files(log_dir: str, filename_format: str) -> list[tuple[str, int]]:
    """Return (filename, size in bytes) for each log file, oldest first."""
    catalog = _catalog(log_dir, filename_format)
    if catalog is None:
        return []
    files = []
    for path in catalog.paths(oldest_first=True):
        try:
            size = os.path.getsize(path)
        except OSError as e:
            raise IOFailure(f"Cannot stat {path}: {e}", path) from e
        files.append((os.path.basename(path), size))
    return files


def tail_log_dir(log_dir: str, filename_format: str, n: int) -> list[str]:
    catalog = _catalog(log_dir, filename_format)
    if catalog is None:
        return []
    return tail_many(catalog.paths(oldest_first=True), n)


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
