"""Tail across several files that together form one log stream."""

from rotlog.scanner import tail_file


def tail_many(paths: list[str], n: int) -> list[str]:
    """Return the last *n* lines of the stream made of *paths* (oldest file first).

    Files are read newest to oldest, each asked only for the lines still
    missing. Fewer than *n* lines in total is not an error. Any IOFailure
    aborts the whole call.
    """
    if not paths or n <= 0:
        return []

    records: list[str] = []
    left = n
    for path in reversed(paths):
        lines = tail_file(path, left)
        records = lines + records
        if len(lines) >= left:
            break
        left -= len(lines)
    return records
