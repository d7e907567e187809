"""Backward line scanner: the last N lines of a file without reading all of it."""

import os
from typing import BinaryIO, Iterator

from rotlog.errors import IOFailure

LF = 0x0A  # '\n'
CR = 0x0D  # '\r'

DEFAULT_CHUNK_SIZE = 4096


def _read_backward(fh: BinaryIO, chunk_size: int) -> Iterator[int]:
    """Yield the bytes of *fh* from the last one to the first."""
    fh.seek(0, os.SEEK_END)
    position = fh.tell()
    while position > 0:
        size = min(chunk_size, position)
        position -= size
        fh.seek(position)
        chunk = fh.read(size)
        yield from reversed(chunk)


def _decode(reversed_line: bytearray) -> str:
    return bytes(reversed(reversed_line)).decode("utf-8", errors="replace")


def tail(fh: BinaryIO, n: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    """Return the last *n* lines of an open binary file, oldest first.

    LF and CR both end a line; CR immediately followed by LF counts once. The
    writer terminates every record, so the first terminator found at the end of
    the file is the trailing newline and is not a line boundary. An empty line
    comes back as "", including one at the very start of the file. Whatever sits
    before the first terminator of the file is returned as the oldest line when
    fewer than *n* lines were found.
    """
    if n <= 0:
        return []

    lines: list[str] = []
    line = bytearray()
    first = True
    after_lf = False
    at_terminator = False
    try:
        for byte in _read_backward(fh, chunk_size):
            if byte == CR and after_lf:
                after_lf = False
                continue
            after_lf = byte == LF

            if byte == LF or byte == CR:
                at_terminator = True
                if first:
                    first = False
                    continue
                lines.append(_decode(line))
                if len(lines) == n:
                    break
                line.clear()
                continue

            first = False
            at_terminator = False
            line.append(byte)
        else:
            # a terminator at offset 0 closes an empty first record
            if line or at_terminator:
                lines.append(_decode(line))
    except OSError as e:
        name = getattr(fh, "name", None)
        raise IOFailure(f"Cannot read {name}: {e}", name) from e

    lines.reverse()
    return lines


def tail_file(path: str, n: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    """Open *path* read-only and return its last *n* lines."""
    if n <= 0:
        return []
    try:
        with open(path, "rb") as fh:
            return tail(fh, n, chunk_size)
    except OSError as e:
        raise IOFailure(f"Cannot open {path}: {e}", path) from e
