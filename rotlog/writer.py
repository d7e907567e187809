"""Synchronized writer: one owned handle, rotation checked under the write lock."""

import sys
import threading

from rotlog.errors import IOFailure, UnsupportedOperation
from rotlog.levels import Output
from rotlog.rotator import Rotator
from rotlog.tail import tail_many

LF = b"\n"
TERMINATORS = (b"\n", b"\r")


class LogWriter:
    def __init__(self, output: Output, rotator: Rotator | None = None, stream=None):
        if output is Output.FILE and rotator is None:
            raise ValueError("FILE output needs a rotator")
        self._output = output
        self._rotator = rotator
        self._stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()
        self._file = None
        self._closed = False
        if output is Output.FILE:
            self._file = rotator.latest_or_create()

    @property
    def output(self) -> Output:
        return self._output

    @property
    def rotator(self) -> Rotator | None:
        return self._rotator

    def _rotate_if_needed(self):
        # A failed rotation leaves no handle behind; pick the stream back up.
        if self._file is None:
            self._file = self._rotator.latest_or_create()
        if not self._rotator.oversized(self._file):
            return
        old, self._file = self._file, None
        self._file = self._rotator.rotate(old)

    def write(self, data: bytes | str) -> int:
        """Append one record, adding a trailing newline if it has none.

        Returns the number of bytes written.
        """
        if isinstance(data, str):
            data = data.encode("utf-8", errors="replace")
        if not data.endswith(TERMINATORS):
            data += LF

        with self._lock:
            if self._closed:
                raise IOFailure("Writer is closed")

            if self._output is Output.STDOUT:
                self._stream.write(data.decode("utf-8", errors="replace"))
                self._stream.flush()
                return len(data)

            self._rotate_if_needed()
            try:
                written = self._file.write(data)
                self._file.flush()
            except OSError as e:
                raise IOFailure(f"Cannot write to {self._file.name}: {e}",
                                self._file.name) from e
            return written

    def tail(self, n: int) -> list[str]:
        """Last *n* lines across the rotated file set, oldest first."""
        if self._output is not Output.FILE:
            raise UnsupportedOperation("tailing unsupported")
        with self._lock:
            paths = self._rotator.files()
        while True:
            try:
                return tail_many(paths, n)
            except IOFailure as e:
                if not isinstance(e.__cause__, FileNotFoundError):
                    raise
                # Pruned by a rotation after the snapshot; read the new set.
                with self._lock:
                    paths = self._rotator.files()
                if e.path in paths:
                    raise

    def close(self):
        with self._lock:
            self._closed = True
            if self._file is not None and not self._file.closed:
                self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
