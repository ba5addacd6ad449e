"""Byte destinations for encoded results."""

from __future__ import annotations

import os
import sys
from typing import BinaryIO, Callable

STDOUT_PATH = "-"


class FileWriter:
    """Writes to a local file, or to standard output for the path ``-``.

    An existing file is opened without truncation.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._is_stdout = path == STDOUT_PATH
        if self._is_stdout:
            self._file: BinaryIO = sys.stdout.buffer
        else:
            fd = os.open(path, os.O_CREAT | os.O_WRONLY, 0o644)
            self._file = os.fdopen(fd, "wb")

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        written = self._file.write(data)
        return len(data) if written is None else written

    def close(self) -> None:
        """Flush the data to disk and close the file; standard output stays open."""
        self._file.flush()
        if self._is_stdout:
            return
        try:
            os.fsync(self._file.fileno())
        except OSError:
            pass
        self._file.close()

    def __enter__(self) -> "FileWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_WRITERS: dict[str, Callable[[str], FileWriter]] = {
    "file": FileWriter,
}


def is_valid_schema(schema: str) -> bool:
    """Whether an output with URL scheme ``schema`` can be written."""
    return schema in _WRITERS


def new_writer(schema: str, path: str) -> FileWriter:
    """Open a writer for ``path`` using the writer registered for ``schema``."""
    factory = _WRITERS.get(schema)
    if factory is None:
        raise ValueError(f"unsupported output schema: {schema}")
    return factory(path)