"""
Record streams over text files, one record per line.
"""

import os
from typing import Any, Optional

from recordstream.config import FileConfig
from recordstream.exceptions import ExhaustionError, check_not_none
from recordstream.files.access import PathLike, file_name, open_reader, open_writer
from recordstream.files.text import strip_terminator
from recordstream.streams.base import Closeable, Flushable, SeekableSource, Sink


class LineSource(SeekableSource[str, Any], Closeable):
    """
    Read the lines of a file (plain, gzip, or ``-`` for stdin) as records.

    The position is the text stream's opaque ``tell()`` cookie for the next
    unread line. Standard input cannot be positioned; asking raises
    ``io.UnsupportedOperation``.
    """

    def __init__(self, path: PathLike,
                 encoding: Optional[str] = None,
                 config: Optional[FileConfig] = None):
        check_not_none("path", path)
        self.path = path
        self._reader = open_reader(path, encoding, config)
        self._next: Optional[str] = None
        self._next_position: Any = None

    def has_next(self) -> bool:
        if self._next is None:
            position = self._reader.tell() if self._reader.seekable() else None
            line = self._reader.readline()
            if not line:
                return False
            self._next = strip_terminator(line)
            self._next_position = position
        return True

    def read(self) -> str:
        if not self.has_next():
            raise ExhaustionError(f"No more lines in {file_name(self.path, self._reader)}")
        line, self._next = self._next, None
        return line

    def position(self) -> Any:
        if self._next is not None and self._next_position is not None:
            return self._next_position
        return self._reader.tell()

    def seek(self, position: Any) -> None:
        self._reader.seek(position)
        self._next = None

    def close(self) -> None:
        self._reader.close()

    def __repr__(self) -> str:
        return f"LineSource({str(self.path)!r})"


class LineSink(Sink[str], Flushable, Closeable):
    """Write each record as one line, followed by the platform line separator."""

    def __init__(self, path: PathLike,
                 encoding: Optional[str] = None,
                 config: Optional[FileConfig] = None):
        check_not_none("path", path)
        self.path = path
        self._writer = open_writer(path, encoding, config)

    def write(self, record: str) -> None:
        self._writer.write(record)
        self._writer.write(os.linesep)

    def flush(self) -> None:
        self._writer.flush()

    def close(self) -> None:
        self._writer.close()

    def __repr__(self) -> str:
        return f"LineSink({str(self.path)!r})"
