"""
Transparent file access.

One set of open functions covers plain files, gzip-compressed files and the
process's standard streams:

- A path whose final component is ``-`` means standard input when reading
  and standard output when writing.
- A path whose name ends in ``.gz`` (any case) is compressed on write and
  decompressed on read. File content is never sniffed.
- Text streams decode and encode with the error policy of a FileConfig.

Usage:
    with open_reader("data.txt.gz") as reader:
        for line in reader:
            ...
"""

import gzip
import io
import logging
import os
import sys
from pathlib import Path
from typing import IO, Any, Optional, Union

from recordstream.config import FileConfig, resolve
from recordstream.exceptions import UnsupportedOperationError, check_not_none

PathLike = Union[str, os.PathLike]

STDIO_SENTINEL = "-"
GZIP_SUFFIX = ".gz"

logger = logging.getLogger(__name__)


def _name(path: PathLike) -> str:
    check_not_none("path", path)
    return Path(path).name


def is_stdio(path: PathLike) -> bool:
    """Whether ``path`` names the standard input/output placeholder."""
    return _name(path) == STDIO_SENTINEL


def is_gzip(path: PathLike) -> bool:
    """Whether ``path`` has the gzip suffix, ignoring case."""
    return _name(path).lower().endswith(GZIP_SUFFIX)


class _StandardStream(io.RawIOBase):
    """
    Raw view of a process standard stream.

    Closing it flushes pending output but leaves the process stream open, so
    callers can close whatever they were handed without special cases.
    """

    def __init__(self, stream: IO[bytes], writable: bool):
        self._stream = stream
        self._writable = writable

    def readable(self) -> bool:
        return not self._writable

    def writable(self) -> bool:
        return self._writable

    def readinto(self, b) -> int:
        read = getattr(self._stream, "read1", self._stream.read)
        data = read(len(b))
        n = len(data)
        b[:n] = data
        return n

    def write(self, b) -> int:
        self._stream.write(b)
        return len(b)

    def flush(self) -> None:
        super().flush()
        if self._writable:
            self._stream.flush()


class _StandardText(io.TextIOBase):
    """
    Non-closing view of a process standard stream that has no byte layer,
    such as an ``io.StringIO`` installed by ``contextlib.redirect_stdout``.
    """

    def __init__(self, stream: IO[str], writable: bool):
        self._stream = stream
        self._writable = writable

    def readable(self) -> bool:
        return not self._writable

    def writable(self) -> bool:
        return self._writable

    def read(self, size: Optional[int] = -1) -> str:
        return self._stream.read(-1 if size is None else size)

    def readline(self, size: Optional[int] = -1) -> str:
        return self._stream.readline(-1 if size is None else size)

    def write(self, s: str) -> int:
        self._stream.write(s)
        return len(s)

    def flush(self) -> None:
        super().flush()
        if self._writable:
            self._stream.flush()


def _byte_layer(stream) -> Optional[IO[bytes]]:
    """The binary stream under a standard stream, or None if it is text only."""
    if hasattr(stream, "buffer"):
        return stream.buffer
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return stream
    return None


def _standard_bytes(stream, name: str) -> IO[bytes]:
    layer = _byte_layer(stream)
    if layer is None:
        raise UnsupportedOperationError(f"sys.{name} is a text stream without a byte layer")
    return layer


def open_input_stream(path: PathLike) -> IO[bytes]:
    """Open ``path`` for binary reading."""
    if is_stdio(path):
        logger.debug("Reading from stdin")
        return io.BufferedReader(_StandardStream(_standard_bytes(sys.stdin, "stdin"), writable=False))
    if is_gzip(path):
        logger.debug(f"Opening {path} for reading (gzip)")
        return gzip.open(path, "rb")
    logger.debug(f"Opening {path} for reading")
    return open(path, "rb")


def open_output_stream(path: PathLike) -> IO[bytes]:
    """Open ``path`` for binary writing, truncating any existing file."""
    if is_stdio(path):
        logger.debug("Writing to stdout")
        # Text already queued on sys.stdout must come out first
        sys.stdout.flush()
        return io.BufferedWriter(_StandardStream(_standard_bytes(sys.stdout, "stdout"), writable=True))
    if is_gzip(path):
        logger.debug(f"Opening {path} for writing (gzip)")
        return gzip.open(path, "wb")
    logger.debug(f"Opening {path} for writing")
    return open(path, "wb")


def _wrap_text(stream: IO[bytes], encoding: str, errors: str) -> io.TextIOWrapper:
    try:
        return io.TextIOWrapper(stream, encoding=encoding, errors=errors, newline="")
    except BaseException:
        stream.close()
        raise


def open_reader(path: PathLike,
                encoding: Optional[str] = None,
                config: Optional[FileConfig] = None) -> IO[str]:
    """
    Open ``path`` for text reading.

    Line endings are not translated: ``readline()`` splits on ``\\n``,
    ``\\r`` and ``\\r\\n`` and keeps the terminator.

    Args:
        path: File path, ``.gz`` path, or ``-`` for stdin
        encoding: Character encoding (config default if None)
        config: Charset error policy (default config if None)

    Returns:
        Text stream; closing it closes every layer beneath it
    """
    config = resolve(config)
    encoding = encoding or config.default_encoding
    if is_stdio(path) and _byte_layer(sys.stdin) is None:
        logger.debug("Reading from stdin (text only)")
        return _StandardText(sys.stdin, writable=False)
    return _wrap_text(open_input_stream(path), encoding, config.errors)


def open_writer(path: PathLike,
                encoding: Optional[str] = None,
                config: Optional[FileConfig] = None) -> IO[str]:
    """
    Open ``path`` for text writing.

    Text is written as given; no newline translation is applied. Encoding
    errors follow the two actions of ``config``.
    """
    config = resolve(config)
    encoding = encoding or config.default_encoding
    if is_stdio(path) and _byte_layer(sys.stdout) is None:
        logger.debug("Writing to stdout (text only)")
        return _StandardText(sys.stdout, writable=True)
    return _wrap_text(open_output_stream(path), encoding, config.errors)


def file_name(path: Optional[PathLike], stream: Any = None) -> str:
    """
    Display name for a path.

    For the standard stream placeholder (or no path) the name says which
    standard stream ``stream`` is: ``stdin``, ``stdout``, or ``file`` when
    that cannot be told.
    """
    if path is None or is_stdio(path):
        if stream is not None:
            if getattr(stream, "readable", lambda: False)():
                return "stdin"
            if getattr(stream, "writable", lambda: False)():
                return "stdout"
        return "file"
    return _name(path)
