"""
Line-oriented and whole-file text helpers built on transparent file access.
"""

import io
import logging
import os
from typing import IO, Iterable, Iterator, List, Optional, Union

import psutil

from recordstream.config import FileConfig, resolve
from recordstream.exceptions import check_not_none
from recordstream.files.access import PathLike, is_gzip, is_stdio, open_reader, open_writer

logger = logging.getLogger(__name__)

BUFFER_SIZE = 8192


def strip_terminator(line: str) -> str:
    """Remove one trailing ``\\r\\n``, ``\\n`` or ``\\r``."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def iter_lines(reader: IO[str]) -> Iterator[str]:
    """Yield terminator-stripped lines from a text stream."""
    while True:
        line = reader.readline()
        if not line:
            return
        yield strip_terminator(line)


def _check_memory(path: PathLike, config: FileConfig) -> None:
    """
    Log a warning when a file looks too large to hold in memory.

    Only uncompressed regular files are checked; the decompressed size of a
    gzip file is not known up front.
    """
    if is_stdio(path) or is_gzip(path):
        return
    size = os.path.getsize(path)
    available = psutil.virtual_memory().available
    if size > available * config.memory_threshold:
        logger.warning(f"Reading {size} bytes from {path} into memory, "
                       f"only {available} bytes available")


def read_all_lines(path: PathLike,
                   encoding: Optional[str] = None,
                   lines: Optional[List[str]] = None,
                   config: Optional[FileConfig] = None) -> List[str]:
    """
    Read every line of a file, without terminators.

    Args:
        path: File path, ``.gz`` path, or ``-`` for stdin
        encoding: Character encoding (config default if None)
        lines: List to append to (a new list if None)
        config: Charset error policy

    Returns:
        The list the lines were appended to
    """
    if lines is None:
        lines = []
    with open_reader(path, encoding, config) as reader:
        lines.extend(iter_lines(reader))
    return lines


def write_all_lines(path: PathLike,
                    lines: Iterable[str],
                    encoding: Optional[str] = None,
                    config: Optional[FileConfig] = None) -> None:
    """Write each line followed by the platform line separator."""
    check_not_none("lines", lines)
    with open_writer(path, encoding, config) as writer:
        for line in lines:
            writer.write(line)
            writer.write(os.linesep)


def read_all(path: PathLike,
             encoding: Optional[str] = None,
             config: Optional[FileConfig] = None) -> str:
    """Read a whole file as text, line terminators included."""
    config = resolve(config)
    with open_reader(path, encoding, config) as reader:
        _check_memory(path, config)
        chunks = []
        while True:
            chunk = reader.read(BUFFER_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
    return "".join(chunks)


def write_all(path: PathLike,
              text: str,
              encoding: Optional[str] = None,
              config: Optional[FileConfig] = None) -> None:
    """Write ``text`` to a file as-is."""
    check_not_none("text", text)
    with open_writer(path, encoding, config) as writer:
        writer.write(text)


def get_text(source: Union[PathLike, IO],
             include_newlines: bool = False,
             encoding: Optional[str] = None,
             config: Optional[FileConfig] = None) -> str:
    """
    Read the text of a file or an open stream.

    With ``include_newlines`` the content is returned verbatim; otherwise the
    lines are joined with their terminators removed. A binary stream is
    decoded with ``encoding`` and the config's error policy. A stream passed
    in is closed afterwards.
    """
    check_not_none("source", source)
    if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
        config = resolve(config)
        source = io.TextIOWrapper(source, encoding=encoding or config.default_encoding,
                                  errors=config.errors, newline="")
    if hasattr(source, "read"):
        with source:
            if include_newlines:
                return source.read()
            return "".join(iter_lines(source))
    if include_newlines:
        return read_all(source, encoding, config)
    config = resolve(config)
    with open_reader(source, encoding, config) as reader:
        _check_memory(source, config)
        return "".join(iter_lines(reader))


def count_lines(source: Union[PathLike, IO]) -> int:
    """
    Count the lines of a file or an open stream.

    An open stream is read to the end but left open.
    """
    check_not_none("source", source)
    if hasattr(source, "readline"):
        return sum(1 for _ in iter(source.readline, source.read(0)))
    with open_reader(source) as reader:
        return sum(1 for _ in iter_lines(reader))
