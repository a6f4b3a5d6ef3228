"""
Directory listing and temporary file helpers.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from recordstream.exceptions import InvalidArgumentError, check_not_none
from recordstream.files.access import PathLike

logger = logging.getLogger(__name__)


def get_file_list(path: PathLike,
                  suffix: str,
                  include_hidden: bool = False,
                  recursive: bool = False) -> List[str]:
    """
    List the entries of a directory whose names end with ``suffix``.

    Names are matched case-insensitively. Entries starting with a dot are
    skipped unless ``include_hidden`` is set. With ``recursive``, matches
    inside subdirectories are included as ``subdir/name`` paths relative to
    ``path``.

    Raises:
        InvalidArgumentError: If ``path`` is not a readable directory
    """
    check_not_none("path", path)
    check_not_none("suffix", suffix)
    directory = Path(path)

    if not directory.exists():
        raise InvalidArgumentError(f"path does not exist: {directory}", argument="path")
    if not directory.is_dir():
        raise InvalidArgumentError(f"path is not a directory: {directory}", argument="path")
    if not os.access(directory, os.R_OK):
        raise InvalidArgumentError(f"path is not readable: {directory}", argument="path")

    suffix = suffix.lower()
    files: List[str] = []
    for name in sorted(os.listdir(directory)):
        child = directory / name
        if recursive and child.is_dir():
            for sub in get_file_list(child, suffix, include_hidden, recursive):
                files.append(os.path.join(name, sub))

        lc = name.lower()
        if lc.endswith(suffix) and (include_hidden or not lc.startswith(".")):
            files.append(name)
    return files


def create_temp_dir(prefix: str = "", suffix: str = "",
                    directory: Optional[PathLike] = None) -> Path:
    """Create a new, empty temporary directory and return its path."""
    temp = Path(tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=directory))
    logger.debug(f"Created temporary directory {temp}")
    return temp


class FileFactory(ABC):
    """Something that hands out fresh file paths."""

    @abstractmethod
    def create_file(self, prefix: Optional[str] = None,
                    suffix: Optional[str] = None) -> Path:
        """Create a new empty file and return its path."""
        pass


class TempFileFactory(FileFactory):
    """FileFactory creating empty temporary files in one directory."""

    def __init__(self, directory: Optional[PathLike] = None,
                 prefix: str = "tmp", suffix: str = ""):
        self.directory = directory
        self.prefix = prefix
        self.suffix = suffix

    def create_file(self, prefix: Optional[str] = None,
                    suffix: Optional[str] = None) -> Path:
        fd, name = tempfile.mkstemp(
            suffix=self.suffix if suffix is None else suffix,
            prefix=self.prefix if prefix is None else prefix,
            dir=self.directory,
        )
        os.close(fd)
        return Path(name)

    def __repr__(self) -> str:
        return f"TempFileFactory(directory={self.directory!r})"
