"""
Record stream contracts: pull-based sources and push-based sinks.

A ``Source`` is a forward-only cursor over records; a ``Sink`` accepts
records one at a time. Release and flush are optional capabilities that a
stream opts into by also deriving from ``Closeable`` or ``Flushable``.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

T = TypeVar('T')
P = TypeVar('P')


class Closeable(ABC):
    """Capability: the stream holds resources that ``close()`` releases."""

    @abstractmethod
    def close(self) -> None:
        """Release resources. Calling it more than once has no further effect."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
        return None


class Flushable(ABC):
    """Capability: the stream buffers output that ``flush()`` forces out."""

    @abstractmethod
    def flush(self) -> None:
        """Write any buffered output to the underlying medium."""
        pass


class Source(ABC, Generic[T]):
    """
    Pull-based producer of records.

    ``read()`` when ``has_next()`` is false is a programming error and raises
    ExhaustionError. Sources are also iterators, so they can be used in
    ``for`` loops and passed to anything that consumes an iterable.
    """

    @abstractmethod
    def has_next(self) -> bool:
        """Whether another record is available. Does not consume it."""
        pass

    @abstractmethod
    def read(self) -> T:
        """Consume and return the next record."""
        pass

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.read()


class SeekableSource(Source[T], Generic[T, P]):
    """
    Source whose cursor position can be read and restored.

    The position type is up to the implementation (an index, a byte offset,
    an opaque cookie). After ``seek(p)`` the source reads as if it had just
    been opened at ``p``, and ``position()`` returns ``p``.
    """

    @abstractmethod
    def position(self) -> P:
        """Position of the next record to be read."""
        pass

    @abstractmethod
    def seek(self, position: P) -> None:
        """Move the cursor to a previously observed position."""
        pass


class Sink(ABC, Generic[T]):
    """Push-based consumer of records."""

    @abstractmethod
    def write(self, record: T) -> None:
        """Accept one record."""
        pass
