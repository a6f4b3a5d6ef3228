"""
Sentinel streams and adapters between Python collections and record streams.
"""

from typing import Any, Iterable, Iterator, Sequence, TypeVar

from recordstream.exceptions import (
    ExhaustionError, InvalidArgumentError, UnsupportedOperationError, check_not_none
)
from recordstream.streams.base import SeekableSource, Sink, Source

T = TypeVar('T')

_EMPTY = object()


class _NullSink(Sink[Any]):

    def write(self, record: Any) -> None:
        pass

    def __repr__(self) -> str:
        return "null_sink()"


class _NullSource(Source[Any]):

    def has_next(self) -> bool:
        return False

    def read(self) -> Any:
        raise UnsupportedOperationError("Null source cannot be read.")

    def __repr__(self) -> str:
        return "null_source()"


class _NullSeekableSource(_NullSource, SeekableSource[Any, None]):

    def position(self) -> None:
        return None

    def seek(self, position: None) -> None:
        raise UnsupportedOperationError("Null source has no position.")

    def __repr__(self) -> str:
        return "null_seekable_source()"


def null_sink() -> Sink[Any]:
    """Sink that discards every record."""
    return _NullSink()


def null_source() -> Source[Any]:
    """Source that is always exhausted. Reading it is unsupported."""
    return _NullSource()


def null_seekable_source() -> SeekableSource[Any, None]:
    """Always-exhausted seekable source whose position is None."""
    return _NullSeekableSource()


class CollectionSink(Sink[T]):
    """Sink that appends each record to a container."""

    def __init__(self, container):
        check_not_none("container", container)
        if hasattr(container, "append"):
            self._add = container.append
        elif hasattr(container, "add"):
            self._add = container.add
        else:
            raise InvalidArgumentError(
                f"{type(container).__name__} has neither append() nor add()",
                argument="container")
        self.container = container

    def write(self, record: T) -> None:
        self._add(record)

    def __repr__(self) -> str:
        return f"CollectionSink({self.container!r})"


class IteratorSource(Source[T]):
    """
    Single-pass source over an iterable.

    Python iterators have no ``has_next``, so one record is fetched ahead
    when ``has_next()`` is asked.
    """

    def __init__(self, iterable: Iterable[T]):
        check_not_none("iterable", iterable)
        self._it: Iterator[T] = iter(iterable)
        self._next: Any = _EMPTY

    def has_next(self) -> bool:
        if self._next is _EMPTY:
            self._next = next(self._it, _EMPTY)
        return self._next is not _EMPTY

    def read(self) -> T:
        if not self.has_next():
            raise ExhaustionError("Source is exhausted.")
        record, self._next = self._next, _EMPTY
        return record


class SequenceSource(SeekableSource[T, int]):
    """Seekable source over a random-access sequence; the position is an index."""

    def __init__(self, sequence: Sequence[T]):
        check_not_none("sequence", sequence)
        self._sequence = sequence
        self._index = 0

    def has_next(self) -> bool:
        return self._index < len(self._sequence)

    def read(self) -> T:
        if not self.has_next():
            raise ExhaustionError("Source is exhausted.")
        record = self._sequence[self._index]
        self._index += 1
        return record

    def position(self) -> int:
        return self._index

    def seek(self, position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidArgumentError(f"position must be an int, got {position!r}",
                                       argument="position")
        if not 0 <= position <= len(self._sequence):
            raise InvalidArgumentError(
                f"position {position} outside [0, {len(self._sequence)}]",
                argument="position")
        self._index = position


def as_sink(container) -> Sink[T]:
    """Wrap a list, set, deque or other appendable container as a Sink."""
    return CollectionSink(container)


def as_source(iterable: Iterable[T]) -> Source[T]:
    """Wrap an iterable as a single-pass Source."""
    return IteratorSource(iterable)


def as_seekable_source(sequence: Sequence[T]) -> SeekableSource[T, int]:
    """Wrap a random-access sequence as a SeekableSource indexed from 0."""
    return SequenceSource(sequence)
