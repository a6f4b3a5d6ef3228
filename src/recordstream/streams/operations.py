"""
Bulk operations over record streams.

All operations are fail-fast: the first error from either stream aborts the
operation and leaves both streams partially consumed.
"""

import sys
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from recordstream.exceptions import check_limit, check_not_none
from recordstream.streams.adapters import CollectionSink
from recordstream.streams.base import Flushable, Sink, Source

T = TypeVar('T')

UNBOUNDED = sys.maxsize


def _limit_or_unbounded(limit: Optional[int]) -> int:
    check_limit(limit)
    return UNBOUNDED if limit is None else limit


def copy_iterable(source: Iterable[T], sink: Sink[T], limit: Optional[int] = None) -> int:
    """
    Write records from an iterable to a sink, in iteration order.

    Args:
        source: Any iterable
        sink: Destination sink
        limit: Maximum records to transfer (None for no limit)

    Returns:
        Number of records transferred
    """
    check_not_none("source", source)
    check_not_none("sink", sink)
    limit = _limit_or_unbounded(limit)
    count = 0
    it = iter(source)
    while count < limit:
        try:
            record = next(it)
        except StopIteration:
            break
        sink.write(record)
        count += 1
    return count


def copy_to_collection(source: Source[T], container, limit: Optional[int] = None) -> int:
    """Append records read from ``source`` to ``container``; return the count."""
    check_not_none("source", source)
    check_not_none("container", container)
    limit = _limit_or_unbounded(limit)
    add = CollectionSink(container).write
    count = 0
    while count < limit and source.has_next():
        add(source.read())
        count += 1
    return count


def copy_source(source: Source[T], sink: Sink[T], limit: Optional[int] = None) -> int:
    """
    Transfer records from a source to a sink.

    Stops at the limit or when the source is exhausted. If the sink is
    Flushable it is flushed once at the end.
    """
    check_not_none("source", source)
    check_not_none("sink", sink)
    limit = _limit_or_unbounded(limit)
    count = 0
    while count < limit and source.has_next():
        sink.write(source.read())
        count += 1
    if isinstance(sink, Flushable):
        sink.flush()
    return count


def copy(source, sink, limit: Optional[int] = None) -> int:
    """
    Copy records, choosing the transfer by the kinds of the arguments.

    ``source`` may be a Source or any iterable; ``sink`` may be a Sink or an
    appendable container.
    """
    check_not_none("source", source)
    check_not_none("sink", sink)
    if isinstance(sink, Sink):
        if isinstance(source, Source):
            return copy_source(source, sink, limit)
        return copy_iterable(source, sink, limit)
    if isinstance(source, Source):
        return copy_to_collection(source, sink, limit)
    return copy_iterable(source, CollectionSink(sink), limit)


def drain(source: Source[Any]) -> int:
    """Read and discard every remaining record; return how many there were."""
    check_not_none("source", source)
    count = 0
    while source.has_next():
        source.read()
        count += 1
    return count


def read_all(source: Source[T]) -> List[T]:
    """Read every remaining record into a new list, preserving order."""
    result: List[T] = []
    copy_to_collection(source, result)
    return result


def natural_comparator(a: Any, b: Any) -> int:
    """Three-way comparison using the records' own ordering."""
    return (a > b) - (a < b)


def compare(a: Source[T], b: Source[T],
            comparator: Optional[Callable[[T, T], int]] = None) -> int:
    """
    Compare two sources lexicographically.

    Records are compared pairwise in lockstep and the first non-zero result
    is returned. When one source runs out first, it is the smaller one.

    Args:
        a: First source
        b: Second source
        comparator: Three-way comparison function (natural ordering if None)

    Returns:
        Negative, zero or positive, as for ``functools.cmp_to_key``
    """
    check_not_none("a", a)
    check_not_none("b", b)
    comparator = comparator or natural_comparator
    while a.has_next() and b.has_next():
        c = comparator(a.read(), b.read())
        if c != 0:
            return c
    if a.has_next():
        return 1
    if b.has_next():
        return -1
    return 0


def equals(a: Source[Any], b: Source[Any]) -> bool:
    """Whether both sources yield equal records in order and end together."""
    check_not_none("a", a)
    check_not_none("b", b)
    while a.has_next() and b.has_next():
        if a.read() != b.read():
            return False
    return not (a.has_next() or b.has_next())
