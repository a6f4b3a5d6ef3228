"""
Forwarding decorators: wrap one inner stream and delegate to it.

Subclasses override the operations they want to change and call ``super()``
to pass records through. Closing a decorator closes the inner stream only if
the inner is ``Closeable``; otherwise it does nothing.
"""

from typing import Generic, TypeVar

from recordstream.exceptions import check_not_none
from recordstream.streams.base import (
    Closeable, Flushable, SeekableSource, Sink, Source
)

T = TypeVar('T')
P = TypeVar('P')


class _Forwarding(Closeable):
    """Shared inner handling, close propagation, equality and repr."""

    def __init__(self, inner):
        check_not_none("inner", inner)
        self._inner = inner
        self._closed = False

    @property
    def inner(self):
        return self._inner

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if isinstance(self._inner, Closeable):
            self._inner.close()

    def __eq__(self, other):
        if other is None or type(self) is not type(other):
            return NotImplemented
        return self._inner is other._inner or self._inner == other._inner

    def __hash__(self):
        return hash((type(self).__name__, self._inner))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(inner={self._inner!r})"


class ForwardingSource(_Forwarding, Source[T]):
    """Source that forwards ``has_next`` and ``read`` to an inner source."""

    def __init__(self, inner: Source[T]):
        super().__init__(inner)

    def has_next(self) -> bool:
        return self._inner.has_next()

    def read(self) -> T:
        return self._inner.read()


class ForwardingSeekableSource(ForwardingSource[T], SeekableSource[T, P]):
    """Forwarding source that also forwards positioning."""

    def __init__(self, inner: SeekableSource[T, P]):
        super().__init__(inner)

    def position(self) -> P:
        return self._inner.position()

    def seek(self, position: P) -> None:
        self._inner.seek(position)


class ForwardingSink(_Forwarding, Sink[T], Flushable):
    """Sink that forwards ``write`` and ``flush`` to an inner sink."""

    def __init__(self, inner: Sink[T]):
        super().__init__(inner)

    def write(self, record: T) -> None:
        self._inner.write(record)

    def flush(self) -> None:
        if isinstance(self._inner, Flushable):
            self._inner.flush()
