"""
Run-limiting reducer.

Caps how many records of each run of adjacent equivalent records reach the
inner sink. Input is expected to be grouped already (for example, sorted),
so only the most recent run head is kept in memory.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

from recordstream.exceptions import InvalidArgumentError, check_limit
from recordstream.streams.base import Sink
from recordstream.streams.forwarding import ForwardingSink

T = TypeVar('T')

DEFAULT_LIMIT = 100

logger = logging.getLogger(__name__)

_NO_RUN = object()


def equality_comparator(a: Any, b: Any) -> int:
    """Comparator that only distinguishes equal from not equal."""
    return 0 if a == b else 1


class RunLimitingSink(ForwardingSink[T]):
    """
    Forward at most ``limit`` records of each run to the inner sink.

    A run is a maximal sequence of consecutive records for which
    ``comparator(current, record) == 0``, where ``current`` is the first
    record of the run. Records past the limit are consumed and dropped, and
    they never replace ``current``, so a long run is still compared against
    its head until a differing record arrives.

    Usage:
        out = []
        sink = RunLimitingSink(as_sink(out), limit=2)
        copy("aaabbc", sink)
        # out == ['a', 'a', 'b', 'b', 'c']
    """

    def __init__(self,
                 inner: Sink[T],
                 comparator: Optional[Callable[[T, T], int]] = None,
                 limit: int = DEFAULT_LIMIT):
        """
        Args:
            inner: Sink receiving the records that pass.
            comparator: Two-argument function returning 0 for records in the
                same run (the ``functools.cmp_to_key`` convention). Defaults
                to ``==``.
            limit: Records forwarded per run; 0 forwards nothing.
        """
        super().__init__(inner)
        if limit is None:
            raise InvalidArgumentError("limit is None", argument="limit")
        check_limit(limit)
        self._comparator = comparator or equality_comparator
        self._limit = limit
        self._current: Any = _NO_RUN
        self._count = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def count(self) -> int:
        """1-based position of the last written record within its run."""
        return self._count

    @property
    def current(self) -> Optional[T]:
        """First record of the open run, or None before any write."""
        return None if self._current is _NO_RUN else self._current

    def _log_truncated(self) -> None:
        if self._count > self._limit:
            logger.debug(f"Run of {self._count} records starting {self._current!r} "
                         f"truncated to {self._limit}")

    def write(self, record: T) -> None:
        if self._current is _NO_RUN or self._comparator(self._current, record) != 0:
            self._log_truncated()
            self._current = record
            self._count = 0
        self._count += 1

        if self._count <= self._limit:
            super().write(record)

    def close(self) -> None:
        # The last run has no successor to end it
        if not self.closed:
            self._log_truncated()
        super().close()
