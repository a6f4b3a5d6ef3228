"""Record sources, sinks, decorators and bulk operations."""

from recordstream.streams.base import (
    Closeable,
    Flushable,
    SeekableSource,
    Sink,
    Source,
)
from recordstream.streams.forwarding import (
    ForwardingSeekableSource,
    ForwardingSink,
    ForwardingSource,
)
from recordstream.streams.reducing import RunLimitingSink
from recordstream.streams.adapters import (
    as_seekable_source,
    as_sink,
    as_source,
    null_seekable_source,
    null_sink,
    null_source,
)
from recordstream.streams.operations import (
    compare,
    copy,
    copy_iterable,
    copy_source,
    copy_to_collection,
    drain,
    equals,
    read_all,
)
from recordstream.streams.lines import LineSink, LineSource

__all__ = [
    "Closeable",
    "Flushable",
    "SeekableSource",
    "Sink",
    "Source",
    "ForwardingSeekableSource",
    "ForwardingSink",
    "ForwardingSource",
    "RunLimitingSink",
    "as_seekable_source",
    "as_sink",
    "as_source",
    "null_seekable_source",
    "null_sink",
    "null_source",
    "compare",
    "copy",
    "copy_iterable",
    "copy_source",
    "copy_to_collection",
    "drain",
    "equals",
    "read_all",
    "LineSink",
    "LineSource",
]
