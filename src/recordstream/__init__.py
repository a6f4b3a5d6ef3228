"""
recordstream: sequential record streams and transparent file access.

Pull-based sources, push-based sinks, forwarding decorators that layer
behaviour onto any stream, and one open API for plain files, gzip files and
the process's standard streams.
"""

from recordstream.config import CodingErrorAction, FileConfig, DEFAULT_CONFIG
from recordstream.exceptions import (
    RecordStreamError,
    ExhaustionError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from recordstream.streams import (
    Source,
    SeekableSource,
    Sink,
    ForwardingSource,
    ForwardingSink,
    RunLimitingSink,
    LineSource,
    LineSink,
)
from recordstream.files import open_reader, open_writer

__version__ = "0.1.0"
__license__ = "BSD-3-Clause"

__all__ = [
    "CodingErrorAction",
    "FileConfig",
    "DEFAULT_CONFIG",
    "RecordStreamError",
    "ExhaustionError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "Source",
    "SeekableSource",
    "Sink",
    "ForwardingSource",
    "ForwardingSink",
    "RunLimitingSink",
    "LineSource",
    "LineSink",
    "open_reader",
    "open_writer",
]
