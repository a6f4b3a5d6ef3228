"""Transparent access to plain, gzip-compressed and standard-stream files."""

from recordstream.files.access import (
    GZIP_SUFFIX,
    STDIO_SENTINEL,
    file_name,
    is_gzip,
    is_stdio,
    open_input_stream,
    open_output_stream,
    open_reader,
    open_writer,
)
from recordstream.files.text import (
    count_lines,
    get_text,
    read_all,
    read_all_lines,
    write_all,
    write_all_lines,
)
from recordstream.files.listing import (
    FileFactory,
    TempFileFactory,
    create_temp_dir,
    get_file_list,
)

__all__ = [
    "GZIP_SUFFIX",
    "STDIO_SENTINEL",
    "file_name",
    "is_gzip",
    "is_stdio",
    "open_input_stream",
    "open_output_stream",
    "open_reader",
    "open_writer",
    "count_lines",
    "get_text",
    "read_all",
    "read_all_lines",
    "write_all",
    "write_all_lines",
    "FileFactory",
    "TempFileFactory",
    "create_temp_dir",
    "get_file_list",
]
