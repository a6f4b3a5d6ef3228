#!/usr/bin/env python3
"""
Basic usage examples for recordstream.
"""

import os
import random
import shutil

from recordstream import CodingErrorAction, FileConfig, RunLimitingSink
from recordstream.files import create_temp_dir, read_all_lines, write_all_lines
from recordstream.streams import (
    LineSink,
    LineSource,
    as_sink,
    as_source,
    compare,
    copy,
    equals,
)


def example_run_limiting():
    """Example: keep at most two records per run of duplicates."""
    print("\n=== RunLimitingSink Example ===")

    words = sorted(random.choice(["apple", "pear", "plum"]) for _ in range(20))
    kept = []
    sink = RunLimitingSink(as_sink(kept), limit=2)
    copied = copy(words, sink)

    print(f"Input records: {copied}")
    print(f"Kept: {kept}")


def example_compressed_files(work_dir):
    """Example: the same calls read and write plain and gzip files."""
    print("\n=== Transparent gzip Example ===")

    lines = [f"record {i}" for i in range(1000)]
    plain = os.path.join(work_dir, "records.txt")
    packed = os.path.join(work_dir, "records.txt.gz")

    write_all_lines(plain, lines)
    write_all_lines(packed, lines)

    print(f"Plain size: {os.path.getsize(plain):,} bytes")
    print(f"Gzip size: {os.path.getsize(packed):,} bytes")

    with LineSource(plain) as a, LineSource(packed) as b:
        print(f"Same records: {equals(a, b)}")


def example_pipeline(work_dir):
    """Example: file to file through a decorator chain."""
    print("\n=== Pipeline Example ===")

    source_path = os.path.join(work_dir, "sorted.gz")
    target_path = os.path.join(work_dir, "reduced.txt")
    write_all_lines(source_path, sorted(str(random.randint(0, 5)) for _ in range(100)))

    with LineSource(source_path) as source, \
            RunLimitingSink(LineSink(target_path), limit=3) as sink:
        copy(source, sink)

    reduced = read_all_lines(target_path)
    print(f"Reduced 100 records to {len(reduced)}: {reduced}")


def example_error_policy(work_dir):
    """Example: choose how undecodable bytes are handled."""
    print("\n=== Charset Error Policy Example ===")

    path = os.path.join(work_dir, "broken.txt")
    with open(path, "wb") as f:
        f.write(b"caf\xe9\n")

    print(f"Replace: {read_all_lines(path)}")
    ignore = FileConfig(malformed_input_action=CodingErrorAction.IGNORE)
    print(f"Ignore: {read_all_lines(path, config=ignore)}")


def example_compare():
    """Example: lexicographic comparison of two sources."""
    print("\n=== Compare Example ===")

    print(f"[1, 2] vs [1, 2, 3]: {compare(as_source([1, 2]), as_source([1, 2, 3]))}")
    print(f"[1, 3] vs [1, 2, 3]: {compare(as_source([1, 3]), as_source([1, 2, 3]))}")


def main():
    """Run all examples."""
    print("recordstream Examples")
    print("=" * 50)

    work_dir = create_temp_dir("recordstream-examples-")
    try:
        example_run_limiting()
        example_compressed_files(work_dir)
        example_pipeline(work_dir)
        example_error_policy(work_dir)
        example_compare()
    finally:
        shutil.rmtree(work_dir, ignore_errors=True)

    print("\n" + "=" * 50)
    print("All examples completed!")


if __name__ == "__main__":
    main()
