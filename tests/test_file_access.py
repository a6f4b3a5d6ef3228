#!/usr/bin/env python3
"""
Tests for transparent file access and its configuration.
"""

import contextlib
import dataclasses
import io
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from recordstream import (
    CodingErrorAction, DEFAULT_CONFIG, FileConfig, InvalidArgumentError, UnsupportedOperationError,
)
from recordstream.files import (
    file_name, is_gzip, is_stdio,
    open_input_stream, open_output_stream, open_reader, open_writer,
    read_all, write_all,
)


class TestFileConfig(unittest.TestCase):
    """Test the charset error policy configuration."""

    def test_defaults(self):
        """Test both actions default to replace."""
        config = FileConfig()
        self.assertEqual(config.malformed_input_action, CodingErrorAction.REPLACE)
        self.assertEqual(config.unmappable_character_action, CodingErrorAction.REPLACE)
        self.assertEqual(config.errors, "replace")
        self.assertEqual(config.default_encoding, "utf-8")
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_immutable(self):
        """Test a config cannot be changed in place."""
        with self.assertRaises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.malformed_input_action = CodingErrorAction.IGNORE

    def test_with_actions(self):
        """Test overriding one action leaves the other and the original alone."""
        config = DEFAULT_CONFIG.with_actions(malformed_input=CodingErrorAction.REPORT)
        self.assertIs(config.unmappable_character_action, CodingErrorAction.REPLACE)
        self.assertEqual(config.errors, "recordstream.report-replace")
        self.assertEqual(DEFAULT_CONFIG.errors, "replace")
        self.assertEqual(config.with_actions(unmappable_character="report").errors, "strict")

    def test_string_actions(self):
        """Test actions may be given by value."""
        config = FileConfig(malformed_input_action="ignore",
                            unmappable_character_action="report")
        self.assertIs(config.malformed_input_action, CodingErrorAction.IGNORE)
        self.assertEqual(config.errors, "recordstream.ignore-report")
        with self.assertRaises(ValueError):
            FileConfig(malformed_input_action="explode")


class TestPathConventions(unittest.TestCase):
    """Test suffix and sentinel detection."""

    def test_is_gzip(self):
        """Test the gzip suffix is matched on the name, ignoring case."""
        self.assertTrue(is_gzip("data.gz"))
        self.assertTrue(is_gzip("/tmp/DATA.TXT.GZ"))
        self.assertTrue(is_gzip(Path("a") / "b.Gz"))
        self.assertFalse(is_gzip("data.gzip"))
        self.assertFalse(is_gzip("gz"))
        self.assertFalse(is_gzip("archive.gz/inner.txt"))

    def test_is_stdio(self):
        """Test the dash placeholder is recognised."""
        self.assertTrue(is_stdio("-"))
        self.assertTrue(is_stdio(Path("-")))
        self.assertFalse(is_stdio("--"))
        self.assertFalse(is_stdio("a-b"))

    def test_none_path(self):
        """Test a None path is rejected before any I/O."""
        with self.assertRaises(InvalidArgumentError):
            open_reader(None)
        with self.assertRaises(InvalidArgumentError):
            open_output_stream(None)

    def test_file_name(self):
        """Test display names for files and standard streams."""
        self.assertEqual(file_name("/x/y/data.txt"), "data.txt")
        self.assertEqual(file_name("-", io.BytesIO()), "stdin")
        self.assertEqual(file_name(None), "file")
        with open(os.devnull, "wb", buffering=0) as out:
            self.assertEqual(file_name("-", out), "stdout")


class TestOpen(unittest.TestCase):
    """Test opening plain, gzip and standard streams."""

    def setUp(self):
        """Set up a temporary directory."""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up the temporary directory."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def path(self, name):
        return os.path.join(self.temp_dir, name)

    def test_plain_round_trip(self):
        """Test bytes written to a plain file read back unchanged."""
        data = bytes(range(256)) * 10
        with open_output_stream(self.path("plain.bin")) as out:
            out.write(data)
        with open(self.path("plain.bin"), "rb") as f:
            self.assertEqual(f.read(), data)
        with open_input_stream(self.path("plain.bin")) as f:
            self.assertEqual(f.read(), data)

    def test_gzip_round_trip(self):
        """Test a .gz path is compressed on write and decompressed on read."""
        data = b"record\n" * 1000
        for name in ("data.gz", "DATA.GZ"):
            path = self.path(name)
            with open_output_stream(path) as out:
                out.write(data)
            with open(path, "rb") as f:
                raw = f.read()
            self.assertEqual(raw[:2], b"\x1f\x8b")
            self.assertLess(len(raw), len(data))
            with open_input_stream(path) as f:
                self.assertEqual(f.read(), data)

    def test_gzip_text_round_trip(self):
        """Test text through a gzip path survives a round trip."""
        path = self.path("text.txt.gz")
        text = "héllo\nwörld\r\nlast"
        write_all(path, text)
        self.assertEqual(read_all(path), text)

    def test_content_is_not_sniffed(self):
        """Test gzip data under a plain name is read as raw bytes."""
        path = self.path("data.gz")
        with open_output_stream(path) as out:
            out.write(b"abc")
        os.rename(path, self.path("data.bin"))
        with open_input_stream(self.path("data.bin")) as f:
            self.assertEqual(f.read()[:2], b"\x1f\x8b")

    def test_corrupt_gzip_raises_io_error(self):
        """Test bad compressed data surfaces as OSError."""
        path = self.path("bad.gz")
        with open(path, "wb") as f:
            f.write(b"this is not gzip")
        with open_input_stream(path) as f:
            with self.assertRaises(OSError):
                f.read()

    def test_missing_file(self):
        """Test opening a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            open_reader(self.path("missing.txt"))
        with self.assertRaises(FileNotFoundError):
            open_input_stream(self.path("missing.gz"))

    def test_stdin(self):
        """Test the placeholder reads stdin and closing leaves stdin open."""
        fake = io.TextIOWrapper(io.BytesIO("line 1\nlïne 2\n".encode("utf-8")), encoding="utf-8")
        with mock.patch("sys.stdin", fake):
            with open_reader("-") as reader:
                self.assertEqual(reader.read(), "line 1\nlïne 2\n")
        self.assertFalse(fake.buffer.closed)

    def test_stdout(self):
        """Test the placeholder writes stdout and closing leaves stdout open."""
        fake = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        with mock.patch("sys.stdout", fake):
            with open_writer("-") as writer:
                writer.write("out ✓\n")
        self.assertFalse(fake.buffer.closed)
        self.assertEqual(fake.buffer.getvalue(), "out ✓\n".encode("utf-8"))

    def test_stdout_binary(self):
        """Test binary writes to stdout are flushed on close."""
        fake = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        with mock.patch("sys.stdout", fake):
            out = open_output_stream("-")
            out.write(b"\x00\x01")
            out.close()
            out.close()
        self.assertEqual(fake.buffer.getvalue(), b"\x00\x01")

    def test_redirected_stdout(self):
        """Test text writes reach a redirected stdout that has no byte layer."""
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with open_writer("-") as writer:
                writer.write("hello\n")
                self.assertEqual(file_name("-", writer), "stdout")
        self.assertFalse(out.closed)
        self.assertEqual(out.getvalue(), "hello\n")

    def test_text_only_stdin(self):
        """Test text reads from a stdin that has no byte layer."""
        fake = io.StringIO("a\nb\n")
        with mock.patch("sys.stdin", fake):
            with open_reader("-") as reader:
                self.assertEqual(reader.readline(), "a\n")
                self.assertEqual(reader.read(), "b\n")
        self.assertFalse(fake.closed)

    def test_text_only_stdio_binary(self):
        """Test binary access to a text-only standard stream is unsupported."""
        with mock.patch("sys.stdin", io.StringIO("a")):
            with self.assertRaises(UnsupportedOperationError):
                open_input_stream("-")
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(UnsupportedOperationError):
                open_output_stream("-")


class TestErrorPolicy(unittest.TestCase):
    """Test malformed-input and unmappable-character handling."""

    def setUp(self):
        """Set up a file with an invalid UTF-8 byte."""
        self.temp_dir = tempfile.mkdtemp()
        self.bad = os.path.join(self.temp_dir, "bad.txt")
        with open(self.bad, "wb") as f:
            f.write(b"ok\xffok")

    def tearDown(self):
        """Clean up the temporary directory."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_malformed_replace_by_default(self):
        """Test malformed bytes become the replacement character."""
        self.assertEqual(read_all(self.bad), "ok\ufffdok")

    def test_malformed_ignore(self):
        """Test malformed bytes can be dropped."""
        config = FileConfig(malformed_input_action=CodingErrorAction.IGNORE)
        self.assertEqual(read_all(self.bad, config=config), "okok")

    def test_malformed_report(self):
        """Test malformed bytes can be made fatal."""
        config = FileConfig(malformed_input_action=CodingErrorAction.REPORT)
        with self.assertRaises(UnicodeDecodeError):
            read_all(self.bad, config=config)

    def test_unmappable_actions(self):
        """Test characters the target charset lacks follow the encode policy."""
        path = os.path.join(self.temp_dir, "ascii.txt")

        write_all(path, "café", encoding="ascii")
        with open(path, "rb") as f:
            self.assertEqual(f.read(), b"caf?")

        ignore = FileConfig(unmappable_character_action=CodingErrorAction.IGNORE)
        write_all(path, "café", encoding="ascii", config=ignore)
        with open(path, "rb") as f:
            self.assertEqual(f.read(), b"caf")

        report = FileConfig(unmappable_character_action=CodingErrorAction.REPORT)
        with self.assertRaises(UnicodeEncodeError):
            write_all(path, "café", encoding="ascii", config=report)

    def written(self, text, encoding, malformed, unmappable):
        path = os.path.join(self.temp_dir, "out.txt")
        config = FileConfig(malformed_input_action=malformed,
                            unmappable_character_action=unmappable)
        write_all(path, text, encoding=encoding, config=config)
        with open(path, "rb") as f:
            return f.read()

    def test_writer_malformed_action(self):
        """Test lone surrogates follow the malformed action when writing."""
        ignore, replace, report = CodingErrorAction.IGNORE, CodingErrorAction.REPLACE, CodingErrorAction.REPORT
        with self.assertRaises(UnicodeEncodeError):
            self.written("a\ud800b", "utf-8", report, replace)
        self.assertEqual(self.written("a\ud800b", "utf-8", ignore, report), b"ab")
        self.assertEqual(self.written("a\ud800\udfffb", "utf-8", replace, ignore), b"a??b")

    def test_writer_mixed_errors(self):
        """Test each character of a failing range gets its own action."""
        ignore, replace = CodingErrorAction.IGNORE, CodingErrorAction.REPLACE
        self.assertEqual(self.written("\ud800éé", "ascii", ignore, replace), b"??")
        self.assertEqual(self.written("\ud800éé", "ascii", replace, ignore), b"?")

    def test_writer_unmappable_action(self):
        """Test unmappable characters ignore the malformed action when writing."""
        ignore, replace, report = CodingErrorAction.IGNORE, CodingErrorAction.REPLACE, CodingErrorAction.REPORT
        self.assertEqual(self.written("café", "ascii", report, replace), b"caf?")
        self.assertEqual(self.written("café", "ascii", report, ignore), b"caf")
        with self.assertRaises(UnicodeEncodeError):
            self.written("café", "ascii", ignore, report)

    def test_reader_actions(self):
        """Test invalid and unmapped bytes each follow their own action when reading."""
        ignore, replace, report = CodingErrorAction.IGNORE, CodingErrorAction.REPLACE, CodingErrorAction.REPORT

        config = FileConfig(malformed_input_action=replace, unmappable_character_action=report)
        self.assertEqual(read_all(self.bad, config=config), "ok\ufffdok")
        config = FileConfig(malformed_input_action=report, unmappable_character_action=ignore)
        with self.assertRaises(UnicodeDecodeError):
            read_all(self.bad, config=config)

        # 0x81 is undefined in cp1252
        unmapped = os.path.join(self.temp_dir, "cp1252.txt")
        with open(unmapped, "wb") as f:
            f.write(b"a\x81b")
        config = FileConfig(malformed_input_action=report, unmappable_character_action=ignore)
        self.assertEqual(read_all(unmapped, encoding="cp1252", config=config), "ab")
        config = FileConfig(malformed_input_action=report, unmappable_character_action=replace)
        self.assertEqual(read_all(unmapped, encoding="cp1252", config=config), "a\ufffdb")
        config = FileConfig(malformed_input_action=ignore, unmappable_character_action=report)
        with self.assertRaises(UnicodeDecodeError):
            read_all(unmapped, encoding="cp1252", config=config)

    def test_failed_wrapper_closes_stream(self):
        """Test the byte stream is closed when the text layer cannot be built."""
        stream = io.BytesIO(b"data")
        with mock.patch("recordstream.files.access.open_input_stream", return_value=stream):
            with self.assertRaises(LookupError):
                open_reader(self.bad, encoding="no-such-codec")
        self.assertTrue(stream.closed)


if __name__ == "__main__":
    unittest.main()
