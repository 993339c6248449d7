import io
import unittest

from geodata_extractor.errors import CharsetUnavailableError, TruncatedHeaderError
from geodata_extractor.ingest.text_reader import TextBlockReader, read_all, read_block

from _encoding import encode_text, text_header


class _Trickle(io.RawIOBase):
    """Stream returning at most 7 bytes per read call."""

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(data)

    def readable(self):
        return True

    def read(self, n=-1):
        return self._buf.read(7 if n is None or n < 0 else min(n, 7))


class TestTextBlockReader(unittest.TestCase):
    def test_empty_stream_gives_empty_string(self):
        self.assertEqual(read_all(io.BytesIO(b""), "US-ASCII"), "")
        self.assertEqual(read_all(io.BytesIO(b""), "IBM1047"), "")

    def test_whole_stream_ascii(self):
        raw = b"~Version\r\nVERS. 2.0 : CWLS\r\n"
        self.assertEqual(read_all(io.BytesIO(raw), "US-ASCII"), raw.decode("ascii"))

    def test_whole_stream_survives_short_reads(self):
        raw = b"~VERSION INFORMATION\n VERS. 2.0 : CWLS\n"
        self.assertEqual(read_all(_Trickle(raw), "US-ASCII"), raw.decode("ascii"))
        self.assertEqual(TextBlockReader("US-ASCII").read_all(_Trickle(raw)), raw.decode("ascii"))

    def test_unavailable_charset_consumes_nothing(self):
        stream = io.BytesIO(b"some bytes")
        with self.assertRaises(CharsetUnavailableError):
            read_all(stream, "Cp273")
        self.assertEqual(stream.tell(), 0)
        with self.assertRaises(CharsetUnavailableError):
            read_block(stream, 4, "Cp273")
        self.assertEqual(stream.tell(), 0)

    def test_fixed_block_is_verbatim_and_leaves_the_rest(self):
        text = text_header()
        stream = io.BytesIO(encode_text(text, "IBM1047") + b"\x01\x02")
        decoded = read_block(stream, 3200, "IBM1047")
        self.assertEqual(decoded, text)
        self.assertTrue(decoded.endswith(" "))
        self.assertEqual(stream.read(), b"\x01\x02")

    def test_short_block(self):
        with self.assertRaises(TruncatedHeaderError) as info:
            read_block(io.BytesIO(b"\xc1" * 10), 3200, "IBM1047")
        self.assertEqual(info.exception.actual, 10)
        self.assertEqual(read_block(io.BytesIO(b"\xc1" * 10), 3200, "IBM1047", strict=False), "A" * 10)

    def test_bound_reader(self):
        reader = TextBlockReader("cp1047")
        self.assertEqual(reader.read_block(io.BytesIO(b"\xc8\xc9"), 2), "HI")
        self.assertEqual(reader.read_all(io.BytesIO(b"\x81\x82")), "ab")
        with self.assertRaises(CharsetUnavailableError):
            TextBlockReader("EUC-JP")


if __name__ == "__main__":
    unittest.main()
