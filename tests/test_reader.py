import io
import unittest

from tombflow.errors import TruncatedInput
from tombflow.reader import ByteReader


class TestByteReader(unittest.TestCase):
    def test_little_endian_widths(self):
        data = bytes([0x7F, 0x34, 0x12, 0x78, 0x56, 0x34, 0x12, 0xFF, 0xFF, 0xFF, 0xFF])
        reader = ByteReader(io.BytesIO(data))
        self.assertEqual(reader.read_u8(), 0x7F)
        self.assertEqual(reader.read_u16(), 0x1234)
        self.assertEqual(reader.read_u32(), 0x12345678)
        self.assertEqual(reader.read_i32(), -1)
        self.assertEqual(reader.position, len(data))

    def test_u16_array(self):
        reader = ByteReader(io.BytesIO(b"\x01\x00\x02\x00\x03\x00"))
        self.assertEqual(reader.read_u16_array(3), [1, 2, 3])
        self.assertEqual(reader.read_u16_array(0), [])

    def test_skip_advances_position(self):
        reader = ByteReader(io.BytesIO(b"\x00" * 10 + b"\x05"))
        reader.skip(10)
        self.assertEqual(reader.position, 10)
        self.assertEqual(reader.read_u8(), 5)

    def test_truncated_reads(self):
        for method, size in (("read_u8", 0), ("read_u16", 1), ("read_u32", 3), ("read_i32", 2)):
            with self.subTest(method=method):
                reader = ByteReader(io.BytesIO(b"\xAA" * size))
                with self.assertRaises(TruncatedInput) as ctx:
                    getattr(reader, method)()
                self.assertEqual(ctx.exception.available, size)
                self.assertEqual(ctx.exception.position, 0)

    def test_truncated_blob_reports_position(self):
        reader = ByteReader(io.BytesIO(b"\x01\x00abc"))
        reader.read_u16()
        with self.assertRaises(TruncatedInput) as ctx:
            reader.read_bytes(8)
        self.assertEqual(ctx.exception.wanted, 8)
        self.assertEqual(ctx.exception.available, 3)
        self.assertEqual(ctx.exception.position, 2)

    def test_short_reads_are_retried(self):
        class TrickleStream(io.RawIOBase):
            def __init__(self, data):
                self.data = data

            def readable(self):
                return True

            def read(self, size=-1):
                step = 2 if size < 0 else min(2, size)
                chunk, self.data = self.data[:step], self.data[step:]
                return chunk

        reader = ByteReader(TrickleStream(b"\x78\x56\x34\x12abcde"))
        self.assertEqual(reader.read_u32(), 0x12345678)
        self.assertEqual(reader.read_bytes(5), b"abcde")
        with self.assertRaises(TruncatedInput):
            reader.read_u8()
