from __future__ import annotations

import struct
from typing import BinaryIO, List

from tombflow.errors import TruncatedInput

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")


class ByteReader:
    """Sequential little-endian reader over a binary stream.

    Every read either returns exactly the requested bytes or raises
    TruncatedInput; short reads are never padded.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def read_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError(f"Negative read length {count}")
        data = self.stream.read(count)
        # Unbuffered streams may return short reads before end of file.
        while len(data) < count:
            chunk = self.stream.read(count - len(data))
            if not chunk:
                break
            data += chunk
        if len(data) < count:
            raise TruncatedInput(count, len(data), self._position)
        self._position += count
        return data

    def skip(self, count: int) -> None:
        self.read_bytes(count)

    def read_struct(self, layout: struct.Struct) -> tuple:
        return layout.unpack(self.read_bytes(layout.size))

    def read_u8(self) -> int:
        return self.read_struct(_U8)[0]

    def read_u16(self) -> int:
        return self.read_struct(_U16)[0]

    def read_i32(self) -> int:
        return self.read_struct(_I32)[0]

    def read_u32(self) -> int:
        return self.read_struct(_U32)[0]

    def read_u16_array(self, count: int) -> List[int]:
        if count == 0:
            return []
        return list(struct.unpack("<" + "H" * count, self.read_bytes(count * 2)))
