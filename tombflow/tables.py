from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from tombflow.errors import MalformedOffsetTable
from tombflow.reader import ByteReader

logger = logging.getLogger(__name__)

TEXT_ENCODING = "latin1"  # one character per byte, whatever the game's codepage


def xor_bytes(data: bytes, key: int) -> bytes:
    """XOR every byte of *data* with *key*. A key of 0 leaves the data untouched."""
    if not key:
        return bytes(data)
    return bytes(byte ^ key for byte in data)


@dataclass(frozen=True)
class OffsetTable:
    """``count`` u16 byte offsets into a payload blob.

    Record ``i`` spans ``[offsets[i], offsets[i + 1])``; the last record runs to
    the end of the blob.
    """

    offsets: Tuple[int, ...]
    blob: bytes

    def spans(self) -> Iterator[Tuple[int, int]]:
        size = len(self.blob)
        for idx, start in enumerate(self.offsets):
            end = self.offsets[idx + 1] if idx + 1 < len(self.offsets) else size
            if start > size:
                raise MalformedOffsetTable(
                    f"Record {idx} starts at {start}, past the {size}-byte payload."
                )
            if start > end:
                raise MalformedOffsetTable(
                    f"Record {idx} starts at {start} but the next record starts at {end}."
                )
            if end > size:
                raise MalformedOffsetTable(
                    f"Record {idx} spans {start}..{end}, past the {size}-byte payload."
                )
            yield start, end

    def raw_records(self, xor_key: int = 0) -> List[bytes]:
        return [xor_bytes(self.blob[start:end], xor_key) for start, end in self.spans()]

    def text_records(self, xor_key: int = 0, encoding: str = TEXT_ENCODING) -> List[str]:
        return [raw.decode(encoding, errors="replace") for raw in self.raw_records(xor_key)]

    def word_records(self) -> List[List[int]]:
        if len(self.blob) % 2:
            raise MalformedOffsetTable(
                f"Payload of {len(self.blob)} bytes is not a whole number of words."
            )
        words = struct.unpack("<" + "H" * (len(self.blob) // 2), self.blob)
        records: List[List[int]] = []
        for idx, (start, end) in enumerate(self.spans()):
            if start % 2 or end % 2:
                raise MalformedOffsetTable(
                    f"Record {idx} spans {start}..{end}, which is not word aligned."
                )
            records.append(list(words[start // 2 : end // 2]))
        return records


def read_offset_table(reader: ByteReader, count: int, name: str = "table") -> OffsetTable:
    """Read ``[count x u16 offsets][u16 size][size bytes]`` from *reader*."""
    start = reader.position
    offsets = reader.read_u16_array(count)
    size = reader.read_u16()
    blob = reader.read_bytes(size)
    logger.debug("(@0x%06x) Read %s: %d records, %d payload bytes", start, name, count, size)
    return OffsetTable(offsets=tuple(offsets), blob=blob)
