"""Fixed-size header at the start of TOMBPC.DAT / TOMBPSX.DAT."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from tombflow.reader import ByteReader

DESCRIPTION_SIZE = 256

# Pad codes (``x``) are reserved regions. They are consumed but never exposed.
HEADER_STRUCT = struct.Struct(
    "<"
    "I"  # version
    f"{DESCRIPTION_SIZE}s"  # description
    "H"  # gameflow_size
    "i"  # first_option
    "i"  # title_replace
    "i"  # on_death_demo_mode
    "i"  # on_death_in_game
    "I"  # demo_time
    "i"  # on_demo_interrupt
    "i"  # on_demo_end
    "36x"
    "H"  # num_levels
    "H"  # num_chapter_screens
    "H"  # num_titles
    "H"  # num_fmvs
    "H"  # num_cutscenes
    "H"  # num_demo_levels
    "H"  # title_sound_id
    "H"  # single_level
    "32x"
    "H"  # flags
    "6x"
    "B"  # xor_key
    "B"  # language_id
    "H"  # secret_sound_id
    "4x"
)
HEADER_SIZE = HEADER_STRUCT.size  # 390


@dataclass(frozen=True)
class Header:
    version: int
    description: bytes
    gameflow_size: int
    first_option: int
    title_replace: int
    on_death_demo_mode: int
    on_death_in_game: int
    demo_time: int
    on_demo_interrupt: int
    on_demo_end: int
    num_levels: int
    num_chapter_screens: int
    num_titles: int
    num_fmvs: int
    num_cutscenes: int
    num_demo_levels: int
    title_sound_id: int
    single_level: int
    flags: int
    xor_key: int
    language_id: int
    secret_sound_id: int

    def description_text(self, encoding: str = "latin1") -> str:
        """Return the description up to its first NUL byte."""
        raw = self.description.split(b"\x00", 1)[0]
        return raw.decode(encoding, errors="replace")


def read_header(reader: ByteReader) -> Header:
    return Header(*reader.read_struct(HEADER_STRUCT))
