"""Helpers that pack synthetic gameflow scripts for the tests."""

from __future__ import annotations

import dataclasses
import struct
from typing import Dict, Iterable, List, Optional, Sequence

from tombflow.header import DESCRIPTION_SIZE, HEADER_STRUCT, Header
from tombflow.opcodes import Opcode
from tombflow.script import EXTRA_STRING_COUNT, KEY_SLOTS, PICKUP_SLOTS, PUZZLE_SLOTS

HEADER_DEFAULTS: Dict[str, object] = {
    "version": 3,
    "description": b"Tomb Raider II Script. Final Release Version 1.1 (c) Core Design Ltd 1997",
    "gameflow_size": 128,
    "first_option": 0x500,
    "title_replace": -1,
    "on_death_demo_mode": 0x500,
    "on_death_in_game": -1,
    "demo_time": 900,
    "on_demo_interrupt": 0x500,
    "on_demo_end": 0x500,
    "num_levels": 0,
    "num_chapter_screens": 0,
    "num_titles": 0,
    "num_fmvs": 0,
    "num_cutscenes": 0,
    "num_demo_levels": 0,
    "title_sound_id": 64,
    "single_level": 0xFFFF,
    "flags": 0x0003,
    "xor_key": 0,
    "language_id": 0,
    "secret_sound_id": 47,
}


def pack_header(**overrides: object) -> bytes:
    values = dict(HEADER_DEFAULTS)
    values.update(overrides)
    description = values["description"]
    assert isinstance(description, bytes) and len(description) <= DESCRIPTION_SIZE
    ordered = [values[field.name] for field in dataclasses.fields(Header)]
    return HEADER_STRUCT.pack(*ordered)


def pack_words(words: Iterable[int]) -> bytes:
    words = list(words)
    return struct.pack("<" + "H" * len(words), *words)


def xor(data: bytes, key: int) -> bytes:
    return bytes(byte ^ key for byte in data)


def pack_table(records: Sequence[bytes], xor_key: int = 0) -> bytes:
    """Pack ``[N x u16 offsets][u16 size][payload]``."""
    offsets: List[int] = []
    payload = bytearray()
    for record in records:
        offsets.append(len(payload))
        payload.extend(xor(record, xor_key) if xor_key else record)
    return pack_words(offsets) + struct.pack("<H", len(payload)) + bytes(payload)


def pack_strings(strings: Sequence[str], xor_key: int = 0) -> bytes:
    return pack_table([text.encode("latin1") for text in strings], xor_key)


def pack_flows(flows: Sequence[Sequence[int]]) -> bytes:
    return pack_table([pack_words(words) for words in flows])


def build_script(
    names: Sequence[str],
    paths: Optional[Sequence[str]] = None,
    chapters: Sequence[str] = (),
    titles: Sequence[str] = (),
    fmvs: Sequence[str] = (),
    cutscenes: Sequence[str] = (),
    flows: Optional[Sequence[Sequence[int]]] = None,
    demo_levels: Sequence[int] = (),
    game_strings: Sequence[str] = (),
    extra_strings: Optional[Sequence[str]] = None,
    puzzles: Optional[Sequence[Sequence[str]]] = None,
    pickups: Optional[Sequence[Sequence[str]]] = None,
    keys: Optional[Sequence[Sequence[str]]] = None,
    xor_key: int = 0,
    **header_fields: object,
) -> bytes:
    """Pack a complete script in the order the game reads it."""
    count = len(names)
    if paths is None:
        paths = [f"data\\level{idx}.TR2" for idx in range(count)]
    if flows is None:
        flows = [[Opcode.LEVEL_COMPLETE]] + [[Opcode.LEVEL, idx, Opcode.LEVEL_COMPLETE] for idx in range(count)]
    if extra_strings is None:
        extra_strings = [f"extra {idx}" for idx in range(EXTRA_STRING_COUNT)]
    if puzzles is None:
        puzzles = [[f"P{slot}-{idx}" for idx in range(count)] for slot in range(PUZZLE_SLOTS)]
    if pickups is None:
        pickups = [[f"U{slot}-{idx}" for idx in range(count)] for slot in range(PICKUP_SLOTS)]
    if keys is None:
        keys = [[f"K{slot}-{idx}" for idx in range(count)] for slot in range(KEY_SLOTS)]

    header = pack_header(
        num_levels=count,
        num_chapter_screens=len(chapters),
        num_titles=len(titles),
        num_fmvs=len(fmvs),
        num_cutscenes=len(cutscenes),
        num_demo_levels=len(demo_levels),
        xor_key=xor_key,
        **header_fields,
    )
    parts = [
        header,
        pack_strings(names, xor_key),
        pack_strings(chapters, xor_key),
        pack_strings(titles, xor_key),
        pack_strings(fmvs, xor_key),
        pack_strings(paths, xor_key),
        pack_strings(cutscenes, xor_key),
        pack_flows(flows),
        pack_words(demo_levels),
        struct.pack("<H", len(game_strings)),
        pack_strings(game_strings, xor_key),
        pack_strings(extra_strings, xor_key),
    ]
    for table in list(puzzles) + list(pickups) + list(keys):
        parts.append(pack_strings(table, xor_key))
    return b"".join(parts)
