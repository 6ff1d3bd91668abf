from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Sequence, Tuple

from tombflow.flow import Instruction, decode_sequences
from tombflow.header import Header, read_header
from tombflow.opcodes import DEFAULT_DIALECT, Language, argument_opcodes, language_name, opcode_name
from tombflow.reader import ByteReader
from tombflow.tables import read_offset_table

logger = logging.getLogger(__name__)

EXTRA_STRING_COUNT = 41
PUZZLE_SLOTS = 4
PICKUP_SLOTS = 2
KEY_SLOTS = 4


@dataclass(frozen=True)
class Level:
    name: str
    path: str = ""
    chapter: str = ""
    flow: Tuple[Instruction, ...] = ()
    is_demo: bool = False
    puzzles: Tuple[str, ...] = ("",) * PUZZLE_SLOTS
    pickups: Tuple[str, ...] = ("",) * PICKUP_SLOTS
    keys: Tuple[str, ...] = ("",) * KEY_SLOTS


@dataclass(frozen=True)
class Script:
    version: int
    description: str
    language: int
    levels: Tuple[Level, ...]
    titles: Tuple[str, ...] = ()
    fmvs: Tuple[str, ...] = ()
    cutscenes: Tuple[str, ...] = ()
    game_strings: Tuple[str, ...] = ()
    extra_strings: Tuple[str, ...] = ()
    header: Optional[Header] = field(default=None, repr=False, compare=False)

    @property
    def language_name(self) -> str:
        return language_name(self.language)

    @classmethod
    def load(cls, path: Path, dialect: str = DEFAULT_DIALECT) -> "Script":
        with path.open("rb") as stream:
            return read_script(stream, dialect=dialect)


def _slot_values(tables: Sequence[Sequence[str]], index: int) -> Tuple[str, ...]:
    # One table per slot; a table shorter than the level list leaves the slot empty.
    return tuple(table[index] if index < len(table) else "" for table in tables)


def join_levels(
    names: Sequence[str],
    paths: Sequence[str],
    chapters: Sequence[str],
    flows: Sequence[Sequence[Instruction]],
    demo_levels: Sequence[int],
    puzzles: Sequence[Sequence[str]] = (),
    pickups: Sequence[Sequence[str]] = (),
    keys: Sequence[Sequence[str]] = (),
) -> List[Level]:
    """Zip the parallel per-level tables into Level records.

    ``flows[0]`` is the leading sequence of the gameflow table and belongs to no
    level; level ``i`` takes ``flows[i + 1]``. Missing entries in the shorter
    tables fall back to empty defaults, and demo indices past the last level
    are ignored.
    """
    demo_set = {index for index in demo_levels if index < len(names)}
    puzzles = list(puzzles) + [()] * (PUZZLE_SLOTS - len(puzzles))
    pickups = list(pickups) + [()] * (PICKUP_SLOTS - len(pickups))
    keys = list(keys) + [()] * (KEY_SLOTS - len(keys))

    levels: List[Level] = []
    for idx, name in enumerate(names):
        levels.append(
            Level(
                name=name,
                path=paths[idx] if idx < len(paths) else "",
                chapter=chapters[idx] if idx < len(chapters) else "",
                flow=tuple(flows[idx + 1]) if idx + 1 < len(flows) else (),
                is_demo=idx in demo_set,
                puzzles=_slot_values(puzzles, idx),
                pickups=_slot_values(pickups, idx),
                keys=_slot_values(keys, idx),
            )
        )
    return levels


def read_script(stream: BinaryIO, dialect: str = DEFAULT_DIALECT) -> Script:
    """Decode a whole gameflow script from *stream*.

    The stream is read front to back exactly once. Any decode failure raises a
    GameflowError and nothing is returned.
    """
    opcodes = argument_opcodes(dialect)
    reader = ByteReader(stream)
    head = read_header(reader)
    key = head.xor_key
    logger.debug(
        "Header: version %d, %d levels, %d demo levels, xor key 0x%02x, language %d",
        head.version,
        head.num_levels,
        head.num_demo_levels,
        key,
        head.language_id,
    )

    def strings(count: int, name: str) -> List[str]:
        return read_offset_table(reader, count, name).text_records(key)

    level_names = strings(head.num_levels, "level names")
    chapter_paths = strings(head.num_chapter_screens, "chapter screens")
    title_paths = strings(head.num_titles, "title screens")
    fmv_paths = strings(head.num_fmvs, "FMVs")
    level_paths = strings(head.num_levels, "level paths")
    cutscene_paths = strings(head.num_cutscenes, "cutscenes")
    game_flow = decode_sequences(read_offset_table(reader, head.num_levels + 1, "gameflow"), opcodes)
    demo_levels = reader.read_u16_array(head.num_demo_levels)
    game_strings = strings(reader.read_u16(), "game strings")
    extra_strings = strings(EXTRA_STRING_COUNT, "extra strings")
    puzzles = [strings(head.num_levels, f"puzzle slot {slot}") for slot in range(PUZZLE_SLOTS)]
    pickups = [strings(head.num_levels, f"pickup slot {slot}") for slot in range(PICKUP_SLOTS)]
    keys = [strings(head.num_levels, f"key slot {slot}") for slot in range(KEY_SLOTS)]

    levels = join_levels(
        level_names,
        level_paths,
        chapter_paths,
        game_flow,
        demo_levels,
        puzzles=puzzles,
        pickups=pickups,
        keys=keys,
    )
    logger.debug("Decoded %d levels, stopped at offset %d", len(levels), reader.position)

    return Script(
        version=head.version,
        description=head.description_text(),
        language=_as_language(head.language_id),
        levels=tuple(levels),
        titles=tuple(title_paths),
        fmvs=tuple(fmv_paths),
        cutscenes=tuple(cutscene_paths),
        game_strings=tuple(game_strings),
        extra_strings=tuple(extra_strings),
        header=head,
    )


def load_script(path: Path, dialect: str = DEFAULT_DIALECT) -> Script:
    return Script.load(Path(path), dialect=dialect)


def _as_language(language_id: int) -> int:
    try:
        return Language(language_id)
    except ValueError:
        return language_id


def _instruction_to_dict(instruction: Instruction) -> Dict[str, object]:
    entry: Dict[str, object] = {"op": int(instruction.op), "name": opcode_name(instruction.op)}
    if instruction.arg is not None:
        entry["arg"] = instruction.arg
    return entry


def script_to_dict(script: Script) -> Dict[str, object]:
    """Return JSON-ready data for *script*."""
    header = asdict(script.header) if script.header is not None else None
    if header is not None:
        header["description"] = script.description
    return {
        "version": script.version,
        "description": script.description,
        "language": script.language_name,
        "header": header,
        "levels": [
            {
                "index": idx,
                "name": level.name,
                "path": level.path,
                "chapter": level.chapter,
                "is_demo": level.is_demo,
                "puzzles": list(level.puzzles),
                "pickups": list(level.pickups),
                "keys": list(level.keys),
                "flow": [_instruction_to_dict(instruction) for instruction in level.flow],
            }
            for idx, level in enumerate(script.levels)
        ],
        "titles": list(script.titles),
        "fmvs": list(script.fmvs),
        "cutscenes": list(script.cutscenes),
        "game_strings": list(script.game_strings),
        "extra_strings": list(script.extra_strings),
    }
