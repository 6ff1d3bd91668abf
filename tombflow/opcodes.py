from __future__ import annotations

from enum import IntEnum
from typing import Dict, FrozenSet


class Opcode(IntEnum):
    PICTURE = 0
    LIST_START = 1
    LIST_END = 2
    FMV = 3
    LEVEL = 4
    CUTSCENE = 5
    LEVEL_COMPLETE = 6
    DEMO = 7
    JUMP_TO_SEQUENCE = 8
    END_SEQUENCE = 9
    TRACK = 10
    SUNSET = 11
    LOAD_PIC = 12
    DEADLY_WATER = 13
    REMOVE_WEAPONS = 14
    GAME_COMPLETE = 15
    CUT_ANGLE = 16
    NO_FLOOR = 17
    START_INV = 18
    START_ANIM = 19
    SECRETS = 20
    KILL_TO_COMPLETE = 21
    REMOVE_AMMO = 22


OPCODE_NAMES: Dict[int, str] = {
    Opcode.PICTURE: "Picture",
    Opcode.LIST_START: "List Start",
    Opcode.LIST_END: "List End",
    Opcode.FMV: "Display FMV",
    Opcode.LEVEL: "Play Level",
    Opcode.CUTSCENE: "Display Cutscene",
    Opcode.LEVEL_COMPLETE: "End Level",
    Opcode.DEMO: "Play Demo",
    Opcode.JUMP_TO_SEQUENCE: "Jump to Sequence",
    Opcode.END_SEQUENCE: "End Sequence",
    Opcode.TRACK: "Play Soundtrack",
    Opcode.SUNSET: "Sunset",
    Opcode.LOAD_PIC: "Load Pic",
    Opcode.DEADLY_WATER: "Deadly Water",
    Opcode.REMOVE_WEAPONS: "Remove Weapons",
    Opcode.GAME_COMPLETE: "Game Complete",
    Opcode.CUT_ANGLE: "Set Cutscene Angle",
    Opcode.NO_FLOOR: "No Floor",
    Opcode.START_INV: "Start Inv",
    Opcode.START_ANIM: "Start Animation",
    Opcode.SECRETS: "Secrets",
    Opcode.KILL_TO_COMPLETE: "Kill to Complete",
    Opcode.REMOVE_AMMO: "Remove Ammo",
}

# Opcodes followed by exactly one argument word. Everything else is a single word.
TR2_ARGUMENT_OPCODES: FrozenSet[int] = frozenset(
    {
        Opcode.PICTURE,
        Opcode.FMV,
        Opcode.LEVEL,
        Opcode.CUTSCENE,
        Opcode.DEMO,
        Opcode.JUMP_TO_SEQUENCE,
        Opcode.TRACK,
        Opcode.LOAD_PIC,
        Opcode.CUT_ANGLE,
        Opcode.NO_FLOOR,
        Opcode.START_INV,
        Opcode.START_ANIM,
        Opcode.SECRETS,
    }
)

# TR3 kept the TR2 gameflow command set unchanged.
TR3_ARGUMENT_OPCODES: FrozenSet[int] = TR2_ARGUMENT_OPCODES

GAMEFLOW_DIALECTS: Dict[str, FrozenSet[int]] = {
    "tr2": TR2_ARGUMENT_OPCODES,
    "tr3": TR3_ARGUMENT_OPCODES,
}
DEFAULT_DIALECT = "tr2"


class Language(IntEnum):
    ENGLISH = 0
    FRENCH = 1
    GERMAN = 2
    AMERICAN = 3
    JAPANESE = 4
    ITALIAN = 5
    SPANISH = 6


LANGUAGE_NAMES: Dict[int, str] = {
    Language.ENGLISH: "English",
    Language.FRENCH: "French",
    Language.GERMAN: "German",
    Language.AMERICAN: "American",
    Language.JAPANESE: "Japanese",
    Language.ITALIAN: "Italian",
    Language.SPANISH: "Spanish",
}


class ScriptEvent(IntEnum):
    """Actions the header's option words (first_option, on_death_*, ...) point at."""

    LOAD_LEVEL = 0
    LOAD_SAVED_GAME = 1
    LOAD_CUTSCENE = 2
    LOAD_FMV = 3
    LOAD_DEMO = 4
    EXIT_TO_TITLE = 5
    EXIT_GAME = 6


EVENT_NAMES: Dict[int, str] = {
    ScriptEvent.LOAD_LEVEL: "Load Level",
    ScriptEvent.LOAD_SAVED_GAME: "Load Saved Game",
    ScriptEvent.LOAD_CUTSCENE: "Load Cutscene",
    ScriptEvent.LOAD_FMV: "Load FMV",
    ScriptEvent.LOAD_DEMO: "Load Random Demo",
    ScriptEvent.EXIT_TO_TITLE: "Exit to Title",
    ScriptEvent.EXIT_GAME: "Exit Game",
}
EVENT_ARGUMENTS: FrozenSet[int] = frozenset(
    {ScriptEvent.LOAD_LEVEL, ScriptEvent.LOAD_SAVED_GAME, ScriptEvent.LOAD_CUTSCENE, ScriptEvent.LOAD_FMV}
)
EVENT_DISABLED = -1


def opcode_name(op: int) -> str:
    name = OPCODE_NAMES.get(op)
    if name is None:
        return f"Unknown (0x{op:02x})"
    return name


def language_name(language_id: int) -> str:
    return LANGUAGE_NAMES.get(language_id, "Unknown")


def argument_opcodes(dialect: str) -> FrozenSet[int]:
    try:
        return GAMEFLOW_DIALECTS[dialect]
    except KeyError:
        raise ValueError(
            f"Unknown gameflow dialect {dialect!r} (expected one of {', '.join(sorted(GAMEFLOW_DIALECTS))})"
        ) from None
