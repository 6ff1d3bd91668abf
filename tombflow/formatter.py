"""Human-readable rendering of gameflow commands and header events."""

from __future__ import annotations

from typing import Sequence, TypeVar

from tombflow.errors import IndexOutOfRange
from tombflow.flow import Instruction
from tombflow.opcodes import EVENT_ARGUMENTS, EVENT_DISABLED, EVENT_NAMES, Opcode, opcode_name
from tombflow.script import Script

T = TypeVar("T")


def _lookup(table: Sequence[T], index: int, name: str) -> T:
    if not 0 <= index < len(table):
        raise IndexOutOfRange(name, index, len(table))
    return table[index]


def format_command(script: Script, instruction: Instruction) -> str:
    """Render *instruction*, replacing table indices with the entries they name.

    For example ``(LEVEL, 0)`` becomes ``Play Level 'data\\jungle.TR2' (Jungle)``.
    """
    name = opcode_name(instruction.op)
    arg = instruction.arg
    if arg is None:
        return name
    if instruction.op == Opcode.LOAD_PIC:
        return f"{name} '{_lookup(script.levels, arg, 'levels').chapter}'"
    if instruction.op == Opcode.FMV:
        return f"{name} '{_lookup(script.fmvs, arg, 'FMVs')}'"
    if instruction.op == Opcode.LEVEL:
        level = _lookup(script.levels, arg, "levels")
        return f"{name} '{level.path}' ({level.name})"
    if instruction.op == Opcode.CUTSCENE:
        return f"{name} '{_lookup(script.cutscenes, arg, 'cutscenes')}'"
    return f"{name} {arg}"


def format_event(value: int) -> str:
    """Render one of the header's option words (first_option, on_death_in_game, ...).

    -1 disables the option. Otherwise bits 8-15 select the event and the low
    byte is its argument (a level, saved game slot, cutscene or FMV index).
    """
    if value == EVENT_DISABLED:
        return "Disabled"
    event = (value >> 8) & 0xFF
    name = EVENT_NAMES.get(event)
    if name is None:
        return f"Unknown Event 0x{value & 0xFFFFFFFF:08x}"
    if event in EVENT_ARGUMENTS:
        return f"{name} {value & 0xFF}"
    return name
