"""Gameflow instruction streams.

A gameflow record is a list of u16 words. Each instruction is one opcode word,
optionally followed by one argument word. Whether an argument follows is not
stored in the stream; it depends only on the opcode, so the scanner is handed
the set of argument-bearing opcodes for the game being decoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence

from tombflow.errors import UnterminatedInstruction
from tombflow.opcodes import DEFAULT_DIALECT, GAMEFLOW_DIALECTS, Opcode, opcode_name
from tombflow.tables import OffsetTable


@dataclass(frozen=True)
class Instruction:
    op: int
    arg: Optional[int] = None

    def __str__(self) -> str:
        if self.arg is None:
            return opcode_name(self.op)
        return f"{opcode_name(self.op)} {self.arg}"


def _as_opcode(word: int) -> int:
    try:
        return Opcode(word)
    except ValueError:
        return word


def decode_sequence(
    words: Sequence[int],
    argument_opcodes: AbstractSet[int] = GAMEFLOW_DIALECTS[DEFAULT_DIALECT],
) -> List[Instruction]:
    instructions: List[Instruction] = []
    pos = 0
    while pos < len(words):
        op = _as_opcode(words[pos])
        if op in argument_opcodes:
            if pos + 1 >= len(words):
                raise UnterminatedInstruction(int(op), pos)
            instructions.append(Instruction(op=op, arg=words[pos + 1]))
            pos += 2
        else:
            instructions.append(Instruction(op=op))
            pos += 1
    return instructions


def decode_sequences(
    table: OffsetTable,
    argument_opcodes: AbstractSet[int] = GAMEFLOW_DIALECTS[DEFAULT_DIALECT],
) -> List[List[Instruction]]:
    return [decode_sequence(words, argument_opcodes) for words in table.word_records()]
