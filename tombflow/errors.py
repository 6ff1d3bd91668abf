"""Exceptions raised while decoding a gameflow script."""

from __future__ import annotations


class GameflowError(Exception):
    """Base class for every decode failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TruncatedInput(GameflowError):
    def __init__(self, wanted: int, available: int, position: int):
        message = (
            f"Unexpected end of data at offset {position}: "
            f"wanted {wanted} bytes, only {available} available."
        )
        super().__init__(message)
        self.wanted = wanted
        self.available = available
        self.position = position


class MalformedOffsetTable(GameflowError):
    pass


class UnterminatedInstruction(GameflowError):
    def __init__(self, opcode: int, position: int):
        message = f"Opcode {opcode} at word {position} expects an argument but the sequence ends."
        super().__init__(message)
        self.opcode = opcode
        self.position = position


class IndexOutOfRange(GameflowError):
    def __init__(self, table: str, index: int, size: int):
        message = f"Index {index} is out of range for {table} ({size} entries)."
        super().__init__(message)
        self.table = table
        self.index = index
        self.size = size


__all__ = [
    "GameflowError",
    "TruncatedInput",
    "MalformedOffsetTable",
    "UnterminatedInstruction",
    "IndexOutOfRange",
]
