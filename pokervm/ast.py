"""Script syntax tree and its byte-code encoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union


class Opcode(IntEnum):
    """One-byte discriminant of each command in the byte-code stream."""

    MSG = 0
    TMSG = 1
    TP = 2
    IF = 3
    SET_FLAG = 4
    UNSET_FLAG = 5
    READ_FLAG = 6
    END = 7


def _u16(value: int) -> bytes:
    return struct.pack("<H", value)


@dataclass(frozen=True)
class Text:
    """A string together with the numeric id assigned by the parser."""

    text: str
    index: int

    def to_bytes(self) -> bytes:
        return _u16(self.index)


@dataclass(frozen=True)
class Cords:
    """A location given as tile coordinates."""

    x: int
    y: int

    def to_bytes(self) -> bytes:
        return b"\x00" + _u16(self.x) + _u16(self.y)


@dataclass(frozen=True)
class Tag:
    """A location given by a named tag."""

    tag: Text

    def to_bytes(self) -> bytes:
        return b"\x01" + self.tag.to_bytes()


Location = Union[Cords, Tag]


@dataclass(frozen=True)
class FlagSet:
    """Condition that holds when the flag is set."""

    flag: Text

    def to_bytes(self) -> bytes:
        return b"\x00" + self.flag.to_bytes()


@dataclass(frozen=True)
class FlagClear:
    """Condition that holds when the flag is clear."""

    flag: Text

    def to_bytes(self) -> bytes:
        return b"\x01" + self.flag.to_bytes()


Condition = Union[FlagSet, FlagClear]


@dataclass(frozen=True)
class ThenElse:
    """An if with both a then and an else command."""

    then: Cmd
    otherwise: Cmd

    def to_bytes(self) -> bytes:
        return b"\x00" + self.then.to_bytes() + self.otherwise.to_bytes()


@dataclass(frozen=True)
class Then:
    """An if with only a then command."""

    then: Cmd

    def to_bytes(self) -> bytes:
        return b"\x01" + self.then.to_bytes()


Branch = Union[ThenElse, Then]


class Cmd:
    """Base of all script commands."""

    VARIANT_NAMES: ClassVar[tuple[str, ...]] = (
        "Msg",
        "TMsg",
        "Tp",
        "If",
        "SetFlag",
        "UnsetFlag",
        "ReadFlag",
        "End",
    )
    opcode: ClassVar[Opcode]

    def _operand_bytes(self) -> bytes:
        return b""

    def to_bytes(self) -> bytes:
        return bytes((self.opcode,)) + self._operand_bytes()


@dataclass(frozen=True)
class Msg(Cmd):
    """``msg {text}``"""

    text: Text
    opcode: ClassVar[Opcode] = Opcode.MSG

    def _operand_bytes(self) -> bytes:
        return self.text.to_bytes()


@dataclass(frozen=True)
class TMsg(Cmd):
    """``tmsg @loc {text}``"""

    at: Location
    text: Text
    opcode: ClassVar[Opcode] = Opcode.TMSG

    def _operand_bytes(self) -> bytes:
        return self.at.to_bytes() + self.text.to_bytes()


@dataclass(frozen=True)
class Tp(Cmd):
    """``tp <from> <to>``"""

    source: Location
    target: Location
    opcode: ClassVar[Opcode] = Opcode.TP

    def _operand_bytes(self) -> bytes:
        return self.source.to_bytes() + self.target.to_bytes()


@dataclass(frozen=True)
class If(Cmd):
    """``if <cond> then <cmd> [else <cmd>] endif``"""

    condition: Condition
    branches: Branch
    opcode: ClassVar[Opcode] = Opcode.IF

    def _operand_bytes(self) -> bytes:
        return self.condition.to_bytes() + self.branches.to_bytes()


@dataclass(frozen=True)
class SetFlag(Cmd):
    """``setflag flag_X``"""

    flag: Text
    opcode: ClassVar[Opcode] = Opcode.SET_FLAG

    def _operand_bytes(self) -> bytes:
        return self.flag.to_bytes()


@dataclass(frozen=True)
class UnsetFlag(Cmd):
    """``unsetflag flag_X``"""

    flag: Text
    opcode: ClassVar[Opcode] = Opcode.UNSET_FLAG

    def _operand_bytes(self) -> bytes:
        return self.flag.to_bytes()


@dataclass(frozen=True)
class ReadFlag(Cmd):
    """``readflag flag_X``"""

    flag: Text
    opcode: ClassVar[Opcode] = Opcode.READ_FLAG

    def _operand_bytes(self) -> bytes:
        return self.flag.to_bytes()


@dataclass(frozen=True)
class End(Cmd):
    """``end``"""

    opcode: ClassVar[Opcode] = Opcode.END