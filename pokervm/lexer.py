"""Tokeniser for the script language.

Keywords are not recognised here: ``msg``, ``tp`` and so on come out as
identifiers and are interpreted by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Union

_U16_MAX = 0xFFFF
_BLANKS = " \t\r"


class LexError(ValueError):
    """Raised when the source cannot be split into tokens."""


class TokenKind(Enum):
    IDENT = auto()
    NUMBER = auto()
    TEXT = auto()
    AT = auto()
    BANG = auto()
    SEMICOLON = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A token; ``value`` is a str, an int for numbers, or None."""

    kind: TokenKind
    value: Union[str, int, None] = None


def _is_digit(c: str) -> bool:
    return c.isascii() and c.isdigit()


def _is_ident_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == "_")


class Lexer:
    """Iterator of tokens over one script; stops after the closing ``;``."""

    def __init__(self, src: str) -> None:
        self._src = src
        self._pos = 0
        self._finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def _peek(self) -> str | None:
        return self._src[self._pos] if self._pos < len(self._src) else None

    def _advance(self) -> str | None:
        c = self._peek()
        if c is not None:
            self._pos += 1
        return c

    def _consume_while(self, pred) -> str:
        start = self._pos
        while (c := self._peek()) is not None and pred(c):
            self._pos += 1
        return self._src[start:self._pos]

    def _read_identifier(self, first: str) -> str:
        return first + self._consume_while(_is_ident_char)

    def _read_number(self, first: str) -> int:
        value = int(first + self._consume_while(_is_digit))
        if value > _U16_MAX:
            raise LexError(f"value too large for uint16: {value}")
        return value

    def _read_text(self) -> str:
        end = self._src.find("}", self._pos)
        if end < 0:
            self._pos = len(self._src)
            raise LexError("no closing } found")
        text = self._src[self._pos:end]
        self._pos = end + 1
        return text

    def __next__(self) -> Token:
        if self._finished:
            raise StopIteration

        while (c := self._peek()) is not None and c in _BLANKS:
            self._pos += 1

        ch = self._advance()
        if ch is None:
            raise LexError("Missing end of script ;")

        if ch == "@":
            return Token(TokenKind.AT, self._read_identifier(self._advance() or "\0"))
        if ch == "!":
            return Token(TokenKind.BANG, self._read_identifier(self._advance() or "\0"))
        if ch == "{":
            return Token(TokenKind.TEXT, self._read_text())
        if ch == ";":
            self._finished = True
            return Token(TokenKind.EOF)
        if _is_digit(ch):
            return Token(TokenKind.NUMBER, self._read_number(ch))
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            return Token(TokenKind.IDENT, self._read_identifier(ch))
        raise LexError(f"Unexpected character {ch}")


def tokenize(src: str) -> list[Token]:
    """Return every token of ``src`` up to and including the end marker."""
    return list(Lexer(src))