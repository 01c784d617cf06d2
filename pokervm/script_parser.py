"""Parser that turns script source into command trees and groups them by chunk.

Supported commands:
  msg        {text}
  tmsg       @loc {text}
  tp         x1 y1 x2 y2 | @loc1 @loc2 (mixed forms allowed)
  if         cond then <cmd> [else <cmd>] endif
  setflag    flag_<n>
  unsetflag  flag_<n>
  readflag   flag_<n>
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ast import (
    Cmd,
    Cords,
    FlagClear,
    FlagSet,
    If,
    Msg,
    ReadFlag,
    SetFlag,
    Tag,
    Text,
    Then,
    ThenElse,
    TMsg,
    Tp,
    UnsetFlag,
)
from .lexer import LexError, Lexer, Token, TokenKind
from .model import (
    CHUNK_COLS,
    CHUNK_H,
    CHUNK_W,
    TOTAL_CHUNKS,
    ParsedScripts,
    Script,
    ScriptLayer,
)

# Indices are stored as u8 (tags, flags) and u16 (texts); the counter that
# hands them out must itself stay within that width.
_U8_LIMIT = 0xFF
_U16_LIMIT = 0xFFFF


class ParseError(ValueError):
    """Raised when a script cannot be parsed."""


def _intern(table: dict[str, int], key: str, limit: int, what: str) -> int:
    if key not in table:
        if len(table) >= limit:
            raise ParseError(f"too many {what}: limit is {limit}")
        table[key] = len(table)
    return table[key]


@dataclass
class Controller:
    """Symbol tables shared by all scripts: each name gets a stable index."""

    tags: dict[str, int] = field(default_factory=dict)
    flags: dict[str, int] = field(default_factory=dict)
    texts: dict[str, int] = field(default_factory=dict)

    def insert_tag(self, tag: str) -> int:
        return _intern(self.tags, tag, _U8_LIMIT, "tags")

    def insert_flag(self, flag: str) -> int:
        return _intern(self.flags, flag, _U8_LIMIT, "flags")

    def insert_text(self, text: str) -> int:
        return _intern(self.texts, text, _U16_LIMIT, "texts")


class Parser:
    """Recursive-descent parser over the tokens of one script."""

    def __init__(self, src: str, controller: Controller | None = None) -> None:
        self._tokens = Lexer(src)
        self._lookahead: Token | None = None
        self.controller = controller if controller is not None else Controller()

    def _fetch(self) -> Token:
        try:
            return next(self._tokens)
        except StopIteration:
            raise ParseError("unexpected end of script") from None
        except LexError as exc:
            raise ParseError(str(exc)) from exc

    def _peek(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self._fetch()
        return self._lookahead

    def _next(self) -> Token:
        if self._lookahead is not None:
            token, self._lookahead = self._lookahead, None
            return token
        return self._fetch()

    def parse(self) -> list[Cmd]:
        """Parse every command up to the terminating ``;``."""
        commands = []
        while self._peek().kind is not TokenKind.EOF:
            commands.append(self.parse_cmd())
        return commands

    def parse_cmd(self) -> Cmd:
        """Parse a single command."""
        token = self._next()
        if token.kind is not TokenKind.IDENT:
            raise ParseError(f"parse: invalid token: {token!r}")
        name = token.value
        if name == "msg":
            return self._parse_msg()
        if name == "tmsg":
            return self._parse_tmsg()
        if name == "tp":
            return self._parse_tp()
        if name == "if":
            return self._parse_if()
        if name in ("setflag", "unsetflag", "readflag"):
            return self._parse_flag_cmd(name)
        raise ParseError(f"parse: invalid ident token: {name}")

    def _text(self, text: str) -> Text:
        return Text(text, self.controller.insert_text(text))

    def _parse_msg(self) -> Msg:
        return Msg(self._text(self._parse_text()))

    def _parse_tmsg(self) -> TMsg:
        at = self._parse_location()
        return TMsg(at, self._text(self._parse_text()))

    def _parse_tp(self) -> Tp:
        source = self._parse_location()
        target = self._parse_location()
        return Tp(source, target)

    def _parse_if(self) -> If:
        condition = self._parse_condition()
        then_cmd = self._parse_branch()
        if then_cmd is None:
            raise ParseError("if branch must have then branch")
        else_cmd = self._parse_branch()
        if else_cmd is None:
            return If(condition, Then(then_cmd))

        token = self._next()
        if token.kind is not TokenKind.IDENT:
            raise ParseError("invalid token after tp")
        if token.value != "endif":
            raise ParseError("invalid token after if, expected endif")
        return If(condition, ThenElse(then_cmd, else_cmd))

    def _parse_text(self) -> str:
        token = self._next()
        if token.kind is not TokenKind.TEXT:
            raise ParseError("invalid token after tp")
        return token.value

    def _parse_location(self) -> Cords | Tag:
        token = self._next()
        if token.kind is TokenKind.AT:
            return Tag(Text(token.value, self.controller.insert_tag(token.value)))
        if token.kind is TokenKind.NUMBER:
            try:
                second = self._next()
            except ParseError as exc:
                raise ParseError(f"invalid token after tp {exc}") from exc
            if second.kind is not TokenKind.NUMBER:
                raise ParseError("invalid token after number")
            return Cords(token.value, second.value)
        raise ParseError("invalid token after tp")

    def _parse_condition(self) -> FlagSet | FlagClear:
        token = self._next()
        if token.kind is TokenKind.IDENT:
            return FlagSet(Text(token.value, self.controller.insert_flag(token.value)))
        if token.kind is TokenKind.BANG:
            return FlagClear(Text(token.value, self.controller.insert_flag(token.value)))
        raise ParseError("invalid token after if")

    def _parse_branch(self) -> Cmd | None:
        # The leading keyword (``then`` / ``else``) is consumed; ``endif``
        # closes the if without a branch.
        token = self._next()
        if token.kind is not TokenKind.IDENT:
            raise ParseError("invalid token after if")
        if token.value == "endif":
            return None
        return self.parse_cmd()

    def _parse_flag_cmd(self, op: str) -> Cmd:
        try:
            token = self._next()
        except ParseError as exc:
            if exc.__cause__ is None:
                raise ParseError("expected flag after command") from None
            raise
        if token.kind is not TokenKind.IDENT or not token.value.startswith("flag_"):
            raise ParseError(f"invalid flag token: {token!r}")
        flag = Text(token.value, self.controller.insert_flag(token.value))
        if op == "setflag":
            return SetFlag(flag)
        if op == "unsetflag":
            return UnsetFlag(flag)
        return ReadFlag(flag)


def _div_toward_zero(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def chunk_index(x: int, y: int) -> int:
    """Linear, row-major chunk index of the map tile ``(x, y)``."""
    cx = _div_toward_zero(x, CHUNK_W)
    cy = _div_toward_zero(y, CHUNK_H)
    return cy * CHUNK_COLS + cx


def parse_scripts(scripts: ScriptLayer) -> ParsedScripts:
    """Parse every script of the layer and sort them into map chunks."""
    controller = Controller()
    parsed = ParsedScripts()

    for entry in scripts.objects:
        body = Parser(entry.script, controller).parse()
        x = int(entry.x)
        y = int(entry.y)
        idx = chunk_index(x, y)
        if not 0 <= idx < TOTAL_CHUNKS:
            raise ParseError(f"script at ({x}, {y}) lies outside the map")
        parsed.chunks[idx].append(Script(body=body, x=x, y=y))

    parsed.tags = controller.tags
    parsed.flags = controller.flags
    parsed.texts = controller.texts
    return parsed