"""World geometry constants and the data structures passed between stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .ast import Cmd

if TYPE_CHECKING:
    from .vm import ProcessedScripts

MAP_W = 256
MAP_H = 256

CHUNK_W = 8
CHUNK_H = 4

CHUNK_COLS = MAP_W // CHUNK_W
CHUNK_ROWS = MAP_H // CHUNK_H
TOTAL_CHUNKS = CHUNK_COLS * CHUNK_ROWS


def _empty_chunks() -> list[list[Script]]:
    return [[] for _ in range(TOTAL_CHUNKS)]


@dataclass
class Script:
    """A parsed script and the map tile it is attached to."""

    body: list[Cmd]
    x: int
    y: int


@dataclass
class ParsedScripts:
    """Scripts grouped by chunk, plus the symbol tables built while parsing.

    ``chunks`` always holds exactly ``TOTAL_CHUNKS`` lists.
    """

    chunks: list[list[Script]] = field(default_factory=_empty_chunks)
    tags: dict[str, int] = field(default_factory=dict)
    flags: dict[str, int] = field(default_factory=dict)
    texts: dict[str, int] = field(default_factory=dict)


@dataclass
class ScriptEntry:
    """One object of the Tiled script layer."""

    script: str
    x: float
    y: float


@dataclass
class ScriptLayer:
    """All objects of the Tiled script layer."""

    objects: list[ScriptEntry] = field(default_factory=list)


@dataclass
class MapLayer:
    """The map layer, kept as raw JSON."""

    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class LocationLayer:
    """The locations layer, kept as raw JSON."""

    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class RawTiled:
    """The whole Tiled file as it comes out of the JSON loader."""

    map: MapLayer
    scripts: ScriptLayer
    locations: LocationLayer


@dataclass
class RawProject:
    """The parts of the project the processing stage needs."""

    scripts: ScriptLayer


@dataclass
class ProcessedProject:
    """Fully processed output handed to the writers."""

    vm: ProcessedScripts