"""Assembler that lowers parsed scripts into one byte-code blob."""

from __future__ import annotations

from dataclasses import dataclass, field

from .model import ParsedScripts

CHUNK_BYTE_LIMIT = 512
_COMMAND_TERMINATOR = b"\x00"
_U16_MAX = 0xFFFF


class AssembleError(ValueError):
    """Raised when the parsed scripts cannot be assembled."""


@dataclass
class ProcessedScripts:
    """Byte-code of all scripts and the start offset of every command."""

    blob: bytes = b""
    offsets: list[int] = field(default_factory=list)
    names: list[str] = field(default_factory=list)


def assemble_scripts(parsed_scripts: ParsedScripts) -> ProcessedScripts:
    """Encode every command of every chunk, in chunk order.

    Each command is followed by a zero terminator. A chunk may take at most
    ``CHUNK_BYTE_LIMIT`` bytes.
    """
    blob = bytearray()
    offsets: list[int] = []

    for chunk_idx, chunk in enumerate(parsed_scripts.chunks):
        base = len(blob)
        encoded = bytearray()
        for script in chunk:
            for cmd in script.body:
                offset = base + len(encoded)
                if offset > _U16_MAX:
                    raise AssembleError(
                        f"offset {offset} of chunk {chunk_idx} does not fit in 16 bits"
                    )
                offsets.append(offset)
                encoded += cmd.to_bytes()
                encoded += _COMMAND_TERMINATOR

        if len(encoded) > CHUNK_BYTE_LIMIT:
            raise AssembleError(
                f"chunk {chunk_idx} too large, {len(encoded)} bytes "
                f"instead of {CHUNK_BYTE_LIMIT}"
            )
        blob += encoded

    return ProcessedScripts(blob=bytes(blob), offsets=offsets, names=[])