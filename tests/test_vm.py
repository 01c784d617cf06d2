import pytest

from pokervm.ast import Msg, Text
from pokervm.model import ParsedScripts, ScriptEntry, ScriptLayer
from pokervm.script_parser import parse_scripts
from pokervm.vm import CHUNK_BYTE_LIMIT, AssembleError, assemble_scripts


def _pipe(entries):
    parsed = parse_scripts(ScriptLayer(objects=entries))
    return parsed, assemble_scripts(parsed)


def test_assemble_multiple_scripts_same_chunk():
    parsed, processed = _pipe(
        [
            ScriptEntry(script="msg {a};", x=1.0, y=1.0),
            ScriptEntry(script="msg {b};", x=2.0, y=1.0),
        ]
    )
    assert len(parsed.chunks[0]) == 2
    assert processed.offsets == [0, 4]
    assert processed.blob == bytes([0, 0, 0, 0, 0, 1, 0, 0])


def test_chunk_too_large_error():
    entries = [ScriptEntry(script="msg {x};", x=0.0, y=0.0) for _ in range(129)]
    parsed = parse_scripts(ScriptLayer(objects=entries))
    with pytest.raises(AssembleError) as info:
        assemble_scripts(parsed)
    assert str(info.value).startswith("chunk 0 too large")


def test_chunk_at_limit_is_accepted():
    entries = [ScriptEntry(script="msg {x};", x=0.0, y=0.0) for _ in range(128)]
    _, processed = _pipe(entries)
    assert len(processed.blob) == CHUNK_BYTE_LIMIT
    assert len(processed.offsets) == 128


def test_empty_input_gives_empty_blob():
    processed = assemble_scripts(ParsedScripts())
    assert processed.blob == b""
    assert processed.offsets == []
    assert processed.names == []


def test_chunks_are_concatenated_in_order():
    _, processed = _pipe(
        [
            ScriptEntry(script="msg {second};", x=8.0, y=0.0),
            ScriptEntry(script="msg {first};", x=0.0, y=0.0),
        ]
    )
    first = Msg(Text("first", 1)).to_bytes() + b"\x00"
    second = Msg(Text("second", 0)).to_bytes() + b"\x00"
    assert processed.blob == first + second
    assert processed.offsets == [0, len(first)]


def test_offsets_point_at_opcodes():
    parsed, processed = _pipe(
        [
            ScriptEntry(script="tp 1 2 3 4 setflag flag_A msg {m};", x=0.0, y=0.0),
            ScriptEntry(script="tmsg @place {t};", x=20.0, y=9.0),
        ]
    )
    commands = [
        cmd
        for chunk in parsed.chunks
        for script in chunk
        for cmd in script.body
    ]
    assert len(processed.offsets) == len(commands)
    for offset, cmd in zip(processed.offsets, commands):
        encoded = cmd.to_bytes()
        assert processed.blob[offset : offset + len(encoded)] == encoded
        assert processed.blob[offset + len(encoded)] == 0
    assert len(processed.blob) == sum(len(c.to_bytes()) + 1 for c in commands)