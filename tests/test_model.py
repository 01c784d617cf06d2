from pokervm.ast import Msg, Text
from pokervm.model import (
    TOTAL_CHUNKS,
    LocationLayer,
    MapLayer,
    ParsedScripts,
    RawProject,
    RawTiled,
    Script,
    ScriptEntry,
    ScriptLayer,
)


def test_parsed_scripts_default_has_one_list_per_chunk():
    parsed = ParsedScripts()
    assert len(parsed.chunks) == TOTAL_CHUNKS
    assert all(chunk == [] for chunk in parsed.chunks)


def test_parsed_scripts_chunks_are_independent():
    parsed = ParsedScripts()
    script = Script(body=[], x=0, y=0)
    parsed.chunks[0].append(script)
    assert parsed.chunks[0] == [script]
    assert parsed.chunks[1] == []


def test_parsed_scripts_instances_do_not_share_tables():
    first = ParsedScripts()
    second = ParsedScripts()
    first.tags["home"] = 0
    first.flags["flag_A"] = 0
    assert second.tags == {}
    assert second.flags == {}
    assert len(second.chunks[0]) == 0


def test_script_equality_follows_body_and_position():
    body = [Msg(text=Text("hi", 0))]
    assert Script(body=body, x=1, y=2) == Script(body=list(body), x=1, y=2)
    assert Script(body=body, x=1, y=2) != Script(body=body, x=2, y=2)


def test_script_layer_default_is_empty_and_unshared():
    a = ScriptLayer()
    b = ScriptLayer()
    a.objects.append(ScriptEntry(script="msg {a};", x=0.0, y=0.0))
    assert len(a.objects) == 1
    assert b.objects == []


def test_raw_tiled_and_raw_project_keep_layers():
    layer = ScriptLayer([ScriptEntry(script="msg {a};", x=1.5, y=2.5)])
    tiled = RawTiled(
        map=MapLayer({"name": "map"}),
        scripts=layer,
        locations=LocationLayer({"name": "locations"}),
    )
    project = RawProject(scripts=tiled.scripts)
    assert project.scripts is layer
    assert project.scripts.objects[0].script == "msg {a};"
    assert tiled.map.raw["name"] == "map"
    assert tiled.locations.raw["name"] == "locations"