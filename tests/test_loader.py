import json

import pytest

from pokervm.loader import LoadError, load, load_from_json, tiled_to_raw


def _script_obj(script, x, y):
    return {
        "x": x,
        "y": y,
        "properties": [
            {"name": "other", "value": "ignored"},
            {"name": "script", "value": script},
        ],
    }


def _document():
    return {
        "layers": [
            {"name": "map", "width": 256, "height": 256, "data": [1, 2, 3]},
            {
                "name": "scripts",
                "objects": [
                    _script_obj("tp @test_teleport @test_house", 7.8261, 75.3462),
                    _script_obj("msg {hello};", 16, 8),
                ],
            },
            {"name": "locations", "objects": []},
        ]
    }


def test_parses_script_objects():
    proj = load_from_json(json.dumps(_document()))
    assert len(proj.scripts.objects) == 2
    first = proj.scripts.objects[0]
    assert first.script == "tp @test_teleport @test_house"
    assert abs(first.x - 7.8261) < 1e-3
    assert abs(first.y - 75.3462) < 1e-3


def test_integer_coordinates_are_accepted():
    proj = load_from_json(json.dumps(_document()))
    second = proj.scripts.objects[1]
    assert (second.x, second.y) == (16.0, 8.0)
    assert second.script == "msg {hello};"


def test_map_and_locations_kept_raw():
    proj = load_from_json(json.dumps(_document()))
    assert proj.map.raw["data"] == [1, 2, 3]
    assert proj.locations.raw["name"] == "locations"


def test_load_reads_file(tmp_path):
    path = tmp_path / "world.json"
    path.write_text(json.dumps(_document()), encoding="utf-8")
    raw = load(path)
    assert [e.script for e in raw.scripts.objects] == [
        "tp @test_teleport @test_house",
        "msg {hello};",
    ]


def test_tiled_to_raw_keeps_scripts():
    tiled = load_from_json(json.dumps(_document()))
    raw = tiled_to_raw(tiled)
    assert raw.scripts == tiled.scripts


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load(tmp_path / "absent.json")


def test_invalid_json():
    with pytest.raises(LoadError):
        load_from_json("{not json")


def test_no_layers_array():
    with pytest.raises(LoadError, match="no `layers` array"):
        load_from_json(json.dumps({"layers": 3}))


def test_layer_without_name():
    doc = _document()
    doc["layers"].append({"objects": []})
    with pytest.raises(LoadError, match="layer missing `name` field"):
        load_from_json(json.dumps(doc))


def test_unknown_layer():
    doc = _document()
    doc["layers"].append({"name": "extra"})
    with pytest.raises(LoadError, match="unknown layer `extra`"):
        load_from_json(json.dumps(doc))


@pytest.mark.parametrize(
    "name, message",
    [
        ("map", "`map` layer missing"),
        ("scripts", "`script` layer missing"),
        ("locations", "`locations` layer missing"),
    ],
)
def test_missing_layer(name, message):
    doc = _document()
    doc["layers"] = [layer for layer in doc["layers"] if layer["name"] != name]
    with pytest.raises(LoadError, match=message):
        load_from_json(json.dumps(doc))


def test_script_layer_without_objects():
    doc = _document()
    del doc["layers"][1]["objects"]
    with pytest.raises(LoadError, match="no `objects` array"):
        load_from_json(json.dumps(doc))


@pytest.mark.parametrize("key", ["x", "y"])
def test_object_missing_coordinate(key):
    doc = _document()
    del doc["layers"][1]["objects"][0][key]
    with pytest.raises(LoadError, match=f"object missing `{key}`"):
        load_from_json(json.dumps(doc))


def test_object_missing_script_property():
    doc = _document()
    doc["layers"][1]["objects"][0]["properties"] = [{"name": "other", "value": "x"}]
    with pytest.raises(LoadError, match="missing `script` property"):
        load_from_json(json.dumps(doc))