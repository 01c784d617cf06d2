"""Loading of the Tiled JSON project file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .model import (
    LocationLayer,
    MapLayer,
    RawProject,
    RawTiled,
    ScriptEntry,
    ScriptLayer,
)


class LoadError(ValueError):
    """Raised when the project file does not have the expected shape."""


def load(path: str | Path) -> RawProject:
    """Read the Tiled file at ``path`` and keep the parts processing needs."""
    return tiled_to_raw(load_from_json(Path(path).read_text(encoding="utf-8")))


def load_from_json(json_text: str) -> RawTiled:
    """Parse a Tiled document with exactly the layers map, scripts and locations."""
    try:
        root = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"invalid JSON: {exc}") from exc

    layers = root.get("layers") if isinstance(root, dict) else None
    if not isinstance(layers, list):
        raise LoadError("file has no `layers` array")

    map_layer: MapLayer | None = None
    scripts: ScriptLayer | None = None
    locations: LocationLayer | None = None

    for layer in layers:
        name = layer.get("name") if isinstance(layer, dict) else None
        if not isinstance(name, str):
            raise LoadError("layer missing `name` field")
        if name == "map":
            map_layer = MapLayer(raw=dict(layer))
        elif name == "scripts":
            scripts = _parse_script_layer(layer)
        elif name == "locations":
            locations = LocationLayer(raw=dict(layer))
        else:
            raise LoadError(f"unknown layer `{name}`")

    if map_layer is None:
        raise LoadError("`map` layer missing")
    if scripts is None:
        raise LoadError("`script` layer missing")
    if locations is None:
        raise LoadError("`locations` layer missing")

    return RawTiled(map=map_layer, scripts=scripts, locations=locations)


def _number(obj: dict[str, Any], key: str) -> float:
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LoadError(f"object missing `{key}`")
    return float(value)


def _script_property(obj: dict[str, Any]) -> str:
    props = obj.get("properties")
    if isinstance(props, list):
        for prop in props:
            if (
                isinstance(prop, dict)
                and prop.get("name") == "script"
                and isinstance(prop.get("value"), str)
            ):
                return prop["value"]
    raise LoadError("object missing `script` property")


def _parse_script_layer(layer: dict[str, Any]) -> ScriptLayer:
    objects = layer.get("objects")
    if not isinstance(objects, list):
        raise LoadError("`script` layer has no `objects` array")

    entries = []
    for obj in objects:
        if not isinstance(obj, dict):
            raise LoadError("object missing `x`")
        x = _number(obj, "x")
        y = _number(obj, "y")
        entries.append(ScriptEntry(script=_script_property(obj), x=x, y=y))
    return ScriptLayer(objects=entries)


def tiled_to_raw(tiled: RawTiled) -> RawProject:
    """Keep only the parts of the Tiled file that processing uses."""
    return RawProject(scripts=ScriptLayer(objects=list(tiled.scripts.objects)))