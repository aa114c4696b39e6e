"""JSON schema of scene files and validation against it."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator


class SchemaError(ValueError):
    """Raised when a document does not match the scene schema."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__(f"document is not a valid scene file: {len(messages)} error(s)")


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/definitions/{name}"}


_WRAPPED = {
    "type": "object",
    "properties": {"u": {"type": "boolean"}, "v": {"type": "boolean"}},
    "additionalProperties": False,
    "required": ["u", "v"],
}


def _curve(type_name: str, points_key: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "objectType": {"const": type_name},
            "id": _ref("uint"),
            "name": {"type": "string"},
            points_key: _ref("geometry/controlPoints"),
        },
        "required": ["objectType", "id", points_key],
        "additionalProperties": False,
    }


def _patch(type_name: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "objectType": {"const": type_name},
            "id": _ref("uint"),
            "name": {"type": "string"},
            "controlPoints": _ref("geometry/patchControlPoints"),
            "samples": _ref("uint2"),
        },
        "required": ["objectType", "id", "controlPoints", "samples"],
        "additionalProperties": False,
    }


def _surface(type_name: str, patch_name: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "objectType": {"const": type_name},
            "id": _ref("uint"),
            "name": {"type": "string"},
            "patches": {"type": "array", "items": _ref(f"geometry/{patch_name}")},
            "parameterWrapped": _WRAPPED,
            "size": _ref("uint2"),
        },
        "required": ["objectType", "id", "patches", "parameterWrapped", "size"],
        "additionalProperties": False,
    }


SCENE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "camera": {
            "type": "object",
            "properties": {
                "focusPoint": _ref("float3"),
                "distance": {"type": "number"},
                "rotation": _ref("float2"),
            },
            "required": ["focusPoint", "distance", "rotation"],
            "additionalProperties": False,
        },
        "points": {"type": "array", "items": _ref("geometry/point")},
        "geometry": {
            "type": "array",
            "items": {
                "oneOf": [
                    _ref("geometry/torus"),
                    _ref("geometry/bezierC0"),
                    _ref("geometry/bezierC2"),
                    _ref("geometry/interpolatedC2"),
                    _ref("geometry/bezierSurfaceC0"),
                    _ref("geometry/bezierSurfaceC2"),
                ]
            },
        },
    },
    "additionalProperties": False,
    "definitions": {
        "normalizedValue": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "positiveValue": {"type": "number", "minimum": 0.0},
        "uint": {"type": "integer", "minimum": 0},
        "float2": {
            "type": "object",
            "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
            "required": ["x", "y"],
            "additionalProperties": False,
        },
        "float3": {
            "type": "object",
            "properties": {"x": {"type": "number"}, "y": {"type": "number"}, "z": {"type": "number"}},
            "required": ["x", "y", "z"],
            "additionalProperties": False,
        },
        "uint2": {
            "type": "object",
            "properties": {"x": _ref("uint"), "y": _ref("uint")},
            "required": ["x", "y"],
            "additionalProperties": False,
        },
        "geometry": {
            "point": {
                "type": "object",
                "properties": {
                    "id": _ref("uint"),
                    "name": {"type": "string"},
                    "position": _ref("float3"),
                },
                "required": ["id", "position"],
                "additionalProperties": False,
            },
            "pointRef": {
                "type": "object",
                "properties": {"id": _ref("uint")},
                "required": ["id"],
                "additionalProperties": False,
            },
            "controlPoints": {"type": "array", "items": _ref("geometry/pointRef")},
            "patchControlPoints": {
                "type": "array",
                "items": _ref("geometry/pointRef"),
                "minItems": 16,
                "maxItems": 16,
            },
            "torus": {
                "type": "object",
                "properties": {
                    "objectType": {"const": "torus"},
                    "id": _ref("uint"),
                    "name": {"type": "string"},
                    "position": _ref("float3"),
                    "rotation": _ref("float3"),
                    "scale": _ref("float3"),
                    "samples": _ref("uint2"),
                    "smallRadius": {"type": "number", "minimum": 0.0},
                    "largeRadius": {"type": "number", "minimum": 0.0},
                },
                "required": [
                    "objectType",
                    "id",
                    "position",
                    "rotation",
                    "scale",
                    "samples",
                    "smallRadius",
                    "largeRadius",
                ],
                "additionalProperties": False,
            },
            "bezierC0": _curve("bezierC0", "controlPoints"),
            "bezierC2": _curve("bezierC2", "deBoorPoints"),
            "interpolatedC2": _curve("interpolatedC2", "controlPoints"),
            "bezierPatchC0": _patch("bezierPatchC0"),
            "bezierSurfaceC0": _surface("bezierSurfaceC0", "bezierPatchC0"),
            "bezierPatchC2": _patch("bezierPatchC2"),
            "bezierSurfaceC2": _surface("bezierSurfaceC2", "bezierPatchC2"),
        },
    },
}

_VALIDATOR = Draft7Validator(SCENE_SCHEMA)


def errors(document: Any) -> list[str]:
    """Return one message per schema violation, each prefixed by its path."""
    messages = []
    for error in _VALIDATOR.iter_errors(document):
        path = "/".join(str(part) for part in error.absolute_path)
        messages.append(f"{path}/: {error.message}")
    return messages


def validate(document: Any) -> None:
    """Raise SchemaError if the document is not a valid scene file."""
    messages = errors(document)
    if messages:
        raise SchemaError(messages)