import copy

import pytest

from bezmodel.schema import SchemaError, errors, validate


def _refs(ids):
    return [{"id": i} for i in ids]


@pytest.fixture
def document():
    points = [{"id": i, "name": f"p{i}", "position": {"x": i, "y": 0.5, "z": -1}} for i in range(16)]
    patch = {
        "objectType": "bezierPatchC0",
        "id": 40,
        "name": "patch",
        "controlPoints": _refs(range(16)),
        "samples": {"x": 4, "y": 4},
    }
    return {
        "camera": {
            "focusPoint": {"x": 0, "y": 0, "z": 0},
            "distance": 10,
            "rotation": {"x": 15, "y": 30},
        },
        "points": points,
        "geometry": [
            {
                "objectType": "torus",
                "id": 20,
                "position": {"x": 0, "y": 0, "z": 0},
                "rotation": {"x": 0, "y": 0, "z": 0},
                "scale": {"x": 1, "y": 1, "z": 1},
                "samples": {"x": 8, "y": 8},
                "smallRadius": 0.5,
                "largeRadius": 2,
            },
            {"objectType": "bezierC0", "id": 21, "controlPoints": _refs([0, 1, 2, 3])},
            {"objectType": "bezierC2", "id": 22, "name": "b", "deBoorPoints": _refs([0, 1, 2, 3])},
            {"objectType": "interpolatedC2", "id": 23, "controlPoints": _refs([4, 5])},
            {
                "objectType": "bezierSurfaceC0",
                "id": 24,
                "patches": [patch],
                "parameterWrapped": {"u": False, "v": False},
                "size": {"x": 1, "y": 1},
            },
        ],
    }


def test_valid_document(document):
    assert errors(document) == []
    validate(document)
    assert errors({}) == []


def test_extra_top_level_property(document):
    document["extra"] = 1
    with pytest.raises(SchemaError) as info:
        validate(document)
    assert len(info.value.messages) == 1


def test_patch_needs_sixteen_points(document):
    broken = copy.deepcopy(document)
    broken["geometry"][4]["patches"][0]["controlPoints"].pop()
    assert errors(broken)
    with pytest.raises(SchemaError):
        validate(broken)


def test_negative_id_rejected(document):
    document["points"][0]["id"] = -1
    messages = errors(document)
    assert len(messages) == 1
    assert messages[0].startswith("points/0/id/")


def test_camera_requires_distance(document):
    del document["camera"]["distance"]
    messages = errors(document)
    assert len(messages) == 1
    assert messages[0].startswith("camera/")


def test_unknown_object_type(document):
    document["geometry"].append({"objectType": "sphere", "id": 30})
    with pytest.raises(SchemaError):
        validate(document)


def test_bezier_c2_needs_de_boor_points(document):
    document["geometry"][2] = {"objectType": "bezierC2", "id": 22, "controlPoints": _refs([0, 1])}
    assert errors(document)


def test_surface_c2_with_c2_patch_is_valid(document):
    patch = copy.deepcopy(document["geometry"][4]["patches"][0])
    patch["objectType"] = "bezierPatchC2"
    document["geometry"].append(
        {
            "objectType": "bezierSurfaceC2",
            "id": 25,
            "patches": [patch],
            "parameterWrapped": {"u": True, "v": False},
            "size": {"x": 1, "y": 1},
        }
    )
    assert errors(document) == []
    document["geometry"][-1]["patches"][0]["objectType"] = "bezierPatchC0"
    assert errors(document)


def test_negative_radius_rejected(document):
    document["geometry"][0]["smallRadius"] = -0.5
    assert errors(document)


def test_schema_error_is_value_error():
    with pytest.raises(ValueError):
        validate([])