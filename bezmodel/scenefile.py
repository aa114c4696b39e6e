"""Reading and writing scene files."""

from __future__ import annotations

import itertools
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, TextIO, Union

from .records import (
    CURVE_POINT_KEYS,
    SURFACE_PATCH_TYPES,
    CurveRecord,
    PatchRecord,
    PointRecord,
    SurfaceRecord,
    TorusRecord,
    Vec3,
    vec3_from_json,
    vec3_to_json,
)
from .schema import validate

logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = "saves/save.json"

GeometryRecord = Union[TorusRecord, CurveRecord, SurfaceRecord]

# Point positions inside a patch that identify its neighbours: bottom-left,
# bottom-right, top-left and top-right. C2 patches use their inner points.
_C0_CORNERS = (0, 3, 12, 15)
_C2_CORNERS = (5, 6, 9, 10)


@dataclass(frozen=True)
class CameraView:
    """Camera as stored in a scene file: focus point, distance and rotation in degrees."""

    focus_point: Vec3 = (0.0, 0.0, 0.0)
    distance: float = 0.0
    rotation: tuple[float, float] = (0.0, 0.0)

    def to_json(self) -> dict[str, Any]:
        return {
            "focusPoint": vec3_to_json(self.focus_point),
            "distance": float(self.distance),
            "rotation": {"x": float(self.rotation[0]), "y": float(self.rotation[1])},
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "CameraView":
        rotation = data["rotation"]
        return cls(
            vec3_from_json(data["focusPoint"]),
            float(data["distance"]),
            (float(rotation["x"]), float(rotation["y"])),
        )


def recognize_segments(
    patches: Sequence[PatchRecord],
    size: Sequence[int],
    wrapped_u: bool,
    wrapped_v: bool,
    is_c2: bool = False,
) -> list[list[PatchRecord]]:
    """Arrange patches into rows by the control points they share.

    ``size`` is (columns, rows). Raises ValueError if the patches do not fit
    together as a grid of that size.
    """
    patches = list(patches)
    columns, rows = int(size[0]), int(size[1])
    if columns * rows != len(patches):
        raise ValueError(f"{len(patches)} patches do not fill a {columns}x{rows} grid")
    if not patches:
        return []

    corners = _C2_CORNERS if is_c2 else _C0_CORNERS
    owners: dict[int, list[Optional[int]]] = {}
    for i, patch in enumerate(patches):
        for role, local in enumerate(corners):
            owners.setdefault(patch.point_ids[local], [None] * 4)[role] = i

    start = 0
    for point in sorted(owners):
        roles = owners[point]
        if roles[0] is None:
            continue
        missing = sum(owner is None for owner in roles[1:])
        if missing == 3 or ((wrapped_u or wrapped_v) and missing == 1):
            start = roles[0]
            break

    used: set[int] = set()

    def take(index: Optional[int]) -> PatchRecord:
        if index is None or index in used:
            raise ValueError("patches do not form a connected grid")
        used.add(index)
        return patches[index]

    def neighbour(patch: PatchRecord, local: int) -> Optional[int]:
        roles = owners.get(patch.point_ids[local])
        return roles[0] if roles else None

    up, right = (9, 6) if is_c2 else (12, 3)
    grid: list[list[PatchRecord]] = []
    for r in range(rows):
        first = start if r == 0 else neighbour(grid[-1][0], up)
        row = [take(first)]
        for _ in range(1, columns):
            row.append(take(neighbour(row[-1], right)))
        grid.append(row)
    return grid


def _arrange(surface: SurfaceRecord) -> SurfaceRecord:
    grid = recognize_segments(surface.patches, surface.size, surface.wrapped_u, surface.wrapped_v, surface.is_c2)
    return replace(surface, patches=tuple(patch for row in grid for patch in row))


def _geometry_from_json(data: Mapping[str, Any]) -> Optional[GeometryRecord]:
    object_type = data.get("objectType")
    if object_type == "torus":
        return TorusRecord.from_json(data)
    if object_type in CURVE_POINT_KEYS:
        return CurveRecord.from_json(data)
    if object_type in SURFACE_PATCH_TYPES:
        try:
            return _arrange(SurfaceRecord.from_json(data))
        except ValueError as error:
            logger.warning("skipping Bézier surface %s: %s", data.get("id"), error)
            return None
    logger.warning("unsupported object type %r", object_type)
    return None


@dataclass
class SceneDocument:
    """The contents of a scene file."""

    points: list[PointRecord] = field(default_factory=list)
    geometry: list[GeometryRecord] = field(default_factory=list)
    camera: Optional[CameraView] = None

    def to_json(self) -> dict[str, Any]:
        """Return the document as JSON; patches get fresh ids after every object id."""
        ids = [record.id for record in itertools.chain(self.points, self.geometry)]
        patch_ids = itertools.count(max(ids, default=-1) + 1)
        geometry = []
        for record in self.geometry:
            if isinstance(record, SurfaceRecord):
                renumbered = tuple(replace(patch, id=next(patch_ids)) for patch in record.patches)
                record = replace(record, patches=renumbered)
            geometry.append(record.to_json())
        camera = self.camera if self.camera is not None else CameraView()
        return {
            "points": [point.to_json() for point in self.points],
            "geometry": geometry,
            "camera": camera.to_json(),
        }

    @classmethod
    def from_json(cls, data: Any) -> "SceneDocument":
        """Build a document from parsed JSON; raises SchemaError if it is not a scene file."""
        validate(data)
        points = [PointRecord.from_json(item) for item in data.get("points", [])]
        geometry = [
            record
            for record in (_geometry_from_json(item) for item in data.get("geometry", []))
            if record is not None
        ]
        camera_data = data.get("camera")
        camera = CameraView.from_json(camera_data) if camera_data is not None else None
        return cls(points, geometry, camera)


def load_stream(stream: TextIO) -> SceneDocument:
    """Read a scene from a text stream."""
    data = json.loads(stream.read())
    return SceneDocument.from_json(data)


def save_stream(document: SceneDocument, stream: TextIO) -> None:
    """Write a scene to a text stream."""
    json.dump(document.to_json(), stream, indent="\t", ensure_ascii=False)
    stream.write("\n")


def load_file(path: Union[str, Path] = DEFAULT_SAVE_PATH) -> SceneDocument:
    """Read a scene file."""
    with open(path, encoding="utf-8") as stream:
        return load_stream(stream)


def save_file(document: SceneDocument, path: Union[str, Path] = DEFAULT_SAVE_PATH) -> None:
    """Write a scene file."""
    with open(path, "w", encoding="utf-8") as stream:
        save_stream(document, stream)