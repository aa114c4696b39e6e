"""JSON records for the objects stored in a scene file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

Vec3 = tuple[float, float, float]
Vec2i = tuple[int, int]

CURVE_POINT_KEYS = {
    "bezierC0": "controlPoints",
    "bezierC2": "deBoorPoints",
    "interpolatedC2": "controlPoints",
}
SURFACE_PATCH_TYPES = {
    "bezierSurfaceC0": "bezierPatchC0",
    "bezierSurfaceC2": "bezierPatchC2",
}
PATCH_POINT_COUNT = 16


def vec3_to_json(v: Sequence[float]) -> dict[str, float]:
    """Return a 3D vector as an object with x, y and z."""
    x, y, z = v
    return {"x": float(x), "y": float(y), "z": float(z)}


def vec3_from_json(data: Mapping[str, Any]) -> Vec3:
    """Read a 3D vector from an object with x, y and z."""
    return (float(data["x"]), float(data["y"]), float(data["z"]))


def vec2i_to_json(v: Sequence[int]) -> dict[str, int]:
    """Return an integer pair as an object with x and y."""
    x, y = v
    return {"x": int(x), "y": int(y)}


def vec2i_from_json(data: Mapping[str, Any]) -> Vec2i:
    """Read an integer pair from an object with x and y."""
    return (int(data["x"]), int(data["y"]))


def _vec3(v: Sequence[float]) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))


def _vec2i(v: Sequence[int]) -> Vec2i:
    x, y = v
    return (int(x), int(y))


def _ids_to_json(ids: Iterable[int]) -> list[dict[str, int]]:
    return [{"id": int(i)} for i in ids]


def _ids_from_json(items: Iterable[Mapping[str, Any]]) -> tuple[int, ...]:
    return tuple(int(item["id"]) for item in items)


@dataclass(frozen=True)
class PointRecord:
    """A point with an identifier and a position."""

    id: int
    position: Vec3
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _vec3(self.position))

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"position": vec3_to_json(self.position)}
        if self.name is not None:
            data["name"] = self.name
        data["id"] = self.id
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PointRecord":
        return cls(int(data["id"]), vec3_from_json(data["position"]), data.get("name"))


@dataclass(frozen=True)
class TorusRecord:
    """A torus with its transform, radii and sample counts."""

    id: int
    position: Vec3
    small_radius: float
    big_radius: float
    big_fragments: int
    small_fragments: int
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        for attr in ("position", "rotation", "scale"):
            object.__setattr__(self, attr, _vec3(getattr(self, attr)))

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "position": vec3_to_json(self.position),
            "rotation": vec3_to_json(self.rotation),
            "scale": vec3_to_json(self.scale),
        }
        if self.name is not None:
            data["name"] = self.name
        data["smallRadius"] = float(self.small_radius)
        data["largeRadius"] = float(self.big_radius)
        data["samples"] = vec2i_to_json((self.big_fragments, self.small_fragments))
        data["id"] = self.id
        data["objectType"] = "torus"
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "TorusRecord":
        big_fragments, small_fragments = vec2i_from_json(data["samples"])
        return cls(
            id=int(data["id"]),
            position=vec3_from_json(data["position"]),
            small_radius=float(data["smallRadius"]),
            big_radius=float(data["largeRadius"]),
            big_fragments=big_fragments,
            small_fragments=small_fragments,
            rotation=vec3_from_json(data["rotation"]),
            scale=vec3_from_json(data["scale"]),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class CurveRecord:
    """A curve given by the identifiers of its control points."""

    id: int
    object_type: str
    point_ids: tuple[int, ...] = ()
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.object_type not in CURVE_POINT_KEYS:
            raise ValueError(f"unknown curve type {self.object_type!r}")
        object.__setattr__(self, "point_ids", tuple(int(i) for i in self.point_ids))

    @property
    def points_key(self) -> str:
        """Name of the JSON member that lists the control points."""
        return CURVE_POINT_KEYS[self.object_type]

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        data["id"] = self.id
        data[self.points_key] = _ids_to_json(self.point_ids)
        data["objectType"] = self.object_type
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "CurveRecord":
        object_type = data["objectType"]
        if object_type not in CURVE_POINT_KEYS:
            raise ValueError(f"unknown curve type {object_type!r}")
        ids = _ids_from_json(data[CURVE_POINT_KEYS[object_type]])
        return cls(int(data["id"]), object_type, ids, data.get("name"))


@dataclass(frozen=True)
class PatchRecord:
    """One bicubic patch: sixteen control point identifiers in row-major order."""

    id: int
    object_type: str
    point_ids: tuple[int, ...]
    samples: Vec2i
    name: str = ""

    def __post_init__(self) -> None:
        if self.object_type not in SURFACE_PATCH_TYPES.values():
            raise ValueError(f"unknown patch type {self.object_type!r}")
        ids = tuple(int(i) for i in self.point_ids)
        if len(ids) != PATCH_POINT_COUNT:
            raise ValueError(f"a patch needs {PATCH_POINT_COUNT} control points, got {len(ids)}")
        object.__setattr__(self, "point_ids", ids)
        object.__setattr__(self, "samples", _vec2i(self.samples))

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "objectType": self.object_type,
            "samples": vec2i_to_json(self.samples),
            "name": self.name,
            "controlPoints": _ids_to_json(self.point_ids),
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PatchRecord":
        return cls(
            id=int(data["id"]),
            object_type=data["objectType"],
            point_ids=_ids_from_json(data["controlPoints"]),
            samples=vec2i_from_json(data["samples"]),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class SurfaceRecord:
    """A surface made of ``size[0]`` by ``size[1]`` patches, listed row by row."""

    id: int
    object_type: str
    size: Vec2i
    patches: tuple[PatchRecord, ...] = ()
    wrapped_u: bool = False
    wrapped_v: bool = False
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.object_type not in SURFACE_PATCH_TYPES:
            raise ValueError(f"unknown surface type {self.object_type!r}")
        size = _vec2i(self.size)
        patches = tuple(self.patches)
        if len(patches) != size[0] * size[1]:
            raise ValueError(
                f"surface {self.id} has {len(patches)} patches but its size is {size[0]}x{size[1]}"
            )
        for patch in patches:
            if patch.object_type != self.patch_type:
                raise ValueError(f"{self.object_type} cannot hold a {patch.object_type}")
        object.__setattr__(self, "size", size)
        object.__setattr__(self, "patches", patches)

    @property
    def patch_type(self) -> str:
        """Object type of the surface's patches."""
        return SURFACE_PATCH_TYPES[self.object_type]

    @property
    def is_c2(self) -> bool:
        """True for surfaces whose patches hold de Boor points."""
        return self.object_type == "bezierSurfaceC2"

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        data["id"] = self.id
        data["parameterWrapped"] = {"u": self.wrapped_u, "v": self.wrapped_v}
        data["size"] = vec2i_to_json(self.size)
        data["patches"] = [patch.to_json() for patch in self.patches]
        data["objectType"] = self.object_type
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "SurfaceRecord":
        wrapped = data["parameterWrapped"]
        return cls(
            id=int(data["id"]),
            object_type=data["objectType"],
            size=vec2i_from_json(data["size"]),
            patches=tuple(PatchRecord.from_json(p) for p in data["patches"]),
            wrapped_u=bool(wrapped["u"]),
            wrapped_v=bool(wrapped["v"]),
            name=data.get("name"),
        )