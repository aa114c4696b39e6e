"""Application configuration and interaction state."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Mapping

from .events import Key, ModifierKey, MouseButton

DEFAULT_CONFIG_PATH = "config.cfg"


class MouseState(IntEnum):
    """Which mouse drag is in progress."""

    LEFT_CLICK = 0
    MIDDLE_CLICK = 1
    RIGHT_CLICK = 2
    NONE = 3


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def _convert(value: Any, kind: str) -> Any:
    """Convert a JSON value to the field kind, or return None if it does not fit."""
    if kind == "int":
        return _to_int32(int(value)) if _is_integral(value) else None
    if kind == "byte":
        return int(value) % 256 if _is_integral(value) else None
    if kind == "float":
        return float(value) if _is_numeric(value) else None
    if kind == "bool":
        return value if isinstance(value, bool) else None
    if kind == "str":
        return value if isinstance(value, str) else None
    raise ValueError(f"unknown field kind {kind!r}")


_TOP_LEVEL_FIELDS = (
    ("screen_width", "screen_width", "int"),
    ("screen_height", "screen_height", "int"),
    ("screen_fullscreen", "screen_fullscreen", "bool"),
    ("is_uniform_scaling", "is_uniform_scaling", "bool"),
    ("is_axes_locked", "is_axes_locked", "byte"),
    ("division_num", "division_num", "int"),
    ("total_division", "total_division", "int"),
    ("max_torus_fragments", "max_torus_fragments", "int"),
    ("movement_speed", "movement_speed", "float"),
    ("rotation_speed", "rotation_speed", "float"),
    ("point_radius", "point_radius", "float"),
    ("stereoscopic", "stereoscopic", "bool"),
    ("gray_percentage", "gray_percentage", "float"),
    ("background_color_r", "background_color_r", "byte"),
    ("background_color_g", "background_color_g", "byte"),
    ("background_color_b", "background_color_b", "byte"),
    ("convergence", "convergence", "float"),
    ("iod", "iod", "float"),
    ("font_path", "font_path", "str"),
    ("gizmo_size", "gizmo_size", "float"),
    ("are_points_hidden", "are_points_hidden", "bool"),
    ("is_debug", "is_debug", "bool"),
)

_CAMERA_FIELDS = (
    ("camera_fov", "fov"),
    ("camera_fov_min", "fov_min"),
    ("camera_fov_max", "fov_max"),
    ("camera_near", "near"),
    ("camera_far", "far"),
)

_CAMERA_VECTORS = (
    ("camera_init_pos", ("pos_x", "pos_y", "pos_z")),
    ("camera_init_rot", ("rot_x", "rot_y", "rot_z")),
)


@dataclass
class ConfigState:
    """Settings read from the config file plus the live state of user input."""

    # live interaction state
    state: MouseState = MouseState.NONE
    is_ctrl_pressed: bool = False
    is_alt_pressed: bool = False
    is_shift_pressed: bool = False
    is_box_select: bool = False
    are_points_hidden: bool = False
    box_mouse_x: float = 0.0
    box_mouse_y: float = 0.0
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    delta_time: float = 0.0
    gizmo_size: float = 1.0
    # settings kept in the config file
    screen_width: int = 1024
    screen_height: int = 768
    screen_fullscreen: bool = False
    is_uniform_scaling: bool = True
    is_axes_locked: int = 0  # bit 0: X, bit 1: Y, bit 2: Z
    division_num: int = 8
    total_division: int = 4096
    max_torus_fragments: int = 60
    movement_speed: float = 2.5
    rotation_speed: float = 20.0
    camera_fov: float = 45.0
    point_radius: float = 8.0
    is_debug: bool = False
    background_color_r: int = 64
    background_color_g: int = 64
    background_color_b: int = 51
    camera_near: float = 0.1
    camera_far: float = 100.0
    stereoscopic: bool = False
    gray_percentage: float = 0.0
    iod: float = 0.2
    convergence: float = 0.0
    camera_fov_min: float = 5.0
    camera_fov_max: float = 120.0
    camera_init_pos: tuple[float, float, float] = (0.0, 0.0, -10.0)
    camera_init_rot: tuple[float, float, float] = (0.0, 0.0, 0.0)
    font_path: str = field(default="")

    @classmethod
    def load(cls, path: str | Path = DEFAULT_CONFIG_PATH) -> "ConfigState":
        """Read settings from a JSON config file; defaults are kept if it is missing or unreadable."""
        try:
            text = Path(path).read_text(encoding="utf-8")
            data = json.loads(text)
        except (OSError, ValueError):
            return cls()
        return cls.from_json(data)

    def save(self, path: str | Path = DEFAULT_CONFIG_PATH) -> None:
        """Write the settings to a JSON config file."""
        Path(path).write_text(json.dumps(self.to_json(), indent=3), encoding="utf-8")

    @classmethod
    def from_json(cls, data: Any) -> "ConfigState":
        """Build a state from parsed JSON; entries that are missing or of the wrong type keep their defaults."""
        config = cls()
        if not isinstance(data, Mapping):
            return config
        for attr, key, kind in _TOP_LEVEL_FIELDS:
            if key in data:
                value = _convert(data[key], kind)
                if value is not None:
                    setattr(config, attr, value)
        camera = data.get("camera")
        if isinstance(camera, Mapping):
            for attr, key in _CAMERA_FIELDS:
                if key in camera:
                    value = _convert(camera[key], "float")
                    if value is not None:
                        setattr(config, attr, value)
            for attr, keys in _CAMERA_VECTORS:
                vector = list(getattr(config, attr))
                for i, key in enumerate(keys):
                    if key in camera:
                        value = _convert(camera[key], "float")
                        if value is not None:
                            vector[i] = value
                setattr(config, attr, tuple(vector))
        return config

    def to_json(self) -> dict[str, Any]:
        """Return the settings as a JSON-ready dictionary."""
        data: dict[str, Any] = {key: getattr(self, attr) for attr, key, _ in _TOP_LEVEL_FIELDS}
        camera: dict[str, Any] = {key: getattr(self, attr) for attr, key in _CAMERA_FIELDS}
        for attr, keys in _CAMERA_VECTORS:
            camera.update(zip(keys, getattr(self, attr)))
        camera["font_path"] = self.font_path
        data["camera"] = camera
        return data

    def is_axis_locked(self, axis: int) -> bool:
        """Return whether axis 0 (X), 1 (Y) or 2 (Z) is locked."""
        if axis not in (0, 1, 2):
            raise ValueError(f"axis must be 0, 1 or 2, got {axis!r}")
        return bool((self.is_axes_locked >> axis) & 1)

    def on_key_pressed(self, key: Key, mods: ModifierKey = ModifierKey(0)) -> None:
        """Update the state for a pressed key."""
        if key in (Key.LEFT_CONTROL, Key.RIGHT_CONTROL):
            self.is_ctrl_pressed = True
        if key in (Key.LEFT_ALT, Key.RIGHT_ALT, Key.A):  # A works as an extra Alt
            self.is_alt_pressed = True
        if key in (Key.LEFT_SHIFT, Key.RIGHT_SHIFT):
            self.is_shift_pressed = True
        axis_keys = {Key.X: 0, Key.Y: 1, Key.Z: 2}
        if key in axis_keys:
            self.is_axes_locked ^= 1 << axis_keys[key]
        elif key == Key.U:
            self.is_uniform_scaling = not self.is_uniform_scaling
        elif key == Key.S:
            self.stereoscopic = not self.stereoscopic
        elif key == Key.B:
            if not self.is_box_select:
                self.box_mouse_x = self.mouse_x
                self.box_mouse_y = self.mouse_y
            self.is_box_select = not self.is_box_select

    def on_key_released(self, key: Key, mods: ModifierKey = ModifierKey(0)) -> None:
        """Update the state for a released key."""
        if key in (Key.LEFT_CONTROL, Key.RIGHT_CONTROL):
            self.is_ctrl_pressed = False
        if key in (Key.LEFT_ALT, Key.RIGHT_ALT, Key.A):
            self.is_alt_pressed = False
        if key in (Key.LEFT_SHIFT, Key.RIGHT_SHIFT):
            self.is_shift_pressed = False

    def on_mouse_button_pressed(self, button: MouseButton, mods: ModifierKey = ModifierKey(0)) -> None:
        """Start a right or middle drag."""
        if button == MouseButton.RIGHT:
            self.state = MouseState.RIGHT_CLICK
        elif button == MouseButton.MIDDLE:
            self.state = MouseState.MIDDLE_CLICK

    def on_mouse_button_released(self, button: MouseButton, mods: ModifierKey = ModifierKey(0)) -> None:
        """End the drag started by the same button."""
        if (button == MouseButton.RIGHT and self.state == MouseState.RIGHT_CLICK) or (
            button == MouseButton.MIDDLE and self.state == MouseState.MIDDLE_CLICK
        ):
            self.state = MouseState.NONE