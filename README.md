# bezmodel

The geometric and file-format core of an interactive Bézier modeller, usable
without any window or GPU.

## What it provides

- **`bezmodel.bezier`**: `lerp`, a tridiagonal solver (`solve_tridiagonal`),
  `line_intersection_xy`, conversions between de Boor and Bernstein control
  points (`bezier2_to_bezier0`, `bezier0_to_bezier2`), and `curve_indices`,
  the index buffer layout for a Bézier chain.
- **`bezmodel.curves`**: the abstract `BezierCurve` and `BezierCurve0`, a C0
  chain of cubic Bézier segments. A curve keeps indices into a shared point
  store: a sequence whose entries are point positions (three coordinates) or
  `None` for objects that are not points. Curves support `add_point`,
  `remove_point`, `swap`, `get_point` (wrapping index), `on_remove_object`,
  `on_merge_points`, `polygon_indices` and `bezier_points`. Curves created
  without a name get a numbered one such as `Bézier curve0 1`.
- **`bezmodel.splines`**: `BezierCurve2`, a uniform cubic B-spline over de Boor
  points, with `move_bezier_point` to drag one of its Bernstein points by
  moving the de Boor points behind it (the store must then be mutable); and
  `InterpolatedCurve`, a natural cubic spline through its points, built by
  `interpolate_c2` with chord-length parametrisation. `interpolate_c2` raises
  `ValueError` when two consecutive points coincide.
- **`bezmodel.events`**: `Key`, `MouseButton`, `KeyState`, `MouseButtonState`
  and `ModifierKey` with GLFW codes, plus `is_key_down` and `is_button_down`.
- **`bezmodel.config`**: `ConfigState`, the editor settings and live input
  state. `ConfigState.load` reads a JSON config file (default `config.cfg`)
  and keeps defaults for a missing file or for entries of the wrong type;
  `save` writes it back. The `on_key_pressed`, `on_key_released`,
  `on_mouse_button_pressed` and `on_mouse_button_released` handlers update
  modifier flags, axis locks (X, Y, Z keys), uniform scaling (U),
  stereoscopy (S), box selection (B) and the drag state (`MouseState`).
- **`bezmodel.schema`**: the JSON schema of scene files; `errors(document)`
  lists violations and `validate(document)` raises `SchemaError`.
- **`bezmodel.records`**: frozen dataclasses for the objects in a scene file
  (`PointRecord`, `TorusRecord`, `CurveRecord`, `PatchRecord`,
  `SurfaceRecord`), each with `to_json` and `from_json`.
- **`bezmodel.scenefile`**: `SceneDocument` and `CameraView`, with
  `load_stream`, `save_stream`, `load_file` and `save_file` (default path
  `saves/save.json`). Loading validates against the schema and arranges each
  surface's patches into a grid with `recognize_segments`; a surface whose
  patches do not form a grid of its size is skipped with a logged warning.
  Saving gives surface patches fresh ids after the largest object id.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Examples

De Boor points to Bézier control points:

```python
from bezmodel.bezier import bezier2_to_bezier0

bernstein = bezier2_to_bezier0([[0, 0, 0], [1, 2, 0], [3, 2, 0], [4, 0, 0]])
# four points: one cubic segment
```

Curves over a shared point store:

```python
from bezmodel.splines import BezierCurve2, interpolate_c2

store = [(0, 0, 0), (1, 2, 0), (3, 2, 0), (4, 0, 0), None]
curve = BezierCurve2(store)
for index in range(len(store)):
    curve.add_point(index)        # returns False for the None entry
print(curve.name, curve.bezier_points())

control = interpolate_c2([[0, 0, 0], [1, 1, 0], [2, 0, 0], [3, 1, 0]])
```

Scene files:

```python
import json
from bezmodel import schema, scenefile

with open("scene.json", encoding="utf-8") as fh:
    for problem in schema.errors(json.load(fh)):
        print(problem)

scene = scenefile.load_file("scene.json")
scenefile.save_file(scene, "copy.json")
```

Editor settings:

```python
from bezmodel.config import ConfigState
from bezmodel.events import Key

state = ConfigState.load("config.cfg")
state.on_key_pressed(Key.X)
assert state.is_axis_locked(0)
state.save("config.cfg")
```

## What it does not do

There is no window, drawing, user interface or command-line program. Bézier
surfaces and tori exist only as scene file records: their geometry is not
evaluated, and there is no camera projection or view matrix. Loading a scene
file returns a `SceneDocument` of records; it does not build curve objects
from them.

## Running the tests

```
pytest
```