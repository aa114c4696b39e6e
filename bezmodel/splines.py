"""C2 curves: B-spline (de Boor) curves and interpolating cubic splines."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from .bezier import bezier2_to_bezier0, solve_tridiagonal
from .curves import BezierCurve, PointStore


def _as_point_array(points: ArrayLike) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.size == 0:
        return array.reshape(0, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError("points must be a sequence of 3D vectors")
    return array


def interpolate_c2(points: ArrayLike) -> np.ndarray:
    """Bézier control points of the natural cubic spline through ``points``.

    The spline is parametrised by chord length and every segment is then
    rescaled to the unit interval. ``n`` points give ``3n-2`` control points;
    fewer than two points give an empty result.
    """
    nodes = _as_point_array(points)
    n = len(nodes)
    if n <= 1:
        return np.empty((0, 3))
    steps = nodes[1:] - nodes[:-1]
    lengths = np.linalg.norm(steps, axis=1)
    if np.any(lengths == 0):
        raise ValueError("consecutive interpolation points must differ")
    units = steps / lengths[:, None]

    lower = np.full(n - 1, 0.5)
    diagonal = np.full(n, 2.0)
    upper = np.full(n - 1, 0.5)
    rhs = np.zeros((n, 3))
    lower[-1] = 0.0
    upper[0] = 0.0
    sums = lengths[:-1] + lengths[1:]
    lower[: n - 2] = lengths[:-1] / sums
    upper[1 : n - 1] = lengths[1:] / sums
    rhs[1 : n - 1] = 3.0 / sums[:, None] * (units[1:] - units[:-1])

    second = solve_tridiagonal(lower, diagonal, upper, rhs)

    span = lengths[:, None]
    cubic = (second[1:] - second[:-1]) / (span * 3.0)
    linear = units - span / 3.0 * (2.0 * second[:-1] + second[1:])
    quadratic = second[:-1] * span**2
    linear = linear * span
    cubic = cubic * span**3

    start = nodes[:-1]
    result = np.empty((3 * n - 2, 3))
    result[0:-1:3] = start
    result[1::3] = start + linear / 3.0
    result[2::3] = start + linear / 1.5 + quadratic / 3.0
    result[-1] = start[-1] + linear[-1] + quadratic[-1] + cubic[-1]
    return result


class BezierCurve2(BezierCurve):
    """A uniform cubic B-spline whose points are de Boor points."""

    name_prefix = "Bézier curve2"

    def __init__(self, store: PointStore, name: Optional[str] = None) -> None:
        super().__init__(store, name)
        self.is_tmp_line_drawn = True
        self.is_tmp_point_drawn = True

    def bezier_points(self) -> np.ndarray:
        return bezier2_to_bezier0(self._control_positions())

    def move_bezier_point(self, bezier_index: int, new_position: ArrayLike) -> None:
        """Drag a Bézier control point by moving the de Boor points behind it."""
        bezier = self.bezier_points()
        if not 0 <= bezier_index < len(bezier):
            raise IndexError(f"curve has no Bézier point at index {bezier_index}")
        shift = np.asarray(new_position, dtype=float) - bezier[bezier_index]
        base = bezier_index // 3 + 1
        role = bezier_index % 3
        if role == 0:
            moves = ((base, shift),)
        elif role == 1:
            moves = ((base, 2.0 * shift), (base + 1, -shift))
        else:
            moves = ((base, -shift), (base + 1, 2.0 * shift))
        updated = [(self.point_indices[offset], self.get_point(offset) + delta) for offset, delta in moves]
        for store_index, position in updated:
            self.store[store_index] = tuple(float(x) for x in position)  # type: ignore[index]


class InterpolatedCurve(BezierCurve):
    """A natural cubic spline passing through all of its points."""

    name_prefix = "Bézier curveI"

    def __init__(self, store: PointStore, name: Optional[str] = None) -> None:
        super().__init__(store, name)
        self.is_line_drawn = False

    def bezier_points(self) -> np.ndarray:
        return interpolate_c2(self._control_positions())