"""Bézier helpers: basis conversions, a tridiagonal solver and curve topology."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

_EPSILON = 1e-6


def _as_points(points: ArrayLike) -> np.ndarray:
    """Return the points as an (n, 3) float array."""
    array = np.asarray(points, dtype=float)
    if array.size == 0:
        return array.reshape(0, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError("points must be a sequence of 3D vectors")
    return array


def lerp(a: ArrayLike, b: ArrayLike, t: float) -> np.ndarray:
    """Linear interpolation between a and b; t outside [0, 1] extrapolates."""
    start = np.asarray(a, dtype=float)
    end = np.asarray(b, dtype=float)
    return start + (end - start) * t


def solve_tridiagonal(a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike) -> np.ndarray:
    """Solve a tridiagonal system with the Thomas algorithm.

    ``a`` is the sub-diagonal (n-1), ``b`` the diagonal (n), ``c`` the
    super-diagonal (n-1) and ``d`` the right-hand side: n scalars or n vectors.
    """
    lower = np.asarray(a, dtype=float)
    diag = np.asarray(b, dtype=float)
    upper = np.asarray(c, dtype=float)
    rhs = np.asarray(d, dtype=float)
    n = len(diag)
    if n == 0:
        raise ValueError("the system must have at least one equation")
    if len(lower) != n - 1 or len(upper) != n - 1 or len(rhs) != n:
        raise ValueError("diagonal lengths do not match the system size")

    c_prime = np.zeros(n - 1)
    d_prime = np.empty_like(rhs)
    pivot = diag[0]
    if pivot == 0:
        raise ValueError("singular tridiagonal system")
    if n > 1:
        c_prime[0] = upper[0] / pivot
    d_prime[0] = rhs[0] / pivot
    for i in range(1, n):
        pivot = diag[i] - lower[i - 1] * c_prime[i - 1]
        if pivot == 0:
            raise ValueError("singular tridiagonal system")
        if i < n - 1:
            c_prime[i] = upper[i] / pivot
        d_prime[i] = (rhs[i] - lower[i - 1] * d_prime[i - 1]) / pivot

    solution = np.empty_like(d_prime)
    solution[-1] = d_prime[-1]
    for i in range(n - 2, -1, -1):
        solution[i] = d_prime[i] - c_prime[i] * solution[i + 1]
    return solution


def line_intersection_xy(
    p1: ArrayLike, p2: ArrayLike, r1: ArrayLike, r2: ArrayLike
) -> Optional[np.ndarray]:
    """Intersect line p1-p2 with line r1-r2 in the XY plane.

    The point returned lies on the first line in 3D. ``None`` means the
    lines are parallel in XY.
    """
    p1, p2, r1, r2 = (np.asarray(v, dtype=float) for v in (p1, p2, r1, r2))
    u = p2 - p1
    w = r1 - r2
    e = r1 - p1
    det = u[0] * w[1] - w[0] * u[1]
    if abs(det) <= _EPSILON:
        return None
    s = (e[0] * w[1] - w[0] * e[1]) / det
    return p1 + s * u


def bezier2_to_bezier0(points: ArrayLike) -> np.ndarray:
    """Convert uniform cubic B-spline (de Boor) points to Bézier control points.

    Fewer than four de Boor points give an empty result; n points give 3n-8.
    """
    deboor = _as_points(points)
    n = len(deboor)
    if n <= 3:
        return np.empty((0, 3))
    steps = deboor[1:] - deboor[:-1]
    one_third = deboor[:-1] + steps / 3.0
    two_thirds = deboor[:-1] + steps * (2.0 / 3.0)
    junctions = (two_thirds[:-1] + one_third[1:]) / 2.0  # junctions[k-1] lies between segments k-1 and k

    result = np.empty((3 * n - 8, 3))
    result[0:-1:3] = junctions[:-1]
    result[1::3] = one_third[1 : n - 2]
    result[2::3] = two_thirds[1 : n - 2]
    result[-1] = junctions[-1]
    return result


def bezier0_to_bezier2(points: ArrayLike) -> np.ndarray:
    """Convert a piecewise cubic Bézier chain (3k+1 points) to de Boor points.

    Chains of any other length give an empty result.
    """
    bezier = _as_points(points)
    n = len(bezier)
    if n % 3 != 1 or n < 4:
        return np.empty((0, 3))
    count = n // 3 + 3
    result = np.zeros((count, 3))
    for i in range(1, count - 3):
        crossing = line_intersection_xy(bezier[3 * i - 2], bezier[3 * i - 1], bezier[3 * i + 1], bezier[3 * i + 2])
        result[i + 1] = bezier[3 * i] if crossing is None else crossing
    result[1] = lerp(bezier[1], bezier[2], -1.0)
    result[0] = 3.0 * (bezier[0] - bezier[1]) + result[2]
    result[-2] = lerp(bezier[-2], bezier[-3], -1.0)
    result[-1] = 3.0 * (bezier[-1] - bezier[-2]) + result[-2]
    return result


def curve_indices(count: int) -> list[int]:
    """Index buffer for a Bézier chain of ``count`` control points.

    The first ``count`` entries draw the control polygon as a strip; the rest
    list the points again with every inner junction repeated, so that each
    group of four forms one cubic patch.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    patches: list[int] = []
    for i in range(count):
        patches.append(i)
        if i > 0 and i % 3 == 0 and i + 1 < count:
            patches.append(i)
    return list(range(count)) + patches