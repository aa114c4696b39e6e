import numpy as np
import pytest

from bezmodel.bezier import (
    bezier0_to_bezier2,
    bezier2_to_bezier0,
    curve_indices,
    lerp,
    line_intersection_xy,
    solve_tridiagonal,
)

DEBOOR = [
    (0.0, 0.0, 0.0),
    (1.0, 2.0, 0.0),
    (3.0, 3.0, 0.0),
    (5.0, 1.0, 0.0),
    (6.0, 4.0, 0.0),
    (8.0, 0.0, 0.0),
]


def _cross_xy(u, v):
    return u[0] * v[1] - u[1] * v[0]


def test_lerp_endpoints():
    a = (1.0, -2.0, 3.0)
    b = (4.0, 5.0, -6.0)
    np.testing.assert_allclose(lerp(a, b, 0.0), a)
    np.testing.assert_allclose(lerp(a, b, 1.0), b)


def test_lerp_midpoint_is_symmetric():
    a = (1.0, -2.0, 3.0)
    b = (4.0, 5.0, -6.0)
    np.testing.assert_allclose(lerp(a, b, 0.5), lerp(b, a, 0.5))


def test_lerp_extrapolation_reflects():
    a = np.array([1.0, 2.0, 3.0])
    b = np.array([2.0, 0.0, 7.0])
    reflected = lerp(a, b, -1.0)
    np.testing.assert_allclose(lerp(reflected, b, 0.5), a)


def test_solve_tridiagonal_scalar():
    a = [1.0, 2.0]
    b = [4.0, 5.0, 6.0]
    c = [1.0, 1.5]
    d = [5.0, 6.0, 7.0]
    x = solve_tridiagonal(a, b, c, d)
    matrix = np.diag(b) + np.diag(a, -1) + np.diag(c, 1)
    np.testing.assert_allclose(matrix @ x, d)


def test_solve_tridiagonal_vector_rhs():
    a = [0.5, 0.5, 0.0]
    b = [2.0, 2.0, 2.0, 2.0]
    c = [0.0, 0.5, 0.5]
    d = np.arange(12, dtype=float).reshape(4, 3)
    x = solve_tridiagonal(a, b, c, d)
    assert x.shape == (4, 3)
    matrix = np.diag(b) + np.diag(a, -1) + np.diag(c, 1)
    np.testing.assert_allclose(matrix @ x, d)


def test_solve_tridiagonal_single_equation():
    x = solve_tridiagonal([], [2.0], [], [4.0])
    np.testing.assert_allclose(x * 2.0, [4.0])


def test_solve_tridiagonal_size_mismatch():
    with pytest.raises(ValueError):
        solve_tridiagonal([1.0], [1.0, 2.0, 3.0], [1.0, 1.0], [1.0, 2.0, 3.0])


def test_solve_tridiagonal_singular():
    with pytest.raises(ValueError):
        solve_tridiagonal([1.0], [0.0, 1.0], [1.0], [1.0, 1.0])


def test_line_intersection_parallel_is_none():
    assert line_intersection_xy((0, 0, 0), (1, 1, 0), (1, 0, 0), (2, 1, 0)) is None


def test_line_intersection_lies_on_both_lines():
    p1, p2 = np.array([0.0, 0.0, 0.0]), np.array([4.0, 1.0, 2.0])
    r1, r2 = np.array([1.0, 3.0, 0.0]), np.array([2.0, -1.0, 0.0])
    point = line_intersection_xy(p1, p2, r1, r2)
    assert abs(_cross_xy(point - p1, p2 - p1)) < 1e-9
    assert abs(_cross_xy(point - r1, r2 - r1)) < 1e-9
    # the point is on the first line in 3D as well
    np.testing.assert_allclose(np.cross(point - p1, p2 - p1), 0.0, atol=1e-9)


def test_line_intersection_vertical_line():
    point = line_intersection_xy((2, -1, 0), (2, 5, 0), (0, 0, 0), (1, 1, 0))
    assert point[0] == pytest.approx(2.0)
    assert point[1] == pytest.approx(2.0)


@pytest.mark.parametrize("count", [0, 1, 2, 3])
def test_bezier2_to_bezier0_too_few(count):
    assert bezier2_to_bezier0(DEBOOR[:count]).shape == (0, 3)


@pytest.mark.parametrize("count", [4, 5, 6])
def test_bezier2_to_bezier0_length(count):
    assert len(bezier2_to_bezier0(DEBOOR[:count])) == 3 * count - 8


def test_bezier2_to_bezier0_junctions_are_midpoints():
    out = bezier2_to_bezier0(DEBOOR)
    for k in range(1, (len(out) - 1) // 3):
        np.testing.assert_allclose(out[3 * k], (out[3 * k - 1] + out[3 * k + 1]) / 2.0)


def test_bezier2_to_bezier0_uniform_line_stays_uniform():
    out = bezier2_to_bezier0([(float(i), 0.0, 0.0) for i in range(7)])
    steps = np.diff(out[:, 0])
    np.testing.assert_allclose(steps, steps[0])


def test_bezier2_to_bezier0_translation():
    shift = np.array([3.0, -1.0, 2.0])
    moved = bezier2_to_bezier0(np.asarray(DEBOOR) + shift)
    np.testing.assert_allclose(moved, bezier2_to_bezier0(DEBOOR) + shift)


@pytest.mark.parametrize("count", [0, 2, 3, 5, 6])
def test_bezier0_to_bezier2_invalid_length(count):
    points = [(float(i), float(i * i), 0.0) for i in range(count)]
    assert bezier0_to_bezier2(points).shape == (0, 3)


def test_bezier0_to_bezier2_single_segment_length():
    assert len(bezier0_to_bezier2([(0, 0, 0), (1, 1, 0), (2, 1, 0), (3, 0, 0)])) == 4


def test_round_trip_recovers_inner_deboor_points():
    bezier = bezier2_to_bezier0(DEBOOR)
    back = bezier0_to_bezier2(bezier)
    assert len(back) == len(DEBOOR)
    np.testing.assert_allclose(back[1:-1], np.asarray(DEBOOR)[1:-1], atol=1e-9)


def test_curve_indices_empty():
    assert curve_indices(0) == []


def test_curve_indices_seven():
    assert curve_indices(7) == [0, 1, 2, 3, 4, 5, 6, 0, 1, 2, 3, 3, 4, 5, 6]


@pytest.mark.parametrize("segments", [1, 2, 3, 5])
def test_curve_indices_patches(segments):
    count = 3 * segments + 1
    indices = curve_indices(count)
    assert indices[:count] == list(range(count))
    patches = indices[count:]
    assert len(patches) == 4 * segments
    for j in range(segments):
        assert patches[4 * j : 4 * j + 4] == list(range(3 * j, 3 * j + 4))


def test_curve_indices_negative():
    with pytest.raises(ValueError):
        curve_indices(-1)