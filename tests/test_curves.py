import numpy as np
import pytest

from bezmodel.curves import BezierCurve, BezierCurve0


def make_store():
    return [
        (0.0, 0.0, 0.0),
        None,
        (1.0, 2.0, 3.0),
        (4.0, 5.0, 6.0),
        (7.0, 8.0, 9.0),
    ]


def make_curve(indices=(0, 2, 3, 4)):
    store = make_store()
    curve = BezierCurve0(store, "curve")
    for i in indices:
        assert curve.add_point(i)
    return store, curve


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        BezierCurve(make_store())


def test_add_point_accepts_points():
    _, curve = make_curve()
    assert curve.point_indices == [0, 2, 3, 4]


@pytest.mark.parametrize("index", [1, -1, 5, 100])
def test_add_point_rejects_non_points(index):
    _, curve = make_curve(())
    assert curve.add_point(index) is False
    assert curve.point_indices == []


def test_same_point_may_be_added_twice():
    _, curve = make_curve((2, 2))
    assert curve.point_indices == [2, 2]


def test_bezier_points_follow_store():
    store, curve = make_curve()
    expected = [store[i] for i in (0, 2, 3, 4)]
    np.testing.assert_allclose(curve.bezier_points(), expected)
    store[3] = (-1.0, -1.0, -1.0)
    np.testing.assert_allclose(curve.bezier_points()[2], store[3])


def test_bezier_points_empty():
    _, curve = make_curve(())
    assert curve.bezier_points().shape == (0, 3)


def test_remove_point():
    _, curve = make_curve()
    curve.active_index = 2
    curve.remove_point(1)
    assert curve.point_indices == [0, 3, 4]
    assert curve.active_index == 0


@pytest.mark.parametrize("position", [-1, 4])
def test_remove_point_out_of_range(position):
    _, curve = make_curve()
    with pytest.raises(IndexError):
        curve.remove_point(position)


def test_swap():
    _, curve = make_curve()
    curve.swap(0, 3)
    assert curve.point_indices == [4, 2, 3, 0]


def test_swap_out_of_range():
    _, curve = make_curve()
    with pytest.raises(IndexError):
        curve.swap(0, 4)


def test_get_point_wraps():
    store, curve = make_curve()
    np.testing.assert_allclose(curve.get_point(1), store[2])
    np.testing.assert_allclose(curve.get_point(-1), store[4])
    np.testing.assert_allclose(curve.get_point(4), store[0])
    np.testing.assert_allclose(curve.get_point(-5), store[4])


def test_get_point_empty_curve():
    _, curve = make_curve(())
    with pytest.raises(IndexError):
        curve.get_point(0)


def test_on_remove_object_drops_and_shifts():
    store, curve = make_curve((0, 2, 3, 2, 4))
    del store[2]
    curve.on_remove_object(2)
    assert curve.point_indices == [0, 2, 3]
    np.testing.assert_allclose(curve.bezier_points(), [store[0], store[2], store[3]])


def test_on_remove_object_unrelated_index():
    _, curve = make_curve((2, 3))
    curve.on_remove_object(4)
    assert curve.point_indices == [2, 3]


def test_on_merge_points():
    _, curve = make_curve((0, 2, 3, 2))
    curve.on_merge_points(4, 2)
    assert curve.point_indices == [0, 4, 3, 4]


def test_polygon_indices():
    _, curve = make_curve((0, 2, 3))
    assert curve.polygon_indices() == [(0, 1), (1, 2)]


def test_polygon_indices_short_curves():
    _, curve = make_curve((0,))
    assert curve.polygon_indices() == []


def test_default_names_count_up():
    first = BezierCurve0(make_store())
    second = BezierCurve0(make_store())
    assert first.name.startswith("Bézier curve0 ")
    assert int(second.name.rsplit(" ", 1)[1]) == int(first.name.rsplit(" ", 1)[1]) + 1


def test_explicit_name_does_not_advance_counter():
    first = BezierCurve0(make_store())
    named = BezierCurve0(make_store(), "my curve")
    second = BezierCurve0(make_store())
    assert named.name == "my curve"
    assert int(second.name.rsplit(" ", 1)[1]) == int(first.name.rsplit(" ", 1)[1]) + 1


def test_default_flags():
    curve = BezierCurve0(make_store(), "c")
    assert curve.is_polygon_visible is False
    assert curve.is_curve_visible is True
    assert curve.active_index == 0