"""Bézier curves built from points kept in a shared object store."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from typing import ClassVar, Iterator, Optional, Sequence

import numpy as np

# The store is the scene's object list: each entry is a point position
# (three coordinates) or None for an object that is not a point.
PointStore = Sequence[Optional[Sequence[float]]]


class BezierCurve(ABC):
    """A curve whose control points are indices into a shared point store."""

    name_prefix: ClassVar[str] = "Bézier curve"
    _counter: ClassVar[Iterator[int]] = itertools.count(1)

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._counter = itertools.count(1)

    def __init__(self, store: PointStore, name: Optional[str] = None) -> None:
        self.store = store
        if name is None:
            name = f"{self.name_prefix} {next(type(self)._counter)}"
        self.name = name
        self.point_indices: list[int] = []
        self.active_index = 0
        self.is_polygon_visible = False
        self.is_curve_visible = True
        self.is_line_drawn = True

    def _is_point(self, index: int) -> bool:
        return 0 <= index < len(self.store) and self.store[index] is not None

    def _control_positions(self) -> np.ndarray:
        """Positions of the control points that still exist in the store."""
        positions = [self.store[i] for i in self.point_indices if self._is_point(i)]
        if not positions:
            return np.empty((0, 3))
        return np.asarray(positions, dtype=float)

    def _check_position(self, position: int) -> None:
        if not 0 <= position < len(self.point_indices):
            raise IndexError(f"curve has no control point at position {position}")

    def add_point(self, index: int) -> bool:
        """Append the store object at ``index``; return False if it is not a point."""
        if not self._is_point(index):
            return False
        self.point_indices.append(index)
        return True

    def remove_point(self, position: int) -> None:
        """Drop the control point at ``position`` in the curve."""
        self._check_position(position)
        del self.point_indices[position]
        self.active_index = 0

    def swap(self, first: int, second: int) -> None:
        """Exchange two control points of the curve."""
        self._check_position(first)
        self._check_position(second)
        indices = self.point_indices
        indices[first], indices[second] = indices[second], indices[first]

    def get_point(self, index: int) -> np.ndarray:
        """Position of the control point at ``index``, wrapping around both ends."""
        if not self.point_indices:
            raise IndexError("curve has no control points")
        store_index = self.point_indices[index % len(self.point_indices)]
        return np.asarray(self.store[store_index], dtype=float)

    def on_remove_object(self, index: int) -> None:
        """Forget a store object that was removed and shift later indices down."""
        self.point_indices = [i - 1 if i > index else i for i in self.point_indices if i != index]

    def on_merge_points(self, kept: int, removed: int) -> None:
        """Point every reference to ``removed`` at ``kept`` instead."""
        self.point_indices = [kept if i == removed else i for i in self.point_indices]

    def polygon_indices(self) -> list[tuple[int, int]]:
        """Edges of the control polygon as pairs of curve positions."""
        count = len(self.point_indices)
        return list(zip(range(count - 1), range(1, count)))

    @abstractmethod
    def bezier_points(self) -> np.ndarray:
        """Control points of the equivalent piecewise cubic Bézier chain."""


class BezierCurve0(BezierCurve):
    """A C0 Bézier chain whose control points are the curve's points."""

    name_prefix = "Bézier curve0"

    def bezier_points(self) -> np.ndarray:
        return self._control_positions()