"""Live references to externally owned geometry.

Every parent of a conic may be a constant, a zero-argument callable or a live
object. Construction wraps all three behind one callable interface so the
builders never branch on the shape of their inputs.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Callable, List, Mapping, Optional, Sequence

import numpy as np

from .types import LineLike, Point2D, PointLike, Vec3


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_coord_pair(value: Any) -> bool:
    if isinstance(value, (str, bytes)):
        return False
    if isinstance(value, np.ndarray):
        return value.shape == (2,)
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(_is_number(v) for v in value)
    )


def _coords_of(value: Any) -> Optional[Point2D]:
    if isinstance(value, PointLike):
        return float(value.x()), float(value.y())
    if _is_coord_pair(value):
        return float(value[0]), float(value[1])
    return None


class PointRef:
    """Zero-argument accessor for the current coordinates of a point."""

    def __init__(self, read: Callable[[], Point2D], label: str):
        self._read = read
        self.label = label

    def __call__(self) -> Point2D:
        return self._read()

    def x(self) -> float:
        return self._read()[0]

    def y(self) -> float:
        return self._read()[1]

    def homogeneous(self) -> Vec3:
        px, py = self._read()
        return np.array([1.0, px, py], dtype=float)

    def dist(self, other: "PointRef") -> float:
        ax, ay = self._read()
        bx, by = other()
        return math.hypot(bx - ax, by - ay)

    def __repr__(self) -> str:
        return f"PointRef({self.label})"


class ScalarRef:
    """Zero-argument accessor for a number that may change upstream."""

    def __init__(self, read: Callable[[], float], label: str):
        self._read = read
        self.label = label

    def __call__(self) -> float:
        return float(self._read())

    def __repr__(self) -> str:
        return f"ScalarRef({self.label})"


class LineRef:
    """Accessor for a live line."""

    def __init__(self, line: LineLike, label: str):
        self.line = line
        self.label = label

    def standard_form(self) -> Vec3:
        return np.asarray(self.line.standard_form(), dtype=float)

    def slope(self) -> float:
        return float(self.line.slope())

    def __repr__(self) -> str:
        return f"LineRef({self.label})"


def point_ref(value: Any, points: Optional[Mapping[str, Any]] = None) -> Optional[PointRef]:
    """Wrap ``value`` as a :class:`PointRef`, or return ``None`` if it is not point-shaped."""

    if isinstance(value, PointRef):
        return value
    if isinstance(value, str):
        if points is None or value not in points:
            return None
        return point_ref(points[value], points)
    if isinstance(value, PointLike):
        target = value
        return PointRef(lambda: (float(target.x()), float(target.y())), type(value).__name__)
    if _is_coord_pair(value):
        fixed = (float(value[0]), float(value[1]))
        return PointRef(lambda: fixed, "coords")
    if callable(value):
        probe = value()
        if _coords_of(probe) is None:
            return None
        func = value

        def read() -> Point2D:
            coords = _coords_of(func())
            if coords is None:
                raise TypeError(f"point callable {func!r} stopped returning a point")
            return coords

        return PointRef(read, "function")
    return None


def scalar_ref(value: Any) -> Optional[ScalarRef]:
    """Wrap a number or a number-returning callable, else return ``None``."""

    if isinstance(value, ScalarRef):
        return value
    if _is_number(value):
        fixed = float(value)
        return ScalarRef(lambda: fixed, "number")
    if callable(value) and not isinstance(value, PointLike):
        if not _is_number(value()):
            return None
        return ScalarRef(value, "function")
    return None


def line_ref(value: Any) -> Optional[LineRef]:
    if isinstance(value, LineRef):
        return value
    if isinstance(value, LineLike):
        return LineRef(value, type(value).__name__)
    return None


def type_label(value: Any) -> str:
    """Name used for ``value`` in construction error messages."""

    if isinstance(value, str):
        return "string"
    if callable(value) and not isinstance(value, (PointLike, LineLike)):
        return "function"
    if _is_number(value):
        return "number"
    if isinstance(value, (list, tuple, np.ndarray)):
        return "array"
    return type(value).__name__


def type_labels(values: Sequence[Any]) -> List[str]:
    return [type_label(value) for value in values]


__all__ = [
    "LineRef",
    "PointRef",
    "ScalarRef",
    "line_ref",
    "point_ref",
    "scalar_ref",
    "type_label",
    "type_labels",
]
