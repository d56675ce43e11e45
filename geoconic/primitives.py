"""Minimal point and line collaborators.

Conics only require ``x()``/``y()`` on points and ``slope()``/``standard_form()``
on lines. These classes are enough for scripts, the CLI and the tests; scene
graphs are expected to bring their own objects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List

from .types import Point2D, PointLike

_EPS = 1e-12


@dataclass
class FreePoint:
    """Mutable point with fixed coordinates until moved."""

    px: float
    py: float
    name: str = ""

    def x(self) -> float:
        return float(self.px)

    def y(self) -> float:
        return float(self.py)

    def move_to(self, x: float, y: float) -> None:
        self.px = x
        self.py = y


class DerivedPoint:
    """Point whose coordinates are recomputed by ``compute`` on every read."""

    def __init__(self, compute: Callable[[], Point2D], name: str = ""):
        self.compute = compute
        self.name = name

    def x(self) -> float:
        return float(self.compute()[0])

    def y(self) -> float:
        return float(self.compute()[1])

    def __repr__(self) -> str:
        return f"DerivedPoint(name={self.name!r}, coords={self.compute()!r})"


class Line:
    """Line through two live points."""

    def __init__(self, p: PointLike, q: PointLike):
        self.p = p
        self.q = q

    @classmethod
    def through(cls, a: Point2D, b: Point2D) -> "Line":
        return cls(FreePoint(*a), FreePoint(*b))

    def standard_form(self) -> List[float]:
        # Homogeneous coefficients [c, a, b] of c + a*x + b*y = 0.
        px, py = self.p.x(), self.p.y()
        qx, qy = self.q.x(), self.q.y()
        return [px * qy - py * qx, py - qy, qx - px]

    def slope(self) -> float:
        # Vertical lines report +inf whatever the order of p and q.
        _, a, b = self.standard_form()
        if abs(b) < _EPS:
            return math.inf
        return -a / b


__all__ = ["DerivedPoint", "FreePoint", "Line"]
