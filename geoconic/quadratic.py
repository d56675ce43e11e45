"""Quadratic-form builders.

Each builder returns the symmetric 3×3 matrix ``M`` over ``(w, x, y)`` such
that a point ``p`` lies on the conic iff ``pᵗ M p = 0``. Degenerate inputs are
not rejected: NaN and inf flow through to the caller.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from .linalg import conjugate, cross, degenerate_conic, fit_conic, meet_line_line, rotation_about
from .logging_utils import debug_log_call
from .types import Mat3, Point2D, Vec3

logger = logging.getLogger(__name__)


def _axis_aligned_central(mx: float, my: float, a: float, b: float, sign: float) -> Mat3:
    # ((x-mx)/a)^2 + sign*((y-my)/b)^2 = 1
    aa = np.float64(a) * a
    bb = sign * np.float64(b) * b
    return np.array(
        [
            [-1.0 + mx * mx / aa + my * my / bb, -mx / aa, -my / bb],
            [-mx / aa, 1.0 / aa, 0.0],
            [-my / bb, 0.0, 1.0 / bb],
        ],
        dtype=float,
    )


@debug_log_call(logger)
def ellipse_form(center: Point2D, angle: float, a: float, b: float) -> Mat3:
    """Ellipse with semi-axes ``a`` (along ``angle``) and ``b`` around ``center``."""

    mx, my = center
    with np.errstate(divide="ignore", invalid="ignore"):
        q0 = _axis_aligned_central(mx, my, a, b, 1.0)
        return conjugate(q0, rotation_about(-angle, mx, my))


@debug_log_call(logger)
def hyperbola_form(center: Point2D, angle: float, a: float, b: float) -> Mat3:
    """Hyperbola ``x²/a² - y²/b² = 1`` in the frame at ``center`` rotated by ``angle``."""

    mx, my = center
    with np.errstate(divide="ignore", invalid="ignore"):
        q0 = _axis_aligned_central(mx, my, a, b, -1.0)
        return conjugate(q0, rotation_about(-angle, mx, my))


@debug_log_call(logger)
def parabola_form(vertex: Point2D, angle: float, e: float) -> Mat3:
    """Parabola ``4e(y - vy) = (x - vx)²`` rotated by ``angle`` about its vertex."""

    vx, vy = vertex
    q0 = np.array(
        [
            [-4.0 * e * vy - vx * vx, vx, 2.0 * e],
            [vx, -1.0, 0.0],
            [2.0 * e, 0.0, 0.0],
        ],
        dtype=float,
    )
    with np.errstate(invalid="ignore", over="ignore"):
        return conjugate(q0, rotation_about(-angle, vx, vy))


def perpendicular_foot(focus: Vec3, directrix: Vec3) -> Vec3:
    """Foot of the perpendicular from ``focus`` onto ``directrix`` (``w = 1``).

    The perpendicular is the line joining ``focus`` with the point at infinity
    in the directrix normal direction.
    """

    normal_direction = np.array([0.0, directrix[1], directrix[2]], dtype=float)
    perpendicular = cross(normal_direction, focus)
    return meet_line_line(perpendicular, directrix)


@debug_log_call(logger)
def five_point_form(points: Sequence[Vec3]) -> Mat3:
    """Conic through five homogeneous points, via a pencil of two line pairs."""

    p0, p1, p2, p3, p4 = (np.asarray(p, dtype=float) for p in points)
    c1 = degenerate_conic(cross(p0, p1), cross(p2, p3))
    c2 = degenerate_conic(cross(p0, p2), cross(p1, p3))
    return fit_conic(c1, c2, p4)


@debug_log_call(logger)
def coefficient_form(a00: float, a11: float, a22: float, a01: float, a02: float, a12: float) -> Mat3:
    """Matrix of ``a00·x² + a11·y² + a22 + 2·a01·xy + 2·a02·x + 2·a12·y``."""

    return np.array(
        [
            [a22, a02, a12],
            [a02, a00, a01],
            [a12, a01, a11],
        ],
        dtype=float,
    )


def line_pairs(points: Sequence[Vec3]) -> Tuple[Mat3, Mat3, Mat3]:
    """The three line-pair conics through the first four of ``points``."""

    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in points[:4])
    return (
        degenerate_conic(cross(p0, p1), cross(p2, p3)),
        degenerate_conic(cross(p0, p2), cross(p1, p3)),
        degenerate_conic(cross(p0, p3), cross(p1, p2)),
    )


__all__ = [
    "coefficient_form",
    "ellipse_form",
    "five_point_form",
    "hyperbola_form",
    "line_pairs",
    "parabola_form",
    "perpendicular_foot",
]
