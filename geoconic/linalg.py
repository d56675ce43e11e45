"""Homogeneous 3-vector and 3×3 matrix helpers.

All vectors are ordered ``(w, x, y)``. A point ``(x, y)`` is ``(1, x, y)`` and
a line ``c + a*x + b*y = 0`` is ``(c, a, b)``.
"""

from __future__ import annotations

import math

import numpy as np

from .types import Mat3, Point2D, Vec3


def homogeneous(point: Point2D) -> Vec3:
    return np.array([1.0, point[0], point[1]], dtype=float)


def cross(u: Vec3, v: Vec3) -> Vec3:
    return np.cross(np.asarray(u, dtype=float), np.asarray(v, dtype=float))


def inner(u: Vec3, v: Vec3) -> float:
    return float(np.dot(u, v))


def quad_value(m: Mat3, p: Vec3) -> float:
    """Return ``pᵗ M p``."""

    p = np.asarray(p, dtype=float)
    return inner(p, m @ p)


def sym(a: Mat3) -> Mat3:
    """Return ``A + Aᵗ``."""

    a = np.asarray(a, dtype=float)
    return a + a.T


def symmetrize(a: Mat3) -> Mat3:
    a = np.asarray(a, dtype=float)
    return 0.5 * (a + a.T)


def degenerate_conic(l: Vec3, m: Vec3) -> Mat3:
    """Line-pair conic ``sym(l ⊗ m)`` vanishing on both lines."""

    return sym(np.outer(l, m))


def fit_conic(a: Mat3, b: Mat3, p: Vec3) -> Mat3:
    """Member of the pencil spanned by ``a`` and ``b`` passing through ``p``."""

    pbp = quad_value(b, p)
    pap = quad_value(a, p)
    return pbp * np.asarray(a, dtype=float) - pap * np.asarray(b, dtype=float)


def dehomogenize(v: np.ndarray) -> np.ndarray:
    """Scale homogeneous vector(s) along axis 0 to ``w = 1`` and drop ``w``."""

    v = np.asarray(v, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        return v[1:] / v[0]


def meet_line_line(l1: Vec3, l2: Vec3) -> Vec3:
    """Intersection of two lines, normalized to ``w = 1`` (infinite if parallel)."""

    p = cross(l1, l2)
    with np.errstate(divide="ignore", invalid="ignore"):
        return p / p[0]


def rotation_about(angle: float, cx: float, cy: float) -> Mat3:
    """Homogeneous rotation by ``angle`` around ``(cx, cy)``."""

    co = math.cos(angle)
    si = math.sin(angle)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [cx * (1.0 - co) + cy * si, co, -si],
            [cy * (1.0 - co) - cx * si, si, co],
        ],
        dtype=float,
    )


def placement(angle: float, cx: float, cy: float) -> Mat3:
    """Rotate by ``angle`` about the origin, then translate to ``(cx, cy)``."""

    co = math.cos(angle)
    si = math.sin(angle)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [cx, co, -si],
            [cy, si, co],
        ],
        dtype=float,
    )


def conjugate(q: Mat3, t: Mat3) -> Mat3:
    """Quadratic form ``Tᵗ Q T`` (pull ``q`` back through ``t``), symmetrized."""

    t = np.asarray(t, dtype=float)
    return symmetrize(t.T @ np.asarray(q, dtype=float) @ t)


def conic_center(m: Mat3) -> Vec3:
    """Homogeneous center from the first column of the adjugate of ``m``."""

    return np.array(
        [
            m[1][1] * m[2][2] - m[1][2] * m[1][2],
            m[1][2] * m[0][2] - m[2][2] * m[0][1],
            m[0][1] * m[1][2] - m[1][1] * m[0][2],
        ],
        dtype=float,
    )


def segment_angle(ax: float, ay: float, bx: float, by: float, tol: float = 1e-7) -> float:
    """Direction angle of ``a -> b`` with the near-vertical case pinned to ±π/2."""

    dx = bx - ax
    dy = by - ay
    if abs(dx) > tol:
        return math.atan2(dy, dx) + (math.pi if dx < 0 else 0.0)
    return (0.5 if dy > 0 else -0.5) * math.pi


__all__ = [
    "conic_center",
    "conjugate",
    "cross",
    "degenerate_conic",
    "dehomogenize",
    "fit_conic",
    "homogeneous",
    "inner",
    "meet_line_line",
    "placement",
    "quad_value",
    "rotation_about",
    "segment_angle",
    "sym",
    "symmetrize",
]
