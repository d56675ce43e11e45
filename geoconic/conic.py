"""Conic sections with a cached canonical frame.

A conic is refreshed explicitly: :meth:`Conic.refresh` re-reads every live
parent, rebuilds the quadratic form and the canonical frame; :meth:`Conic.evaluate`
only reads that cache. ``x``/``y`` keep the curve-renderer calling convention
``(t, suspend_update)`` where ``suspend_update=False`` refreshes first.

Nothing here is thread-safe: a conic owns its form and frame and mutates them
in place on refresh.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from .canonical import CanonicalFrame, diagonalize
from .config import ConicConfig, get_conic_config
from .definitions import (
    FivePoints,
    FociAxis,
    FociPoint,
    FocusDirectrix,
    ResolvedParents,
    SixCoefficients,
    resolve_parents,
)
from .linalg import conic_center, dehomogenize, homogeneous, placement, quad_value, rotation_about, segment_angle
from .quadratic import (
    coefficient_form,
    ellipse_form,
    five_point_form,
    hyperbola_form,
    parabola_form,
    perpendicular_foot,
)
from .types import ConicStateError, Mat3, Point2D, Range

logger = logging.getLogger(__name__)

Parameter = Union[float, np.ndarray]


class Conic:
    """Base class holding the definition, the cache and the evaluation protocol."""

    kind: str = "conic"

    def __init__(self, resolved: ResolvedParents, config: Optional[ConicConfig] = None):
        self.config = config if config is not None else get_conic_config()
        self.definition = resolved.definition
        self.t_range: Range = resolved.merged_range(self._default_range())
        self._quadraticform: Optional[Mat3] = None
        self._frame: Optional[CanonicalFrame] = None
        self.refresh_count = 0
        logger.debug("Created %s from %s definition", self.kind, self.definition.kind)

    # -- cache -------------------------------------------------------------

    @property
    def quadraticform(self) -> Mat3:
        """Quadratic form from the latest refresh (read-only array)."""

        if self._quadraticform is None:
            raise ConicStateError(f"{self.kind} has not been refreshed yet")
        return self._quadraticform

    @property
    def frame(self) -> CanonicalFrame:
        if self._frame is None:
            raise ConicStateError(f"{self.kind} has not been refreshed yet")
        return self._frame

    @property
    def is_refreshed(self) -> bool:
        return self._frame is not None

    def refresh(self) -> None:
        """Re-read the parents and recompute the quadratic form and frame."""

        with np.errstate(all="ignore"):
            form, frame = self._derive()
        form = np.array(form, dtype=float)
        form.setflags(write=False)
        self._quadraticform = form
        self._frame = frame
        self.refresh_count += 1
        if not frame.is_finite():
            logger.warning("%s refresh produced a degenerate (non-finite) frame", self.kind)
        elif logger.isEnabledFor(logging.DEBUG):
            logger.debug("Refreshed %s (a=%.6g, b=%.6g, c=%.6g)", self.kind, frame.a, frame.b, frame.c)

    # -- evaluation --------------------------------------------------------

    def evaluate(self, phi: Parameter) -> Union[Point2D, np.ndarray]:
        """Point(s) on the curve for ``phi`` using the cached frame.

        A scalar ``phi`` gives an ``(x, y)`` tuple, an array gives an
        ``(n, 2)`` array.
        """

        frame = self.frame
        t = np.asarray(phi, dtype=float)
        with np.errstate(all="ignore"):
            xy = self._to_ambient(frame.rotation @ self._pre_rotation(frame, t))
        if t.ndim == 0:
            return float(xy[0]), float(xy[1])
        return np.stack([xy[0], xy[1]], axis=-1)

    def x(self, phi: Parameter, suspend_update: bool = False) -> Parameter:
        if not suspend_update:
            self.refresh()
        return self._coordinate(phi, 0)

    def y(self, phi: Parameter, suspend_update: bool = False) -> Parameter:
        if not suspend_update:
            self.refresh()
        return self._coordinate(phi, 1)

    def _coordinate(self, phi: Parameter, axis: int) -> Parameter:
        xy = self.evaluate(phi)
        if isinstance(xy, tuple):
            return xy[axis]
        return xy[:, axis]

    def residual(self, point: Point2D) -> float:
        """``pᵗ M p`` for ``point`` against the cached quadratic form."""

        return quad_value(self.quadraticform, homogeneous(point))

    @property
    def midpoint(self) -> Point2D:
        raise NotImplementedError

    # -- hooks -------------------------------------------------------------

    def _default_range(self) -> Range:
        return self.config.general_range

    def _derive(self) -> Tuple[Mat3, CanonicalFrame]:
        raise NotImplementedError

    def _pre_rotation(self, frame: CanonicalFrame, t: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _to_ambient(self, v: np.ndarray) -> np.ndarray:
        # The first row of a placement matrix keeps w = 1.
        return v[1:]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(definition={self.definition.kind}, "
            f"t_range=({self.t_range[0]:.4g}, {self.t_range[1]:.4g}), refreshed={self.is_refreshed})"
        )


class _FocalConic(Conic):
    """Ellipse and hyperbola: two foci plus a major axis length."""

    # +1 for the sum of focal distances, -1 for their difference.
    _surface_sign: float = 1.0

    def _default_range(self) -> Range:
        return self.config.focal_range

    def major_axis(self) -> float:
        d = self.definition
        if isinstance(d, FociAxis):
            return d.major_axis()
        assert isinstance(d, FociPoint)
        return d.surface_point.dist(d.f0) + self._surface_sign * d.surface_point.dist(d.f1)

    @property
    def midpoint(self) -> Point2D:
        d = self.definition
        ax, ay = d.f0()  # type: ignore[union-attr]
        bx, by = d.f1()  # type: ignore[union-attr]
        return (ax + bx) * 0.5, (ay + by) * 0.5

    def _axes(self, a: float, e: float) -> float:
        raise NotImplementedError

    def _form(self, center: Point2D, angle: float, a: float, b: float) -> Mat3:
        raise NotImplementedError

    def _derive(self) -> Tuple[Mat3, CanonicalFrame]:
        d = self.definition
        ax, ay = d.f0()  # type: ignore[union-attr]
        bx, by = d.f1()  # type: ignore[union-attr]
        a = self.major_axis() * 0.5
        e = math.hypot(bx - ax, by - ay) * 0.5
        b = self._axes(a, e)
        center = self.midpoint
        angle = segment_angle(ax, ay, bx, by, tol=self.config.vertical_tolerance)
        frame = CanonicalFrame(rotation=placement(angle, *center), a=a, b=b)
        return self._form(center, angle, a, b), frame


class Ellipse(_FocalConic):
    kind = "ellipse"
    _surface_sign = 1.0

    def _axes(self, a: float, e: float) -> float:
        return float(np.sqrt(np.float64(a * a - e * e)))

    def _form(self, center: Point2D, angle: float, a: float, b: float) -> Mat3:
        return ellipse_form(center, angle, a, b)

    def _pre_rotation(self, frame: CanonicalFrame, t: np.ndarray) -> np.ndarray:
        return np.stack([np.ones_like(t), frame.a * np.cos(t), frame.b * np.sin(t)])


class Hyperbola(_FocalConic):
    """Hyperbola parametrized by ``(a sec t, b tan t)``; ``cos t = 0`` is singular."""

    kind = "hyperbola"
    _surface_sign = -1.0

    def _axes(self, a: float, e: float) -> float:
        return float(np.sqrt(np.float64(e * e - a * a)))

    def _form(self, center: Point2D, angle: float, a: float, b: float) -> Mat3:
        return hyperbola_form(center, angle, a, b)

    def _pre_rotation(self, frame: CanonicalFrame, t: np.ndarray) -> np.ndarray:
        return np.stack([np.ones_like(t), frame.a / np.cos(t), frame.b * np.tan(t)])


class Parabola(Conic):
    """Parabola from a focus and a directrix; ``t`` is the offset along the axis of symmetry's normal."""

    kind = "parabola"

    def _default_range(self) -> Range:
        return self.config.parabola_range

    def _foot(self) -> np.ndarray:
        d = self.definition
        assert isinstance(d, FocusDirectrix)
        with np.errstate(all="ignore"):
            return perpendicular_foot(d.focus.homogeneous(), d.directrix.standard_form())

    @property
    def midpoint(self) -> Point2D:
        """Foot of the perpendicular from the focus onto the directrix."""

        foot = self._foot()
        return float(foot[1]), float(foot[2])

    def _derive(self) -> Tuple[Mat3, CanonicalFrame]:
        d = self.definition
        assert isinstance(d, FocusDirectrix)
        fx, fy = d.focus()
        mx, my = self.midpoint
        e = math.hypot(mx - fx, my - fy) * 0.5
        vx = (mx + fx) * 0.5
        vy = (my + fy) * 0.5
        # Local +y must point from the foot towards the focus.
        angle = math.atan2(fy - my, fx - mx) - 0.5 * math.pi
        frame = CanonicalFrame(rotation=rotation_about(angle, vx, vy), a=vx, b=vy, c=e)
        return parabola_form((vx, vy), angle, e), frame

    def _pre_rotation(self, frame: CanonicalFrame, t: np.ndarray) -> np.ndarray:
        e4 = 4.0 * frame.c
        return np.stack([np.full_like(t, e4), e4 * (t + frame.a), t * t + frame.b * e4])

    def _to_ambient(self, v: np.ndarray) -> np.ndarray:
        return dehomogenize(v)


class GeneralConic(Conic):
    """Conic through five points or from six quadratic-form coefficients.

    Branches are chosen from the signs of the two non-primary eigenvalues.
    Forms with no real points (positive definite after normalization) and
    the exact-zero eigenvalue cases (parabolas, line pairs) have no branch;
    they evaluate to NaN or inf instead of raising.
    """

    kind = "conic"

    def _derive(self) -> Tuple[Mat3, CanonicalFrame]:
        d = self.definition
        if isinstance(d, FivePoints):
            form = five_point_form([p.homogeneous() for p in d.points])
        else:
            assert isinstance(d, SixCoefficients)
            form = coefficient_form(d.a00(), d.a11(), d.a22(), d.a01(), d.a02(), d.a12())
        return form, diagonalize(form)

    @property
    def midpoint(self) -> Point2D:
        """Center from the adjugate of the current form; stale until refreshed."""

        with np.errstate(all="ignore"):
            center = dehomogenize(conic_center(self.quadraticform))
        return float(center[0]), float(center[1])

    def branch(self) -> Optional[int]:
        """Index of the trigonometric branch used by :meth:`evaluate`, if any."""

        l1, l2 = self.frame.eigenvalues[1], self.frame.eigenvalues[2]  # type: ignore[index]
        if l1 <= 0.0 and l2 <= 0.0:
            return 0
        if l1 <= 0.0 and l2 > 0.0:
            return 1
        if l2 < 0.0:
            return 2
        return None

    def _pre_rotation(self, frame: CanonicalFrame, t: np.ndarray) -> np.ndarray:
        a, b, c = np.float64(frame.a), np.float64(frame.b), np.float64(frame.c)
        one = np.ones_like(t)
        branch = self.branch()
        if branch == 0:
            return np.stack([one / c, np.cos(t) / a, np.sin(t) / b])
        if branch == 1:
            return np.stack([np.cos(t) / c, one / a, np.sin(t) / b])
        if branch == 2:
            return np.stack([np.sin(t) / c, np.cos(t) / a, one / b])
        return np.stack([np.full_like(t, np.nan)] * 3)

    def _to_ambient(self, v: np.ndarray) -> np.ndarray:
        return dehomogenize(v)


def create_ellipse(*parents: Any, points: Optional[Mapping[str, Any]] = None, config: Optional[ConicConfig] = None) -> Ellipse:
    """Ellipse from ``[f0, f1, point]`` or ``[f0, f1, major_axis]`` (+ optional ``t_from, t_to``)."""

    return Ellipse(resolve_parents("ellipse", parents, points), config)


def create_hyperbola(*parents: Any, points: Optional[Mapping[str, Any]] = None, config: Optional[ConicConfig] = None) -> Hyperbola:
    """Hyperbola from ``[f0, f1, point]`` or ``[f0, f1, major_axis]`` (+ optional ``t_from, t_to``)."""

    return Hyperbola(resolve_parents("hyperbola", parents, points), config)


def create_parabola(*parents: Any, points: Optional[Mapping[str, Any]] = None, config: Optional[ConicConfig] = None) -> Parabola:
    """Parabola from ``[focus, directrix]`` (+ optional ``t_from, t_to``)."""

    return Parabola(resolve_parents("parabola", parents, points), config)


def create_conic(*parents: Any, points: Optional[Mapping[str, Any]] = None, config: Optional[ConicConfig] = None) -> GeneralConic:
    """General conic from five points or six coefficients ``a00, a11, a22, a01, a02, a12``."""

    return GeneralConic(resolve_parents("conic", parents, points), config)


FACTORIES: Dict[str, Callable[..., Conic]] = {
    "ellipse": create_ellipse,
    "hyperbola": create_hyperbola,
    "parabola": create_parabola,
    "conic": create_conic,
}


def create(kind: str, *parents: Any, points: Optional[Mapping[str, Any]] = None, config: Optional[ConicConfig] = None) -> Conic:
    """Create a conic element by name (``ellipse``, ``hyperbola``, ``parabola`` or ``conic``)."""

    try:
        factory = FACTORIES[kind]
    except KeyError as exc:
        raise ValueError(f"unknown conic kind {kind!r}; expected one of {sorted(FACTORIES)}") from exc
    return factory(*parents, points=points, config=config)


__all__ = [
    "Conic",
    "Ellipse",
    "FACTORIES",
    "GeneralConic",
    "Hyperbola",
    "Parabola",
    "create",
    "create_conic",
    "create_ellipse",
    "create_hyperbola",
    "create_parabola",
]
