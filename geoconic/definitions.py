"""Tagged geometric definitions of a conic.

Raw parent lists (points, coordinate pairs, callables, point names, numbers and
lines in various positions) are resolved exactly once, when the conic is
created, into one of five frozen dataclasses. Builders consume only these.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .refs import LineRef, PointRef, ScalarRef, line_ref, point_ref, scalar_ref, type_labels
from .types import ConicConstructionError, Range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FociPoint:
    f0: PointRef
    f1: PointRef
    surface_point: PointRef
    kind: str = field(default="foci_point", init=False)


@dataclass(frozen=True)
class FociAxis:
    f0: PointRef
    f1: PointRef
    major_axis: ScalarRef
    kind: str = field(default="foci_axis", init=False)


@dataclass(frozen=True)
class FocusDirectrix:
    focus: PointRef
    directrix: LineRef
    kind: str = field(default="focus_directrix", init=False)


@dataclass(frozen=True)
class FivePoints:
    points: Tuple[PointRef, PointRef, PointRef, PointRef, PointRef]
    kind: str = field(default="five_points", init=False)


@dataclass(frozen=True)
class SixCoefficients:
    a00: ScalarRef
    a11: ScalarRef
    a22: ScalarRef
    a01: ScalarRef
    a02: ScalarRef
    a12: ScalarRef
    kind: str = field(default="six_coefficients", init=False)


Definition = Union[FociPoint, FociAxis, FocusDirectrix, FivePoints, SixCoefficients]


PartialRange = Tuple[Optional[float], Optional[float]]


@dataclass
class ResolvedParents:
    """Outcome of resolving a parent list for one conic kind.

    ``t_range`` holds the optional ``from``/``to`` parents; ``None`` entries
    fall back to the configured default range.
    """

    definition: Definition
    t_range: PartialRange = (None, None)

    def merged_range(self, default: Range) -> Range:
        lo, hi = self.t_range
        return (default[0] if lo is None else lo, default[1] if hi is None else hi)


_FOCAL_SHAPES = ("[point,point,point]", "[point,point,number|function]")

ACCEPTED_SHAPES: Dict[str, Tuple[str, ...]] = {
    "ellipse": _FOCAL_SHAPES,
    "hyperbola": _FOCAL_SHAPES,
    "parabola": ("[point,line]",),
    "conic": ("[point,point,point,point,point]", "[a00,a11,a22,a01,a02,a12]"),
}

_DISPLAY_NAMES = {
    "ellipse": "Ellipse",
    "hyperbola": "Hyperbola",
    "parabola": "Parabola",
    "conic": "Conic section",
}


def _fail(kind: str, parents: Sequence[Any]) -> ConicConstructionError:
    return ConicConstructionError(_DISPLAY_NAMES[kind], type_labels(parents), ACCEPTED_SHAPES[kind])


def _parse_range(kind: str, parents: Sequence[Any], extra: Sequence[Any]) -> PartialRange:
    bounds = []
    for value in extra:
        if not isinstance(value, numbers.Real) or isinstance(value, bool):
            raise _fail(kind, parents)
        bounds.append(float(value))
    bounds += [None] * (2 - len(bounds))
    return bounds[0], bounds[1]


def _resolve_focal(kind: str, parents: Sequence[Any], points: Optional[Mapping[str, Any]]) -> ResolvedParents:
    if not 3 <= len(parents) <= 5:
        raise _fail(kind, parents)
    f0 = point_ref(parents[0], points)
    f1 = point_ref(parents[1], points)
    if f0 is None or f1 is None:
        raise _fail(kind, parents[:2])

    axis = scalar_ref(parents[2])
    definition: Definition
    if axis is not None:
        definition = FociAxis(f0, f1, axis)
    else:
        surface = point_ref(parents[2], points)
        if surface is None:
            raise _fail(kind, parents[:3])
        definition = FociPoint(f0, f1, surface)

    return ResolvedParents(definition, _parse_range(kind, parents, parents[3:]))


def _resolve_parabola(parents: Sequence[Any], points: Optional[Mapping[str, Any]]) -> ResolvedParents:
    if not 2 <= len(parents) <= 4:
        raise _fail("parabola", parents)
    focus = point_ref(parents[0], points)
    directrix = line_ref(parents[1])
    if focus is None or directrix is None:
        raise _fail("parabola", parents[:2])
    return ResolvedParents(FocusDirectrix(focus, directrix), _parse_range("parabola", parents, parents[2:]))


def _resolve_general(parents: Sequence[Any], points: Optional[Mapping[str, Any]]) -> ResolvedParents:
    if len(parents) == 5:
        refs = [point_ref(value, points) for value in parents]
        if any(ref is None for ref in refs):
            raise _fail("conic", parents)
        return ResolvedParents(FivePoints(tuple(refs)))  # type: ignore[arg-type]
    if len(parents) == 6:
        scalars = [scalar_ref(value) for value in parents]
        if any(ref is None for ref in scalars):
            raise _fail("conic", parents)
        return ResolvedParents(SixCoefficients(*scalars))  # type: ignore[arg-type]
    raise _fail("conic", parents)


def resolve_parents(
    kind: str, parents: Sequence[Any], points: Optional[Mapping[str, Any]] = None
) -> ResolvedParents:
    """Resolve a raw parent list into a tagged definition.

    ``points`` maps point names to point-likes; string parents are looked up
    there. Raises :class:`ConicConstructionError` for any unsupported shape.
    """

    if kind in ("ellipse", "hyperbola"):
        resolved = _resolve_focal(kind, parents, points)
    elif kind == "parabola":
        resolved = _resolve_parabola(parents, points)
    elif kind == "conic":
        resolved = _resolve_general(parents, points)
    else:
        raise ValueError(f"unknown conic kind {kind!r}")
    logger.debug("Resolved %s parents -> %s", kind, resolved.definition.kind)
    return resolved


__all__ = [
    "ACCEPTED_SHAPES",
    "Definition",
    "FivePoints",
    "FociAxis",
    "FociPoint",
    "FocusDirectrix",
    "ResolvedParents",
    "SixCoefficients",
    "resolve_parents",
]
