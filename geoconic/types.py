from __future__ import annotations

from typing import Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

Point2D = Tuple[float, float]
Vec3 = np.ndarray
Mat3 = np.ndarray
Range = Tuple[float, float]


@runtime_checkable
class PointLike(Protocol):
    """Anything exposing live Euclidean coordinates."""

    def x(self) -> float:
        ...

    def y(self) -> float:
        ...


@runtime_checkable
class LineLike(Protocol):
    """Line exposing its slope and homogeneous coefficients ``[c, a, b]``."""

    def slope(self) -> float:
        ...

    def standard_form(self) -> Sequence[float]:
        ...


class ConicConstructionError(TypeError):
    """Raised when a conic cannot be built from the given parent objects."""

    def __init__(self, kind: str, parent_types: Sequence[str], accepted: Sequence[str]):
        self.kind = kind
        self.parent_types = tuple(parent_types)
        self.accepted = tuple(accepted)
        quoted = " and ".join(f"'{name}'" for name in self.parent_types) or "<none>"
        message = (
            f"Can't create {kind} with parent types {quoted}."
            f"\nPossible parent types: {', '.join(self.accepted)}"
        )
        super().__init__(message)


class ConicStateError(RuntimeError):
    """Raised when cached conic state is read before the first refresh."""


__all__ = [
    "ConicConstructionError",
    "ConicStateError",
    "LineLike",
    "Mat3",
    "Point2D",
    "PointLike",
    "Range",
    "Vec3",
]
