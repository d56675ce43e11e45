"""Canonical frames: rotation plus axis scales derived from a quadratic form."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .logging_utils import debug_log_call
from .types import Mat3

logger = logging.getLogger(__name__)


@dataclass
class CanonicalFrame:
    """Cached result of the last refresh of a conic.

    ``rotation`` maps pre-rotation homogeneous vectors to ambient coordinates.
    For central conics ``a``/``b`` are the semi-axes; for the parabola they are
    the vertex coordinates and ``c`` is the focal length. General conics carry
    the sign-normalized ``eigenvalues`` with ``c, a, b = sqrt|λ0|, sqrt|λ1|, sqrt|λ2|``.
    """

    rotation: Mat3
    a: float
    b: float
    c: float = 0.0
    eigenvalues: Optional[np.ndarray] = None

    def is_finite(self) -> bool:
        values = [self.a, self.b, self.c]
        if self.eigenvalues is not None:
            values.extend(self.eigenvalues.tolist())
        return bool(np.all(np.isfinite(self.rotation)) and np.all(np.isfinite(values)))


@debug_log_call(logger)
def diagonalize(m: Mat3) -> CanonicalFrame:
    """Eigendecompose ``m`` and normalize the sign so that ``λ0 >= 0``.

    ``numpy.linalg.eigh`` returns orthonormal eigenvectors, so the columns of
    ``rotation`` need no further scaling. Negating all three eigenvalues is
    the same as negating ``m``, which leaves the conic unchanged.

    ``eigh`` sorts eigenvalues ascending, so after the flip they are sorted
    descending. Real non-degenerate conics therefore land on
    :meth:`GeneralConic.branch` 0 or 2; branch 1 needs ``λ0 = λ1 = 0``.
    """

    m = np.asarray(m, dtype=float)
    if not np.all(np.isfinite(m)):
        nan = float("nan")
        return CanonicalFrame(
            rotation=np.full((3, 3), nan), a=nan, b=nan, c=nan, eigenvalues=np.full(3, nan)
        )

    eigenvalues, eigenvectors = np.linalg.eigh(m)
    if eigenvalues[0] < 0:
        eigenvalues = -eigenvalues
    return CanonicalFrame(
        rotation=eigenvectors,
        a=float(np.sqrt(abs(eigenvalues[1]))),
        b=float(np.sqrt(abs(eigenvalues[2]))),
        c=float(np.sqrt(abs(eigenvalues[0]))),
        eigenvalues=eigenvalues,
    )


__all__ = ["CanonicalFrame", "diagonalize"]
