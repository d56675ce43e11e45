"""Sampling and point projection on top of the cached conic frame."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.optimize import least_squares

from .conic import Conic
from .types import Point2D, Range

logger = logging.getLogger(__name__)


@dataclass
class Projection:
    """Closest curve point found for a query point."""

    t: float
    point: Point2D
    distance: float
    success: bool = True


def parameters(conic: Conic, n: Optional[int] = None, t_range: Optional[Range] = None) -> np.ndarray:
    lo, hi = t_range if t_range is not None else conic.t_range
    count = n if n is not None else conic.config.default_samples
    if count < 1:
        raise ValueError(f"sample count must be positive, got {count}")
    return np.linspace(lo, hi, count)


def sample(
    conic: Conic,
    n: Optional[int] = None,
    t_range: Optional[Range] = None,
    *,
    refresh: bool = True,
) -> np.ndarray:
    """Return an ``(n, 2)`` array of curve points over ``t_range``.

    The conic is refreshed at most once; every sample then reuses the cached
    frame. Pass ``refresh=False`` when the caller already knows nothing moved.
    """

    if refresh:
        conic.refresh()
    ts = parameters(conic, n, t_range)
    points = conic.evaluate(ts)
    logger.debug("Sampled %d points on %s over [%g, %g]", len(ts), conic.kind, ts[0], ts[-1])
    return np.asarray(points, dtype=float).reshape(-1, 2)


def nearest_parameter(conic: Conic, point: Point2D, t_range: Optional[Range] = None) -> Projection:
    """Project ``point`` onto ``conic`` using the cached frame.

    A grid scan picks the closest finite sample; ``least_squares`` then refines
    the parameter between the neighbouring grid nodes.
    """

    target = np.asarray(point, dtype=float)
    grid = parameters(conic, max(conic.config.projection_grid, 3), t_range)
    samples = np.asarray(conic.evaluate(grid), dtype=float)
    d2 = np.sum((samples - target) ** 2, axis=1)
    d2 = np.where(np.isfinite(d2), d2, np.inf)
    if not np.any(np.isfinite(d2)):
        logger.warning("No finite samples on %s; projection undefined", conic.kind)
        nan = float("nan")
        return Projection(t=nan, point=(nan, nan), distance=nan, success=False)

    idx = int(np.argmin(d2))
    lo = grid[max(idx - 1, 0)]
    hi = grid[min(idx + 1, len(grid) - 1)]

    def residuals(x: np.ndarray) -> np.ndarray:
        return np.asarray(conic.evaluate(float(x[0])), dtype=float) - target

    if not lo < hi:
        px, py = samples[idx]
        return Projection(t=float(grid[idx]), point=(float(px), float(py)), distance=math.sqrt(d2[idx]))

    result = least_squares(residuals, [grid[idx]], bounds=([lo], [hi]), method="trf")
    t = float(result.x[0])
    px, py = conic.evaluate(t)  # type: ignore[misc]
    distance = math.hypot(px - target[0], py - target[1])
    if not result.success:
        logger.info("least_squares did not converge projecting onto %s: %s", conic.kind, result.message)
    return Projection(t=t, point=(px, py), distance=distance, success=bool(result.success))


__all__ = ["Projection", "nearest_parameter", "parameters", "sample"]
