"""Process-wide defaults for conic construction and sampling."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class ConicConfig:
    """Numeric knobs shared by every conic built after the config is set."""

    # |Δx| below which the foci segment is treated as vertical.
    vertical_tolerance: float = 1e-7
    focal_range: Tuple[float, float] = (-1.0001 * math.pi, 1.0001 * math.pi)
    parabola_range: Tuple[float, float] = (-10.0, 10.0)
    general_range: Tuple[float, float] = (0.0, 2.0 * math.pi)
    default_samples: int = 100
    projection_grid: int = 64


_CONIC_CONFIG = ConicConfig()


def get_conic_config() -> ConicConfig:
    return copy.deepcopy(_CONIC_CONFIG)


def set_conic_config(config: ConicConfig) -> None:
    global _CONIC_CONFIG
    _CONIC_CONFIG = copy.deepcopy(config)


__all__ = ["ConicConfig", "get_conic_config", "set_conic_config"]
