from .types import ConicConstructionError, ConicStateError, LineLike, PointLike
from .primitives import DerivedPoint, FreePoint, Line
from .refs import LineRef, PointRef, ScalarRef
from .definitions import (
    FivePoints,
    FociAxis,
    FociPoint,
    FocusDirectrix,
    SixCoefficients,
    resolve_parents,
)
from .canonical import CanonicalFrame, diagonalize
from .config import ConicConfig, get_conic_config, set_conic_config
from .conic import (
    Conic,
    Ellipse,
    GeneralConic,
    Hyperbola,
    Parabola,
    create,
    create_conic,
    create_ellipse,
    create_hyperbola,
    create_parabola,
)
from .sampling import Projection, nearest_parameter, sample

__all__ = [
    'CanonicalFrame',
    'Conic',
    'ConicConfig',
    'ConicConstructionError',
    'ConicStateError',
    'DerivedPoint',
    'Ellipse',
    'FivePoints',
    'FociAxis',
    'FociPoint',
    'FocusDirectrix',
    'FreePoint',
    'GeneralConic',
    'Hyperbola',
    'Line',
    'LineLike',
    'LineRef',
    'Parabola',
    'PointLike',
    'PointRef',
    'Projection',
    'ScalarRef',
    'SixCoefficients',
    'create',
    'create_conic',
    'create_ellipse',
    'create_hyperbola',
    'create_parabola',
    'diagonalize',
    'get_conic_config',
    'nearest_parameter',
    'resolve_parents',
    'sample',
    'set_conic_config',
]
