import math

import numpy as np
import pytest

from geoconic import ConicStateError, create_ellipse, create_hyperbola, nearest_parameter, sample
from geoconic.sampling import parameters


def test_sample_refreshes_once_and_returns_points():
    ellipse = create_ellipse((-4.0, 0.0), (4.0, 0.0), 10.0)
    points = sample(ellipse, 12)
    assert points.shape == (12, 2)
    assert ellipse.refresh_count == 1
    for x, y in points:
        assert math.isclose(x * x / 25.0 + y * y / 9.0, 1.0, rel_tol=1e-9)


def test_sample_without_refresh_reuses_cache():
    ellipse = create_ellipse((-4.0, 0.0), (4.0, 0.0), 10.0)
    with pytest.raises(ConicStateError):
        sample(ellipse, 3, refresh=False)
    ellipse.refresh()
    first = sample(ellipse, 5, refresh=False)
    second = sample(ellipse, 5, refresh=False)
    assert ellipse.refresh_count == 1
    assert np.array_equal(first, second)


def test_sample_uses_default_count_and_range():
    hyperbola = create_hyperbola((-2.0, 0.0), (2.0, 0.0), 2.0, 0.0, 1.0)
    points = sample(hyperbola)
    assert points.shape == (hyperbola.config.default_samples, 2)
    assert tuple(points[0]) == pytest.approx(hyperbola.evaluate(0.0))
    assert tuple(points[-1]) == pytest.approx(hyperbola.evaluate(1.0))


def test_parameters_reject_empty_counts():
    ellipse = create_ellipse((-4.0, 0.0), (4.0, 0.0), 10.0)
    with pytest.raises(ValueError):
        parameters(ellipse, 0)
    ts = parameters(ellipse, 3, (0.0, 1.0))
    assert ts.tolist() == [0.0, 0.5, 1.0]


def test_nearest_parameter_finds_closest_point():
    ellipse = create_ellipse((-4.0, 0.0), (4.0, 0.0), 10.0)
    ellipse.refresh()
    projection = nearest_parameter(ellipse, (0.0, 4.0))
    assert projection.success
    assert projection.distance == pytest.approx(1.0, abs=1e-6)
    assert projection.point == pytest.approx((0.0, 3.0), abs=1e-3)
    assert projection.t == pytest.approx(math.pi / 2, abs=1e-3)


def test_nearest_parameter_of_curve_point_is_zero_distance():
    ellipse = create_ellipse((1.0, 2.0), (4.0, -1.0), 7.0)
    ellipse.refresh()
    on_curve = ellipse.evaluate(0.3)
    projection = nearest_parameter(ellipse, on_curve)
    assert projection.distance == pytest.approx(0.0, abs=1e-6)


def test_nearest_parameter_on_degenerate_conic_reports_failure():
    ellipse = create_ellipse((0.0, 0.0), (8.0, 0.0), 2.0)
    ellipse.refresh()
    projection = nearest_parameter(ellipse, (1.0, 1.0))
    assert not projection.success
    assert math.isnan(projection.distance)
