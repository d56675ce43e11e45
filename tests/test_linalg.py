import math

import numpy as np

from geoconic.linalg import (
    conic_center,
    conjugate,
    cross,
    degenerate_conic,
    dehomogenize,
    fit_conic,
    homogeneous,
    meet_line_line,
    placement,
    quad_value,
    rotation_about,
    segment_angle,
    sym,
)


def test_cross_of_two_points_is_the_joining_line():
    p = homogeneous((1.0, 2.0))
    q = homogeneous((4.0, -1.0))
    line = cross(p, q)
    assert math.isclose(float(np.dot(line, p)), 0.0, abs_tol=1e-12)
    assert math.isclose(float(np.dot(line, q)), 0.0, abs_tol=1e-12)


def test_sym_doubles_the_diagonal():
    a = np.arange(9, dtype=float).reshape(3, 3)
    s = sym(a)
    assert np.allclose(s, s.T)
    assert np.allclose(np.diag(s), 2 * np.diag(a))


def test_degenerate_conic_vanishes_on_both_lines():
    l = cross(homogeneous((0.0, 0.0)), homogeneous((1.0, 1.0)))
    m = cross(homogeneous((0.0, 3.0)), homogeneous((2.0, 0.0)))
    pair = degenerate_conic(l, m)
    for point in [(5.0, 5.0), (-2.0, -2.0), (1.0, 1.5), (4.0, -3.0)]:
        assert math.isclose(quad_value(pair, homogeneous(point)), 0.0, abs_tol=1e-9)
    assert not math.isclose(quad_value(pair, homogeneous((3.0, 0.0))), 0.0, abs_tol=1e-6)


def test_fit_conic_passes_through_extra_point():
    pts = [homogeneous(p) for p in [(0.0, 0.0), (2.0, 0.0), (2.0, 1.0), (0.0, 1.0), (3.0, 3.0)]]
    c1 = degenerate_conic(cross(pts[0], pts[1]), cross(pts[2], pts[3]))
    c2 = degenerate_conic(cross(pts[0], pts[2]), cross(pts[1], pts[3]))
    m = fit_conic(c1, c2, pts[4])
    scale = float(np.linalg.norm(m))
    for p in pts:
        assert abs(quad_value(m, p)) <= 1e-9 * scale * float(np.dot(p, p))


def test_meet_line_line_and_parallel_lines():
    x_axis = np.array([0.0, 0.0, 1.0])
    vertical = np.array([-2.0, 1.0, 0.0])
    assert np.allclose(meet_line_line(x_axis, vertical), [1.0, 2.0, 0.0])

    parallel = np.array([-1.0, 0.0, 1.0])
    meet = meet_line_line(x_axis, parallel)
    assert not np.all(np.isfinite(meet))


def test_rotation_about_keeps_center_fixed():
    r = rotation_about(0.7, 2.0, -1.0)
    assert np.allclose(r @ homogeneous((2.0, -1.0)), [1.0, 2.0, -1.0])
    moved = r @ homogeneous((3.0, -1.0))
    assert math.isclose(math.hypot(moved[1] - 2.0, moved[2] + 1.0), 1.0)
    assert np.allclose(rotation_about(-0.7, 2.0, -1.0) @ moved, homogeneous((3.0, -1.0)))


def test_placement_moves_origin_to_center():
    p = placement(math.pi / 2, 1.0, 1.0)
    assert np.allclose(p @ [1.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    assert np.allclose(p @ [1.0, 2.0, 0.0], [1.0, 1.0, 3.0])


def test_conjugate_of_unit_circle_is_translated_circle():
    circle = np.diag([-1.0, 1.0, 1.0])
    # Pull back through the inverse of a translation by (3, 4).
    t = np.array([[1.0, 0.0, 0.0], [-3.0, 1.0, 0.0], [-4.0, 0.0, 1.0]])
    m = conjugate(circle, t)
    assert np.allclose(m, m.T)
    assert math.isclose(quad_value(m, homogeneous((4.0, 4.0))), 0.0, abs_tol=1e-12)
    center = dehomogenize(conic_center(m))
    assert np.allclose(center, [3.0, 4.0])


def test_segment_angle_branches():
    assert math.isclose(segment_angle(0.0, 0.0, 1.0, 1.0), math.pi / 4)
    # Leftward segments are turned around.
    assert math.isclose(segment_angle(1.0, 1.0, 0.0, 0.0), math.pi / 4)
    assert math.isclose(segment_angle(-1.0, 4.0, -1.0, -4.0), -math.pi / 2)
    assert math.isclose(segment_angle(0.0, 0.0, 1e-9, 2.0), math.pi / 2)
