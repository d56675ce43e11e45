import pytest

from geoconic import (
    ConicConstructionError,
    FivePoints,
    FociAxis,
    FociPoint,
    FocusDirectrix,
    FreePoint,
    Line,
    SixCoefficients,
    resolve_parents,
)
from geoconic.refs import point_ref, scalar_ref, type_label


def test_focal_parents_with_number_resolve_to_axis_length():
    resolved = resolve_parents("ellipse", [(0, 0), (4, 0), 6])
    assert isinstance(resolved.definition, FociAxis)
    assert resolved.definition.kind == "foci_axis"
    assert resolved.definition.major_axis() == 6.0
    assert resolved.t_range == (None, None)


def test_focal_parents_with_point_resolve_to_surface_point():
    resolved = resolve_parents("hyperbola", [FreePoint(0, 0), FreePoint(4, 0), (1, 3)])
    assert isinstance(resolved.definition, FociPoint)
    assert resolved.definition.surface_point() == (1.0, 3.0)


def test_callables_are_resolved_by_what_they_return():
    resolved = resolve_parents("ellipse", [lambda: (0.0, 0.0), lambda: FreePoint(2, 0), lambda: 5.0])
    definition = resolved.definition
    assert isinstance(definition, FociAxis)
    assert definition.f1() == (2.0, 0.0)
    assert definition.major_axis() == 5.0


def test_point_names_are_looked_up():
    points = {"A": FreePoint(-1, 0), "B": FreePoint(1, 0), "C": FreePoint(0, 2)}
    resolved = resolve_parents("ellipse", ["A", "B", "C"], points)
    assert isinstance(resolved.definition, FociPoint)
    assert resolved.definition.f0() == (-1.0, 0.0)


def test_unknown_point_name_is_a_construction_error():
    with pytest.raises(ConicConstructionError) as excinfo:
        resolve_parents("ellipse", ["A", "Z", 3], {"A": FreePoint(0, 0)})
    assert excinfo.value.parent_types == ("string", "string")


def test_optional_range_parents():
    resolved = resolve_parents("ellipse", [(0, 0), (1, 0), 3, -1.0, 2.0])
    assert resolved.t_range == (-1.0, 2.0)
    assert resolved.merged_range((-5.0, 5.0)) == (-1.0, 2.0)

    partial = resolve_parents("parabola", [(0, 1), Line.through((0, 0), (1, 0)), -3])
    assert partial.merged_range((-10.0, 10.0)) == (-3.0, 10.0)


def test_parabola_requires_point_and_line():
    resolved = resolve_parents("parabola", [(0, 1), Line.through((0, 0), (1, 0))])
    assert isinstance(resolved.definition, FocusDirectrix)

    with pytest.raises(ConicConstructionError) as excinfo:
        resolve_parents("parabola", [(0, 1), (1, 1)])
    message = str(excinfo.value)
    assert "Can't create Parabola with parent types 'array' and 'array'" in message
    assert "[point,line]" in message


def test_general_conic_shapes():
    five = resolve_parents("conic", [(1, 5), (1, 2), (2, 0), (0, 0), (-1, 5)])
    assert isinstance(five.definition, FivePoints)
    assert len(five.definition.points) == 5

    six = resolve_parents("conic", [1, 1, -1, 0, 0, lambda: 0.5])
    assert isinstance(six.definition, SixCoefficients)
    assert six.definition.a12() == 0.5


@pytest.mark.parametrize(
    "kind, parents",
    [
        ("conic", [(0, 0), (1, 0), (2, 0), (3, 0)]),
        ("conic", [1, 2, 3, 4, 5, "x"]),
        ("ellipse", [(0, 0)]),
        ("ellipse", [(0, 0), (1, 0), "nope"]),
        ("hyperbola", [(0, 0), object(), 3]),
        ("ellipse", [(0, 0), (1, 0), 3, "from"]),
    ],
)
def test_unsupported_shapes_raise(kind, parents):
    with pytest.raises(ConicConstructionError) as excinfo:
        resolve_parents(kind, parents)
    assert isinstance(excinfo.value, TypeError)
    assert "Possible parent types" in str(excinfo.value)
    assert excinfo.value.accepted


def test_unknown_kind_is_a_value_error():
    with pytest.raises(ValueError):
        resolve_parents("circle", [(0, 0), 1])


def test_refs_reject_wrong_shapes():
    assert point_ref(3.0) is None
    assert point_ref(lambda: 3.0) is None
    assert scalar_ref((1, 2)) is None
    assert scalar_ref(lambda: (1, 2)) is None
    assert scalar_ref(True) is None


def test_point_ref_reads_live_coordinates():
    p = FreePoint(1, 2)
    ref = point_ref(p)
    assert ref() == (1.0, 2.0)
    p.move_to(3, 4)
    assert ref() == (3.0, 4.0)
    assert ref.dist(point_ref((0, 0))) == 5.0


def test_type_labels():
    assert type_label("A") == "string"
    assert type_label(3) == "number"
    assert type_label((1, 2)) == "array"
    assert type_label(lambda: 1) == "function"
    assert type_label(FreePoint(0, 0)) == "FreePoint"
