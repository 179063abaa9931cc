from sketchsolve import SCENES, Sketch, SolverConfig, get_solver_config, set_solver_config
from sketchsolve.consistency import check_consistency

import pytest


def _kinds(warnings):
    return [warning.kind for warning in warnings]


def test_square_reports_every_shared_corner():
    sketch = SCENES['square']()
    warnings = check_consistency(sketch)

    assert _kinds(warnings) == ['shared_point'] * 4
    shared = {warning.entity_ids[0] for warning in warnings}
    corners = {p.id for p in sketch.points()[:4]}
    assert shared == corners
    assert all('result depends on constraint order' in w.message for w in warnings)


def test_triangle_reports_rotation_only_angle():
    sketch = SCENES['triangle']()
    warnings = check_consistency(sketch)

    assert _kinds(warnings).count('shared_point') == 2
    rotation = [w for w in warnings if w.kind == 'rotation_only']
    assert len(rotation) == 1
    angle = sketch.constraints()[1]
    assert rotation[0].entity_ids == (angle.id,)
    assert 'targets 60 degrees' in rotation[0].message


def test_independent_constraints_have_no_warnings():
    sketch = Sketch()
    a = sketch.add_point(0, 0)
    b = sketch.add_point(1, 0)
    c = sketch.add_point(5, 5)
    d = sketch.add_point(6, 5)
    sketch.add_distance(sketch.add_line(a.id, b.id).id, 2)
    sketch.add_distance(sketch.add_line(c.id, d.id).id, 2)

    assert check_consistency(sketch) == []


def test_degenerate_geometry_is_reported():
    sketch = Sketch()
    a = sketch.add_point(1, 1)
    b = sketch.add_point(1, 1)
    c = sketch.add_point(4, 1)
    line = sketch.add_line(a.id, b.id)
    angle = sketch.add_angle(a.id, b.id, c.id, 90)

    warnings = [w for w in check_consistency(sketch) if w.kind == 'degenerate']

    assert len(warnings) == 2
    assert warnings[0].entity_ids == (line.id,)
    assert warnings[1].entity_ids == (angle.id, b.id)
    assert f'coincides with corner {a.id}' in warnings[1].message


@pytest.fixture
def small_search_space():
    saved = get_solver_config()
    set_solver_config(SolverConfig(large_search_space=10))
    yield
    set_solver_config(saved)


def test_large_search_space_is_reported(small_search_space):
    sketch = SCENES['square']()
    warnings = [w for w in check_consistency(sketch) if w.kind == 'search_space']

    assert len(warnings) == 1
    assert '3 constraints span 72 branch combinations (limit 10)' == warnings[0].message
