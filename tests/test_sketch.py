import math

import numpy as np
import pytest

from sketchsolve import (
    AngleConstraint,
    Constraint,
    DegenerateGeometryError,
    DistanceConstraint,
    DuplicateEntityError,
    EntityKindError,
    EntityNotFoundError,
    Line,
    Point,
    Sketch,
    SketchError,
    Vec2,
    new_id,
)


def _two_lines():
    sketch = Sketch()
    a = sketch.add_point(0, 0)
    b = sketch.add_point(5, 0)
    c = sketch.add_point(5, 3)
    ab = sketch.add_line(a.id, b.id)
    bc = sketch.add_line(b.id, c.id)
    return sketch, (a, b, c), (ab, bc)


def test_ids_share_one_namespace():
    sketch, points, lines = _two_lines()
    ids = [p.id for p in points] + [line.id for line in lines]
    assert len(set(ids)) == len(ids)

    other = Sketch()
    q = other.add_point(0, 0)
    assert q.id not in ids
    assert new_id() > q.id


def test_get_returns_entity_of_requested_kind():
    sketch, (a, b, _), (ab, _) = _two_lines()
    assert sketch.get(a.id, Point) is a
    assert sketch.get(ab.id, Line) is ab
    assert sketch.get(ab.id, (Point, Line)) is ab


def test_get_reports_missing_entity():
    sketch, _, _ = _two_lines()
    with pytest.raises(EntityNotFoundError) as exc:
        sketch.get(-1, Point)
    assert isinstance(exc.value, SketchError)
    assert isinstance(exc.value, KeyError)
    assert "no entity with id -1" in str(exc.value)


def test_get_reports_kind_mismatch():
    sketch, (a, _, _), (ab, _) = _two_lines()
    with pytest.raises(EntityKindError) as exc:
        sketch.get(ab.id, Point)
    assert isinstance(exc.value, TypeError)
    assert str(exc.value) == f"entity {ab.id} is a line, expected point"

    with pytest.raises(EntityKindError) as exc:
        sketch.get(a.id, Constraint)
    assert "expected constraint" in str(exc.value)


def test_duplicate_ids_are_rejected():
    sketch = Sketch()
    sketch.add_point(0, 0, id=10)
    with pytest.raises(DuplicateEntityError):
        sketch.add_point(1, 1, id=10)
    with pytest.raises(DuplicateEntityError):
        sketch.add_line(10, 10, id=10)
    assert len(sketch) == 1


def test_views_keep_insertion_order():
    sketch, (a, b, c), (ab, bc) = _two_lines()
    angle = sketch.add_angle(b.id, a.id, c.id, 90)
    dist = sketch.add_distance(ab.id, 4)

    assert sketch.points() == [a, b, c]
    assert sketch.lines() == [ab, bc]
    assert sketch.constraints() == [angle, dist]
    assert isinstance(sketch.constraints()[0], AngleConstraint)
    assert isinstance(sketch.constraints()[1], DistanceConstraint)
    assert sketch.get(dist.id, Constraint) is dist
    assert [e.id for e in sketch] == [e.id for e in sketch.entities()]
    assert dist.id in sketch and -5 not in sketch


def test_positions_are_read_and_written_by_id():
    sketch, (a, b, _), _ = _two_lines()
    assert sketch.position(b.id) == Vec2(5, 0)
    sketch.set_position(b.id, Vec2(7, 1))
    assert sketch.position(b.id) == Vec2(7, 1)
    assert sketch.point_coords()[b.id] == (7.0, 1.0)
    assert sketch.point_coords()[a.id] == (0.0, 0.0)


def test_set_position_refuses_non_finite_values():
    sketch, (a, _, _), _ = _two_lines()
    with pytest.raises(DegenerateGeometryError):
        sketch.set_position(a.id, Vec2(math.nan, 0))
    assert sketch.position(a.id) == Vec2(0, 0)

    with pytest.raises(DegenerateGeometryError):
        sketch.add_point(math.inf, 0)


def test_position_of_non_point_is_kind_error():
    sketch, _, (ab, _) = _two_lines()
    with pytest.raises(EntityKindError):
        sketch.position(ab.id)


def test_snapshot_is_isolated_from_later_mutation():
    sketch, (a, b, c), _ = _two_lines()
    snapshot = sketch.snapshot()

    sketch.set_position(b.id, Vec2(100, 100))
    np.testing.assert_array_equal(snapshot.positions[1], np.array([5.0, 0.0]))

    sketch.restore(snapshot)
    assert sketch.position(b.id) == Vec2(5, 0)
    assert sketch.position(a.id) == Vec2(0, 0)
    assert sketch.position(c.id) == Vec2(5, 3)


def test_restore_is_seen_through_every_alias():
    sketch, (a, b, c), (ab, bc) = _two_lines()
    ab_len = sketch.add_distance(ab.id, 5)
    bc_len = sketch.add_distance(bc.id, 3)
    snapshot = sketch.snapshot()

    sketch.set_position(b.id, Vec2(0, 9))
    assert not ab_len.is_satisfied(sketch)
    assert not bc_len.is_satisfied(sketch)

    sketch.restore(snapshot)
    assert ab_len.is_satisfied(sketch)
    assert bc_len.is_satisfied(sketch)


def test_snapshot_survives_repeated_restores():
    sketch, (_, b, _), _ = _two_lines()
    snapshot = sketch.snapshot()
    for x in (1.0, 2.0, 3.0):
        sketch.set_position(b.id, Vec2(x, x))
        sketch.restore(snapshot)
    assert sketch.position(b.id) == Vec2(5, 0)


def test_restore_rejects_foreign_layout():
    sketch, _, _ = _two_lines()
    snapshot = sketch.snapshot()
    sketch.add_point(9, 9)
    with pytest.raises(ValueError):
        sketch.restore(snapshot)
