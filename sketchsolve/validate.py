import math

from .constraints import AngleConstraint, Constraint, DistanceConstraint
from .model import Line, Point, SketchError
from .sketch import Sketch


class ValidationError(Exception):
    pass


def _check_line(sketch: Sketch, line: Line) -> None:
    sketch.get(line.start_id, Point)
    sketch.get(line.end_id, Point)
    if line.start_id == line.end_id:
        raise ValidationError(f'[line {line.id}] start and end must be distinct points')


def _check_constraint(sketch: Sketch, c: Constraint) -> None:
    if isinstance(c, DistanceConstraint):
        sketch.get(c.line_id, Line)
        if not math.isfinite(c.length) or c.length <= 0.0:
            raise ValidationError(f'[distance {c.id}] length must be positive, got {c.length}')
    elif isinstance(c, AngleConstraint):
        ids = (c.corner_id, c.arm1_id, c.arm2_id)
        for pid in ids:
            sketch.get(pid, Point)
        if len(set(ids)) != 3:
            raise ValidationError(f'[angle {c.id}] corner and arm points must be distinct')
        if not math.isfinite(c.degrees) or not 0.0 <= c.degrees <= 180.0:
            raise ValidationError(f'[angle {c.id}] angle must lie in [0, 180] degrees, got {c.degrees}')


def validate(sketch: Sketch) -> None:
    """Check that every reference of ``sketch`` resolves and every target is usable."""

    try:
        for line in sketch.lines():
            _check_line(sketch, line)
        for c in sketch.constraints():
            _check_constraint(sketch, c)
    except SketchError as exc:
        raise ValidationError(str(exc)) from exc
