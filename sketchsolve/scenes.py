"""Ready-made sketches used by the command line and the examples."""

from __future__ import annotations

import logging
from typing import Callable, Dict

import numpy as np

from .geometry import Vec2
from .sketch import Sketch

logger = logging.getLogger(__name__)


def triangle() -> Sketch:
    """Triangle with one side fixed to 6 and a 60 degree corner at its first vertex."""

    sketch = Sketch()
    a = sketch.add_point(1, 1)
    b = sketch.add_point(1, 10)
    c = sketch.add_point(10, 10)

    ab = sketch.add_line(a.id, b.id)
    sketch.add_line(b.id, c.id)
    sketch.add_line(c.id, a.id)

    sketch.add_distance(ab.id, 6)
    sketch.add_angle(a.id, c.id, b.id, 60)
    return sketch


def square() -> Sketch:
    """Axis-aligned square with a free centre point, one side fixed to 6 and two right corners."""

    sketch = Sketch()
    p0 = sketch.add_point(1, 1)
    p1 = sketch.add_point(1, 10)
    p2 = sketch.add_point(10, 10)
    p3 = sketch.add_point(10, 1)
    sketch.add_point(5, 5)

    left = sketch.add_line(p0.id, p1.id)
    sketch.add_line(p1.id, p2.id)
    sketch.add_line(p2.id, p3.id)
    sketch.add_line(p3.id, p0.id)

    sketch.add_distance(left.id, 6)
    sketch.add_angle(p2.id, p1.id, p3.id, 90)
    sketch.add_angle(p3.id, p2.id, p0.id, 90)
    return sketch


SCENES: Dict[str, Callable[[], Sketch]] = {
    "triangle": triangle,
    "square": square,
}


def jitter_points(sketch: Sketch, rng: np.random.Generator, amount: float = 1.0) -> None:
    """Shift every point by independent uniform noise in ``[-amount, amount]`` per axis."""

    points = sketch.points()
    offsets = rng.uniform(-amount, amount, size=(len(points), 2))
    for point, (dx, dy) in zip(points, offsets):
        sketch.set_position(point.id, sketch.position(point.id).add(Vec2(dx, dy)))
    logger.info("Jittered %d point(s) by up to %g", len(points), amount)
