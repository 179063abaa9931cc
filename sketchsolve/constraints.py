"""Sketch constraints and their discrete corrective branches.

Every constraint answers three questions for the solver: how many mutually
exclusive corrective moves it has (``branch_count``), whether it currently
holds (``is_satisfied``), and how to perform one of its moves (``apply``).
Moves only ever touch point positions through the owning sketch.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Optional, Tuple

from .config import resolve_epsilon
from .geometry import _DENOM_EPS, DegenerateGeometryError, Vec2, angle_between_degrees
from .model import EntityId, Line, Point

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .sketch import Sketch

logger = logging.getLogger(__name__)

RIGHT_ANGLE = 90.0


class Constraint(ABC):
    """Interface shared by all constraint variants."""

    id: EntityId
    kind: ClassVar[str]

    @abstractmethod
    def branch_count(self) -> int:
        """Number of corrective branches; always at least one."""

    @abstractmethod
    def residual(self, sketch: "Sketch") -> float:
        """Signed error of the constraint in its own unit (length or degrees)."""

    @abstractmethod
    def point_ids(self, sketch: "Sketch") -> Tuple[EntityId, ...]:
        """Ids of the points the constraint reads and may move."""

    @abstractmethod
    def _apply_branch(self, sketch: "Sketch", branch: int) -> bool:
        ...

    def is_satisfied(self, sketch: "Sketch", epsilon: Optional[float] = None) -> bool:
        try:
            error = self.residual(sketch)
        except DegenerateGeometryError:
            return False
        return abs(error) < resolve_epsilon(epsilon)

    def apply(self, sketch: "Sketch", branch: int) -> bool:
        """Run corrective ``branch``; return ``False`` if it declined to move anything."""

        count = self.branch_count()
        if not 0 <= branch < count:
            raise ValueError(
                f"{self.kind} constraint {self.id} has {count} branches, got branch {branch}"
            )
        try:
            return self._apply_branch(sketch, branch)
        except DegenerateGeometryError as exc:
            logger.debug(
                "%s constraint %d declined branch %d: %s", self.kind, self.id, branch, exc
            )
            return False


@dataclass(frozen=True)
class DistanceConstraint(Constraint):
    """Fixes the length of a line."""

    id: EntityId
    line_id: EntityId
    length: float
    kind: ClassVar[str] = "distance"

    def _endpoints(self, sketch: "Sketch") -> Tuple[Point, Point]:
        line = sketch.get(self.line_id, Line)
        return sketch.get(line.start_id, Point), sketch.get(line.end_id, Point)

    def current_length(self, sketch: "Sketch") -> float:
        start, end = self._endpoints(sketch)
        return sketch.position(start.id).distance_to(sketch.position(end.id))

    def branch_count(self) -> int:
        return 2

    def residual(self, sketch: "Sketch") -> float:
        return self.current_length(sketch) - self.length

    def point_ids(self, sketch: "Sketch") -> Tuple[EntityId, ...]:
        start, end = self._endpoints(sketch)
        return start.id, end.id

    def _apply_branch(self, sketch: "Sketch", branch: int) -> bool:
        start, end = self._endpoints(sketch)
        start_pos = sketch.position(start.id)
        end_pos = sketch.position(end.id)
        current = start_pos.distance_to(end_pos)
        if current <= _DENOM_EPS:
            raise DegenerateGeometryError(f"line {self.line_id} has zero length")
        t = self.length / current

        if branch == 0:
            # start stays, end slides along the line
            sketch.set_position(end.id, start_pos.lerp(end_pos, t))
        else:
            sketch.set_position(start.id, end_pos.lerp(start_pos, t))
        return True


@dataclass(frozen=True)
class AngleConstraint(Constraint):
    """Fixes the angle at ``corner_id`` between the arms to ``arm1_id`` and ``arm2_id``.

    Only an exact right angle gets the full six-branch repertoire; every other
    target angle is limited to the two arm rotations.
    """

    id: EntityId
    corner_id: EntityId
    arm1_id: EntityId
    arm2_id: EntityId
    degrees: float
    kind: ClassVar[str] = "angle"

    def _positions(self, sketch: "Sketch") -> Tuple[Vec2, Vec2, Vec2]:
        corner = sketch.get(self.corner_id, Point)
        arm1 = sketch.get(self.arm1_id, Point)
        arm2 = sketch.get(self.arm2_id, Point)
        return sketch.position(corner.id), sketch.position(arm1.id), sketch.position(arm2.id)

    def current_angle(self, sketch: "Sketch") -> float:
        corner, arm1, arm2 = self._positions(sketch)
        return angle_between_degrees(corner, arm1, arm2)

    def branch_count(self) -> int:
        if self.degrees == RIGHT_ANGLE:
            return 6
        return 2

    def residual(self, sketch: "Sketch") -> float:
        return self.current_angle(sketch) - self.degrees

    def point_ids(self, sketch: "Sketch") -> Tuple[EntityId, ...]:
        return self.corner_id, self.arm1_id, self.arm2_id

    def _apply_branch(self, sketch: "Sketch", branch: int) -> bool:
        corner, arm1, arm2 = self._positions(sketch)
        # raises for a corner sitting on an arm point, which no branch can repair
        current = angle_between_degrees(corner, arm1, arm2)

        if branch in (0, 1):
            offset = self.degrees - current
            if branch == 0:
                sketch.set_position(
                    self.arm1_id, arm1.rotate_around(corner, -math.radians(offset))
                )
            else:
                sketch.set_position(
                    self.arm2_id, arm2.rotate_around(corner, math.radians(offset))
                )
            return True

        if branch in (2, 3):
            # slide the corner onto the foot of the perpendicular from the other arm
            o1 = arm1.sub(corner)
            o2 = arm2.sub(corner)
            if branch == 2:
                direction = o1.normalize()
                magnitude = o2.dot(direction)
            else:
                direction = o2.normalize()
                magnitude = o1.dot(direction)
            sketch.set_position(self.corner_id, corner.add(direction.scale(magnitude)))
            return True

        # branches 4 and 5: law of cosines around one arm point as pivot
        pivot, far = (arm1, arm2) if branch == 4 else (arm2, arm1)
        c = pivot.distance_to(corner)
        a = far.distance_to(pivot)
        radians = math.radians(self.degrees)
        b = math.sqrt(max(0.0, a * a + c * c - 2.0 * a * c * math.cos(radians)))
        # always the counter-clockwise side of pivot->far
        relocated = far.sub(pivot).normalize().tangent().scale(b).add(pivot)
        sketch.set_position(self.corner_id, relocated)
        return True


__all__ = [
    "AngleConstraint",
    "Constraint",
    "DistanceConstraint",
    "RIGHT_ANGLE",
]
