"""Id-indexed sketch registry backed by a flat numpy position arena."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Type, TypeVar, Union

import numpy as np

from .constraints import AngleConstraint, Constraint, DistanceConstraint
from .geometry import DegenerateGeometryError, Vec2
from .model import (
    DuplicateEntityError,
    EntityId,
    EntityKindError,
    EntityNotFoundError,
    Line,
    Point,
    new_id,
)

logger = logging.getLogger(__name__)

Entity = Union[Point, Line, Constraint]
E = TypeVar("E")
KindSpec = Union[Type[E], Tuple[type, ...]]


def _kind_name(kind: KindSpec) -> str:
    if isinstance(kind, tuple):
        return " or ".join(getattr(k, "kind", k.__name__.lower()) for k in kind)
    return getattr(kind, "kind", kind.__name__.lower())


def _entity_kind(entity: object) -> str:
    return getattr(entity, "kind", type(entity).__name__)


@dataclass(frozen=True, eq=False)
class SketchSnapshot:
    """Value copy of every point position, taken by :meth:`Sketch.snapshot`."""

    point_ids: Tuple[EntityId, ...]
    positions: np.ndarray


class Sketch:
    """Ordered collection of points, lines and constraints.

    Point positions are stored row-wise in one ``(n, 2)`` float array; every
    line or constraint that references a point reads the same row, so a
    snapshot is a flat copy and a restore is visible to all aliases at once.
    """

    def __init__(self) -> None:
        self._entities: List[Entity] = []
        self._by_id: Dict[EntityId, Entity] = {}
        self._slots: Dict[EntityId, int] = {}
        self._positions = np.zeros((0, 2), dtype=float)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    def _register(self, entity: Entity) -> None:
        if entity.id in self._by_id:
            raise DuplicateEntityError(entity.id)
        self._entities.append(entity)
        self._by_id[entity.id] = entity

    def add_point(self, x: float, y: float, *, id: Optional[EntityId] = None) -> Point:
        position = Vec2(x, y)
        if not position.is_finite():
            raise DegenerateGeometryError(f"non-finite point position {position}")
        point = Point(id=new_id() if id is None else id)
        self._register(point)
        self._slots[point.id] = self._positions.shape[0]
        self._positions = np.vstack([self._positions, position.to_array()])
        return point

    def add_line(self, start_id: EntityId, end_id: EntityId, *, id: Optional[EntityId] = None) -> Line:
        line = Line(id=new_id() if id is None else id, start_id=start_id, end_id=end_id)
        self._register(line)
        return line

    def add_distance(
        self, line_id: EntityId, length: float, *, id: Optional[EntityId] = None
    ) -> DistanceConstraint:
        constraint = DistanceConstraint(
            id=new_id() if id is None else id, line_id=line_id, length=float(length)
        )
        self._register(constraint)
        return constraint

    def add_angle(
        self,
        corner_id: EntityId,
        arm1_id: EntityId,
        arm2_id: EntityId,
        degrees: float,
        *,
        id: Optional[EntityId] = None,
    ) -> AngleConstraint:
        constraint = AngleConstraint(
            id=new_id() if id is None else id,
            corner_id=corner_id,
            arm1_id=arm1_id,
            arm2_id=arm2_id,
            degrees=float(degrees),
        )
        self._register(constraint)
        return constraint

    def get(self, entity_id: EntityId, kind: KindSpec) -> E:
        """Return the entity with ``entity_id``, checking that it is a ``kind``."""

        try:
            entity = self._by_id[entity_id]
        except KeyError:
            raise EntityNotFoundError(entity_id) from None
        if not isinstance(entity, kind):
            raise EntityKindError(entity_id, _entity_kind(entity), _kind_name(kind))
        return entity  # type: ignore[return-value]

    def entities(self) -> List[Entity]:
        return list(self._entities)

    def points(self) -> List[Point]:
        return [e for e in self._entities if isinstance(e, Point)]

    def lines(self) -> List[Line]:
        return [e for e in self._entities if isinstance(e, Line)]

    def constraints(self) -> List[Constraint]:
        """Constraints in insertion order, which is the solver's application order."""

        return [e for e in self._entities if isinstance(e, Constraint)]

    def position(self, point_id: EntityId) -> Vec2:
        point = self.get(point_id, Point)
        return Vec2.from_array(self._positions[self._slots[point.id]])

    def set_position(self, point_id: EntityId, position: Vec2) -> None:
        point = self.get(point_id, Point)
        if not position.is_finite():
            raise DegenerateGeometryError(
                f"refusing non-finite position {position} for point {point_id}"
            )
        self._positions[self._slots[point.id]] = (position.x, position.y)

    def point_coords(self) -> Dict[EntityId, Tuple[float, float]]:
        return {
            point_id: (float(row[0]), float(row[1]))
            for point_id, row in zip(self._slots, self._positions)
        }

    def snapshot(self) -> SketchSnapshot:
        return SketchSnapshot(point_ids=tuple(self._slots), positions=self._positions.copy())

    def restore(self, snapshot: SketchSnapshot) -> None:
        """Overwrite every point position with the values held by ``snapshot``."""

        if snapshot.point_ids != tuple(self._slots):
            raise ValueError("snapshot does not match the sketch point layout")
        np.copyto(self._positions, snapshot.positions)
        logger.debug("Restored %d point position(s) from snapshot", len(snapshot.point_ids))


__all__ = [
    "Entity",
    "Sketch",
    "SketchSnapshot",
]
