"""Core data structures shared by the sketch, constraints and solver."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple

EntityId = int

_ID_COUNTER = itertools.count(1)


def new_id() -> EntityId:
    """Return the next id of the process-wide entity namespace."""

    return next(_ID_COUNTER)


class SketchError(Exception):
    """Base class for malformed sketch definitions."""


class EntityNotFoundError(SketchError, KeyError):
    """Raised when no entity of the sketch has the requested id."""

    def __init__(self, entity_id: EntityId):
        super().__init__(f"no entity with id {entity_id}")
        self.entity_id = entity_id

    def __str__(self) -> str:
        return str(self.args[0])


class EntityKindError(SketchError, TypeError):
    """Raised when an id resolves to an entity of an unexpected kind."""

    def __init__(self, entity_id: EntityId, actual: str, expected: str):
        super().__init__(f"entity {entity_id} is a {actual}, expected {expected}")
        self.entity_id = entity_id
        self.actual = actual
        self.expected = expected


class DuplicateEntityError(SketchError, ValueError):
    """Raised when two entities of one sketch share an id."""

    def __init__(self, entity_id: EntityId):
        super().__init__(f"duplicate entity id {entity_id}")
        self.entity_id = entity_id


@dataclass(frozen=True)
class Point:
    """Point record; its position lives in the owning sketch's arena."""

    id: EntityId
    kind: ClassVar[str] = "point"


@dataclass(frozen=True)
class Line:
    id: EntityId
    start_id: EntityId
    end_id: EntityId
    kind: ClassVar[str] = "line"


@dataclass
class SolveOptions:
    """Per-call solver options; ``None`` falls back to :mod:`sketchsolve.config`."""

    epsilon: Optional[float] = None
    shuffle: bool = False
    random_seed: Optional[int] = None


@dataclass
class SolveResult:
    succeeded: bool
    attempts: int
    combinations: int
    branches: Optional[Tuple[int, ...]] = None
    order: Tuple[EntityId, ...] = ()
    unsatisfied: List[EntityId] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


__all__ = [
    "DuplicateEntityError",
    "EntityId",
    "EntityKindError",
    "EntityNotFoundError",
    "Line",
    "Point",
    "SketchError",
    "SolveOptions",
    "SolveResult",
    "new_id",
]
