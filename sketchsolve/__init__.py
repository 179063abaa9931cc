import logging

from .geometry import Vec2, DegenerateGeometryError, angle_between_degrees
from .model import (
    Point,
    Line,
    SolveOptions,
    SolveResult,
    SketchError,
    EntityNotFoundError,
    EntityKindError,
    DuplicateEntityError,
    new_id,
)
from .constraints import Constraint, DistanceConstraint, AngleConstraint
from .sketch import Sketch, SketchSnapshot
from .solver import solve, branch_counts
from .config import SolverConfig, get_solver_config, set_solver_config
from .validate import validate, ValidationError
from .consistency import check_consistency, ConsistencyWarning
from .scenes import SCENES, jitter_points
from .utils import normalize_point_coords

if not logging.getLogger().handlers:  # pragma: no cover - depends on host application
    logging.basicConfig(level=logging.INFO)

__all__ = [
    'Vec2',
    'DegenerateGeometryError',
    'angle_between_degrees',
    'Point',
    'Line',
    'SolveOptions',
    'SolveResult',
    'SketchError',
    'EntityNotFoundError',
    'EntityKindError',
    'DuplicateEntityError',
    'new_id',
    'Constraint',
    'DistanceConstraint',
    'AngleConstraint',
    'Sketch',
    'SketchSnapshot',
    'solve',
    'branch_counts',
    'SolverConfig',
    'get_solver_config',
    'set_solver_config',
    'validate',
    'ValidationError',
    'check_consistency',
    'ConsistencyWarning',
    'SCENES',
    'jitter_points',
    'normalize_point_coords',
]
