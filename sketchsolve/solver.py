"""Backtracking branch-enumeration solver.

The solver walks every combination of constraint branches with a mixed-radix
counter (digit ``i`` counts over ``[0, branch_count_i)``, digit 0 fastest).
Each combination is tried on the live sketch; if the sketch does not end up
fully satisfied the attempt is rolled back from a snapshot and the counter is
advanced.  The search stops at the first combination that satisfies every
constraint or once the counter overflows, so at most ``prod(branch_count_i)``
attempts are made.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np

from .config import resolve_epsilon
from .constraints import Constraint
from .logging_utils import apply_debug_logging
from .model import EntityId, SolveOptions, SolveResult
from .sketch import Sketch

logger = logging.getLogger(__name__)


def branch_counts(constraints: Sequence[Constraint]) -> List[int]:
    return [constraint.branch_count() for constraint in constraints]


def _advance(current: List[int], radices: Sequence[int]) -> bool:
    """Increment the mixed-radix counter in place; ``False`` once it wraps around."""

    for i, radix in enumerate(radices):
        current[i] += 1
        if current[i] < radix:
            return True
        current[i] = 0
    return False


def _unsatisfied(sketch: Sketch, constraints: Sequence[Constraint], epsilon: float) -> List[EntityId]:
    return [c.id for c in constraints if not c.is_satisfied(sketch, epsilon)]


def _application_order(constraints: List[Constraint], options: SolveOptions) -> List[Constraint]:
    if not options.shuffle or len(constraints) < 2:
        return constraints
    rng = np.random.default_rng(options.random_seed)
    return [constraints[int(i)] for i in rng.permutation(len(constraints))]


def _note(warnings: List[str], message: str) -> None:
    if message not in warnings:
        warnings.append(message)


def solve(sketch: Sketch, options: SolveOptions = SolveOptions()) -> SolveResult:
    """Drive every constraint of ``sketch`` towards satisfaction.

    On success the sketch keeps the mutated positions; on failure every point
    is back at its pre-call position.  Malformed sketches (dangling or
    mistyped references) raise :class:`~sketchsolve.model.SketchError` before
    anything is moved.
    """

    epsilon = resolve_epsilon(options.epsilon)
    constraints = _application_order(sketch.constraints(), options)
    radices = branch_counts(constraints)
    combinations = math.prod(radices)
    order = tuple(c.id for c in constraints)

    if not _unsatisfied(sketch, constraints, epsilon):
        logger.info("Constraints already satisfied")
        return SolveResult(succeeded=True, attempts=0, combinations=combinations, order=order)

    logger.info(
        "Attempting to satisfy %d constraint(s) with %d possible branch combination(s)",
        len(constraints),
        combinations,
    )

    current = [0] * len(constraints)
    warnings: List[str] = []
    attempts = 0

    while True:
        attempts += 1
        snapshot = sketch.snapshot()

        for constraint, branch in zip(constraints, current):
            if constraint.is_satisfied(sketch, epsilon):
                continue
            if not constraint.apply(sketch, branch):
                _note(
                    warnings,
                    f"{constraint.kind} constraint {constraint.id} declined branch {branch} "
                    "on degenerate geometry",
                )

        violated = _unsatisfied(sketch, constraints, epsilon)
        if not violated:
            logger.info("Constraints satisfied after %d attempt(s)", attempts)
            return SolveResult(
                succeeded=True,
                attempts=attempts,
                combinations=combinations,
                branches=tuple(current),
                order=order,
                warnings=warnings,
            )

        logger.debug(
            "Attempt %d with branches %s left constraint(s) %s violated, reverting",
            attempts,
            current,
            violated,
        )
        sketch.restore(snapshot)
        if not _advance(current, radices):
            break

    logger.info("No solution found after %d attempt(s)", attempts)
    return SolveResult(
        succeeded=False,
        attempts=attempts,
        combinations=combinations,
        order=order,
        unsatisfied=_unsatisfied(sketch, constraints, epsilon),
        warnings=warnings,
    )


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "branch_counts",
    "solve",
]
