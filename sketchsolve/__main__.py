import argparse
import logging
import sys
from typing import List, Optional, Sequence

import numpy as np

from sketchsolve import (
    SCENES,
    ConsistencyWarning,
    DegenerateGeometryError,
    SolveOptions,
    ValidationError,
    Sketch,
    check_consistency,
    jitter_points,
    normalize_point_coords,
    solve,
    validate,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _print_constraints(sketch: Sketch, epsilon: Optional[float]) -> None:
    for constraint in sketch.constraints():
        state = "ok" if constraint.is_satisfied(sketch, epsilon) else "VIOLATED"
        try:
            residual = f"{constraint.residual(sketch):+.6g}"
        except DegenerateGeometryError:
            residual = "degenerate"
        print(
            f"  [{constraint.id}] {constraint.kind} "
            f"branches={constraint.branch_count()} residual={residual} {state}"
        )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Solve a demo sketch with discrete constraints")
    parser.add_argument("scene", choices=sorted(SCENES), help="Name of the demo sketch")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=123,
        help="Random seed used for jitter and constraint shuffling (default: 123)",
    )
    parser.add_argument(
        "--jitter",
        type=float,
        default=0.0,
        help="Perturb every point by up to this amount before solving",
    )
    parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Apply constraints in a seeded random order instead of insertion order",
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        help="Satisfaction tolerance (default: configured solver epsilon)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    sketch = SCENES[args.scene]()
    logger.info("Built scene %s with %d entities", args.scene, len(sketch))
    try:
        validate(sketch)
    except ValidationError as exc:
        logger.error("Sketch validation failed: %s", exc)
        raise SystemExit(1) from exc

    warnings: List[ConsistencyWarning] = check_consistency(sketch)
    print("Warnings:")
    if warnings:
        for warning in warnings:
            print(f"  - {warning}")
    else:
        print("  (none)")

    if args.jitter > 0.0:
        jitter_points(sketch, np.random.default_rng(args.seed), args.jitter)

    print("Constraints before:")
    _print_constraints(sketch, args.epsilon)

    options = SolveOptions(epsilon=args.epsilon, shuffle=args.shuffle, random_seed=args.seed)
    result = solve(sketch, options)

    print("\nSolved\nSuccess:", result.succeeded)
    print(f"Attempts: {result.attempts} of {result.combinations}")
    if result.branches is not None:
        print(f"Branches: {list(result.branches)}")
    if result.unsatisfied:
        print(f"Unsatisfied: {result.unsatisfied}")
    for warning in result.warnings:
        logger.warning("Solver warning: %s", warning)

    print("Constraints after:")
    _print_constraints(sketch, args.epsilon)

    coords = sketch.point_coords()
    print("Coordinates:")
    for pid, (x, y) in coords.items():
        print(f"  {pid}: ({x:.6f}, {y:.6f})")

    print("Normed points:")
    for pid, (x, y) in normalize_point_coords(coords).items():
        print(f"  {pid}: ({x:.6f}, {y:.6f})")

    if not result.succeeded:
        raise SystemExit(2)


if __name__ == "__main__":
    main(sys.argv[1:])
