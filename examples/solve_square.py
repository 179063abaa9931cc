"""Example: jitter the demo square, then try to restore its right corners."""

import numpy as np

from sketchsolve import SCENES, check_consistency, jitter_points, solve


def main() -> None:
    sketch = SCENES["square"]()
    for warning in check_consistency(sketch):
        print("warning:", warning)

    jitter_points(sketch, np.random.default_rng(7), amount=0.5)
    result = solve(sketch)
    print("Success:", result.succeeded)
    print(f"Attempts: {result.attempts} of {result.combinations}")
    if not result.succeeded:
        print("Unsatisfied constraints:", result.unsatisfied)
    for constraint in sketch.constraints():
        print(constraint.kind, constraint.id, "ok" if constraint.is_satisfied(sketch) else "violated")


if __name__ == "__main__":
    main()
