"""Example: fix one side and one corner of a triangle and solve."""

from sketchsolve import Sketch, SolveOptions, solve, validate


def main() -> None:
    sketch = Sketch()
    a = sketch.add_point(1, 1)
    b = sketch.add_point(1, 10)
    c = sketch.add_point(10, 10)
    ab = sketch.add_line(a.id, b.id)
    sketch.add_line(b.id, c.id)
    sketch.add_line(c.id, a.id)
    sketch.add_distance(ab.id, 6)
    sketch.add_angle(a.id, c.id, b.id, 60)
    validate(sketch)

    result = solve(sketch, SolveOptions())
    print("Success:", result.succeeded)
    print("Attempts:", result.attempts)
    for pid, (x, y) in sketch.point_coords().items():
        print(f"{pid}: ({x:.6f}, {y:.6f})")


if __name__ == "__main__":
    main()
