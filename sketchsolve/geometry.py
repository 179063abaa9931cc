"""Two-dimensional vector value type used by sketch entities and constraints."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

_DENOM_EPS = 1e-12


class DegenerateGeometryError(ValueError):
    """Raised when an operation needs a non-degenerate vector or a finite value."""


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def from_array(cls, values: Iterable[float]) -> "Vec2":
        x, y = values
        return cls(float(x), float(y))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def add(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vec2":
        """Return the unit vector pointing along ``self``.

        Raises :class:`DegenerateGeometryError` for (numerically) zero vectors
        instead of producing a non-finite result.
        """

        mag = self.magnitude()
        if mag <= _DENOM_EPS:
            raise DegenerateGeometryError(f"cannot normalize zero-length vector {self}")
        return Vec2(self.x / mag, self.y / mag)

    def distance_to(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: "Vec2", t: float) -> "Vec2":
        """Interpolate from ``self`` (``t=0``) to ``other`` (``t=1``); ``t`` may leave ``[0, 1]``."""

        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def rotate(self, radians: float) -> "Vec2":
        cos_t = math.cos(radians)
        sin_t = math.sin(radians)
        return Vec2(self.x * cos_t - self.y * sin_t, self.x * sin_t + self.y * cos_t)

    def rotate_around(self, pivot: "Vec2", radians: float) -> "Vec2":
        return self.sub(pivot).rotate(radians).add(pivot)

    def tangent(self) -> "Vec2":
        # counter-clockwise perpendicular
        return Vec2(-self.y, self.x)

    def angle(self) -> float:
        """Signed direction of the vector in radians, in ``(-pi, pi]``."""

        return math.atan2(self.y, self.x)

    def __add__(self, other: "Vec2") -> "Vec2":
        return self.add(other)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return self.sub(other)

    def __mul__(self, k: float) -> "Vec2":
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)


def angle_between_degrees(corner: Vec2, a: Vec2, b: Vec2) -> float:
    """Unsigned angle at ``corner`` between the directions to ``a`` and ``b``.

    The cosine is clamped into ``[-1, 1]`` so rounding never yields NaN.
    """

    v1 = corner.sub(a).normalize()
    v2 = corner.sub(b).normalize()
    cos_t = max(-1.0, min(1.0, v1.dot(v2)))
    return math.degrees(math.acos(cos_t))


__all__ = [
    "DegenerateGeometryError",
    "Vec2",
    "angle_between_degrees",
]
