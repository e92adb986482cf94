"""Small 3D/2D vector types and numeric helpers used by the ray tracer."""

from __future__ import annotations

import math
import random
import sys
from dataclasses import dataclass
from typing import IO, Optional, Tuple, Union

EPSILON = 0.00001
K_INFINITY = 3.4028234663852886e38  # largest single-precision float
M_PI = math.pi

Number = Union[int, float]


@dataclass(frozen=True)
class Vector3f:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def filled(cls, value: Number) -> "Vector3f":
        """Return a vector with all three components set to ``value``."""
        return cls(value, value, value)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vector3f") -> "Vector3f":
        if not isinstance(other, Vector3f):
            return NotImplemented
        return Vector3f(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3f") -> "Vector3f":
        if not isinstance(other, Vector3f):
            return NotImplemented
        return Vector3f(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union["Vector3f", Number]) -> "Vector3f":
        if isinstance(other, Vector3f):
            return Vector3f(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vector3f(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Number) -> "Vector3f":
        if isinstance(other, (int, float)):
            return Vector3f(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, r: Number) -> "Vector3f":
        return Vector3f(self.x / r, self.y / r, self.z / r)

    def __neg__(self) -> "Vector3f":
        return Vector3f(-self.x, -self.y, -self.z)

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __str__(self) -> str:
        return f"{self.x:g}, {self.y:g}, {self.z:g}"

    @staticmethod
    def component_min(a: "Vector3f", b: "Vector3f") -> "Vector3f":
        """Component-wise minimum of two vectors."""
        return Vector3f(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))

    @staticmethod
    def component_max(a: "Vector3f", b: "Vector3f") -> "Vector3f":
        """Component-wise maximum of two vectors."""
        return Vector3f(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))


@dataclass(frozen=True)
class Vector2f:
    """An immutable two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2f") -> "Vector2f":
        if not isinstance(other, Vector2f):
            return NotImplemented
        return Vector2f(self.x + other.x, self.y + other.y)

    def __mul__(self, r: Number) -> "Vector2f":
        if not isinstance(r, (int, float)):
            return NotImplemented
        return Vector2f(self.x * r, self.y * r)


def lerp(a: Vector3f, b: Vector3f, t: float) -> Vector3f:
    """Linear interpolation between ``a`` and ``b``."""
    return a * (1 - t) + b * t


def normalize(v: Vector3f) -> Vector3f:
    """Return ``v`` scaled to unit length; a zero vector is returned unchanged."""
    mag2 = v.x * v.x + v.y * v.y + v.z * v.z
    if mag2 > 0:
        inv_mag = 1 / math.sqrt(mag2)
        return Vector3f(v.x * inv_mag, v.y * inv_mag, v.z * inv_mag)
    return v


def dot(a: Vector3f, b: Vector3f) -> float:
    """Dot product."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3f, b: Vector3f) -> Vector3f:
    """Cross product."""
    return Vector3f(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def clamp(lo: float, hi: float, v: float) -> float:
    """Clamp ``v`` into ``[lo, hi]``."""
    return max(lo, min(hi, v))


def solve_quadratic(a: float, b: float, c: float) -> Optional[Tuple[float, float]]:
    """Solve ``a*x^2 + b*x + c = 0``; return the ordered roots or ``None``."""
    discr = b * b - 4 * a * c
    if discr < 0:
        return None
    if discr == 0:
        x0 = x1 = -0.5 * b / a
    else:
        root = math.sqrt(discr)
        q = -0.5 * (b + root) if b > 0 else -0.5 * (b - root)
        x0 = q / a
        x1 = c / q
    if x0 > x1:
        x0, x1 = x1, x0
    return x0, x1


def get_random_float() -> float:
    """Uniform random number in ``[0, 1)``."""
    return random.random()


def update_progress(progress: float, stream: Optional[IO[str]] = None) -> None:
    """Draw a one-line progress bar for ``progress`` in ``[0, 1]``."""
    out = stream if stream is not None else sys.stdout
    bar_width = 70
    pos = int(bar_width * progress)
    bar = "".join(
        "=" if i < pos else ">" if i == pos else " " for i in range(bar_width)
    )
    out.write(f"[{bar}] {int(progress * 100.0)} %\r")
    out.flush()