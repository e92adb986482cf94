"""Rays with origin, direction and precomputed inverse direction."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

from gfxlab.raytrace.vector import Vector3f


def _inverse(c: float) -> float:
    if c == 0:
        return math.copysign(math.inf, c)
    return 1.0 / c


@dataclass
class Ray:
    """A ray ``origin + t * direction``."""

    origin: Vector3f
    direction: Vector3f
    t: float = 0.0
    direction_inv: Vector3f = field(init=False)
    t_min: float = field(init=False, default=0.0)
    t_max: float = field(init=False, default=sys.float_info.max)

    def __post_init__(self) -> None:
        d = self.direction
        self.direction_inv = Vector3f(_inverse(d.x), _inverse(d.y), _inverse(d.z))

    def at(self, t: float) -> Vector3f:
        """Point on the ray at parameter ``t``."""
        return self.origin + self.direction * t

    def __str__(self) -> str:
        return f"[origin:={self.origin}, direction={self.direction}, time={self.t:g}]\n"