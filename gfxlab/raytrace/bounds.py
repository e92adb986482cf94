"""Axis-aligned bounding boxes."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, Union

from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.vector import Vector3f


class Bounds3:
    """An axis-aligned box given by its minimum and maximum corners.

    With no arguments the box is empty (inverted); with one point it is that
    point; with two points it spans both.
    """

    __slots__ = ("p_min", "p_max")

    def __init__(self, p1: Optional[Vector3f] = None, p2: Optional[Vector3f] = None):
        if p1 is None:
            big = sys.float_info.max
            self.p_max = Vector3f(-big, -big, -big)
            self.p_min = Vector3f(big, big, big)
        elif p2 is None:
            self.p_min = p1
            self.p_max = p1
        else:
            self.p_min = Vector3f.component_min(p1, p2)
            self.p_max = Vector3f.component_max(p1, p2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bounds3):
            return NotImplemented
        return self.p_min == other.p_min and self.p_max == other.p_max

    def __repr__(self) -> str:
        return f"Bounds3(p_min={self.p_min!r}, p_max={self.p_max!r})"

    def diagonal(self) -> Vector3f:
        return self.p_max - self.p_min

    def max_extent(self) -> int:
        """Index of the longest axis (0, 1 or 2)."""
        d = self.diagonal()
        if d.x > d.y and d.x > d.z:
            return 0
        if d.y > d.z:
            return 1
        return 2

    def surface_area(self) -> float:
        d = self.diagonal()
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def centroid(self) -> Vector3f:
        return 0.5 * self.p_min + 0.5 * self.p_max

    def intersect(self, other: "Bounds3") -> "Bounds3":
        """Overlap of this box with ``other``."""
        return Bounds3(
            Vector3f.component_max(self.p_min, other.p_min),
            Vector3f.component_min(self.p_max, other.p_max),
        )

    def offset(self, p: Vector3f) -> Vector3f:
        """Position of ``p`` relative to the box, 0 at ``p_min`` and 1 at ``p_max``."""
        o = p - self.p_min
        parts = []
        for lo, hi, c in zip(self.p_min, self.p_max, o):
            parts.append(c / (hi - lo) if hi > lo else c)
        return Vector3f(*parts)

    def __getitem__(self, i: int) -> Vector3f:
        return self.p_min if i == 0 else self.p_max

    def intersect_p(self, ray: Ray, inv_dir: Vector3f, dir_is_neg: Sequence[int]) -> bool:
        """Slab test; ``dir_is_neg[i]`` is true where the direction is positive."""
        enters = []
        exits = []
        for axis in range(3):
            t_lo = (self.p_min[axis] - ray.origin[axis]) * inv_dir[axis]
            t_hi = (self.p_max[axis] - ray.origin[axis]) * inv_dir[axis]
            if not dir_is_neg[axis]:
                t_lo, t_hi = t_hi, t_lo
            enters.append(t_lo)
            exits.append(t_hi)
        t_enter = max(enters[0], max(enters[1], enters[2]))
        t_exit = min(exits[0], min(exits[1], exits[2]))
        return t_enter < t_exit and t_exit >= 0


def overlaps(b1: Bounds3, b2: Bounds3) -> bool:
    """Whether two boxes touch or overlap."""
    return all(
        b1.p_max[i] >= b2.p_min[i] and b1.p_min[i] <= b2.p_max[i] for i in range(3)
    )


def inside(p: Vector3f, b: Bounds3) -> bool:
    """Whether point ``p`` lies within box ``b`` (borders included)."""
    return all(b.p_min[i] <= p[i] <= b.p_max[i] for i in range(3))


def union(b: Bounds3, other: Union[Bounds3, Vector3f]) -> Bounds3:
    """Smallest box containing ``b`` and ``other`` (a box or a point)."""
    if isinstance(other, Bounds3):
        lo, hi = other.p_min, other.p_max
    else:
        lo = hi = other
    ret = Bounds3()
    ret.p_min = Vector3f.component_min(b.p_min, lo)
    ret.p_max = Vector3f.component_max(b.p_max, hi)
    return ret