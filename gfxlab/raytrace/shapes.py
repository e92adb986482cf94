"""Renderable objects: the common interface and an analytic sphere."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from gfxlab.raytrace.bounds import Bounds3
from gfxlab.raytrace.material import Intersection, Material
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.vector import Vector2f, Vector3f, dot, normalize, solve_quadratic


class SceneObject(ABC):
    """Something a ray can hit."""

    @abstractmethod
    def intersect(self, ray: Ray) -> bool:
        """Whether ``ray`` hits the object."""

    @abstractmethod
    def nearest_hit(self, ray: Ray) -> Optional[Tuple[float, int]]:
        """Distance and primitive index of the nearest hit, or ``None``."""

    @abstractmethod
    def get_intersection(self, ray: Ray) -> Intersection:
        """Full hit record of ``ray`` with the object."""

    @abstractmethod
    def get_surface_properties(self, p: Vector3f, i: Vector3f, index: int,
                               uv: Vector2f) -> Tuple[Vector3f, Vector2f]:
        """Normal and texture coordinate at hit point ``p``."""

    @abstractmethod
    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        """Diffuse colour at texture coordinate ``st``."""

    @abstractmethod
    def bounds(self) -> Bounds3:
        """Axis-aligned bounding box."""


class Sphere(SceneObject):
    """A sphere given by centre and radius."""

    def __init__(self, center: Vector3f, radius: float, material: Optional[Material] = None):
        self.center = center
        self.radius = radius
        self.radius2 = radius * radius
        self.material = material if material is not None else Material()

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r})"

    def _hit_distance(self, ray: Ray) -> Optional[float]:
        l = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        b = 2 * dot(ray.direction, l)
        c = dot(l, l) - self.radius2
        roots = solve_quadratic(a, b, c)
        if roots is None:
            return None
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return None
        return t0

    def intersect(self, ray: Ray) -> bool:
        return self._hit_distance(ray) is not None

    def nearest_hit(self, ray: Ray) -> Optional[Tuple[float, int]]:
        t = self._hit_distance(ray)
        return None if t is None else (t, 0)

    def get_intersection(self, ray: Ray) -> Intersection:
        t = self._hit_distance(ray)
        if t is None:
            return Intersection()
        coords = ray.origin + ray.direction * t
        return Intersection(
            happened=True,
            coords=coords,
            normal=normalize(coords - self.center),
            distance=t,
            obj=self,
            material=self.material,
        )

    def get_surface_properties(self, p: Vector3f, i: Vector3f, index: int,
                               uv: Vector2f) -> Tuple[Vector3f, Vector2f]:
        return normalize(p - self.center), Vector2f()

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        return self.material.color

    def bounds(self) -> Bounds3:
        r = self.radius
        c = self.center
        return Bounds3(Vector3f(c.x - r, c.y - r, c.z - r), Vector3f(c.x + r, c.y + r, c.z + r))