"""Materials, hit records and light sources."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

from gfxlab.raytrace.vector import Vector3f, get_random_float


class MaterialType(enum.Enum):
    DIFFUSE_AND_GLOSSY = 0
    REFLECTION_AND_REFRACTION = 1
    REFLECTION = 2


@dataclass
class Material:
    """Surface properties of an object."""

    material_type: MaterialType = MaterialType.DIFFUSE_AND_GLOSSY
    color: Vector3f = field(default_factory=lambda: Vector3f(1, 1, 1))
    emission: Vector3f = field(default_factory=Vector3f)
    ior: float = 0.0
    kd: float = 0.0
    ks: float = 0.0
    specular_exponent: float = 0.0

    def color_at(self, u: float, v: float) -> Vector3f:
        """Texture colour at ``(u, v)``; untextured materials give black."""
        return Vector3f()


@dataclass
class Intersection:
    """Result of a ray/object intersection query."""

    happened: bool = False
    coords: Vector3f = field(default_factory=Vector3f)
    normal: Vector3f = field(default_factory=Vector3f)
    distance: float = sys.float_info.max
    obj: Optional[Any] = None
    material: Optional[Material] = None


@dataclass
class Light:
    """A point light."""

    position: Vector3f
    intensity: Vector3f


@dataclass
class AreaLight(Light):
    """A rectangular light spanned by ``u`` and ``v`` from ``position``."""

    length: float = field(default=100.0, init=False)
    normal: Vector3f = field(default_factory=lambda: Vector3f(0, -1, 0), init=False)
    u: Vector3f = field(default_factory=lambda: Vector3f(1, 0, 0), init=False)
    v: Vector3f = field(default_factory=lambda: Vector3f(0, 0, 1), init=False)

    def sample_point(self) -> Vector3f:
        """A uniformly random point on the light's surface."""
        random_u = get_random_float()
        random_v = get_random_float()
        return self.position + random_u * self.u + random_v * self.v