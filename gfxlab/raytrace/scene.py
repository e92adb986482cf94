"""A scene of objects and lights, shaded with Whitted-style ray tracing."""

from __future__ import annotations

import math
import sys
from typing import IO, List, Optional, Sequence, Tuple, Union

from gfxlab.raytrace.bvh import BVHAccel, SplitMethod
from gfxlab.raytrace.material import AreaLight, Intersection, Light, MaterialType
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.shapes import SceneObject
from gfxlab.raytrace.vector import (
    EPSILON,
    K_INFINITY,
    Vector2f,
    Vector3f,
    clamp,
    dot,
    normalize,
)


def reflect(i: Vector3f, n: Vector3f) -> Vector3f:
    """Mirror direction of ``i`` about normal ``n``."""
    return i - 2 * dot(i, n) * n


def refract(i: Vector3f, n: Vector3f, ior: float) -> Vector3f:
    """Refraction direction by Snell's law; zero on total internal reflection."""
    cosi = clamp(-1, 1, dot(i, n))
    etai, etat = 1.0, ior
    normal = n
    if cosi < 0:
        cosi = -cosi
    else:
        etai, etat = etat, etai
        normal = -n
    eta = etai / etat
    k = 1 - eta * eta * (1 - cosi * cosi)
    if k < 0:
        return Vector3f(0, 0, 0)
    return eta * i + (eta * cosi - math.sqrt(k)) * normal


def fresnel(i: Vector3f, n: Vector3f, ior: float) -> float:
    """Fraction of light reflected at a surface with refractive index ``ior``."""
    cosi = clamp(-1, 1, dot(i, n))
    etai, etat = 1.0, ior
    if cosi > 0:
        etai, etat = etat, etai
    sint = etai / etat * math.sqrt(max(0.0, 1 - cosi * cosi))
    if sint >= 1:
        return 1.0
    cost = math.sqrt(max(0.0, 1 - sint * sint))
    cosi = abs(cosi)
    rs = ((etat * cosi) - (etai * cost)) / ((etat * cosi) + (etai * cost))
    rp = ((etai * cosi) - (etat * cost)) / ((etai * cosi) + (etat * cost))
    return (rs * rs + rp * rp) / 2


class Scene:
    """Objects, lights and render options."""

    def __init__(self, width: int = 1280, height: int = 960,
                 out: Optional[IO[str]] = None):
        self.width = width
        self.height = height
        self.fov = 90.0
        self.background_color = Vector3f(0.235294, 0.67451, 0.843137)
        self.max_depth = 5
        self.objects: List[SceneObject] = []
        self.lights: List[Light] = []
        self.bvh: Optional[BVHAccel] = None
        self.out = out

    def add(self, item: Union[SceneObject, Light]) -> None:
        """Add an object or a light."""
        if isinstance(item, Light):
            self.lights.append(item)
        else:
            self.objects.append(item)

    def build_bvh(self) -> None:
        """Build the acceleration structure over the current objects."""
        stream = self.out if self.out is not None else sys.stdout
        stream.write(" - Generating BVH...\n\n")
        self.bvh = BVHAccel(self.objects, 1, SplitMethod.SAH, out=stream)

    def intersect(self, ray: Ray) -> Intersection:
        """Nearest hit of ``ray`` in the scene."""
        if self.bvh is None:
            raise RuntimeError("BVH has not been built")
        return self.bvh.intersect(ray)

    def trace(self, ray: Ray,
              objects: Sequence[SceneObject]) -> Optional[Tuple[float, int, SceneObject]]:
        """Nearest hit among ``objects`` by brute force: ``(t, index, object)``."""
        best: Optional[Tuple[float, int, SceneObject]] = None
        t_near = K_INFINITY
        for obj in objects:
            hit = obj.nearest_hit(ray)
            if hit is not None and hit[0] < t_near:
                t_near = hit[0]
                best = (hit[0], hit[1], obj)
        return best

    def cast_ray(self, ray: Ray, depth: int) -> Vector3f:
        """Colour seen along ``ray`` at recursion level ``depth``."""
        if depth > self.max_depth:
            return Vector3f(0.0, 0.0, 0.0)
        intersection = self.intersect(ray)
        if not intersection.happened:
            return self.background_color

        m = intersection.material
        hit_object = intersection.obj
        hit_point = intersection.coords
        n, st = hit_object.get_surface_properties(hit_point, ray.direction, 0, Vector2f())

        if m.material_type is MaterialType.REFLECTION_AND_REFRACTION:
            reflection_direction = normalize(reflect(ray.direction, n))
            refraction_direction = normalize(refract(ray.direction, n, m.ior))
            reflection_orig = (hit_point - n * EPSILON
                               if dot(reflection_direction, n) < 0
                               else hit_point + n * EPSILON)
            refraction_orig = (hit_point - n * EPSILON
                               if dot(refraction_direction, n) < 0
                               else hit_point + n * EPSILON)
            reflection_color = self.cast_ray(Ray(reflection_orig, reflection_direction),
                                             depth + 1)
            refraction_color = self.cast_ray(Ray(refraction_orig, refraction_direction),
                                             depth + 1)
            kr = fresnel(ray.direction, n, m.ior)
            return reflection_color * kr + refraction_color * (1 - kr)

        if m.material_type is MaterialType.REFLECTION:
            kr = fresnel(ray.direction, n, m.ior)
            reflection_direction = reflect(ray.direction, n)
            reflection_orig = (hit_point + n * EPSILON
                               if dot(reflection_direction, n) < 0
                               else hit_point - n * EPSILON)
            return self.cast_ray(Ray(reflection_orig, reflection_direction), depth + 1) * kr

        # Phong model: diffuse plus specular over all point lights.
        light_amt = Vector3f(0, 0, 0)
        specular_color = Vector3f(0, 0, 0)
        shadow_orig = (hit_point + n * EPSILON
                       if dot(ray.direction, n) < 0
                       else hit_point - n * EPSILON)
        for light in self.lights:
            if isinstance(light, AreaLight):
                continue
            light_dir = normalize(light.position - hit_point)
            l_dot_n = max(0.0, dot(light_dir, n))
            in_shadow = self.intersect(Ray(shadow_orig, light_dir)).happened
            light_amt = light_amt + (1 - int(in_shadow)) * light.intensity * l_dot_n
            reflection_direction = reflect(-light_dir, n)
            strength = max(0.0, -dot(reflection_direction, ray.direction))
            specular_color = specular_color + (
                strength ** m.specular_exponent * light.intensity
            )
        return light_amt * (hit_object.eval_diffuse_color(st) * m.kd
                            + specular_color * m.ks)