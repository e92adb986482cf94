"""Triangles and triangle meshes loaded from OBJ files."""

from __future__ import annotations

import math
import os
from typing import IO, List, Optional, Tuple, Union

from gfxlab.raytrace.bounds import Bounds3, union
from gfxlab.raytrace.bvh import BVHAccel
from gfxlab.raytrace.material import Intersection, Material, MaterialType
from gfxlab.raytrace.objloader import Loader
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.shapes import SceneObject
from gfxlab.raytrace.vector import (
    EPSILON,
    Vector2f,
    Vector3f,
    cross,
    dot,
    lerp,
    normalize,
)

PathLike = Union[str, "os.PathLike[str]"]


def ray_triangle_intersect(v0: Vector3f, v1: Vector3f, v2: Vector3f,
                           orig: Vector3f,
                           direction: Vector3f) -> Optional[Tuple[float, float, float]]:
    """Moeller-Trumbore test against a front-facing triangle.

    Returns ``(t, u, v)`` for a hit, or ``None``.
    """
    edge1 = v1 - v0
    edge2 = v2 - v0
    pvec = cross(direction, edge2)
    det = dot(edge1, pvec)
    if det <= 0:
        return None

    tvec = orig - v0
    u = dot(tvec, pvec)
    if u < 0 or u > det:
        return None

    qvec = cross(tvec, edge1)
    v = dot(direction, qvec)
    if v < 0 or u + v > det:
        return None

    inv_det = 1 / det
    return dot(edge2, qvec) * inv_det, u * inv_det, v * inv_det


class Triangle(SceneObject):
    """A single triangle with vertices in counter-clockwise order."""

    def __init__(self, v0: Vector3f, v1: Vector3f, v2: Vector3f,
                 material: Optional[Material] = None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material
        self.e1 = v1 - v0
        self.e2 = v2 - v0
        self.normal = normalize(cross(self.e1, self.e2))

    def __repr__(self) -> str:
        return f"Triangle({self.v0!r}, {self.v1!r}, {self.v2!r})"

    def intersect(self, ray: Ray) -> bool:
        return True

    def nearest_hit(self, ray: Ray) -> Optional[Tuple[float, int]]:
        return None

    def get_intersection(self, ray: Ray) -> Intersection:
        if dot(ray.direction, self.normal) > 0:
            return Intersection()
        pvec = cross(ray.direction, self.e2)
        det = dot(self.e1, pvec)
        if abs(det) < EPSILON:
            return Intersection()

        det_inv = 1.0 / det
        tvec = ray.origin - self.v0
        u = dot(tvec, pvec) * det_inv
        if u < 0 or u > 1:
            return Intersection()
        qvec = cross(tvec, self.e1)
        v = dot(ray.direction, qvec) * det_inv
        if v < 0 or u + v > 1:
            return Intersection()
        t_tmp = dot(self.e2, qvec) * det_inv
        if t_tmp < 0:
            return Intersection()

        return Intersection(
            happened=True,
            coords=ray.at(t_tmp),
            normal=self.normal,
            distance=t_tmp,
            obj=self,
            material=self.material,
        )

    def get_surface_properties(self, p: Vector3f, i: Vector3f, index: int,
                               uv: Vector2f) -> Tuple[Vector3f, Vector2f]:
        return self.normal, Vector2f()

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        return Vector3f(0.5, 0.5, 0.5)

    def bounds(self) -> Bounds3:
        return union(Bounds3(self.v0, self.v1), self.v2)


class MeshTriangle(SceneObject):
    """A triangle mesh read from a single-mesh OBJ file, scaled by ``scale``."""

    def __init__(self, filename: PathLike, scale: float = 60.0,
                 out: Optional[IO[str]] = None):
        loader = Loader()
        loader.load_file(filename)
        if len(loader.loaded_meshes) != 1:
            raise ValueError(
                f"{os.fspath(filename)}: expected exactly one mesh, "
                f"found {len(loader.loaded_meshes)}"
            )
        mesh = loader.loaded_meshes[0]

        positions = [
            Vector3f(v.position.x, v.position.y, v.position.z) * scale
            for v in mesh.vertices
        ]
        min_vert = Vector3f.filled(math.inf)
        max_vert = Vector3f.filled(-math.inf)
        self.triangles: List[Triangle] = []
        for face in zip(*[iter(positions)] * 3):
            for vert in face:
                min_vert = Vector3f.component_min(min_vert, vert)
                max_vert = Vector3f.component_max(max_vert, vert)
            material = Material(MaterialType.DIFFUSE_AND_GLOSSY,
                                Vector3f(0.5, 0.5, 0.5), Vector3f(0, 0, 0))
            material.kd = 0.6
            material.ks = 0.0
            material.specular_exponent = 0
            self.triangles.append(Triangle(*face, material=material))

        self.bounding_box = Bounds3(min_vert, max_vert)
        self.vertices: List[Vector3f] = [
            v for tri in self.triangles for v in (tri.v0, tri.v1, tri.v2)
        ]
        self.vertex_index: List[int] = list(range(len(self.vertices)))
        self.st_coordinates: List[Vector2f] = [Vector2f() for _ in self.vertices]
        self.num_triangles = len(self.triangles)
        self.material: Optional[Material] = None
        self.bvh = BVHAccel(self.triangles, out=out)

    def _corners(self, k: int) -> Tuple[Vector3f, Vector3f, Vector3f]:
        idx = self.vertex_index
        return (self.vertices[idx[k * 3]],
                self.vertices[idx[k * 3 + 1]],
                self.vertices[idx[k * 3 + 2]])

    def intersect(self, ray: Ray) -> bool:
        return True

    def nearest_hit(self, ray: Ray) -> Optional[Tuple[float, int]]:
        best: Optional[Tuple[float, int]] = None
        t_near = math.inf
        for k in range(self.num_triangles):
            hit = ray_triangle_intersect(*self._corners(k), ray.origin, ray.direction)
            if hit is not None and hit[0] < t_near:
                t_near = hit[0]
                best = (hit[0], k)
        return best

    def get_intersection(self, ray: Ray) -> Intersection:
        if self.bvh is None:
            return Intersection()
        return self.bvh.intersect(ray)

    def get_surface_properties(self, p: Vector3f, i: Vector3f, index: int,
                               uv: Vector2f) -> Tuple[Vector3f, Vector2f]:
        v0, v1, v2 = self._corners(index)
        e0 = normalize(v1 - v0)
        e1 = normalize(v2 - v1)
        n = normalize(cross(e0, e1))
        idx = self.vertex_index
        st0 = self.st_coordinates[idx[index * 3]]
        st1 = self.st_coordinates[idx[index * 3 + 1]]
        st2 = self.st_coordinates[idx[index * 3 + 2]]
        st = st0 * (1 - uv.x - uv.y) + st1 * uv.x + st2 * uv.y
        return n, st

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        scale = 5
        pattern = (math.fmod(st.x * scale, 1) > 0.5) ^ (math.fmod(st.y * scale, 1) > 0.5)
        return lerp(Vector3f(0.815, 0.235, 0.031),
                    Vector3f(0.937, 0.937, 0.231), float(pattern))

    def bounds(self) -> Bounds3:
        return self.bounding_box