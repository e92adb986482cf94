"""Bounding volume hierarchy over scene objects."""

from __future__ import annotations

import enum
import functools
import math
import sys
import time
from dataclasses import dataclass, field
from typing import IO, List, Optional, Sequence, Tuple

from gfxlab.raytrace.bounds import Bounds3, union
from gfxlab.raytrace.material import Intersection
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.shapes import SceneObject
from gfxlab.raytrace.vector import Vector3f

BUCKET_COUNT = 12


class SplitMethod(enum.Enum):
    NAIVE = enum.auto()
    SAH = enum.auto()


@dataclass
class BVHBuildNode:
    """A node of the hierarchy: an inner node with two children or a leaf."""

    bounds: Bounds3 = field(default_factory=Bounds3)
    left: Optional["BVHBuildNode"] = None
    right: Optional["BVHBuildNode"] = None
    object: Optional[SceneObject] = None
    split_axis: int = 0
    first_prim_offset: int = 0
    n_primitives: int = 0

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _union_all(boxes: Sequence[Bounds3]) -> Bounds3:
    return functools.reduce(union, boxes, Bounds3())


class BVHAccel:
    """Accelerates ray queries over a list of objects with a binary BVH."""

    def __init__(self, primitives: Sequence[SceneObject], max_prims_in_node: int = 1,
                 split_method: SplitMethod = SplitMethod.SAH,
                 out: Optional[IO[str]] = None):
        self.max_prims_in_node = min(255, max_prims_in_node)
        self.split_method = split_method
        self.primitives: List[SceneObject] = list(primitives)
        self.root: Optional[BVHBuildNode] = None

        start = time.monotonic()
        if not self.primitives:
            return
        self.root = self.recursive_build(self.primitives)

        diff = int(time.monotonic() - start)
        hrs = diff // 3600
        mins = diff // 60 - hrs * 60
        secs = diff - hrs * 3600 - mins * 60
        stream = out if out is not None else sys.stdout
        stream.write(
            "\rBVH Generation complete: \n"
            f"Time Taken: {hrs} hrs, {mins} mins, {secs} secs\n\n"
        )

    def recursive_build(self, objects: Sequence[SceneObject]) -> BVHBuildNode:
        """Build the subtree holding ``objects``."""
        node = BVHBuildNode()
        objects = list(objects)
        if not objects:
            return node
        if len(objects) == 1:
            node.bounds = objects[0].bounds()
            node.object = objects[0]
            return node
        if len(objects) == 2:
            node.left = self.recursive_build([objects[0]])
            node.right = self.recursive_build([objects[1]])
            node.bounds = union(node.left.bounds, node.right.bounds)
            return node

        centroids = [obj.bounds().centroid() for obj in objects]
        centroid_bounds = functools.reduce(union, centroids, Bounds3())

        if self.split_method is SplitMethod.NAIVE:
            left, right = self._split_naive(objects, centroid_bounds)
        else:
            left, right = self._split_sah(objects, centroids, centroid_bounds)
            if not left or not right:
                # Degenerate centroid box (e.g. collinear centroids): no SAH split exists.
                left, right = self._split_naive(objects, centroid_bounds)

        assert len(objects) == len(left) + len(right)

        node.left = self.recursive_build(left)
        node.right = self.recursive_build(right)
        node.bounds = union(node.left.bounds, node.right.bounds)
        return node

    @staticmethod
    def _split_naive(objects: List[SceneObject],
                     centroid_bounds: Bounds3) -> Tuple[List[SceneObject], List[SceneObject]]:
        dim = centroid_bounds.max_extent()
        ordered = sorted(objects, key=lambda obj: obj.bounds().centroid()[dim])
        middle = len(ordered) // 2
        return ordered[:middle], ordered[middle:]

    @staticmethod
    def _split_sah(objects: List[SceneObject], centroids: List[Vector3f],
                   centroid_bounds: Bounds3) -> Tuple[List[SceneObject], List[SceneObject]]:
        n_area = centroid_bounds.surface_area()
        min_cost = math.inf
        min_cost_axis = 0
        min_cost_split = 0
        assignments: List[List[int]] = []

        for axis in range(3):
            bucket_bounds = [Bounds3() for _ in range(BUCKET_COUNT)]
            counts = [0] * BUCKET_COUNT
            buckets = []
            for c in centroids:
                bid = min(int(BUCKET_COUNT * centroid_bounds.offset(c)[axis]), BUCKET_COUNT - 1)
                bucket_bounds[bid] = union(bucket_bounds[bid], c)
                counts[bid] += 1
                buckets.append(bid)
            assignments.append(buckets)

            if n_area == 0:
                continue
            for split in range(1, BUCKET_COUNT):
                a = _union_all(bucket_bounds[:split])
                b = _union_all(bucket_bounds[split:])
                numerator = (sum(counts[:split]) * a.surface_area()
                             + sum(counts[split:]) * b.surface_area())
                cost = 1 + numerator / n_area
                if cost < min_cost:
                    min_cost = cost
                    min_cost_split = split
                    min_cost_axis = axis

        chosen = assignments[min_cost_axis]
        left = [obj for obj, bid in zip(objects, chosen) if bid < min_cost_split]
        right = [obj for obj, bid in zip(objects, chosen) if bid >= min_cost_split]
        return left, right

    def intersect(self, ray: Ray) -> Intersection:
        """Nearest intersection of ``ray`` with the objects in the hierarchy."""
        if self.root is None:
            return Intersection()
        return self.get_intersection(self.root, ray)

    def get_intersection(self, node: Optional[BVHBuildNode], ray: Ray) -> Intersection:
        """Nearest intersection of ``ray`` with the subtree at ``node``."""
        if node is None:
            return Intersection()
        d = ray.direction
        dir_is_neg = (int(d.x > 0), int(d.y > 0), int(d.z > 0))
        if not node.bounds.intersect_p(ray, ray.direction_inv, dir_is_neg):
            return Intersection()

        if node.is_leaf:
            if node.object is None:
                return Intersection()
            return node.object.get_intersection(ray)

        h1 = self.get_intersection(node.left, ray)
        h2 = self.get_intersection(node.right, ray)
        return h1 if h1.distance < h2.distance else h2