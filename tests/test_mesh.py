import io

import pytest

from gfxlab.raytrace.bounds import Bounds3
from gfxlab.raytrace.mesh import MeshTriangle, Triangle, ray_triangle_intersect
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.vector import Vector2f, Vector3f, normalize

V0 = Vector3f(0, 0, 0)
V1 = Vector3f(1, 0, 0)
V2 = Vector3f(0, 1, 0)


def _approx(v, w):
    return all(a == pytest.approx(b, abs=1e-6) for a, b in zip(v, w))


def test_ray_triangle_intersect_hit():
    hit = ray_triangle_intersect(V0, V1, V2, Vector3f(0.2, 0.2, 1), Vector3f(0, 0, -1))
    assert hit is not None
    t, u, v = hit
    assert t == pytest.approx(1.0)
    assert u == pytest.approx(0.2)
    assert v == pytest.approx(0.2)


def test_ray_triangle_intersect_miss_and_backface():
    assert ray_triangle_intersect(V0, V1, V2, Vector3f(2, 2, 1), Vector3f(0, 0, -1)) is None
    assert ray_triangle_intersect(V0, V2, V1, Vector3f(0.2, 0.2, 1), Vector3f(0, 0, -1)) is None


def test_triangle_get_intersection_front():
    tri = Triangle(V0, V1, V2)
    ray = Ray(Vector3f(0.2, 0.2, 1), Vector3f(0, 0, -1))
    hit = tri.get_intersection(ray)
    assert hit.happened
    assert hit.obj is tri
    assert _approx(hit.coords, ray.at(hit.distance))
    assert hit.coords.z == pytest.approx(0.0)
    assert hit.normal == tri.normal


def test_triangle_get_intersection_rejects_back_and_outside():
    tri = Triangle(V0, V1, V2)
    assert not tri.get_intersection(Ray(Vector3f(0.2, 0.2, -1), Vector3f(0, 0, 1))).happened
    assert not tri.get_intersection(Ray(Vector3f(2, 2, 1), Vector3f(0, 0, -1))).happened
    assert not tri.get_intersection(Ray(Vector3f(0.2, 0.2, -1), Vector3f(0, 0, -1))).happened


def test_triangle_bounds_and_properties():
    tri = Triangle(V0, V1, V2)
    assert tri.bounds() == Bounds3(Vector3f(0, 0, 0), Vector3f(1, 1, 0))
    n, st = tri.get_surface_properties(V0, V1, 0, Vector2f())
    assert n == tri.normal
    assert st == Vector2f()
    assert tri.eval_diffuse_color(Vector2f()) == Vector3f(0.5, 0.5, 0.5)
    assert tri.nearest_hit(Ray(V0, V1)) is None


def _write_obj(path, lines):
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def tilted_obj(tmp_path):
    return _write_obj(tmp_path / "tri.obj", ["v 0 0 0", "v 1 0 1", "v 0 1 1", "f 1 2 3"])


def test_mesh_bounds_scaled(tilted_obj):
    mesh = MeshTriangle(tilted_obj, scale=2.0, out=io.StringIO())
    assert mesh.num_triangles == 1
    assert mesh.bounds() == Bounds3(Vector3f(0, 0, 0), Vector3f(2, 2, 2))


def test_mesh_bvh_hit_matches_triangle(tilted_obj):
    mesh = MeshTriangle(tilted_obj, scale=1.0, out=io.StringIO())
    target = Vector3f(0.3, 0.3, 0.6)
    origin = Vector3f(-1.5, -1.6, 2.7)
    ray = Ray(origin, normalize(target - origin))
    hit = mesh.get_intersection(ray)
    direct = mesh.triangles[0].get_intersection(ray)
    assert hit.happened
    assert hit.distance == pytest.approx(direct.distance)
    assert _approx(hit.coords, target)
    near = mesh.nearest_hit(ray)
    assert near is not None
    assert near[1] == 0
    assert near[0] == pytest.approx(hit.distance)


def test_mesh_miss(tilted_obj):
    mesh = MeshTriangle(tilted_obj, scale=1.0, out=io.StringIO())
    ray = Ray(Vector3f(5, 5, 5), normalize(Vector3f(0.1, 0.2, 1)))
    assert not mesh.get_intersection(ray).happened
    assert mesh.nearest_hit(ray) is None


def test_mesh_surface_normal_is_unit(tilted_obj):
    mesh = MeshTriangle(tilted_obj, scale=1.0, out=io.StringIO())
    n, st = mesh.get_surface_properties(Vector3f(), Vector3f(), 0, Vector2f(0.2, 0.3))
    assert n.x ** 2 + n.y ** 2 + n.z ** 2 == pytest.approx(1.0)
    assert _approx(n, mesh.triangles[0].normal)
    assert st == Vector2f(0.0, 0.0)


def test_mesh_checker_pattern(tilted_obj):
    mesh = MeshTriangle(tilted_obj, out=io.StringIO())
    base = mesh.eval_diffuse_color(Vector2f(0, 0))
    other = mesh.eval_diffuse_color(Vector2f(0.15, 0))
    diagonal = mesh.eval_diffuse_color(Vector2f(0.15, 0.15))
    assert list(base) == pytest.approx([0.815, 0.235, 0.031], abs=1e-6)
    assert list(other) == pytest.approx([0.937, 0.937, 0.231], abs=1e-6)
    assert list(diagonal) == pytest.approx(list(base), abs=1e-6)


def test_mesh_missing_file_raises(tmp_path):
    with pytest.raises(ValueError):
        MeshTriangle(tmp_path / "absent.obj", out=io.StringIO())


def test_mesh_multiple_meshes_raises(tmp_path):
    path = _write_obj(tmp_path / "two.obj", [
        "o first", "v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3",
        "o second", "v 0 0 1", "v 1 0 1", "v 0 1 1", "f 4 5 6",
    ])
    with pytest.raises(ValueError):
        MeshTriangle(path, out=io.StringIO())