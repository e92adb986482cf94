import math

import pytest

from gfxlab.raytrace.material import Material, MaterialType
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.shapes import SceneObject, Sphere
from gfxlab.raytrace.vector import Vector2f, Vector3f, normalize


def _unit_sphere():
    return Sphere(Vector3f(0, 0, 0), 1.0)


def _magnitude(v):
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def test_scene_object_is_abstract():
    with pytest.raises(TypeError):
        SceneObject()


def test_radius_squared():
    s = Sphere(Vector3f(1, 2, 3), 3.0)
    assert s.radius2 == 9.0


def test_default_material():
    s = _unit_sphere()
    assert s.material == Material()
    assert s.material.material_type is MaterialType.DIFFUSE_AND_GLOSSY


def test_hit_from_outside():
    s = _unit_sphere()
    ray = Ray(Vector3f(0, 0, 5), Vector3f(0, 0, -1))
    hit = s.get_intersection(ray)
    assert hit.happened
    assert hit.distance == pytest.approx(4.0)
    assert hit.coords == ray.at(hit.distance)
    assert _magnitude(hit.coords - s.center) == pytest.approx(s.radius)
    assert hit.normal == normalize(hit.coords - s.center)
    assert hit.obj is s
    assert hit.material is s.material


def test_hit_from_inside_uses_far_root():
    s = Sphere(Vector3f(0, 0, 0), 2.0)
    ray = Ray(Vector3f(0, 0, 0), Vector3f(1, 0, 0))
    hit = s.get_intersection(ray)
    assert hit.happened
    assert hit.distance == pytest.approx(2.0)


def test_sphere_behind_ray_is_missed():
    s = _unit_sphere()
    ray = Ray(Vector3f(0, 0, 5), Vector3f(0, 0, 1))
    assert s.intersect(ray) is False
    assert s.nearest_hit(ray) is None
    assert s.get_intersection(ray).happened is False


def test_ray_passing_beside_sphere_is_missed():
    s = _unit_sphere()
    ray = Ray(Vector3f(3, 0, 5), Vector3f(0, 0, -1))
    assert s.intersect(ray) is False
    assert s.get_intersection(ray).obj is None


def test_nearest_hit_agrees_with_get_intersection():
    s = Sphere(Vector3f(0.5, -0.3, -8), 1.5)
    ray = Ray(Vector3f(0, 0, 0), normalize(Vector3f(0.05, -0.03, -1)))
    t, index = s.nearest_hit(ray)
    assert index == 0
    assert t == pytest.approx(s.get_intersection(ray).distance)
    assert s.intersect(ray) is True


def test_bounds_span_center_plus_minus_radius():
    c = Vector3f(1, 2, 3)
    s = Sphere(c, 0.5)
    b = s.bounds()
    assert b.p_min == Vector3f(c.x - 0.5, c.y - 0.5, c.z - 0.5)
    assert b.p_max == Vector3f(c.x + 0.5, c.y + 0.5, c.z + 0.5)
    assert b.centroid() == c


def test_surface_properties_give_unit_outward_normal():
    s = Sphere(Vector3f(1, 1, 1), 2.0)
    p = Vector3f(1, 3, 1)
    n, st = s.get_surface_properties(p, Vector3f(0, -1, 0), 0, Vector2f())
    assert n == normalize(p - s.center)
    assert _magnitude(n) == pytest.approx(1.0)
    assert st == Vector2f()


def test_diffuse_color_comes_from_material():
    material = Material(color=Vector3f(0.2, 0.4, 0.6))
    s = Sphere(Vector3f(), 1.0, material)
    assert s.eval_diffuse_color(Vector2f(0.3, 0.7)) == Vector3f(0.2, 0.4, 0.6)