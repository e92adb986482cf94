import numpy as np
import pytest

from gfxlab.raster.triangle import Triangle


def test_default_vertices_are_zero():
    t = Triangle()
    for vert in (t.a(), t.b(), t.c()):
        assert np.array_equal(vert, np.zeros(3))


def test_set_vertex_accessors():
    t = Triangle()
    t.set_vertex(0, [1, 2, 3])
    t.set_vertex(1, [4, 5, 6])
    t.set_vertex(2, [7, 8, 9])
    assert np.array_equal(t.a(), [1, 2, 3])
    assert np.array_equal(t.b(), [4, 5, 6])
    assert np.array_equal(t.c(), [7, 8, 9])


def test_set_color_scales_to_unit_range():
    t = Triangle()
    t.set_color(0, 255.0, 0.0, 0.0)
    t.set_color(2, 0.0, 0.0, 255.0)
    assert np.allclose(t.color[0], [1.0, 0.0, 0.0])
    assert np.allclose(t.color[2], [0.0, 0.0, 1.0])


@pytest.mark.parametrize(
    "rgb", [(-1, 0, 0), (0, 256, 0), (0, 0, 300), (0, -0.5, 0)]
)
def test_set_color_rejects_out_of_range(rgb):
    t = Triangle()
    with pytest.raises(ValueError, match="Invalid color values"):
        t.set_color(0, *rgb)


def test_to_vector4_appends_one():
    t = Triangle()
    t.set_vertex(0, [1.5, -2.0, 3.0])
    t.set_vertex(1, [0.0, 1.0, 2.0])
    res = t.to_vector4()
    assert len(res) == 3
    for vec4, vec3 in zip(res, (t.a(), t.b(), t.c())):
        assert vec4[3] == 1.0
        assert np.array_equal(vec4[:3], vec3)


def test_tex_coord_and_normal_round_trip():
    t = Triangle()
    t.set_tex_coord(1, 0.25, 0.75)
    t.set_normal(2, [0.0, 0.0, 1.0])
    assert np.array_equal(t.tex_coords[1], [0.25, 0.75])
    assert np.array_equal(t.normal[2], [0.0, 0.0, 1.0])