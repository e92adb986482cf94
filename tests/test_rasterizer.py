import numpy as np
import pytest

from gfxlab.raster.rasterizer import (
    Buffers,
    IndBufId,
    PosBufId,
    Primitive,
    Rasterizer,
    to_vec4,
)


def lit_pixels(r):
    return np.count_nonzero(r.frame_buffer().any(axis=1))


def test_buffer_ids_are_sequential():
    r = Rasterizer(10, 10)
    pos = r.load_positions([[0, 0, 0]])
    ind = r.load_indices([[0, 0, 0]])
    assert pos == PosBufId(0)
    assert ind == IndBufId(1)


def test_clear_color_and_depth():
    r = Rasterizer(8, 8)
    r.set_pixel((3, 3, 1), (5, 5, 5))
    r.clear(Buffers.COLOR | Buffers.DEPTH)
    assert lit_pixels(r) == 0
    assert np.all(np.isinf(r.depth_buffer()))


def test_clear_depth_only_keeps_colors():
    r = Rasterizer(8, 8)
    r.set_pixel((3, 3, 1), (5, 5, 5))
    r.clear(Buffers.DEPTH)
    assert lit_pixels(r) == 1


@pytest.mark.parametrize("point", [(-1, 2, 1), (2, -1, 1), (8, 2, 1), (2, 8, 1)])
def test_set_pixel_ignores_points_off_screen(point):
    r = Rasterizer(8, 8)
    r.set_pixel(point, (1, 1, 1))
    assert lit_pixels(r) == 0


def test_set_pixel_colors_exactly_one_pixel():
    r = Rasterizer(8, 8)
    r.set_pixel((2, 3, 1), (10, 20, 30))
    fb = r.frame_buffer()
    lit = fb[fb.any(axis=1)]
    assert len(lit) == 1
    assert np.array_equal(lit[0], [10, 20, 30])


def test_draw_rejects_non_triangle():
    r = Rasterizer(8, 8)
    pos = r.load_positions([[0, 0, 0]] * 3)
    ind = r.load_indices([[0, 1, 2]])
    with pytest.raises(NotImplementedError):
        r.draw(pos, ind, Primitive.LINE)


def test_horizontal_line_covers_each_column():
    r = Rasterizer(40, 40)
    r.draw_line(np.array([10.0, 20.0, 0.0]), np.array([15.0, 20.0, 0.0]))
    assert lit_pixels(r) == 6
    fb = r.frame_buffer()
    assert np.all(fb[fb.any(axis=1)] == 255.0)


def test_line_direction_does_not_matter():
    a = np.array([3.0, 5.0, 0.0])
    b = np.array([30.0, 17.0, 0.0])
    r1 = Rasterizer(40, 40)
    r1.draw_line(a, b)
    r2 = Rasterizer(40, 40)
    r2.draw_line(b, a)
    assert np.array_equal(r1.frame_buffer(), r2.frame_buffer())


def test_steep_line_has_one_pixel_per_row():
    r = Rasterizer(40, 40)
    r.draw_line(np.array([5.0, 2.0, 0.0]), np.array([9.0, 30.0, 0.0]))
    assert lit_pixels(r) == 29


def test_draw_wireframe_with_identity_matrices():
    r = Rasterizer(50, 50)
    pos = r.load_positions([[0.5, 0, 0], [0, 0.5, 0], [-0.5, 0, 0]])
    ind = r.load_indices([[0, 1, 2]])
    r.clear(Buffers.COLOR | Buffers.DEPTH)
    r.draw(pos, ind, Primitive.TRIANGLE)
    fb = r.frame_buffer()
    assert lit_pixels(r) > 0
    assert np.all(fb[fb.any(axis=1)] == 255.0)


def test_draw_unknown_buffer_raises():
    r = Rasterizer(10, 10)
    with pytest.raises(KeyError):
        r.draw(PosBufId(7), IndBufId(8), Primitive.TRIANGLE)


def test_to_vec4():
    assert np.array_equal(to_vec4([1, 2, 3]), [1, 2, 3, 1])
    assert np.array_equal(to_vec4([1, 2, 3], 0.0), [1, 2, 3, 0])