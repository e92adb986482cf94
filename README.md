# gfxlab

A small graphics workbench in pure Python.

- **`gfxlab.raster`**: a wireframe rasterizer. `Rasterizer` loads vertex
  positions and index triples, runs them through its `model`, `view` and
  `projection` matrices, and draws the triangle edges in white with
  Bresenham's line algorithm into a colour frame buffer. `gfxlab.raster.app`
  provides the view, Z-rotation and perspective projection matrices and
  saves frames as image files with Pillow.
- **`gfxlab.raytrace`**: a Whitted-style ray tracer. It has vectors
  (`vector`), rays (`ray`), axis-aligned boxes (`bounds`), a bounding volume
  hierarchy with naive or SAH splitting (`bvh`), spheres (`shapes`),
  triangles and OBJ-loaded triangle meshes (`mesh`), a Wavefront OBJ/MTL
  loader (`objloader`, `objmath`), materials and lights (`material`), a
  `Scene` with Phong shading, hard shadows, reflection and refraction mixed by
  Fresnel (`scene`), and a `Renderer` that writes binary PPM images
  (`renderer`).
- **`gfxlab.patterns`**: short demonstrations of the Command, Mediator and
  Strategy design patterns.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Command-line tools

Render the wireframe triangle once, rotated about Z by 20 degrees, to a PNG
file. Exactly three arguments are needed; the first is ignored, the second is
the angle and the third the output file:

```
gfxlab-raster -r 20 output.png
```

Run without arguments, `gfxlab-raster` writes `output.png` and then reads
lines from standard input: `a` rotates by +10 degrees, `d` by -10 degrees,
and each line re-renders the file. `q`, `esc`, an escape character or end of
input stop it.

Ray-trace a triangle mesh from an OBJ file (scaled by 60, lit by two point
lights, 1280x960) and write the image to a PPM file:

```
gfxlab-raytrace path/to/model.obj output.ppm
```

The output defaults to `binary.ppm` and the model to
`models/bunny/bunny.obj`. The OBJ file must hold exactly one mesh; otherwise
the command prints an error and exits with status 1.

Run the design-pattern demos, which print what each participant does:

```
gfxlab-command
gfxlab-mediator
gfxlab-strategy
```

## Using the library

```python
from gfxlab.raytrace.vector import Vector3f
from gfxlab.raytrace.shapes import Sphere
from gfxlab.raytrace.material import Light, Material
from gfxlab.raytrace.scene import Scene
from gfxlab.raytrace.renderer import Renderer

scene = Scene(160, 120)
scene.add(Sphere(Vector3f(0, 0, -10), 2.0, Material(kd=0.6)))
scene.add(Light(Vector3f(-20, 70, 20), Vector3f.filled(1)))
scene.build_bvh()

Renderer().render(scene, "sphere.ppm")
```

The rasterizer works with buffer handles:

```python
from gfxlab.raster.rasterizer import Rasterizer, Buffers, Primitive
from gfxlab.raster.app import get_model_matrix, get_view_matrix, get_projection_matrix

r = Rasterizer(700, 700)
pos_id = r.load_positions([(2, 0, -2), (0, 2, -2), (-2, 0, -2)])
ind_id = r.load_indices([(0, 1, 2)])
r.clear(Buffers.COLOR | Buffers.DEPTH)
r.model = get_model_matrix(30)
r.view = get_view_matrix([0, 0, 5])
r.projection = get_projection_matrix(45, 1, 0.1, 50)
r.draw(pos_id, ind_id, Primitive.TRIANGLE)
pixels = r.frame_buffer()  # one RGB row per pixel
```

## What the package does not do

- There is no window: `gfxlab-raster` only writes image files and takes its
  key presses as lines on standard input.
- The rasterizer draws wireframes only; it does not fill triangles or use the
  depth buffer, and `Primitive.LINE` raises `NotImplementedError`.
- `AreaLight` can sample points, but `Scene.cast_ray` skips area lights when
  shading. Materials have no textures.
- Rendering runs in pure Python, one ray per pixel, and is slow for large
  images or meshes.