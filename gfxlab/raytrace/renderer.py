"""Render a scene to a binary PPM image, and a command that renders a model."""

from __future__ import annotations

import math
import os
import sys
import time
from typing import IO, Optional, Sequence, Union

from gfxlab.raytrace.material import Light
from gfxlab.raytrace.ray import Ray
from gfxlab.raytrace.scene import Scene
from gfxlab.raytrace.vector import M_PI, Vector3f, clamp, normalize, update_progress

PathLike = Union[str, "os.PathLike[str]"]
DEFAULT_MODEL = os.path.join("models", "bunny", "bunny.obj")


def deg2rad(deg: float) -> float:
    """Degrees to radians."""
    return deg * M_PI / 180.0


def write_ppm(path: PathLike, width: int, height: int,
              framebuffer: Sequence[Vector3f]) -> None:
    """Write ``framebuffer`` as a binary PPM; components are clamped to [0, 1]."""
    data = bytearray(f"P6\n{width} {height}\n255\n".encode("ascii"))
    for pixel in framebuffer[:width * height]:
        data.extend(int(255 * clamp(0, 1, c)) for c in pixel)
    with open(path, "wb") as handle:
        handle.write(data)


class Renderer:
    """Casts one primary ray per pixel from a fixed eye position."""

    def __init__(self, eye_pos: Vector3f = Vector3f(-1, 5, 10),
                 progress: Optional[IO[str]] = None):
        self.eye_pos = eye_pos
        self.progress = progress

    def render(self, scene: Scene, path: PathLike = "binary.ppm") -> None:
        """Render ``scene`` and save the image to ``path``."""
        scale = math.tan(deg2rad(scene.fov * 0.5))
        aspect = scene.width / scene.height
        framebuffer = []
        for j in range(scene.height):
            y = (1 - 2 * (j + 0.5) / scene.height) * scale
            for i in range(scene.width):
                x = (2 * (i + 0.5) / scene.width - 1) * aspect * scale
                direction = normalize(Vector3f(x, y, -1))
                framebuffer.append(scene.cast_ray(Ray(self.eye_pos, direction), 0))
            update_progress(j / scene.height, self.progress)
        update_progress(1.0, self.progress)
        write_ppm(path, scene.width, scene.height, framebuffer)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render an OBJ model lit by two lights: ``[model.obj [output.ppm]]``."""
    from gfxlab.raytrace.mesh import MeshTriangle

    args = list(sys.argv[1:] if argv is None else argv)
    model = args[0] if args else DEFAULT_MODEL
    output = args[1] if len(args) > 1 else "binary.ppm"

    scene = Scene(1280, 960)
    try:
        mesh = MeshTriangle(model)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    scene.add(mesh)
    scene.add(Light(Vector3f(-20, 70, 20), Vector3f.filled(1)))
    scene.add(Light(Vector3f(20, 70, 20), Vector3f.filled(1)))
    scene.build_bvh()

    start = time.monotonic()
    Renderer().render(scene, output)
    elapsed = time.monotonic() - start

    print("Render complete: ")
    print(f"Time taken: {int(elapsed // 3600)} hours")
    print(f"          : {int(elapsed // 60)} minutes")
    print(f"          : {int(elapsed)} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())