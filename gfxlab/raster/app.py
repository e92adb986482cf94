"""Draw a rotatable wireframe triangle and save it as an image."""

from __future__ import annotations

import math
import sys
from typing import Optional, Sequence

import numpy as np
from PIL import Image

from gfxlab.raster.rasterizer import Buffers, Primitive, Rasterizer

MY_PI = 3.1415926
SIZE = 700
ESCAPE_KEYS = {"\x1b", "esc", "q"}


def get_view_matrix(eye_pos) -> np.ndarray:
    """Matrix moving the camera at ``eye_pos`` to the origin."""
    translate = np.identity(4)
    translate[:3, 3] = -np.asarray(eye_pos, dtype=float)
    return translate @ np.identity(4)


def get_model_matrix(rotation_angle: float) -> np.ndarray:
    """Rotation about the Z axis by ``rotation_angle`` degrees."""
    rad = rotation_angle / 180.0 * MY_PI
    c, s = math.cos(rad), math.sin(rad)
    model = np.identity(4)
    model[0, 0], model[0, 1] = c, -s
    model[1, 0], model[1, 1] = s, c
    return model


def get_projection_matrix(eye_fov: float, aspect_ratio: float,
                          z_near: float, z_far: float) -> np.ndarray:
    """Perspective projection looking down -Z; ``eye_fov`` in degrees."""
    n = -z_near
    f = -z_far
    top = math.tan(eye_fov / 2.0 / 180.0 * MY_PI) * abs(n)
    right = top * aspect_ratio

    persp_to_ortho = np.array([
        [n, 0, 0, 0],
        [0, n, 0, 0],
        [0, 0, n + f, -n * f],
        [0, 0, 1, 0],
    ], dtype=float)
    scale = np.diag([1.0 / right, 1.0 / top, 2.0 / (n - f), 1.0])
    translate = np.identity(4)
    translate[2, 3] = -(n + f) / 2.0
    return scale @ translate @ persp_to_ortho


def render_image(angle: float) -> Rasterizer:
    """Render the sample triangle rotated by ``angle`` degrees."""
    r = Rasterizer(SIZE, SIZE)
    eye_pos = [0.0, 0.0, 5.0]
    pos_id = r.load_positions([[2, 0, -2], [0, 2, -2], [-2, 0, -2]])
    ind_id = r.load_indices([[0, 1, 2]])

    r.clear(Buffers.COLOR | Buffers.DEPTH)
    r.model = get_model_matrix(angle)
    r.view = get_view_matrix(eye_pos)
    r.projection = get_projection_matrix(45, 1, 0.1, 50)
    r.draw(pos_id, ind_id, Primitive.TRIANGLE)
    return r


def save_image(rasterizer: Rasterizer, filename: str) -> None:
    """Write the frame buffer, stored in BGR order, to an image file."""
    pixels = rasterizer.frame_buffer().reshape(rasterizer.height, rasterizer.width, 3)
    data = np.clip(np.rint(pixels), 0, 255).astype(np.uint8)
    Image.fromarray(np.ascontiguousarray(data[..., ::-1]), "RGB").save(filename)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render once to a file, or interactively re-render on 'a'/'d' key lines."""
    args = list(sys.argv[1:] if argv is None else argv)
    angle = 0.0
    filename = "output.png"

    if len(args) >= 2:
        angle = float(args[1])
        if len(args) != 3:
            return 0
        filename = args[2]
        save_image(render_image(angle), filename)
        return 0

    frame_count = 0
    while True:
        save_image(render_image(angle), filename)
        print(f"frame count: {frame_count}")
        frame_count += 1
        line = sys.stdin.readline()
        if not line:
            break
        key = line.strip()
        if key in ESCAPE_KEYS:
            break
        if key == "a":
            angle += 10
        elif key == "d":
            angle -= 10
    return 0


if __name__ == "__main__":
    raise SystemExit(main())