"""A minimal wireframe rasterizer with colour and depth buffers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from gfxlab.raster.triangle import Triangle


class Buffers(enum.Flag):
    COLOR = 1
    DEPTH = 2


class Primitive(enum.Enum):
    LINE = enum.auto()
    TRIANGLE = enum.auto()


@dataclass(frozen=True)
class PosBufId:
    """Handle of a loaded position buffer."""

    pos_id: int = 0


@dataclass(frozen=True)
class IndBufId:
    """Handle of a loaded index buffer."""

    ind_id: int = 0


LINE_COLOR = np.array([255.0, 255.0, 255.0])


def to_vec4(v3, w: float = 1.0) -> np.ndarray:
    """Extend a 3-vector to homogeneous coordinates."""
    return np.array([v3[0], v3[1], v3[2], w], dtype=float)


class Rasterizer:
    """Draws indexed triangles as wireframes into a ``width * height`` frame."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.model = np.identity(4)
        self.view = np.identity(4)
        self.projection = np.identity(4)
        self._pos_buf: Dict[int, List[np.ndarray]] = {}
        self._ind_buf: Dict[int, List[np.ndarray]] = {}
        self._frame_buf = np.zeros((width * height, 3), dtype=float)
        self._depth_buf = np.zeros(width * height, dtype=float)
        self._next_id = 0

    def _get_next_id(self) -> int:
        ident = self._next_id
        self._next_id += 1
        return ident

    def load_positions(self, positions: Sequence) -> PosBufId:
        """Store vertex positions and return their handle."""
        ident = self._get_next_id()
        self._pos_buf[ident] = [np.array(p, dtype=float) for p in positions]
        return PosBufId(ident)

    def load_indices(self, indices: Sequence) -> IndBufId:
        """Store triangle index triples and return their handle."""
        ident = self._get_next_id()
        self._ind_buf[ident] = [np.array(i, dtype=int) for i in indices]
        return IndBufId(ident)

    def frame_buffer(self) -> np.ndarray:
        """The colour buffer, one RGB row per pixel."""
        return self._frame_buf

    def depth_buffer(self) -> np.ndarray:
        """The depth buffer, one value per pixel."""
        return self._depth_buf

    def _index(self, x: int, y: int) -> int:
        return (self.height - y) * self.width + x

    def set_pixel(self, point, color) -> None:
        """Colour the pixel at ``point``; points off the screen are ignored."""
        px, py = point[0], point[1]
        if px < 0 or px >= self.width or py < 0 or py >= self.height:
            return
        ind = int((self.height - py) * self.width + px)
        if ind >= len(self._frame_buf):
            return
        self._frame_buf[ind] = color

    def clear(self, buff: Buffers) -> None:
        """Reset the colour buffer to black and/or the depth buffer to infinity."""
        if buff & Buffers.COLOR:
            self._frame_buf.fill(0.0)
        if buff & Buffers.DEPTH:
            self._depth_buf.fill(np.inf)

    def draw(self, pos_buffer: PosBufId, ind_buffer: IndBufId, primitive: Primitive) -> None:
        """Transform and draw every indexed triangle as a wireframe."""
        if primitive is not Primitive.TRIANGLE:
            raise NotImplementedError(
                "Drawing primitives other than triangle is not implemented yet!"
            )
        buf = self._pos_buf[pos_buffer.pos_id]
        ind = self._ind_buf[ind_buffer.ind_id]

        f1 = (100 - 0.1) / 2.0
        f2 = (100 + 0.1) / 2.0

        mvp = self.projection @ self.view @ self.model
        for tri_ind in ind:
            t = Triangle()
            verts = [mvp @ to_vec4(buf[k], 1.0) for k in tri_ind]
            for k, vert in enumerate(verts):
                vert = vert / vert[3]
                vert[0] = 0.5 * self.width * (vert[0] + 1.0)
                vert[1] = 0.5 * self.height * (vert[1] + 1.0)
                vert[2] = vert[2] * f1 + f2
                t.set_vertex(k, vert[:3])

            t.set_color(0, 255.0, 0.0, 0.0)
            t.set_color(1, 0.0, 255.0, 0.0)
            t.set_color(2, 0.0, 0.0, 255.0)

            self.rasterize_wireframe(t)

    def rasterize_wireframe(self, t: Triangle) -> None:
        """Draw the three edges of ``t``."""
        self.draw_line(t.c(), t.a())
        self.draw_line(t.c(), t.b())
        self.draw_line(t.b(), t.a())

    def draw_line(self, begin, end) -> None:
        """Draw a white line with Bresenham's algorithm."""
        x1, y1 = begin[0], begin[1]
        x2, y2 = end[0], end[1]

        dx = int(x2 - x1)
        dy = int(y2 - y1)
        dx1 = abs(dx)
        dy1 = abs(dy)
        px = 2 * dy1 - dx1
        py = 2 * dx1 - dy1
        same_sign = (dx < 0 and dy < 0) or (dx > 0 and dy > 0)

        if dy1 <= dx1:
            if dx >= 0:
                x, y, xe = int(x1), int(y1), int(x2)
            else:
                x, y, xe = int(x2), int(y2), int(x1)
            self.set_pixel((x, y, 1.0), LINE_COLOR)
            while x < xe:
                x += 1
                if px < 0:
                    px += 2 * dy1
                else:
                    y += 1 if same_sign else -1
                    px += 2 * (dy1 - dx1)
                self.set_pixel((x, y, 1.0), LINE_COLOR)
        else:
            if dy >= 0:
                x, y, ye = int(x1), int(y1), int(y2)
            else:
                x, y, ye = int(x2), int(y2), int(y1)
            self.set_pixel((x, y, 1.0), LINE_COLOR)
            while y < ye:
                y += 1
                if py <= 0:
                    py += 2 * dx1
                else:
                    x += 1 if same_sign else -1
                    py += 2 * (dx1 - dy1)
                self.set_pixel((x, y, 1.0), LINE_COLOR)