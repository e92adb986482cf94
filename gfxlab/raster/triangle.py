"""A triangle with per-vertex position, colour, texture coordinate and normal."""

from __future__ import annotations

from typing import List

import numpy as np


def _zeros(n: int) -> List[np.ndarray]:
    return [np.zeros(n, dtype=float) for _ in range(3)]


class Triangle:
    """Three vertices in counter-clockwise order with their attributes."""

    def __init__(self) -> None:
        self.v: List[np.ndarray] = _zeros(3)
        self.color: List[np.ndarray] = _zeros(3)
        self.tex_coords: List[np.ndarray] = _zeros(2)
        self.normal: List[np.ndarray] = _zeros(3)

    def a(self) -> np.ndarray:
        return self.v[0]

    def b(self) -> np.ndarray:
        return self.v[1]

    def c(self) -> np.ndarray:
        return self.v[2]

    def set_vertex(self, ind: int, ver) -> None:
        """Set the coordinates of vertex ``ind``."""
        self.v[ind] = np.array(ver, dtype=float)[:3]

    def set_normal(self, ind: int, n) -> None:
        """Set the normal of vertex ``ind``."""
        self.normal[ind] = np.array(n, dtype=float)[:3]

    def set_color(self, ind: int, r: float, g: float, b: float) -> None:
        """Set the colour of vertex ``ind`` from 0..255 components."""
        if any(c < 0.0 or c > 255.0 for c in (r, g, b)):
            raise ValueError("Invalid color values")
        self.color[ind] = np.array([r, g, b], dtype=float) / 255.0

    def set_tex_coord(self, ind: int, s: float, t: float) -> None:
        """Set the texture coordinate of vertex ``ind``."""
        self.tex_coords[ind] = np.array([s, t], dtype=float)

    def to_vector4(self) -> List[np.ndarray]:
        """The vertices in homogeneous coordinates with ``w = 1``."""
        return [np.append(vec, 1.0) for vec in self.v]