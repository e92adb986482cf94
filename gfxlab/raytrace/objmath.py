"""Vector types, geometry helpers and string scanning used by the OBJ loader."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

_WHITESPACE = " \t"
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


@dataclass(frozen=True)
class Vec2:
    """A two-component vector holding texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, r: float) -> "Vec2":
        return Vec2(self.x * r, self.y * r)

    __rmul__ = __mul__


@dataclass(frozen=True)
class Vec3:
    """A three-component vector holding positions and normals."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, r: float) -> "Vec3":
        return Vec3(self.x * r, self.y * r, self.z * r)

    __rmul__ = __mul__

    def __truediv__(self, r: float) -> "Vec3":
        return Vec3(self.x / r, self.y / r, self.z / r)


@dataclass(frozen=True)
class Vertex:
    """A model vertex: position, normal and texture coordinate."""

    position: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    texture_coordinate: Vec2 = field(default_factory=Vec2)


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product."""
    return Vec3(a.y * b.z - a.z * b.y, a.z * b.x - a.x * b.z, a.x * b.y - a.y * b.x)


def magnitude(v: Vec3) -> float:
    """Euclidean length."""
    return math.sqrt(v.x ** 2 + v.y ** 2 + v.z ** 2)


def dot(a: Vec3, b: Vec3) -> float:
    """Dot product."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def angle_between(a: Vec3, b: Vec3) -> float:
    """Angle in radians between two vectors; NaN where it is undefined."""
    denom = magnitude(a) * magnitude(b)
    if denom == 0:
        return math.nan
    c = dot(a, b) / denom
    if not -1.0 <= c <= 1.0:
        return math.nan
    return math.acos(c)


def project(a: Vec3, b: Vec3) -> Vec3:
    """Projection of ``a`` onto the direction of ``b``; NaN for a zero ``b``."""
    length = magnitude(b)
    if length == 0:
        return Vec3(math.nan, math.nan, math.nan)
    bn = b / length
    return bn * dot(a, bn)


def same_side(p1: Vec3, p2: Vec3, a: Vec3, b: Vec3) -> bool:
    """Whether ``p1`` and ``p2`` lie on the same side of the line ``ab``."""
    cp1 = cross(b - a, p1 - a)
    cp2 = cross(b - a, p2 - a)
    return dot(cp1, cp2) >= 0


def triangle_normal(t1: Vec3, t2: Vec3, t3: Vec3) -> Vec3:
    """Unnormalised cross-product normal of a triangle."""
    return cross(t2 - t1, t3 - t1)


def in_triangle(point: Vec3, tri1: Vec3, tri2: Vec3, tri3: Vec3) -> bool:
    """Whether ``point`` lies within the triangle ``tri1 tri2 tri3``."""
    within_prism = (
        same_side(point, tri1, tri2, tri3)
        and same_side(point, tri2, tri1, tri3)
        and same_side(point, tri3, tri1, tri2)
    )
    if not within_prism:
        return False
    n = triangle_normal(tri1, tri2, tri3)
    return magnitude(project(point, n)) == 0


def split(text: str, token: str) -> List[str]:
    """Split ``text`` at ``token``; consecutive tokens yield empty fields."""
    out: List[str] = []
    temp = ""
    size = len(token)
    pos = 0
    while pos < len(text):
        piece = text[pos:pos + size]
        if piece == token:
            if temp:
                out.append(temp)
                temp = ""
                pos += size - 1
            else:
                out.append("")
        elif pos + size >= len(text):
            out.append(temp + piece)
            break
        else:
            temp += text[pos]
        pos += 1
    return out


def _first_not_of(text: str, start: int) -> Optional[int]:
    return next((k for k in range(start, len(text)) if text[k] not in _WHITESPACE), None)


def _first_of(text: str, start: int) -> Optional[int]:
    return next((k for k in range(start, len(text)) if text[k] in _WHITESPACE), None)


def tail(text: str) -> str:
    """Everything after the first token, with surrounding blanks removed."""
    token_start = _first_not_of(text, 0)
    if token_start is None:
        return ""
    space_start = _first_of(text, token_start)
    if space_start is None:
        return ""
    tail_start = _first_not_of(text, space_start)
    if tail_start is None:
        return ""
    return text[tail_start:].rstrip(_WHITESPACE)


def first_token(text: str) -> str:
    """The first blank-separated token of ``text``."""
    token_start = _first_not_of(text, 0)
    if token_start is None:
        return ""
    token_end = _first_of(text, token_start)
    if token_end is None:
        return text[token_start:]
    return text[token_start:token_end]


def get_element(elements: Sequence[T], index: str) -> T:
    """Element at an OBJ index: 1-based when positive, from the end when negative."""
    match = _INT_PREFIX.match(index)
    if match is None:
        raise ValueError(f"invalid index: {index!r}")
    idx = int(match.group())
    idx = len(elements) + idx if idx < 0 else idx - 1
    if not 0 <= idx < len(elements):
        raise IndexError(f"index {index!r} out of range")
    return elements[idx]


def _indices_matching(vertices: Sequence[Vertex], *positions: Vec3) -> List[int]:
    return [
        j
        for j, vert in enumerate(vertices)
        for p in positions
        if vert.position == p
    ]


def triangulate(vertices: Sequence[Vertex]) -> List[int]:
    """Split a polygon into triangles by ear clipping; return vertex indices."""
    if len(vertices) < 3:
        return []
    if len(vertices) == 3:
        return [0, 1, 2]

    indices: List[int] = []
    remaining = list(vertices)
    i = 0
    while i < len(remaining):
        prev = remaining[i - 1].position
        cur = remaining[i].position
        nxt = remaining[(i + 1) % len(remaining)].position

        if len(remaining) == 3:
            indices.extend(_indices_matching(vertices[:3], cur, prev, nxt))
            break
        if len(remaining) == 4:
            indices.extend(_indices_matching(vertices, cur, prev, nxt))
            other = next(
                (v.position for v in remaining if v.position not in (cur, prev, nxt)),
                Vec3(),
            )
            indices.extend(_indices_matching(vertices, prev, nxt, other))
            break

        contains_other = any(
            in_triangle(v.position, prev, cur, nxt)
            and v.position not in (prev, cur, nxt)
            for v in vertices
        )
        if contains_other:
            i += 1
            continue

        indices.extend(_indices_matching(vertices, cur, prev, nxt))
        victim = next(k for k, v in enumerate(remaining) if v.position == cur)
        del remaining[victim]
        i = 0
    return indices