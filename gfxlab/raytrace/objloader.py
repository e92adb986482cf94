"""Loader for Wavefront OBJ models and their MTL material libraries."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from gfxlab.raytrace.objmath import (
    Vec2,
    Vec3,
    Vertex,
    cross,
    first_token,
    get_element,
    split,
    tail,
    triangulate,
)

PathLike = Union[str, "os.PathLike[str]"]

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_BUMP_TOKENS = ("map_Bump", "map_bump", "bump")


def _to_float(text: str) -> float:
    """Parse the leading number of ``text``, ignoring anything after it."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    return float(match.group())


def _to_int(text: str) -> int:
    """Parse the leading integer of ``text``, ignoring anything after it."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    return int(match.group())


def _vec3(fields: Sequence[str]) -> Vec3:
    return Vec3(_to_float(fields[0]), _to_float(fields[1]), _to_float(fields[2]))


@dataclass
class ObjMaterial:
    """A material read from an MTL library."""

    name: str = ""
    ka: Vec3 = field(default_factory=Vec3)
    kd: Vec3 = field(default_factory=Vec3)
    ks: Vec3 = field(default_factory=Vec3)
    ns: float = 0.0
    ni: float = 0.0
    d: float = 0.0
    illum: int = 0
    map_ka: str = ""
    map_kd: str = ""
    map_ks: str = ""
    map_ns: str = ""
    map_d: str = ""
    map_bump: str = ""


@dataclass
class Mesh:
    """A named list of vertices with the triangle indices into it."""

    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    name: str = ""
    material: Optional[ObjMaterial] = None


def gen_vertices(positions: Sequence[Vec3], tcoords: Sequence[Vec2],
                 normals: Sequence[Vec3], line: str) -> List[Vertex]:
    """Build the vertices of one face line ``f ...`` from the loaded attributes.

    Faces without normals get the cross-product normal of their first three
    vertices.
    """
    vertices: List[Vertex] = []
    no_normal = False
    for corner in split(tail(line), " "):
        parts = split(corner, "/")
        if len(parts) == 1:
            vertices.append(Vertex(position=get_element(positions, parts[0])))
            no_normal = True
        elif len(parts) == 2:
            vertices.append(Vertex(
                position=get_element(positions, parts[0]),
                texture_coordinate=get_element(tcoords, parts[1]),
            ))
            no_normal = True
        elif len(parts) == 3:
            texture = get_element(tcoords, parts[1]) if parts[1] != "" else Vec2()
            vertices.append(Vertex(
                position=get_element(positions, parts[0]),
                normal=get_element(normals, parts[2]),
                texture_coordinate=texture,
            ))

    if no_normal:
        a = vertices[0].position - vertices[1].position
        b = vertices[2].position - vertices[1].position
        normal = cross(a, b)
        vertices = [dataclasses.replace(v, normal=normal) for v in vertices]
    return vertices


def _read_lines(path: str) -> List[str]:
    with open(path, encoding="utf-8", errors="replace") as handle:
        return [line.rstrip("\n") for line in handle]


class Loader:
    """Reads OBJ files into meshes, vertices, indices and materials."""

    def __init__(self) -> None:
        self.loaded_meshes: List[Mesh] = []
        self.loaded_vertices: List[Vertex] = []
        self.loaded_indices: List[int] = []
        self.loaded_materials: List[ObjMaterial] = []

    def load_file(self, path: PathLike) -> bool:
        """Load an ``.obj`` file; return whether anything was loaded.

        Paths without the ``.obj`` suffix and files that cannot be read give
        ``False``.
        """
        path = os.fspath(path)
        if not path.endswith(".obj"):
            return False
        try:
            lines = _read_lines(path)
        except OSError:
            return False

        self.loaded_meshes.clear()
        self.loaded_vertices.clear()
        self.loaded_indices.clear()

        positions: List[Vec3] = []
        tcoords: List[Vec2] = []
        normals: List[Vec3] = []
        vertices: List[Vertex] = []
        indices: List[int] = []
        mesh_mat_names: List[str] = []
        listening = False
        mesh_name = ""

        for line in lines:
            token = first_token(line)

            if token in ("o", "g") or line.startswith("g"):
                named = token in ("o", "g")
                if not listening:
                    listening = True
                    mesh_name = tail(line) if named else "unnamed"
                elif indices and vertices:
                    self.loaded_meshes.append(Mesh(list(vertices), list(indices), mesh_name))
                    vertices.clear()
                    indices.clear()
                    mesh_name = tail(line)
                else:
                    mesh_name = tail(line) if named else "unnamed"

            if token == "v":
                positions.append(_vec3(split(tail(line), " ")))
            elif token == "vt":
                fields = split(tail(line), " ")
                tcoords.append(Vec2(_to_float(fields[0]), _to_float(fields[1])))
            elif token == "vn":
                normals.append(_vec3(split(tail(line), " ")))
            elif token == "f":
                face = gen_vertices(positions, tcoords, normals, line)
                vertices.extend(face)
                self.loaded_vertices.extend(face)
                local_base = len(vertices) - len(face)
                global_base = len(self.loaded_vertices) - len(face)
                for idx in triangulate(face):
                    indices.append(local_base + idx)
                    self.loaded_indices.append(global_base + idx)
            elif token == "usemtl":
                mesh_mat_names.append(tail(line))
                # A material change within a group starts a new mesh.
                if indices and vertices:
                    self.loaded_meshes.append(
                        Mesh(list(vertices), list(indices), f"{mesh_name}_2")
                    )
                    vertices.clear()
                    indices.clear()
            elif token == "mtllib":
                parts = split(path, "/")
                prefix = "".join(p + "/" for p in parts[:-1]) if len(parts) != 1 else ""
                self.load_materials(prefix + tail(line))

        if indices and vertices:
            self.loaded_meshes.append(Mesh(list(vertices), list(indices), mesh_name))

        for mesh, mat_name in zip(self.loaded_meshes, mesh_mat_names):
            match = next((m for m in self.loaded_materials if m.name == mat_name), None)
            if match is not None:
                mesh.material = match

        return bool(self.loaded_meshes or self.loaded_vertices or self.loaded_indices)

    def load_materials(self, path: PathLike) -> bool:
        """Append the materials of an ``.mtl`` file; return whether it was read."""
        path = os.fspath(path)
        if not path.endswith(".mtl"):
            return False
        try:
            lines = _read_lines(path)
        except OSError:
            return False

        material = ObjMaterial()
        listening = False
        for line in lines:
            token = first_token(line)
            if token == "newmtl":
                if listening:
                    self.loaded_materials.append(material)
                    material = ObjMaterial()
                listening = True
                material.name = tail(line) if len(line) > 7 else "none"
            elif token in ("Ka", "Kd", "Ks"):
                fields = split(tail(line), " ")
                if len(fields) != 3:
                    continue
                setattr(material, token.lower(), _vec3(fields))
            elif token == "Ns":
                material.ns = _to_float(tail(line))
            elif token == "Ni":
                material.ni = _to_float(tail(line))
            elif token == "d":
                material.d = _to_float(tail(line))
            elif token == "illum":
                material.illum = _to_int(tail(line))
            elif token in ("map_Ka", "map_Kd", "map_Ks", "map_Ns", "map_d"):
                setattr(material, token.lower(), tail(line))
            elif token in _BUMP_TOKENS:
                material.map_bump = tail(line)

        self.loaded_materials.append(material)
        return True