"""Reader for triangle meshes in the Wavefront OBJ text format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import reduce
from os import PathLike

from .vec import Vec3

_INDEX_RE = re.compile(r"\+?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_index(token: str) -> int:
    """Zero-based index from the leading number of a face token like ``3/1/2``."""
    match = _INDEX_RE.match(token)
    if match is None:
        raise ValueError(f"invalid face index {token!r}")
    index = int(match.group()) - 1
    if index < 0:
        raise ValueError(f"face index {token!r} must be positive")
    return index


def _parse_float(token: str) -> float:
    match = _FLOAT_RE.match(token)
    if match is None:
        raise ValueError(f"invalid number {token!r}")
    return float(match.group())


def _parse_vec3(tokens: list[str]) -> Vec3:
    return Vec3(*map(_parse_float, tokens))


@dataclass
class ObjFile:
    """Triangles, vertex positions and per-vertex unit normals of a mesh."""

    indices: list[tuple[int, int, int]] = field(default_factory=list)
    vertices: list[Vec3] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)

    @staticmethod
    def from_file(path: str | PathLike, normalize: bool = False) -> ObjFile:
        """Read a mesh from an OBJ file."""
        with open(path, encoding="utf-8") as f:
            return ObjFile.from_text(f.read(), normalize)

    @staticmethod
    def from_text(text: str, normalize: bool = False) -> ObjFile:
        """Parse OBJ text.

        Only ``v``, ``vn`` and triangular ``f`` lines are used; other lines are
        skipped. With ``normalize`` the mesh is centred on the origin and scaled
        so that its largest extent is 1. Vertex normals are the normalised sum of
        any normals read and the normals of the adjacent faces.
        """
        indices: list[tuple[int, int, int]] = []
        vertices: list[Vec3] = []
        read_normals: list[Vec3] = []

        for raw in text.splitlines():
            line = raw.strip()
            if len(line) < 2:
                continue
            if line[0] == "f":
                tokens = line[1:].split()
                if len(tokens) == 3:
                    a, b, c = map(_parse_index, tokens)
                    indices.append((a, b, c))
            elif line.startswith("vn"):
                tokens = line[2:].split()
                if len(tokens) == 3:
                    read_normals.append(_parse_vec3(tokens))
            elif line[0] == "v" and line[1].isspace():
                tokens = line[1:].split()
                if len(tokens) == 3:
                    vertices.append(_parse_vec3(tokens))

        if normalize and vertices:
            lo = reduce(Vec3.minimum, vertices)
            hi = reduce(Vec3.maximum, vertices)
            center = (hi + lo) / 2.0
            max_size = max(hi - lo)
            vertices = [(v - center) / max_size for v in vertices]

        count = len(vertices)
        normals = (read_normals + [Vec3()] * count)[:count]
        for a, b, c in indices:
            va, vb, vc = vertices[a], vertices[b], vertices[c]
            # each face contributes its normal three times, once per corner pass
            face = (vb - va).cross(vc - va) * 3
            normals[a] = normals[a] + face
            normals[b] = normals[b] + face
            normals[c] = normals[c] + face

        return ObjFile(
            indices=indices,
            vertices=vertices,
            normals=[n.normalize() for n in normals],
        )