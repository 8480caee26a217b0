"""Triangle meshes for simple shapes with normals, tangents and texture coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .vec import Vec3


@dataclass
class Tesselation:
    """Flat attribute arrays (3 floats per vertex, 2 per texture coordinate) and indices."""

    vertices: list[float] = field(default_factory=list)
    normals: list[float] = field(default_factory=list)
    tangents: list[float] = field(default_factory=list)
    tex_coords: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @staticmethod
    def gen_sphere(center: Vec3, radius: float, sector_count: int,
                   stack_count: int) -> Tesselation:
        """UV sphere with ``sector_count`` slices and ``stack_count`` stacks."""
        tess = Tesselation()
        length_inv = 1.0 / radius
        sector_step = 2.0 * math.pi / sector_count
        stack_step = math.pi / stack_count

        for i in range(stack_count + 1):
            stack_angle = math.pi / 2.0 - i * stack_step
            xy = radius * math.cos(stack_angle)
            z = radius * math.sin(stack_angle)

            for j in range(sector_count + 1):
                sector_angle = j * sector_step
                x = xy * math.cos(sector_angle)
                y = xy * math.sin(sector_angle)
                tess.vertices += (center.x + x, center.y + y, center.z + z)

                n = Vec3(x * length_inv, y * length_inv, z * length_inv)
                tess.normals += n

                next_angle = (j + 1) * sector_step
                nx = xy * math.cos(next_angle)
                ny = xy * math.sin(next_angle)
                t = (Vec3(nx, ny, z) - Vec3(x, y, z)).normalize()
                b = n.cross(t)
                tess.tangents += b.cross(n)

                tess.tex_coords += (j / sector_count, 1.0 - i / stack_count)

        for i in range(stack_count):
            k1 = i * (sector_count + 1)
            k2 = k1 + sector_count + 1
            for _ in range(sector_count):
                if i != 0:
                    tess.indices += (k1, k2, k1 + 1)
                if i != stack_count - 1:
                    tess.indices += (k1 + 1, k2, k2 + 1)
                k1 += 1
                k2 += 1

        return tess

    @staticmethod
    def gen_rectangle(center: Vec3, width: float, height: float) -> Tesselation:
        """Axis-aligned rectangle in the xy plane around ``center``."""
        u = Vec3(width / 2.0, 0.0, 0.0)
        v = Vec3(0.0, height / 2.0, 0.0)
        return Tesselation.gen_quad(center - u - v, center + u - v,
                                    center + u + v, center - u + v)

    @staticmethod
    def gen_quad(a: Vec3, b: Vec3, c: Vec3, d: Vec3) -> Tesselation:
        """Quad with corners a, b, c, d in counter-clockwise order.

        The normal is (b - a) x (c - a) and the tangent runs from a to b.
        """
        u = b - a
        v = c - a
        normal = u.cross(v).normalize()
        tangent = u.normalize()
        return Tesselation(
            vertices=[*a, *b, *c, *d],
            normals=[*normal] * 4,
            tangents=[*tangent] * 4,
            tex_coords=[0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0],
            indices=[0, 1, 2, 0, 2, 3],
        )

    @staticmethod
    def gen_brick(center: Vec3, size: Vec3,
                  tex_scale: Vec3 = Vec3(1.0, 1.0, 1.0)) -> Tesselation:
        """Axis-aligned box with separate vertices per face."""
        e = center - size / 2.0
        c = center + size / 2.0

        corner_a = Vec3(e.x, e.y, c.z)
        corner_b = Vec3(c.x, e.y, c.z)
        corner_d = Vec3(e.x, c.y, c.z)
        corner_f = Vec3(c.x, e.y, e.z)
        corner_g = Vec3(c.x, c.y, e.z)
        corner_h = Vec3(e.x, c.y, e.z)

        faces = [
            (corner_a, corner_b, c, corner_d),                 # front
            (corner_f, e, corner_h, corner_g),                 # back
            (e, corner_a, corner_d, corner_h),                 # left
            (corner_b, corner_f, corner_g, c),                 # right
            (corner_d, c, corner_g, corner_h),                 # top
            (corner_b, corner_a, e, corner_f),                 # bottom
        ]
        face_normals = [
            (0.0, 0.0, 1.0), (0.0, 0.0, -1.0), (-1.0, 0.0, 0.0),
            (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, -1.0, 0.0),
        ]
        face_tangents = [
            (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 0.0, 1.0),
            (0.0, 0.0, -1.0), (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0),
        ]
        face_scales = [
            (tex_scale.x, tex_scale.y), (tex_scale.x, tex_scale.y),
            (tex_scale.z, tex_scale.y), (tex_scale.z, tex_scale.y),
            (tex_scale.x, tex_scale.z), (tex_scale.x, tex_scale.z),
        ]

        tess = Tesselation()
        for face, (corners, normal, tangent, (su, sv)) in enumerate(
                zip(faces, face_normals, face_tangents, face_scales)):
            for corner in corners:
                tess.vertices += corner
            tess.normals += normal * 4
            tess.tangents += tangent * 4
            tess.tex_coords += (0.0, 0.0, su, 0.0, su, sv, 0.0, sv)
            base = face * 4
            tess.indices += (base, base + 1, base + 2, base, base + 2, base + 3)
        return tess

    @staticmethod
    def gen_torus(center: Vec3, major_radius: float, minor_radius: float,
                  major_steps: int = 200, minor_steps: int = 50) -> Tesselation:
        """Torus around ``center`` lying in a plane with normal (0, 0, 1)."""
        tess = Tesselation()

        for x in range(major_steps + 1):
            phi = (2.0 * math.pi * x) / major_steps
            for y in range(minor_steps + 1):
                theta = (2.0 * math.pi * y) / minor_steps
                ring = major_radius + minor_radius * math.cos(theta)
                vertex = Vec3(ring * math.cos(phi), ring * math.sin(phi),
                              minor_radius * math.sin(theta))
                ring_center = Vec3(major_radius * math.cos(phi),
                                   major_radius * math.sin(phi), 0.0)
                normal = (vertex - ring_center).normalize()
                tangent = Vec3(-major_radius * math.sin(phi),
                               major_radius * math.cos(phi), 0.0)

                tess.vertices += vertex + center
                tess.normals += normal
                tess.tangents += tangent
                tess.tex_coords += (x / major_steps, y / minor_steps)

        stride = minor_steps + 1
        for x in range(major_steps):
            for y in range(minor_steps):
                p00 = x * stride + y
                p10 = (x + 1) * stride + y
                p11 = (x + 1) * stride + y + 1
                p01 = x * stride + y + 1
                tess.indices += (p00, p10, p11, p00, p11, p01)

        return tess

    def unpack(self) -> Tesselation:
        """Copy with one vertex per index, so that no vertex is shared."""
        result = Tesselation()
        for i, index in enumerate(self.indices):
            result.indices.append(i)
            result.vertices += self.vertices[index * 3:index * 3 + 3]
            result.normals += self.normals[index * 3:index * 3 + 3]
            result.tangents += self.tangents[index * 3:index * 3 + 3]
            result.tex_coords += self.tex_coords[index * 2:index * 2 + 2]
        return result