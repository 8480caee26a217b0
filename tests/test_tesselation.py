import math

import pytest

from scivis.tesselation import Tesselation
from scivis.vec import Vec3


def triples(values):
    return [Vec3(*values[i:i + 3]) for i in range(0, len(values), 3)]


def test_quad_indices_and_normal():
    quad = Tesselation.gen_quad(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(1, 1, 0), Vec3(0, 1, 0))
    assert quad.indices == [0, 1, 2, 0, 2, 3]
    for n in triples(quad.normals):
        assert tuple(n) == pytest.approx((0.0, 0.0, 1.0))
    assert len(quad.tex_coords) == 8


def test_quad_keeps_corners_and_tangent():
    a, b, c, d = Vec3(1, 2, 3), Vec3(3, 2, 3), Vec3(3, 5, 3), Vec3(1, 5, 3)
    quad = Tesselation.gen_quad(a, b, c, d)
    assert triples(quad.vertices) == [a, b, c, d]
    for t in triples(quad.tangents):
        assert tuple(t) == pytest.approx(tuple((b - a).normalize()))


def test_rectangle_matches_quad_from_corners():
    center = Vec3(1, 1, 2)
    rect = Tesselation.gen_rectangle(center, 4.0, 2.0)
    u = Vec3(2.0, 0, 0)
    v = Vec3(0, 1.0, 0)
    quad = Tesselation.gen_quad(center - u - v, center + u - v, center + u + v, center - u + v)
    assert rect == quad


def test_sphere_counts():
    sectors, stacks = 8, 5
    sphere = Tesselation.gen_sphere(Vec3(0, 0, 0), 1.0, sectors, stacks)
    vertex_count = (sectors + 1) * (stacks + 1)
    assert len(sphere.vertices) == vertex_count * 3
    assert len(sphere.normals) == vertex_count * 3
    assert len(sphere.tangents) == vertex_count * 3
    assert len(sphere.tex_coords) == vertex_count * 2
    assert len(sphere.indices) == sectors * (2 * stacks - 2) * 3
    assert max(sphere.indices) < vertex_count


def test_sphere_geometry():
    center = Vec3(1, -2, 3)
    radius = 2.5
    sphere = Tesselation.gen_sphere(center, radius, 12, 6)
    for p, n, t in zip(triples(sphere.vertices), triples(sphere.normals),
                       triples(sphere.tangents)):
        assert (p - center).length() == pytest.approx(radius)
        assert n.length() == pytest.approx(1.0)
        assert tuple(n * radius) == pytest.approx(tuple(p - center), abs=1e-9)
        assert n.dot(t) == pytest.approx(0.0, abs=1e-9)


def test_sphere_tex_coords_in_unit_square():
    sphere = Tesselation.gen_sphere(Vec3(0, 0, 0), 1.0, 6, 4)
    assert all(0.0 <= c <= 1.0 for c in sphere.tex_coords)
    assert sphere.tex_coords[:2] == [0.0, 1.0]


def test_brick_counts_and_bounds():
    center = Vec3(1, 2, 3)
    size = Vec3(2, 4, 6)
    brick = Tesselation.gen_brick(center, size)
    assert len(brick.vertices) == 24 * 3
    assert len(brick.indices) == 36
    lo = center - size / 2.0
    hi = center + size / 2.0
    for p in triples(brick.vertices):
        assert lo.x <= p.x <= hi.x
        assert lo.y <= p.y <= hi.y
        assert lo.z <= p.z <= hi.z


def test_brick_face_normals_point_outward():
    center = Vec3(0, 0, 0)
    brick = Tesselation.gen_brick(center, Vec3(2, 2, 2))
    for p, n in zip(triples(brick.vertices), triples(brick.normals)):
        assert n.dot(p - center) > 0
        assert n.length() == pytest.approx(1.0)


def test_brick_tex_scale():
    scale = Vec3(2, 3, 5)
    brick = Tesselation.gen_brick(Vec3(0, 0, 0), Vec3(1, 1, 1), scale)
    front = brick.tex_coords[:8]
    assert max(front[0::2]) == scale.x
    assert max(front[1::2]) == scale.y


def test_torus_counts_and_geometry():
    center = Vec3(0.5, 0.5, 1.0)
    major, minor = 3.0, 1.0
    torus = Tesselation.gen_torus(center, major, minor, 16, 8)
    assert len(torus.vertices) == 17 * 9 * 3
    assert len(torus.indices) == 16 * 8 * 6
    assert max(torus.indices) < 17 * 9
    for p in triples(torus.vertices):
        q = p - center
        ring = math.hypot(q.x, q.y) - major
        assert math.hypot(ring, q.z) == pytest.approx(minor)


def test_torus_default_steps():
    torus = Tesselation.gen_torus(Vec3(0, 0, 0), 2.0, 0.5)
    assert len(torus.tex_coords) == 201 * 51 * 2


def test_unpack_expands_indices():
    sphere = Tesselation.gen_sphere(Vec3(0, 0, 0), 1.0, 4, 3)
    flat = sphere.unpack()
    assert flat.indices == list(range(len(sphere.indices)))
    assert len(flat.vertices) == len(sphere.indices) * 3
    assert len(flat.tex_coords) == len(sphere.indices) * 2
    original = triples(sphere.vertices)
    for i, index in enumerate(sphere.indices):
        assert triples(flat.vertices)[i] == original[index]
        assert flat.tex_coords[i * 2:i * 2 + 2] == sphere.tex_coords[index * 2:index * 2 + 2]