import math

import pytest

from scivis.objfile import ObjFile
from scivis.vec import Vec3

TRIANGLE = """\
# a single triangle
v 0 0 0
v 1 0 0
v 0 1 0
f 1 2 3
"""

SQUARE = """\
v -1 -1 0
v 1 -1 0
v 1 1 0
v -1 1 0
f 1 2 3
f 1 3 4
"""


def test_triangle():
    mesh = ObjFile.from_text(TRIANGLE)
    assert mesh.indices == [(0, 1, 2)]
    assert mesh.vertices == [Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0)]
    assert mesh.normals == [Vec3(0, 0, 1)] * 3


def test_normals_are_unit_and_one_per_vertex():
    mesh = ObjFile.from_text(SQUARE)
    assert len(mesh.normals) == len(mesh.vertices) == 4
    for n in mesh.normals:
        assert math.isclose(n.length(), 1.0)
        assert n == Vec3(0, 0, 1)


def test_face_tokens_with_slashes():
    text = TRIANGLE.replace("f 1 2 3", "f 1/1/1 2/2/2 3/3/3")
    assert ObjFile.from_text(text).indices == [(0, 1, 2)]


def test_non_triangle_faces_and_other_lines_skipped():
    text = SQUARE + "f 1 2 3 4\nvt 0.5 0.5\no name\ng\n"
    mesh = ObjFile.from_text(text)
    assert mesh.indices == [(0, 1, 2), (0, 2, 3)]
    assert len(mesh.vertices) == 4


def test_unused_vertex_gets_zero_normal():
    mesh = ObjFile.from_text(TRIANGLE + "v 5 5 5\n")
    assert mesh.normals[3] == Vec3(0, 0, 0)


def test_normalize_centres_and_scales():
    text = "v 2 2 2\nv 6 4 3\nv 4 3 2\nf 1 2 3\n"
    mesh = ObjFile.from_text(text, normalize=True)
    xs, ys, zs = zip(*mesh.vertices)
    extents = [max(c) - min(c) for c in (xs, ys, zs)]
    assert math.isclose(max(extents), 1.0)
    for axis in (xs, ys, zs):
        assert math.isclose(max(axis) + min(axis), 0.0, abs_tol=1e-12)


def test_normalize_preserves_normals():
    plain = ObjFile.from_text(SQUARE)
    scaled = ObjFile.from_text(SQUARE, normalize=True)
    assert scaled.normals == plain.normals
    assert scaled.indices == plain.indices


def test_from_file_matches_from_text(tmp_path):
    path = tmp_path / "mesh.obj"
    path.write_text(SQUARE, encoding="utf-8")
    assert ObjFile.from_file(path) == ObjFile.from_text(SQUARE)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ObjFile.from_file(tmp_path / "absent.obj")


def test_bad_number_raises():
    with pytest.raises(ValueError):
        ObjFile.from_text("v 1 x 2\n")


def test_zero_index_raises():
    with pytest.raises(ValueError):
        ObjFile.from_text(TRIANGLE.replace("f 1 2 3", "f 0 1 2"))


def test_empty_text():
    mesh = ObjFile.from_text("", normalize=True)
    assert (mesh.indices, mesh.vertices, mesh.normals) == ([], [], [])