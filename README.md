# scivis

Small, dependency-free building blocks for visualization code, written in
plain Python.

- `scivis.vec`: immutable `Vec2`, `Vec3` and `Vec4` with component-wise
  arithmetic (with other vectors and with scalars), `length`, `sqlength`,
  `normalize` and `clamp`. `Vec3` adds `dot`, `cross`, `reflect`, `refract`
  (returns `None` on total internal reflection), `minimum`, `maximum` and
  random sampling (`random`, `random_point_in_sphere`,
  `random_point_in_hemisphere`, `random_point_in_disc`,
  `random_unit_vector`). `Vec4` adds `dot` and `vec3`.
- `scivis.matrix`: row-major `Mat3` and `Mat4` with `identity`, `scaling`,
  `translation` (4x4), `rotation_x/y/z`, `rotation_axis` (4x4), `transpose`,
  `det` and `inverse`; `Mat4` also offers `perspective`, `frustum`, `ortho`,
  `look_at`, `mirror` and `stereo_look_at_and_projection`, which returns a
  `StereoMatrices`. Matrices multiply with `*` (matrix, vector or scalar).
  `Quaternion.compute_rotation` gives the rotation as a `Mat4`.
- `scivis.color`: `rgb_to_hsv`, `hsv_to_rgb`, `hsl_to_hsv`, `hsv_to_hsl`,
  `rgb_to_cmy`, `cmy_to_rgb`, `rgb_to_cmyk`, `cmyk_to_rgb`, `rgb_to_yuv`,
  `yuv_to_rgb`. Hue is in degrees, the other components in [0, 1].
- `scivis.camera`: a first-person `Camera` driven by movement flags
  (`move_front`, `move_back`, `move_left`, `move_right`, then
  `update_position`) and mouse motion (`enable_mouse`, `mouse_move`,
  `disable_mouse`), producing a `view_matrix`.
- `scivis.tesselation`: `Tesselation` meshes with flat vertex, normal,
  tangent and texture-coordinate lists plus indices: `gen_sphere`,
  `gen_rectangle`, `gen_quad`, `gen_brick`, `gen_torus`, and `unpack` to
  stop vertices being shared.
- `scivis.image`: an 8-bit `Image` with per-component access, bilinear
  `sample`, `filter` (convolution with a kernel such as a `Grid2D`),
  `crop`, `resample`, `crop_to_aspect_and_resample`, `flip_horizontal`,
  `flip_vertical`, `to_grayscale`, alpha generation, `multiply`,
  `gen_test_image`, `to_code` and `to_ascii_art`.
- `scivis.objfile`: `ObjFile.from_file` / `ObjFile.from_text`, a minimal
  Wavefront OBJ reader for `v`, `vn` and triangular `f` lines, with
  computed vertex normals and optional normalisation to a unit-sized mesh.
- `scivis.grid`: `Grid2D` scalar fields with bilinear `sample`, `normal`,
  arithmetic with scalars and other grids (resampling the smaller one),
  `normalize`, `max_value`, `min_value`, `fill`, `to_signed_distance`,
  `to_byte_array`, `from_image`, `gen_random`, and binary `save` / `read`.
- `scivis.rand`: `Random`, a seedable source of uniform floats over a few
  fixed ranges, with `rand` and an in-place `shuffle`.

## Installation

```
pip install .
```

## Example

```python
from scivis.vec import Vec3
from scivis.matrix import Mat4
from scivis.tesselation import Tesselation

view = Mat4.look_at(Vec3(0, 0, 5), Vec3(0, 0, 0), Vec3(0, 1, 0))
proj = Mat4.perspective(45, 4 / 3, 0.1, 100)
mvp = proj * view
print(mvp * Vec3(0, 0, 0))

sphere = Tesselation.gen_sphere(Vec3(0, 0, 0), 1.0, 32, 16)
print(len(sphere.vertices) // 3, "vertices")
```

```python
from scivis.grid import Grid2D

heights = Grid2D.gen_random(64, 64, 42)
heights.normalize(1.0)
print(heights.sample(0.5, 0.5), heights.normal(0.5, 0.5))
```

## What it does not do

The package only computes: it opens no windows, draws nothing and talks to
no graphics interface. Matrices, meshes and images are plain Python data
for you to hand to whatever renderer you use. Images live in memory only;
there is no reading or writing of image files such as BMP or PNG. The only
file formats handled are OBJ meshes (read only) and the package's own
binary layout for `Grid2D` (`save` / `read`).

## Running the tests

```
pip install .[test]
pytest
```