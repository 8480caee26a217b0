import pytest

from scivis.image import Image
from scivis.vec import Vec4


class _IdentityKernel:
    width = 3
    height = 3

    def get_value(self, x, y):
        return 1.0 if (x, y) == (1, 1) else 0.0


def _constant(width, height, cc, value):
    return Image(width, height, cc, bytes([value]) * (width * height * cc))


def _ramp(width, height, cc):
    return Image(width, height, cc, bytes(i % 256 for i in range(width * height * cc)))


def test_default_size():
    img = Image()
    assert (img.width, img.height, img.component_count) == (100, 100, 4)
    assert len(img.data) == 100 * 100 * 4
    assert not any(img.data)


def test_wrong_data_size_raises():
    with pytest.raises(ValueError):
        Image(2, 2, 3, bytes(5))


def test_from_color():
    img = Image.from_color(Vec4(1.0, 0.0, 1.0, 1.0))
    assert (img.width, img.height, img.component_count) == (1, 1, 4)
    assert list(img.data) == [255, 0, 255, 255]


def test_compute_index_and_set_get_roundtrip():
    img = Image(4, 3, 3)
    assert img.compute_index(2, 1, 1) == 1 + (2 + 1 * 4) * 3
    img.set_value(2, 1, 1, 77)
    assert img.get_value(2, 1, 1) == 77
    assert img.data[img.compute_index(2, 1, 1)] == 77


def test_set_gray_leaves_alpha():
    img = _constant(2, 2, 4, 9)
    img.set_gray(1, 1, 200)
    assert [img.get_value(1, 1, c) for c in range(4)] == [200, 200, 200, 9]


def test_set_normalized_value_clamps():
    img = Image(2, 1, 4)
    img.set_normalized_value(0, 0, 2.0)
    img.set_normalized_value(1, 0, -1.0, 3)
    assert [img.get_value(0, 0, c) for c in range(3)] == [255, 255, 255]
    assert img.get_value(1, 0, 3) == 0


def test_multiply_expands_rgb():
    img = _constant(2, 2, 3, 100)
    img.multiply(Vec4(1.0, 0.0, 1.0, 1.0))
    assert img.component_count == 4
    assert list(img.data) == [100, 0, 100, 255] * 4


def test_multiply_rgba_in_place():
    img = _constant(1, 2, 4, 200)
    img.multiply(Vec4(1.0, 1.0, 0.0, 1.0))
    assert list(img.data) == [200, 200, 0, 200] * 2


def test_generate_alpha():
    img = _ramp(2, 2, 3)
    rgb = bytes(img.data)
    img.generate_alpha(17)
    assert img.component_count == 4
    assert bytes(img.data[3::4]) == bytes([17]) * 4
    assert bytes(b for i, b in enumerate(img.data) if i % 4 != 3) == rgb


def test_generate_alpha_from_luminance_of_grey():
    img = Image(3, 1, 3, bytes([0, 0, 0, 90, 90, 90, 255, 255, 255]))
    img.generate_alpha_from_luminance()
    assert list(img.data[3::4]) == [0, 90, 255]


@pytest.mark.parametrize("value", [0, 1, 64, 128, 254, 255])
def test_lumi_of_grey_is_grey(value):
    assert _constant(1, 1, 3, value).get_lumi_value(0, 0) == value
    assert _constant(1, 1, 2, value).get_lumi_value(0, 0) == value


def test_to_grayscale():
    img = _constant(3, 2, 4, 255).to_grayscale()
    assert img.component_count == 1
    assert list(img.data) == [255] * 6


def test_sample_at_corners():
    img = _ramp(3, 3, 1)
    assert img.sample(0.0, 0.0, 0) == img.get_value(0, 0, 0)
    assert img.sample(1.0, 1.0, 0) == img.get_value(2, 2, 0)
    assert img.sample(1.0, 0.0, 0) == img.get_value(2, 0, 0)


def test_crop():
    img = _ramp(5, 4, 2)
    cropped = img.crop(1, 1, 4, 3)
    assert (cropped.width, cropped.height) == (3, 2)
    for y in range(2):
        for x in range(3):
            for c in range(2):
                assert cropped.get_value(x, y, c) == img.get_value(x + 1, y + 1, c)


def test_flips():
    img = _ramp(3, 4, 3)
    assert img.flip_horizontal().flip_horizontal() == img
    assert img.flip_vertical().flip_vertical() == img
    flipped = img.flip_horizontal()
    assert flipped.get_value(1, 3, 2) == img.get_value(1, 0, 2)
    mirrored = img.flip_vertical()
    assert mirrored.get_value(2, 1, 0) == img.get_value(0, 1, 0)


def test_resample_constant():
    img = _constant(8, 4, 3, 42)
    small = img.resample(4)
    assert (small.width, small.height) == (4, 2)
    assert set(small.data) == {42}


def test_crop_to_aspect_same_size_is_copy():
    img = _ramp(4, 4, 1)
    copy = img.crop_to_aspect_and_resample(4, 4)
    assert copy == img
    assert copy.data is not img.data


def test_crop_to_aspect_constant():
    img = _constant(8, 4, 2, 50)
    result = img.crop_to_aspect_and_resample(2, 2)
    assert (result.width, result.height) == (2, 2)
    assert set(result.data) == {50}


def test_crop_to_aspect_upscale_raises():
    with pytest.raises(ValueError):
        _constant(2, 2, 1, 1).crop_to_aspect_and_resample(4, 4)


def test_filter_identity_keeps_interior():
    img = _ramp(5, 5, 1)
    out = img.filter(_IdentityKernel())
    for y in range(5):
        for x in range(5):
            interior = 1 <= x <= 3 and 1 <= y <= 3
            expected = img.get_value(x, y, 0) if interior else 0
            assert out.get_value(x, y, 0) == expected


def test_gen_test_image():
    img = Image.gen_test_image(9, 9)
    assert [img.get_value(0, 0, c) for c in range(4)] == [255, 0, 0, 255]
    assert [img.get_value(0, 8, c) for c in range(4)] == [0, 0, 255, 255]
    assert [img.get_value(3, 0, c) for c in range(3)] == [0, 255, 255]
    assert [img.get_value(8, 0, c) for c in range(3)] == [0, 0, 0]
    assert [img.get_value(8, 8, c) for c in range(3)] == [255, 255, 255]


def test_to_code():
    img = Image(2, 1, 1, bytes([1, 2]))
    expected = "Image myImage {2,1,1,\n              {\n              1,2\n          }};\n"
    assert img.to_code() == expected
    assert "  1,  2" in img.to_code("pic", padding=True)
    assert img.to_code("pic").startswith("Image pic {")