import numpy as np
import pytest

from dalton_colorengine import (
    ColorProfile,
    ColorSpaceEngine,
    GammaCodec,
    GamutMapping,
    round_half_up,
)


CODES = np.arange(256, dtype=np.float64)


@pytest.mark.parametrize("profile,gamma", [
    (ColorProfile.SRGB, 2.2),
    (ColorProfile.GENERIC, 2.2),
    (ColorProfile.GENERIC, 1.8),
    ("generic", 2.4),
])
def test_gamma_round_trip_reproduces_every_code(profile, gamma):
    linear = GammaCodec.decode(CODES, profile, gamma)
    back = GammaCodec.encode(linear, profile, gamma)
    np.testing.assert_array_equal(back, CODES.astype(np.int64))


def test_decode_endpoints_and_range():
    linear = GammaCodec.decode(CODES)
    assert linear[0] == 0.0
    assert linear[-1] == pytest.approx(1.0)
    assert np.all(np.diff(linear) > 0)


def test_decode_uses_linear_segment_near_black():
    # 10/255 is below the 0.04045 threshold
    assert GammaCodec.decode(np.array([10.0]))[0] == pytest.approx(10.0 / 255.0 / 12.92)


def test_generic_decode_is_power_law():
    v = GammaCodec.decode(np.array([128.0]), ColorProfile.GENERIC, 2.2)[0]
    assert v == pytest.approx((128.0 / 255.0) ** 2.2)


def test_encode_clamps_out_of_range_linear_values():
    out = GammaCodec.encode(np.array([-0.5, 1.5, 0.0, 1.0]))
    np.testing.assert_array_equal(out, [0, 255, 0, 255])
    assert out.dtype == np.int64


def test_round_half_up():
    np.testing.assert_array_equal(round_half_up([0.5, 1.5, 2.4999, 254.5]), [1, 2, 2, 255])


def test_white_has_unit_luminance():
    xyz = ColorSpaceEngine.linear_rgb_to_xyz(np.ones(3))
    assert xyz[1] == pytest.approx(1.0, abs=1e-6)
    xyY = ColorSpaceEngine.xyz_to_xyY(xyz)
    assert xyY[0] == pytest.approx(0.3127, abs=1e-3)
    assert xyY[1] == pytest.approx(0.3290, abs=1e-3)


def test_rgb_xyz_round_trip():
    rgb = np.array([[0.2, 0.5, 0.7], [1.0, 0.0, 0.0], [0.01, 0.99, 0.3]])
    back = ColorSpaceEngine.xyz_to_linear_rgb(ColorSpaceEngine.linear_rgb_to_xyz(rgb))
    np.testing.assert_allclose(back, rgb, atol=1e-7)
    assert back.shape == (3, 3)


def test_black_chromaticity_is_zero():
    np.testing.assert_array_equal(ColorSpaceEngine.xyz_to_xyY(np.zeros(3)), np.zeros(3))


def test_xyY_round_trip_for_non_black():
    xyz = np.array([0.3, 0.4, 0.5])
    back = ColorSpaceEngine.xyY_to_xyz(ColorSpaceEngine.xyz_to_xyY(xyz))
    np.testing.assert_allclose(back, xyz, atol=1e-12)


def test_shape_guard():
    with pytest.raises(ValueError, match="last dimension"):
        ColorSpaceEngine.linear_rgb_to_xyz(np.zeros((4, 2)))


def test_neutral_is_gray_in_linear_rgb():
    rgb = ColorSpaceEngine.xyz_to_linear_rgb(ColorSpaceEngine.neutral_xyz(0.5))
    np.testing.assert_allclose(rgb, [0.5, 0.5, 0.5], atol=1e-3)


def test_in_gamut_colour_is_left_alone():
    rgb = np.array([0.2, 0.5, 0.7])
    xyz = ColorSpaceEngine.linear_rgb_to_xyz(rgb)
    np.testing.assert_allclose(GamutMapping.toward_neutral(rgb, xyz), rgb, atol=1e-12)


def test_out_of_gamut_colour_is_pulled_inside_at_constant_luminance():
    rgb = np.array([1.2, 0.5, -0.1])
    xyz = ColorSpaceEngine.linear_rgb_to_xyz(rgb)
    mapped = GamutMapping.toward_neutral(rgb, xyz)

    assert np.all(mapped >= -1e-9)
    assert np.all(mapped <= 1.0 + 1e-9)
    # red is the binding channel and lands on the boundary
    assert mapped[0] == pytest.approx(1.0)
    assert ColorSpaceEngine.linear_rgb_to_xyz(mapped)[1] == pytest.approx(xyz[1], abs=1e-9)


def test_shift_uses_one_scalar_for_all_channels():
    rgb = np.array([1.2, 0.5, -0.1])
    xyz = ColorSpaceEngine.linear_rgb_to_xyz(rgb)
    delta = ColorSpaceEngine.xyz_to_linear_rgb(ColorSpaceEngine.neutral_xyz(xyz[1]) - xyz)
    t = GamutMapping.shift_scalars(rgb, delta)
    assert t.shape == (3,)
    assert t[0] == t[1] == t[2]
    assert 0.0 < t[0] <= 1.0


def test_zero_delta_channel_contributes_nothing():
    t = GamutMapping.shift_scalars(np.array([[1.5, 0.5, 0.5]]), np.array([[0.0, 0.1, 0.1]]))
    np.testing.assert_array_equal(t, np.zeros((1, 3)))


def test_shift_scalars_rejects_mismatched_delta():
    with pytest.raises(ValueError, match="does not match"):
        GamutMapping.shift_scalars(np.zeros((2, 3)), np.zeros((1, 3)))

