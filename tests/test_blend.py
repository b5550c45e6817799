import numpy as np
import pytest

from dalton_blend import LUMA_WEIGHTS, achromatic, anomalize


def test_luma_weights_sum_to_one():
    assert LUMA_WEIGHTS.sum() == pytest.approx(1.0)


def test_gray_is_its_own_grayscale():
    np.testing.assert_array_equal(achromatic([128, 128, 128]), [128, 128, 128])


def test_red_grayscale():
    # 255 * 0.212656 = 54.23
    np.testing.assert_array_equal(achromatic([255, 0, 0]), [54, 54, 54])


def test_achromatic_batch_has_equal_channels():
    out = achromatic(np.array([[255, 0, 0], [0, 255, 0], [12, 200, 99]]))
    assert out.shape == (3, 3)
    assert np.all(out == out[:, :1])


def test_anomalous_blend_weights():
    out = anomalize([100, 100, 100], [210, 100, 45])
    np.testing.assert_allclose(out, [140.0, 100.0, 80.0])


def test_blend_weight_can_be_overridden():
    np.testing.assert_allclose(anomalize([0, 0, 0], [100, 50, 10], weight=1.0), [50, 25, 5])
