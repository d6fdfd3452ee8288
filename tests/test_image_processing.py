import numpy as np
import pytest

from sticky_notes.image_processing import (
    apply_contrast_lut,
    binarize_channel,
    generate_contrast_lut,
    split_detection_channels,
)
from sticky_notes.models import ThresholdParams


def test_split_detection_channels_order_and_green(small_bgr_image):
    channels = split_detection_channels(small_bgr_image)
    assert list(channels) == ["green", "u", "v"]
    assert np.array_equal(channels["green"], small_bgr_image[..., 1])


def test_split_detection_channels_gray_has_neutral_chroma(uniform_image):
    channels = split_detection_channels(uniform_image)
    assert np.all(channels["u"] == 128)
    assert np.all(channels["v"] == 128)


def test_binarize_channel_uniform_is_empty():
    flat = np.full((120, 120), 77, dtype=np.uint8)
    binary = binarize_channel(flat)
    assert binary.dtype == np.uint8
    assert binary.shape == flat.shape
    assert not binary.any()


def test_binarize_channel_marks_dark_side_of_edge():
    channel = np.full((200, 200), 30, dtype=np.uint8)
    channel[50:150, 50:150] = 200
    binary = binarize_channel(channel)

    assert set(np.unique(binary)) <= {0, 255}
    # just outside the bright square is foreground, its interior is not
    assert binary[100, 45] == 255
    assert binary[100, 100] == 0
    # far away from any edge stays background
    assert binary[5, 5] == 0


def test_binarize_channel_with_contrast_enhancement():
    channel = np.full((200, 200), 30, dtype=np.uint8)
    channel[50:150, 50:150] = 200
    params = ThresholdParams(enhance_contrast=True)
    binary = binarize_channel(channel, params)
    assert binary.shape == channel.shape
    assert binary[100, 45] == 255


def test_generate_contrast_lut_bounds():
    lut = generate_contrast_lut()
    assert lut.shape == (256,)
    assert lut.dtype == np.uint8
    assert lut[0] == 0
    assert lut[48] == 0
    assert lut[49] == 0
    assert lut[206] == 255
    assert lut[255] == 255
    assert np.all(np.diff(lut.astype(int)) >= 0)


def test_generate_contrast_lut_truncates():
    lut = generate_contrast_lut(49, 205)
    # (50 - 49) * 255 / 156 = 1.63 -> 1
    assert lut[50] == 1
    # (100 - 49) * 255 / 156 = 83.37 -> 83
    assert lut[100] == 83


def test_generate_contrast_lut_invalid_bounds():
    with pytest.raises(ValueError):
        generate_contrast_lut(100, 100)


def test_apply_contrast_lut():
    channel = np.array([[0, 49, 100, 255]], dtype=np.uint8)
    out = apply_contrast_lut(channel, generate_contrast_lut())
    assert out.tolist() == [[0, 0, 83, 255]]
